"""Prompt templates for the insight summary."""

from typing import Iterable

SUMMARY_MAX_TOKENS = 200

ISSUE_SUMMARY_PROMPT = """You are a product manager analyzing user feedback. Based on these user complaints and bug reports, write a concise 2-3 sentence summary of the TOP 3 most critical issues that need immediate attention. Be specific and actionable.

Feedback:
{issues}

Summary of top issues:"""


def format_issue_bullets(contents: Iterable[str]) -> str:
    """One ``- <content>`` line per issue, raw content, newline separated."""
    return "\n".join(f"- {content}" for content in contents)


def build_issue_summary_prompt(contents: Iterable[str]) -> str:
    """Fill the summary template. An empty issue list yields an empty bullet block."""
    return ISSUE_SUMMARY_PROMPT.format(issues=format_issue_bullets(contents))
