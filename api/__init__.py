"""Feedback Analytics API package."""
