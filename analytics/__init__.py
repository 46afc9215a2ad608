"""Feedback Analytics core: Cloudflare clients, word frequencies and prompts."""
