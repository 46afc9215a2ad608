"""AI-generated insights: issue summary and word cloud."""
