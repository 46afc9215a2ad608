"""Feedback records: dashboard statistics and filtered listing."""
