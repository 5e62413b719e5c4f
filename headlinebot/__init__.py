"""Scheduled bot that posts one upbeat, on-topic headline per run to Bluesky."""

__version__ = "1.0.0"
