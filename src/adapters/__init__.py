"""Backlog and Slack adapters implementing the core ports."""
