"""Core domain package for backlog-slackify.

Core contains option validation, due-date rules, message formatting, and run
orchestration without any Backlog or Slack HTTP code, keeping the business
logic portable.
"""
