"""Slack /sales command: record sales wins and show monthly leaderboards."""
