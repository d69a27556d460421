"""Workflow Notifier: post GitHub Actions job status messages to Slack."""

__version__ = "1.0.0"
