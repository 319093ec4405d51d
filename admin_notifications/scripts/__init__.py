"""Operator command-line tools for the admin notification service."""
