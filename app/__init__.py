"""Workspace booking API."""
