"""Shared helpers with no FastAPI or database dependencies."""
