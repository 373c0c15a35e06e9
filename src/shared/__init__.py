"""Shared helpers: date resolution, geo math, text utilities, request context."""
