"""Shared helpers for the statistical modeling companion notes."""
