"""Persistence of analysis records."""
