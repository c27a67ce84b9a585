"""Cancellation parts (token and error)."""
