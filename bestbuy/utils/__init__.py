"""Shared helpers for the Best Buy client."""
