"""Anthropic Messages API provider wire format."""
