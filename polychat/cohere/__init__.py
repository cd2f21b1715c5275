"""Cohere v2 chat provider wire format."""
