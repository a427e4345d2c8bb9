"""Request schemas for gateway routes."""
