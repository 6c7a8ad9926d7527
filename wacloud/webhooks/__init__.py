"""Inbound webhook schemas and validation."""
