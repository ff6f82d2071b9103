"""Prompt store: classification enums, schemas and lifecycle operations."""
