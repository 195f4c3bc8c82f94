"""Relational storage for todo entries."""
