"""Domain and transfer models."""
