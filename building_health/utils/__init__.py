"""Utility modules for the building lookup."""
