"""Utility modules for garbage."""
