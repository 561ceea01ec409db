# smart_tremolo/utils/__init__.py

"""Utility modules (logging setup)."""
