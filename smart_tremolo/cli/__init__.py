# smart_tremolo/cli/__init__.py

"""Command-line interface for SmartTremolo."""
