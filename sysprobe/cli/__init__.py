"""Command-line interface for sysprobe."""
