"""Utilities for sysprobe."""
