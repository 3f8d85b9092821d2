"""Telemetry providers for sysprobe."""

from importlib import import_module

from .base import MINIMUM_CPU_UPDATE_INTERVAL, Provider


def is_supported_system() -> bool:
    """Check whether psutil has a backend for the host OS.

    psutil refuses to import on platforms it does not support.
    """
    try:
        import_module("psutil")
    except NotImplementedError:
        return False
    return True


__all__ = ["MINIMUM_CPU_UPDATE_INTERVAL", "Provider", "is_supported_system"]
