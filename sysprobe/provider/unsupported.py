"""Fallback provider for hosts psutil has no backend for."""

import logging
import platform
import socket

from ..core.errors import ProviderUnavailable
from .base import (
    CpuInfo,
    DriveInfo,
    LoadAverage,
    MemoryInfo,
    NetworkInfo,
    OsInfo,
    SensorInfo,
)

logger = logging.getLogger(__name__)


class UnsupportedProvider:
    """
    Provider for unsupported operating systems.

    OS identity still comes from the platform module; everything psutil would
    read reports as empty, zero, or ProviderUnavailable.
    """

    def refresh_cpus(self) -> None:
        logger.debug("CPU refresh skipped on unsupported system")

    def cpu_names(self) -> list[str]:
        return []

    def cpus(self) -> list[CpuInfo]:
        return []

    def global_cpu_usage(self) -> float:
        return 0.0

    def os_info(self) -> OsInfo:
        system = platform.system()
        return OsInfo(
            boot_time=0,
            name=system or None,
            kernel_version=platform.release() or None,
            release_id=system.lower(),
            host_name=socket.gethostname() or None,
            cpu_arch=platform.machine() or None,
        )

    def load_average(self) -> LoadAverage:
        raise ProviderUnavailable("load average", "unsupported system")

    def memory(self) -> MemoryInfo:
        return MemoryInfo(
            total=0,
            used=0,
            available=0,
            free=0,
            swap_total=0,
            swap_used=0,
            swap_free=0,
        )

    def drives(self) -> list[DriveInfo]:
        return []

    def sensors(self) -> list[SensorInfo]:
        raise ProviderUnavailable("temperature sensors", "unsupported system")

    def networks(self) -> list[NetworkInfo]:
        return []
