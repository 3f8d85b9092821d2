"""Host telemetry provider backed by psutil and py-cpuinfo."""

import logging
import platform
import socket
from pathlib import Path
from typing import Optional

import cpuinfo
import psutil

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

SYS_BLOCK = Path("/sys/class/block")


def _read_os_release() -> dict[str, str]:
    """Read /etc/os-release fields, or an empty dict when unavailable."""
    if not psutil.LINUX:
        return {}
    try:
        return platform.freedesktop_os_release()
    except OSError:
        logger.debug("os-release not found")
        return {}


def _block_device_dir(device: str) -> Optional[Path]:
    """Locate the sysfs directory of the disk holding a partition.

    /sys/class/block/sda1 resolves into .../block/sda/sda1; only whole disks
    carry the `removable` attribute, so partitions step up to their parent.
    """
    entry = SYS_BLOCK / Path(device).name
    try:
        device_dir = entry.resolve(strict=True)
    except (OSError, RuntimeError):
        return None
    if not (device_dir / "removable").exists():
        device_dir = device_dir.parent
    if not (device_dir / "removable").exists():
        return None
    return device_dir


def _read_sysfs_flag(path: Path) -> Optional[bool]:
    try:
        return path.read_text().strip() == "1"
    except OSError:
        return None


def _drive_traits(device: str) -> tuple[bool, str]:
    """Return (is_removable, kind) for a device, using sysfs on Linux."""
    if not psutil.LINUX:
        return False, "Unknown"

    device_dir = _block_device_dir(device)
    if device_dir is None:
        return False, "Unknown"

    removable = _read_sysfs_flag(device_dir / "removable") or False
    rotational = _read_sysfs_flag(device_dir / "queue" / "rotational")
    if rotational is None:
        kind = "Unknown"
    else:
        kind = "HDD" if rotational else "SSD"
    return removable, kind


class SystemProvider:
    """
    Telemetry provider reading the local host.

    One instance lives for one invocation. CPU usage is computed by psutil
    from the delta between two consecutive refresh_cpus() calls, so a fresh
    instance reports 0% until it has been refreshed twice.
    """

    def __init__(self):
        self._cpu_usage: list[float] = []
        self._global_usage = 0.0
        self._cpu_identity: Optional[tuple[str, str]] = None

    def refresh_cpus(self) -> None:
        """Sample per-CPU and global usage since the previous refresh."""
        self._cpu_usage = psutil.cpu_percent(interval=None, percpu=True)
        self._global_usage = psutil.cpu_percent(interval=None)
        logger.debug("Refreshed %d CPUs", len(self._cpu_usage))

    def _identity(self) -> tuple[str, str]:
        # py-cpuinfo spawns a subprocess, read it once per provider
        if self._cpu_identity is None:
            info = cpuinfo.get_cpu_info()
            self._cpu_identity = (
                info.get("brand_raw", ""),
                info.get("vendor_id_raw", ""),
            )
        return self._cpu_identity

    def _frequencies(self, count: int) -> list[Optional[int]]:
        if not hasattr(psutil, "cpu_freq"):
            return [None] * count
        try:
            freqs = psutil.cpu_freq(percpu=True) or []
        except (OSError, NotImplementedError):
            logger.debug("CPU frequency not available")
            freqs = []

        if len(freqs) == count:
            return [int(f.current) for f in freqs]
        if freqs:
            # Some platforms only report a single system-wide frequency
            return [int(freqs[0].current)] * count
        return [None] * count

    def _cpu_count(self) -> int:
        return len(self._cpu_usage) or psutil.cpu_count(logical=True) or 0

    def cpu_names(self) -> list[str]:
        """Return the logical CPU names without reading CPU identity."""
        return [f"cpu{i}" for i in range(self._cpu_count())]

    def cpus(self) -> list[CpuInfo]:
        """Return the logical CPUs, named cpu0, cpu1, ..."""
        usage = self._cpu_usage or [0.0] * self._cpu_count()
        frequencies = self._frequencies(len(usage))
        brand, vendor_id = self._identity()
        return [
            CpuInfo(
                name=f"cpu{i}",
                usage=percent,
                frequency=frequencies[i],
                brand=brand,
                vendor_id=vendor_id,
            )
            for i, percent in enumerate(usage)
        ]

    def global_cpu_usage(self) -> float:
        """Return total CPU usage measured at the last refresh."""
        return self._global_usage

    def os_info(self) -> OsInfo:
        """Read OS identity."""
        os_release = _read_os_release()
        system = platform.system()

        name = os_release.get("NAME") or system or None
        if psutil.MACOS:
            version = platform.mac_ver()[0] or None
        elif psutil.LINUX:
            # platform.version() is the kernel build banner on Linux
            version = os_release.get("VERSION_ID") or None
        else:
            version = platform.version() or None
        long_version = " ".join(part for part in (system, version, name) if part)

        return OsInfo(
            boot_time=int(psutil.boot_time()),
            name=name,
            kernel_version=platform.release() or None,
            version=version,
            long_version=long_version or None,
            release_id=os_release.get("ID") or system.lower(),
            host_name=socket.gethostname() or None,
            physical_core_count=psutil.cpu_count(logical=False),
            cpu_arch=platform.machine() or None,
        )

    def load_average(self) -> LoadAverage:
        """Read the 1, 5 and 15 minute load averages."""
        if psutil.WINDOWS:
            raise ProviderUnavailable("load average", "not supported on Windows")
        one, five, fifteen = psutil.getloadavg()
        return LoadAverage(one=one, five=five, fifteen=fifteen)

    def memory(self) -> MemoryInfo:
        """Read memory and swap totals."""
        vm = psutil.virtual_memory()
        swap = psutil.swap_memory()
        return MemoryInfo(
            total=vm.total,
            used=vm.used,
            available=vm.available,
            free=vm.free,
            swap_total=swap.total,
            swap_used=swap.used,
            swap_free=swap.free,
        )

    def drives(self) -> list[DriveInfo]:
        """Read mounted drives in partition table order."""
        drives = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError:
                logger.debug("Skipping filesystem at %s (unreadable)", part.mountpoint)
                continue

            is_removable, kind = _drive_traits(part.device)
            drives.append(
                DriveInfo(
                    name=part.device,
                    mount_point=part.mountpoint,
                    file_system=part.fstype,
                    total=usage.total,
                    available=usage.free,
                    is_removable=is_removable,
                    kind=kind,
                )
            )
        return drives

    def sensors(self) -> list[SensorInfo]:
        """Read temperature sensors, labelled "<chip> <label>"."""
        if not hasattr(psutil, "sensors_temperatures"):
            raise ProviderUnavailable("temperature sensors")

        sensors = []
        for chip, entries in psutil.sensors_temperatures(fahrenheit=False).items():
            for entry in entries:
                label = f"{chip} {entry.label}" if entry.label else chip
                sensors.append(
                    SensorInfo(
                        label=label,
                        temperature=entry.current,
                        max=entry.high,
                        critical=entry.critical,
                    )
                )
        return sensors

    def networks(self) -> list[NetworkInfo]:
        """Read network interfaces with their cumulative counters."""
        counters = psutil.net_io_counters(pernic=True)
        addresses = psutil.net_if_addrs()

        networks = []
        for name, io in counters.items():
            mac = next(
                (
                    addr.address
                    for addr in addresses.get(name, [])
                    if addr.family == psutil.AF_LINK
                ),
                None,
            )
            networks.append(
                NetworkInfo(
                    name=name,
                    mac_address=mac or "00:00:00:00:00:00",
                    received=io.bytes_recv,
                    transmitted=io.bytes_sent,
                    packets_received=io.packets_recv,
                    packets_transmitted=io.packets_sent,
                    errors_received=io.errin,
                    errors_transmitted=io.errout,
                )
            )
        return networks
