"""Snapshot schema and read interface of a telemetry provider."""

from typing import Optional, Protocol

from pydantic import BaseModel, Field

# Minimum delay between two CPU reads for usage deltas to be meaningful
MINIMUM_CPU_UPDATE_INTERVAL = 0.2


class OsInfo(BaseModel):
    """Operating system identity."""

    boot_time: int = Field(..., description="Boot time (seconds since UNIX epoch)")
    name: Optional[str] = Field(None, description="OS name (e.g. Ubuntu)")
    kernel_version: Optional[str] = Field(None, description="Kernel version")
    version: Optional[str] = Field(None, description="OS version")
    long_version: Optional[str] = Field(
        None, description="Long OS version (e.g. 'Linux 22.04 Ubuntu')"
    )
    release_id: str = Field(..., description="os-release ID")
    host_name: Optional[str] = Field(None, description="Host name")
    physical_core_count: Optional[int] = Field(
        None, description="Physical core count across all CPUs"
    )
    cpu_arch: Optional[str] = Field(None, description="CPU architecture")


class LoadAverage(BaseModel):
    """System load averages."""

    one: float
    five: float
    fifteen: float


class CpuInfo(BaseModel):
    """A logical CPU."""

    name: str = Field(..., description="CPU name (e.g. cpu0)")
    usage: float = Field(..., description="Usage since the previous refresh (%)")
    frequency: Optional[int] = Field(None, description="Current frequency (MHz)")
    brand: str = Field(default="", description="CPU brand string")
    vendor_id: str = Field(default="", description="Vendor ID (e.g. GenuineIntel)")


class MemoryInfo(BaseModel):
    """Memory and swap totals in bytes."""

    total: int
    used: int
    available: int
    free: int
    swap_total: int
    swap_used: int
    swap_free: int


class DriveInfo(BaseModel):
    """A mounted drive."""

    name: str = Field(..., description="Device name")
    mount_point: str = Field(..., description="Mount point")
    file_system: str = Field(default="", description="File system name")
    total: int = Field(..., description="Total space (bytes)")
    available: int = Field(..., description="Available space (bytes)")
    is_removable: bool = Field(default=False, description="Removable media")
    kind: str = Field(default="Unknown", description="HDD, SSD or Unknown")

    @property
    def used(self) -> int:
        """Used space in bytes."""
        return max(self.total - self.available, 0)


class SensorInfo(BaseModel):
    """A temperature sensor."""

    label: str = Field(..., description="Sensor label")
    temperature: float = Field(..., description="Current temperature (Celsius)")
    max: Optional[float] = Field(None, description="Maximal temperature (Celsius)")
    critical: Optional[float] = Field(
        None, description="Critical temperature (Celsius)"
    )


class NetworkInfo(BaseModel):
    """A network interface with its cumulative counters."""

    name: str = Field(..., description="Interface name")
    mac_address: str = Field(default="00:00:00:00:00:00", description="MAC address")
    received: int = Field(default=0, description="Total received bytes")
    transmitted: int = Field(default=0, description="Total transmitted bytes")
    packets_received: int = Field(default=0)
    packets_transmitted: int = Field(default=0)
    errors_received: int = Field(default=0)
    errors_transmitted: int = Field(default=0)


class Provider(Protocol):
    """Synchronous point-in-time reads of host telemetry.

    Optional metrics that the host cannot supply raise ProviderUnavailable.
    """

    def refresh_cpus(self) -> None: ...

    def cpu_names(self) -> list[str]: ...

    def cpus(self) -> list[CpuInfo]: ...

    def global_cpu_usage(self) -> float: ...

    def os_info(self) -> OsInfo: ...

    def load_average(self) -> LoadAverage: ...

    def memory(self) -> MemoryInfo: ...

    def drives(self) -> list[DriveInfo]: ...

    def sensors(self) -> list[SensorInfo]: ...

    def networks(self) -> list[NetworkInfo]: ...
