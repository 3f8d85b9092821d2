"""Pytest configuration and shared fixtures for sysprobe tests."""

import pytest

from sysprobe.core.errors import ProviderUnavailable
from sysprobe.provider.base import (
    CpuInfo,
    DriveInfo,
    LoadAverage,
    MemoryInfo,
    NetworkInfo,
    OsInfo,
    SensorInfo,
)


class FakeProvider:
    """
    In-memory provider with fixed readings.

    Counts refresh_cpus() calls so tests can check how often the two-phase
    CPU refresh runs.
    """

    def __init__(self):
        self.refresh_calls = 0
        self.cpus_calls = 0
        self.global_usage = 12.34
        self.load: LoadAverage | None = LoadAverage(one=0.5, five=0.25, fifteen=1.0)
        self.has_sensors = True

        self.os = OsInfo(
            boot_time=1700000000,
            name="Ubuntu",
            kernel_version="6.5.0-14-generic",
            version="22.04",
            long_version="Linux 22.04 Ubuntu",
            release_id="ubuntu",
            host_name="testhost",
            physical_core_count=4,
            cpu_arch="x86_64",
        )
        self.cpu_list = [
            CpuInfo(
                name="cpu0",
                usage=12.34,
                frequency=3600,
                brand="Intel(R) Core(TM) i9-9900K CPU @ 3.60GHz",
                vendor_id="GenuineIntel",
            ),
            CpuInfo(
                name="cpu1",
                usage=50.0,
                frequency=None,
                brand="Intel(R) Core(TM) i9-9900K CPU @ 3.60GHz",
                vendor_id="GenuineIntel",
            ),
        ]
        self.mem = MemoryInfo(
            total=16000000000,
            used=4000000000,
            available=12000000000,
            free=8000000000,
            swap_total=2147483648,
            swap_used=1073741824,
            swap_free=1073741824,
        )
        self.drive_list = [
            DriveInfo(
                name="/dev/sda1",
                mount_point="/",
                file_system="ext4",
                total=500000000000,
                available=200000000000,
                is_removable=False,
                kind="SSD",
            ),
            DriveInfo(
                name="/dev/sdb1",
                mount_point="/media/usb",
                file_system="vfat",
                total=16000000000,
                available=15000000000,
                is_removable=True,
                kind="Unknown",
            ),
        ]
        self.sensor_list = [
            SensorInfo(
                label="coretemp Package id 0",
                temperature=45.0,
                max=80.0,
                critical=100.0,
            ),
            SensorInfo(label="acpitz", temperature=27.8),
        ]
        self.network_list = [
            NetworkInfo(name="lo"),
            NetworkInfo(
                name="eth0",
                mac_address="aa:bb:cc:dd:ee:ff",
                received=1500000,
                transmitted=250000,
                packets_received=1000,
                packets_transmitted=500,
                errors_received=1,
                errors_transmitted=2,
            ),
        ]

    def refresh_cpus(self) -> None:
        self.refresh_calls += 1

    def cpu_names(self) -> list[str]:
        return [cpu.name for cpu in self.cpu_list]

    def cpus(self) -> list[CpuInfo]:
        self.cpus_calls += 1
        return list(self.cpu_list)

    def global_cpu_usage(self) -> float:
        return self.global_usage

    def os_info(self) -> OsInfo:
        return self.os

    def load_average(self) -> LoadAverage:
        if self.load is None:
            raise ProviderUnavailable("load average", "not supported on Windows")
        return self.load

    def memory(self) -> MemoryInfo:
        return self.mem

    def drives(self) -> list[DriveInfo]:
        return list(self.drive_list)

    def sensors(self) -> list[SensorInfo]:
        if not self.has_sensors:
            raise ProviderUnavailable("temperature sensors")
        return list(self.sensor_list)

    def networks(self) -> list[NetworkInfo]:
        return list(self.network_list)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's real config file."""
    monkeypatch.delenv("SYSPROBE_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))


@pytest.fixture
def provider():
    """A fresh FakeProvider."""
    return FakeProvider()


@pytest.fixture
def no_sleep(monkeypatch):
    """
    Replace time.sleep with a recorder.

    Returns the list of requested sleep durations.
    """
    sleeps: list[float] = []
    monkeypatch.setattr("time.sleep", lambda seconds: sleeps.append(seconds))
    return sleeps
