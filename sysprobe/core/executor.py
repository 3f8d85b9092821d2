"""Command execution: bind a category and its target, then render field batches."""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Callable, Optional, Union

from ..provider.base import (
    CpuInfo,
    DriveInfo,
    LoadAverage,
    NetworkInfo,
    Provider,
    SensorInfo,
)
from ..utils.formatters import (
    format_count,
    format_flag,
    format_percentage,
    format_size,
    format_temperature,
    format_text,
)
from .errors import ProviderUnavailable
from .queries import (
    FIELDS_BY_CATEGORY,
    Category,
    CpuField,
    DriveField,
    MemoryField,
    NetworkField,
    OsField,
    SensorField,
    SwapField,
    parse_field,
)
from .resolver import TargetResolver
from .units import DataUnit

logger = logging.getLogger(__name__)

FieldLike = Union[Enum, str]


class Executor:
    """
    A category bound to its target, ready to render fields.

    run() is all-or-nothing: every field is validated before anything is
    rendered, and any error raised while rendering propagates without
    returning partial output.
    """

    category: Category

    def __init__(self, category: Category):
        self.category = category

    def _coerce(self, fields: Sequence[FieldLike]) -> list[Enum]:
        expected = FIELDS_BY_CATEGORY[self.category]
        coerced = []
        for field in fields:
            if isinstance(field, expected):
                coerced.append(field)
            else:
                # Enum members of other categories are str too; re-parse by token
                token = field.value if isinstance(field, Enum) else field
                coerced.append(parse_field(self.category, token))
        return coerced

    def run(self, fields: Sequence[FieldLike]) -> list[str]:
        """Render each field, returning one string per field in input order."""
        coerced = self._coerce(fields)
        if not coerced:
            return []
        self._prepare(coerced)
        logger.debug("Rendering %d %s field(s)", len(coerced), self.category.label)
        return [self._render_safe(field) for field in coerced]

    def _prepare(self, fields: list[Enum]) -> None:
        """Hook run once per batch before rendering."""

    def _render_safe(self, field: Enum) -> str:
        try:
            return self._render(field)
        except ProviderUnavailable as e:
            logger.debug("%s", e)
            return ""

    def _render(self, field: Enum) -> str:
        raise NotImplementedError


class OsExecutor(Executor):
    """Executor for the `os` category."""

    def __init__(self, provider: Provider, resolver: TargetResolver):
        super().__init__(Category.OS)
        self.provider = provider
        self.resolver = resolver
        self.info = provider.os_info()
        self._load: Optional[LoadAverage] = None

    def _prepare(self, fields: list[Enum]) -> None:
        self._load = None
        # One two-phase refresh per batch, however often the field repeats
        if OsField.TOTAL_CPU_USAGE in fields:
            self.resolver.refresh_cpus()

    def _load_average(self) -> LoadAverage:
        if self._load is None:
            self._load = self.provider.load_average()
        return self._load

    def _render(self, field: Enum) -> str:
        info = self.info
        if field is OsField.BOOT_TIME:
            return format_count(info.boot_time)
        if field is OsField.LOAD_AVERAGE_1M:
            return format_percentage(self._load_average().one)
        if field is OsField.LOAD_AVERAGE_5M:
            return format_percentage(self._load_average().five)
        if field is OsField.LOAD_AVERAGE_15M:
            return format_percentage(self._load_average().fifteen)
        if field is OsField.NAME:
            return format_text(info.name)
        if field is OsField.KERNEL_VERSION:
            return format_text(info.kernel_version)
        if field is OsField.VERSION:
            return format_text(info.version)
        if field is OsField.LONG_VERSION:
            return format_text(info.long_version)
        if field is OsField.RELEASE_ID:
            return info.release_id
        if field is OsField.HOST_NAME:
            return format_text(info.host_name)
        if field is OsField.PHYSICAL_CORE_COUNT:
            return format_count(info.physical_core_count)
        if field is OsField.TOTAL_CPU_USAGE:
            return format_percentage(self.provider.global_cpu_usage())
        return format_text(info.cpu_arch)


class CpuExecutor(Executor):
    """Executor for a single CPU."""

    def __init__(self, cpu: CpuInfo):
        super().__init__(Category.CPU)
        self.cpu = cpu

    def _render(self, field: Enum) -> str:
        renderers: dict[Enum, Callable[[], str]] = {
            CpuField.USAGE: lambda: format_percentage(self.cpu.usage),
            CpuField.FREQUENCY: lambda: format_count(self.cpu.frequency),
            CpuField.BRAND: lambda: self.cpu.brand,
            CpuField.VENDOR_ID: lambda: self.cpu.vendor_id,
        }
        return renderers[field]()


class MemoryExecutor(Executor):
    """Executor for the `memory` category."""

    def __init__(self, provider: Provider, unit: DataUnit):
        super().__init__(Category.MEMORY)
        self.unit = unit
        self.memory = provider.memory()

    def _render(self, field: Enum) -> str:
        memory = self.memory
        if field is MemoryField.USAGE:
            value = memory.used
        elif field is MemoryField.TOTAL:
            value = memory.total
        elif field is MemoryField.AVAILABLE:
            value = memory.available
        else:
            value = memory.free
        return format_size(value, self.unit)


class SwapExecutor(Executor):
    """Executor for the `swap` category."""

    def __init__(self, provider: Provider, unit: DataUnit):
        super().__init__(Category.SWAP)
        self.unit = unit
        self.memory = provider.memory()

    def _render(self, field: Enum) -> str:
        memory = self.memory
        if field is SwapField.USAGE:
            value = memory.swap_used
        elif field is SwapField.TOTAL:
            value = memory.swap_total
        else:
            value = memory.swap_free
        return format_size(value, self.unit)


class DriveExecutor(Executor):
    """Executor for a single drive."""

    def __init__(self, drive: DriveInfo, unit: DataUnit):
        super().__init__(Category.DRIVE)
        self.drive = drive
        self.unit = unit

    def _render(self, field: Enum) -> str:
        drive = self.drive
        if field is DriveField.USAGE:
            return format_size(drive.used, self.unit)
        if field is DriveField.FS:
            return drive.file_system
        if field is DriveField.IS_REMOVABLE:
            return format_flag(drive.is_removable)
        if field is DriveField.KIND:
            return drive.kind
        if field is DriveField.MOUNT_POINT:
            return drive.mount_point
        if field is DriveField.TOTAL:
            return format_size(drive.total, self.unit)
        return format_size(drive.available, self.unit)


class SensorExecutor(Executor):
    """Executor for a single temperature sensor."""

    def __init__(self, sensor: SensorInfo):
        super().__init__(Category.SENSOR)
        self.sensor = sensor

    def _render(self, field: Enum) -> str:
        if field is SensorField.CRITICAL_TEMP:
            return format_temperature(self.sensor.critical)
        if field is SensorField.MAX_TEMP:
            return format_temperature(self.sensor.max)
        return format_temperature(self.sensor.temperature)


class NetworkExecutor(Executor):
    """Executor for a single network interface."""

    def __init__(self, network: NetworkInfo, unit: DataUnit):
        super().__init__(Category.NETWORK)
        self.network = network
        self.unit = unit

    def _render(self, field: Enum) -> str:
        network = self.network
        if field is NetworkField.MAC_ADDRESS:
            return network.mac_address
        if field is NetworkField.TOTAL_INCOMING_ERRORS:
            return format_count(network.errors_received)
        if field is NetworkField.TOTAL_OUTCOMING_ERRORS:
            return format_count(network.errors_transmitted)
        if field is NetworkField.TOTAL_RECEIVED_DATA:
            return format_size(network.received, self.unit)
        if field is NetworkField.TOTAL_TRANSMITTED_DATA:
            return format_size(network.transmitted, self.unit)
        if field is NetworkField.TOTAL_RECEIVED_PACKETS:
            return format_count(network.packets_received)
        return format_count(network.packets_transmitted)


class ListingExecutor(Executor):
    """Executor for the list-* categories; the field list is ignored."""

    def __init__(self, category: Category, provider: Provider):
        super().__init__(category)
        self.provider = provider

    def run(self, fields: Sequence[FieldLike] = ()) -> list[str]:
        """List all known entities of the category in snapshot order."""
        if self.category is Category.LIST_CPUS:
            self.provider.refresh_cpus()
            return self.provider.cpu_names()
        if self.category is Category.LIST_SENSORS:
            try:
                return [sensor.label for sensor in self.provider.sensors()]
            except ProviderUnavailable as e:
                logger.debug("%s", e)
                return []
        return [network.name for network in self.provider.networks()]


class CommandExecutor:
    """
    Bind categories to executors against a single provider.

    One CommandExecutor serves one invocation; bound executors hold the
    snapshot read at bind time.
    """

    def __init__(
        self,
        provider: Provider,
        unit: DataUnit = DataUnit.BYTES,
        resolver: Optional[TargetResolver] = None,
    ):
        """
        Initialize command executor.

        Args:
            provider: Telemetry provider for this invocation
            unit: Display unit for byte-valued fields (default: bytes)
            resolver: Target resolver (default: one built on the provider)
        """
        self.provider = provider
        self.unit = unit
        self.resolver = resolver or TargetResolver(provider)

    def bind(self, category: Category, name: Optional[str] = None) -> Executor:
        """
        Bind a category and optional entity name into an executor.

        Raises:
            TargetNotFound: If a targeted category names a missing entity
        """
        logger.debug("Binding %s%s", category.label, f" `{name}`" if name else "")

        if category.is_listing:
            return ListingExecutor(category, self.provider)
        if category is Category.OS:
            return OsExecutor(self.provider, self.resolver)
        if category is Category.MEMORY:
            return MemoryExecutor(self.provider, self.unit)
        if category is Category.SWAP:
            return SwapExecutor(self.provider, self.unit)

        target = self.resolver.resolve(category, name)
        if category is Category.CPU:
            return CpuExecutor(target)
        if category is Category.DRIVE:
            return DriveExecutor(target, self.unit)
        if category is Category.SENSOR:
            return SensorExecutor(target)
        return NetworkExecutor(target, self.unit)

    def execute(
        self,
        category: Category,
        fields: Sequence[FieldLike],
        name: Optional[str] = None,
    ) -> list[str]:
        """Bind and run in one step."""
        return self.bind(category, name).run(fields)
