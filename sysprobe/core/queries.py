"""Query catalog: categories, their fields, and case-insensitive field parsing."""

from dataclasses import dataclass
from enum import Enum

from .errors import UnknownField


class Category(str, Enum):
    """Top-level subsystem being queried."""

    OS = "os"
    CPU = "cpu"
    MEMORY = "memory"
    SWAP = "swap"
    DRIVE = "drive"
    SENSOR = "sensor"
    NETWORK = "network"
    LIST_CPUS = "list-cpus"
    LIST_SENSORS = "list-sensors"
    LIST_NETWORKS = "list-networks"

    @property
    def label(self) -> str:
        """Human-readable name used in error messages."""
        return self.value

    @property
    def is_listing(self) -> bool:
        """Whether the category enumerates entities instead of exposing fields."""
        return self in (
            Category.LIST_CPUS,
            Category.LIST_SENSORS,
            Category.LIST_NETWORKS,
        )

    @property
    def requires_target(self) -> bool:
        """Whether the category needs an entity name to be resolved."""
        return self in (
            Category.CPU,
            Category.DRIVE,
            Category.SENSOR,
            Category.NETWORK,
        )


class OsField(str, Enum):
    """Fields of the `os` category."""

    BOOT_TIME = "boot-time"
    LOAD_AVERAGE_1M = "load-average1m"
    LOAD_AVERAGE_5M = "load-average5m"
    LOAD_AVERAGE_15M = "load-average15m"
    NAME = "name"
    KERNEL_VERSION = "kernel-version"
    VERSION = "version"
    LONG_VERSION = "long-version"
    RELEASE_ID = "release-id"
    HOST_NAME = "host-name"
    PHYSICAL_CORE_COUNT = "physical-core-count"
    TOTAL_CPU_USAGE = "total-cpu-usage"
    CPU_ARCH = "cpu-arch"


class CpuField(str, Enum):
    """Fields of the `cpu` category."""

    USAGE = "usage"
    FREQUENCY = "frequency"
    BRAND = "brand"
    VENDOR_ID = "vendor-id"


class MemoryField(str, Enum):
    """Fields of the `memory` category."""

    USAGE = "usage"
    TOTAL = "total"
    AVAILABLE = "available"
    FREE = "free"


class SwapField(str, Enum):
    """Fields of the `swap` category."""

    USAGE = "usage"
    TOTAL = "total"
    AVAILABLE = "available"


class DriveField(str, Enum):
    """Fields of the `drive` category."""

    USAGE = "usage"
    FS = "fs"
    IS_REMOVABLE = "is-removable"
    KIND = "kind"
    MOUNT_POINT = "mount-point"
    TOTAL = "total"
    AVAILABLE = "available"


class SensorField(str, Enum):
    """Fields of the `sensor` category."""

    CRITICAL_TEMP = "critical-temp"
    MAX_TEMP = "max-temp"
    TEMPERATURE = "temperature"


class NetworkField(str, Enum):
    """Fields of the `network` category."""

    MAC_ADDRESS = "mac-address"
    TOTAL_INCOMING_ERRORS = "total-incoming-errors"
    TOTAL_OUTCOMING_ERRORS = "total-outcoming-errors"
    TOTAL_RECEIVED_DATA = "total-received-data"
    TOTAL_TRANSMITTED_DATA = "total-transmitted-data"
    TOTAL_RECEIVED_PACKETS = "total-received-packets"
    TOTAL_TRANSMITTED_PACKETS = "total-transmitted-packets"


FIELDS_BY_CATEGORY: dict[Category, type[Enum]] = {
    Category.OS: OsField,
    Category.CPU: CpuField,
    Category.MEMORY: MemoryField,
    Category.SWAP: SwapField,
    Category.DRIVE: DriveField,
    Category.SENSOR: SensorField,
    Category.NETWORK: NetworkField,
}

# Case-folded token -> field, built once per category
_LOOKUP: dict[Category, dict[str, Enum]] = {
    category: {member.value.casefold(): member for member in fields}
    for category, fields in FIELDS_BY_CATEGORY.items()
}


@dataclass(frozen=True)
class Query:
    """A resolved (category, field) pair, the unit of executable work."""

    category: Category
    field: Enum


def field_names(category: Category) -> list[str]:
    """Return the field tokens of a category in declaration order.

    Listing categories have no fields and return an empty list.
    """
    fields = FIELDS_BY_CATEGORY.get(category)
    if fields is None:
        return []
    return [member.value for member in fields]


def parse_field(category: Category, token: str) -> Enum:
    """Parse a field token against a category, ignoring case.

    Args:
        category: Category the token is scoped to
        token: Field name as typed by the user (e.g. "Usage", "TOTAL")

    Returns:
        The matching field enumerator

    Raises:
        UnknownField: If the category has no field with that name
    """
    lookup = _LOOKUP.get(category, {})
    try:
        return lookup[token.casefold()]
    except KeyError:
        raise UnknownField(category, token) from None


def parse_query(category: Category, token: str) -> Query:
    """Parse a token into a Query for the given category."""
    return Query(category=category, field=parse_field(category, token))
