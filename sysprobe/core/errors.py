"""Error types raised by the sysprobe query engine."""

from typing import Optional


class SysprobeError(Exception):
    """Base class for all sysprobe errors."""


class UnknownField(SysprobeError):
    """A field token does not name any field of the category."""

    def __init__(self, category, token: str):
        self.category = category
        self.token = token
        super().__init__(f"invalid {category.label} query `{token}`")


class TargetNotFound(SysprobeError):
    """A named entity (CPU, drive, sensor, interface) is absent from the snapshot."""

    def __init__(self, category, name: str):
        self.category = category
        self.name = name
        super().__init__(f"{category.label} `{name}` not found")


class UnterminatedPlaceholder(SysprobeError):
    """A template contains a `%` that is never closed."""

    def __init__(self, template: str, position: int):
        self.template = template
        self.position = position
        super().__init__(
            f"unterminated format specifier at position {position} in `{template}`"
        )


class UnsupportedForTemplate(SysprobeError):
    """The category has no addressable fields, so it cannot be templated."""

    def __init__(self, category):
        self.category = category
        super().__init__(f"`{category.value}` does not support format strings")


class ProviderUnavailable(SysprobeError):
    """An optional metric is not supported on this host.

    Recovered by the executor, which renders the field as an empty string.
    """

    def __init__(self, metric: str, reason: Optional[str] = None):
        self.metric = metric
        self.reason = reason
        message = f"{metric} is not available on this system"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigError(SysprobeError):
    """The configuration file is missing, malformed or invalid."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"invalid config file {path}: {reason}")
