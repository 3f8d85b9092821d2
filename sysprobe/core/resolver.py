"""Target resolution: locate a named CPU, drive, sensor or interface in a snapshot."""

import logging
import time
from typing import Optional, Union

from ..provider.base import (
    MINIMUM_CPU_UPDATE_INTERVAL,
    CpuInfo,
    DriveInfo,
    NetworkInfo,
    Provider,
    SensorInfo,
)
from .errors import ProviderUnavailable, TargetNotFound
from .queries import Category

logger = logging.getLogger(__name__)

EntityHandle = Union[CpuInfo, DriveInfo, SensorInfo, NetworkInfo]


class TargetResolver:
    """
    Resolve entity names against a provider snapshot.

    Names are matched exactly. If the provider reports the same name twice,
    the first entity in snapshot order wins.
    """

    def __init__(
        self,
        provider: Provider,
        cpu_sample_interval: float = MINIMUM_CPU_UPDATE_INTERVAL,
    ):
        """
        Initialize resolver.

        Args:
            provider: Telemetry provider owned by the current invocation
            cpu_sample_interval: Seconds to wait between the two CPU refreshes
        """
        self.provider = provider
        self.cpu_sample_interval = cpu_sample_interval

    def refresh_cpus(self) -> None:
        """Two-phase CPU refresh: refresh, wait the sampling interval, refresh.

        A single refresh has no previous sample to diff against, so usage
        figures are only meaningful after the second one.
        """
        self.provider.refresh_cpus()
        time.sleep(self.cpu_sample_interval)
        self.provider.refresh_cpus()

    def resolve(
        self, category: Category, name: Optional[str] = None
    ) -> Optional[EntityHandle]:
        """
        Locate the entity a targeted category refers to.

        Args:
            category: Category being queried
            name: Entity name (CPU name, drive device, sensor label, interface)

        Returns:
            The matching entity, or None for categories that take no target

        Raises:
            TargetNotFound: If no entity in the snapshot has that name
        """
        if not category.requires_target:
            return None
        if name is None:
            raise TargetNotFound(category, "")

        if category is Category.CPU:
            self.refresh_cpus()
            entities = self.provider.cpus()
        elif category is Category.DRIVE:
            entities = self.provider.drives()
        elif category is Category.SENSOR:
            try:
                entities = self.provider.sensors()
            except ProviderUnavailable:
                logger.debug("Temperature sensors not available")
                entities = []
        else:
            entities = self.provider.networks()

        for entity in entities:
            if _entity_name(entity) == name:
                logger.debug("Resolved %s `%s`", category.label, name)
                return entity

        raise TargetNotFound(category, name)


def _entity_name(entity: EntityHandle) -> str:
    if isinstance(entity, SensorInfo):
        return entity.label
    return entity.name
