"""
Lazy quad-chassis classification.

Whether a chassis walks on four legs cannot be read from the catalog summary;
it needs the full structural definition of a variant, which is expensive to
load. The answer is only computed when somebody asks, once per chassis, and
then answers for every variant sharing that chassis key.

Resolution states per chassis key:

    UNKNOWN -> RESOLVING -> TRUE | FALSE
                   |
                   +-> UNKNOWN   (load failed, timed out or found nothing)

A failed resolution is retried by a later query, no sooner than
`retry_interval` seconds after the failure.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Protocol, Set

from forceclass.core.config import ENTITY_LOAD_TIMEOUT, QUAD_RETRY_INTERVAL
from forceclass.core.metrics import entity_loads_total, track_performance
from forceclass.services.categories import UnitType
from forceclass.services.exceptions import EntityLoadError
from forceclass.services.records import ModelRecord

logger = logging.getLogger(__name__)

QUAD_MEK_LAYOUTS = frozenset({"quad", "quadvee"})


class QuadState(Enum):
    UNKNOWN = "unknown"
    RESOLVING = "resolving"
    TRUE = "true"
    FALSE = "false"


@dataclass(frozen=True)
class EntityDefinition:
    """The part of a full unit definition the resolver needs."""
    name: str
    unit_type: UnitType
    motive_layout: str = ""  # meks: biped | quad | tripod | quadvee | lam
    chassis_type: str = ""  # battle armor: biped | quad

    @property
    def is_quad(self) -> bool:
        if self.unit_type is UnitType.MEK:
            return self.motive_layout.lower() in QUAD_MEK_LAYOUTS
        if self.unit_type is UnitType.BATTLE_ARMOR:
            return self.chassis_type.lower() == "quad"
        return False


class EntityLoader(Protocol):
    async def load_entity(self, unit_key: str) -> Optional[EntityDefinition]:
        """Full definition of a unit variant, None when the catalog has no such unit.

        Raises:
            EntityLoadError: the definition exists but could not be loaded
        """
        ...


class QuadChassisResolver:
    """Chassis-keyed, compute-once memo of the quad classification."""

    def __init__(
        self,
        loader: EntityLoader,
        timeout: float = ENTITY_LOAD_TIMEOUT,
        retry_interval: float = QUAD_RETRY_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.loader = loader
        self.timeout = timeout
        self.retry_interval = retry_interval
        self._clock = clock
        self._resolved: Dict[str, bool] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._in_flight: Set[str] = set()
        self._last_failure: Dict[str, float] = {}

    def state(self, chassis_key: str) -> QuadState:
        if chassis_key in self._resolved:
            return QuadState.TRUE if self._resolved[chassis_key] else QuadState.FALSE
        if chassis_key in self._in_flight:
            return QuadState.RESOLVING
        return QuadState.UNKNOWN

    async def resolve(self, record: ModelRecord) -> Optional[bool]:
        """
        Quad classification of the record's chassis, loading a variant if needed.

        Returns:
            True/False once resolved for any variant of the chassis, None while
            the chassis cannot be resolved (load failure or retry back-off).
        """
        chassis_key = record.chassis_key
        cached = self._resolved.get(chassis_key)
        if cached is not None:
            return cached

        lock = self._locks.setdefault(chassis_key, asyncio.Lock())
        async with lock:
            # resolved by another caller while this one waited
            cached = self._resolved.get(chassis_key)
            if cached is not None:
                return cached

            if self._backing_off(chassis_key):
                logger.debug(f"Quad resolution for {chassis_key} backing off after recent failure")
                return None

            self._in_flight.add(chassis_key)
            try:
                quad = await self._load_quad(record)
            finally:
                self._in_flight.discard(chassis_key)

            if quad is None:
                self._last_failure[chassis_key] = self._clock()
                return None

            self._resolved[chassis_key] = quad
            self._last_failure.pop(chassis_key, None)
            logger.info(
                f"Resolved chassis {chassis_key} quad={quad}",
                extra={'chassis_key': chassis_key, 'unit_key': record.key, 'quad': quad}
            )
            return quad

    def _backing_off(self, chassis_key: str) -> bool:
        last_failure = self._last_failure.get(chassis_key)
        return last_failure is not None and self._clock() - last_failure < self.retry_interval

    @track_performance(service_name="QuadChassisResolver")
    async def _load_quad(self, record: ModelRecord) -> Optional[bool]:
        try:
            entity = await asyncio.wait_for(
                self.loader.load_entity(record.key),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            entity_loads_total.labels(outcome="timeout").inc()
            logger.warning(f"Entity load for {record.key} timed out after {self.timeout:.1f}s")
            return None
        except EntityLoadError as e:
            entity_loads_total.labels(outcome="error").inc()
            logger.warning(f"Entity load for {record.key} failed: {e}")
            return None

        if entity is None:
            entity_loads_total.labels(outcome="missing").inc()
            logger.warning(f"No entity definition found for {record.key}")
            return None

        entity_loads_total.labels(outcome="success").inc()
        return entity.is_quad
