"""
Vessel — ограниченные контейнеры и перенос количеств между ними.
"""

from vessel.core.domain import (
    ZERO_UNITS,
    Properties,
    State,
    Units,
    UnitsBinding,
    register_units,
    units_for,
)
from vessel.flow import (
    ConsumeLimiter,
    Consumer,
    Container,
    ContainerConfig,
    ProvideLimiter,
    Provider,
    send,
    transfer,
)

__all__ = [
    "Units",
    "ZERO_UNITS",
    "UnitsBinding",
    "register_units",
    "units_for",
    "Properties",
    "State",
    "Provider",
    "Consumer",
    "Container",
    "ContainerConfig",
    "ProvideLimiter",
    "ConsumeLimiter",
    "transfer",
    "send",
]
