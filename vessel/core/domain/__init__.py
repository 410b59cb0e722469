"""
Domain models and value objects.

Contains fundamental domain entities: Units, Properties, State.
"""

from vessel.core.domain.properties import Properties
from vessel.core.domain.state import State
from vessel.core.domain.units import (
    ZERO_UNITS,
    Units,
    UnitsBinding,
    as_units,
    find_units,
    min_units,
    register_units,
    units_for,
    unregister_units,
)

__all__ = [
    # Units module
    "Units",
    "ZERO_UNITS",
    "UnitsBinding",
    "as_units",
    "find_units",
    "min_units",
    "register_units",
    "units_for",
    "unregister_units",
    # Properties model
    "Properties",
    # State model
    "State",
]
