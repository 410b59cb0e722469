"""
Units — Единицы количества и привязка доменных тегов

Единственный допустимый способ представления количеств в контейнерах:
- Units — вещественное количество (float)
- UnitsBinding — привязка доменного тега (например, "fuel") к символу
  единиц ("kg") и толерантности сравнения

Все контейнеры и лимитеры оперируют одним типом Units, независимо от домена.
"""

from dataclasses import dataclass
from typing import Final, TypeAlias

from vessel.core.math.numerical_safeguards import EPS_UNITS, validate_positive

# =============================================================================
# ТИП КОЛИЧЕСТВА
# =============================================================================

Units: TypeAlias = float

ZERO_UNITS: Final[Units] = 0.0


def as_units(value: float) -> Units:
    """
    Приведение числа к Units.

    Принимает int/float/Decimal и любые объекты с __float__.

    Args:
        value: Исходное количество

    Returns:
        Количество как float
    """
    return float(value)


def min_units(*values: Units) -> Units:
    """Минимум из количеств (без значений возвращает ZERO_UNITS)."""
    if not values:
        return ZERO_UNITS
    return min(values)


# =============================================================================
# ПРИВЯЗКА ТЕГОВ
# =============================================================================


@dataclass(frozen=True)
class UnitsBinding:
    """
    Привязка доменного тега к единицам.

    Attributes:
        tag: Доменный тег (например, "fuel", "bandwidth")
        symbol: Символ единиц для отображения (например, "kg", "MB")
        eps: Толерантность сравнения количеств в этом домене
    """

    tag: str
    symbol: str = ""
    eps: float = EPS_UNITS

    def __post_init__(self) -> None:
        if not self.tag:
            raise ValueError("tag must be a non-empty string")
        validate_positive(self.eps, "eps")

    def format(self, amount: Units) -> str:
        """Форматирование количества с символом единиц."""
        if self.symbol:
            return f"{amount:.2f} {self.symbol}"
        return f"{amount:.2f}"


_BINDINGS: dict[str, UnitsBinding] = {}


def register_units(tag: str, symbol: str = "", eps: float = EPS_UNITS) -> UnitsBinding:
    """
    Регистрация (или замена) привязки для доменного тега.

    Args:
        tag: Доменный тег
        symbol: Символ единиц
        eps: Толерантность сравнения

    Returns:
        Зарегистрированная привязка

    Raises:
        ValueError: Если tag пустой или eps не положительный
    """
    binding = UnitsBinding(tag=tag, symbol=symbol, eps=eps)
    _BINDINGS[tag] = binding
    return binding


def units_for(tag: str) -> UnitsBinding:
    """
    Привязка для доменного тега.

    Raises:
        KeyError: Если тег не зарегистрирован
    """
    try:
        return _BINDINGS[tag]
    except KeyError:
        raise KeyError(f"No units registered for tag {tag!r}") from None


def find_units(tag: str | None) -> UnitsBinding | None:
    """Привязка для тега либо None (в том числе для tag=None)."""
    if tag is None:
        return None
    return _BINDINGS.get(tag)


def unregister_units(tag: str) -> None:
    """Удаление привязки (отсутствующий тег игнорируется)."""
    _BINDINGS.pop(tag, None)
