"""
Container — Ограниченное хранилище количества

Container владеет Properties (ёмкость) и текущим уровнем заполнения (fill).

КРИТИЧЕСКИЙ ИНВАРИАНТ: 0 <= fill <= capacity в любой момент времени.
Все мутаторы поддерживают инвариант через clamp, никогда не отклоняя вызов.

Жизненный цикл: создаётся заполненным (fill = capacity), если не передан State.
"""

import logging
import math
from dataclasses import dataclass

from vessel.core.domain.properties import Properties
from vessel.core.domain.state import State
from vessel.core.domain.units import ZERO_UNITS, Units, as_units, find_units
from vessel.core.math.numerical_safeguards import (
    EPS_UNITS,
    clamp,
    sanitize_amount,
    validate_positive,
)

from .capabilities import FlowOperators

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerConfig:
    """Конфигурация контейнера.

    eps — толерантность для is_empty / is_full.
    """

    eps: float = EPS_UNITS

    def __post_init__(self) -> None:
        validate_positive(self.eps, "eps")


class Container(FlowOperators):
    """
    Контейнер с фиксированной ёмкостью.

    Выполняет обе роли: Provider (get_available_units, provide) и
    Consumer (get_request_units, consume), поэтому участвует в переносах
    с обеих сторон операторов `<<` и `>>`:

        consumer << provider_a << provider_b
        provider >> consumer_a >> consumer_b
    """

    def __init__(
        self,
        properties: Properties,
        state: State | None = None,
        *,
        name: str | None = None,
        config: ContainerConfig | None = None,
    ) -> None:
        """
        Args:
            properties: Свойства (ёмкость) контейнера
            state: Начальный уровень (optional). Без него контейнер полон.
            name: Имя для логов (default: "container")
            config: Конфигурация (default: ContainerConfig())
        """
        self._properties = properties
        self._fill: Units = properties.capacity
        self.name = name or "container"
        self.binding = find_units(properties.tag)

        # Без явной конфигурации толерантность берётся из привязки тега
        if config is None and self.binding is not None:
            config = ContainerConfig(eps=self.binding.eps)
        self.config = config or ContainerConfig()

        if state is not None:
            self.load_state(state)

    def __repr__(self) -> str:
        if self.binding is not None:
            return (
                f"{self.name}({self.binding.format(self._fill)} / "
                f"{self.binding.format(self.capacity)})"
            )
        return f"{self.name}({self._fill:.2f}/{self.capacity:.2f})"

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def properties(self) -> Properties:
        return self._properties

    @property
    def capacity(self) -> Units:
        return self._properties.capacity

    @property
    def tag(self) -> str | None:
        return self._properties.tag

    @property
    def fill_ratio(self) -> float:
        """Доля заполнения [0, 1]; 0.0 для нулевой ёмкости."""
        if self.capacity <= ZERO_UNITS:
            return 0.0
        return self._fill / self.capacity

    @property
    def is_empty(self) -> bool:
        return self._fill <= self.config.eps

    @property
    def is_full(self) -> bool:
        return self.get_request_units() <= self.config.eps

    # -------------------------------------------------------------------------
    # Provider / Consumer
    # -------------------------------------------------------------------------

    def get_available_units(self) -> Units:
        """Текущий уровень заполнения."""
        return self._fill

    def get_request_units(self) -> Units:
        """Свободное место до полного заполнения: capacity - fill."""
        return self.capacity - self._fill

    def provide(self, amount: Units) -> Units:
        """
        Выдача количества из контейнера.

        Args:
            amount: Запрошенное количество (отрицательное и NaN дают 0)

        Returns:
            Фактически выданное количество: min(amount, fill)
        """
        raw = as_units(amount)
        if math.isnan(raw) or raw < ZERO_UNITS:
            logger.debug(f"{self!r}: ignoring provide request {amount}")
        requested = sanitize_amount(raw)
        removed = clamp(requested, ZERO_UNITS, self._fill)
        if removed < requested:
            logger.debug(f"{self!r}: provide saturated {requested:.6f} -> {removed:.6f}")

        self._fill = clamp(self._fill - removed, ZERO_UNITS, self.capacity)
        return removed

    def consume(self, amount: Units) -> Units:
        """
        Приём количества в контейнер.

        Args:
            amount: Предлагаемое количество (отрицательное и NaN дают 0)

        Returns:
            Фактически принятое количество: min(amount, capacity - fill)
        """
        raw = as_units(amount)
        if math.isnan(raw) or raw < ZERO_UNITS:
            logger.debug(f"{self!r}: ignoring consume request {amount}")
        offered = sanitize_amount(raw)
        added = clamp(offered, ZERO_UNITS, self.get_request_units())
        if added < offered:
            logger.debug(f"{self!r}: consume saturated {offered:.6f} -> {added:.6f}")

        self._fill = clamp(self._fill + added, ZERO_UNITS, self.capacity)
        return added

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def load_state(self, state: State) -> None:
        """
        Загрузка уровня из State с ограничением в [0, capacity].

        Никогда не отклоняет вызов: значения вне диапазона ограничиваются,
        NaN загружается как 0.
        """
        amount = sanitize_amount(state.amount)
        fill = clamp(amount, ZERO_UNITS, self.capacity)
        if fill != state.amount:
            logger.debug(f"{self!r}: clamped loaded amount {state.amount} to {fill:.6f}")
        self._fill = fill

    def save_state(self, state: State | None = None) -> State:
        """
        Сохранение текущего уровня.

        Args:
            state: State для записи на месте (optional)

        Returns:
            Переданный state (изменённый) либо новый State
        """
        if state is None:
            return State(amount=self._fill)
        state.amount = self._fill
        return state

    @classmethod
    def from_state(
        cls,
        properties: Properties,
        state: State,
        *,
        name: str | None = None,
        config: ContainerConfig | None = None,
    ) -> "Container":
        """Контейнер с уровнем, загруженным из state."""
        return cls(properties, state, name=name, config=config)
