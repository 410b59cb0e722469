"""
Limiters — Ограничители количества для одного переноса

ProvideLimiter и ConsumeLimiter — декораторы над Provider/Consumer,
сужающие видимое доступное/запрошенное количество до остатка бюджета
(remaining). Ёмкость обёрнутого объекта не меняется, его инвариант
поддерживается делегированием.

Лимитер не владеет обёрнутым объектом: объект должен оставаться в
использовании, пока используется лимитер. Лимитеры компонуются
(лимитер может оборачивать другой лимитер).

ИНВАРИАНТЫ:
1. remaining монотонно убывает и никогда не становится отрицательным
2. Суммарно через лимитер проходит не более limit
3. После исчерпания (remaining == 0) любой перенос — no-op
"""

import logging

from vessel.core.domain.units import ZERO_UNITS, Units, as_units, min_units
from vessel.core.math.numerical_safeguards import (
    EPS_UNITS,
    clamp,
    sanitize_amount,
    validate_non_negative,
)

from .capabilities import Consumer, FlowOperators, Provider

logger = logging.getLogger(__name__)


class _Limiter(FlowOperators):
    """Общий учёт бюджета лимитеров."""

    def __init__(self, limit: Units) -> None:
        limit = as_units(limit)
        validate_non_negative(limit, "limit")
        self._limit: Units = limit
        self._remaining: Units = limit

    @property
    def limit(self) -> Units:
        """Исходный бюджет."""
        return self._limit

    @property
    def remaining(self) -> Units:
        """Остаток бюджета."""
        return self._remaining

    @property
    def transferred(self) -> Units:
        """Количество, уже прошедшее через лимитер."""
        return self._limit - self._remaining

    @property
    def is_exhausted(self) -> bool:
        return self._remaining <= EPS_UNITS

    @property
    def _budget(self) -> Units:
        # Остаток в пределах EPS_UNITS считается исчерпанным
        if self.is_exhausted:
            return ZERO_UNITS
        return self._remaining

    def _cap(self, amount: Units) -> Units:
        return clamp(sanitize_amount(as_units(amount)), ZERO_UNITS, self._budget)

    def _spend(self, moved: Units, capped: Units) -> Units:
        """
        Списание фактически перенесённого количества.

        Результат обёрнутого объекта ограничивается [0, capped].

        Returns:
            Учтённое количество
        """
        settled = clamp(sanitize_amount(as_units(moved)), ZERO_UNITS, capped)
        if settled != moved:
            logger.warning(
                f"{self!r}: wrapped object reported {moved} for a capped request "
                f"of {capped:.6f}; counted {settled:.6f}"
            )

        self._remaining = max(self._remaining - settled, ZERO_UNITS)
        if settled > ZERO_UNITS and self.is_exhausted:
            logger.debug(f"{self!r}: budget exhausted")
        return settled


class ProvideLimiter(_Limiter):
    """
    Ограничитель роли Provider.

    Пример:
        consumer << ProvideLimiter(provider, 127.5)
        ProvideLimiter(provider, 127.5) >> consumer
    """

    def __init__(self, source: Provider, limit: Units) -> None:
        """
        Args:
            source: Обёрнутый Provider
            limit: Бюджет (>= 0, конечный)

        Raises:
            ValueError: Если limit отрицательный или NaN/Inf
        """
        super().__init__(limit)
        self._source = source

    def __repr__(self) -> str:
        return f"ProvideLimiter({self._source!r}, {self._remaining:.2f}/{self._limit:.2f})"

    @property
    def source(self) -> Provider:
        return self._source

    def get_available_units(self) -> Units:
        """min(source.get_available_units(), remaining)."""
        return min_units(self._source.get_available_units(), self._budget)

    def provide(self, amount: Units) -> Units:
        """
        Выдача не более remaining из source.

        Returns:
            Выданное source количество, не более remaining
        """
        capped = self._cap(amount)
        return self._spend(self._source.provide(capped), capped)


class ConsumeLimiter(_Limiter):
    """
    Ограничитель роли Consumer.

    Пример:
        ConsumeLimiter(consumer, 127.5) << provider
        provider >> ConsumeLimiter(consumer, 127.5)
    """

    def __init__(self, sink: Consumer, limit: Units) -> None:
        """
        Args:
            sink: Обёрнутый Consumer
            limit: Бюджет (>= 0, конечный)

        Raises:
            ValueError: Если limit отрицательный или NaN/Inf
        """
        super().__init__(limit)
        self._sink = sink

    def __repr__(self) -> str:
        return f"ConsumeLimiter({self._sink!r}, {self._remaining:.2f}/{self._limit:.2f})"

    @property
    def sink(self) -> Consumer:
        return self._sink

    def get_request_units(self) -> Units:
        """min(sink.get_request_units(), remaining)."""
        return min_units(self._sink.get_request_units(), self._budget)

    def consume(self, amount: Units) -> Units:
        """
        Приём не более remaining в sink.

        Returns:
            Принятое sink количество, не более remaining
        """
        capped = self._cap(amount)
        return self._spend(self._sink.consume(capped), capped)
