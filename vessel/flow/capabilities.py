"""
Capabilities — Роли Provider/Consumer и примитив переноса

Любой объект, умеющий сообщить доступное количество и отдать его, является
Provider. Любой объект, умеющий сообщить недостающее количество и принять его,
является Consumer. Container выполняет обе роли, каждый лимитер одну.

Перенос (transfer) — единственный примитив; операторы `<<` и `>>` являются
двумя формами его вызова:
- consumer << provider  (возвращает consumer)
- provider >> consumer  (возвращает provider)

ИНВАРИАНТ: за один вызов переносится не более
min(consumer.get_request_units(), provider.get_available_units()).
"""

import logging
from typing import Protocol, runtime_checkable

from vessel.core.domain.units import ZERO_UNITS, Units, min_units

logger = logging.getLogger(__name__)


# =============================================================================
# ROLES
# =============================================================================


@runtime_checkable
class Provider(Protocol):
    """Роль источника: доступное количество и выдача."""

    def get_available_units(self) -> Units: ...

    def provide(self, amount: Units) -> Units: ...


@runtime_checkable
class Consumer(Protocol):
    """Роль приёмника: недостающее количество и приём."""

    def get_request_units(self) -> Units: ...

    def consume(self, amount: Units) -> Units: ...


# =============================================================================
# TRANSFER
# =============================================================================


def transfer(consumer: Consumer, provider: Provider) -> Units:
    """
    Перенос количества от provider к consumer.

    Алгоритм:
        amount = min(consumer.request, provider.available)
        removed = provider.provide(amount)
        added = consumer.consume(removed)

    Args:
        consumer: Принимающая сторона
        provider: Отдающая сторона

    Returns:
        Количество, принятое consumer (0.0 при насыщении любой из сторон)
    """
    amount = min_units(consumer.get_request_units(), provider.get_available_units())
    if amount <= ZERO_UNITS:
        return ZERO_UNITS

    removed = provider.provide(amount)
    added = consumer.consume(removed)

    if added < removed:
        logger.warning(
            f"{consumer!r} accepted {added:.6f} of {removed:.6f} released by "
            f"{provider!r}; {removed - added:.6f} units lost"
        )

    logger.debug(f"Transferred {added:.6f} from {provider!r} to {consumer!r}")
    return added


def send(provider: Provider, consumer: Consumer) -> Units:
    """То же, что transfer, с provider первым аргументом."""
    return transfer(consumer, provider)


# =============================================================================
# OPERATORS
# =============================================================================


class FlowOperators:
    """
    Mixin с операторами переноса.

    Оператор с операндом без нужной роли возвращает NotImplemented,
    и Python поднимает TypeError.
    """

    def __lshift__(self, other):
        if not isinstance(self, Consumer) or not isinstance(other, Provider):
            return NotImplemented
        transfer(self, other)
        return self

    def __rshift__(self, other):
        if not isinstance(self, Provider) or not isinstance(other, Consumer):
            return NotImplemented
        transfer(other, self)
        return self

    def __rlshift__(self, other):
        # other << self
        if not isinstance(other, Consumer) or not isinstance(self, Provider):
            return NotImplemented
        transfer(other, self)
        return other

    def __rrshift__(self, other):
        # other >> self
        if not isinstance(other, Provider) or not isinstance(self, Consumer):
            return NotImplemented
        transfer(self, other)
        return other
