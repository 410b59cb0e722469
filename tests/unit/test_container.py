"""
Тесты для Container

Проверяет:
1. Начальное состояние (полный контейнер)
2. LoadState / SaveState и перенос уровня между контейнерами
3. Provide / Consume с насыщением на границах
4. Отрицательные и NaN количества (no-op)
5. Инвариант 0 <= fill <= capacity
"""

import logging
import math
from decimal import Decimal

import pytest

from vessel.core.domain import Properties, State, register_units, unregister_units
from vessel.flow import Container, ContainerConfig

EMPTY_AMOUNT = 0.0
CAPACITY_AMOUNT = 255.0
HALF_CAPACITY_AMOUNT = CAPACITY_AMOUNT * 0.5


def assert_full(container: Container) -> None:
    assert container.get_request_units() == pytest.approx(EMPTY_AMOUNT)
    assert container.get_available_units() == pytest.approx(CAPACITY_AMOUNT)


def assert_half(container: Container) -> None:
    assert container.get_request_units() == pytest.approx(HALF_CAPACITY_AMOUNT)
    assert container.get_available_units() == pytest.approx(HALF_CAPACITY_AMOUNT)


def assert_empty(container: Container) -> None:
    assert container.get_request_units() == pytest.approx(CAPACITY_AMOUNT)
    assert container.get_available_units() == pytest.approx(EMPTY_AMOUNT)


@pytest.fixture
def properties() -> Properties:
    return Properties(capacity=CAPACITY_AMOUNT)


@pytest.fixture
def provider(properties: Properties) -> Container:
    return Container(properties, name="provider")


@pytest.fixture
def consumer(properties: Properties) -> Container:
    return Container(properties, name="consumer")


# =============================================================================
# CONSTRUCTION
# =============================================================================


class TestConstruction:
    """Тесты создания контейнера"""

    def test_full_on_creation(self, provider: Container, consumer: Container) -> None:
        """Контейнеры полны при создании"""
        assert_full(provider)
        assert_full(consumer)
        assert provider.is_full
        assert not provider.is_empty

    def test_initial_state(self, properties: Properties) -> None:
        """Начальный State загружается с clamp"""
        assert_half(Container(properties, State(amount=HALF_CAPACITY_AMOUNT)))
        assert_full(Container(properties, State(amount=1000.0)))
        assert_empty(Container.from_state(properties, State()))

    def test_zero_capacity(self) -> None:
        container = Container(Properties(capacity=0.0))
        assert container.get_available_units() == 0.0
        assert container.get_request_units() == 0.0
        assert container.fill_ratio == 0.0
        assert container.is_empty
        assert container.is_full

    def test_read_access(self, properties: Properties) -> None:
        container = Container(properties, name="tank")
        assert container.properties is properties
        assert container.capacity == CAPACITY_AMOUNT
        assert container.tag is None
        assert container.binding is None
        assert container.name == "tank"
        assert repr(container) == "tank(255.00/255.00)"

    def test_default_name(self, properties: Properties) -> None:
        assert Container(properties).name == "container"

    def test_large_capacity_not_full_while_missing_units(self) -> None:
        """is_full использует абсолютную толерантность eps"""
        container = Container(Properties(capacity=1e12))
        container.provide(500.0)
        assert container.get_request_units() == 500.0
        assert not container.is_full
        assert not container.is_empty

        container.consume(500.0)
        assert container.is_full

    def test_invalid_config(self) -> None:
        with pytest.raises(ValueError, match="eps"):
            ContainerConfig(eps=0.0)

    def test_binding_supplies_tolerance(self) -> None:
        """Без явной конфигурации eps берётся из привязки тега"""
        register_units("fuel", symbol="kg", eps=1e-3)
        try:
            container = Container(Properties(capacity=10.0, tag="fuel"), name="tank")
            assert container.config.eps == 1e-3
            assert repr(container) == "tank(10.00 kg / 10.00 kg)"

            container.provide(10.0 - 1e-4)
            assert container.is_empty

            explicit = Container(
                Properties(capacity=10.0, tag="fuel"), config=ContainerConfig(eps=1e-6)
            )
            assert explicit.config.eps == 1e-6
        finally:
            unregister_units("fuel")


# =============================================================================
# LOAD / SAVE STATE
# =============================================================================


class TestLoadState:
    """Тесты LoadState"""

    def test_load_sequence(self, consumer: Container) -> None:
        consumer.load_state(State(amount=EMPTY_AMOUNT))
        assert_empty(consumer)

        consumer.load_state(State(amount=CAPACITY_AMOUNT))
        assert_full(consumer)

        consumer.load_state(State(amount=HALF_CAPACITY_AMOUNT))
        assert_half(consumer)

        consumer.load_state(State(amount=EMPTY_AMOUNT))
        assert_empty(consumer)

    def test_load_clamps_above_capacity(self, consumer: Container) -> None:
        consumer.load_state(State(amount=CAPACITY_AMOUNT * 2))
        assert_full(consumer)

    def test_load_clamps_negative(self, consumer: Container) -> None:
        consumer.load_state(State(amount=-10.0))
        assert_empty(consumer)

    def test_load_non_finite(self, consumer: Container) -> None:
        consumer.load_state(State(amount=math.nan))
        assert_empty(consumer)

        consumer.load_state(State(amount=math.inf))
        assert_full(consumer)

    def test_load_logs_clamp(self, consumer: Container, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="vessel.flow.container"):
            consumer.load_state(State(amount=1000.0))
        assert "clamped loaded amount" in caplog.text


class TestSaveState:
    """Тесты SaveState"""

    @pytest.mark.parametrize("amount", [EMPTY_AMOUNT, CAPACITY_AMOUNT, HALF_CAPACITY_AMOUNT])
    def test_move_state_between_containers(
        self, provider: Container, consumer: Container, amount: float
    ) -> None:
        """Уровень переносится между контейнерами одинаковой ёмкости"""
        test_state = State()
        consumer.load_state(State(amount=amount))
        consumer.save_state(test_state)
        provider.load_state(test_state)

        assert test_state.amount == amount
        assert provider.get_available_units() == consumer.get_available_units() == amount

    def test_save_mutates_in_place(self, consumer: Container) -> None:
        state = State(amount=1.0)
        returned = consumer.save_state(state)
        assert returned is state
        assert state.amount == CAPACITY_AMOUNT

    def test_save_without_argument(self, consumer: Container) -> None:
        consumer.load_state(State(amount=HALF_CAPACITY_AMOUNT))
        state = consumer.save_state()
        assert state.amount == HALF_CAPACITY_AMOUNT

    def test_roundtrip_exact(self, properties: Properties) -> None:
        source = Container(properties, State(amount=1.0 / 3.0))
        target = Container(properties)
        target.load_state(source.save_state())
        assert target.get_available_units() == source.get_available_units()


# =============================================================================
# PROVIDE / CONSUME
# =============================================================================


class TestProvide:
    """Тесты Provide"""

    def test_provide_partial(self, provider: Container) -> None:
        assert provider.provide(HALF_CAPACITY_AMOUNT) == HALF_CAPACITY_AMOUNT
        assert_half(provider)
        assert provider.fill_ratio == pytest.approx(0.5)

    def test_provide_saturates(self, provider: Container) -> None:
        """Запрос сверх уровня выдаёт только имеющееся"""
        assert provider.provide(1000.0) == CAPACITY_AMOUNT
        assert_empty(provider)
        assert provider.provide(1.0) == 0.0
        assert_empty(provider)

    def test_provide_infinite(self, provider: Container) -> None:
        assert provider.provide(math.inf) == CAPACITY_AMOUNT
        assert provider.is_empty

    def test_provide_negative_is_noop(self, provider: Container) -> None:
        assert provider.provide(-10.0) == 0.0
        assert_full(provider)

    def test_provide_nan_is_noop(self, provider: Container) -> None:
        assert provider.provide(math.nan) == 0.0
        assert_full(provider)

    def test_decimal_request_not_reported_as_ignored(self, provider: Container, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="vessel.flow.container"):
            assert provider.provide(Decimal("0.1")) == pytest.approx(0.1)
        assert "ignoring" not in caplog.text

    def test_negative_request_reported(self, provider: Container, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="vessel.flow.container"):
            provider.provide(-1.0)
        assert "ignoring provide request -1.0" in caplog.text


class TestConsume:
    """Тесты Consume"""

    def test_consume_partial(self, consumer: Container) -> None:
        consumer.load_state(State())
        assert consumer.consume(HALF_CAPACITY_AMOUNT) == HALF_CAPACITY_AMOUNT
        assert_half(consumer)

    def test_consume_saturates(self, consumer: Container) -> None:
        """Приём сверх свободного места принимает только свободное"""
        consumer.load_state(State(amount=HALF_CAPACITY_AMOUNT))
        assert consumer.consume(1000.0) == HALF_CAPACITY_AMOUNT
        assert_full(consumer)
        assert consumer.consume(1.0) == 0.0

    def test_consume_negative_is_noop(self, consumer: Container) -> None:
        consumer.load_state(State(amount=HALF_CAPACITY_AMOUNT))
        assert consumer.consume(-10.0) == 0.0
        assert_half(consumer)

    def test_consume_nan_is_noop(self, consumer: Container) -> None:
        consumer.load_state(State())
        assert consumer.consume(math.nan) == 0.0
        assert_empty(consumer)

    def test_decimal_offer_not_reported_as_ignored(self, consumer: Container, caplog) -> None:
        consumer.load_state(State())
        with caplog.at_level(logging.DEBUG, logger="vessel.flow.container"):
            assert consumer.consume(Decimal("0.1")) == pytest.approx(0.1)
        assert "ignoring" not in caplog.text


class TestInvariant:
    """Инвариант 0 <= fill <= capacity для любой последовательности операций"""

    def test_mixed_sequence(self, provider: Container) -> None:
        operations = [
            ("provide", 100.0),
            ("consume", 500.0),
            ("provide", -3.0),
            ("consume", 17.25),
            ("provide", 1e9),
            ("consume", math.nan),
            ("consume", 12.0),
            ("provide", 0.5),
        ]
        for name, amount in operations:
            getattr(provider, name)(amount)
            available = provider.get_available_units()
            assert 0.0 <= available <= CAPACITY_AMOUNT
            assert provider.get_request_units() == CAPACITY_AMOUNT - available

        assert provider.get_available_units() == pytest.approx(11.5)
