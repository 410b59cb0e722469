"""
Properties — Неизменяемые свойства контейнера

Immutable Pydantic модель, описывающая ёмкость (capacity) контейнера.
Изменение ёмкости требует создания новых Properties и нового Container.
"""

from pydantic import BaseModel, Field

from .units import Units


class Properties(BaseModel):
    """
    Свойства контейнера.

    Immutable модель (frozen=True). Инвариант: 0 <= capacity < Inf.
    """

    capacity: Units = Field(
        ..., ge=0, allow_inf_nan=False, description="Максимальное заполнение контейнера"
    )
    tag: str | None = Field(
        None, description="Доменный тег единиц (например, 'fuel')"
    )

    model_config = {"frozen": True}  # Immutable
