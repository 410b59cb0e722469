"""
State — Снапшот уровня заполнения

Простая модель, хранящая количество вне какого-либо контейнера.
Используется для сохранения/восстановления уровня и переноса его между
контейнерами. Валидация относительно ёмкости не выполняется: ограничение
(clamp) делает контейнер, загружающий State.
"""

from pydantic import BaseModel, Field

from .units import ZERO_UNITS, Units


class State(BaseModel):
    """
    Снапшот заполнения контейнера.

    Mutable модель: Container.save_state записывает уровень в переданный
    экземпляр. Присваивания валидируются (amount всегда float).
    """

    amount: Units = Field(ZERO_UNITS, description="Уровень заполнения")

    model_config = {"validate_assignment": True}
