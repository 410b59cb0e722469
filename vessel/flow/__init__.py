"""
Flow — контейнеры, роли Provider/Consumer и лимитеры переноса.

- Container: ограниченное хранилище (обе роли)
- ProvideLimiter / ConsumeLimiter: бюджет на одну роль
- transfer / send: примитив переноса; операторы `<<` и `>>`
"""

from .capabilities import Consumer, FlowOperators, Provider, send, transfer
from .container import Container, ContainerConfig
from .limiters import ConsumeLimiter, ProvideLimiter

__all__ = [
    "Provider",
    "Consumer",
    "FlowOperators",
    "transfer",
    "send",
    "Container",
    "ContainerConfig",
    "ProvideLimiter",
    "ConsumeLimiter",
]
