"""
IoC Facades

Facades are static-looking proxies for instances held in an IoC
container. Define a subclass per container entry, point the facades at a
container once at startup, then use the facade as if it were the
instance itself.

Usage:
    from di import Container
    from facades import Facade

    class Clock(Facade):
        default_accessor = "clock"

    container = Container()
    container.singleton("clock", SystemClock)
    Facade.ioc = container

    clock = Clock()
    clock.now()
"""

from facades.contracts import IoC
from facades.facade import Facade, FacadeMeta
from facades.registry import FacadeRegistry, get_registry, set_registry

__all__ = [
    "Facade",
    "FacadeMeta",
    "FacadeRegistry",
    "IoC",
    "get_registry",
    "set_registry",
]
