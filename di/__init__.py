"""
IoC Facades - Dependency Injection Module

Reference IoC container implementing the ``make(abstract, parameters)``
contract that facades consume. Applications are free to plug in any other
container exposing the same method.

Usage:
    from di import Container
    from facades import Facade

    container = Container()
    container.singleton("mailer", SmtpMailer)

    Facade.ioc = container
"""

from di.container import (
    Binding,
    Container,
    ServiceLifetime,
    get_container,
)

__all__ = [
    "Binding",
    "Container",
    "ServiceLifetime",
    "get_container",
]
