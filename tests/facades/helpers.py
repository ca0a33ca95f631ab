"""
Dummy classes used to exercise facade forwarding.

FOR TESTING ONLY
"""
from typing import Optional

from facades import Facade

IDENTIFIER = "@myConcrete"


class Concrete:
    """Facade root with a property, plain attributes and methods."""

    def __init__(self):
        self._name: Optional[str] = None
        self.foo = "bar"

        def bar():
            return "foo"

        self.bar = bar

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    def say_hi(self) -> str:
        return f"Hi {self.name}"

    def say_hallo(self, name: str) -> str:
        return f"Hallo {name}"

    def whoami(self):
        return self


class ConcreteFacadeType(Facade):
    def __init__(self):
        super().__init__(IDENTIFIER)


ConcreteFacade = ConcreteFacadeType()
