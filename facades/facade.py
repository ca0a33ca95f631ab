"""
Facade

Abstract base for facades: objects that stand in for an instance
registered in an IoC container. The instance (the facade root) is resolved
lazily on first use and cached per accessor in the shared registry.

Attribute reads, writes and deletes that do not hit the facade's own
surface are forwarded to the facade root. Callable members come back as
thin forwarding callables, so ``Mail.send(...)`` runs ``root.send(...)``
with the root as receiver.

Usage:
    from di import Container
    from facades import Facade

    class Mail(Facade):
        default_accessor = "mailer"

    container = Container()
    container.singleton("mailer", SmtpMailer)
    Facade.ioc = container

    Mail().send("hello")
"""

from __future__ import annotations

import functools
import threading
from abc import ABCMeta
from typing import Any, Callable, ClassVar, List, Optional

from core.errors import AbstractInstantiationError
from facades.registry import FacadeRegistry, get_registry

# AttributeError raised while resolving facade_root, per thread. Python
# retries a property that raised AttributeError through __getattr__,
# which re-raises it instead of reporting a missing member.
_root_errors = threading.local()


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _forwarding_callable(member: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(member)
    def forward(*args: Any, **kwargs: Any) -> Any:
        return member(*args, **kwargs)

    return forward


class FacadeMeta(ABCMeta):
    """Metaclass giving facade classes a class-level ``ioc`` property."""

    @property
    def ioc(cls) -> Any:
        """The IoC container shared by facades using this registry."""
        return cls.facade_registry().container

    @ioc.setter
    def ioc(cls, container: Any) -> None:
        cls.facade_registry().container = container


class Facade(metaclass=FacadeMeta):
    """
    Abstract facade.

    Subclasses fix their accessor either by passing it to the base
    constructor or through ``default_accessor``:

        class Mail(Facade):
            def __init__(self):
                super().__init__("mailer")

        class Cache(Facade):
            default_accessor = "cache"

    Instantiating ``Facade`` itself raises AbstractInstantiationError.
    """

    default_accessor: ClassVar[Optional[str]] = None

    _registry: ClassVar[Optional[FacadeRegistry]] = None
    _facade_accessor: Optional[str] = None

    def __new__(cls, *args: Any, **kwargs: Any) -> "Facade":
        if cls is Facade:
            raise AbstractInstantiationError(
                "Cannot create Facade instance, class is abstract"
            )
        return super().__new__(cls)

    def __init__(self, accessor: Optional[str] = None) -> None:
        self.facade_accessor = accessor if accessor is not None else self.default_accessor

    # ------------------------------------------------------------------
    # Own surface
    # ------------------------------------------------------------------

    @property
    def facade_accessor(self) -> Optional[str]:
        """Container key this facade stands for."""
        return self._facade_accessor

    @facade_accessor.setter
    def facade_accessor(self, accessor: Optional[str]) -> None:
        self._facade_accessor = accessor

    @property
    def facade_root(self) -> Any:
        """
        The instance behind this facade.

        Raises:
            ContainerUnavailableError: no IoC container is set
            BindingError: raised by the container, unchanged
            BuildError: raised by the container, unchanged
        """
        try:
            return self._resolve_root()
        except AttributeError as exc:
            _root_errors.pending = exc
            raise

    def _resolve_root(self) -> Any:
        return type(self).resolve_facade_instance(self.facade_accessor)

    # ------------------------------------------------------------------
    # Registry access
    # ------------------------------------------------------------------

    @classmethod
    def facade_registry(cls) -> FacadeRegistry:
        """Registry bound to this class, or the process-wide one."""
        if cls._registry is not None:
            return cls._registry
        return get_registry()

    @classmethod
    def use_registry(cls, registry: Optional[FacadeRegistry]) -> None:
        """Bind a registry to this class and its subclasses."""
        cls._registry = registry

    @classmethod
    def get_container(cls) -> Any:
        return cls.facade_registry().container

    @classmethod
    def set_container(cls, container: Any) -> None:
        cls.facade_registry().container = container

    @classmethod
    def resolve_facade_instance(cls, accessor: Any) -> Any:
        """Resolve the facade root for ``accessor``, cached per accessor."""
        return cls.facade_registry().resolve(accessor)

    @classmethod
    def has_resolved_instance(cls, accessor: Any) -> bool:
        return cls.facade_registry().has_resolved(accessor)

    @classmethod
    def clear_resolved_instance(cls, accessor: Any) -> None:
        cls.facade_registry().clear_resolved(accessor)

    @classmethod
    def clear_resolved_instances(cls) -> None:
        cls.facade_registry().clear_all()

    # ------------------------------------------------------------------
    # Forwarding
    # ------------------------------------------------------------------

    def _is_own_member(self, name: str) -> bool:
        if name in self.__dict__:
            return True
        return any(name in klass.__dict__ for klass in type(self).__mro__)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup failed on the facade itself
        if name == "facade_root":
            pending = getattr(_root_errors, "pending", None)
            _root_errors.pending = None
            if pending is not None:
                raise pending

        if _is_dunder(name) or self._is_own_member(name):
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )

        member = getattr(self._resolve_root(), name)
        if callable(member) and not isinstance(member, type):
            return _forwarding_callable(member)
        return member

    def __setattr__(self, name: str, value: Any) -> None:
        if _is_dunder(name) or self._is_own_member(name):
            object.__setattr__(self, name, value)
        else:
            setattr(self._resolve_root(), name, value)

    def __delattr__(self, name: str) -> None:
        if _is_dunder(name) or name in self.__dict__:
            object.__delattr__(self, name)
        elif self._is_own_member(name):
            raise AttributeError(f"Cannot delete facade member '{name}'")
        else:
            delattr(self._resolve_root(), name)

    def __dir__(self) -> List[str]:
        names = set(object.__dir__(self))
        if self.has_resolved_instance(self.facade_accessor):
            names.update(dir(self._resolve_root()))
        return sorted(names)

    def __repr__(self) -> str:
        resolved = self.has_resolved_instance(self.facade_accessor)
        return (
            f"<{type(self).__name__} accessor={self.facade_accessor!r} "
            f"resolved={resolved}>"
        )
