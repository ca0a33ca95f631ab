"""
IoC Facades - Reference IoC Container

A lightweight container keyed by name (or type) that implements the
``make(abstract, parameters)`` contract consumed by facades.

Features:
- Transient and shared (singleton) bindings
- Factory callables, classes or existing instances as concretes
- Positional build parameters
- Circular resolution detection
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Callable,
    Dict,
    Hashable,
    List,
    Optional,
    Sequence,
    Set,
)

from core.errors import BindingError, BuildError, ContainerError, ErrorContext

# Global container instance
_container: Optional["Container"] = None
_container_lock = threading.Lock()


class ServiceLifetime(Enum):
    """Binding lifetime options."""

    SINGLETON = "singleton"  # Built once, shared afterwards
    TRANSIENT = "transient"  # Built on every make()


@dataclass
class Binding:
    """Describes how an abstract should be built and shared."""

    abstract: Hashable
    concrete: Optional[Callable[..., Any]] = None
    lifetime: ServiceLifetime = ServiceLifetime.TRANSIENT

    @property
    def shared(self) -> bool:
        return self.lifetime == ServiceLifetime.SINGLETON


def _describe(abstract: Hashable) -> str:
    return getattr(abstract, "__name__", None) or str(abstract)


def _context(operation: str, abstract: Hashable) -> ErrorContext:
    return ErrorContext.from_current_span(
        operation=operation,
        component="container",
        accessor=_describe(abstract),
    )


class Container:
    """
    Service container.

    Usage:
        container = Container()

        container.bind("clock", lambda: SystemClock())
        container.singleton("mailer", SmtpMailer)
        container.instance("config", get_config())

        mailer = container.make("mailer")
    """

    def __init__(self) -> None:
        self._bindings: Dict[Hashable, Binding] = {}
        self._instances: Dict[Hashable, Any] = {}
        self._lock = threading.RLock()
        self._building: Set[Hashable] = set()

    def bind(
        self,
        abstract: Hashable,
        concrete: Optional[Callable[..., Any]] = None,
        shared: bool = False,
    ) -> "Container":
        """Register a binding. Re-binding drops any shared instance."""
        if concrete is None:
            if not isinstance(abstract, type):
                raise BindingError(
                    f"Cannot bind '{_describe(abstract)}' without a concrete",
                    abstract=abstract,
                    context=_context("bind", abstract),
                )
            concrete = abstract
        elif not callable(concrete):
            raise BindingError(
                f"Concrete for '{_describe(abstract)}' is not callable",
                abstract=abstract,
                context=_context("bind", abstract),
            )

        with self._lock:
            self._instances.pop(abstract, None)
            self._bindings[abstract] = Binding(
                abstract=abstract,
                concrete=concrete,
                lifetime=ServiceLifetime.SINGLETON if shared else ServiceLifetime.TRANSIENT,
            )
        return self

    def singleton(
        self,
        abstract: Hashable,
        concrete: Optional[Callable[..., Any]] = None,
    ) -> "Container":
        """Register a shared binding."""
        return self.bind(abstract, concrete, shared=True)

    def instance(self, abstract: Hashable, obj: Any) -> "Container":
        """Register an existing object as shared."""
        with self._lock:
            self._bindings[abstract] = Binding(
                abstract=abstract,
                lifetime=ServiceLifetime.SINGLETON,
            )
            self._instances[abstract] = obj
        return self

    def bound(self, abstract: Hashable) -> bool:
        """Check if an abstract has a binding."""
        return abstract in self._bindings

    def forget(self, abstract: Hashable) -> None:
        """Remove a binding and its shared instance, if any."""
        with self._lock:
            self._bindings.pop(abstract, None)
            self._instances.pop(abstract, None)

    def flush(self) -> None:
        """Remove every binding and shared instance."""
        with self._lock:
            self._bindings.clear()
            self._instances.clear()
            self._building.clear()

    def bindings(self) -> List[Hashable]:
        return list(self._bindings)

    def make(
        self,
        abstract: Hashable,
        parameters: Optional[Sequence[Any]] = None,
    ) -> Any:
        """
        Resolve an abstract.

        Raises:
            BindingError: nothing is bound under ``abstract``
            BuildError: the bound concrete failed to build
        """
        with self._lock:
            binding = self._bindings.get(abstract)
            if binding is None:
                raise BindingError(
                    f"No binding registered for '{_describe(abstract)}'",
                    abstract=abstract,
                    context=_context("make", abstract),
                )

            if binding.shared and abstract in self._instances:
                return self._instances[abstract]

            obj = self._build(binding, parameters or ())

            if binding.shared:
                self._instances[abstract] = obj
            return obj

    def _build(self, binding: Binding, parameters: Sequence[Any]) -> Any:
        abstract = binding.abstract

        # Detect circular dependencies
        if abstract in self._building:
            raise BuildError(
                f"Circular dependency detected for '{_describe(abstract)}'",
                abstract=abstract,
                context=_context("make", abstract),
            )

        self._building.add(abstract)
        try:
            return binding.concrete(*parameters)
        except ContainerError:
            raise
        except Exception as exc:
            raise BuildError(
                f"Unable to build '{_describe(abstract)}': {exc}",
                abstract=abstract,
                context=_context("make", abstract),
                cause=exc,
            ) from exc
        finally:
            self._building.discard(abstract)


def get_container() -> Container:
    """Get or create the global container instance."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = Container()
    return _container
