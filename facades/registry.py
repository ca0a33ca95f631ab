"""
Facade registry: the shared container reference and the cache of
resolved facade roots, keyed by accessor.

A process-wide default registry backs every facade unless a facade class
is bound to its own registry with ``Facade.use_registry``.
"""

from __future__ import annotations

import threading
from contextlib import nullcontext
from typing import Any, Callable, Dict, List, Optional

from config import get_config
from core.errors import ContainerUnavailableError, ErrorContext
from observability.logging import get_logger
from observability.tracing import create_span

# Global registry instance
_registry: Optional["FacadeRegistry"] = None
_registry_lock = threading.Lock()


class FacadeRegistry:
    """
    Holds the active IoC container and the resolved-instances cache.

    Check-then-insert on a cache miss happens under one re-entrant lock,
    so each accessor is built by the container at most once between
    clears. The lock is re-entrant because a container factory may
    resolve another facade.

    Usage:
        registry = FacadeRegistry()
        registry.init(container)

        mailer = registry.resolve("mailer")
        registry.clear_resolved("mailer")

        registry.reset()
    """

    def __init__(
        self,
        container: Any = None,
        thread_safe: bool = True,
        log_resolutions: bool = True,
    ) -> None:
        self._container = container
        self._resolved: Dict[Any, Any] = {}
        self._lock = threading.RLock() if thread_safe else nullcontext()
        self._logger = get_logger(__name__) if log_resolutions else None

    def __contains__(self, accessor: Any) -> bool:
        return self.has_resolved(accessor)

    def __len__(self) -> int:
        return len(self._resolved)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(container={type(self._container).__name__}, "
            f"resolved={len(self._resolved)})"
        )

    @property
    def container(self) -> Any:
        """The IoC container used for resolution, or None."""
        return self._container

    @container.setter
    def container(self, container: Any) -> None:
        self._container = container
        self._log(
            "facade.container_set",
            container=type(container).__name__ if container is not None else None,
        )

    def init(self, container: Any) -> "FacadeRegistry":
        """Set the container. Returns the registry for chaining."""
        self.container = container
        return self

    def reset(self) -> None:
        """Drop the container and every resolved instance."""
        with self._lock:
            self._container = None
            self._resolved.clear()
        self._log("facade.reset")

    def resolve(self, accessor: Any) -> Any:
        """
        Return the instance for ``accessor``, asking the container on a miss.

        Errors raised by the container propagate unchanged.

        Raises:
            ContainerUnavailableError: no usable container is set
        """
        with self._lock:
            if accessor in self._resolved:
                self._log("facade.cache_hit", accessor=accessor)
                return self._resolved[accessor]

            make = self._container_make(accessor)
            with create_span("facade.resolve", {"facade.accessor": str(accessor)}):
                instance = make(accessor)

            self._resolved[accessor] = instance

        self._log("facade.resolved", accessor=accessor, root=type(instance).__name__)
        return instance

    def has_resolved(self, accessor: Any) -> bool:
        return accessor in self._resolved

    def clear_resolved(self, accessor: Any) -> None:
        """Forget one resolved instance. No-op if absent."""
        with self._lock:
            removed = accessor in self._resolved
            self._resolved.pop(accessor, None)
        if removed:
            self._log("facade.cleared", accessor=accessor)

    def clear_all(self) -> None:
        """Forget every resolved instance."""
        with self._lock:
            count = len(self._resolved)
            self._resolved.clear()
        self._log("facade.cleared_all", count=count)

    def resolved_accessors(self) -> List[Any]:
        return list(self._resolved)

    def _container_make(self, accessor: Any) -> Callable[[Any], Any]:
        container = self._container
        if container is None:
            raise ContainerUnavailableError(
                f"Cannot resolve facade root for '{accessor}', no IoC container is set",
                accessor=accessor,
                context=ErrorContext.from_current_span(
                    operation="resolve",
                    component="registry",
                    accessor=str(accessor),
                ),
            )

        for method_name in ("make", "resolve"):
            method = getattr(container, method_name, None)
            if callable(method):
                return method

        raise ContainerUnavailableError(
            f"Cannot resolve facade root for '{accessor}', "
            f"{type(container).__name__} has no make() or resolve() method",
            accessor=accessor,
            context=ErrorContext.from_current_span(
                operation="resolve",
                component="registry",
                accessor=str(accessor),
                metadata={"container": type(container).__name__},
            ),
        )

    def _log(self, event: str, **fields: Any) -> None:
        if self._logger is not None:
            self._logger.debug(event, **fields)


def get_registry() -> FacadeRegistry:
    """Get or create the process-wide registry."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                settings = get_config().facades
                _registry = FacadeRegistry(
                    thread_safe=settings.thread_safe,
                    log_resolutions=settings.log_resolutions,
                )
    return _registry


def set_registry(registry: Optional[FacadeRegistry]) -> None:
    """Replace the process-wide registry. None recreates it on next use."""
    global _registry
    with _registry_lock:
        _registry = registry
