"""
Container contract consumed by facades.

Any object with a ``make(abstract, parameters=None)`` method qualifies;
``di.Container`` is the reference implementation. Containers that only
offer ``resolve(abstract)`` are accepted as well.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class IoC(Protocol):
    """IoC service container."""

    def make(self, abstract: Any, parameters: Optional[Sequence[Any]] = None) -> Any:
        """
        Resolve the registered abstract from the container.

        Raises:
            BindingError: whenever a binding is invalid
            BuildError: whenever a binding could not be built
        """
        ...
