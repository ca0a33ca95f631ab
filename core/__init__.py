"""
IoC Facades - Core Module

Foundational pieces shared by the facade layer and the reference
container. Currently this is the unified error hierarchy.

Usage:
    from core import BindingError
    from observability import get_logger

    logger = get_logger(__name__)

    try:
        mailer = Mail.facade_root
    except BindingError as exc:
        logger.error("mailer.unavailable", **exc.to_dict())
        raise
"""

from core.errors import (
    AbstractInstantiationError,
    BindingError,
    BuildError,
    ContainerError,
    ContainerUnavailableError,
    ErrorContext,
    ErrorSeverity,
    FacadeKitError,
)

__all__ = [
    # Base
    "FacadeKitError",
    "ErrorContext",
    "ErrorSeverity",
    # Container errors
    "ContainerError",
    "BindingError",
    "BuildError",
    # Facade errors
    "ContainerUnavailableError",
    "AbstractInstantiationError",
]
