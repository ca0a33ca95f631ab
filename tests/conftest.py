"""
IoC Facades - Test Configuration

Pytest fixtures and configuration for all tests.
"""
import pytest

from di import Container
from facades import Facade, FacadeRegistry, set_registry


@pytest.fixture
def container() -> Container:
    """Fresh reference container."""
    return Container()


@pytest.fixture(autouse=True)
def facade_registry():
    """
    Give every test its own process-wide registry.

    The registry is torn down the same way an application would: flush
    the cached instances and unset the container.
    """
    registry = FacadeRegistry()
    set_registry(registry)
    yield registry
    Facade.ioc = None
    Facade.clear_resolved_instances()
    set_registry(None)


@pytest.fixture
def ioc(container, facade_registry) -> Container:
    """Reference container wired into the facades."""
    Facade.ioc = container
    yield container
    container.flush()


# Markers
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "property: marks property-based tests using Hypothesis")
    config.addinivalue_line("markers", "threading: marks tests that spawn threads")
