"""
Property-Based Tests for facade resolution invariants.

Each example builds its own container and registry, so the autouse
registry fixture is shared across examples without affecting them.
"""
import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from di import Container
from facades import Facade, FacadeRegistry
from tests.property.strategies import accessor_sets, accessor_strategy


class Root:
    pass


def _counting_container(accessors):
    container = Container()
    calls = {accessor: 0 for accessor in accessors}

    def factory_for(accessor):
        def factory():
            calls[accessor] += 1
            return Root()

        return factory

    for accessor in accessors:
        container.bind(accessor, factory_for(accessor))
    return container, calls


@pytest.mark.property
class TestResolutionInvariants:
    """Cache invariants over arbitrary accessor sets."""

    @given(accessor_sets)
    @settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_resolved_after_resolution(self, accessors):
        container, _ = _counting_container(accessors)
        registry = FacadeRegistry(container, log_resolutions=False)

        for accessor in accessors:
            assert registry.has_resolved(accessor) is False
            registry.resolve(accessor)
            assert registry.has_resolved(accessor) is True

    @given(accessor_sets, st.integers(min_value=2, max_value=5))
    @settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_container_called_once_per_accessor(self, accessors, repeats):
        container, calls = _counting_container(accessors)
        registry = FacadeRegistry(container, log_resolutions=False)

        for accessor in accessors:
            first = registry.resolve(accessor)
            for _ in range(repeats):
                assert registry.resolve(accessor) is first

        assert all(count == 1 for count in calls.values())

    @given(accessor_sets, st.data())
    @settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_clear_one_only_affects_that_accessor(self, accessors, data):
        container, calls = _counting_container(accessors)
        registry = FacadeRegistry(container, log_resolutions=False)
        for accessor in accessors:
            registry.resolve(accessor)

        cleared = data.draw(st.sampled_from(accessors))
        registry.clear_resolved(cleared)

        for accessor in accessors:
            assert registry.has_resolved(accessor) is (accessor != cleared)

        registry.resolve(cleared)
        assert calls[cleared] == 2

    @given(accessor_sets)
    @settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_clear_all_empties_cache(self, accessors):
        container, _ = _counting_container(accessors)
        registry = FacadeRegistry(container, log_resolutions=False)
        for accessor in accessors:
            registry.resolve(accessor)

        registry.clear_all()

        assert not any(registry.has_resolved(accessor) for accessor in accessors)
        assert len(registry) == 0

    @given(accessor_strategy)
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_facade_instances_share_root(self, accessor):
        container, _ = _counting_container([accessor])
        registry = FacadeRegistry(container, log_resolutions=False)

        class AnyFacade(Facade):
            default_accessor = accessor

        AnyFacade.use_registry(registry)

        assert AnyFacade().facade_root is AnyFacade().facade_root
