from __future__ import annotations

import pytest

from appwire._internal.registry import ComponentRegistry
from appwire._internal.type_checks import full_type_name


class Base:
    pass


class Impl(Base):
    pass


def test_register_indexes_name_declared_and_runtime_type() -> None:
    registry = ComponentRegistry()
    instance = Impl()

    registry.register("impl", instance, provides=Base)

    assert registry.candidates("impl") == (instance,)
    assert registry.candidates(full_type_name(Base)) == (instance,)
    assert registry.candidates(full_type_name(Impl)) == (instance,)
    assert registry.base_names == ("impl",)
    assert len(registry) == 1


def test_coinciding_keys_receive_instance_once() -> None:
    registry = ComponentRegistry(collapse_identical_candidates=False)
    instance = Impl()

    registry.register("impl", instance, provides=Impl)

    assert registry.candidates(full_type_name(Impl)) == (instance,)


def test_type_keys_accumulate_candidates_in_registration_order() -> None:
    registry = ComponentRegistry()
    first, second = Impl(), Impl()

    registry.register("first", first, provides=Base)
    registry.register("second", second, provides=Base)

    assert registry.candidates(full_type_name(Base)) == (first, second)
    assert registry.has_base_name("first")
    assert not registry.has_base_name(full_type_name(Base))


def test_identical_candidates_collapse_only_when_enabled() -> None:
    shared = Impl()
    collapsing = ComponentRegistry(collapse_identical_candidates=True)
    strict = ComponentRegistry(collapse_identical_candidates=False)
    for registry in (collapsing, strict):
        registry.register("a", shared, provides=Base)
        registry.register("b", shared, provides=Base)

    assert collapsing.candidates(full_type_name(Base)) == (shared,)
    assert strict.candidates(full_type_name(Base)) == (shared, shared)


def test_frozen_registry_serves_reads_and_rejects_writes() -> None:
    registry = ComponentRegistry()
    instance = Impl()
    registry.register("impl", instance, provides=Base)

    registry.freeze()

    assert registry.is_frozen
    assert "impl" in registry
    assert registry.candidates("impl") == (instance,)
    assert registry.candidates("missing") == ()
    with pytest.raises(RuntimeError, match="frozen"):
        registry.register("other", Impl(), provides=Base)
