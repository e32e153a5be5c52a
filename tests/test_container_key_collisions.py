from __future__ import annotations

from typing import Any

import pytest

from appwire import (
    AppWireDependencyTypeMismatchError,
    AppWireDuplicateComponentNameError,
    AppWireSettings,
    ComponentProducer,
    ConfigurationSource,
    Container,
)
from appwire._internal.type_checks import full_type_name


class Foo:
    pass


class Bar:
    pass


class NeedsFoo:
    def __init__(self, foo: Foo) -> None:
        self.foo = foo


FOO_KEY = full_type_name(Foo)


def _source(*producers: ComponentProducer) -> ConfigurationSource:
    return ConfigurationSource(name="config", producers=producers)


def test_name_equal_to_existing_type_key_is_a_duplicate(
    invocations: list[str],
    settings: AppWireSettings,
) -> None:
    def make_bar() -> Bar:
        invocations.append("bar")
        return Bar()

    with pytest.raises(AppWireDuplicateComponentNameError) as exc_info:
        Container(
            _source(
                ComponentProducer(name="foo", factory=Foo),
                ComponentProducer(name=FOO_KEY, factory=make_bar, priority=1),
            ),
            settings=settings,
        )

    assert exc_info.value.name == FOO_KEY
    assert invocations == []


def test_declared_type_equal_to_existing_name_is_a_duplicate(settings: AppWireSettings) -> None:
    with pytest.raises(AppWireDuplicateComponentNameError) as exc_info:
        Container(
            _source(
                ComponentProducer(name=FOO_KEY, factory=Bar),
                ComponentProducer(name="foo", factory=Foo, priority=1),
            ),
            settings=settings,
        )

    assert exc_info.value.name == FOO_KEY


def test_runtime_type_equal_to_existing_name_is_a_duplicate(settings: AppWireSettings) -> None:
    with pytest.raises(AppWireDuplicateComponentNameError):
        Container(
            _source(
                ComponentProducer(name=FOO_KEY, factory=Bar),
                ComponentProducer(name="foo", factory=Foo, priority=1, provides=object),
            ),
            settings=settings,
        )


def test_name_may_equal_its_own_type_key(settings: AppWireSettings) -> None:
    container = Container(_source(ComponentProducer(name=FOO_KEY, factory=Foo)), settings=settings)

    assert container.get_by_name(FOO_KEY) is container.get_by_type(Foo)


def test_name_shaped_like_a_type_is_not_injected_as_that_type(
    settings: AppWireSettings,
) -> None:
    received: list[Any] = []

    def make_consumer(foo: Foo) -> NeedsFoo:
        received.append(foo)
        return NeedsFoo(foo)

    with pytest.raises(AppWireDependencyTypeMismatchError) as exc_info:
        Container(
            _source(
                ComponentProducer(name=FOO_KEY, factory=Bar),
                ComponentProducer(name="consumer", factory=make_consumer, priority=1),
            ),
            settings=settings,
        )

    assert exc_info.value.dependency == FOO_KEY
    assert exc_info.value.producer == "consumer"
    assert exc_info.value.actual_type is Bar
    assert received == []


def test_mistyped_declared_type_is_not_injected(settings: AppWireSettings) -> None:
    with pytest.raises(AppWireDependencyTypeMismatchError):
        Container(
            _source(
                ComponentProducer(name="not-a-foo", factory=Bar, provides=Foo),
                ComponentProducer(name="consumer", factory=NeedsFoo, priority=1),
            ),
            settings=settings,
        )


def test_injection_type_check_follows_settings() -> None:
    container = Container(
        _source(
            ComponentProducer(name="not-a-foo", factory=Bar, provides=Foo),
            ComponentProducer(name="consumer", factory=NeedsFoo, priority=1),
        ),
        settings=AppWireSettings(check_lookup_types=False),
    )

    assert isinstance(container.get_by_type(NeedsFoo).foo, Bar)
