from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, NamedTuple, TypeVar, overload

from appwire._internal.producers import ProducerSignatureExtractor
from appwire.exceptions import AppWireInvalidConfigurationError

C = TypeVar("C", bound=type[Any])
F = TypeVar("F", bound=Callable[..., Any])

CONFIGURATION_MARKER_ATTR = "__appwire_configuration__"
COMPONENT_MARKER_ATTR = "__appwire_component__"

_SIGNATURE_EXTRACTOR = ProducerSignatureExtractor()


class ConfigurationMarker(NamedTuple):
    """Metadata attached to a class by ``@configuration``."""

    priority: int
    name: str | None


class ComponentMarker(NamedTuple):
    """Metadata attached to a method by ``@component``."""

    name: str
    priority: int
    provides: Any
    dependencies: Sequence[Any] | Literal["infer"]


@dataclass(frozen=True, kw_only=True)
class ComponentProducer:
    """Describe one named factory that builds a single component.

    ``provides`` is the advertised type the component is indexed under, in
    addition to its base ``name`` and its runtime type. ``dependencies`` are
    the classes passed positionally to ``factory``; each one is looked up by
    type among the components built before this producer.

    Both are inferred from the factory annotations when left as ``"infer"``.

    Examples:
        .. code-block:: python

            def make_client(settings: Settings) -> Client:
                return Client(settings.url)


            producer = ComponentProducer(name="client", factory=make_client, priority=1)

    """

    name: str
    """Base name of the component. Unique across a container build."""
    factory: Callable[..., Any]
    """Callable invoked once with the resolved dependencies."""
    priority: int = 0
    """Order of execution within the owning source; lower runs first."""
    provides: Any = "infer"
    """Advertised component type."""
    dependencies: Any = "infer"
    """Ordered parameter types required by ``factory``."""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            msg = f"Component producer name must be a non-empty string, got {self.name!r}."
            raise AppWireInvalidConfigurationError(msg)
        if not callable(self.factory):
            msg = f"Factory of producer '{self.name}' is not callable: {self.factory!r}."
            raise AppWireInvalidConfigurationError(msg)
        _validate_priority(self.priority, owner=f"producer '{self.name}'")

        if isinstance(self.provides, str) and self.provides == "infer":
            provides = _SIGNATURE_EXTRACTOR.extract_return_type(self.factory, self.name)
        else:
            provides = _SIGNATURE_EXTRACTOR.validate_component_type(
                self.provides,
                what=f"Declared type of producer '{self.name}'",
            )
        if isinstance(self.dependencies, str) and self.dependencies == "infer":
            dependencies = _SIGNATURE_EXTRACTOR.extract_dependencies(self.factory, self.name)
        else:
            dependencies = _SIGNATURE_EXTRACTOR.validate_explicit_dependencies(
                self.factory,
                self.name,
                self.dependencies,
            )
        object.__setattr__(self, "provides", provides)
        object.__setattr__(self, "dependencies", dependencies)


@dataclass(frozen=True, kw_only=True)
class ConfigurationSource:
    """A named, prioritized group of component producers.

    Sources are ordered by ``priority`` (lower first) when a container is
    built; producers keep their declaration order between equal priorities.
    """

    name: str
    priority: int = 0
    producers: Sequence[ComponentProducer] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            msg = f"Configuration source name must be a non-empty string, got {self.name!r}."
            raise AppWireInvalidConfigurationError(msg, source=self.name)
        _validate_priority(self.priority, owner=f"configuration source '{self.name}'")
        producers = tuple(self.producers)
        for producer in producers:
            if not isinstance(producer, ComponentProducer):
                msg = (
                    f"Configuration source '{self.name}' declares {producer!r}, "
                    "which is not a ComponentProducer."
                )
                raise AppWireInvalidConfigurationError(msg, source=self.name)
        object.__setattr__(self, "producers", producers)

    @classmethod
    def from_class(cls, configuration_class: type[Any]) -> ConfigurationSource:
        """Build a source from a class decorated with ``@configuration``.

        The class is instantiated without arguments and each of its own
        ``@component`` methods becomes a producer bound to that instance, in
        class-body order.

        Args:
            configuration_class: Decorated configuration class.

        Raises:
            AppWireInvalidConfigurationError: If the class is not decorated or
                cannot be instantiated without arguments.

        """
        marker = get_configuration_marker(configuration_class)
        if marker is None:
            msg = f"Given class is not a configuration: {configuration_class!r}."
            raise AppWireInvalidConfigurationError(msg, source=configuration_class)

        try:
            instance = configuration_class()
        except Exception as error:
            msg = (
                f"Configuration class '{configuration_class.__qualname__}' could not be "
                f"instantiated without arguments: {error!r}"
            )
            raise AppWireInvalidConfigurationError(msg, source=configuration_class) from error

        producers: list[ComponentProducer] = []
        for attribute_name, member in vars(configuration_class).items():
            component_marker = get_component_marker(member)
            if component_marker is None:
                continue
            producers.append(
                ComponentProducer(
                    name=component_marker.name,
                    factory=getattr(instance, attribute_name),
                    priority=component_marker.priority,
                    provides=component_marker.provides,
                    dependencies=component_marker.dependencies,
                ),
            )

        return cls(
            name=marker.name or configuration_class.__qualname__,
            priority=marker.priority,
            producers=producers,
        )


@overload
def configuration(
    configuration_class: C,
    *,
    priority: int = 0,
    name: str | None = None,
) -> C: ...


@overload
def configuration(
    configuration_class: None = None,
    *,
    priority: int = 0,
    name: str | None = None,
) -> Callable[[C], C]: ...


def configuration(
    configuration_class: C | None = None,
    *,
    priority: int = 0,
    name: str | None = None,
) -> C | Callable[[C], C]:
    """Mark a class as a configuration source.

    Works with and without arguments. The class itself is left untouched
    apart from the attached marker.

    Args:
        configuration_class: Class to mark, or ``None`` for decorator form.
        priority: Order of the source within a build; lower runs first.
        name: Source name used in error messages. Defaults to the class
            qualified name.

    Examples:
        .. code-block:: python

            @configuration(priority=1)
            class ClientsConfig:
                @component(name="client")
                def client(self, service: Service) -> Client:
                    return Client(service)

    """
    _validate_priority(priority, owner="@configuration")

    def decorator(decorated_class: C) -> C:
        setattr(decorated_class, CONFIGURATION_MARKER_ATTR, ConfigurationMarker(priority, name))
        return decorated_class

    if configuration_class is None:
        return decorator
    return decorator(configuration_class)


def component(
    *,
    name: str,
    priority: int = 0,
    provides: Any = "infer",
    dependencies: Sequence[Any] | Literal["infer"] = "infer",
) -> Callable[[F], F]:
    """Mark a method of a configuration class as a component producer.

    Args:
        name: Base component name, unique across the container.
        priority: Order within the configuration class; lower runs first.
        provides: Advertised type, or ``"infer"`` to use the return annotation.
        dependencies: Parameter classes in positional order, or ``"infer"``
            to read the parameter annotations.

    """
    marker = ComponentMarker(name, priority, provides, dependencies)

    def decorator(method: F) -> F:
        setattr(getattr(method, "__func__", method), COMPONENT_MARKER_ATTR, marker)
        return method

    return decorator


def get_configuration_marker(candidate: object) -> ConfigurationMarker | None:
    """Return the marker declared directly on ``candidate``, ignoring base classes."""
    if not isinstance(candidate, type):
        return None
    return vars(candidate).get(CONFIGURATION_MARKER_ATTR)


def get_component_marker(member: object) -> ComponentMarker | None:
    function = getattr(member, "__func__", member)
    return getattr(function, COMPONENT_MARKER_ATTR, None)


def as_configuration_source(candidate: object) -> ConfigurationSource:
    """Normalize a source or a decorated class into a ``ConfigurationSource``."""
    if isinstance(candidate, ConfigurationSource):
        return candidate
    if isinstance(candidate, type):
        return ConfigurationSource.from_class(candidate)
    msg = f"Given object is not a configuration: {candidate!r}."
    raise AppWireInvalidConfigurationError(msg, source=candidate)


def _validate_priority(priority: object, *, owner: str) -> None:
    if isinstance(priority, bool) or not isinstance(priority, int):
        msg = f"Priority of {owner} must be an integer, got {priority!r}."
        raise AppWireInvalidConfigurationError(msg)


__all__ = [
    "ComponentMarker",
    "ComponentProducer",
    "ConfigurationMarker",
    "ConfigurationSource",
    "as_configuration_source",
    "component",
    "configuration",
    "get_component_marker",
    "get_configuration_marker",
]
