from __future__ import annotations

import logging
from operator import attrgetter
from types import ModuleType
from typing import TYPE_CHECKING, Any, TypeVar, overload

from appwire._internal.registry import ComponentRegistry
from appwire._internal.type_checks import (
    full_type_name,
    is_runtime_class,
    supports_instance_check,
)
from appwire.configuration import ComponentProducer, ConfigurationSource, as_configuration_source
from appwire.discovery import discover_configurations
from appwire.exceptions import (
    AppWireAmbiguousComponentError,
    AppWireAmbiguousDependencyError,
    AppWireComponentNotFoundError,
    AppWireComponentTypeMismatchError,
    AppWireDependencyTypeMismatchError,
    AppWireDuplicateComponentNameError,
    AppWireProducerInvocationError,
    AppWireUnresolvedDependencyError,
)
from appwire.settings import AppWireSettings

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Container:
    """Build every component of a set of configuration sources, then serve lookups.

    Construction is the whole build: sources are ordered by priority, their
    producers by priority within each source (ties keep input order), and
    each producer is invoked exactly once with parameters resolved by type
    from the components built before it. Any failure aborts construction.

    Each component is indexed under its base name, its declared type and its
    runtime type. Afterwards the container is read-only and safe to share
    between threads.

    Examples:
        .. code-block:: python

            @configuration(priority=0)
            class ServicesConfig:
                @component(name="svc")
                def service(self) -> Service:
                    return Service()


            @configuration(priority=1)
            class ClientsConfig:
                @component(name="client")
                def client(self, service: Service) -> Client:
                    return Client(service)


            container = Container(ServicesConfig, ClientsConfig)
            client = container.get_by_type(Client)

    """

    def __init__(
        self,
        *sources: ConfigurationSource | type[Any],
        settings: AppWireSettings | None = None,
    ) -> None:
        """Build all components declared by ``sources``.

        Args:
            sources: ``ConfigurationSource`` objects or classes decorated with
                ``@configuration``, in any order.
            settings: Container behavior switches. Read from the environment
                when omitted.

        Raises:
            AppWireInvalidConfigurationError: If an item is not a configuration.
            AppWireDuplicateComponentNameError: If two producers share a name, or a
                name equals the full type name of another component.
            AppWireUnresolvedDependencyError: If a parameter type has no
                component built before its producer.
            AppWireAmbiguousDependencyError: If a parameter type matches
                several components.
            AppWireDependencyTypeMismatchError: If type checks are enabled and
                the component found for a parameter is not an instance of its type.
            AppWireProducerInvocationError: If a producer raises.

        Components produced before a failure are dropped without cleanup;
        producers own any resources they opened on a failed build.

        """
        self._settings = settings if settings is not None else AppWireSettings()
        registry = ComponentRegistry(
            collapse_identical_candidates=self._settings.collapse_identical_candidates,
        )

        normalized_sources = [as_configuration_source(source) for source in sources]
        for source in sorted(normalized_sources, key=attrgetter("priority")):
            for producer in sorted(source.producers, key=attrgetter("priority")):
                self._build_component(registry, source, producer)

        registry.freeze()
        self._registry = registry
        logger.info(
            "Container built: source_count=%d component_count=%d",
            len(normalized_sources),
            len(registry),
        )

    @classmethod
    def from_package(
        cls,
        package: str | ModuleType,
        *,
        settings: AppWireSettings | None = None,
    ) -> Self:
        """Build a container from every ``@configuration`` class found in ``package``.

        Args:
            package: Dotted package name or imported package to scan.
            settings: Container behavior switches.

        """
        return cls(*discover_configurations(package), settings=settings)

    @property
    def settings(self) -> AppWireSettings:
        return self._settings

    @property
    def component_names(self) -> tuple[str, ...]:
        """Base names of all components, in build order."""
        return self._registry.base_names

    # region Lookup Methods
    @overload
    def get_by_name(self, name: str) -> Any: ...

    @overload
    def get_by_name(self, name: str, expected_type: type[T]) -> T: ...

    def get_by_name(self, name: str, expected_type: type[T] | None = None) -> Any:
        """Return the single component registered under ``name``.

        ``name`` may be a base name or a full type name
        (``module.QualifiedName``).

        Args:
            name: Registry key to look up.
            expected_type: Optional class the result must be an instance of.

        Raises:
            AppWireComponentNotFoundError: If nothing is registered under ``name``.
            AppWireAmbiguousComponentError: If several components are.
            AppWireComponentTypeMismatchError: If the result is not an
                ``expected_type`` instance.

        """
        candidates = self._registry.candidates(name)
        if not candidates:
            raise AppWireComponentNotFoundError(name)
        if len(candidates) > 1:
            raise AppWireAmbiguousComponentError(name, candidates=candidates)

        instance = candidates[0]
        if expected_type is not None:
            self._check_instance_type(name, instance, expected_type)
        return instance

    def get_by_type(self, component_type: type[T]) -> T:
        """Return the single component registered for ``component_type``.

        Matches components whose declared type or runtime type is
        ``component_type``. Subclasses are not considered.

        Args:
            component_type: Class to look up.

        Raises:
            AppWireComponentNotFoundError: If no component has this type.
            AppWireAmbiguousComponentError: If several components do.
            AppWireComponentTypeMismatchError: If type checks are enabled and
                the result is not a ``component_type`` instance.

        """
        if not is_runtime_class(component_type):
            msg = f"Component type must be a class, got {component_type!r}."
            raise TypeError(msg)

        key = full_type_name(component_type)
        if self._settings.check_lookup_types:
            return self.get_by_name(key, component_type)
        return self.get_by_name(key)

    # endregion Lookup Methods

    def _build_component(
        self,
        registry: ComponentRegistry,
        source: ConfigurationSource,
        producer: ComponentProducer,
    ) -> None:
        # Base names share one key space with type names.
        if producer.name in registry:
            raise AppWireDuplicateComponentNameError(producer.name, source=source.name)
        self._check_type_key_is_free(registry, source, producer, producer.provides)

        arguments = [
            self._resolve_dependency(registry, source, producer, dependency)
            for dependency in producer.dependencies
        ]

        logger.debug("Invoking producer '%s' of source '%s'", producer.name, source.name)
        try:
            instance = producer.factory(*arguments)
        except Exception as error:
            raise AppWireProducerInvocationError(
                producer=producer.name,
                source=source.name,
                cause=error,
            ) from error

        self._check_type_key_is_free(registry, source, producer, type(instance))
        registry.register(producer.name, instance, provides=producer.provides)

    def _check_type_key_is_free(
        self,
        registry: ComponentRegistry,
        source: ConfigurationSource,
        producer: ComponentProducer,
        component_type: type[Any],
    ) -> None:
        key = full_type_name(component_type)
        if key != producer.name and registry.has_base_name(key):
            raise AppWireDuplicateComponentNameError(key, source=source.name)

    def _resolve_dependency(
        self,
        registry: ComponentRegistry,
        source: ConfigurationSource,
        producer: ComponentProducer,
        dependency: type[Any],
    ) -> Any:
        key = full_type_name(dependency)
        candidates = registry.candidates(key)
        if not candidates:
            raise AppWireUnresolvedDependencyError(
                dependency=key,
                producer=producer.name,
                source=source.name,
            )
        if len(candidates) > 1:
            raise AppWireAmbiguousDependencyError(
                dependency=key,
                producer=producer.name,
                source=source.name,
                candidates=candidates,
            )

        instance = candidates[0]
        if (
            self._settings.check_lookup_types
            and supports_instance_check(dependency)
            and not isinstance(instance, dependency)
        ):
            raise AppWireDependencyTypeMismatchError(
                dependency=key,
                producer=producer.name,
                source=source.name,
                actual_type=type(instance),
            )
        return instance

    def _check_instance_type(self, key: str, instance: Any, expected_type: type[Any]) -> None:
        if not supports_instance_check(expected_type):
            return
        if not isinstance(instance, expected_type):
            raise AppWireComponentTypeMismatchError(
                key,
                expected_type=expected_type,
                actual_type=type(instance),
            )

    def __contains__(self, key: object) -> bool:
        if is_runtime_class(key):
            key = full_type_name(key)
        return key in self._registry

    def __repr__(self) -> str:
        return f"{type(self).__name__}(components={list(self.component_names)!r})"


__all__ = ["Container"]
