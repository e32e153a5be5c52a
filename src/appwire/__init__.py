from appwire.configuration import ComponentProducer, ConfigurationSource, component, configuration
from appwire.container import Container
from appwire.discovery import discover_configurations
from appwire.exceptions import (
    AppWireAmbiguousComponentError,
    AppWireAmbiguousDependencyError,
    AppWireComponentNotFoundError,
    AppWireComponentTypeMismatchError,
    AppWireDependencyResolutionError,
    AppWireDependencyTypeMismatchError,
    AppWireDuplicateComponentNameError,
    AppWireError,
    AppWireInvalidConfigurationError,
    AppWireProducerInvocationError,
    AppWireUnresolvedDependencyError,
)
from appwire.settings import AppWireSettings

__all__ = [
    "AppWireAmbiguousComponentError",
    "AppWireAmbiguousDependencyError",
    "AppWireComponentNotFoundError",
    "AppWireComponentTypeMismatchError",
    "AppWireDependencyResolutionError",
    "AppWireDependencyTypeMismatchError",
    "AppWireDuplicateComponentNameError",
    "AppWireError",
    "AppWireInvalidConfigurationError",
    "AppWireProducerInvocationError",
    "AppWireSettings",
    "AppWireUnresolvedDependencyError",
    "ComponentProducer",
    "ConfigurationSource",
    "Container",
    "component",
    "configuration",
    "discover_configurations",
]
