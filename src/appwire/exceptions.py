from __future__ import annotations

from typing import Any


class AppWireError(Exception):
    """Represent a base class for all AppWire-specific failures.

    Catch this type when you want to handle any build or lookup failure
    without matching each concrete exception class individually.
    """


class AppWireInvalidConfigurationError(AppWireError):
    """Signal a configuration source or producer that lacks required metadata.

    Raised while building a ``Container`` when an item is neither a
    ``ConfigurationSource`` nor a class decorated with ``@configuration``,
    and while declaring producers whose name is empty or whose factory has no
    usable return/parameter annotations.

    Typical fixes include decorating the class with ``@configuration``,
    giving every ``@component`` a non-empty name, and annotating producer
    parameters with concrete classes (or passing ``dependencies=``).
    """

    def __init__(self, message: str, *, source: Any = None) -> None:
        super().__init__(message)
        self.source = source


class AppWireDuplicateComponentNameError(AppWireError):
    """Signal two producers claiming the same base component name.

    Raised during the build before the second producer runs, so neither it
    nor any later producer is invoked. Base names also may not coincide with
    the full type name of another component, in either order.
    """

    def __init__(self, name: str, *, source: str) -> None:
        super().__init__(
            f"Component name '{name}' declared in source '{source}' is already registered.",
        )
        self.name = name
        self.source = source


class AppWireDependencyResolutionError(AppWireError):
    """Base class for producer parameters that cannot be matched to one component."""

    def __init__(self, message: str, *, dependency: str, producer: str, source: str) -> None:
        super().__init__(message)
        self.dependency = dependency
        self.producer = producer
        self.source = source


class AppWireUnresolvedDependencyError(AppWireDependencyResolutionError):
    """Signal a producer parameter type with no component built so far.

    Parameters only see components produced earlier in the build order.
    Typical fix is lowering the priority of the providing producer or source.
    """

    def __init__(self, *, dependency: str, producer: str, source: str) -> None:
        super().__init__(
            f"No component of type '{dependency}' is available for producer "
            f"'{producer}' in source '{source}'.",
            dependency=dependency,
            producer=producer,
            source=source,
        )


class AppWireAmbiguousDependencyError(AppWireDependencyResolutionError):
    """Signal a producer parameter type matched by several components."""

    def __init__(
        self,
        *,
        dependency: str,
        producer: str,
        source: str,
        candidates: tuple[Any, ...],
    ) -> None:
        super().__init__(
            f"{len(candidates)} components of type '{dependency}' match a parameter of "
            f"producer '{producer}' in source '{source}'.",
            dependency=dependency,
            producer=producer,
            source=source,
        )
        self.candidates = candidates


class AppWireDependencyTypeMismatchError(AppWireDependencyResolutionError):
    """Signal a component registered under a parameter type that is not an instance of it.

    Happens when a producer declares ``provides=`` a type its factory does not
    actually return.
    """

    def __init__(
        self,
        *,
        dependency: str,
        producer: str,
        source: str,
        actual_type: type[Any],
    ) -> None:
        super().__init__(
            f"Component registered as '{dependency}' for producer '{producer}' in source "
            f"'{source}' is a '{actual_type.__qualname__}'.",
            dependency=dependency,
            producer=producer,
            source=source,
        )
        self.actual_type = actual_type


class AppWireProducerInvocationError(AppWireError):
    """Signal that a producer body raised while building its component.

    The original exception is chained as ``__cause__`` and kept on ``cause``.
    """

    def __init__(self, *, producer: str, source: str, cause: BaseException) -> None:
        super().__init__(
            f"Producer '{producer}' in source '{source}' failed: {cause!r}",
        )
        self.producer = producer
        self.source = source
        self.cause = cause


class AppWireComponentNotFoundError(AppWireError):
    """Signal a lookup key with no registry entry."""

    def __init__(self, key: str) -> None:
        super().__init__(f"No component is registered under '{key}'.")
        self.key = key


class AppWireAmbiguousComponentError(AppWireError):
    """Signal a lookup key registered for more than one component.

    Only type keys can become ambiguous. Look the component up by its base
    name instead.
    """

    def __init__(self, key: str, *, candidates: tuple[Any, ...]) -> None:
        super().__init__(f"{len(candidates)} components are registered under '{key}'.")
        self.key = key
        self.candidates = candidates


class AppWireComponentTypeMismatchError(AppWireError):
    """Signal a lookup result that is not an instance of the requested type."""

    def __init__(self, key: str, *, expected_type: type[Any], actual_type: type[Any]) -> None:
        super().__init__(
            f"Component '{key}' is a '{actual_type.__qualname__}', "
            f"expected '{expected_type.__qualname__}'.",
        )
        self.key = key
        self.expected_type = expected_type
        self.actual_type = actual_type
