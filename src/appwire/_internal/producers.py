from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from inspect import Parameter
from typing import Any, get_type_hints

from appwire._internal.type_checks import is_runtime_class
from appwire.exceptions import AppWireInvalidConfigurationError

_MISSING_ANNOTATION: Any = object()
_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(slots=True)
class ProducerSignatureExtractor:
    """Infer the advertised type and parameter types of a producer factory.

    Factories may be plain functions, bound methods of a configuration
    instance, or classes (their ``__init__`` parameters are inspected and the
    class itself is the advertised type).
    """

    def extract_return_type(self, factory: Callable[..., Any], producer_name: str) -> type[Any]:
        """Return the class a factory advertises through its return annotation.

        Args:
            factory: Producer callable to inspect.
            producer_name: Component name used in error messages.

        """
        if inspect.isclass(factory):
            return factory

        annotations, annotation_error = self._resolved_type_hints(factory)
        return_annotation = annotations.get("return", _MISSING_ANNOTATION)
        if return_annotation is _MISSING_ANNOTATION:
            return_annotation = self._raw_return_annotation(factory)
        if return_annotation is _MISSING_ANNOTATION:
            msg = (
                f"Unable to infer return type for producer '{producer_name}'. "
                "Add a return type annotation or pass provides= explicitly."
            )
            self._raise_invalid_configuration_error(msg=msg, annotation_error=annotation_error)
        return self.validate_component_type(
            return_annotation,
            what=f"Return type of producer '{producer_name}'",
        )

    def extract_dependencies(
        self,
        factory: Callable[..., Any],
        producer_name: str,
    ) -> tuple[type[Any], ...]:
        """Return the classes of the factory's required positional parameters, in order.

        Args:
            factory: Producer callable to inspect.
            producer_name: Component name used in error messages.

        """
        parameters = self._producer_parameters(factory, producer_name)
        annotations, annotation_error = self._resolved_type_hints(factory)
        dependencies: list[type[Any]] = []

        for parameter in parameters:
            if not self._is_required_parameter(parameter):
                continue
            if parameter.kind not in _POSITIONAL_KINDS:
                msg = (
                    f"Keyword-only parameter '{parameter.name}' of producer "
                    f"'{producer_name}' cannot be injected."
                )
                raise AppWireInvalidConfigurationError(msg)

            annotation = annotations.get(parameter.name, _MISSING_ANNOTATION)
            if annotation is _MISSING_ANNOTATION and not isinstance(parameter.annotation, str):
                annotation = parameter.annotation
            if annotation is _MISSING_ANNOTATION or annotation is Parameter.empty:
                msg = (
                    f"Unable to infer dependency for required parameter '{parameter.name}' "
                    f"in producer '{producer_name}'. Add a type annotation or pass "
                    "dependencies= explicitly."
                )
                self._raise_invalid_configuration_error(msg=msg, annotation_error=annotation_error)

            dependencies.append(
                self.validate_component_type(
                    annotation,
                    what=f"Parameter '{parameter.name}' of producer '{producer_name}'",
                ),
            )

        return tuple(dependencies)

    def validate_explicit_dependencies(
        self,
        factory: Callable[..., Any],
        producer_name: str,
        dependencies: Sequence[Any],
    ) -> tuple[type[Any], ...]:
        """Check explicit dependency classes against the factory signature.

        Args:
            factory: Producer callable the dependencies are passed to positionally.
            producer_name: Component name used in error messages.
            dependencies: Explicit dependency classes, in positional order.

        """
        validated = tuple(
            self.validate_component_type(
                dependency,
                what=f"Explicit dependency #{index} of producer '{producer_name}'",
            )
            for index, dependency in enumerate(dependencies)
        )

        try:
            signature = inspect.signature(factory)
        except (TypeError, ValueError):
            return validated
        try:
            signature.bind(*validated)
        except TypeError as error:
            msg = (
                f"Explicit dependencies for producer '{producer_name}' do not match its "
                f"signature {signature}: {error}"
            )
            raise AppWireInvalidConfigurationError(msg) from error
        return validated

    def validate_component_type(self, candidate: Any, *, what: str) -> type[Any]:
        """Return ``candidate`` when it is a class usable as a registry key."""
        if not is_runtime_class(candidate) or candidate is type(None):
            msg = f"{what} must be a class, got {candidate!r}."
            raise AppWireInvalidConfigurationError(msg)
        return candidate

    def _producer_parameters(
        self,
        factory: Callable[..., Any],
        producer_name: str,
    ) -> tuple[Parameter, ...]:
        try:
            return tuple(inspect.signature(factory).parameters.values())
        except (TypeError, ValueError) as error:
            msg = (
                f"Unable to inspect the signature of producer '{producer_name}'. "
                "Pass dependencies= explicitly."
            )
            raise AppWireInvalidConfigurationError(msg) from error

    def _resolved_type_hints(
        self,
        factory: Callable[..., Any],
    ) -> tuple[dict[str, Any], Exception | None]:
        target = factory.__init__ if inspect.isclass(factory) else factory
        try:
            return get_type_hints(target), None
        except (AttributeError, NameError, TypeError) as error:
            return {}, error

    def _raw_return_annotation(self, factory: Callable[..., Any]) -> Any:
        try:
            raw_return_annotation = inspect.signature(factory).return_annotation
        except (TypeError, ValueError):
            return _MISSING_ANNOTATION
        if raw_return_annotation is inspect.Signature.empty or isinstance(
            raw_return_annotation,
            str,
        ):
            return _MISSING_ANNOTATION
        return raw_return_annotation

    def _is_required_parameter(self, parameter: Parameter) -> bool:
        return (
            parameter.default is Parameter.empty
            and parameter.kind is not Parameter.VAR_POSITIONAL
            and parameter.kind is not Parameter.VAR_KEYWORD
        )

    def _raise_invalid_configuration_error(
        self,
        *,
        msg: str,
        annotation_error: Exception | None,
    ) -> None:
        if annotation_error is None:
            raise AppWireInvalidConfigurationError(msg)
        full_msg = f"{msg} Original annotation error: {annotation_error}"
        raise AppWireInvalidConfigurationError(full_msg) from annotation_error


__all__ = ["ProducerSignatureExtractor"]
