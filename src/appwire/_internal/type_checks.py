from __future__ import annotations

import types
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility as a registry type key.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def full_type_name(cls: type[Any]) -> str:
    """Return the registry key for a class: its module and qualified name."""
    return f"{cls.__module__}.{cls.__qualname__}"


def supports_instance_check(cls: type[Any]) -> bool:
    """Return false for protocols that ``isinstance`` would reject."""
    if not getattr(cls, "_is_protocol", False):
        return True
    return bool(getattr(cls, "_is_runtime_protocol", False))


__all__ = ["full_type_name", "is_runtime_class", "supports_instance_check"]
