from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from appwire._internal.type_checks import full_type_name


class ComponentRegistry:
    """Index component instances by base name, declared type and runtime type.

    The registry is write-once: components are appended while the container
    is built, then ``freeze`` swaps the index for a read-only mapping of
    tuples that lookups read without locking.

    Base names are unique. Type keys may collect several components and are
    reported as ambiguous by ``candidates``, unless every candidate is the
    same object and ``collapse_identical_candidates`` is enabled.
    """

    def __init__(self, *, collapse_identical_candidates: bool = True) -> None:
        self._collapse_identical_candidates = collapse_identical_candidates
        self._components_by_key: dict[str, list[Any]] = {}
        self._frozen_components_by_key: Mapping[str, tuple[Any, ...]] | None = None
        self._base_names: list[str] = []
        self._base_name_set: set[str] = set()

    @property
    def base_names(self) -> tuple[str, ...]:
        """Base component names in registration order."""
        return tuple(self._base_names)

    @property
    def is_frozen(self) -> bool:
        return self._frozen_components_by_key is not None

    def has_base_name(self, name: str) -> bool:
        return name in self._base_name_set

    def register(self, name: str, instance: Any, *, provides: type[Any]) -> None:
        """Append ``instance`` under its base name, declared type and runtime type.

        Keys that coincide for one registration receive the instance once.

        Args:
            name: Unique base component name.
            instance: Component produced for ``name``.
            provides: Declared component type.

        """
        if self.is_frozen:
            msg = "Component registry is frozen."
            raise RuntimeError(msg)

        keys = dict.fromkeys(
            (name, full_type_name(provides), full_type_name(type(instance))),
        )
        for key in keys:
            self._components_by_key.setdefault(key, []).append(instance)
        self._base_names.append(name)
        self._base_name_set.add(name)

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen_components_by_key = MappingProxyType(
            {key: tuple(components) for key, components in self._components_by_key.items()},
        )
        self._components_by_key = {}

    def candidates(self, key: str) -> tuple[Any, ...]:
        """Return the components registered under ``key``.

        An empty tuple means the key is unknown; more than one element means
        the key is ambiguous.
        """
        if self._frozen_components_by_key is not None:
            components = self._frozen_components_by_key.get(key, ())
        else:
            components = tuple(self._components_by_key.get(key, ()))

        if (
            self._collapse_identical_candidates
            and len(components) > 1
            and all(component is components[0] for component in components)
        ):
            return components[:1]
        return components

    def __contains__(self, key: object) -> bool:
        if self._frozen_components_by_key is not None:
            return key in self._frozen_components_by_key
        return key in self._components_by_key

    def __len__(self) -> int:
        return len(self._base_names)


__all__ = ["ComponentRegistry"]
