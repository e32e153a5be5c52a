from __future__ import annotations

import importlib
import inspect
import pkgutil
from collections.abc import Iterator
from types import ModuleType
from typing import Any

from appwire.configuration import get_configuration_marker


def discover_configurations(package: str | ModuleType) -> list[type[Any]]:
    """Return every ``@configuration`` class defined in ``package`` and its submodules.

    Modules are imported while walking, so module-level code runs. Classes are
    collected from the module that defines them only, which keeps re-exports
    from being listed twice. Order follows the package walk, then class
    definition order within each module.

    The container never scans by itself; pass the result to ``Container``
    or use ``Container.from_package``.

    Args:
        package: Dotted package name or an imported package/module.

    Examples:
        .. code-block:: python

            container = Container(*discover_configurations("myapp.config"))

    """
    root = importlib.import_module(package) if isinstance(package, str) else package

    discovered: list[type[Any]] = []
    for module in _iter_modules(root):
        for _, candidate in vars(module).items():
            if (
                inspect.isclass(candidate)
                and candidate.__module__ == module.__name__
                and get_configuration_marker(candidate) is not None
            ):
                discovered.append(candidate)
    return discovered


def _iter_modules(root: ModuleType) -> Iterator[ModuleType]:
    yield root
    search_path = getattr(root, "__path__", None)
    if search_path is None:
        return
    for module_info in pkgutil.walk_packages(search_path, prefix=f"{root.__name__}."):
        yield importlib.import_module(module_info.name)


__all__ = ["discover_configurations"]
