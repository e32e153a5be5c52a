from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppWireSettings(BaseSettings):
    """Container behavior switches, read from ``APPWIRE_*`` environment variables.

    Examples:
        .. code-block:: python

            # APPWIRE_COLLAPSE_IDENTICAL_CANDIDATES=false
            container = Container(ServicesConfig, settings=AppWireSettings())

    """

    model_config = SettingsConfigDict(env_prefix="APPWIRE_", frozen=True)

    collapse_identical_candidates: bool = True
    """Treat a type key whose candidates are all the same object as unambiguous."""

    check_lookup_types: bool = True
    """Verify ``get_by_type`` results and injected parameters are instances of their type."""


__all__ = ["AppWireSettings"]
