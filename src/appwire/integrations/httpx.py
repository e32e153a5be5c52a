from __future__ import annotations

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict

from appwire.configuration import component, configuration


class HttpClientSettings(BaseSettings):
    """Options for the shared HTTP client, read from ``APPWIRE_HTTP_*`` variables."""

    model_config = SettingsConfigDict(env_prefix="APPWIRE_HTTP_", frozen=True)

    base_url: str = ""
    timeout: float = 5.0
    follow_redirects: bool = False
    headers: dict[str, str] = {}


@configuration(priority=100, name="web")
class WebConfiguration:
    """Provide one pre-configured ``httpx.Client``.

    Consumers look it up with ``container.get_by_type(httpx.Client)``. The
    container does not close the client; its owner does.
    """

    @component(name="httpClient")
    def http_client(self) -> httpx.Client:
        settings = HttpClientSettings()
        return httpx.Client(
            base_url=settings.base_url,
            timeout=settings.timeout,
            follow_redirects=settings.follow_redirects,
            headers=settings.headers,
        )


__all__ = ["HttpClientSettings", "WebConfiguration"]
