"""HTTP client for published spreadsheet CSV exports."""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

import requests

from sheetgeo.common.constants import USER_AGENT
from sheetgeo.common.errors import HttpStatusError, NetworkError


@dataclass(frozen=True)
class TimeoutConfig:
    connect: float = 20.0
    read: float = 120.0


def dataset_url(base_url: str, identifier: str) -> str:
    """Return ``base_url`` with its ``gid`` query parameter set to ``identifier``."""
    parsed = urlparse(base_url)
    query = [(key, value) for key, value in parse_qsl(parsed.query, keep_blank_values=True) if key != "gid"]
    query.append(("gid", identifier))
    return urlunparse(parsed._replace(query=urlencode(query)))


class HttpClient:
    def __init__(self, *, timeout: TimeoutConfig | None = None) -> None:
        self.timeout = timeout or TimeoutConfig()
        self.session = requests.Session()

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _headers(self, headers: dict[str, str] | None) -> dict[str, str]:
        out = {"User-Agent": USER_AGENT, "Accept": "text/csv"}
        if headers:
            out.update(headers)
        return out

    def _raise_for_status(self, url: str, response: requests.Response) -> None:
        status = response.status_code
        if status >= 400:
            raise HttpStatusError(f"HTTP status {status} for {url}", status_code=status)

    def get_text(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: TimeoutConfig | None = None,
    ) -> str:
        req_timeout = timeout or self.timeout
        try:
            response = self.session.request(
                method="GET",
                url=url,
                params=params,
                headers=self._headers(headers),
                timeout=(req_timeout.connect, req_timeout.read),
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Request to {url} failed: {exc}") from exc

        self._raise_for_status(url, response)
        # Published exports are UTF-8 whatever the Content-Type claims.
        return response.content.decode("utf-8-sig", errors="replace")
