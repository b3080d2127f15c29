# src/energy_tenders/collectors/ocds_client.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import Response, Session
from requests.exceptions import RequestException, Timeout

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
USER_AGENT = "energy-tenders/0.1 (+https://github.com/energy-tenders)"


class ApiRequestError(RuntimeError):
    """
    Expected failure of a single API call (timeout, network, HTTP status,
    body that is not a JSON object).
    """


@dataclass
class PageOutcome:
    """
    Result of one request: either a decoded payload, or the reason it failed.
    """

    url: str
    ok: bool
    payload: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, url: str, payload: Dict[str, Any]) -> "PageOutcome":
        return cls(url=url, ok=True, payload=payload)

    @classmethod
    def failure(cls, url: str, reason: str) -> "PageOutcome":
        return cls(url=url, ok=False, reason=reason)


class OcdsClient:
    """
    Minimal HTTP client for the OCDS notice APIs (Sell2Wales, Find a Tender,
    Contracts Finder).

    No retry: a failed call is reported to the caller, who decides whether to
    skip the request or stop paginating.
    """

    def __init__(self, session: Optional[Session] = None, timeout: int = DEFAULT_TIMEOUT) -> None:
        self.session: Session = session if session is not None else requests.Session()
        self.session.headers.update({"Accept": "application/json", "User-Agent": USER_AGENT})
        self.timeout = timeout

    def _request(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Sends a GET and returns the decoded JSON object.

        Raises ApiRequestError on any expected failure.
        """
        try:
            response: Response = self.session.get(
                url,
                params=params,
                timeout=self.timeout,
            )
        except Timeout as exc:
            raise ApiRequestError(f"Timeout calling {url}") from exc
        except RequestException as exc:
            raise ApiRequestError(f"Network error calling {url}: {exc}") from exc

        if not response.ok:
            logger.debug("HTTP %s body=%s", response.status_code, response.text[:500])
            raise ApiRequestError(f"HTTP {response.status_code} from {url}")

        try:
            data = response.json()
        except ValueError as exc:
            raise ApiRequestError(f"Non-JSON response from {url}") from exc

        if not isinstance(data, dict):
            raise ApiRequestError(f"Unexpected JSON payload from {url}: {type(data).__name__}")

        return data

    def fetch(self, url: str, params: Optional[Dict[str, Any]] = None) -> PageOutcome:
        """
        Same as _request, but folds expected failures into a PageOutcome.
        """
        try:
            payload = self._request(url, params)
        except ApiRequestError as exc:
            logger.debug("Request failed: %s", exc)
            return PageOutcome.failure(url, str(exc))
        return PageOutcome.success(url, payload)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "OcdsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
