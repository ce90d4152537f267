"""
HTTP Client - Timeout-bounded HTTP requests for nodes.

All HTTP calls MUST use timeouts (sync-Celery requirement).
Nodes describe a call as an OperationRequest and hand it to
HttpClient.send(), which performs it through a requests.Session
and raises HttpApiError for transport failures and non-2xx replies.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import requests
from pydantic import BaseModel, ConfigDict, Field
from requests.exceptions import Timeout, RequestException

from .errors import NodeApiError


logger = logging.getLogger(__name__)

# Default timeout in seconds (REQUIRED for sync-Celery)
DEFAULT_TIMEOUT = 30


class NodeTimeoutError(NodeApiError):
    """Raised when an HTTP request times out."""

    def __init__(self, message: str, timeout: float, url: str):
        super().__init__(message)
        self.timeout = timeout
        self.url = url


class HttpApiError(NodeApiError):
    """Error from HTTP request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        url: Optional[str] = None,
        method: Optional[str] = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)
        self.url = url
        self.method = method


def tolerate_trailing_slash(base_url: str) -> str:
    """Strip trailing slashes so '{base}/path' never doubles them."""
    return (base_url or "").rstrip("/")


class OperationRequest(BaseModel):
    """
    A single API call, fully described before it is sent.

    Request adapters build these from node parameters; keeping them
    as plain values makes the URL/query/body assembly testable
    without a transport.
    """
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    method: str = Field(..., description="HTTP method")
    url: str = Field(..., description="Fully-qualified request URL")
    params: Optional[Dict[str, Any]] = Field(None, description="Query parameters")
    headers: Dict[str, str] = Field(default_factory=dict)
    json_body: Optional[Any] = Field(None, alias="json", description="JSON body")
    data: Optional[Union[str, bytes, Dict[str, Any]]] = Field(
        None, description="Raw or form-encoded body"
    )
    files: Optional[Dict[str, Any]] = Field(None, description="Multipart files")


class HttpResponse:
    """
    Wrapper for HTTP response with convenient accessors.
    """

    def __init__(self, response: requests.Response):
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        """Case-insensitive response headers."""
        return self._response.headers

    @property
    def text(self) -> str:
        return self._response.text

    @property
    def content(self) -> bytes:
        return self._response.content

    def json(self) -> Any:
        """Parse response as JSON."""
        return self._response.json()

    def body(self) -> Any:
        """
        Decoded response body.

        JSON when the body parses as JSON, the raw text otherwise
        (e.g. XML), and {"success": True} for empty replies such as
        the 201/204 answers of trigger and lifecycle endpoints.
        """
        if self.status_code == 204 or not self.content.strip():
            return {"success": True}
        try:
            return self.json()
        except ValueError:
            return self.text

    @property
    def ok(self) -> bool:
        """True if status code is 2xx."""
        return 200 <= self.status_code < 300

    def raise_for_status(self) -> None:
        """Raise HttpApiError if status code indicates error."""
        if not self.ok:
            raise HttpApiError(
                message=f"HTTP {self.status_code}: {self._response.reason}",
                status_code=self.status_code,
                response_body=self.text[:1000] if self.text else None,
                url=str(self._response.url),
                method=self._response.request.method if self._response.request else None,
            )


class HttpClient:
    """
    HTTP client with timeout enforcement and credential injection.

    SYNC-CELERY SAFE: All requests have explicit timeouts.

    Usage:
        client = HttpClient(auth=("user", "token"))
        response = client.send(OperationRequest(method="GET", url="https://ci/api/xml"))
        data = response.body()
    """

    def __init__(
        self,
        base_url: str = "",
        default_headers: Optional[Dict[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        auth: Optional[Tuple[str, str]] = None,
        verify: bool = True,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL for relative endpoints
            default_headers: Headers to include in all requests
            timeout: Default timeout in seconds (REQUIRED)
            auth: Basic auth tuple (username, password)
            verify: Verify TLS certificates
            session: Session to send through (a fresh one if omitted)
        """
        self.base_url = tolerate_trailing_slash(base_url)
        self.timeout = timeout
        self.auth = auth
        self.verify = verify
        self.headers: Dict[str, str] = dict(default_headers or {})
        self._session = session or requests.Session()

    def with_auth(
        self,
        auth: Optional[Tuple[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> "HttpClient":
        """Copy of this client sharing the session, with credentials applied."""
        return HttpClient(
            base_url=self.base_url,
            default_headers={**self.headers, **(headers or {})},
            timeout=self.timeout,
            auth=auth or self.auth,
            verify=self.verify,
            session=self._session,
        )

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        data: Optional[Union[Dict[str, Any], str, bytes]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> HttpResponse:
        """
        Make HTTP request with timeout enforcement.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, etc.)
            endpoint: URL endpoint (appended to base_url)
            params: Query parameters
            json: JSON body (auto-serialized)
            data: Form data or raw body
            headers: Additional headers (merged with defaults)
            timeout: Override default timeout
            **kwargs: Additional arguments to Session.request

        Returns:
            HttpResponse wrapper, whatever its status code

        Raises:
            NodeTimeoutError: If request times out
            HttpApiError: If the connection fails
        """
        url = f"{self.base_url}{endpoint}" if self.base_url else endpoint
        request_headers = {**self.headers, **(headers or {})}
        request_timeout = timeout or self.timeout

        logger.debug("%s %s params=%s", method.upper(), url, params)

        try:
            response = self._session.request(
                method=method.upper(),
                url=url,
                params=params,
                json=json,
                data=data,
                headers=request_headers,
                auth=self.auth,
                timeout=request_timeout,  # REQUIRED for sync-Celery
                verify=self.verify,
                **kwargs,
            )
            return HttpResponse(response)

        except Timeout as e:
            raise NodeTimeoutError(
                message=f"Request timed out after {request_timeout}s",
                timeout=request_timeout,
                url=url,
            ) from e

        except RequestException as e:
            raise HttpApiError(
                message=f"Request failed: {e}",
                url=url,
                method=method,
            ) from e

    def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> HttpResponse:
        """Make GET request."""
        return self.request("GET", endpoint, params=params, **kwargs)

    def send(self, operation: OperationRequest) -> HttpResponse:
        """
        Perform a described request and fail on non-2xx.

        Raises:
            NodeTimeoutError: If request times out
            HttpApiError: On connection failure or non-2xx status
        """
        extra: Dict[str, Any] = {}
        if operation.files is not None:
            extra["files"] = operation.files

        response = self.request(
            operation.method,
            operation.url,
            params=operation.params,
            json=operation.json_body,
            data=operation.data,
            headers=operation.headers,
            **extra,
        )
        response.raise_for_status()
        return response


__all__ = [
    "DEFAULT_TIMEOUT",
    "HttpApiError",
    "HttpClient",
    "HttpResponse",
    "NodeTimeoutError",
    "OperationRequest",
    "tolerate_trailing_slash",
]
