"""
HTTP client for the HeyTeam portal API

Wraps httpx.AsyncClient with the session headers, status-code mapping and
the connectivity probe that runs when a request cannot complete.
"""

import logging
import time
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from . import config
from .errors import ApiError, NetworkError, NotFoundError
from .session import Session

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

MASKED_HEADERS = {"authorization": "Bearer ***masked***", "cookie": "***masked***"}


class ConnectivityResult(BaseModel):
    """Outcome of probing a well-known public endpoint"""

    success: bool
    duration_ms: int
    status_code: Optional[int] = None
    error: Optional[str] = None
    message: str


def mask_headers(headers: dict[str, str]) -> dict[str, str]:
    """Copy of headers safe to write to logs"""
    return {k: MASKED_HEADERS.get(k.lower(), v) for k, v in headers.items()}


def extract_error_message(response: httpx.Response, default: str = "Request failed") -> str:
    """Pull the backend's message/error field out of an error response"""
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or default

    if isinstance(data, dict):
        return data.get("message") or data.get("error") or default
    if isinstance(data, str) and data:
        return data
    return default


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    """Validate a response payload, raising ApiError when it has the wrong shape"""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        logger.error(f"❌ Unexpected {model.__name__} payload: {e}")
        raise ApiError("Unexpected response from server") from e


def parse_models(model: type[ModelT], data: Any) -> list[ModelT]:
    """Validate a JSON list of payloads"""
    if not isinstance(data, list):
        logger.error(f"❌ Expected a list of {model.__name__}, got {type(data).__name__}")
        raise ApiError("Unexpected response from server")
    return [parse_model(model, item) for item in data]


def classify_transport_error(error: httpx.TransportError) -> str:
    """Short human label for a transport failure"""
    if isinstance(error, httpx.TimeoutException):
        return "Timeout Error"
    if isinstance(error, httpx.ConnectError):
        return "Connection Error"
    if isinstance(error, httpx.NetworkError):
        return "Network Error"
    return "Request Error"


class ApiClient:
    """Async client for the portal REST API"""

    def __init__(
        self,
        session: Optional[Session] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        connectivity_url: Optional[str] = None,
    ):
        self.session = session or Session()
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.connectivity_url = connectivity_url or config.CONNECTIVITY_TEST_URL
        self._transport = transport
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else config.REQUEST_TIMEOUT,
            transport=transport,
            follow_redirects=True,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, params: Optional[dict] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Optional[dict] = None) -> Any:
        return await self.request("POST", path, body)

    async def patch(self, path: str, body: Optional[dict] = None) -> Any:
        return await self.request("PATCH", path, body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def request(
        self, method: str, path: str, body: Optional[dict] = None, params: Optional[dict] = None
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Returns:
            Decoded JSON, or None for 204 No Content

        Raises:
            NotFoundError: backend answered 404
            ApiError: backend answered any other 4xx/5xx
            NetworkError: the request could not complete
        """
        headers = self.session.auth_headers()
        url = f"{self.base_url}{path}"
        logger.debug(
            f"🌐 {method} {url} headers={mask_headers(headers)} has_body={body is not None}"
        )

        try:
            response = await self._client.request(
                method, path, json=body, params=params, headers=headers
            )
        except httpx.TransportError as e:
            await self._raise_network_error(method, url, e)

        logger.debug(f"🌐 {method} {url} -> {response.status_code}")

        if response.status_code == 404:
            message = extract_error_message(response, "Not found")
            logger.warning(f"⚠️ {method} {url} not found: {message}")
            raise NotFoundError(message)

        if response.status_code >= 400:
            message = extract_error_message(response)
            logger.error(f"❌ {method} {url} failed with HTTP {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"❌ {method} {url} returned a non-JSON body")
            raise ApiError("Unexpected response from server", status_code=response.status_code) from e

    async def check_connectivity(self) -> ConnectivityResult:
        """Probe a public endpoint to tell a dead backend apart from a dead connection"""
        started = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=config.CONNECTIVITY_TIMEOUT, transport=self._transport
            ) as client:
                response = await client.get(self.connectivity_url)
        except httpx.HTTPError as e:
            duration = int((time.monotonic() - started) * 1000)
            logger.error(f"❌ Connectivity test failed after {duration}ms: {e}")
            return ConnectivityResult(
                success=False,
                duration_ms=duration,
                error=str(e) or type(e).__name__,
                message="Internet connection test failed",
            )

        duration = int((time.monotonic() - started) * 1000)
        success = response.status_code < 400
        logger.info(f"🔎 Connectivity test -> HTTP {response.status_code} in {duration}ms")
        return ConnectivityResult(
            success=success,
            duration_ms=duration,
            status_code=response.status_code,
            message="Internet connection is working" if success else "Internet connection test failed",
        )

    async def _raise_network_error(self, method: str, url: str, error: httpx.TransportError):
        error_type = classify_transport_error(error)
        if error_type == "Timeout Error":
            diagnosis = f"Request to {url} timed out."
        else:
            diagnosis = f"Request to {url} failed: {error or error_type}"

        connectivity = await self.check_connectivity()
        if connectivity.success:
            diagnosis += (
                f"\n\n[Connectivity Test: PASSED] Internet connection is working "
                f"({connectivity.duration_ms}ms). The problem is specific to {self.base_url}."
            )
        else:
            diagnosis += (
                f"\n\n[Connectivity Test: FAILED] Internet connection test also failed "
                f"({connectivity.duration_ms}ms). This suggests a general network problem."
            )

        logger.error(f"❌ {error_type} on {method} {url}: {diagnosis}")
        raise NetworkError(error_type, error_type=error_type, diagnosis=diagnosis) from error
