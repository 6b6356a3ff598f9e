"""
Booking API Client
Thin httpx wrapper used by every resource service: attaches the bearer token,
decodes JSON and turns failed responses into ApiError
"""

import logging
from typing import Any, Dict, Optional

import httpx

from campus_portal.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request to the booking API failed"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    def __repr__(self):
        return f"<ApiError(status={self.status_code}, message='{self.message}')>"


def create_http_client() -> httpx.AsyncClient:
    """Shared connection pool for the lifetime of the application"""
    return httpx.AsyncClient(
        base_url=settings.API_BASE_URL,
        timeout=settings.API_TIMEOUT_SECONDS,
        headers={"Content-Type": "application/json"},
    )


def error_message(response: httpx.Response) -> str:
    """
    Pick the message to show for a failed response

    The API reports failures as {"status": ..., "message": "..."}. Bodies that
    are not JSON fall back to the reason phrase.
    """
    fallback = f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or fallback

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


class ApiClient:
    """
    Client for the booking REST API

    One instance per page request, sharing the application's httpx client.
    The token is the signed-in user's API token, or None for public calls.
    """

    def __init__(self, http_client: httpx.AsyncClient, token: Optional[str] = None):
        self._client = http_client
        self.token = token

    @property
    def headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def with_token(self, token: Optional[str]) -> "ApiClient":
        return ApiClient(self._client, token=token)

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and return the decoded body

        Returns:
            Parsed JSON, or None for 204 No Content

        Raises:
            ApiError: On any non-2xx status or transport failure
        """
        logger.debug(f"API {method} {path}")

        try:
            response = await self._client.request(method, path, json=json, params=params, headers=self.headers)
        except httpx.TimeoutException as e:
            logger.warning(f"API {method} {path} timed out: {str(e)}")
            raise ApiError(503, "The booking service took too long to respond. Please try again.") from e
        except httpx.TransportError as e:
            logger.warning(f"API {method} {path} unreachable: {str(e)}")
            raise ApiError(503, "The booking service is unavailable. Please try again later.") from e

        if response.is_error:
            message = error_message(response)
            logger.warning(f"API {method} {path} - Status: {response.status_code} - {message}")
            raise ApiError(response.status_code, message)

        if response.status_code == 204 or not response.content:
            return None

        return response.json()

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("PATCH", path, params=params)

    async def delete(self, path: str) -> None:
        await self.request("DELETE", path)


def inline_error(error: ApiError) -> str:
    """
    Message to show next to a form or list

    An expired API token is not shown inline: it propagates so the
    application can end the session.
    """
    if error.is_unauthorized:
        raise error
    return error.message


def settled(result: Any, default: Any = None) -> Any:
    """
    Unwrap one result of asyncio.gather(..., return_exceptions=True)

    A failed API call yields `default`, so the other results still render.
    """
    if isinstance(result, ApiError):
        inline_error(result)
        logger.info(f"Rendering without failed API call: {result.message}")
        return default
    if isinstance(result, BaseException):
        raise result
    return result
