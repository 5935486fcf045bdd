"""
Utility functions for the Arseeding SDK.
"""
import base64
import logging
import time
import urllib.parse
from typing import Any, Type, TypeVar

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError

from .exceptions import APIError, DecodeError, NetworkError
from .models import APIErrorRes

logger = logging.getLogger(__name__)

T = TypeVar('T')


def b64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded base64url, the Arweave wire encoding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(data: str) -> bytes:
    """
    Decode unpadded (or padded) base64url.

    Raises:
        ValueError: If the input is not valid base64url
    """
    if not isinstance(data, str):
        raise ValueError(f"Expected str, got {type(data).__name__}")
    padding = "=" * (-len(data) % 4)
    try:
        return base64.urlsafe_b64decode(data + padding)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid base64url data: {e}")


def get_nonce() -> int:
    """Return the current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def validate_service_url(name: str, url: str) -> str:
    """
    Validate a service URL and strip any trailing slash.

    Args:
        name: Parameter name, used in the error message
        url: URL to validate

    Returns:
        The URL without trailing slash

    Raises:
        ValueError: If the URL is not https (localhost is exempt)
    """
    parsed = urllib.parse.urlparse(url)
    host = parsed.netloc.split(':')[0] if parsed.netloc else ''
    is_local = host in ('localhost', '127.0.0.1')
    if parsed.scheme != 'https' and not (is_local and parsed.scheme == 'http'):
        raise ValueError(f"{name} must use https:// for security (got: {parsed.scheme}://)")
    return url.rstrip('/')


def send_request(session: requests.Session, method: str, url: str, **kwargs) -> requests.Response:
    """
    Send an HTTP request, mapping transport failures to NetworkError.

    No retries are performed.
    """
    try:
        return session.request(method, url, **kwargs)
    except requests.RequestException as e:
        logger.error(f"{method} {url} failed: {e}")
        raise NetworkError(f"{method} {url} failed: {str(e)}") from e


def decode_response(response: requests.Response, model: Type[T]) -> T:
    """
    Decode a service response into ``model``.

    Any status other than 200 is treated as a failure and the service's
    standard error envelope (``{"error": "..."}``) is surfaced verbatim.

    Args:
        response: HTTP response from the service
        model: pydantic model or other type understood by ``TypeAdapter``

    Returns:
        The decoded value

    Raises:
        APIError: If the service returned a non-success status
        DecodeError: If the body is not valid JSON for ``model``
    """
    if response.status_code != 200:
        raise APIError(_error_message(response), status_code=response.status_code)

    try:
        body: Any = response.json()
    except ValueError as e:
        logger.error(f"Invalid JSON from {response.url}: {e}")
        raise DecodeError(f"Invalid JSON response: {str(e)}") from e

    try:
        if isinstance(model, type) and issubclass(model, BaseModel):
            return model.model_validate(body)
        return TypeAdapter(model).validate_python(body)
    except ValidationError as e:
        logger.error(f"Unexpected response schema from {response.url}: {e}")
        raise DecodeError(f"Unexpected response schema: {str(e)}") from e


def _error_message(response: requests.Response) -> str:
    try:
        return APIErrorRes.model_validate(response.json()).error
    except (ValueError, ValidationError):
        return response.text or f"HTTP {response.status_code}"
