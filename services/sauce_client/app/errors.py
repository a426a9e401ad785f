# services/sauce_client/app/errors.py
import httpx
import logging
from typing import Any, Optional

logger = logging.getLogger("Piquante_Core").getChild("SauceClient").getChild("Errors")

# Used when a failed response carries no recognizable message field
UNKNOWN_ERROR_MESSAGE = "Unknown error"
MALFORMED_RESPONSE_MESSAGE = "Malformed response from Sauce API"


class SauceClientError(Exception):
    """Base class for every failure surfaced by the sauce client."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(SauceClientError):
    """The request could not be completed (connection refused, timeout, ...)."""


class ServerError(SauceClientError):
    """The API answered but rejected the request, or answered with an unusable body."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _message_from_body(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if isinstance(message, str) and message:
        return message
    error = body.get("error")
    if isinstance(error, dict):
        nested = error.get("message")
        if isinstance(nested, str) and nested:
            return nested
    elif isinstance(error, str) and error:
        return error
    return None


def extract_error_message(response: httpx.Response) -> str:
    """Pulls the server-supplied message out of a failed response's JSON envelope."""
    try:
        body = response.json()
    except ValueError:
        logger.debug(f"Error response (HTTP {response.status_code}) has no JSON body: {response.text[:200]!r}")
        return UNKNOWN_ERROR_MESSAGE
    return _message_from_body(body) or UNKNOWN_ERROR_MESSAGE


def translate_http_error(exc: httpx.HTTPError) -> SauceClientError:
    """Maps an httpx failure onto the client's error taxonomy."""
    if isinstance(exc, httpx.HTTPStatusError):
        return ServerError(extract_error_message(exc.response), status_code=exc.response.status_code)
    if isinstance(exc, httpx.RequestError):
        return TransportError(f"Could not reach Sauce API: {exc}" if str(exc) else "Could not reach Sauce API")
    return SauceClientError(str(exc) or UNKNOWN_ERROR_MESSAGE)
