import logging
import socket
from typing import Any

import httpx

from services.config import KEY_ENV, URL_ENV, FunctionsConfig
from services.errors import MissingConfig, NetworkUnreachable, ServerError

logger = logging.getLogger("summarizer.functions")

# Text fragments the resolver puts in its errors on the platforms we run on.
_UNRESOLVED_MARKERS = (
    "Name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "Temporary failure in name resolution",
    "ERR_NAME_NOT_RESOLVED",
)


def require_config(config: FunctionsConfig) -> None:
    """Raise MissingConfig for the first absent setting (URL before Key)."""
    if not config.base_url:
        raise MissingConfig("URL", URL_ENV)
    if not config.anon_key:
        raise MissingConfig("Key", KEY_ENV)


def _is_unresolved(exc: BaseException) -> bool:
    """Walk the exception chain looking for a name-resolution failure."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return True
        text = str(current)
        if any(marker in text for marker in _UNRESOLVED_MARKERS):
            return True
        current = current.__cause__ or current.__context__
    return False


async def post_function(
    config: FunctionsConfig,
    name: str,
    payload: dict[str, Any],
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """POST a JSON payload to a remote function and return the 2xx response.

    Transport failures become NetworkUnreachable and non-2xx statuses become
    ServerError carrying the body text verbatim. No timeout is applied.
    """
    url = config.function_url(name)
    headers = {
        "Authorization": f"Bearer {config.anon_key}",
        "Content-Type": "application/json",
    }
    logger.info("POST %s", url)

    try:
        async with httpx.AsyncClient(transport=transport, timeout=None) as client:
            response = await client.post(url, headers=headers, json=payload)
    except (httpx.TransportError, httpx.InvalidURL) as exc:
        unresolved = _is_unresolved(exc)
        logger.warning(
            "Request to %s failed (%s): %s",
            url,
            "unresolved host" if unresolved else "transport",
            exc,
        )
        raise NetworkUnreachable(str(exc), unresolved=unresolved) from exc

    logger.info("Response from %s: %s", name, response.status_code)
    if not response.is_success:
        body = response.text
        logger.error("Server error from %s: %s %s", name, response.status_code, body)
        raise ServerError(response.status_code, body)
    return response
