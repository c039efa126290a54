import logging
from typing import Any

import httpx

from domain.errors import DecodeError, NetworkError


TIMEOUT = 30.0


logger = logging.getLogger(__name__)


def http_client_factory(
    base_url: str = "",
    *,
    timeout: float = TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url,
        headers={
            "Accept": "application/json",
            "Content-Type": "application/json",
        },
        timeout=timeout,
        transport=transport,
    )


async def send(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    **kwargs: Any,
) -> httpx.Response:
    """Send one request. No retries.

    Any transport problem, unusable URL or non-2xx status becomes a
    `NetworkError`.
    """
    try:
        resp = await client.request(method, url, **kwargs)
        resp.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as err:
        logger.debug("%s %s failed: %r", method, url, err)
        raise NetworkError(f"{method} {url} failed: {err}") from err
    return resp


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    **kwargs: Any,
) -> Any:
    """As `send`, returning the decoded JSON body.

    A body that is not JSON becomes a `DecodeError`.
    """
    resp = await send(client, method, url, **kwargs)
    try:
        return resp.json()
    except ValueError as err:
        raise DecodeError(f"{method} {url} returned invalid JSON.") from err
