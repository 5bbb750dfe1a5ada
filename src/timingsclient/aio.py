#!/usr/bin/env python
"""Async helper functions."""
import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from aiohttp import ClientSession
from async_timeout import timeout as async_timeout

log = logging.getLogger(__name__)


# FetchResponse {{{1
@dataclass(frozen=True)
class FetchResponse:
    """A fetched (or synthesized) response.

    The body is read before the connection is released, so a
    ``FetchResponse`` outlives the aiohttp session that produced it.

    """

    status: int
    status_text: str = ""
    body: bytes = b""
    url: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def text(self) -> str:
        return self.body.decode("utf-8")

    async def json(self) -> Any:
        """Parse the body as json.

        Raises:
            json.JSONDecodeError: if the body isn't valid json. Synthesized
                responses have an empty body, so this raises for them too.

        """
        return json.loads(self.body)

    @classmethod
    def not_found(cls, message: str) -> "FetchResponse":
        return cls(status=404, status_text=message)


# fetch {{{1
async def fetch(session: ClientSession, url: str, timeout: Optional[float] = None) -> FetchResponse:
    """GET ``url``.

    Non-2xx statuses are returned, not raised. Network errors propagate.

    Args:
        session (ClientSession): the session to use.
        url (str): the url to request.
        timeout (float, optional): timeout after this many seconds. ``None``
            leaves it to the session. Defaults to ``None``.

    Returns:
        FetchResponse: the response.

    """
    log.debug("GET %s", url)
    async with async_timeout(timeout):
        async with session.get(url) as resp:
            log.debug("Status %s", resp.status)
            body = await resp.read()
            return FetchResponse(status=resp.status, status_text=resp.reason or "", body=body, url=str(resp.url))


async def fetch_json(session: ClientSession, url: str, timeout: Optional[float] = None) -> Any:
    """GET ``url`` and parse the json body.

    Args:
        session (ClientSession): the session to use.
        url (str): the url to request.
        timeout (float, optional): see ``fetch``.

    Returns:
        object: the parsed json, or ``None`` if the status wasn't 2xx.

    Raises:
        json.JSONDecodeError: on a 2xx response with a malformed body.

    """
    response = await fetch(session, url, timeout=timeout)
    if not response.ok:
        log.debug("Bad status %s for %s", response.status, url)
        return None
    return await response.json()


def _read_file(path: str) -> bytes:
    with open(path, "rb") as fh:
        return fh.read()


async def fetch_local(path: str) -> FetchResponse:
    """Read a local data file.

    Raises:
        OSError: if ``path`` can't be read.

    """
    log.debug("Reading %s", path)
    body = await asyncio.to_thread(_read_file, path)
    return FetchResponse(status=200, status_text="OK", body=body, url=path)
