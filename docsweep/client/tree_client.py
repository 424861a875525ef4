# docsweep/client/tree_client.py
"""
TreeClient: the three calls DocSweep makes against the content API.

    GET  <base>/list<path>    -> JSON array of {path, ext?}
    GET  <base>/source<path>  -> raw markup
    POST <base>/source<path>  -> multipart field ``data`` (text/html)

No retries: any transport error, timeout or non-2xx status is raised as the
matching :mod:`docsweep.errors` failure.
"""
from __future__ import annotations

import asyncio
import posixpath
from typing import List, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout, FormData

from docsweep.client.models import Document, ListedChild
from docsweep.config import SweepConfig, normalize_path
from docsweep.errors import FetchFailure, ListFailure, PublishFailure, UndecodableSource
from docsweep.logger import logger

__all__ = ("TreeClient",)


class TreeClient:
    """Async client for the list/source endpoints, used as a context manager."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        user_agent: str = "DocSweepBot/1.0",
        referer: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {token}",
            "User-Agent": user_agent,
            "Accept": "*/*",
        }
        if referer:
            self.headers["Referer"] = referer
        self.session = session
        self._owns_session = session is None
        self.logger = logger

    @classmethod
    def from_config(cls, config: SweepConfig) -> TreeClient:
        return cls(
            config.api_base,
            config.token.get_secret_value(),
            user_agent=config.user_agent,
            referer=config.referer,
            timeout=config.timeout,
        )

    async def __aenter__(self) -> TreeClient:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _url(self, endpoint: str, path: str) -> str:
        return f"{self.base_url}/{endpoint}{normalize_path(path)}"

    def _session(self) -> ClientSession:
        if not self.session:
            raise RuntimeError("Session not initialized")
        return self.session

    async def list_children(self, path: str) -> List[ListedChild]:
        """Enumerate the direct children of the folder at *path*."""
        url = self._url("list", path)
        try:
            async with self._session().get(url, headers=self.headers) as resp:
                if resp.status >= 300:
                    raise ListFailure(path, f"HTTP {resp.status}", resp.status)
                payload = await resp.json(content_type=None)
        except (ClientError, asyncio.TimeoutError) as exc:
            raise ListFailure(path, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            self.logger.debug("Bad listing payload for %s: %s", path, exc)
            raise ListFailure(path, f"invalid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise ListFailure(path, f"expected a JSON array, got {type(payload).__name__}")
        children: List[ListedChild] = []
        for item in payload:
            if not isinstance(item, dict):
                self.logger.warning("Ignoring non-object entry in listing of %s: %r", path, item)
                continue
            try:
                children.append(ListedChild.from_json(item))
            except ValueError as exc:
                self.logger.warning("Ignoring malformed entry in listing of %s: %s", path, exc)
        return children

    async def fetch_source(self, path: str) -> Document:
        """Retrieve the raw markup of the document at *path*.

        The body is decoded strictly with the declared charset (UTF-8 when
        none is given); bytes that do not decode raise
        :class:`UndecodableSource` so the page is never rewritten with
        replacement characters.
        """
        url = self._url("source", path)
        try:
            async with self._session().get(url, headers=self.headers) as resp:
                if resp.status >= 300:
                    raise FetchFailure(path, f"HTTP {resp.status}", resp.status)
                raw = await resp.read()
                charset = resp.charset or "utf-8"
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchFailure(path, str(exc) or type(exc).__name__) from exc
        try:
            text = raw.decode(charset)
        except (UnicodeDecodeError, LookupError) as exc:
            raise UndecodableSource(path, f"not valid {charset}: {exc}") from exc
        return Document(path=path, text=text)

    async def publish(self, path: str, payload: str) -> int:
        """Replace the stored document at *path* with *payload*; return the HTTP status."""
        url = self._url("source", path)
        form = FormData()
        form.add_field(
            "data",
            payload.encode("utf-8"),
            content_type="text/html",
            filename=posixpath.basename(path) or "index.html",
        )
        try:
            async with self._session().post(url, data=form, headers=self.headers) as resp:
                if resp.status >= 300:
                    raise PublishFailure(path, f"HTTP {resp.status}", resp.status)
                return resp.status
        except (ClientError, asyncio.TimeoutError) as exc:
            raise PublishFailure(path, str(exc) or type(exc).__name__) from exc
