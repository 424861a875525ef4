# File: tests/conftest.py
from __future__ import annotations

import asyncio
from typing import Callable, Dict, Iterable, List, Optional, Union

import pytest

from docsweep.client.models import Document, ListedChild
from docsweep.config import SweepConfig
from docsweep.errors import FetchFailure, ListFailure, PublishFailure
from docsweep.events import EventRecorder, EventStream

Delay = Union[float, Callable[[str], float]]

SUBSTANTIVE_HTML = "<body><header></header><main><div><p>Hello world, this is a page</p></div></main><footer></footer></body>"
BLANK_HTML = "<body><header></header><main><div></div></main><footer></footer></body>"


class FakeTreeClient:
    """In-memory stand-in for TreeClient that records every call.

    *tree* maps a folder path to its listing, in the JSON shape of the API.
    """

    def __init__(
        self,
        tree: Dict[str, List[dict]],
        sources: Optional[Dict[str, str]] = None,
        *,
        delay: Delay = 0.0,
        fail_list: Iterable[str] = (),
        fail_fetch: Iterable[str] = (),
        fail_publish: Iterable[str] = (),
    ) -> None:
        self.tree = tree
        self.sources = sources or {}
        self.delay = delay
        self.fail_list = set(fail_list)
        self.fail_fetch = set(fail_fetch)
        self.fail_publish = set(fail_publish)
        self.list_calls: List[str] = []
        self.fetch_calls: List[str] = []
        self.published: List[tuple[str, str]] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    def _delay_for(self, path: str) -> float:
        return self.delay(path) if callable(self.delay) else self.delay

    async def list_children(self, path: str) -> List[ListedChild]:
        self.list_calls.append(path)
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delay_for(path))
            if path in self.fail_list:
                raise ListFailure(path, "HTTP 500", 500)
            return [ListedChild.from_json(entry) for entry in self.tree.get(path, [])]
        finally:
            self.in_flight -= 1

    async def fetch_source(self, path: str) -> Document:
        self.fetch_calls.append(path)
        await asyncio.sleep(0)
        if path in self.fail_fetch or path not in self.sources:
            raise FetchFailure(path, "HTTP 404", 404)
        return Document(path=path, text=self.sources[path])

    async def publish(self, path: str, payload: str) -> int:
        await asyncio.sleep(0)
        if path in self.fail_publish:
            raise PublishFailure(path, "HTTP 403", 403)
        self.published.append((path, payload))
        return 201


def folder(path: str) -> dict:
    return {"path": path, "name": path.rsplit("/", 1)[-1]}


def file(path: str) -> dict:
    name, _, ext = path.rsplit("/", 1)[-1].partition(".")
    return {"path": path, "name": name, "ext": ext or "html", "lastModified": 1700000000000}


def build_tree(root: str, depth: int, breadth: int, files_per_folder: int) -> tuple[Dict[str, List[dict]], set[str], set[str]]:
    """Regular tree; returns (listing map, folder paths, file paths)."""
    tree: Dict[str, List[dict]] = {}
    folders: set[str] = set()
    files: set[str] = set()

    def grow(path: str, level: int) -> None:
        folders.add(path)
        entries: List[dict] = []
        for i in range(files_per_folder):
            child = f"{path}/doc{i}.html"
            files.add(child)
            entries.append(file(child))
        if level < depth:
            for i in range(breadth):
                sub = f"{path}/f{i}"
                entries.append(folder(sub))
                grow(sub, level + 1)
        tree[path] = entries

    grow(root, 0)
    return tree, folders, files


@pytest.fixture()
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture()
def events(recorder: EventRecorder) -> EventStream:
    return EventStream([recorder])


@pytest.fixture()
def basic_config() -> SweepConfig:
    """A valid SweepConfig that never needs the network."""
    return SweepConfig(
        root_path="/org/site",
        base_url="http://example.com",
        token="test-token",
        concurrency=4,
        timeout=2.0,
        user_agent="TestAgent/1.0",
    )
