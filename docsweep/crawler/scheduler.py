# === FILE: docsweep/crawler/scheduler.py ===
"""
Frontier scheduler: bounded-concurrency expansion of a remote folder tree.

The frontier is a stack of folder paths waiting to be listed. Up to
``concurrency`` listings run at once as asyncio tasks; every finished listing
pushes its sub-folders, schedules more work and re-checks for completion. All
of that happens in loop callbacks, so "frontier empty and nothing in flight"
is observed atomically and the crawl cannot finish early.

Files are handed to ``on_file`` as separate tasks that do not count toward the
concurrency cap. By default :meth:`FrontierScheduler.crawl` waits for them
before returning; with ``track_callbacks=False`` it returns as soon as the
folder traversal is done and :meth:`FrontierScheduler.drain` waits for the
rest.
"""
from __future__ import annotations

import asyncio
import inspect
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterator, List, Optional, Protocol, Set, Tuple, Union

from docsweep.client.models import ListedChild
from docsweep.config import normalize_path
from docsweep.errors import ListFailure
from docsweep.events import EventKind, EventStream
from docsweep.logger import logger

__all__ = ("CrawlResult", "FrontierScheduler", "TreeLister", "DEFAULT_CONCURRENCY")

DEFAULT_CONCURRENCY = 50

OnFile = Callable[[ListedChild], Union[Awaitable[Any], Any]]


class TreeLister(Protocol):
    async def list_children(self, path: str) -> List[ListedChild]: ...


@dataclass(slots=True, frozen=True)
class CrawlResult:
    """Everything a finished crawl discovered."""

    files: Tuple[ListedChild, ...]
    folders: Tuple[str, ...] = ()
    list_failures: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[ListedChild]:
        return iter(self.files)

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]


class FrontierScheduler:
    """Stack-based folder expansion with a cap on concurrent listings."""

    def __init__(
        self,
        client: TreeLister,
        concurrency: int = DEFAULT_CONCURRENCY,
        *,
        events: Optional[EventStream] = None,
        track_callbacks: bool = True,
    ) -> None:
        if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
            raise ValueError("concurrency must be a positive integer")
        self.client = client
        self.concurrency = concurrency
        self.events = events or EventStream()
        self.track_callbacks = track_callbacks
        self.logger = logger
        self.peak_in_flight = 0
        self._running = False
        self._on_file: Optional[OnFile] = None
        self._done: Optional[asyncio.Future[None]] = None
        self._frontier: List[str] = []
        self._in_flight = 0
        self._seen_folders: Set[str] = set()
        self._seen_files: Set[str] = set()
        self._files: List[ListedChild] = []
        self._expanded: List[str] = []
        self._failed: List[str] = []
        self._expansions: Set[asyncio.Task[None]] = set()
        self._callbacks: Set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------ state

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def frontier_size(self) -> int:
        return len(self._frontier)

    @property
    def pending_callbacks(self) -> int:
        return len(self._callbacks)

    # ------------------------------------------------------------------- run

    async def crawl(self, root_path: str, on_file: Optional[OnFile] = None) -> CrawlResult:
        """Expand every folder under *root_path* once and report every file once."""
        if self._running:
            raise RuntimeError("crawl already running on this scheduler")
        self._running = True
        self._reset(on_file)
        start = time.monotonic()
        self._done = asyncio.get_running_loop().create_future()
        root = normalize_path(root_path)
        self._seen_folders.add(root)
        self._frontier.append(root)
        self.logger.info("Starting crawl of %s (concurrency %d)", root, self.concurrency)
        try:
            self._schedule()
            self._check_done()
            await self._done
            if self.track_callbacks:
                await self.drain()
        except asyncio.CancelledError:
            self._frontier.clear()
            for task in self._expansions | self._callbacks:
                task.cancel()
            raise
        finally:
            self._running = False

        result = CrawlResult(
            files=tuple(self._files),
            folders=tuple(self._expanded),
            list_failures=tuple(self._failed),
        )
        self.events.emit(
            EventKind.CRAWL_COMPLETE,
            root,
            files=len(result.files),
            folders=len(result.folders),
            list_failures=len(result.list_failures),
            seconds=round(time.monotonic() - start, 3),
        )
        return result

    async def drain(self) -> None:
        """Wait until every file callback launched so far has finished."""
        while self._callbacks:
            await asyncio.gather(*list(self._callbacks), return_exceptions=True)

    # -------------------------------------------------------------- internals

    def _reset(self, on_file: Optional[OnFile]) -> None:
        self._on_file = on_file
        self._frontier.clear()
        self._in_flight = 0
        self.peak_in_flight = 0
        self._seen_folders.clear()
        self._seen_files.clear()
        self._files.clear()
        self._expanded.clear()
        self._failed.clear()

    def _schedule(self) -> None:
        while self._in_flight < self.concurrency and self._frontier:
            path = self._frontier.pop()
            self._in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self._in_flight)
            task = asyncio.create_task(self._expand(path))
            self._expansions.add(task)
            task.add_done_callback(self._expansion_done)

    def _expansion_done(self, task: asyncio.Task[None]) -> None:
        self._expansions.discard(task)
        self._in_flight -= 1
        self._schedule()
        self._check_done()

    def _check_done(self) -> None:
        if self._in_flight == 0 and not self._frontier and self._done and not self._done.done():
            self._done.set_result(None)

    async def _expand(self, path: str) -> None:
        self._expanded.append(path)
        try:
            children = await self.client.list_children(path)
        except ListFailure as exc:
            self._failed.append(path)
            self.events.emit(EventKind.LIST_FAILED, path, error=exc.message, status=exc.status)
            return
        except Exception as exc:
            self.logger.exception("Unexpected error listing %s", path)
            self._failed.append(path)
            self.events.emit(EventKind.LIST_FAILED, path, error=repr(exc), status=None)
            return

        files = folders = 0
        for child in children:
            if child.is_file:
                if child.path in self._seen_files:
                    continue
                self._seen_files.add(child.path)
                self._files.append(child)
                files += 1
                if self._on_file is not None:
                    self._launch_callback(self._on_file, child)
            elif child.path not in self._seen_folders:
                self._seen_folders.add(child.path)
                self._frontier.append(child.path)
                folders += 1
        self.events.emit(EventKind.FOLDER_EXPANDED, path, files=files, folders=folders)

    def _launch_callback(self, on_file: OnFile, child: ListedChild) -> None:
        task = asyncio.create_task(self._run_callback(on_file, child))
        self._callbacks.add(task)
        task.add_done_callback(self._callbacks.discard)

    async def _run_callback(self, on_file: OnFile, child: ListedChild) -> None:
        try:
            outcome = on_file(child)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:
            self.logger.debug("Callback for %s raised", child.path, exc_info=True)
            self.events.emit(EventKind.CALLBACK_FAILED, child.path, error=repr(exc))
