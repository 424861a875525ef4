# File: docsweep/engine.py
"""docsweep.engine: wiring of client, scheduler and per-file pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol

from docsweep.aggregator import SweepReport
from docsweep.classifier import inspect
from docsweep.client.models import Document, ListedChild
from docsweep.client.tree_client import TreeClient
from docsweep.config import SweepConfig
from docsweep.crawler.scheduler import FrontierScheduler, TreeLister
from docsweep.errors import FetchFailure, PublishFailure
from docsweep.events import EventKind, EventStream, log_event
from docsweep.logger import logger
from docsweep.transformer import build_payload

__all__ = ["FileOutcome", "Sweeper", "start_sweep"]


class DocumentStore(TreeLister, Protocol):
    async def fetch_source(self, path: str) -> Document: ...

    async def publish(self, path: str, payload: str) -> int: ...


class FileOutcome(str, Enum):
    SKIPPED = "skipped"
    FETCH_FAILED = "fetch_failed"
    BLANK = "blank"
    SUBSTANTIVE = "substantive"
    PUBLISHED = "published"
    PUBLISH_FAILED = "publish_failed"


class Sweeper:
    """Per-file unit of work: fetch, classify, republish substantive pages."""

    def __init__(
        self,
        client: DocumentStore,
        events: EventStream,
        *,
        extension: str = ".html",
        dry_run: bool = False,
    ) -> None:
        self.client = client
        self.events = events
        self.extension = extension.lower()
        self.dry_run = dry_run

    async def process_file(self, item: ListedChild) -> FileOutcome:
        """Run the whole pipeline for one listed file; never raises remote errors."""
        if not item.path.lower().endswith(self.extension):
            self.events.emit(EventKind.SKIPPED, item.path, reason="extension", ext=item.ext)
            return FileOutcome.SKIPPED

        try:
            document = await self.client.fetch_source(item.path)
        except FetchFailure as exc:
            self.events.emit(
                EventKind.FETCH_FAILED, item.path, error=exc.message, status=exc.status, reason=exc.reason
            )
            return FileOutcome.FETCH_FAILED

        result = inspect(document.view)
        if result.is_blank:
            self.events.emit(
                EventKind.BLANK,
                item.path,
                text=result.text,
                markup_length=result.markup_length,
                child_count=result.child_count,
                raw_text_length=result.raw_text_length,
            )
            return FileOutcome.BLANK

        self.events.emit(EventKind.SUBSTANTIVE, item.path, text_length=len(result.text))
        if self.dry_run:
            return FileOutcome.SUBSTANTIVE

        payload = build_payload(document.view)
        try:
            status = await self.client.publish(item.path, payload)
        except PublishFailure as exc:
            self.events.emit(EventKind.PUBLISH_FAILED, item.path, error=exc.message, status=exc.status)
            return FileOutcome.PUBLISH_FAILED
        self.events.emit(EventKind.PUBLISHED, item.path, status=status, size=len(payload))
        return FileOutcome.PUBLISHED


async def run_sweep(
    client: DocumentStore,
    config: SweepConfig,
    events: Optional[EventStream] = None,
) -> SweepReport:
    """Crawl ``config.root_path`` through *client* and return the report."""
    stream = events or EventStream()
    report = SweepReport(root_path=config.root_path, dry_run=config.dry_run)
    stream.subscribe(report.record)

    scheduler = FrontierScheduler(client, config.concurrency, events=stream, track_callbacks=True)
    sweeper = Sweeper(
        client,
        stream,
        extension=config.document_extension,
        dry_run=config.dry_run,
    )
    result = await scheduler.crawl(config.root_path, sweeper.process_file)
    report.files = result.paths
    return report


async def start_sweep(config: SweepConfig, events: Optional[EventStream] = None) -> SweepReport:
    """Entry point used by the CLI: open a TreeClient and run the sweep."""
    stream = events or EventStream()
    stream.subscribe(log_event)
    if not config.token.get_secret_value():
        logger.warning("No bearer token configured; requests will be anonymous")
    if config.dry_run:
        logger.info("Dry run: substantive pages will not be republished")
    async with TreeClient.from_config(config) as client:
        return await run_sweep(client, config, stream)
