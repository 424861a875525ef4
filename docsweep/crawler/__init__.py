# docsweep/crawler/__init__.py
from docsweep.crawler.scheduler import CrawlResult, FrontierScheduler

__all__ = ["CrawlResult", "FrontierScheduler"]
