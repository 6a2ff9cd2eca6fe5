"""
Paginator - Fetch Workflow

Drives the fetch loop from the configured base URL until the API stops
returning a next cursor:

    fetch page (with retry) -> save records -> follow Link rel="next" -> pause

Each page is saved as soon as it is fetched, so pages stored before a fatal
failure are kept. Exhausting the retry budget on any page aborts the run;
nothing retries at a higher level.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..coreutils.config import FetchConfig
from ..coreutils.retry import RetryExhaustedError, execute_with_retry
from ..extract.events_api import EventsAPIClient
from ..extract.models import Page
from ..load.local_storage import LocalEventStore

logger = logging.getLogger(__name__)


class FetchAbortedError(RuntimeError):
    """Raised when a page could not be fetched within the retry budget"""

    def __init__(self, cursor: str, page: int, attempts: int, cause: BaseException):
        self.cursor = cursor
        self.page = page
        self.attempts = attempts
        self.cause = cause
        super().__init__(
            f"API fetch failed on page {page} after {attempts} attempts "
            f"(resume from {cursor}): {cause}"
        )


@dataclass
class FetchSummary:
    """Totals for reporting only"""

    pages: int = 0
    records: int = 0


class Paginator:
    """Runs one fetch: Fetching (cursor set) until Done (cursor is None)"""

    def __init__(
        self,
        config: FetchConfig,
        client: EventsAPIClient,
        store: LocalEventStore,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.client = client
        self.store = store
        self.sleep = sleep

    def fetch_page(self, url: str) -> Page:
        """
        Fetch one page within the retry budget

        Raises:
            RetryExhaustedError: When every attempt failed
        """
        return execute_with_retry(
            lambda: self.client.fetch_page(url),
            max_retries=self.config.max_retries,
            base_delay_ms=self.config.retry_delay_ms,
            sleep=self.sleep,
        )

    def run(self, start_url: Optional[str] = None) -> FetchSummary:
        """
        Fetch every page and append its records to the store

        Args:
            start_url: First cursor (defaults to the configured base URL)

        Returns:
            FetchSummary: Pages fetched and records saved

        Raises:
            FetchAbortedError: When a page exhausts its retries
        """
        cursor = start_url or self.config.base_url
        summary = FetchSummary()

        logger.info(f"🚀 Starting to fetch data from: {cursor}")

        while cursor is not None:
            page_number = summary.pages + 1
            logger.info(f"Fetching page {page_number}: {cursor}")

            try:
                page = self.fetch_page(cursor)
            except RetryExhaustedError as e:
                logger.error(f"❌ Failed to fetch page after retries: {cursor}")
                raise FetchAbortedError(cursor, page_number, e.attempts, e.last_error) from e

            self.store.save(page.records)
            summary.pages = page_number
            summary.records += len(page.records)
            logger.info(f"Page {page_number} completed. Records: {len(page.records)}")

            cursor = page.next_url
            if cursor is not None and self.config.page_delay_seconds > 0:
                self.sleep(self.config.page_delay_seconds)

        logger.info(
            f"✅ Fetch completed. Total pages: {summary.pages}, Total records: {summary.records}"
        )
        return summary


def fetch_all_pages(
    config: FetchConfig,
    store: LocalEventStore,
    client: Optional[EventsAPIClient] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> FetchSummary:
    """
    Convenience function to run a full fetch

    Args:
        config: Fetch parameters
        store: Destination store
        client: API client (a new one is created and closed when omitted)
        sleep: Blocking sleep used for backoff, rate-limit waits and pacing

    Returns:
        FetchSummary: Pages fetched and records saved
    """
    if client is not None:
        return Paginator(config, client, store, sleep=sleep).run()

    with EventsAPIClient(config, sleep=sleep) as own_client:
        return Paginator(config, own_client, store, sleep=sleep).run()
