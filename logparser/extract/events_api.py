"""
Events API Client - Pure I/O Operations

Fetches one page of events per call. Retries and pagination are driven by
the orchestration layer; this module only performs the request and turns
the response into a Page or a retryable FetchError.
"""

import logging
import time
from typing import Callable, Optional

import requests

from ..coreutils.config import FetchConfig
from .errors import MalformedPayloadError, RateLimitedError, UnexpectedStatusError
from .links import extract_next_url
from .models import Page
from .parser import parse_page
from .responses import (
    ResponseAction,
    classify_response,
    describe_reset,
    parse_reset_timestamp,
    wait_until_reset,
)

logger = logging.getLogger(__name__)

USER_AGENT = "logparser/1.0"
ACCEPT = "application/vnd.github.v3+json"


def new_session() -> requests.Session:
    """Create a new requests session with the API's required headers"""
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT, "Accept": ACCEPT})
    return session


class EventsAPIClient:
    """Pure API client for a paginated events endpoint"""

    def __init__(
        self,
        config: FetchConfig,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.config = config
        self.session = session or new_session()
        self.sleep = sleep
        self.clock = clock

    def close(self) -> None:
        """Release the underlying HTTP session"""
        self.session.close()

    def __enter__(self) -> "EventsAPIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch_page(self, url: str) -> Page:
        """
        Fetch and classify a single page

        Args:
            url: Page URL (the current cursor)

        Returns:
            Page: Parsed records and the next cursor; an empty terminal Page on 404

        Raises:
            RateLimitedError: After waiting out a 403
            UnexpectedStatusError: On any other non-200 status
            MalformedPayloadError: If the body is not a JSON array
            requests.RequestException: On network failure
        """
        logger.debug(f"Fetching from {url}")
        start_time = time.time()

        try:
            response = self.session.get(url, timeout=self.config.timeout_seconds)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request failed for URL: {url}. Error: {e}")
            raise

        action = classify_response(response.status_code)

        if action is ResponseAction.PARSE:
            page = self._parse_success(url, response)
            logger.debug(f"Fetched from {url}: {time.time() - start_time:.2f} seconds")
            return page

        if action is ResponseAction.RATE_LIMITED_RETRY:
            wait_seconds = self._wait_for_rate_limit(response)
            raise RateLimitedError.after_wait(url, wait_seconds)

        if action is ResponseAction.EMPTY_TERMINATE:
            logger.warning(f"Resource not found (404): {url}")
            return Page.empty()

        logger.error(f"Unexpected status code {response.status_code} for {url}")
        raise UnexpectedStatusError.for_status(url, response.status_code)

    def _parse_success(self, url: str, response: requests.Response) -> Page:
        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedPayloadError(
                f"Invalid JSON response from {url}: {e}", url=url, status_code=200
            ) from e

        try:
            records = parse_page(payload)
        except MalformedPayloadError as e:
            e.url = url
            e.status_code = response.status_code
            raise

        return Page(records=records, next_url=extract_next_url(response.headers.get("Link")))

    def _wait_for_rate_limit(self, response: requests.Response) -> int:
        now = self.clock() if self.clock else None
        reset_at = parse_reset_timestamp(response.headers)
        wait_seconds = wait_until_reset(
            reset_at, self.config.rate_limit_wait_seconds, now=now
        )
        logger.info(
            f"⏳ Rate limited ({describe_reset(reset_at)}). Waiting {wait_seconds} seconds..."
        )
        self.sleep(wait_seconds)
        return wait_seconds
