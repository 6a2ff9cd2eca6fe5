"""
Test Events API Client - single page fetch and response handling
"""

import logging
import os
import sys
import unittest
from unittest.mock import Mock

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import requests

from logparser.coreutils.config import FetchConfig
from logparser.extract.errors import (
    MalformedPayloadError,
    RateLimitedError,
    UnexpectedStatusError,
)
from logparser.extract.events_api import ACCEPT, USER_AGENT, EventsAPIClient, new_session
from tests.helpers import FakeSession, fake_response, link_next

URL = "https://api.example/events"
NOW = 1_700_000_000


class TestEventsAPIClient(unittest.TestCase):
    def setUp(self):
        self.config = FetchConfig(rate_limit_wait_seconds=10)
        self.sleeps = []

    def client_for(self, *responses):
        session = FakeSession({URL: list(responses)})
        client = EventsAPIClient(
            self.config, session=session, sleep=self.sleeps.append, clock=lambda: NOW
        )
        return client, session

    def test_session_headers(self):
        session = new_session()

        self.assertEqual(session.headers["Accept"], ACCEPT)
        self.assertEqual(session.headers["User-Agent"], USER_AGENT)

    def test_success_returns_records_and_next_cursor(self):
        client, _ = self.client_for(
            fake_response(
                200,
                [{"id": "1", "type": "PushEvent", "actor": {"login": "octocat"}}],
                headers=link_next(URL + "?page=2"),
            )
        )

        page = client.fetch_page(URL)

        self.assertEqual([r.id for r in page.records], ["1"])
        self.assertEqual(page.next_url, URL + "?page=2")

    def test_success_without_link_header_ends(self):
        client, _ = self.client_for(fake_response(200, []))

        page = client.fetch_page(URL)

        self.assertEqual(page.records, [])
        self.assertIsNone(page.next_url)

    def test_not_found_is_empty_terminal_page(self):
        client, _ = self.client_for(fake_response(404, {"message": "Not Found"}))

        page = client.fetch_page(URL)

        self.assertEqual(page.records, [])
        self.assertIsNone(page.next_url)

    def test_rate_limited_waits_then_raises(self):
        client, _ = self.client_for(
            fake_response(403, headers={"X-RateLimit-Reset": str(NOW + 5)})
        )

        with self.assertRaises(RateLimitedError) as ctx:
            client.fetch_page(URL)

        self.assertEqual(self.sleeps, [6])
        self.assertEqual(ctx.exception.status_code, 403)

    def test_rate_limited_without_reset_waits_ceiling(self):
        client, _ = self.client_for(fake_response(403))

        with self.assertRaises(RateLimitedError):
            client.fetch_page(URL)

        self.assertEqual(self.sleeps, [10])

    def test_rate_limit_log_shows_reset_time_in_utc(self):
        client, _ = self.client_for(
            fake_response(403, headers={"X-RateLimit-Reset": str(NOW + 5)})
        )

        with self.assertLogs("logparser.extract.events_api", level=logging.INFO) as logs:
            with self.assertRaises(RateLimitedError):
                client.fetch_page(URL)

        self.assertIn("resets at 2023-11-14 22:13:25 UTC", logs.output[0])
        self.assertIn("Waiting 6 seconds", logs.output[0])

    def test_close_releases_session(self):
        client, session = self.client_for(fake_response(200, []))

        with client:
            client.fetch_page(URL)

        self.assertTrue(session.closed)

    def test_unexpected_status_raises_with_code(self):
        client, _ = self.client_for(fake_response(502))

        with self.assertRaises(UnexpectedStatusError) as ctx:
            client.fetch_page(URL)

        self.assertEqual(ctx.exception.status_code, 502)
        self.assertEqual(ctx.exception.url, URL)
        self.assertEqual(self.sleeps, [])

    def test_non_array_body_is_malformed(self):
        client, _ = self.client_for(fake_response(200, {"message": "proxy error"}))

        with self.assertRaises(MalformedPayloadError) as ctx:
            client.fetch_page(URL)

        self.assertEqual(ctx.exception.url, URL)

    def test_invalid_json_is_malformed(self):
        client, _ = self.client_for(fake_response(200, json_error=ValueError("bad json")))

        with self.assertRaises(MalformedPayloadError):
            client.fetch_page(URL)

    def test_network_error_propagates(self):
        client, _ = self.client_for(requests.ConnectionError("connection reset"))

        with self.assertRaises(requests.RequestException):
            client.fetch_page(URL)

    def test_request_uses_configured_timeout(self):
        session = Mock()
        session.get.return_value = fake_response(200, [])
        client = EventsAPIClient(FetchConfig(timeout_seconds=5), session=session)

        client.fetch_page(URL)

        session.get.assert_called_once_with(URL, timeout=5)


if __name__ == "__main__":
    unittest.main()
