"""Shared fakes for HTTP responses and sessions."""

from unittest.mock import Mock

from requests.structures import CaseInsensitiveDict


def fake_response(status_code=200, payload=None, headers=None, json_error=None):
    """Build a stand-in for requests.Response"""
    response = Mock()
    response.status_code = status_code
    response.headers = CaseInsensitiveDict(headers or {})
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def link_next(url):
    return {"Link": f'<{url}>; rel="next"'}


class FakeSession:
    """Serves queued responses per URL, recording every GET"""

    def __init__(self, routes):
        self.routes = {url: list(responses) for url, responses in routes.items()}
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append(url)
        queue = self.routes[url]
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self):
        self.closed = True
