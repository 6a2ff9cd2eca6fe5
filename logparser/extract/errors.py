"""Events API fetch errors."""

from typing import Optional


class FetchError(RuntimeError):
    """Raised when a page fetch fails; retryable by the caller"""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class RateLimitedError(FetchError):
    """Raised after waiting out a rate-limited (403) response"""

    @classmethod
    def after_wait(cls, url: str, wait_seconds: int) -> "RateLimitedError":
        return cls(
            f"Rate limited (waited {wait_seconds}s) - will retry: {url}",
            url=url,
            status_code=403,
        )


class UnexpectedStatusError(FetchError):
    """Raised for any status code without defined handling"""

    @classmethod
    def for_status(cls, url: str, status_code: int) -> "UnexpectedStatusError":
        return cls(
            f"Unexpected status code: {status_code} for {url}",
            url=url,
            status_code=status_code,
        )


class MalformedPayloadError(FetchError):
    """Raised when a page body is not a JSON array"""
