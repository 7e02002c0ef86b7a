"""Pydantic models for URL values and pipeline results.

This module defines the data models passed between the trimmer components.
All models are immutable: every transform returns a new instance.

Model Categories:
    1. URL Models:
       - Url: Parsed URL with accessors and non-mutating transforms

    2. Result Models:
       - FailureReason: Enum of failure kinds surfaced by the pipeline
       - StepResult: Output of a single normalization step
       - ResolutionResult: Output of a short-link resolution

Typical Usage:
    from tiktoktrim.models import Url, ResolutionResult, FailureReason

    url = Url.parse("https://www.tiktok.com/@user/video/1?_t=abc#top")
    cleaned = url.without_query_param("_t").without_fragment()
    print(str(cleaned))  # https://www.tiktok.com/@user/video/1

    result = ResolutionResult.failed(FailureReason.TIMEOUT, "read timed out")
    final_url = result.url_or("https://vm.tiktok.com/ZMabc/")
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple
from urllib.parse import unquote_plus, urlsplit, urlunsplit

from pydantic import BaseModel, model_validator


class FailureReason(str, Enum):
    """Kinds of failures reported by normalization steps and the resolver."""

    PARSE_ERROR = "parse_error"  # URL could not be split into components
    TIMEOUT = "timeout"  # Connect or read timeout
    CONNECTION_ERROR = "connection_error"  # DNS failure, refused connection, TLS error
    TOO_MANY_REDIRECTS = "too_many_redirects"  # Redirect loop or chain too long
    INVALID_URL = "invalid_url"  # Missing or unsupported scheme, bad host
    TRANSPORT_ERROR = "transport_error"  # Any other requests-level failure


def _host_from_netloc(netloc: str) -> str:
    """Return the host part of a netloc, preserving its case."""
    hostport = netloc.rpartition("@")[2]
    if hostport.startswith("["):
        end = hostport.find("]")
        if end == -1:
            raise ValueError(f"Invalid IPv6 host in netloc: {netloc}")
        return hostport[: end + 1]
    return hostport.partition(":")[0]


class Url(BaseModel):
    """Immutable URL value that remembers the exact string it came from."""

    raw: str
    scheme: str = ""
    netloc: str = ""
    host: str = ""
    path: str = ""
    query: str = ""  # Raw (still encoded) query string without '?'
    fragment: Optional[str] = None  # None when the URL has no '#'

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, raw: str) -> "Url":
        """Split a URL string into components.

        Args:
            raw: URL string

        Returns:
            Parsed Url

        Raises:
            ValueError: If the string cannot be split into URL components
        """
        if not isinstance(raw, str):
            raise ValueError(f"URL must be a string, got: {type(raw).__name__}")

        parts = urlsplit(raw)
        return cls(
            raw=raw,
            scheme=parts.scheme,
            netloc=parts.netloc,
            host=_host_from_netloc(parts.netloc),
            path=parts.path,
            query=parts.query,
            fragment=parts.fragment if "#" in raw else None,
        )

    def __str__(self) -> str:
        return self.raw

    @property
    def query_items(self) -> List[Tuple[str, str]]:
        """Decoded (key, value) pairs in their original order, duplicates kept."""
        items = []
        for segment in self.query.split("&"):
            if not segment:
                continue
            key, _, value = segment.partition("=")
            items.append((unquote_plus(key), unquote_plus(value)))
        return items

    @property
    def query_params(self) -> Dict[str, str]:
        """Decoded query mapping; the first occurrence of a key wins."""
        params: Dict[str, str] = {}
        for key, value in self.query_items:
            params.setdefault(key, value)
        return params

    def get_query_param(self, name: str) -> Optional[str]:
        return self.query_params.get(name)

    def without_query_param(self, name: str) -> "Url":
        """Return a Url with every parameter named exactly ``name`` removed.

        Surviving parameters keep their order and their original encoding.
        """
        kept = []
        removed = False
        for segment in self.query.split("&"):
            if not segment:
                continue
            if unquote_plus(segment.partition("=")[0]) == name:
                removed = True
                continue
            kept.append(segment)

        if not removed:
            return self
        return self._rebuild(query="&".join(kept), fragment=self.fragment)

    def without_fragment(self) -> "Url":
        if self.fragment is None:
            return self
        return self._rebuild(query=self.query, fragment=None)

    def _rebuild(self, query: str, fragment: Optional[str]) -> "Url":
        raw = urlunsplit((self.scheme, self.netloc, self.path, query, fragment or ""))
        return Url.parse(raw)


class StepResult(BaseModel):
    """Result of one normalization step.

    On failure ``url`` still holds the last successfully produced string.
    """

    step: str  # "host_gate", "login_unwrap", "tracking_strip"
    url: str
    failure: Optional[FailureReason] = None
    detail: Optional[str] = None

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "step": "tracking_strip",
                    "url": "https://www.tiktok.com/@user/video/123",
                    "failure": None,
                    "detail": None,
                }
            ]
        },
    }

    @property
    def ok(self) -> bool:
        return self.failure is None


class ResolutionResult(BaseModel):
    """Either a resolved URL or a failure reason, never both."""

    url: Optional[str] = None  # Final URL after all redirects were followed
    failure: Optional[FailureReason] = None
    detail: Optional[str] = None  # Error message for failures
    status_code: Optional[int] = None  # Status of the final response
    redirect_count: int = 0  # Redirect responses followed before the final one

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://www.tiktok.com/@user/video/7301234567890123456",
                    "failure": None,
                    "detail": None,
                    "status_code": 200,
                    "redirect_count": 2,
                },
                {
                    "url": None,
                    "failure": "connection_error",
                    "detail": "Failed to resolve 'vm.tiktok.com'",
                    "status_code": None,
                    "redirect_count": 0,
                },
            ]
        },
    }

    @model_validator(mode="after")
    def _check_exclusive(self) -> "ResolutionResult":
        if (self.url is None) == (self.failure is None):
            raise ValueError("ResolutionResult needs exactly one of url or failure")
        return self

    @classmethod
    def resolved(
        cls, url: str, status_code: Optional[int] = None, redirect_count: int = 0
    ) -> "ResolutionResult":
        return cls(url=url, status_code=status_code, redirect_count=redirect_count)

    @classmethod
    def failed(cls, reason: FailureReason, detail: Optional[str] = None) -> "ResolutionResult":
        return cls(failure=reason, detail=detail)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def url_or(self, fallback: str) -> str:
        """Return the resolved URL, or ``fallback`` when resolution failed."""
        return self.url if self.url is not None else fallback
