"""Utilities for detecting, unwrapping and cleaning TikTok share URLs."""

import logging
import re
from typing import Optional
from urllib.parse import urlsplit

from tiktoktrim.config import (
    DOMAIN_MARKER,
    LOGIN_PATH_MARKER,
    REDIRECT_PARAM,
    SHARED_TEXT_URL_PATTERN,
    SHORT_LINK_HOSTS,
    SHORT_LINK_PATH_PREFIXES,
    TRACKING_PARAM,
)
from tiktoktrim.models import FailureReason, StepResult, Url

logger = logging.getLogger(__name__)

_SHARED_TEXT_URL_RE = re.compile(SHARED_TEXT_URL_PATTERN, re.IGNORECASE)


def extract_first_url(text: Optional[str]) -> Optional[str]:
    """Pull the first http(s) URL out of free-form shared text.

    Intentionally permissive: everything up to the next whitespace is taken.
    """
    if not text:
        return None

    match = _SHARED_TEXT_URL_RE.search(text)
    return match.group(1) if match else None


def is_short_link(url: str) -> bool:
    """Return True when ``url`` needs a network round trip to find its target."""
    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
    except ValueError:
        return False

    if host in {h.lower() for h in SHORT_LINK_HOSTS}:
        return True
    if DOMAIN_MARKER.lower() not in host:
        return False
    return any(parts.path.startswith(prefix) for prefix in SHORT_LINK_PATH_PREFIXES)


class UrlNormalizer:
    """Pure pipeline that turns a shared TikTok URL into a clean one.

    Steps run in order: host gate, login-page unwrap, tracking-parameter
    strip. Nothing here performs I/O or raises; a step that cannot parse its
    input reports a failure and hands back the last good string.
    """

    def __init__(
        self,
        domain_marker: str = DOMAIN_MARKER,
        login_marker: str = LOGIN_PATH_MARKER,
        redirect_param: str = REDIRECT_PARAM,
        tracking_param: str = TRACKING_PARAM,
    ):
        self.domain_marker = domain_marker
        self.login_marker = login_marker
        self.redirect_param = redirect_param
        self.tracking_param = tracking_param

    def is_platform_url(self, url: str) -> bool:
        """Host gate: True when the host contains the domain marker."""
        try:
            return self.domain_marker in Url.parse(url).host
        except ValueError:
            return False

    def unwrap_login_page(self, url: str) -> StepResult:
        """Replace a login-wall URL with the content URL it wraps.

        Only one substitution happens; the extracted URL is not unwrapped
        again even if it is itself a login page.
        """
        try:
            parsed = Url.parse(url)
        except ValueError as e:
            logger.error(f"Error extracting from login page: {e}")
            return StepResult(
                step="login_unwrap",
                url=url,
                failure=FailureReason.PARSE_ERROR,
                detail=str(e),
            )

        if self.domain_marker not in parsed.host or self.login_marker not in parsed.path:
            return StepResult(step="login_unwrap", url=url)

        # query_params values are already percent-decoded
        redirect_url = parsed.get_query_param(self.redirect_param)
        if redirect_url is None:
            logger.debug(f"Login page without {self.redirect_param}, keeping URL")
            return StepResult(step="login_unwrap", url=url)

        logger.info(f"Detected login page, extracted redirect URL: {redirect_url}")
        return StepResult(step="login_unwrap", url=redirect_url)

    def strip_tracking_params(self, url: str) -> StepResult:
        """Remove the tracking parameter and the fragment, keeping other params in order."""
        try:
            parsed = Url.parse(url)
            cleaned = parsed.without_query_param(self.tracking_param).without_fragment()
        except ValueError as e:
            logger.error(f"Error trimming URL: {e}")
            return StepResult(
                step="tracking_strip",
                url=url,
                failure=FailureReason.PARSE_ERROR,
                detail=str(e),
            )

        if cleaned is parsed:
            return StepResult(step="tracking_strip", url=url)
        return StepResult(step="tracking_strip", url=str(cleaned))

    def normalize(self, url: str) -> str:
        """Run the full pipeline and return the cleaned URL.

        URLs whose host lacks the domain marker are returned unchanged.
        """
        if not self.is_platform_url(url):
            logger.debug(f"Host gate: not a {self.domain_marker} URL, leaving as is")
            return url

        current = url
        for step in (self.unwrap_login_page, self.strip_tracking_params):
            result = step(current)
            if not result.ok:
                logger.warning(
                    f"Step {result.step} failed ({result.failure.value}), "
                    f"keeping {result.url}"
                )
                return result.url
            current = result.url

        return current


# Create singleton instance
url_normalizer = UrlNormalizer()


def normalize_url(url: str) -> str:
    """Normalize a shared URL with the default normalizer."""
    return url_normalizer.normalize(url)
