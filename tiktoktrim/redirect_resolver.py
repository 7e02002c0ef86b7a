"""Short-link resolution by following HTTP redirects.

A short link (``https://vm.tiktok.com/ZMabc123/``) only reveals its target
after a round trip. ``RedirectResolver`` issues a single GET with a browser
User-Agent, lets requests follow every redirect, and reports the URL of the
last request that was actually issued.

Key Features:
    - Non-blocking for the caller: the request runs on a worker thread via
      ``asyncio.to_thread``
    - Bounded connect and read timeouts
    - Body is never downloaded (streamed response closed right away)
    - Every transport failure comes back as a ``ResolutionResult`` value

Typical Usage:
    from tiktoktrim.http_client import shared_session
    from tiktoktrim.redirect_resolver import RedirectResolver

    resolver = RedirectResolver(shared_session)
    result = await resolver.resolve("https://vm.tiktok.com/ZMabc123/")
    final_url = result.url_or("https://vm.tiktok.com/ZMabc123/")
"""

import asyncio
import logging
from typing import Optional

import requests

from tiktoktrim.config import CONNECT_TIMEOUT, READ_TIMEOUT
from tiktoktrim.failure_classifier import FailureClassifier
from tiktoktrim.models import ResolutionResult
from tiktoktrim.user_agent_pool import UserAgentPool, user_agent_pool

logger = logging.getLogger(__name__)


class RedirectResolver:
    """Resolves short links to their final landing URL."""

    def __init__(
        self,
        session: requests.Session,
        agent_pool: Optional[UserAgentPool] = None,
        connect_timeout: float = CONNECT_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
    ):
        """Initialize the resolver.

        Args:
            session: Shared HTTP session (connection pooling, redirect limit)
            agent_pool: User agent source (defaults to the shared pool)
            connect_timeout: Seconds allowed to establish each connection
            read_timeout: Seconds allowed between bytes of each response
        """
        self.session = session
        self.agent_pool = agent_pool or user_agent_pool
        self.timeout = (connect_timeout, read_timeout)

    def _fetch(self, url: str) -> ResolutionResult:
        """Blocking GET that follows redirects. Runs on a worker thread."""
        headers = {"User-Agent": self.agent_pool.get_next()}
        try:
            response = self.session.get(
                url,
                headers=headers,
                timeout=self.timeout,
                allow_redirects=True,
                stream=True,
            )
        except (requests.RequestException, ValueError, OverflowError) as e:
            reason = FailureClassifier.classify(e)
            detail = FailureClassifier.describe(e)
            logger.error(f"Error resolving redirect for {url}: {detail}")
            return ResolutionResult.failed(reason, detail)

        with response:
            # response.url is the URL of the final request after all redirects
            final_url = response.url
            logger.debug(
                f"HTTP response code: {response.status_code}, "
                f"redirects: {len(response.history)}, final URL: {final_url}"
            )
            return ResolutionResult.resolved(
                final_url,
                status_code=response.status_code,
                redirect_count=len(response.history),
            )

    async def resolve(self, url: str) -> ResolutionResult:
        """Follow redirects for ``url`` without blocking the event loop.

        Args:
            url: Short link to resolve

        Returns:
            ResolutionResult holding the final URL or the failure reason
        """
        logger.info(f"Resolving short link: {url}")
        result = await asyncio.to_thread(self._fetch, url)
        if result.ok:
            logger.info(f"Resolved to: {result.url}")
        return result
