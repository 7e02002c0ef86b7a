"""Orchestrates resolution and normalization of one shared link."""

import logging
from typing import Optional

from tiktoktrim.redirect_resolver import RedirectResolver
from tiktoktrim.url_utils import UrlNormalizer, extract_first_url, is_short_link, url_normalizer

logger = logging.getLogger(__name__)


class ShareLinkHandler:
    """Runs a raw shared URL through resolution and normalization."""

    def __init__(self, resolver: RedirectResolver, normalizer: Optional[UrlNormalizer] = None):
        self.resolver = resolver
        self.normalizer = normalizer or url_normalizer

    async def handle(self, url: str) -> str:
        """Return the cleaned form of ``url``.

        Short links are resolved first; if that fails the original URL is
        normalized instead. Always returns a string.
        """
        logger.debug(f"Original URL: {url}")

        if is_short_link(url):
            logger.info(f"Detected short link, resolving redirect: {url}")
            result = await self.resolver.resolve(url)
            if not result.ok:
                logger.warning(
                    f"Resolution failed ({result.failure.value}), using original URL"
                )
            final_url = result.url_or(url)
        else:
            final_url = url

        cleaned = self.normalizer.normalize(final_url)
        logger.info(f"Cleaned URL: {cleaned}")
        return cleaned

    async def handle_shared_text(self, text: str) -> Optional[str]:
        """Extract the first URL from shared text and clean it.

        Returns:
            Cleaned URL, or None when the text contains no URL
        """
        url = extract_first_url(text)
        if url is None:
            logger.info("No URL found in shared text")
            return None
        return await self.handle(url)
