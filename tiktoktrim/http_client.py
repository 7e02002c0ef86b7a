"""Process-wide HTTP session used for short-link resolution.

The session is created once at import time and handed to ``RedirectResolver``
explicitly; nothing else in the package reaches for it implicitly.
"""

import logging

import requests
from requests.adapters import HTTPAdapter

from tiktoktrim.config import MAX_REDIRECTS

logger = logging.getLogger(__name__)

# Accept headers stay at the requests defaults; only User-Agent is set per request
_POOL_CONNECTIONS = 4
_POOL_MAXSIZE = 4


def create_session(max_redirects: int = MAX_REDIRECTS) -> requests.Session:
    """Build a pooled session that follows redirects, including http -> https.

    Args:
        max_redirects: Longest redirect chain followed before giving up

    Returns:
        Configured requests.Session
    """
    session = requests.Session()
    session.max_redirects = max_redirects

    adapter = HTTPAdapter(pool_connections=_POOL_CONNECTIONS, pool_maxsize=_POOL_MAXSIZE)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    logger.debug(f"Created HTTP session (max_redirects={max_redirects})")
    return session


# Create singleton instance
shared_session = create_session()
