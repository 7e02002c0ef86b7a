"""Open the cleaned URL in an external browser."""

import logging
import webbrowser
from typing import Iterable, Optional

from tiktoktrim.config import PREFERRED_BROWSERS

logger = logging.getLogger(__name__)


def _find_preferred(names: Iterable[str]) -> Optional[webbrowser.BaseBrowser]:
    for name in names:
        try:
            return webbrowser.get(name)
        except webbrowser.Error:
            continue
    return None


def open_in_browser(url: str, preferred: Iterable[str] = PREFERRED_BROWSERS) -> bool:
    """Try to open ``url`` in the user's browser.

    Known browsers are tried first, then whatever the system default is.

    Returns:
        True if a browser accepted the URL, False otherwise
    """
    browser = _find_preferred(preferred)
    if browser is not None:
        name = getattr(browser, "name", type(browser).__name__)
        logger.debug(f"Launching with: {name}")
        try:
            if browser.open(url, new=2):
                return True
            logger.warning(f"Browser {name} refused the URL, falling back to default")
        except webbrowser.Error as e:
            logger.warning(f"Browser {name} failed ({e}), falling back to default")

    try:
        if webbrowser.open(url, new=2):
            return True
    except webbrowser.Error as e:
        logger.error(f"Error opening browser: {e}")
        return False

    logger.error("No browser found to open the URL")
    return False
