"""Configuration settings for the TikTok link trimmer."""

import math
import os


def _env_number(name, default, cast=float):
    """Read a numeric override from the environment.

    Raises:
        ValueError: If the value is not a finite number of the given type
    """
    raw = os.environ.get(name, default)
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(
            f"{name} must be a number of type {cast.__name__}, got: {raw!r}"
        ) from None
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got: {raw!r}")
    return value


# Platform URL settings
DOMAIN_MARKER = "tiktok.com"  # Host substring that enables normalization (case-sensitive)
SHORT_LINK_HOSTS = [
    "vm.tiktok.com",
    "vt.tiktok.com",
]  # Compared case-insensitively against the whole host
SHORT_LINK_PATH_PREFIXES = [
    "/t/",
]  # e.g. https://www.tiktok.com/t/ZT8abc/

# Normalization settings
LOGIN_PATH_MARKER = "login"  # Path substring identifying a login wall
REDIRECT_PARAM = "redirect_url"  # Query parameter holding the wrapped content URL
TRACKING_PARAM = "_t"  # Analytics parameter removed from every cleaned URL

# Request settings
CONNECT_TIMEOUT = _env_number("TIKTOKTRIM_CONNECT_TIMEOUT", "10")  # seconds
READ_TIMEOUT = _env_number("TIKTOKTRIM_READ_TIMEOUT", "10")  # seconds
MAX_REDIRECTS = _env_number("TIKTOKTRIM_MAX_REDIRECTS", "20", cast=int)

# User Agent Pool for rotation
USER_AGENT_POOL = [
    # Chrome on Android
    "Mozilla/5.0 (Linux; Android 10; K) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36",
    "Mozilla/5.0 (Linux; Android 13; Pixel 7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Mobile Safari/537.36",
    # Safari on iPhone
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1",
    # Chrome 120 desktop
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    # Firefox 121 desktop
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
]

# Browser launch settings
# Names registered by the stdlib webbrowser module, tried in order before the
# system default browser.
PREFERRED_BROWSERS = [
    "chrome",
    "google-chrome",
    "chromium",
    "chromium-browser",
    "firefox",
    "microsoft-edge",
    "brave",
    "opera",
    "safari",
]

# Shared text intake
SHARED_TEXT_URL_PATTERN = r"(https?://[^\s]+)"  # First match wins, case-insensitive

# Validation: Ensure configuration values are valid
if not DOMAIN_MARKER:
    raise ValueError("DOMAIN_MARKER cannot be empty")

if not isinstance(CONNECT_TIMEOUT, (int, float)) or CONNECT_TIMEOUT <= 0:
    raise ValueError(
        f"CONNECT_TIMEOUT must be a positive number, got: {CONNECT_TIMEOUT}"
    )

if not isinstance(READ_TIMEOUT, (int, float)) or READ_TIMEOUT <= 0:
    raise ValueError(
        f"READ_TIMEOUT must be a positive number, got: {READ_TIMEOUT}"
    )

if not isinstance(MAX_REDIRECTS, int) or MAX_REDIRECTS < 1:
    raise ValueError(
        f"MAX_REDIRECTS must be a positive integer, got: {MAX_REDIRECTS}"
    )

if not all(prefix.startswith("/") for prefix in SHORT_LINK_PATH_PREFIXES):
    raise ValueError(
        f"SHORT_LINK_PATH_PREFIXES must start with '/', got: {SHORT_LINK_PATH_PREFIXES}"
    )

if not USER_AGENT_POOL:
    raise ValueError("USER_AGENT_POOL cannot be empty")
