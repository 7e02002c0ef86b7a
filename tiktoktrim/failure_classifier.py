"""Classification of short-link resolution failures.

Maps exceptions raised by ``requests`` while following a short link to a
``FailureReason``. Only transport-level problems are failures: an HTTP error
status at the end of a redirect chain still yields a final URL and is never
classified here.

Typical Usage:
    from tiktoktrim.failure_classifier import FailureClassifier

    try:
        response = session.get(url, timeout=(10, 10))
    except requests.RequestException as e:
        reason = FailureClassifier.classify(e)
"""

from typing import Optional
from requests.exceptions import (
    ConnectionError as RequestsConnectionError,
    InvalidHeader,
    InvalidSchema,
    InvalidURL,
    MissingSchema,
    Timeout,
    TooManyRedirects,
)
from tiktoktrim.models import FailureReason


class FailureClassifier:
    """Classifies resolution exceptions."""

    @staticmethod
    def classify(exception: Optional[BaseException]) -> Optional[FailureReason]:
        """Classify an exception raised during resolution.

        Args:
            exception: Exception raised (if any)

        Returns:
            FailureReason enum value or None if no exception was given
        """
        if exception is None:
            return None

        # Timeout subclasses ConnectionError (ConnectTimeout), so check it first
        if isinstance(exception, Timeout):
            return FailureReason.TIMEOUT
        if isinstance(exception, TooManyRedirects):
            return FailureReason.TOO_MANY_REDIRECTS
        if isinstance(exception, (MissingSchema, InvalidSchema, InvalidURL, InvalidHeader)):
            return FailureReason.INVALID_URL
        if isinstance(exception, RequestsConnectionError):
            return FailureReason.CONNECTION_ERROR
        if isinstance(exception, ValueError):
            # urllib3 raises LocationParseError/ValueError for malformed hosts
            return FailureReason.INVALID_URL

        return FailureReason.TRANSPORT_ERROR

    @staticmethod
    def describe(exception: BaseException, limit: int = 200) -> str:
        """Short single-line description used in logs and results."""
        message = " ".join(str(exception).split()) or "no details"
        return f"{type(exception).__name__}: {message[:limit]}"
