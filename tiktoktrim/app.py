"""Command line entry point: clean one shared TikTok link and open it."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from tiktoktrim.browser_launcher import open_in_browser
from tiktoktrim.http_client import shared_session
from tiktoktrim.link_handler import ShareLinkHandler
from tiktoktrim.redirect_resolver import RedirectResolver

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_URL = 1
EXIT_NO_BROWSER = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tiktoktrim",
        description="Resolve, unwrap and strip tracking from a shared TikTok link.",
    )
    parser.add_argument(
        "input",
        nargs="+",
        help="URL or shared text containing a URL (several words are joined)",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="print the cleaned URL without opening a browser",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    text = " ".join(args.input)
    handler = ShareLinkHandler(RedirectResolver(shared_session))

    try:
        cleaned = asyncio.run(handler.handle_shared_text(text))
    except KeyboardInterrupt:
        # Pending fetch is abandoned; nothing is launched for it
        logger.info("Interrupted, abandoning pending resolution")
        return EXIT_INTERRUPTED

    if cleaned is None:
        print("No URL found in input.", file=sys.stderr)
        return EXIT_NO_URL

    print(cleaned)

    if args.no_open:
        return EXIT_OK

    if not open_in_browser(cleaned):
        print("Could not open a browser for the cleaned URL.", file=sys.stderr)
        return EXIT_NO_BROWSER

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
