"""
Quick smoke test against live sites — run with: python smoke.py [url ...]
Not collected by pytest; the suite under tests/ never touches the network.
"""

import json
import logging
import sys

from meta_fetcher import FetchError, fetch_metadata

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

URLS = [
    "http://example.com",                   # no robots.txt, plain <title> only
    "https://5lovelanguages.com/learn",     # full set of og:* tags
]


def main(urls):
    failures = 0
    for url in urls:
        print(f"\n>>> Fetching: {url}\n")
        try:
            meta = fetch_metadata(url)
        except FetchError as exc:
            failures += 1
            print(f"{type(exc).__name__}: {exc}")
        else:
            print(json.dumps(meta.to_dict(), indent=2))
        print("-" * 80)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:] or URLS))
