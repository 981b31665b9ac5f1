#!/usr/bin/env python3
"""
Demo script for the caching proxy.

Requests each proxied route twice against a running proxy and shows
where each response came from. Start the proxy first:

    python -m luchadeer.api.app
"""

import sys
import time

import httpx

REQUESTS = [
    "/api/1/giantbomb/video_types/",
    "/api/1/giantbomb/videos/?offset=0",
    "/api/1/giantbomb/games/?offset=100&sort=date_added:desc",
    "/api/1/giantbomb/search/?query=deadly+premonition&resources=game%2Cvideo%2C",
    "/api/1/youtube/unarchived_videos",
    # Rejected before reaching upstream
    "/api/1/giantbomb/videos/?offset=37",
]


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_requests(base_url: str) -> None:
    """Issue every request twice and report cache status and latency."""
    print_section(f"Proxy requests against {base_url}")

    with httpx.Client(base_url=base_url, timeout=30.0) as client:
        for path in REQUESTS:
            print(f"\n  {path}")
            for attempt in (1, 2):
                start_time = time.time()
                response = client.get(path)
                elapsed_ms = (time.time() - start_time) * 1000
                cache = response.headers.get("x-cache", "-")
                print(f"    #{attempt}: {response.status_code} {cache:<6} {elapsed_ms:7.1f}ms {len(response.content)} bytes")


def main() -> None:
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"
    try:
        demo_requests(base_url)
    except httpx.ConnectError:
        print(f"\nCould not connect to {base_url}. Is the proxy running?")
        sys.exit(1)


if __name__ == "__main__":
    main()
