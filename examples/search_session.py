#!/usr/bin/env python3
"""
PopcornPilot - Search Session Example

This example walks through one user session:
1. Start the session (popular movies + trending view)
2. Type a query keystroke by keystroke
3. Wait for the debounced search to settle and complete
4. Re-read the trending view

Set TMDB_API_KEY (and optionally POPCORNPILOT_MONGO_URI) before running.
"""

import asyncio
import logging
import sys

from popcornpilot import Error, SearchSession, Settings, Success, configure_logging
from popcornpilot.exceptions import ConfigurationError


def describe(outcome) -> str:
    """Render an outcome as one line."""
    if isinstance(outcome, Success):
        titles = ", ".join(movie.title for movie in outcome.movies[:5])
        return f"{len(outcome.movies)} movies: {titles}"
    if isinstance(outcome, Error):
        return f"error: {outcome.message}"
    return outcome.kind


async def run(query: str) -> None:
    """Run the session workflow for ``query``."""
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    async with SearchSession.from_settings(settings) as session:
        session.orchestrator.subscribe(lambda outcome: print(f"   [{outcome.kind}]"))

        # Step 1: Startup fetch and trending read
        print("1. Starting session...")
        session.start()
        await session.wait_idle()
        print(f"   All movies: {describe(session.outcome)}")
        print(f"   Trending: {[record.search_term for record in session.trending]}")

        # Step 2: Simulate typing
        print(f"\n2. Typing {query!r}...")
        for end in range(1, len(query) + 1):
            session.on_input_change(query[:end])
            await asyncio.sleep(0.08)

        # Step 3: Let the debounce settle
        print("\n3. Waiting for the search to settle...")
        await asyncio.sleep(settings.debounce_interval + 0.1)
        await session.wait_idle()
        print(f"   Results for {session.settled_query!r}: {describe(session.outcome)}")

        # Step 4: The trending view is not refreshed automatically
        print("\n4. Refreshing trending view...")
        trending = await session.refresh_trending()
        for rank, record in enumerate(trending, start=1):
            print(f"   {rank}. {record.search_term} ({record.count})")

    print("\n=== Done ===")


def main() -> None:
    """Run the example."""
    configure_logging(level=logging.WARNING)
    query = sys.argv[1] if len(sys.argv) > 1 else "dune"
    asyncio.run(run(query))


if __name__ == "__main__":
    main()
