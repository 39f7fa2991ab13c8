"""
Buyflex Storefront: System Documentation
========================================

This module-style README documents the architecture, components and
operational practices of the Buyflex storefront backend. Run
`python README.py` to print it, or import `README` to read single sections.

Table of Contents
-----------------
1. System Overview
2. Architecture
3. Catalog Engine & Shop View
4. Storefront Services
5. FlexBot
6. Configuration & Environment
7. Testing Strategy
8. Troubleshooting

"""

from __future__ import annotations

import textwrap


def section(title: str, body: str) -> str:
    return f"\n{title}\n{'-' * len(title)}\n{textwrap.dedent(body).strip()}\n"


SYSTEM_OVERVIEW = section(
    "1. System Overview",
    """
    Buyflex is an in-memory electronics storefront. A FastAPI backend serves
    the catalog (faceted filtering, search, sorting, infinite-scroll reveal),
    a per-session cart and wishlist, simulated checkout, a support desk,
    an admin back-office and the FlexBot shopping assistant.
    Nothing is persisted: every process starts from the seed fixtures.
    """,
)


ARCHITECTURE = section(
    "2. Architecture",
    """
    - `storefront.app.main`: FastAPI routes; maps StorefrontError subclasses to HTTP codes.
    - `storefront.app.state.AppState`: one explicit container for every list the shop holds.
    - `storefront.app.session.SessionManager`: per-session cart, wishlist, user, shop view, chat.
    - `storefront.catalog`: pure query engine plus the timer-driven shop view.
    - `storefront.services`: cart, accounts, checkout, support, reviews, admin.
    - `storefront.agents` / `storefront.nlu`: FlexBot and its rule-based fallback.
    """,
)


CATALOG = section(
    "3. Catalog Engine & Shop View",
    """
    - `filter_products`: a non-blank search matches name or description and ignores facets;
      otherwise category, max price and min rating are applied in that order.
    - `sort_products`: featured, price-asc, price-desc, rating-desc, name-asc; stable.
    - Search input is debounced (SEARCH_DEBOUNCE_SECONDS); submitting commits at once.
    - The reveal window starts at INITIAL_WINDOW_SIZE and grows by WINDOW_INCREMENT
      after REVEAL_DELAY_SECONDS; triggers while loading are ignored.
    - Any filter, sort or committed-query change resets the window and cancels growth.
    """,
)


SERVICES = section(
    "4. Storefront Services",
    """
    - Checkout: free shipping from $50, flat $5 below; order ids BFX-100..BFX-999.
    - Support: case-insensitive order tracking, serial check `PROD-<id>-<5 chars>`,
      meeting bookings, warranty claims, contact inbox, newsletter.
    - Reviews: submitted as Pending; moderation recomputes the product rating.
    - Admin: dashboard stats, product add/edit/delete, paged orders, roles
      (SuperAdmin is immutable and cannot be granted).
    """,
)


FLEXBOT = section(
    "5. FlexBot",
    """
    - With GEMINI_API_KEY set, messages go to Gemini in JSON mode with a fixed schema
      and recommended ids are mapped back onto the live catalog.
    - Without a key (or with `test`/`dev`), a rule-based fallback answers shipping,
      returns and contact questions and fuzzy-matches products with rapidfuzz.
    """,
)


CONFIG_ENV = section(
    "6. Configuration & Environment",
    """
    - `.env` is loaded by python-dotenv; see `.env.example` for every variable.
    - `Config.validate()` runs on import and rejects non-positive timings and sizes.
    - LOG_LEVEL controls the `storefront` logger.
    """,
)


TESTING = section(
    "7. Testing Strategy",
    """
    - `python tests/run_tests.py --all` or `python -m pytest tests/`.
    - Timer behaviour is tested with shortened delays on a real asyncio loop.
    - HTTP tests use FastAPI's TestClient as a context manager so timers can fire.
    - The Gemini call is mocked; no test touches the network.
    """,
)


TROUBLESHOOTING = section(
    "8. Troubleshooting",
    """
    - "no running event loop": shop-view routes must stay `async def`.
    - Search never commits in tests: keep the TestClient open across requests.
    - FlexBot always answers from rules: check GEMINI_API_KEY is a real key.
    """,
)


def as_text() -> str:
    return "\n".join(
        [
            SYSTEM_OVERVIEW,
            ARCHITECTURE,
            CATALOG,
            SERVICES,
            FLEXBOT,
            CONFIG_ENV,
            TESTING,
            TROUBLESHOOTING,
        ]
    )


def main() -> None:
    print(as_text())


if __name__ == "__main__":
    main()
