"""Console entrypoint: drive the search page headlessly and log what it would render."""

from __future__ import annotations

import asyncio
import sys
from typing import Sequence

import httpx

from connectapi.config import AppSettings, get_settings
from connectapi.controllers.page import SearchPage
from connectapi.logging import configure_logging, logger
from connectapi.services.backend import SearchBackend
from connectapi.services.credentials import CredentialStore, FileCredentialStore, MemoryCredentialStore
from connectapi.services.identity import IdentityResolver


def build_credential_store(settings: AppSettings) -> CredentialStore:
    if settings.credentials.store_path is None:
        return MemoryCredentialStore()
    return FileCredentialStore(settings.credentials.store_path, key=settings.credentials.token_key)


def snapshot(page: SearchPage) -> dict:
    state = page.search_state
    return {
        "display_name": page.identity.display_name,
        "status": state.status.value,
        "query": state.query,
        "results": [item.id for item in state.results],
        "message": state.message,
        "error": state.error,
        "trending": [item.id for item in page.visible_trending],
        "expanded_id": page.selection.expanded_id,
    }


async def run(queries: Sequence[str], *, http_client: httpx.AsyncClient | None = None) -> dict:
    settings = get_settings()
    store = build_credential_store(settings)

    owns_client = http_client is None
    client = http_client or httpx.AsyncClient()
    try:
        backend = SearchBackend(client, settings=settings, credential_store=store)
        resolver = IdentityResolver(store, settings=settings.identity)
        page = SearchPage(backend, resolver, settings=settings)
        page.initialize()
        for query in queries:
            page.submit(query)
            await page.wait_idle()
        await page.aclose()
    finally:
        if owns_client:
            await client.aclose()

    result = snapshot(page)
    logger.info("search_page_snapshot", **result)
    return result


async def main(argv: Sequence[str] | None = None) -> None:
    configure_logging()
    queries = list(sys.argv[1:] if argv is None else argv)
    await run(queries)


def cli() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    cli()
