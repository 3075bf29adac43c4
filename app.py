"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from api import arithmetic_router, layouts_router, set_store
from store import LayoutStore

logger = logging.getLogger(__name__)


def create_app(store: LayoutStore | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional store for testing; creates a fresh one if omitted.
    """
    if store is None:
        store = LayoutStore()

    set_store(store)

    app = FastAPI(
        title="Fixed-Width Arithmetic API",
        description=(
            "Unsigned and sign-magnitude arithmetic on fixed-width numbers "
            "built from digits in an arbitrary base. Layouts are registered "
            "by name; operands and results are exchanged as text in base "
            "2, 8, 10 or 16."
        ),
        version="0.1.0",
    )
    app.include_router(layouts_router)
    app.include_router(arithmetic_router)
    logger.info("created app with %d layouts", store.count())
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
