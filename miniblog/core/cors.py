from typing import Iterable, List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from miniblog.core.logging import get_logger

logger = get_logger(__name__)

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE"]


def resolve_allowed_origins(entries: Iterable[str]) -> List[str]:
    """Turn configured origin entries into an explicit allow-list.

    Blank entries (an unset variable interpolated into the list) are dropped
    and a wildcard is refused, so the list can only ever name origins.
    """
    origins: List[str] = []
    for entry in entries:
        origin = (entry or "").strip().rstrip("/")
        if not origin:
            continue
        if origin == "*":
            logger.warning("cors_wildcard_ignored")
            continue
        if origin not in origins:
            origins.append(origin)
    return origins


def add_cors(app: FastAPI, entries: Iterable[str]) -> List[str]:
    origins = resolve_allowed_origins(entries)
    # Requests without an Origin header are not CORS requests and pass through.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=["*"],
    )
    logger.info("cors_configured", origins=origins)
    return origins
