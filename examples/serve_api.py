#!/usr/bin/env python3
"""Serve the task list API with a shared read-through cache.

Wires a JSON-file store, one process-wide UserTaskCache and an in-memory
token table into the FastAPI app, then prints a bearer token for user 1.

Requirements:
    pip install tasklist[api]
    TASKLIST_STORE_PATH=tasks.json python examples/serve_api.py

Then:
    curl -H "Authorization: Bearer <token>" http://127.0.0.1:8000/tasks
"""

from __future__ import annotations

import logging

import uvicorn

from tasklist import (
    InMemoryTaskStore,
    JsonFileTaskStore,
    StaticTokenVerifier,
    TaskService,
    UserTaskCache,
    get_settings,
)
from tasklist.api import create_app


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s")
    settings = get_settings()
    store = (
        JsonFileTaskStore(settings.store_path)
        if settings.store_path is not None
        else InMemoryTaskStore()
    )
    service = TaskService(store, UserTaskCache(ttl=settings.cache_ttl_seconds))
    verifier = StaticTokenVerifier()
    print(f"Bearer token for user 1: {verifier.issue(1)}")
    uvicorn.run(create_app(service, verifier), host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
