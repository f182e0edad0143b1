"""Execution of Supabase queries with storage failures as domain errors."""

from typing import Any

import httpx
from postgrest.exceptions import APIError

from pcf_tracker.domain.errors import PersistenceError


def execute(query: Any, failure_message: str) -> Any:
    """Run a PostgREST query, raising ``PersistenceError`` if storage fails."""
    try:
        return query.execute()
    except (APIError, httpx.HTTPError) as exc:
        raise PersistenceError(failure_message) from exc
