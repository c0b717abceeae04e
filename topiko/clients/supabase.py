"""Client for Supabase tables over the PostgREST API.

Only the handful of table operations the funnel needs are exposed:
insert, select with equality filters, update and upsert. HTTP failures
propagate as ``httpx.HTTPError`` so callers decide whether they matter.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

logger = structlog.get_logger()

Row = dict[str, Any]


class SupabaseClient:
    """Supabase REST client. Runs in offline mode when URL or key is missing."""

    def __init__(self, url: str = "", api_key: str = "", timeout: float = 10.0) -> None:
        self.url = url.rstrip("/") if url else ""
        self.api_key = api_key
        self.timeout = timeout

    @property
    def is_available(self) -> bool:
        return bool(self.url and self.api_key)

    def _headers(self, prefer: str = "return=minimal") -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Prefer": prefer,
        }

    def _table_url(self, table: str) -> str:
        return f"{self.url}/rest/v1/{table}"

    @staticmethod
    def _eq_params(filters: dict[str, Any]) -> dict[str, str]:
        return {column: f"eq.{value}" for column, value in filters.items()}

    def insert(self, table: str, rows: Row | list[Row]) -> None:
        """Insert one row or a batch of rows."""
        if not self.is_available:
            logger.debug("Supabase not configured, skipping insert", table=table)
            return
        with httpx.Client(timeout=self.timeout) as client:
            resp = client.post(self._table_url(table), headers=self._headers(), json=rows)
            resp.raise_for_status()

    def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        columns: str = "*",
        limit: int | None = None,
    ) -> list[Row]:
        """Return rows matching all equality filters."""
        if not self.is_available:
            logger.debug("Supabase not configured, returning no rows", table=table)
            return []
        params = {"select": columns, **self._eq_params(filters or {})}
        if limit is not None:
            params["limit"] = str(limit)
        with httpx.Client(timeout=self.timeout) as client:
            resp = client.get(self._table_url(table), headers=self._headers(), params=params)
            resp.raise_for_status()
            data = resp.json()
        if not isinstance(data, list):
            return []
        return [row for row in data if isinstance(row, dict)]

    def update(self, table: str, values: Row, filters: dict[str, Any]) -> None:
        """Update rows matching all equality filters."""
        if not self.is_available:
            logger.debug("Supabase not configured, skipping update", table=table)
            return
        with httpx.Client(timeout=self.timeout) as client:
            resp = client.patch(
                self._table_url(table),
                headers=self._headers(),
                params=self._eq_params(filters),
                json=values,
            )
            resp.raise_for_status()

    def upsert(self, table: str, row: Row, on_conflict: str) -> None:
        """Insert a row or merge it into the row sharing ``on_conflict``."""
        if not self.is_available:
            logger.debug("Supabase not configured, skipping upsert", table=table)
            return
        with httpx.Client(timeout=self.timeout) as client:
            resp = client.post(
                self._table_url(table),
                headers=self._headers("resolution=merge-duplicates,return=minimal"),
                params={"on_conflict": on_conflict},
                json=row,
            )
            resp.raise_for_status()
