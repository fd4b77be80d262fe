import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from postgrest.exceptions import APIError
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class DataStoreError(Exception):
    """A table call failed on the backend or on the wire."""

    def __init__(self, table: str, operation: str, message: str):
        super().__init__(f"{operation} on {table} failed: {message}")
        self.table = table
        self.operation = operation
        self.message = message


def parse_rows(table: str, model: Type[M], rows: List[Dict[str, Any]]) -> List[M]:
    """Validate fetched rows; a row that does not fit the model fails the whole read."""
    try:
        return [model.model_validate(row) for row in rows]
    except ValidationError as e:
        logger.warning(f"[DATA] select {table} returned a malformed row: {e.errors()[0]['msg']}")
        raise DataStoreError(table, "select", f"malformed {model.__name__} row") from e


class DataStore:
    """
    Generic per-table operations over the Supabase PostgREST client.

    Joins are expressed as query-time expansions in `columns`,
    e.g. "*, courses(title)".
    """

    def __init__(self, client):
        self._client = client

    def _execute(self, table: str, operation: str, query) -> List[Dict[str, Any]]:
        try:
            response = query.execute()
        except APIError as e:
            logger.warning(f"[DATA] {operation} {table} rejected: {e.message}")
            raise DataStoreError(table, operation, e.message or str(e)) from e
        except httpx.HTTPError as e:
            logger.warning(f"[DATA] {operation} {table} transport error: {e}")
            raise DataStoreError(table, operation, str(e)) from e

        return list(response.data or [])

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        query = self._client.table(table).select(columns)
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        if order:
            query = query.order(order, desc=not ascending)
        if limit is not None:
            query = query.limit(limit)
        return self._execute(table, "select", query)

    def insert(self, table: str, row: Dict[str, Any]) -> List[Dict[str, Any]]:
        logger.info(f"[DATA] insert into {table}")
        return self._execute(table, "insert", self._client.table(table).insert(row))

    def update(self, table: str, row_id: str, patch: Dict[str, Any]) -> List[Dict[str, Any]]:
        logger.info(f"[DATA] update {table} id={row_id}")
        query = self._client.table(table).update(patch).eq("id", row_id)
        return self._execute(table, "update", query)

    def upsert(self, table: str, row: Dict[str, Any], on_conflict: str) -> List[Dict[str, Any]]:
        logger.info(f"[DATA] upsert into {table} on_conflict={on_conflict}")
        query = self._client.table(table).upsert(row, on_conflict=on_conflict)
        return self._execute(table, "upsert", query)
