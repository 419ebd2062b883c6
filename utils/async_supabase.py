"""Async wrapper for Supabase operations to prevent blocking"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional
import logging

from supabase import Client

logger = logging.getLogger(__name__)


class AsyncSupabase:
    """Async wrapper for Supabase client table operations

    supabase-py is synchronous, so each query runs on a thread pool and the
    coroutine awaits the result. Filters use the nested form
    ``{"eq": {field: value}, "gte": {...}, "is_": {field: None}}``.
    """

    def __init__(self, client: Client, max_workers: int = 20):
        self.client = client
        self._executor = ThreadPoolExecutor(max_workers=max_workers)

    async def _run(self, fn):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, fn)

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
        order_desc: bool = False
    ) -> List[Dict[str, Any]]:
        """Run a select and return its rows (an empty list when nothing matches)"""
        def _select():
            query = self.client.table(table).select(columns)

            if filters:
                for key, value in filters.items():
                    if key == "eq":
                        for field, val in value.items():
                            query = query.eq(field, val)
                    elif key == "gte":
                        for field, val in value.items():
                            query = query.gte(field, val)
                    elif key == "lte":
                        for field, val in value.items():
                            query = query.lte(field, val)
                    elif key == "is_":
                        for field, val in value.items():
                            query = query.is_(field, "null" if val is None else val)
                    else:
                        raise ValueError(f"Unsupported filter operator: {key}")

            if order_by:
                query = query.order(order_by, desc=order_desc)

            if limit:
                query = query.limit(limit)

            return query.execute()

        response = await self._run(_select)
        return response.data or []

    async def insert(self, table: str, data: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Insert one row and return the representation PostgREST sends back"""
        def _insert():
            return self.client.table(table).insert(data).execute()

        response = await self._run(_insert)
        return response.data or []

    def close(self):
        self._executor.shutdown(wait=False)
