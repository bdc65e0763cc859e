"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the "single row or None" lookup every
repository in this codebase needs.
"""

from typing import Any, Optional, TypeVar, Generic
from supabase import Client, PostgrestAPIError

from .database import NOT_FOUND_CODE


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _fetch_single() for point lookups where "no row" is not an error

    Example:
        class ItemRepository(BaseRepository[InventoryItem]):
            def get_item(self, item_id: str) -> Optional[InventoryItem]:
                row = self._fetch_single("inventory_items", "*", item_id)
                return InventoryItem(**row) if row else None
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _fetch_single(
        self,
        table: str,
        columns: str,
        row_id: str,
        id_column: str = "id",
    ) -> Optional[dict[str, Any]]:
        """
        Fetch exactly one row by key.

        Returns None when the row does not exist. Any other PostgREST
        failure propagates to the caller.
        """
        try:
            result = (
                self._db.table(table)
                .select(columns)
                .eq(id_column, row_id)
                .single()
                .execute()
            )
        except PostgrestAPIError as e:
            if e.code == NOT_FOUND_CODE:
                return None
            raise
        return result.data or None
