"""
Database helper functions for the NFT record table in Supabase.

Provides clean interfaces for creating, listing, fetching and
updating NFT records. Store failures propagate to the routes; a
missing row is reported as NotFoundError.
"""

from typing import Any, Dict, Optional

from ruru_nft.core.config import settings
from ruru_nft.core.exceptions import NotFoundError, UpstreamError
from ruru_nft.core.logger import logger
from ruru_nft.core.supabase_client import get_supabase

# Postgres rejects malformed ids (e.g. a non-uuid primary key) with this code
INVALID_ID_CODES = frozenset({"22P02"})


class DatabaseManager:
    """Handles all record store operations for NFTs."""

    def __init__(self, table: Optional[str] = None):
        self.table = table or settings.NFT_TABLE

    def _query(self):
        return get_supabase().table(self.table)

    @staticmethod
    def _not_found(nft_id: str, details: Optional[str] = None) -> NotFoundError:
        return NotFoundError("NFT not found", details or f"No NFT with id {nft_id}")

    def create_nft(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new NFT record.

        Args:
            fields: Column values; the store assigns the id

        Returns:
            The created document
        """
        response = self._query().insert(fields).execute()
        if not response.data:
            raise UpstreamError(
                "Error creating NFT",
                f"Insert into {self.table} returned no rows; check the table's select policy",
            )
        document = response.data[0]

        logger.info(f"Created NFT {document.get('id')} for {fields.get('publicKey')}")
        return document

    def list_nfts(self, public_key: Optional[str] = None) -> Dict[str, Any]:
        """
        List NFT records, optionally only those owned by one public key.

        Returns:
            Dict with ``total`` and ``documents``
        """
        query = self._query().select("*", count="exact")
        if public_key is not None:
            query = query.eq("publicKey", public_key)

        response = query.execute()
        documents = response.data or []
        total = response.count if response.count is not None else len(documents)

        return {"total": total, "documents": documents}

    def get_nft(self, nft_id: str) -> Dict[str, Any]:
        """Retrieve one NFT record by id."""
        try:
            response = self._query().select("*").eq("id", nft_id).execute()
        except Exception as e:
            if getattr(e, "code", None) in INVALID_ID_CODES:
                raise self._not_found(nft_id, str(e)) from e
            raise

        if not response.data:
            raise self._not_found(nft_id)
        return response.data[0]

    def update_nft(self, nft_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a partial update and return the updated record."""
        try:
            response = self._query().update(fields).eq("id", nft_id).execute()
        except Exception as e:
            if getattr(e, "code", None) in INVALID_ID_CODES:
                raise self._not_found(nft_id, str(e)) from e
            raise

        if not response.data:
            raise self._not_found(nft_id)

        logger.info(f"NFT {nft_id} updated: {sorted(fields)}")
        return response.data[0]
