"""
Document store adapter.

Read-side view of posts for the search engine: filtered substring pages,
id lookups for vector hits, and single-post reads for the indexing worker.
Each call opens its own session so concurrent calls never share one.

Dependencies: sqlalchemy, blogsearch.boundary.db.CRUD
System role: Lexical search backend and post reader
"""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from blogsearch.boundary.db.CRUD.post_crud import post_crud
from blogsearch.core.exceptions import DocumentStoreError
from blogsearch.models.document import Document, DocumentFilters

logger = logging.getLogger(__name__)


class DocumentStore(ABC):
    """Read access to documents for search and indexing."""

    @abstractmethod
    async def find_by_substring(
        self,
        query: str,
        filters: DocumentFilters,
        page: int,
        page_size: int,
    ) -> tuple[list[Document], int]:
        """
        One page of documents whose title, body or brief contains query.

        Args:
            query: Case-insensitive substring; blank lists every document
            filters: Publish status, category and tag filters
            page: 1-based page number
            page_size: Documents per page

        Returns:
            tuple: (documents newest first, total matching count)

        Raises:
            DocumentStoreError: If the store cannot be queried
        """

    @abstractmethod
    async def find_by_ids(
        self,
        ids: Sequence[uuid.UUID],
        filters: DocumentFilters,
    ) -> list[Document]:
        """Documents among ids that pass filters; order unspecified."""

    @abstractmethod
    async def get_by_id(self, document_id: uuid.UUID) -> Document | None:
        """One document regardless of publish status, or None."""


class SqlDocumentStore(DocumentStore):
    """DocumentStore over the posts table."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def _fetch_page(
        self,
        query: str,
        filters: DocumentFilters,
        offset: int,
        limit: int,
    ) -> list[Document]:
        async with self._session_factory() as session:
            rows = await post_crud.search_page(session, query, filters, offset, limit)
            return [Document.from_model(row) for row in rows]

    async def _count(self, query: str, filters: DocumentFilters) -> int:
        async with self._session_factory() as session:
            return await post_crud.count_matching(session, query, filters)

    async def find_by_substring(
        self,
        query: str,
        filters: DocumentFilters,
        page: int,
        page_size: int,
    ) -> tuple[list[Document], int]:
        term = query.strip()
        offset = (page - 1) * page_size
        try:
            documents, total = await asyncio.gather(
                self._fetch_page(term, filters, offset, page_size),
                self._count(term, filters),
            )
        except SQLAlchemyError as e:
            logger.error(
                f"{__name__}:find_by_substring - {type(e).__name__}: {e}",
                extra={"page": page, "page_size": page_size},
            )
            raise DocumentStoreError(
                f"Substring query failed: {e}",
                operation="find_by_substring",
            ) from e

        logger.debug(
            f"{__name__}:find_by_substring - {len(documents)} of {total} on page {page}"
        )
        return documents, total

    async def find_by_ids(
        self,
        ids: Sequence[uuid.UUID],
        filters: DocumentFilters,
    ) -> list[Document]:
        if not ids:
            return []
        try:
            async with self._session_factory() as session:
                rows = await post_crud.get_by_ids(session, ids, filters)
                return [Document.from_model(row) for row in rows]
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                f"Id lookup failed: {e}",
                operation="find_by_ids",
                details={"id_count": len(ids)},
            ) from e

    async def get_by_id(self, document_id: uuid.UUID) -> Document | None:
        try:
            async with self._session_factory() as session:
                row = await post_crud.get_by_id(session, document_id)
                return Document.from_model(row) if row is not None else None
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                f"Post lookup failed: {e}",
                operation="get_by_id",
                details={"document_id": str(document_id)},
            ) from e
