"""
Integration tests for SqlDocumentStore against SQLite.

System role: Verification of lexical matching, filters, ordering and lookups
"""

import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from blogsearch.boundary.db.document_store import SqlDocumentStore
from blogsearch.core.exceptions import DocumentStoreError
from blogsearch.models.document import DocumentFilters

PUBLISHED = DocumentFilters()
ANY_STATUS = DocumentFilters(only_published=False)


@pytest.fixture
def store(session_factory) -> SqlDocumentStore:
    return SqlDocumentStore(session_factory)


class TestFindBySubstring:
    """Test suite for substring pages."""

    async def test_matches_title_brief_and_body_case_insensitively(self, store, post_factory) -> None:
        # Arrange
        in_title = await post_factory("Intro to PYTHON", age_days=3)
        in_brief = await post_factory("Tips", brief="some python tricks", age_days=2)
        in_body = await post_factory("Notes", content="I wrote Python today", age_days=1)
        await post_factory("Rust only", content="borrow checker")

        # Act
        documents, total = await store.find_by_substring("python", PUBLISHED, 1, 10)

        # Assert
        assert total == 3
        assert [doc.id for doc in documents] == [in_body, in_brief, in_title]

    async def test_unpublished_posts_hidden_by_default(self, store, post_factory) -> None:
        visible = await post_factory("python one")
        draft = await post_factory("python draft", published=False)

        documents, total = await store.find_by_substring("python", PUBLISHED, 1, 10)
        all_documents, all_total = await store.find_by_substring("python", ANY_STATUS, 1, 10)

        assert [doc.id for doc in documents] == [visible]
        assert total == 1
        assert {doc.id for doc in all_documents} == {visible, draft}
        assert all_total == 2

    async def test_category_and_tag_filters(self, store, post_factory) -> None:
        # Arrange
        both = await post_factory("python ml", category="ai", tags=["ml", "python"])
        await post_factory("python web", category="web", tags=["python"])
        await post_factory("python ai news", category="ai", tags=["news"])

        # Act
        by_category, category_total = await store.find_by_substring(
            "python", DocumentFilters(category="ai"), 1, 10
        )
        by_both, both_total = await store.find_by_substring(
            "python", DocumentFilters(category="ai", tag="ml"), 1, 10
        )

        # Assert
        assert category_total == 2
        assert len(by_category) == 2
        assert both_total == 1
        assert by_both[0].id == both
        assert by_both[0].category == "ai"
        assert sorted(by_both[0].tags) == ["ml", "python"]

    async def test_pagination_with_full_count(self, store, post_factory) -> None:
        ids = [await post_factory(f"python part {i}", age_days=i) for i in range(5)]

        first, total = await store.find_by_substring("python", PUBLISHED, 1, 2)
        third, _ = await store.find_by_substring("python", PUBLISHED, 3, 2)
        beyond, beyond_total = await store.find_by_substring("python", PUBLISHED, 4, 2)

        assert total == 5
        assert [doc.id for doc in first] == ids[:2]
        assert [doc.id for doc in third] == ids[4:]
        assert beyond == []
        assert beyond_total == 5

    async def test_wildcards_match_literally(self, store, post_factory) -> None:
        literal = await post_factory("100% coverage")
        await post_factory("1000 coverage")

        documents, total = await store.find_by_substring("0%", PUBLISHED, 1, 10)

        assert total == 1
        assert documents[0].id == literal

    async def test_blank_query_lists_everything_newest_first(self, store, post_factory) -> None:
        older = await post_factory("first", age_days=2)
        newer = await post_factory("second", age_days=1)

        documents, total = await store.find_by_substring("   ", PUBLISHED, 1, 10)

        assert total == 2
        assert [doc.id for doc in documents] == [newer, older]

    async def test_no_match(self, store, post_factory) -> None:
        await post_factory("python")

        documents, total = await store.find_by_substring("haskell", PUBLISHED, 1, 10)

        assert documents == []
        assert total == 0

    async def test_sql_error_becomes_document_store_error(self) -> None:
        # Arrange
        factory = MagicMock(side_effect=OperationalError("SELECT", {}, Exception("db down")))
        store = SqlDocumentStore(factory)

        # Act & Assert
        with pytest.raises(DocumentStoreError) as exc_info:
            await store.find_by_substring("python", PUBLISHED, 1, 10)

        assert exc_info.value.details["operation"] == "find_by_substring"


class TestLookups:
    """Test suite for id-based reads."""

    async def test_find_by_ids_applies_filters_and_skips_unknown(self, store, post_factory) -> None:
        live = await post_factory("live")
        draft = await post_factory("draft", published=False)

        found = await store.find_by_ids([live, draft, uuid.uuid4()], PUBLISHED)

        assert [doc.id for doc in found] == [live]

    async def test_find_by_ids_empty(self, store) -> None:
        assert await store.find_by_ids([], PUBLISHED) == []

    async def test_get_by_id_ignores_publish_status(self, store, post_factory) -> None:
        draft = await post_factory("draft", content="body text", brief="b", published=False)

        document = await store.get_by_id(draft)

        assert document is not None
        assert document.title == "draft"
        assert document.body == "body text"
        assert document.published is False
        assert document.published_at is None

    async def test_get_by_id_missing(self, store) -> None:
        assert await store.get_by_id(uuid.uuid4()) is None
