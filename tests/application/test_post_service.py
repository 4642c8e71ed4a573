"""
Tests for PostService.

System role: Verification of post writes and the index jobs they schedule
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select

from blogsearch.application.services.indexing_service import IndexingService
from blogsearch.application.services.post_service import PostService
from blogsearch.boundary.db.CRUD.post_crud import post_crud
from blogsearch.boundary.db.models.index_job_model import IndexAction
from blogsearch.boundary.db.models.post_model import PostModel


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def indexing() -> AsyncMock:
    return AsyncMock(spec=IndexingService)


@pytest.fixture
def service(db, indexing) -> PostService:
    return PostService(db, indexing)


class TestCreatePost:
    async def test_creates_post_and_schedules_index(self, service, indexing, session_factory) -> None:
        # Act
        document = await service.create_post(
            "Hello",
            content="body",
            brief="summary",
            published=True,
            category="ai",
            tags=["ml", "intro"],
        )

        # Assert
        indexing.schedule.assert_awaited_once_with(document.id, IndexAction.INDEX)
        assert document.published is True
        assert document.published_at is not None
        assert document.category == "ai"
        assert sorted(document.tags) == ["intro", "ml"]

        async with session_factory() as session:
            stored = await post_crud.get_by_id(session, document.id)
        assert stored.title == "Hello"

    async def test_draft_has_no_publish_time(self, service) -> None:
        document = await service.create_post("Draft")

        assert document.published is False
        assert document.published_at is None

    async def test_post_survives_scheduling_failure(self, service, indexing, session_factory) -> None:
        indexing.schedule.side_effect = RuntimeError("queue down")

        document = await service.create_post("Kept", content="body")

        assert document.title == "Kept"

        async with session_factory() as session:
            posts = (await session.execute(select(PostModel))).scalars().all()
        assert [post.title for post in posts] == ["Kept"]


class TestUpdatePost:
    async def test_text_change_schedules_reindex(self, service, indexing) -> None:
        document = await service.create_post("Old", content="body")
        indexing.schedule.reset_mock()

        updated = await service.update_post(document.id, title="New")

        assert updated.title == "New"
        indexing.schedule.assert_awaited_once_with(document.id, IndexAction.REINDEX)

    async def test_metadata_change_does_not_reindex(self, service, indexing) -> None:
        document = await service.create_post("Same", content="body")
        indexing.schedule.reset_mock()

        updated = await service.update_post(
            document.id, title="Same", brief="new brief", published=True, tags=["x"]
        )

        assert updated.brief == "new brief"
        assert updated.published is True
        assert updated.published_at is not None
        assert updated.tags == ["x"]
        indexing.schedule.assert_not_awaited()

    async def test_missing_post_returns_none(self, service, indexing) -> None:
        assert await service.update_post(uuid.uuid4(), title="x") is None
        indexing.schedule.assert_not_awaited()


class TestDeletePost:
    async def test_delete_schedules_remove(self, service, indexing) -> None:
        document = await service.create_post("Gone")
        indexing.schedule.reset_mock()

        assert await service.delete_post(document.id) is True
        indexing.schedule.assert_awaited_once_with(document.id, IndexAction.REMOVE)

    async def test_delete_missing_post(self, service, indexing) -> None:
        assert await service.delete_post(uuid.uuid4()) is False
        indexing.schedule.assert_not_awaited()
