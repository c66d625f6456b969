"""
Happy Thoughts API — Thought Service Unit Tests
================================================

What:  Tests for the ResourceService operations through ThoughtService.
How:   Uses a mock AsyncSession, so no database is involved.

What we test:
    ✅ get: found, not found, malformed id
    ✅ list: empty result raises NoMatchesError, no LIMIT unless asked
    ✅ create: counter starts at zero, author is recorded
    ✅ like: missing row raises NotFoundError
    ✅ driver errors surface as DatabaseError
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from happythoughts.exceptions import DatabaseError, NoMatchesError, NotFoundError
from happythoughts.models.thought import Thought
from happythoughts.schemas.thought import ThoughtCreate, ThoughtUpdate
from happythoughts.services.thought_service import ThoughtService


def _result(record=None, records=None, rowcount=1):
    """Stand-in for the Result object returned by session.execute()."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = record
    result.scalars.return_value.all.return_value = records or []
    result.rowcount = rowcount
    return result


def _thought(**overrides):
    values = {
        "id": uuid4(),
        "message": "Sunshine after rain",
        "hearts": 2,
        "category": "happy",
        "created_at": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        "user_id": None,
    }
    values.update(overrides)
    return Thought(**values)


class TestThoughtServiceGet:

    def setup_method(self):
        self.service = ThoughtService()

    @pytest.mark.asyncio
    async def test_get_existing(self, mock_db_session):
        thought = _thought()
        mock_db_session.execute.return_value = _result(record=thought)

        result = await self.service.get(mock_db_session, str(thought.id))

        assert result.id == thought.id
        assert result.hearts == 2
        assert result.category.value == "happy"

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result(record=None)
        missing = uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get(mock_db_session, str(missing))
        assert str(missing) in exc_info.value.message

    @pytest.mark.asyncio
    async def test_malformed_id_is_database_error(self, mock_db_session):
        """A malformed id never reaches the database and is reported as a store error."""
        with pytest.raises(DatabaseError):
            await self.service.get(mock_db_session, "not-a-uuid")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_driver_error_becomes_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("connection reset by peer")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.get(mock_db_session, str(uuid4()))
        assert "connection reset" not in exc_info.value.message
        assert exc_info.value.context["error_type"] == "RuntimeError"


class TestThoughtServiceList:

    def setup_method(self):
        self.service = ThoughtService()

    @pytest.mark.asyncio
    async def test_empty_result_raises_no_matches(self, mock_db_session):
        mock_db_session.execute.return_value = _result(records=[])

        with pytest.raises(NoMatchesError) as exc_info:
            await self.service.list(mock_db_session, {"category": "calm", "page": "3"})
        assert exc_info.value.context["filters"] == {"category": "calm"}

    @pytest.mark.asyncio
    async def test_returns_responses(self, mock_db_session):
        records = [_thought(hearts=5), _thought(hearts=1)]
        mock_db_session.execute.return_value = _result(records=records)

        results = await self.service.list(mock_db_session, {})

        assert [r.hearts for r in results] == [5, 1]
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_limit_unless_requested(self, mock_db_session):
        mock_db_session.execute.return_value = _result(records=[_thought()])

        await self.service.list(mock_db_session, {})
        unlimited = mock_db_session.execute.call_args[0][0]
        await self.service.list(mock_db_session, {}, limit=7)
        limited = mock_db_session.execute.call_args[0][0]

        assert "LIMIT" not in str(unlimited).upper()
        assert "LIMIT" in str(limited).upper()


class TestThoughtServiceWrite:

    def setup_method(self):
        self.service = ThoughtService()

    @pytest.mark.asyncio
    async def test_create_starts_at_zero_hearts(self, mock_db_session):
        author = uuid4()

        async def assign_defaults():
            record = mock_db_session.add.call_args[0][0]
            record.id = uuid4()
            record.created_at = datetime.now(timezone.utc)

        mock_db_session.flush = AsyncMock(side_effect=assign_defaults)

        result = await self.service.create(
            mock_db_session,
            ThoughtCreate(message="  Tea and a good book  ", category="calm"),
            user_id=author,
        )

        assert result.hearts == 0
        assert result.message == "Tea and a good book"
        assert result.category.value == "calm"
        assert result.user_id == author
        mock_db_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_update_applies_only_supplied_fields(self, mock_db_session):
        thought = _thought(message="Original message", hearts=3)
        mock_db_session.execute.return_value = _result(record=thought)

        result = await self.service.update(
            mock_db_session, str(thought.id), ThoughtUpdate(category="funny")
        )

        assert result.category.value == "funny"
        assert result.message == "Original message"
        assert result.hearts == 3

    @pytest.mark.asyncio
    async def test_like_missing_raises_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result(rowcount=0)

        with pytest.raises(NotFoundError):
            await self.service.like(mock_db_session, str(uuid4()))
        # Only the UPDATE ran; nothing was re-read
        assert mock_db_session.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_delete_returns_snapshot(self, mock_db_session):
        thought = _thought(hearts=9)
        mock_db_session.execute.return_value = _result(record=thought)

        result = await self.service.delete(mock_db_session, str(thought.id))

        assert result.id == thought.id
        assert result.hearts == 9
        mock_db_session.delete.assert_awaited_once_with(thought)
