"""Tests for CommentService."""

import pytest
from unittest.mock import MagicMock

from pymongo.errors import NetworkTimeout

from readly.exceptions import DatabaseError
from readly.services.comment_service import CommentService


class TestCommentService:

    def setup_method(self):
        self.service = CommentService()

    @pytest.mark.asyncio
    async def test_create_and_list_comments(self, database):
        await self.service.create_comment(database, {"blogId": "b1", "comment": "first"})
        await self.service.create_comment(database, {"blogId": "b2", "comment": "second"})

        comments = await self.service.list_comments(database)

        # Unordered and unfiltered: compare as a set
        assert {c["comment"] for c in comments} == {"first", "second"}
        assert all(isinstance(c["_id"], str) for c in comments)

    @pytest.mark.asyncio
    async def test_blog_reference_is_not_validated(self, database):
        ack = await self.service.create_comment(database, {"blogId": "does-not-exist"})
        assert ack.acknowledged is True

    @pytest.mark.asyncio
    async def test_list_comments_database_failure(self, database):
        database.comments.find = MagicMock(side_effect=NetworkTimeout("timed out"))

        with pytest.raises(DatabaseError):
            await self.service.list_comments(database)
