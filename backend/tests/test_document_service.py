"""
Portfolio API — Document Service Unit Tests
=============================================

What:  Tests for ArticleService / ProjectService (list, get, search).
How:   Uses mock DB sessions; no real store involved.

What we test:
    ✅ Listing returns serialized documents in the order the store returned them
    ✅ Malformed identifiers are rejected before any query is issued
    ✅ Unknown identifiers raise NotFoundError
    ✅ Store failures are wrapped in StoreError with the driver's message
    ✅ Search rejects a blank query and escapes LIKE wildcards
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from portfolio_api.exceptions import NotFoundError, StoreError, ValidationError
from portfolio_api.models.document import Article, Project
from portfolio_api.services.document_service import (
    ArticleService,
    ProjectService,
    parse_identifier,
    substring_pattern,
)


def make_article(title="Hello", content="World", attributes=None):
    return Article(
        id=uuid.uuid4(),
        title=title,
        content=content,
        attributes=attributes or {},
        created_at=datetime.now(timezone.utc),
    )


def scalars_result(rows):
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


class TestParseIdentifier:

    def test_valid_uuid(self):
        value = uuid.uuid4()
        assert parse_identifier(str(value), "project") == value

    def test_surrounding_whitespace_ignored(self):
        value = uuid.uuid4()
        assert parse_identifier(f"  {value} ", "project") == value

    @pytest.mark.parametrize("raw", ["", "123", "not-an-id", "65a1f0c2e4b0a1b2c3d4e5f6", "zz" * 16])
    def test_malformed_rejected(self, raw):
        with pytest.raises(ValidationError, match="Invalid project ID format"):
            parse_identifier(raw, "project")


class TestSubstringPattern:

    def test_plain_term(self):
        assert substring_pattern("cat") == "%cat%"

    def test_wildcards_are_escaped(self):
        assert substring_pattern("50%_off") == "%50\\%\\_off%"

    def test_escape_character_is_escaped(self):
        assert substring_pattern("a\\b") == "%a\\\\b%"


class TestDocumentSerialization:

    def test_article_merges_attributes(self):
        article = make_article(attributes={"author": "me", "tags": ["x"]})
        document = article.to_document()

        assert document["id"] == str(article.id)
        assert document["title"] == "Hello"
        assert document["content"] == "World"
        assert document["author"] == "me"
        assert document["tags"] == ["x"]

    def test_reserved_keys_not_overridden_by_attributes(self):
        article = make_article(attributes={"id": "fake", "title": "Other"})
        document = article.to_document()

        assert document["id"] == str(article.id)
        assert document["title"] == "Hello"

    def test_project_is_attributes_plus_id(self):
        project = Project(id=uuid.uuid4(), attributes={"title": "Site"})
        assert project.to_document() == {"title": "Site", "id": str(project.id)}


class TestListDocuments:

    def setup_method(self):
        self.service = ArticleService()

    @pytest.mark.asyncio
    async def test_list_empty(self, mock_db_session):
        mock_db_session.execute.return_value = scalars_result([])

        assert await self.service.list_documents(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_list_preserves_store_order(self, mock_db_session):
        rows = [make_article(title=f"Article {i}") for i in range(3)]
        mock_db_session.execute.return_value = scalars_result(rows)

        result = await self.service.list_documents(mock_db_session)

        assert [doc["title"] for doc in result] == ["Article 0", "Article 1", "Article 2"]
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )

        with pytest.raises(StoreError) as exc_info:
            await self.service.list_documents(mock_db_session)

        assert exc_info.value.message == "Failed to fetch articles"
        assert "connection refused" in exc_info.value.error


class TestGetDocument:

    def setup_method(self):
        self.service = ProjectService()

    @pytest.mark.asyncio
    async def test_get_found(self, mock_db_session):
        project = Project(id=uuid.uuid4(), attributes={"title": "Site"})
        result = MagicMock()
        result.scalar_one_or_none.return_value = project
        mock_db_session.execute.return_value = result

        document = await self.service.get_document(mock_db_session, str(project.id))

        assert document == {"title": "Site", "id": str(project.id)}

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_db_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = result

        with pytest.raises(NotFoundError, match="Project not found"):
            await self.service.get_document(mock_db_session, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_malformed_id_never_queries(self, mock_db_session):
        with pytest.raises(ValidationError, match="Invalid project ID format"):
            await self.service.get_document(mock_db_session, "not-an-id")

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("pool exhausted"))

        with pytest.raises(StoreError) as exc_info:
            await self.service.get_document(mock_db_session, str(uuid.uuid4()))

        assert exc_info.value.message == "Failed to fetch project"
        assert exc_info.value.error == "pool exhausted"


class TestSearch:

    def setup_method(self):
        self.service = ArticleService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", [None, "", "   "])
    async def test_blank_query_rejected_without_querying(self, mock_db_session, query):
        with pytest.raises(ValidationError, match="Search query is required"):
            await self.service.search(mock_db_session, query)

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_single_query_for_title_or_content(self, mock_db_session):
        rows = [make_article(title="Cats rule"), make_article(title="Notes", content="I like cats")]
        mock_db_session.execute.return_value = scalars_result(rows)

        result = await self.service.search(mock_db_session, "cat")

        assert [doc["title"] for doc in result] == ["Cats rule", "Notes"]
        # Union in one statement, never a title query followed by a content query
        mock_db_session.execute.assert_awaited_once()
        statement = str(mock_db_session.execute.await_args.args[0])
        assert "title" in statement and "content" in statement and " OR " in statement

    @pytest.mark.asyncio
    async def test_no_matches_returns_empty_list(self, mock_db_session):
        mock_db_session.execute.return_value = scalars_result([])

        assert await self.service.search(mock_db_session, "nothing") == []

    @pytest.mark.asyncio
    async def test_search_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("timeout"))

        with pytest.raises(StoreError, match="Failed to search articles"):
            await self.service.search(mock_db_session, "cat")
