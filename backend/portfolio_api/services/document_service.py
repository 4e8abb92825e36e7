"""
Portfolio API — Document Services (Articles & Projects)
=========================================================

What:  Read access to the articles and projects collections, plus article search.
How:   Each service issues one query per call through the request's
       AsyncSession and returns plain JSON-ready documents. Store failures are
       caught here and re-raised as StoreError; a missing document becomes
       NotFoundError; a malformed identifier becomes ValidationError before any
       query is issued.
Who:   Called by the route handlers in portfolio_api.routes.

Search contract:
    One query matching articles whose title OR content contains the term as a
    case-insensitive substring. The union is returned in store order; no
    ranking is applied. The term is matched literally (LIKE wildcards escaped).
"""

import logging
from typing import Any, Dict, List, Type
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.exceptions import NotFoundError, StoreError, ValidationError
from portfolio_api.models.document import Article, Project

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def parse_identifier(value: str, resource: str) -> UUID:
    """
    Parse a path identifier into the store's native UUID.

    Raises:
        ValidationError: value is not a syntactically valid identifier (→ 400)
    """
    try:
        return UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(
            message=f"Invalid {resource} ID format",
            field="id",
            context={"resource": resource, "value": value},
        )


def substring_pattern(term: str) -> str:
    """Build a LIKE pattern matching `term` literally anywhere in a column."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class DocumentService:
    """
    Read-only access to one document collection.

    Subclasses set `model` and `resource`; the resource name drives every
    client-facing message ("Failed to fetch projects", "Project not found",
    "Invalid project ID format").
    """

    model: Type[Any]
    resource: str

    @property
    def store_order(self):
        return (self.model.created_at.asc(), self.model.id.asc())

    async def list_documents(self, db: AsyncSession) -> List[Dict[str, Any]]:
        """
        Return every document in the collection, in store order.

        Raises:
            StoreError: the query failed (→ 500)
        """
        try:
            result = await db.execute(select(self.model).order_by(*self.store_order))
            rows = list(result.scalars().all())
        except Exception as e:
            logger.error("Error fetching %ss: %s", self.resource, e, exc_info=True)
            raise StoreError(
                message=f"Failed to fetch {self.resource}s",
                error=str(e),
                context={"error_type": type(e).__name__},
            )
        return [row.to_document() for row in rows]

    async def get_document(self, db: AsyncSession, raw_id: str) -> Dict[str, Any]:
        """
        Return one document by identifier.

        The identifier is validated before the store is touched.

        Raises:
            ValidationError: raw_id is not a valid identifier (→ 400)
            NotFoundError: no document has this identifier (→ 404)
            StoreError: the query failed (→ 500)
        """
        document_id = parse_identifier(raw_id, self.resource)

        try:
            result = await db.execute(
                select(self.model).where(self.model.id == document_id)
            )
            row = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error fetching %s %s: %s", self.resource, document_id, e, exc_info=True)
            raise StoreError(
                message=f"Failed to fetch {self.resource}",
                error=str(e),
                context={"resource_id": str(document_id)},
            )

        if row is None:
            raise NotFoundError(resource=self.resource, resource_id=str(document_id))
        return row.to_document()


class ArticleService(DocumentService):
    """Articles collection, with substring search over title and content."""

    model = Article
    resource = "article"

    async def search(self, db: AsyncSession, query: str | None) -> List[Dict[str, Any]]:
        """
        Case-insensitive substring search over article title or content.

        Args:
            query: Raw `query` parameter; surrounding whitespace is ignored.

        Returns:
            Matching articles in store order; an empty list when nothing matches.

        Raises:
            ValidationError: query is missing or blank (→ 400)
            StoreError: the query failed (→ 500)
        """
        term = (query or "").strip()
        if not term:
            raise ValidationError(message="Search query is required", field="query")

        pattern = substring_pattern(term)
        statement = (
            select(Article)
            .where(
                or_(
                    Article.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Article.content.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(*self.store_order)
        )

        try:
            result = await db.execute(statement)
            rows = list(result.scalars().all())
        except Exception as e:
            logger.error("Error searching articles for %r: %s", term, e, exc_info=True)
            raise StoreError(
                message="Failed to search articles",
                error=str(e),
                context={"query": term},
            )

        logger.debug("Search %r matched %d articles", term, len(rows))
        return [row.to_document() for row in rows]


class ProjectService(DocumentService):
    model = Project
    resource = "project"


# ── Singleton Instances ───────────────────────────────────────────────────
# Stateless; the session is passed into every call
article_service = ArticleService()
project_service = ProjectService()
