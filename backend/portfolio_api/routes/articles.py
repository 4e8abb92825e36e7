"""
Portfolio API — Article Route Handlers
========================================

What:  GET /articles (list) and GET /articles/{article_id} (detail).
How:   Extracts path parameters, delegates to ArticleService, returns JSON.
Who:   Called by the frontend blog pages.

The identifier is taken as a plain string so that a malformed id is reported
as our 400 "Invalid article ID format" rather than FastAPI's 422.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.database import get_db_session
from portfolio_api.schemas.portfolio import Document, DocumentList, ErrorResponse
from portfolio_api.services.document_service import article_service

router = APIRouter(tags=["Articles"])


@router.get(
    "/articles",
    response_model=DocumentList,
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all articles",
)
async def list_articles(db: AsyncSession = Depends(get_db_session)) -> DocumentList:
    """Every article, in store order. An empty store gives []."""
    return await article_service.list_documents(db)


@router.get(
    "/articles/{article_id}",
    response_model=Document,
    responses={
        400: {"description": "Malformed article ID", "model": ErrorResponse},
        404: {"description": "Article not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Get a single article by ID",
)
async def get_article(
    article_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Document:
    return await article_service.get_document(db, article_id)
