"""
Portfolio API — Search Route Handler
======================================

What:  GET /search?query=Q, the site-wide article search.
How:   Passes the raw query parameter to ArticleService.search, which rejects a
       missing/blank query and runs one title-or-content substring query.

Example:
    GET /search?query=cat
    → 200 [{"id": "...", "title": "Cats rule", ...}, {"id": "...", "content": "I like cats", ...}]
    GET /search?query=zzz → 200 []
    GET /search           → 400 {"message": "Search query is required"}
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.database import get_db_session
from portfolio_api.schemas.portfolio import DocumentList, ErrorResponse
from portfolio_api.services.document_service import article_service

router = APIRouter(tags=["Search"])


@router.get(
    "/search",
    response_model=DocumentList,
    responses={
        400: {"description": "Missing search query", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Search articles by title or content",
)
async def search_articles(
    query: Optional[str] = Query(
        default=None,
        description="Case-insensitive substring matched against article title or content",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> DocumentList:
    return await article_service.search(db, query)
