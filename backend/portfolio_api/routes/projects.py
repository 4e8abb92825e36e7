"""
Portfolio API — Project Route Handlers
========================================

What:  GET /projects (list) and GET /projects/{project_id} (detail).
Who:   Called by the frontend projects gallery and project detail page.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.database import get_db_session
from portfolio_api.schemas.portfolio import Document, DocumentList, ErrorResponse
from portfolio_api.services.document_service import project_service

router = APIRouter(tags=["Projects"])


@router.get(
    "/projects",
    response_model=DocumentList,
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all projects",
)
async def list_projects(db: AsyncSession = Depends(get_db_session)) -> DocumentList:
    return await project_service.list_documents(db)


@router.get(
    "/projects/{project_id}",
    response_model=Document,
    responses={
        400: {"description": "Malformed project ID", "model": ErrorResponse},
        404: {"description": "Project not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Get a single project by ID",
)
async def get_project(
    project_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Document:
    """
    Get one project.

    Args:
        project_id: Must parse as a UUID; anything else is rejected with 400
                    before the store is queried.
    """
    return await project_service.get_document(db, project_id)
