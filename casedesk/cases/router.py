from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from casedesk.database import get_db
from casedesk.cases.schemas import (
    CaseCreate,
    CaseDetailResponse,
    CasePage,
    CaseResponse,
    CaseUpdate,
    DashboardStats,
)
from casedesk.cases.service import CaseQueryService, CaseService
from casedesk.documents.schemas import DocumentCreate, DocumentResponse
from casedesk.documents.service import DocumentService

router = APIRouter(prefix="/cases", tags=["cases"])


# Pagination arrives as raw strings so malformed values fall back to defaults instead of a 422
@router.get("", response_model=CasePage)
async def list_cases(
    page: Optional[str] = None,
    page_size: Optional[str] = None,
    search: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    service = CaseQueryService(db)
    return await service.list_cases(page, page_size, search, status_filter)


@router.post("", response_model=CaseResponse, status_code=status.HTTP_201_CREATED)
async def create_case(
    case: CaseCreate,
    db: AsyncSession = Depends(get_db),
):
    service = CaseService(db)
    return await service.create_case(case)


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(db: AsyncSession = Depends(get_db)):
    service = CaseQueryService(db)
    return await service.get_dashboard_stats()


@router.get("/{case_id}", response_model=CaseDetailResponse)
async def get_case(
    case_id: int,
    db: AsyncSession = Depends(get_db),
):
    service = CaseQueryService(db)
    return await service.get_case(case_id)


@router.patch("/{case_id}", response_model=CaseDetailResponse)
async def update_case(
    case_id: int,
    case: CaseUpdate,
    db: AsyncSession = Depends(get_db),
):
    await CaseService(db).update_case(case_id, case)
    return await CaseQueryService(db).get_case(case_id)


@router.delete("/{case_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_case(
    case_id: int,
    db: AsyncSession = Depends(get_db),
):
    service = CaseService(db)
    await service.delete_case(case_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{case_id}/documents", response_model=List[DocumentResponse])
async def list_documents(
    case_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Documents of a case in timeline order."""
    service = DocumentService(db)
    return await service.list_documents(case_id)


@router.post(
    "/{case_id}/documents",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_document(
    case_id: int,
    document: DocumentCreate,
    db: AsyncSession = Depends(get_db),
):
    """Register a document uploaded by the storage collaborator."""
    service = DocumentService(db)
    return await service.create_document(case_id, document)
