from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from casedesk.analysis.schemas import Analysis, IngestRequest
from casedesk.analysis.service import AnalysisIngestionService
from casedesk.database import get_db
from casedesk.documents.schemas import DocumentResponse, DocumentUpdate
from casedesk.documents.service import DocumentService
from casedesk.exceptions import NotFoundError

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: int,
    db: AsyncSession = Depends(get_db),
):
    service = DocumentService(db)
    return await service.get_document(document_id)


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: int,
    document: DocumentUpdate,
    db: AsyncSession = Depends(get_db),
):
    service = DocumentService(db)
    return await service.update_document(document_id, document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: int,
    db: AsyncSession = Depends(get_db),
):
    service = DocumentService(db)
    await service.delete_document(document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{document_id}/analysis", response_model=Analysis)
async def ingest_analysis(
    document_id: int,
    payload: IngestRequest,
    db: AsyncSession = Depends(get_db),
):
    """Store the language model's raw response as the document's analysis.

    Malformed responses are accepted and stored as a degraded analysis.
    """
    service = AnalysisIngestionService(db)
    return await service.ingest(document_id, payload.raw_response, payload.document_type_hint)


@router.get("/{document_id}/analysis", response_model=Analysis)
async def get_analysis(
    document_id: int,
    db: AsyncSession = Depends(get_db),
):
    service = AnalysisIngestionService(db)
    analysis = await service.get_analysis(document_id)
    if analysis is None:
        raise NotFoundError("Analysis for document", document_id)
    return analysis
