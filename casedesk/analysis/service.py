import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from casedesk.analysis.normalizer import normalize_analysis
from casedesk.analysis.schemas import Analysis
from casedesk.documents.service import DocumentService

logger = logging.getLogger(__name__)


class AnalysisIngestionService:
    """Attach a model response to a document.

    The raw response is passed in already fetched; this service never talks
    to the language model itself.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.documents = DocumentService(db)

    async def ingest(
        self,
        document_id: int,
        raw_response: str,
        document_type_hint: Optional[str] = None,
    ) -> Analysis:
        """Normalize ``raw_response`` and store it as the document's analysis.

        Raises NotFoundError if the document does not exist, including when
        it is deleted between the lookup and the write. Returns the analysis
        as re-read from the stored row.
        """
        doc = await self.documents.get_document(document_id)
        hint = document_type_hint if document_type_hint is not None else doc.document_type

        analysis = normalize_analysis(raw_response, document_type_hint=hint)
        stored = await self.documents.update_document_analysis(document_id, analysis)

        result = Analysis.from_storage(stored.ai_analysis)
        logger.info(
            f"Analysis ingested for document {document_id} "
            f"(type={result.document_type}, confidence={result.confidence_score:.2f}, "
            f"degraded={result.is_degraded})"
        )
        return result

    async def get_analysis(self, document_id: int) -> Optional[Analysis]:
        doc = await self.documents.get_document(document_id)
        if doc.ai_analysis is None:
            return None
        return Analysis.from_storage(doc.ai_analysis)
