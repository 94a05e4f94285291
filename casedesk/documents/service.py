import logging
from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from casedesk.analysis.schemas import Analysis
from casedesk.cases.models import Case
from casedesk.documents.models import Document
from casedesk.documents.schemas import DocumentCreate, DocumentUpdate
from casedesk.exceptions import NotFoundError, StoreError, ValidationError
from casedesk.shared.models import utcnow
from casedesk.shared.service import BaseService

logger = logging.getLogger(__name__)


def _require_name(value) -> str:
    name = value.strip() if isinstance(value, str) else ""
    if not name:
        raise ValidationError("Document name must not be empty", field="document_name")
    return name


class DocumentService(BaseService):

    async def _require_case(self, case_id: int) -> None:
        result = await self._execute(select(Case.id).where(Case.id == case_id), "lookup_case")
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Case", case_id)

    async def create_document(self, case_id: int, document_in: DocumentCreate) -> Document:
        name = _require_name(document_in.document_name)
        await self._require_case(case_id)

        doc = Document(
            case_id=case_id,
            document_name=name,
            storage_path=document_in.storage_path,
            event_date=document_in.event_date,
            document_type=document_in.document_type,
        )
        self.db.add(doc)
        try:
            await self.db.commit()
        except IntegrityError:
            # Case deleted between the existence check and the insert
            await self.db.rollback()
            raise NotFoundError("Case", case_id)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Creating document for case {case_id} failed")
            raise StoreError("create_document") from e

        await self.db.refresh(doc)
        logger.info(f"Document {doc.id} created for case {case_id}")
        return doc

    async def get_document(self, document_id: int) -> Document:
        result = await self._execute(
            select(Document).where(Document.id == document_id), "get_document"
        )
        doc = result.scalars().first()
        if not doc:
            raise NotFoundError("Document", document_id)
        return doc

    async def list_documents(self, case_id: int) -> List[Document]:
        """Case timeline: event date ascending, undated documents last, then creation order."""
        await self._require_case(case_id)

        result = await self._execute(
            select(Document)
            .where(Document.case_id == case_id)
            .order_by(
                Document.event_date.is_(None),
                Document.event_date.asc(),
                Document.created_at.asc(),
                Document.id.asc(),
            ),
            "list_documents",
        )
        return list(result.scalars().all())

    async def update_document(self, document_id: int, document_in: DocumentUpdate) -> Document:
        doc = await self.get_document(document_id)

        update_data = document_in.model_dump(exclude_unset=True)
        if "document_name" in update_data:
            update_data["document_name"] = _require_name(update_data["document_name"])
        for field, value in update_data.items():
            setattr(doc, field, value)

        await self._commit("update_document")
        await self.db.refresh(doc)
        return doc

    async def delete_document(self, document_id: int) -> None:
        doc = await self.get_document(document_id)
        await self.db.delete(doc)
        await self._commit("delete_document")
        logger.info(f"Document {document_id} deleted")

    async def update_document_analysis(self, document_id: int, analysis: Analysis) -> Document:
        """Replace the stored analysis wholesale in a single UPDATE.

        The only write path for ``ai_analysis``. Concurrent calls for the same
        document resolve last-write-wins.
        """
        result = await self._execute(
            update(Document)
            .where(Document.id == document_id)
            .values(
                ai_analysis=analysis.to_storage(),
                document_type=analysis.document_type,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False),
            "update_document_analysis",
        )
        if result.rowcount == 0:
            raise NotFoundError("Document", document_id)
        await self._commit("update_document_analysis")

        doc = await self.db.get(Document, document_id, populate_existing=True)
        if doc is None:
            raise NotFoundError("Document", document_id)
        return doc
