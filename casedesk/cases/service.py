import logging
import math
from typing import Any, Optional

from sqlalchemy import delete, func, or_, select

from casedesk.cases.models import Case
from casedesk.cases.schemas import (
    CaseCreate,
    CaseDetailResponse,
    CasePage,
    CaseResponse,
    CaseUpdate,
    DashboardStats,
)
from casedesk.config import settings
from casedesk.documents.models import Document
from casedesk.documents.schemas import DocumentResponse
from casedesk.documents.service import DocumentService
from casedesk.exceptions import NotFoundError, ValidationError
from casedesk.shared.models import utcnow
from casedesk.shared.service import BaseService

logger = logging.getLogger(__name__)

# Fields that may never be blank once set
_REQUIRED_TEXT_FIELDS = {"case_name": "Case name", "client_name": "Client name", "status": "Status"}


def _require_text(field: str, value: Any) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValidationError(f"{_REQUIRED_TEXT_FIELDS[field]} must not be empty", field=field)
    return text


def coerce_positive_int(value: Any, default: int) -> int:
    """Parse a pagination input, falling back to ``default`` for anything unusable."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return number if number >= 1 else default


class CaseService(BaseService):
    """Create, update and delete cases."""

    async def create_case(self, case_in: CaseCreate) -> Case:
        case = Case(
            case_name=_require_text("case_name", case_in.case_name),
            client_name=_require_text("client_name", case_in.client_name),
            summary=case_in.summary,
            status=(
                _require_text("status", case_in.status)
                if case_in.status is not None
                else settings.DEFAULT_CASE_STATUS
            ),
            date_opened=case_in.date_opened or utcnow(),
        )
        self.db.add(case)
        await self._commit("create_case")
        await self.db.refresh(case)
        logger.info(f"Case {case.id} created for client {case.client_name!r}")
        return case

    async def get_case_record(self, case_id: int) -> Case:
        result = await self._execute(select(Case).where(Case.id == case_id), "get_case")
        case = result.scalars().first()
        if not case:
            raise NotFoundError("Case", case_id)
        return case

    async def update_case(self, case_id: int, case_in: CaseUpdate) -> Case:
        case = await self.get_case_record(case_id)

        update_data = case_in.model_dump(exclude_unset=True)
        for field in _REQUIRED_TEXT_FIELDS:
            if field in update_data:
                update_data[field] = _require_text(field, update_data[field])
        if "date_opened" in update_data and update_data["date_opened"] is None:
            raise ValidationError("Date opened must not be empty", field="date_opened")

        for field, value in update_data.items():
            setattr(case, field, value)

        await self._commit("update_case")
        await self.db.refresh(case)
        return case

    async def delete_case(self, case_id: int) -> None:
        """Delete the case and its documents in one transaction."""
        case = await self.get_case_record(case_id)

        result = await self._execute(
            delete(Document)
            .where(Document.case_id == case_id)
            .execution_options(synchronize_session=False),
            "delete_case",
        )
        await self.db.delete(case)
        await self._commit("delete_case")
        logger.info(f"Case {case_id} deleted with {result.rowcount} document(s)")


class CaseQueryService(BaseService):
    """Read paths for dashboards and case timelines. Document counts are always live aggregates."""

    def __init__(self, db):
        super().__init__(db)
        self.cases = CaseService(db)
        self.documents = DocumentService(db)

    async def list_cases(
        self,
        page: Any = None,
        page_size: Any = None,
        search_term: Optional[str] = None,
        status: Optional[str] = None,
    ) -> CasePage:
        page = coerce_positive_int(page, 1)
        page_size = min(
            coerce_positive_int(page_size, settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE
        )

        filters = []
        term = search_term.strip() if isinstance(search_term, str) else ""
        if term:
            needle = term.lower()
            filters.append(
                or_(
                    func.lower(Case.case_name).contains(needle, autoescape=True),
                    func.lower(Case.client_name).contains(needle, autoescape=True),
                )
            )
        if isinstance(status, str) and status.strip():
            filters.append(Case.status == status.strip())

        total_result = await self._execute(
            select(func.count(Case.id)).where(*filters), "count_cases"
        )
        total = total_result.scalar() or 0

        # Pages past the end never reach the database, so huge page numbers cannot overflow OFFSET
        offset = (page - 1) * page_size
        items = []
        if offset < total:
            document_count = func.count(Document.id).label("document_count")
            result = await self._execute(
                select(Case, document_count)
                .outerjoin(Document, Document.case_id == Case.id)
                .where(*filters)
                .group_by(Case.id)
                .order_by(Case.created_at.desc(), Case.id.desc())
                .offset(offset)
                .limit(page_size),
                "list_cases",
            )
            items = [
                CaseResponse.model_validate({**case.__dict__, "document_count": count})
                for case, count in result.all()
            ]

        return CasePage(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            page_count=math.ceil(total / page_size),
        )

    async def get_case(self, case_id: int) -> CaseDetailResponse:
        case = await self.cases.get_case_record(case_id)
        documents = await self.documents.list_documents(case_id)
        return CaseDetailResponse.model_validate({
            **case.__dict__,
            "document_count": len(documents),
            "documents": [DocumentResponse.model_validate(d) for d in documents],
        })

    async def get_dashboard_stats(self) -> DashboardStats:
        status_result = await self._execute(
            select(Case.status, func.count(Case.id)).group_by(Case.status), "case_stats"
        )
        cases_by_status = {row[0]: row[1] for row in status_result.all()}

        doc_result = await self._execute(
            select(
                func.count(Document.id),
                func.count(Document.ai_analysis),
                func.count(Document.ai_analysis["rawResponse"].as_string()),
            ),
            "document_stats",
        )
        total_documents, analyzed, degraded = doc_result.one()

        return DashboardStats(
            total_cases=sum(cases_by_status.values()),
            cases_by_status=cases_by_status,
            total_documents=total_documents,
            analyzed_documents=analyzed,
            degraded_analyses=degraded,
        )
