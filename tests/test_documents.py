"""Tests for DocumentService."""
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from casedesk.analysis import normalize_analysis
from casedesk.cases.schemas import CaseCreate
from casedesk.cases.service import CaseService
from casedesk.documents.schemas import DocumentCreate, DocumentUpdate
from casedesk.documents.service import DocumentService
from casedesk.exceptions import NotFoundError, ValidationError


@pytest.fixture
def case_data():
    return CaseCreate(case_name="Contract Dispute Resolution", client_name="ABC Corporation")


@pytest.mark.asyncio
async def test_create_document(db_session: AsyncSession, case_data):
    case = await CaseService(db_session).create_case(case_data)
    doc = await DocumentService(db_session).create_document(
        case.id,
        DocumentCreate(
            document_name="Complaint.pdf",
            storage_path="cases/1/complaint.pdf",
            event_date=date(2024, 1, 15),
            document_type="motion",
        ),
    )

    assert doc.id is not None
    assert doc.case_id == case.id
    assert doc.document_name == "Complaint.pdf"
    assert doc.storage_path == "cases/1/complaint.pdf"
    assert doc.event_date == date(2024, 1, 15)
    assert doc.document_type == "motion"
    assert doc.ai_analysis is None


@pytest.mark.asyncio
async def test_create_document_for_missing_case(db_session: AsyncSession):
    with pytest.raises(NotFoundError) as exc:
        await DocumentService(db_session).create_document(
            123, DocumentCreate(document_name="orphan.pdf")
        )
    assert exc.value.resource == "Case"


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   "])
async def test_create_document_rejects_empty_name(db_session: AsyncSession, case_data, name):
    case = await CaseService(db_session).create_case(case_data)
    with pytest.raises(ValidationError) as exc:
        await DocumentService(db_session).create_document(
            case.id, DocumentCreate(document_name=name)
        )
    assert exc.value.field == "document_name"


@pytest.mark.asyncio
async def test_get_missing_document(db_session: AsyncSession):
    with pytest.raises(NotFoundError):
        await DocumentService(db_session).get_document(77)


@pytest.mark.asyncio
async def test_list_documents_timeline(db_session: AsyncSession, case_data):
    service = DocumentService(db_session)
    case = await CaseService(db_session).create_case(case_data)
    for name, event_date in [
        ("undated.pdf", None),
        ("march.pdf", date(2024, 3, 1)),
        ("january.pdf", date(2024, 1, 15)),
    ]:
        await service.create_document(case.id, DocumentCreate(document_name=name, event_date=event_date))

    documents = await service.list_documents(case.id)
    assert [d.event_date for d in documents] == [date(2024, 1, 15), date(2024, 3, 1), None]


@pytest.mark.asyncio
async def test_list_documents_for_missing_case(db_session: AsyncSession):
    with pytest.raises(NotFoundError):
        await DocumentService(db_session).list_documents(5)


@pytest.mark.asyncio
async def test_update_document_metadata(db_session: AsyncSession, case_data):
    service = DocumentService(db_session)
    case = await CaseService(db_session).create_case(case_data)
    doc = await service.create_document(case.id, DocumentCreate(document_name="draft.pdf"))

    updated = await service.update_document(
        doc.id, DocumentUpdate(document_name="final.pdf", event_date=date(2024, 6, 1))
    )
    assert updated.document_name == "final.pdf"
    assert updated.event_date == date(2024, 6, 1)


@pytest.mark.asyncio
async def test_update_document_rejects_blank_name(db_session: AsyncSession, case_data):
    service = DocumentService(db_session)
    case = await CaseService(db_session).create_case(case_data)
    doc = await service.create_document(case.id, DocumentCreate(document_name="draft.pdf"))

    with pytest.raises(ValidationError):
        await service.update_document(doc.id, DocumentUpdate(document_name=" "))


@pytest.mark.asyncio
async def test_metadata_update_leaves_analysis_alone(db_session: AsyncSession, case_data):
    service = DocumentService(db_session)
    case = await CaseService(db_session).create_case(case_data)
    doc = await service.create_document(case.id, DocumentCreate(document_name="lease.pdf"))
    await service.update_document_analysis(
        doc.id, normalize_analysis('{"summary": "A lease.", "documentType": "contract"}')
    )

    updated = await service.update_document(doc.id, DocumentUpdate(storage_path="new/key.pdf"))

    assert updated.storage_path == "new/key.pdf"
    assert updated.ai_analysis["summary"] == "A lease."


@pytest.mark.asyncio
async def test_update_document_analysis_sets_type(db_session: AsyncSession, case_data):
    service = DocumentService(db_session)
    case = await CaseService(db_session).create_case(case_data)
    doc = await service.create_document(case.id, DocumentCreate(document_name="brief.pdf"))

    stored = await service.update_document_analysis(
        doc.id, normalize_analysis('{"summary": "Opening brief.", "documentType": "brief"}')
    )

    assert stored.document_type == "brief"
    assert stored.ai_analysis["documentType"] == "brief"
    assert "rawResponse" not in stored.ai_analysis


@pytest.mark.asyncio
async def test_update_analysis_for_missing_document(db_session: AsyncSession):
    with pytest.raises(NotFoundError):
        await DocumentService(db_session).update_document_analysis(
            999, normalize_analysis("anything")
        )


@pytest.mark.asyncio
async def test_delete_document(db_session: AsyncSession, case_data):
    service = DocumentService(db_session)
    case = await CaseService(db_session).create_case(case_data)
    doc = await service.create_document(case.id, DocumentCreate(document_name="gone.pdf"))

    await service.delete_document(doc.id)

    with pytest.raises(NotFoundError):
        await service.get_document(doc.id)
    with pytest.raises(NotFoundError):
        await service.delete_document(doc.id)
