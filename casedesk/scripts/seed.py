"""
Seed a development database with sample cases, documents and analyses.

Usage:
    uv run python -m casedesk.scripts.seed
"""

import asyncio
import json
import logging
from datetime import date

from casedesk.analysis.service import AnalysisIngestionService
from casedesk.cases.schemas import CaseCreate
from casedesk.cases.service import CaseService
from casedesk.config import settings
from casedesk.database import AsyncSessionLocal
from casedesk.documents.schemas import DocumentCreate
from casedesk.documents.service import DocumentService
from casedesk.logging_config import configure_logging
from casedesk.scripts.init_db import init_models

logger = logging.getLogger(__name__)

SAMPLE_CASES = [
    {
        "case": CaseCreate(
            case_name="Contract Dispute Resolution",
            client_name="ABC Corporation",
            summary="Breach of supply agreement over late deliveries in Q1 2024.",
        ),
        "documents": [
            (
                DocumentCreate(
                    document_name="Initial_Contract_2024.pdf",
                    storage_path="cases/abc/Initial_Contract_2024.pdf",
                    event_date=date(2024, 1, 15),
                    document_type="contract",
                ),
                json.dumps({
                    "summary": "Supply agreement between ABC Corporation and Delta Logistics "
                               "requiring delivery within 30 days of each order.",
                    "keyFacts": ["Signed 15 January 2024", "Late delivery penalty of 2% per week"],
                    "legalCitations": ["UCC § 2-601"],
                    "extractedTables": [],
                    "documentType": "contract",
                    "confidenceScore": 0.92,
                }),
            ),
            (
                DocumentCreate(
                    document_name="Demand_Letter.docx",
                    storage_path="cases/abc/Demand_Letter.docx",
                    event_date=date(2024, 3, 1),
                    document_type="correspondence",
                ),
                "The model could not read this scan.",
            ),
        ],
    },
    {
        "case": CaseCreate(
            case_name="Acme Trademark Opposition",
            client_name="Acme Holdings LLC",
            status="Pending",
        ),
        "documents": [
            (
                DocumentCreate(document_name="Opposition_Brief.pdf", document_type="brief"),
                None,
            ),
        ],
    },
]


async def seed_data():
    await init_models()

    async with AsyncSessionLocal() as session:
        cases = CaseService(session)
        documents = DocumentService(session)
        ingestion = AnalysisIngestionService(session)

        for sample in SAMPLE_CASES:
            case = await cases.create_case(sample["case"])
            for document_in, raw_response in sample["documents"]:
                doc = await documents.create_document(case.id, document_in)
                if raw_response is not None:
                    await ingestion.ingest(doc.id, raw_response)
            logger.info(f"Seeded case {case.id}: {case.case_name}")


def main():
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(seed_data())


if __name__ == "__main__":
    main()
