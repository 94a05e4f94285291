from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict

from casedesk.documents.schemas import DocumentResponse

class CaseBase(BaseModel):
    case_name: str
    client_name: str
    summary: Optional[str] = None

class CaseCreate(CaseBase):
    status: Optional[str] = None
    date_opened: Optional[datetime] = None

class CaseUpdate(CaseBase):
    case_name: Optional[str] = None
    client_name: Optional[str] = None
    status: Optional[str] = None
    date_opened: Optional[datetime] = None

class CaseResponse(CaseBase):
    id: int
    status: str
    date_opened: datetime
    document_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class CaseDetailResponse(CaseResponse):
    documents: List[DocumentResponse] = []

class CasePage(BaseModel):
    items: List[CaseResponse]
    total: int
    page: int
    page_size: int
    page_count: int

class DashboardStats(BaseModel):
    total_cases: int
    cases_by_status: Dict[str, int]
    total_documents: int
    analyzed_documents: int
    degraded_analyses: int
