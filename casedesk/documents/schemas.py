from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from casedesk.analysis.schemas import Analysis


class DocumentBase(BaseModel):
    document_name: str
    storage_path: Optional[str] = None
    event_date: Optional[date] = None
    document_type: Optional[str] = None


class DocumentCreate(DocumentBase):
    pass


class DocumentUpdate(DocumentBase):
    document_name: Optional[str] = None


class DocumentResponse(DocumentBase):
    id: int
    case_id: int
    ai_analysis: Optional[Analysis] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
