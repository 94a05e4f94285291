from sqlalchemy import Column, String, Date, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from casedesk.database import Base
from casedesk.shared.models import AuditMixin


class Document(Base, AuditMixin):
    """Uploaded document linked to a case, optionally carrying an AI analysis."""
    __tablename__ = "documents"

    case_id = Column(ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    document_name = Column(String, nullable=False)
    storage_path = Column(String, nullable=True)  # opaque blob-store key
    event_date = Column(Date, nullable=True)  # date the content pertains to
    document_type = Column(String, nullable=True)
    # Serialized Analysis (camelCase keys); written only by DocumentService.update_document_analysis
    ai_analysis = Column(
        JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql"), nullable=True
    )

    case = relationship("casedesk.cases.models.Case", back_populates="documents")
