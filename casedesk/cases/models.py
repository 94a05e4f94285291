from enum import Enum
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from casedesk.database import Base
from casedesk.shared.models import AuditMixin, utcnow

class CaseStatus(str, Enum):
    ACTIVE = "Active"
    PENDING = "Pending"
    CLOSED = "Closed"
    ARCHIVED = "Archived"

class Case(Base, AuditMixin):
    """Legal matter owning zero or more documents."""
    __tablename__ = "cases"

    case_name = Column(String, nullable=False)
    client_name = Column(String, nullable=False)
    # Plain string column: the status set is open-ended, CaseStatus only names the common values
    status = Column(String(64), default=CaseStatus.ACTIVE.value, nullable=False)
    date_opened = Column(DateTime, default=utcnow, nullable=False)
    summary = Column(Text, nullable=True)

    documents = relationship(
        "casedesk.documents.models.Document",
        back_populates="case",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
