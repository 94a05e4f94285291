from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Integer


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the plain DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class IntegerIDMixin:
    id = Column(Integer, primary_key=True, autoincrement=True)

class TimestampMixin:
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

class AuditMixin(IntegerIDMixin, TimestampMixin):
    """Combines integer identity and timestamps for standard entities."""
    pass
