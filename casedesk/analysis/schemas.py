"""Analysis value attached to a Document.

The persisted and wire shape uses camelCase keys (``keyFacts``,
``confidenceScore``...). Attributes stay snake_case in Python.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

KNOWN_DOCUMENT_TYPES = ("contract", "motion", "brief", "evidence", "correspondence", "unknown")


class Analysis(BaseModel):
    summary: str = Field(..., min_length=1, description="1-3 sentence summary of the document")
    key_facts: List[str] = Field(default_factory=list)
    legal_citations: List[str] = Field(default_factory=list)
    extracted_tables: List[str] = Field(
        default_factory=list, description="Self-contained tabular text blocks"
    )
    document_type: str = Field("unknown", description="Loose classifier, unknown values kept verbatim")
    confidence_score: float = Field(..., ge=0.0, le=1.0)
    processing_timestamp: datetime
    raw_response: Optional[str] = Field(
        None, description="Original model output, only set when the response could not be structured"
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @property
    def is_degraded(self) -> bool:
        return self.raw_response is not None

    def to_storage(self) -> Dict[str, Any]:
        """JSON-ready dict for Document.ai_analysis. ``rawResponse`` is omitted on the clean path."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)

    @classmethod
    def from_storage(cls, data: Dict[str, Any]) -> "Analysis":
        return cls.model_validate(data)


class IngestRequest(BaseModel):
    raw_response: str = Field(..., description="Raw text returned by the language model")
    document_type_hint: Optional[str] = None
