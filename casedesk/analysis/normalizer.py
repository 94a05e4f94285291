"""Turn a raw language-model response into an Analysis.

A malformed response is an expected outcome, not an error: anything that
cannot be structured becomes a degraded Analysis carrying the original
text in ``raw_response``. ``normalize_analysis`` never raises.
"""

import json
import logging
import math
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from casedesk.analysis.schemas import Analysis
from casedesk.shared.models import utcnow

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_SCORE = 0.5
DEGRADED_SUMMARY = "Analysis completed but the response could not be structured."
UNKNOWN_DOCUMENT_TYPE = "unknown"

_FENCE_RE = re.compile(r"```[a-zA-Z]*\s*\n?(.*?)```", re.DOTALL)

# canonical key -> accepted spellings, first match wins
_FIELD_KEYS = {
    "summary": ("summary",),
    "key_facts": ("keyFacts", "key_facts"),
    "legal_citations": ("legalCitations", "legal_citations"),
    "extracted_tables": ("extractedTables", "extracted_tables"),
    "document_type": ("documentType", "document_type"),
    "confidence_score": ("confidenceScore", "confidence_score"),
}


def normalize_analysis(
    raw: Any,
    document_type_hint: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Analysis:
    """Validate and repair ``raw`` into an Analysis.

    Args:
        raw: The model's textual response. Expected to hold a JSON object,
            possibly wrapped in prose or a Markdown code fence.
        document_type_hint: Classifier supplied by the uploader, used when
            the response carries no document type.
        now: Normalization instant; defaults to the current UTC time.

    Returns:
        A clean Analysis, or the degraded Analysis when the response has no
        usable JSON object or no summary.
    """
    timestamp = now or utcnow()
    hint = _clean_str(document_type_hint)
    text = _as_text(raw)

    data, reason = _extract_json_object(text)
    if data is not None:
        analysis, reason = _from_parsed(data, hint, timestamp)
        if analysis is not None:
            return analysis

    logger.warning(f"AI response could not be structured ({reason}), storing degraded analysis")
    return degraded_analysis(text, hint, timestamp)


def degraded_analysis(
    raw_text: str,
    document_type_hint: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Analysis:
    return Analysis(
        summary=DEGRADED_SUMMARY,
        key_facts=[],
        legal_citations=[],
        extracted_tables=[],
        document_type=document_type_hint or UNKNOWN_DOCUMENT_TYPE,
        confidence_score=DEFAULT_CONFIDENCE_SCORE,
        processing_timestamp=now or utcnow(),
        raw_response=raw_text,
    )


def _as_text(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw).decode("utf-8", errors="replace")
    return str(raw)


def _extract_json_object(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    """Find a JSON object in the text: whole string, fenced block, then outermost braces."""
    if not text.strip():
        return None, "empty response"

    candidates = [text.strip()]
    fence = _FENCE_RE.search(text)
    if fence:
        candidates.append(fence.group(1).strip())
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    reason = "no JSON object found"
    for candidate in candidates:
        if not candidate:
            continue
        try:
            data = json.loads(candidate)
        except (ValueError, RecursionError):
            continue
        if isinstance(data, dict):
            return data, ""
        reason = f"JSON value is a {type(data).__name__}, not an object"
    return None, reason


def _from_parsed(
    data: Dict[str, Any], hint: Optional[str], timestamp: datetime
) -> Tuple[Optional[Analysis], str]:
    fields = {name: _pick(data, keys) for name, keys in _FIELD_KEYS.items()}

    summary = _clean_str(fields["summary"])
    if summary is None:
        return None, "missing summary"

    try:
        analysis = Analysis(
            summary=summary,
            key_facts=_coerce_text_list(fields["key_facts"]),
            legal_citations=_coerce_text_list(fields["legal_citations"]),
            extracted_tables=_coerce_text_list(fields["extracted_tables"]),
            document_type=_clean_str(fields["document_type"]) or hint or UNKNOWN_DOCUMENT_TYPE,
            confidence_score=_coerce_confidence(fields["confidence_score"]),
            processing_timestamp=timestamp,
        )
    except ValueError as e:
        return None, f"schema validation failed: {e}"
    return analysis, ""


def _pick(data: Dict[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _clean_str(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _coerce_confidence(value: Any) -> float:
    # bool is an int subclass; "true" is not a score
    if value is None or isinstance(value, bool):
        return DEFAULT_CONFIDENCE_SCORE
    if not isinstance(value, (int, float, str)):
        return DEFAULT_CONFIDENCE_SCORE
    try:
        score = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return DEFAULT_CONFIDENCE_SCORE
    if math.isnan(score):
        return DEFAULT_CONFIDENCE_SCORE
    return min(1.0, max(0.0, score))


def _coerce_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        value = [value]

    items = []
    for item in value:
        if item is None:
            continue
        if isinstance(item, str):
            text = item
        elif isinstance(item, (dict, list)):
            text = json.dumps(item, ensure_ascii=False, separators=(",", ":"))
        else:
            text = str(item)
        if text.strip():
            items.append(text)
    return items
