from casedesk.analysis.normalizer import (
    DEFAULT_CONFIDENCE_SCORE,
    DEGRADED_SUMMARY,
    degraded_analysis,
    normalize_analysis,
)
from casedesk.analysis.schemas import Analysis
