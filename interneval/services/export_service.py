import logging
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from interneval.constants import CSV_BOM, CSV_FILE_PREFIX, DEFAULT_ROLE
from interneval.models.evaluation import CandidateEvaluation

logger = logging.getLogger(__name__)

FIXED_HEADERS = ("Candidate Name", "Role")
SUMMARY_HEADERS = ("Average Score", "Progress")


def calculate_average(candidate: CandidateEvaluation) -> str:
    """
    Mean of the rated criteria with one decimal place, or '0' when nothing is rated
    """
    rated = candidate.rated_criteria
    if not rated:
        return "0"

    mean = Decimal(sum(c.score for c in rated)) / Decimal(len(rated))
    return str(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def get_progress(candidate: CandidateEvaluation) -> int:
    """Percentage of rated criteria, rounded half up. 0 for a candidate without criteria"""
    total = len(candidate.criteria)
    if total == 0:
        return 0

    completed = len(candidate.rated_criteria)
    ratio = Decimal(completed * 100) / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def escape_csv_field(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def to_csv(
    candidates: Sequence[CandidateEvaluation],
    role: str = DEFAULT_ROLE,
    progress_percent_sign: bool = True
) -> str:
    """
    Serialize candidates to CSV. Every candidate is assumed to share the criteria
    layout of the first one. Returns an empty string when there are no candidates.
    The default role is written bare, any other role is quoted like other text
    """
    if not candidates:
        logger.info("Export skipped: no candidates")
        return ""

    criteria_headers = [escape_csv_field(c.text) for c in candidates[0].criteria]
    headers = [*FIXED_HEADERS, *criteria_headers, *SUMMARY_HEADERS]

    rows = []
    for candidate in candidates:
        progress = get_progress(candidate)
        fields = [
            escape_csv_field(candidate.name),
            role if role == DEFAULT_ROLE else escape_csv_field(role),
            *(str(c.score) for c in candidate.criteria),
            calculate_average(candidate),
            f"{progress}%" if progress_percent_sign else str(progress),
        ]
        rows.append(",".join(fields))

    logger.info(f"Exported {len(rows)} candidates with {len(criteria_headers)} criteria")
    return CSV_BOM + "\n".join([",".join(headers), *rows])


def export_filename(on: Optional[date] = None) -> str:
    """evaluation_results_<YYYY-MM-DD>.csv, dated in UTC by default"""
    on = on or datetime.now(timezone.utc).date()
    return f"{CSV_FILE_PREFIX}{on.isoformat()}.csv"
