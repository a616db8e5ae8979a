from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from interneval.models.evaluation import CandidateEvaluation

class ErrorKind(str, Enum):
    """
    Error Kind Enumeration
    """
    MISSING_CREDENTIAL = "missing_credential"
    EMPTY_TEMPLATE = "empty_template"
    ACQUISITION_FAILURE = "acquisition_failure"
    EXPORT_SKIPPED = "export_skipped"

class StoreError(BaseModel):
    """Last error recorded by the evaluation store"""
    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str

class EvaluationState(BaseModel):
    """
    Immutable snapshot of the evaluation store
    """
    model_config = ConfigDict(frozen=True)

    candidates: Tuple[CandidateEvaluation, ...] = ()
    is_processing: bool = False
    error: Optional[StoreError] = None
