from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

class CriteriaType(str, Enum):
    """
    Kind of evaluation criterion
    """
    STRENGTH = "STRENGTH"
    WEAKNESS = "WEAKNESS"
    RECOMMENDATION = "RECOMMENDATION"
    NOTE = "NOTE"

class EvaluationCriteria(BaseModel):
    """Single scorable attribute. Score 0 means unrated, 1-5 is a star rating"""
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    type: CriteriaType = CriteriaType.STRENGTH
    score: int = Field(0, ge=0, le=5)

class CandidateEvaluation(BaseModel):
    """A candidate and the criteria they are scored against"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    position_recommendation: Optional[str] = Field(None, alias="positionRecommendation")
    criteria: Tuple[EvaluationCriteria, ...] = ()

    @property
    def rated_criteria(self) -> List[EvaluationCriteria]:
        return [c for c in self.criteria if c.score > 0]

class TemplateResponse(BaseModel):
    """Expected Gemini payload for criteria template generation"""
    criteria: List[EvaluationCriteria] = []

class ParseResponse(BaseModel):
    """Expected Gemini payload for raw evaluation parsing"""
    candidates: List[CandidateEvaluation] = []
