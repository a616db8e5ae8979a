from pydantic import BaseModel, Field, field_validator
from interneval.models.evaluation import CandidateEvaluation
from interneval.models.state import StoreError
from typing import List, Optional

class GenerateRequest(BaseModel):
    """Evaluation form generation request"""
    reference_text: str = Field(..., description="Previous reviews or example criteria")
    candidate_names: List[str] = Field(default_factory=list)
    candidate_count: int = Field(1, description="Used for placeholder names when no name is given")

    @field_validator('reference_text')
    def validate_reference_text(cls, v):
        if not v or len(v.strip()) == 0:
            raise ValueError('Reference text cannot be empty')
        return v

class ScoreUpdateRequest(BaseModel):
    """Star rating for a single criterion"""
    score: int = Field(..., ge=1, le=5)

class ParseRequest(BaseModel):
    """Raw review notes for one or more candidates"""
    raw_text: str

    @field_validator('raw_text')
    def validate_raw_text(cls, v):
        if not v or len(v.strip()) == 0:
            raise ValueError('Raw text cannot be empty')
        return v

class CandidateSummary(BaseModel):
    """Scoring progress shown on the candidate card"""
    candidate_id: str
    name: str
    role: str
    average_score: str
    progress: int

class EvaluationStateResponse(BaseModel):
    """
    Current evaluation store snapshot
    """
    candidates: List[CandidateEvaluation] = []
    summaries: List[CandidateSummary] = []
    is_processing: bool = False
    error: Optional[StoreError] = None

    class Config:
        json_schema_extra = {
            "example": {
                "candidates": [
                    {
                        "id": "cand-0-1760860800000",
                        "name": "Nam",
                        "positionRecommendation": "",
                        "criteria": [
                            {"id": "c1-0", "text": "Kiến thức Java", "type": "STRENGTH", "score": 4},
                            {"id": "c2-0", "text": "Sự cẩn trọng", "type": "STRENGTH", "score": 0}
                        ]
                    }
                ],
                "summaries": [
                    {
                        "candidate_id": "cand-0-1760860800000",
                        "name": "Nam",
                        "role": "Intern/Member",
                        "average_score": "4.0",
                        "progress": 50
                    }
                ],
                "is_processing": False
            }
        }
