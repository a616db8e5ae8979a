import pytest
from unittest.mock import AsyncMock, Mock

from interneval.models.evaluation import CandidateEvaluation, CriteriaType, EvaluationCriteria
from interneval.services.evaluation_store import EvaluationStore

FIXED_MILLIS = 1760860800000


@pytest.fixture
def criteria_template():
    """Template as returned by the Gemini service"""
    return [
        EvaluationCriteria(id="c1", text="Kiến thức Java", type=CriteriaType.STRENGTH, score=0),
        EvaluationCriteria(id="c2", text="Thái độ làm việc", type=CriteriaType.STRENGTH, score=0),
        EvaluationCriteria(id="c3", text="Sự cẩn trọng & chú ý chi tiết", type=CriteriaType.STRENGTH, score=0),
    ]


@pytest.fixture
def template_source(criteria_template):
    source = Mock()
    source.create_criteria_template = AsyncMock(return_value=criteria_template)
    return source


@pytest.fixture
def store(template_source):
    return EvaluationStore(template_source=template_source, clock=lambda: FIXED_MILLIS)


def make_candidate(name, scores, candidate_id=None, labels=None):
    """Build a candidate with one criterion per score"""
    labels = labels or [f"Criterion {i + 1}" for i in range(len(scores))]
    return CandidateEvaluation(
        id=candidate_id or f"cand-{name}",
        name=name,
        criteria=[
            EvaluationCriteria(id=f"c{i}", text=label, score=score)
            for i, (label, score) in enumerate(zip(labels, scores))
        ],
    )


@pytest.fixture
def candidate_factory():
    return make_candidate
