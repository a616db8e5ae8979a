import logging
import time
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from interneval.constants import ERROR_ANALYSIS, MAX_SCORE, MIN_SCORE, PLACEHOLDER_NAME, UNRATED_SCORE
from interneval.models.evaluation import CandidateEvaluation, EvaluationCriteria
from interneval.models.state import ErrorKind, EvaluationState, StoreError
from interneval.services.exceptions import EmptyTemplateError, GenerationInProgressError, TemplateError

logger = logging.getLogger(__name__)


class TemplateSource(Protocol):
    """Anything that turns reference text into a criteria template"""

    async def create_criteria_template(self, reference_text: str) -> List[EvaluationCriteria]:
        ...


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def resolve_candidate_names(
    names: Sequence[str],
    count: int,
    min_candidates: int = 1,
    max_candidates: int = 50
) -> List[str]:
    """
    Trim names and drop blanks. When nothing is left, fall back to
    'Intern 1'..'Intern N' with N clamped to [min_candidates, max_candidates].
    More than max_candidates names is a ValueError
    """
    valid_names = [name.strip() for name in names if name and name.strip()]
    if len(valid_names) > max_candidates:
        raise ValueError(f"At most {max_candidates} candidates can be evaluated, got {len(valid_names)}")
    if valid_names:
        return valid_names

    count = max(min_candidates, min(count, max_candidates))
    return [PLACEHOLDER_NAME.format(index=i + 1) for i in range(count)]


def unique_template_ids(template: Sequence[EvaluationCriteria]) -> List[EvaluationCriteria]:
    """
    Re-key blank or repeated template ids as 'c<position>' so every criterion
    of a candidate can be addressed on its own
    """
    taken = {c.id.strip() for c in template if c.id and c.id.strip()}
    seen = set()
    keyed = []
    for position, criterion in enumerate(template, start=1):
        criteria_id = criterion.id.strip() if criterion.id else ""
        if not criteria_id or criteria_id in seen:
            criteria_id = f"c{position}"
            while criteria_id in taken or criteria_id in seen:
                criteria_id = f"{criteria_id}_"
            logger.warning(f"Template criterion '{criterion.text}' re-keyed as {criteria_id}")
        seen.add(criteria_id)
        keyed.append(criterion if criteria_id == criterion.id else criterion.model_copy(update={"id": criteria_id}))
    return keyed


def clone_template(template: Sequence[EvaluationCriteria], index: int) -> Tuple[EvaluationCriteria, ...]:
    """Copy template criteria for one candidate, suffixing ids with the candidate index"""
    return tuple(
        criterion.model_copy(update={"id": f"{criterion.id}-{index}", "score": UNRATED_SCORE})
        for criterion in unique_template_ids(template)
    )


def instantiate_candidates(
    template: Sequence[EvaluationCriteria],
    names: Sequence[str],
    created_at: int
) -> Tuple[CandidateEvaluation, ...]:
    return tuple(
        CandidateEvaluation(
            id=f"cand-{index}-{created_at}",
            name=name,
            position_recommendation="",
            criteria=clone_template(template, index),
        )
        for index, name in enumerate(names)
    )


def apply_score(state: EvaluationState, candidate_id: str, criteria_id: str, score: int) -> EvaluationState:
    """
    Return a new snapshot with one criterion re-scored. Untouched candidates and
    criteria are carried over as the same objects. Unknown ids return the state unchanged
    """
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValueError(f"Score must be between {MIN_SCORE} and {MAX_SCORE}, got {score}")

    for position, candidate in enumerate(state.candidates):
        if candidate.id != candidate_id:
            continue

        criteria = list(candidate.criteria)
        for i, criterion in enumerate(criteria):
            if criterion.id == criteria_id:
                criteria[i] = criterion.model_copy(update={"score": score})
                break
        else:
            return state

        candidates = list(state.candidates)
        candidates[position] = candidate.model_copy(update={"criteria": tuple(criteria)})
        return state.model_copy(update={"candidates": tuple(candidates)})

    return state


class EvaluationStore:
    """
    In-memory evaluation state. Every transition swaps in a new immutable snapshot
    """

    def __init__(self, template_source: TemplateSource, clock: Optional[Callable[[], int]] = None):
        self._template_source = template_source
        self._clock = clock or _epoch_millis
        self._state = EvaluationState()

    @property
    def state(self) -> EvaluationState:
        return self._state

    @property
    def candidates(self) -> Tuple[CandidateEvaluation, ...]:
        return self._state.candidates

    @property
    def is_processing(self) -> bool:
        return self._state.is_processing

    @property
    def error(self) -> Optional[StoreError]:
        return self._state.error

    async def generate(self, reference_text: str, candidate_names: Sequence[str]) -> Tuple[CandidateEvaluation, ...]:
        """
        Acquire a criteria template and build one candidate per name.
        On any failure the candidates are left as they were, the error is stored and
        a TemplateError with the user-facing message is raised
        """
        if not reference_text or not reference_text.strip():
            raise ValueError("Reference text cannot be empty")

        if self._state.is_processing:
            raise GenerationInProgressError()

        self._state = self._state.model_copy(update={"is_processing": True, "error": None})
        logger.info(f"Generating evaluation forms for {len(candidate_names)} candidates")

        try:
            template = await self._template_source.create_criteria_template(reference_text)
            if not template:
                raise EmptyTemplateError()
            candidates = instantiate_candidates(template, candidate_names, self._clock())
        except TemplateError as e:
            logger.error(f"Template acquisition failed ({e.kind.value}): {e.message}", exc_info=True)
            self._fail(e.kind)
            raise TemplateError(ERROR_ANALYSIS, kind=e.kind) from e
        except Exception as e:
            logger.error(f"Template acquisition failed: {str(e)}", exc_info=True)
            self._fail(ErrorKind.ACQUISITION_FAILURE)
            raise TemplateError(ERROR_ANALYSIS, kind=ErrorKind.ACQUISITION_FAILURE) from e
        else:
            self._state = self._state.model_copy(update={"candidates": candidates})
            logger.info(f"Created {len(candidates)} candidates with {len(template)} criteria each")
            return candidates
        finally:
            self._state = self._state.model_copy(update={"is_processing": False})

    def _fail(self, kind: ErrorKind) -> None:
        self._state = self._state.model_copy(
            update={"error": StoreError(kind=kind, message=ERROR_ANALYSIS)}
        )

    def update_score(self, candidate_id: str, criteria_id: str, score: int) -> None:
        self._state = apply_score(self._state, candidate_id, criteria_id, score)

    def reset(self) -> None:
        # Processing flag is left alone so a reset during generation cannot unlock generate
        self._state = EvaluationState(is_processing=self._state.is_processing)
        logger.info("Evaluation store reset")
