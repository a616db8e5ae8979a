from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response
from fastapi.responses import JSONResponse
from typing import List
import logging

from interneval.config import Settings, get_settings
from interneval.constants import CSV_MIME_TYPE, SAMPLE_EVALUATION_DATA
from interneval.models.evaluate import (
    CandidateSummary,
    EvaluationStateResponse,
    GenerateRequest,
    ParseRequest,
    ScoreUpdateRequest,
)
from interneval.models.evaluation import CandidateEvaluation
from interneval.models.state import EvaluationState
from interneval.services.evaluation_store import EvaluationStore, resolve_candidate_names
from interneval.services.exceptions import GenerationInProgressError, TemplateError
from interneval.services.export_service import calculate_average, export_filename, get_progress, to_csv
from interneval.services.gemini_service import GeminiServices
from interneval.utils.response import create_response

router = APIRouter()


def get_store(request: Request) -> EvaluationStore:
    """Evaluation store owned by the running application"""
    return request.app.state.store


def get_gemini(request: Request) -> GeminiServices:
    return request.app.state.gemini


def build_state_response(state: EvaluationState, settings: Settings) -> EvaluationStateResponse:
    summaries = [
        CandidateSummary(
            candidate_id=candidate.id,
            name=candidate.name,
            role=settings.default_role,
            average_score=calculate_average(candidate),
            progress=get_progress(candidate),
        )
        for candidate in state.candidates
    ]
    return EvaluationStateResponse(
        candidates=list(state.candidates),
        summaries=summaries,
        is_processing=state.is_processing,
        error=state.error,
    )


def _template_error_response(e: TemplateError) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content=create_response(False, e.message, None, {"kind": e.kind.value})
    )


@router.post("/evaluations", response_model=EvaluationStateResponse)
async def generate_evaluations(
    request: GenerateRequest,
    store: EvaluationStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """
    Synthesize the criteria template and create one evaluation form per candidate
    """
    if store.is_processing:
        raise HTTPException(status_code=409, detail=GenerationInProgressError().message)

    try:
        names = resolve_candidate_names(
            request.candidate_names,
            request.candidate_count,
            min_candidates=settings.min_candidates,
            max_candidates=settings.max_candidates
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        await store.generate(request.reference_text, names)
    except GenerationInProgressError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except TemplateError as e:
        logging.error(f"Evaluation form generation failed: {e.kind.value}")
        return _template_error_response(e)

    logging.info(f"Evaluation forms created for {len(names)} candidates")
    return build_state_response(store.state, settings)


@router.get("/evaluations", response_model=EvaluationStateResponse)
async def get_evaluations(
    store: EvaluationStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Get current candidates, scores and progress"""
    return build_state_response(store.state, settings)


@router.put(
    "/evaluations/{candidate_id}/criteria/{criteria_id}",
    response_model=EvaluationStateResponse
)
async def update_score(
    request: ScoreUpdateRequest,
    candidate_id: str = Path(..., description="Candidate ID"),
    criteria_id: str = Path(..., description="Criterion ID within the candidate"),
    store: EvaluationStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """
    Set the star rating of one criterion. Unknown ids leave the evaluation unchanged
    """
    store.update_score(candidate_id, criteria_id, request.score)
    return build_state_response(store.state, settings)


@router.delete("/evaluations")
async def reset_evaluations(store: EvaluationStore = Depends(get_store)):
    store.reset()
    return create_response(True, "Evaluation reset")


@router.get("/evaluations/export")
async def export_evaluations(
    store: EvaluationStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """
    Download the evaluation results as CSV
    """
    content = to_csv(
        store.candidates,
        role=settings.default_role,
        progress_percent_sign=settings.csv_progress_percent_sign
    )
    if not content:
        return Response(status_code=204)

    filename = export_filename()
    logging.info(f"Exporting evaluation results to {filename}")

    return Response(
        content=content.encode("utf-8"),
        media_type=CSV_MIME_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.post("/evaluations/parse", response_model=List[CandidateEvaluation])
async def parse_evaluations(
    request: ParseRequest,
    gemini: GeminiServices = Depends(get_gemini)
):
    """
    Split raw review notes into structured candidate evaluations. The store is not modified
    """
    try:
        return await gemini.parse_raw_evaluations(request.raw_text)
    except TemplateError as e:
        return _template_error_response(e)


@router.get("/sample")
async def get_sample():
    """Example reference text for the setup form"""
    return create_response(True, "Sample evaluation data", {"reference_text": SAMPLE_EVALUATION_DATA})
