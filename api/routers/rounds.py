"""Round API endpoints: preview, submit, fetch and delete."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from database.db_manager import DatabaseManager
from database.exceptions import DatabaseError, DuplicateError, NotFoundError
from api.dependencies import get_db
from api.schemas import (
    DeleteRoundResponse,
    RoundDraftRequest,
    RoundPreviewResponse,
    SubmitRoundResponse,
)
from models import Round
from scoring import ordinal, submission_message

logger = logging.getLogger(__name__)

router = APIRouter()


def _draft_round(req: RoundDraftRequest) -> Round:
    try:
        return req.to_round()
    except ValidationError as e:
        raise HTTPException(422, e.errors(include_url=False, include_context=False)) from e


@router.post("/preview", response_model=RoundPreviewResponse)
async def preview_round(req: RoundDraftRequest, db: DatabaseManager = Depends(get_db)):
    """Rank and points the round would get if it were submitted now."""
    draft = _draft_round(req)
    try:
        preview = await db.preview_round(draft)
    except NotFoundError:
        raise HTTPException(404, "League not found")
    return RoundPreviewResponse(
        rank=preview.rank,
        rank_label=ordinal(preview.rank),
        points=preview.points,
        to_par=preview.to_par_label,
        breakdown=preview.breakdown,
    )


@router.post("", response_model=SubmitRoundResponse, status_code=201)
async def submit_round(req: RoundDraftRequest, db: DatabaseManager = Depends(get_db)):
    draft = _draft_round(req)
    if draft.gross_score is None:
        raise HTTPException(422, "Gross score is required")
    try:
        result = await db.submit_round(draft, requested_player_id=req.player_id)
    except NotFoundError:
        raise HTTPException(404, "League not found")
    except DuplicateError:
        raise HTTPException(409, "Round already exists")
    except DatabaseError as e:
        logger.exception("Round submission failed")
        raise HTTPException(500, f"Could not save round: {e}")
    return SubmitRoundResponse(
        round=result.round,
        granted_awards=result.granted,
        message=submission_message(result),
    )


@router.get("/{round_id}", response_model=Round)
async def get_round(round_id: str, db: DatabaseManager = Depends(get_db)):
    try:
        return await db.get_round(round_id)
    except NotFoundError:
        raise HTTPException(404, "Round not found")


@router.delete("/{round_id}", response_model=DeleteRoundResponse)
async def delete_round(round_id: str, db: DatabaseManager = Depends(get_db)):
    """Remove a round; the rest of its event is rescored."""
    try:
        rescored = await db.delete_round(round_id)
    except NotFoundError:
        raise HTTPException(404, "Round not found")
    return DeleteRoundResponse(deleted=round_id, rescored=len(rescored))
