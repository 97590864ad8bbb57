from __future__ import annotations

import logging
import random

from fastapi import APIRouter, Depends, HTTPException, status

from storyscript.api.deps import get_settings
from storyscript.api.models import (
    EvaluateRequest,
    EvaluateResponse,
    RunScriptRequest,
    RunScriptResponse,
    ScriptErrorDetail,
)
from storyscript.config import InterpreterSettings
from storyscript.core.errors import InstructionError
from storyscript.core.expressions import evaluate
from storyscript.instructions.handlers import QUESTION_KEY
from storyscript.instructions.processor import process

logger = logging.getLogger(__name__)

router = APIRouter()


def _unprocessable(e: InstructionError) -> HTTPException:
    logger.warning("Rejected script: %s: %s", type(e).__name__, e)
    detail = ScriptErrorDetail(error=type(e).__name__, message=str(e))
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail.model_dump())


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/scripts/run", response_model=RunScriptResponse)
async def run_script_route(
    payload: RunScriptRequest,
    settings: InterpreterSettings = Depends(get_settings),
) -> RunScriptResponse:
    """Run an instruction string against the posted state and return the result.

    The posted state is copied first, so a failing script returns no partially
    applied state.
    """

    state = dict(payload.state)
    rng = random.Random(payload.seed) if payload.seed is not None else None
    try:
        process(payload.instructions, state, rng=rng, max_depth=settings.max_depth)
    except InstructionError as e:
        raise _unprocessable(e) from e

    return RunScriptResponse(state=state, question=state.get(QUESTION_KEY))


@router.post("/scripts/evaluate", response_model=EvaluateResponse)
async def evaluate_route(payload: EvaluateRequest) -> EvaluateResponse:
    try:
        result = evaluate(payload.expression, payload.state)
    except InstructionError as e:
        raise _unprocessable(e) from e

    return EvaluateResponse(result=result)
