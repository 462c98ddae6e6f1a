"""
Run draft API routes.

Provides endpoints for:
- Generating a run draft (structured fields + description) from pasted
  Strava, web and social post text
"""

import logging

from fastapi import APIRouter, Depends, Request

from ..deps import (
    CurrentUser,
    RunGenerationService,
    get_current_user,
    get_run_generation_service,
)
from ..middleware.rate_limit import ai_generate_rate_limit, limiter
from ...exceptions import GoFastError, RunGenerationError
from ...models.runs import AIGenerateRequest, AIGenerateResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ai-generate", response_model=AIGenerateResponse)
@limiter.limit(ai_generate_rate_limit)
async def generate_run_draft(
    request: Request,
    payload: AIGenerateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: RunGenerationService = Depends(get_run_generation_service),
) -> AIGenerateResponse:
    """Pre-fill a run from every source the organiser pasted.

    All sources are read together; when several mention the same fact the
    Strava text wins, then web text, then the social post. The result is
    a draft for the organiser to review, nothing is saved.

    Returns:
        ``{"success": true, "runData": {...}}``

    Raises:
        NoSourceInputError (400): No text or URL was provided.
        RunGenerationError (500): Anything unexpected went wrong.
    """
    logger.info(f"Generating run draft for user {current_user.user_id}")
    try:
        run_data = service.generate_from_request(payload)
    except GoFastError:
        raise
    except Exception as e:
        logger.exception(f"AI generation error: {e}")
        raise RunGenerationError(str(e))

    return AIGenerateResponse(run_data=run_data)
