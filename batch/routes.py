"""Batch generation routes."""
from fastapi import APIRouter

from batch.models import BatchGenerateRequest, BatchGenerateResponse
from batch.services import batch_generate
from common.error_messages import ErrorCode, action_failure
from utils.logger import get_logger

logger = get_logger("batch")
router = APIRouter(prefix="/api/actions", tags=["batch"])


@router.post("/batch-generate", response_model=BatchGenerateResponse, response_model_exclude_none=True)
def batch_generate_action(req: BatchGenerateRequest):
    """
    Generate a series of thumbnails sharing a base prompt and consistency mode.

    Items that fail are left out of ``thumbnails``; ``consistency_score`` is
    the share of prompts that produced an image.
    """
    try:
        result = batch_generate(
            req.prompts,
            req.base_prompt,
            req.aspect_ratio,
            consistency_mode=req.consistency_mode,
            style_reference=req.style_reference,
            character_reference=req.character_reference,
        )
        return {"success": True, **result.model_dump()}
    except ValueError as e:
        logger.warning(f"Invalid batch request: {e}")
        return action_failure(ErrorCode.INVALID_PARAMETER, str(e))
    except Exception as e:
        logger.error(f"Error in batch generation: {e}")
        return action_failure(ErrorCode.BATCH_GENERATION_FAILED, str(e))
