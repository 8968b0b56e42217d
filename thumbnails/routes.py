"""Thumbnail action routes."""
from fastapi import APIRouter

from thumbnails.models import (
    OptimizePromptRequest,
    OptimizePromptResponse,
    GenerateThumbnailRequest,
    EditThumbnailRequest,
    ThumbnailResponse,
)
from thumbnails.services import optimize_prompt, generate_thumbnail, edit_thumbnail
from common.error_messages import ErrorCode, action_failure
from utils.logger import get_logger

logger = get_logger("thumbnails")
router = APIRouter(prefix="/api/actions", tags=["thumbnails"])


@router.post("/optimize-prompt", response_model=OptimizePromptResponse, response_model_exclude_none=True)
def optimize_prompt_action(req: OptimizePromptRequest):
    """Rewrite the user's prompt into a detailed image-generation prompt."""
    try:
        optimized = optimize_prompt(req.prompt, req.aspect_ratio, req.images)
        return {"success": True, "optimized_prompt": optimized}
    except ValueError as e:
        logger.warning(f"Invalid optimize request: {e}")
        return action_failure(ErrorCode.INVALID_PARAMETER, str(e))
    except Exception as e:
        logger.error(f"Error optimizing prompt: {e}")
        return action_failure(ErrorCode.OPTIMIZATION_FAILED, str(e))


@router.post("/generate-thumbnail", response_model=ThumbnailResponse, response_model_exclude_none=True)
def generate_thumbnail_action(req: GenerateThumbnailRequest):
    """Generate a thumbnail from a prompt and optional images."""
    try:
        thumbnail = generate_thumbnail(req.prompt, req.aspect_ratio, req.images)
        return {"success": True, "thumbnail": thumbnail}
    except ValueError as e:
        logger.warning(f"Invalid generate request: {e}")
        return action_failure(ErrorCode.INVALID_PARAMETER, str(e))
    except Exception as e:
        logger.error(f"Error generating thumbnail: {e}")
        return action_failure(ErrorCode.IMAGE_GENERATION_FAILED, str(e))


@router.post("/edit-thumbnail", response_model=ThumbnailResponse, response_model_exclude_none=True)
def edit_thumbnail_action(req: EditThumbnailRequest):
    """Apply an edit instruction to a thumbnail."""
    try:
        thumbnail = edit_thumbnail(req.base_image, req.prompt, req.aspect_ratio)
        return {"success": True, "thumbnail": thumbnail}
    except ValueError as e:
        logger.warning(f"Invalid edit request: {e}")
        return action_failure(ErrorCode.INVALID_PARAMETER, str(e))
    except Exception as e:
        logger.error(f"Error editing thumbnail: {e}")
        return action_failure(ErrorCode.EDIT_FAILED, str(e))
