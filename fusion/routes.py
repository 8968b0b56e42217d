"""Intelligent fusion routes."""
from fastapi import APIRouter

from fusion.models import IntelligentFusionRequest, IntelligentFusionResponse
from fusion.services import intelligent_fusion
from common.error_messages import ErrorCode, action_failure
from utils.logger import get_logger

logger = get_logger("fusion")
router = APIRouter(prefix="/api/actions", tags=["fusion"])


@router.post("/intelligent-fusion", response_model=IntelligentFusionResponse, response_model_exclude_none=True)
def intelligent_fusion_action(req: IntelligentFusionRequest):
    """Fuse 2-4 images with the requested style and creativity level."""
    try:
        result = intelligent_fusion(
            req.images,
            req.fusion_prompt,
            req.aspect_ratio,
            fusion_style=req.fusion_style,
            creativity_level=req.creativity_level,
            dominant_image=req.dominant_image,
        )
        return {"success": True, **result.model_dump()}
    except ValueError as e:
        logger.warning(f"Invalid fusion request: {e}")
        return action_failure(ErrorCode.INVALID_PARAMETER, str(e))
    except Exception as e:
        logger.error(f"Error in intelligent fusion: {e}")
        return action_failure(ErrorCode.FUSION_FAILED, str(e))
