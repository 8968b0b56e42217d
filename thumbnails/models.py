"""Thumbnail action Pydantic models."""
from typing import Optional, List
from pydantic import BaseModel, Field

from config import Config
from common.models import ActionResponse, AspectRatio


class OptimizePromptRequest(BaseModel):
    prompt: str = Field(..., min_length=1, description="The user's original prompt")
    aspect_ratio: AspectRatio = Field(AspectRatio.SQUARE, description="Desired aspect ratio")
    images: List[str] = Field(
        default_factory=list, max_length=Config.MAX_REFERENCE_IMAGES, description="Reference images as data URIs"
    )


class OptimizePromptResponse(ActionResponse):
    optimized_prompt: Optional[str] = None


class GenerateThumbnailRequest(BaseModel):
    prompt: str = Field(..., min_length=1, description="Prompt describing the thumbnail")
    aspect_ratio: AspectRatio = Field(AspectRatio.SQUARE, description="Desired aspect ratio")
    images: List[str] = Field(
        default_factory=list, max_length=Config.MAX_REFERENCE_IMAGES, description="Images to include, as data URIs"
    )


class EditThumbnailRequest(BaseModel):
    base_image: str = Field(..., min_length=1, description="Image to edit, as a data URI")
    prompt: str = Field(..., min_length=1, description="Edit instruction")
    aspect_ratio: AspectRatio = Field(AspectRatio.SQUARE, description="Aspect ratio of the thumbnail")


class ThumbnailResponse(ActionResponse):
    thumbnail: Optional[str] = Field(None, description="Generated or edited thumbnail as a data URI")
