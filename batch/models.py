"""Batch generation Pydantic models."""
from typing import Optional, List
from pydantic import BaseModel, Field

from common.models import ActionResponse, AspectRatio, BatchConsistencyMode


class BatchGenerateRequest(BaseModel):
    prompts: List[str] = Field(..., min_length=1, description="Prompts to generate, in order")
    base_prompt: str = Field("", description="Base prompt shared by every item")
    aspect_ratio: AspectRatio = Field(AspectRatio.LANDSCAPE, description="Aspect ratio for all thumbnails")
    consistency_mode: BatchConsistencyMode = Field(BatchConsistencyMode.NONE, description="Type of consistency to maintain")
    style_reference: Optional[str] = Field(None, description="Reference image for style consistency")
    character_reference: Optional[str] = Field(None, description="Reference image for character consistency")


class BatchThumbnail(BaseModel):
    image: str = Field(..., description="Generated thumbnail as a data URI")
    prompt: str = Field(..., description="The item prompt used for this thumbnail")
    index: int = Field(..., description="Position of the prompt in the request")


class BatchResult(BaseModel):
    thumbnails: List[BatchThumbnail] = Field(default_factory=list)
    consistency_score: float = Field(0.0, description="Share of requested items that produced an image (advisory)")


class BatchGenerateResponse(ActionResponse):
    thumbnails: Optional[List[BatchThumbnail]] = None
    consistency_score: Optional[float] = None
