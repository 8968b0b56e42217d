"""Intelligent fusion Pydantic models."""
from typing import Optional, List
from pydantic import BaseModel, Field

from common.models import ActionResponse, AspectRatio, CreativityLevel, FusionStyle


class IntelligentFusionRequest(BaseModel):
    images: List[str] = Field(..., min_length=2, max_length=4, description="Images to fuse (2-4 data URIs)")
    fusion_prompt: str = Field(..., min_length=1, description="How the images should be combined")
    aspect_ratio: AspectRatio = Field(AspectRatio.LANDSCAPE, description="Target aspect ratio")
    fusion_style: FusionStyle = Field(FusionStyle.SEAMLESS, description="Fusion technique")
    creativity_level: CreativityLevel = Field(CreativityLevel.BALANCED, description="How creative the fusion should be")
    dominant_image: Optional[int] = Field(None, ge=0, description="0-based index of the dominant image")


class TechnicalDetails(BaseModel):
    """Descriptive metadata echoed from the request; not measured from the output."""
    primary_elements: List[str] = Field(default_factory=list)
    fusion_technique: str
    aspect_ratio_handling: str


class FusionResult(BaseModel):
    fused_image: str = Field(..., description="Fused image as a data URI")
    fusion_description: str
    technical_details: TechnicalDetails


class IntelligentFusionResponse(ActionResponse):
    fused_image: Optional[str] = None
    fusion_description: Optional[str] = None
    technical_details: Optional[TechnicalDetails] = None
