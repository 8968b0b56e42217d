"""Shared enumerations and response models."""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class AspectRatio(str, Enum):
    """Target width:height of a generated or edited thumbnail."""
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"
    SQUARE = "1:1"


class ConsistencyMode(str, Enum):
    """Consistency modes offered by the design studio."""
    CHARACTER = "character"
    STYLE = "style"
    NONE = "none"


class BatchConsistencyMode(str, Enum):
    """Consistency modes for batch generation."""
    CHARACTER = "character"
    STYLE = "style"
    THEME = "theme"
    NONE = "none"


class FusionStyle(str, Enum):
    """Fusion technique used to combine images."""
    SEAMLESS = "seamless"
    COLLAGE = "collage"
    OVERLAY = "overlay"
    BLEND = "blend"
    COMPOSITE = "composite"


class CreativityLevel(str, Enum):
    """How freely the fusion may depart from the source images."""
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    CREATIVE = "creative"
    EXPERIMENTAL = "experimental"


class ActionResponse(BaseModel):
    """Uniform result shape of every action endpoint."""
    success: bool = Field(..., description="Whether the action completed")
    error: Optional[str] = Field(None, description="User-facing error message when success is false")
