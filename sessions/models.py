"""Design studio session Pydantic models."""
from typing import Optional, List
from pydantic import BaseModel, Field

from common.models import ActionResponse, AspectRatio, ConsistencyMode


class HistoryEntry(BaseModel):
    index: int = Field(..., description="Position in the full session history")
    prompt: str = Field(..., description="Optimized prompt that produced the image")
    image: str = Field(..., description="Generated thumbnail as a data URI")
    timestamp: int = Field(..., description="Creation time in epoch milliseconds")
    aspect_ratio: AspectRatio


class SessionView(BaseModel):
    id: str
    created_at: str
    updated_at: str
    reference_images: List[str] = Field(default_factory=list)
    prompt: str = ""
    optimized_prompt: str = ""
    aspect_ratio: AspectRatio = AspectRatio.SQUARE
    consistency_mode: ConsistencyMode = ConsistencyMode.NONE
    style_reference: Optional[str] = None
    current_thumbnail: Optional[str] = None
    history: List[HistoryEntry] = Field(default_factory=list, description="Most recent history entries")
    history_count: int = 0


class SessionResponse(ActionResponse):
    session: Optional[SessionView] = None


class SessionSettingsRequest(BaseModel):
    prompt: Optional[str] = None
    optimized_prompt: Optional[str] = None
    aspect_ratio: Optional[AspectRatio] = None
    consistency_mode: Optional[ConsistencyMode] = None


class AddReferencesRequest(BaseModel):
    images: List[str] = Field(..., min_length=1, description="Reference images as data URIs")


class EditRequest(BaseModel):
    prompt: str = Field("", description="Edit instruction")


class StyleReferenceRequest(BaseModel):
    history_index: Optional[int] = Field(
        None, ge=0, description="History entry to use; the current thumbnail when omitted"
    )
