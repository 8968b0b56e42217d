"""Thumbnail optimization, generation and editing module."""
from thumbnails.models import (
    OptimizePromptRequest,
    GenerateThumbnailRequest,
    EditThumbnailRequest,
)
from thumbnails.services import optimize_prompt, generate_thumbnail, edit_thumbnail

__all__ = [
    "OptimizePromptRequest",
    "GenerateThumbnailRequest",
    "EditThumbnailRequest",
    "optimize_prompt",
    "generate_thumbnail",
    "edit_thumbnail"
]
