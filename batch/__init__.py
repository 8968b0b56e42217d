"""Batch generation module."""
from batch.models import BatchGenerateRequest, BatchResult, BatchThumbnail
from batch.services import batch_generate, select_reference

__all__ = [
    "BatchGenerateRequest",
    "BatchResult",
    "BatchThumbnail",
    "batch_generate",
    "select_reference"
]
