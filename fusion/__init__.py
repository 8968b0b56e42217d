"""Intelligent fusion module."""
from fusion.models import IntelligentFusionRequest, FusionResult, TechnicalDetails
from fusion.services import intelligent_fusion, validate_fusion_input

__all__ = [
    "IntelligentFusionRequest",
    "FusionResult",
    "TechnicalDetails",
    "intelligent_fusion",
    "validate_fusion_input"
]
