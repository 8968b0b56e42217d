"""Intelligent fusion service - analyse, then fuse 2-4 images."""
from typing import Optional, List

from common import gemini_client
from common.models import AspectRatio, CreativityLevel, FusionStyle
from common.prompts import (
    FUSION_ANALYST_SYSTEM,
    fusion_analysis_prompt,
    fusion_prompt,
    fusion_system_instruction,
)
from fusion.models import FusionResult, TechnicalDetails
from utils.data_uri import parse_data_uri
from utils.logger import get_logger

logger = get_logger("fusion.services")

MIN_FUSION_IMAGES = 2
MAX_FUSION_IMAGES = 4


def validate_fusion_input(images: List[str], dominant_image: Optional[int] = None) -> None:
    """Reject bad fusion input before any model call is made."""
    count = len(images or [])
    if count < MIN_FUSION_IMAGES or count > MAX_FUSION_IMAGES:
        raise ValueError(
            f"Fusion needs between {MIN_FUSION_IMAGES} and {MAX_FUSION_IMAGES} images, got {count}."
        )
    for index, image in enumerate(images):
        try:
            parse_data_uri(image)
        except ValueError as e:
            raise ValueError(f"Image {index + 1}: {e}")
    if dominant_image is not None and not 0 <= dominant_image < count:
        raise ValueError(f"Dominant image index {dominant_image} is out of range for {count} images.")


def intelligent_fusion(
    images: List[str],
    fusion_goal: str,
    aspect_ratio: AspectRatio,
    fusion_style: FusionStyle = FusionStyle.SEAMLESS,
    creativity_level: CreativityLevel = CreativityLevel.BALANCED,
    dominant_image: Optional[int] = None
) -> FusionResult:
    """
    Fuse 2-4 images into one composition.

    Two sequential calls: a text-model analysis of the inputs, then an
    image-model fusion whose prompt embeds that analysis.

    Raises:
        ValueError: wrong image count, invalid image, bad dominant index
        RuntimeError: provider failure or no image returned
    """
    validate_fusion_input(images, dominant_image)
    fusion_goal = (fusion_goal or "").strip()
    if not fusion_goal:
        raise ValueError("Please describe how the images should be combined.")

    aspect_ratio = AspectRatio(aspect_ratio)
    fusion_style = FusionStyle(fusion_style)
    creativity_level = CreativityLevel(creativity_level)

    logger.info(
        f"Fusing {len(images)} images: style={fusion_style.value}, "
        f"creativity={creativity_level.value}, ratio={aspect_ratio.value}"
    )

    analysis = gemini_client.generate_text(
        FUSION_ANALYST_SYSTEM,
        fusion_analysis_prompt(len(images), fusion_style, fusion_goal, creativity_level),
        images=images,
    )
    logger.info(f"Fusion analysis: {len(analysis)} chars")

    fused = gemini_client.generate_image(
        fusion_system_instruction(aspect_ratio),
        fusion_prompt(fusion_goal, fusion_style, creativity_level, aspect_ratio, analysis, dominant_image),
        images=images,
    )
    if not fused:
        raise RuntimeError("Intelligent fusion failed to generate image.")

    return FusionResult(
        fused_image=fused,
        fusion_description=(
            f"Successfully fused {len(images)} images using {fusion_style.value} technique "
            f"with {creativity_level.value} creativity level."
        ),
        technical_details=TechnicalDetails(
            primary_elements=[f"Elements from image {i + 1}" for i in range(len(images))],
            fusion_technique=fusion_style.value,
            aspect_ratio_handling=f"Optimized for {aspect_ratio.value} format",
        ),
    )
