"""Thumbnail services - prompt optimization, generation and iterative editing."""
from typing import Optional, List

from config import Config
from common import gemini_client
from common.models import AspectRatio
from common.prompts import (
    editor_system_instruction,
    fallback_optimized_prompt,
    generator_system_instruction,
    optimizer_system_instruction,
    optimizer_user_prompt,
)
from utils.data_uri import parse_data_uri
from utils.logger import get_logger

logger = get_logger("thumbnails.services")


def _validate_images(images: Optional[List[str]], limit: int) -> List[str]:
    """Drop empty slots, enforce the image limit and check each payload."""
    images = [img for img in (images or []) if img]
    if len(images) > limit:
        raise ValueError(f"You can only provide up to {limit} images.")
    for index, image in enumerate(images):
        try:
            parse_data_uri(image)
        except ValueError as e:
            raise ValueError(f"Image {index + 1}: {e}")
    return images


def optimize_prompt(
    prompt: str,
    aspect_ratio: AspectRatio,
    images: Optional[List[str]] = None
) -> str:
    """
    Rewrite a user prompt into a richer image-generation prompt.

    Optimization is best-effort: a provider failure or an empty reply
    yields a deterministic template instead of an error.

    Args:
        prompt: The user's original prompt (required)
        aspect_ratio: Target aspect ratio
        images: Up to MAX_REFERENCE_IMAGES reference images as data URIs

    Returns:
        The optimized prompt

    Raises:
        ValueError: empty prompt or invalid images
    """
    prompt = (prompt or "").strip()
    if not prompt:
        raise ValueError("Please provide a prompt to optimize.")
    images = _validate_images(images, Config.MAX_REFERENCE_IMAGES)
    aspect_ratio = AspectRatio(aspect_ratio)

    try:
        optimized = gemini_client.generate_text(
            optimizer_system_instruction(aspect_ratio),
            optimizer_user_prompt(prompt, aspect_ratio, len(images)),
            images=images,
        )
    except Exception as e:
        logger.error(f"optimize_prompt: model call failed, using fallback: {e}")
        return fallback_optimized_prompt(prompt, aspect_ratio, len(images))

    if not optimized:
        logger.warning("optimize_prompt: empty response from model, using fallback")
        return fallback_optimized_prompt(prompt, aspect_ratio, len(images))

    logger.info(f"Optimized prompt ({len(prompt)} -> {len(optimized)} chars)")
    return optimized


def generate_thumbnail(
    prompt: str,
    aspect_ratio: AspectRatio,
    images: Optional[List[str]] = None
) -> str:
    """
    Generate one thumbnail from a prompt and up to three images.

    Returns:
        The thumbnail as a data URI

    Raises:
        ValueError: empty prompt or invalid images
        RuntimeError: provider failure or no image returned
    """
    prompt = (prompt or "").strip()
    if not prompt:
        raise ValueError("A prompt is required to generate a thumbnail.")
    images = _validate_images(images, Config.MAX_REFERENCE_IMAGES)
    aspect_ratio = AspectRatio(aspect_ratio)

    logger.info(f"Generating {aspect_ratio.value} thumbnail with {len(images)} image(s): {prompt[:50]}...")
    thumbnail = gemini_client.generate_image(
        generator_system_instruction(aspect_ratio),
        f"User prompt: {prompt}",
        images=images,
    )
    if not thumbnail:
        raise RuntimeError("Image generation did not return an image.")
    return thumbnail


def edit_thumbnail(base_image: str, prompt: str, aspect_ratio: AspectRatio) -> str:
    """
    Apply an edit instruction to an existing thumbnail.

    Each call is independent; callers pass the latest image as base_image.

    Raises:
        ValueError: missing base image or instruction
        RuntimeError: provider failure or no image returned
    """
    if not base_image:
        raise ValueError("A base image is required to edit a thumbnail.")
    prompt = (prompt or "").strip()
    if not prompt:
        raise ValueError("Please describe the changes you want to make.")
    images = _validate_images([base_image], 1)
    aspect_ratio = AspectRatio(aspect_ratio)

    logger.info(f"Editing {aspect_ratio.value} thumbnail: {prompt[:50]}...")
    edited = gemini_client.generate_image(
        editor_system_instruction(aspect_ratio),
        f"User edit prompt: {prompt}",
        images=images,
    )
    if not edited:
        raise RuntimeError("Failed to generate or edit thumbnail.")
    return edited
