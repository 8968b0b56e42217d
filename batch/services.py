"""Batch generation service - a consistent series of thumbnails."""
from typing import Optional, List

from config import Config
from common import gemini_client
from common.models import AspectRatio, BatchConsistencyMode
from common.prompts import batch_prompt, batch_system_instruction, consistency_instruction
from batch.models import BatchResult, BatchThumbnail
from utils.data_uri import parse_data_uri
from utils.logger import get_logger

logger = get_logger("batch.services")


def select_reference(
    mode: BatchConsistencyMode,
    style_reference: Optional[str] = None,
    character_reference: Optional[str] = None
) -> Optional[str]:
    """Reference image attached for the mode, if the matching reference was supplied."""
    if mode == BatchConsistencyMode.CHARACTER:
        return character_reference or None
    if mode == BatchConsistencyMode.STYLE:
        return style_reference or None
    return None


def batch_generate(
    prompts: List[str],
    base_prompt: str,
    aspect_ratio: AspectRatio,
    consistency_mode: BatchConsistencyMode = BatchConsistencyMode.NONE,
    style_reference: Optional[str] = None,
    character_reference: Optional[str] = None
) -> BatchResult:
    """
    Generate one thumbnail per prompt, strictly one request at a time.

    A failed item is logged and skipped; it never aborts the batch.
    Character and style modes only take effect when the matching
    reference image is supplied.

    Returns:
        BatchResult with the successful items (original indices kept) and
        consistency_score = successes / requested.

    Raises:
        ValueError: empty prompt list, too many prompts, or invalid reference
    """
    if not prompts:
        raise ValueError("At least one prompt is required for batch generation.")
    if len(prompts) > Config.MAX_BATCH_PROMPTS:
        raise ValueError(f"Batch generation is limited to {Config.MAX_BATCH_PROMPTS} prompts.")

    aspect_ratio = AspectRatio(aspect_ratio)
    mode = BatchConsistencyMode(consistency_mode)

    reference = select_reference(mode, style_reference, character_reference)
    if reference:
        parse_data_uri(reference)
    if mode in (BatchConsistencyMode.CHARACTER, BatchConsistencyMode.STYLE) and not reference:
        logger.warning(f"{mode.value} consistency requested without a reference image; ignoring mode")
        instruction = ""
    else:
        instruction = consistency_instruction(mode)

    system = batch_system_instruction(aspect_ratio, mode)
    reference_images = [reference] if reference else []
    thumbnails = []

    logger.info(f"Batch generation: {len(prompts)} prompts, mode={mode.value}, ratio={aspect_ratio.value}")

    for index, prompt in enumerate(prompts):
        try:
            image = gemini_client.generate_image(
                system,
                batch_prompt(base_prompt, prompt, instruction, aspect_ratio),
                images=reference_images,
            )
        except Exception as e:
            logger.error(f"Batch generation failed for prompt {index}: {e}")
            continue

        if not image:
            logger.warning(f"Batch generation returned no image for prompt {index}")
            continue

        thumbnails.append(BatchThumbnail(image=image, prompt=prompt, index=index))
        logger.info(f"Batch item {index + 1}/{len(prompts)} generated")

    score = len(thumbnails) / len(prompts)
    logger.info(f"Batch complete: {len(thumbnails)}/{len(prompts)} succeeded")
    return BatchResult(thumbnails=thumbnails, consistency_score=score)
