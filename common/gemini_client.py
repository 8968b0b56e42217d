"""Gemini integration - text and image generation over one client."""
from typing import Optional, List

from config import Config
from utils.data_uri import parse_data_uri, to_data_uri
from utils.logger import get_logger

logger = get_logger("gemini")

# Gemini client (ensure google-genai installed and GEMINI_API_KEY env var set)
try:
    from google import genai
    from google.genai import types
except Exception:
    genai = None
    types = None


def get_client():
    """Create a Gemini client with the configured credential and request timeout."""
    if genai is None or types is None:
        logger.error("Gemini client not available")
        raise RuntimeError("AI service is not configured properly")

    try:
        api_key = Config.get_gemini_api_key()
    except ValueError as e:
        logger.error(f"Failed to initialize Gemini client: {e}")
        raise RuntimeError("AI service credential is missing")

    return genai.Client(
        api_key=api_key,
        http_options=types.HttpOptions(timeout=int(Config.REQUEST_TIMEOUT_SECONDS * 1000)),
    )


def build_contents(prompt: str, images: Optional[List[str]] = None) -> List:
    """
    Build a single user turn: inline image parts first, then the text prompt.

    Args:
        prompt: Text part of the request
        images: Optional data URIs attached ahead of the prompt

    Raises:
        ValueError: if any image is not a valid data URI
    """
    if not types:
        raise RuntimeError("genai types not available")

    parts = []
    for index, image in enumerate(images or []):
        try:
            mime_type, data = parse_data_uri(image)
        except ValueError as e:
            raise ValueError(f"Image {index + 1}: {e}")
        parts.append(types.Part(inline_data=types.Blob(mime_type=mime_type, data=data)))
        logger.debug(f"Added input image {index + 1}: {mime_type} ({len(data)} bytes)")

    parts.append(types.Part.from_text(text=prompt))
    return [types.Content(role="user", parts=parts)]


def _provider_error(e: Exception) -> RuntimeError:
    error_msg = str(e).lower()
    if any(marker in error_msg for marker in ("rate limit", "quota", "resource_exhausted", "429")):
        return RuntimeError(f"AI service rate limit exceeded: {e}")
    if "timeout" in error_msg or "timed out" in error_msg:
        return RuntimeError(f"AI service timeout: {e}")
    return RuntimeError(f"AI service error: {e}")


def _stream(model: str, contents: List, config) -> List:
    """Collect response parts from a streamed generation."""
    client = get_client()
    collected = []
    chunk_count = 0
    try:
        for chunk in client.models.generate_content_stream(
            model=model, contents=contents, config=config
        ):
            chunk_count += 1
            if not (chunk and chunk.candidates and chunk.candidates[0].content):
                logger.debug(f"Chunk {chunk_count}: empty or no content")
                continue
            content = chunk.candidates[0].content
            collected.extend(getattr(content, "parts", None) or [])
    except Exception as e:
        logger.error(f"Error during generation streaming from {model}: {e}")
        raise _provider_error(e)

    logger.info(f"Received {chunk_count} chunks, {len(collected)} parts from {model}")
    return collected


def generate_text(system: str, prompt: str, images: Optional[List[str]] = None) -> str:
    """
    Ask the text model for a response to prompt (+ images) under a system instruction.

    Returns:
        The assembled response text, stripped. May be empty.

    Raises:
        ValueError: invalid image input (raised before any network call)
        RuntimeError: provider or configuration failure
    """
    contents = build_contents(prompt, images)
    config = types.GenerateContentConfig(
        response_modalities=["TEXT"],
        system_instruction=[types.Part.from_text(text=system)],
    )

    model = Config.GEMINI_TEXT_MODEL
    logger.info(f"Text generation with {model} ({len(images or [])} images)")
    parts = _stream(model, contents, config)

    text = "".join(getattr(part, "text", None) or "" for part in parts)
    logger.info(f"Text generation complete: {len(text)} chars")
    return text.strip()


def generate_image(system: str, prompt: str, images: Optional[List[str]] = None) -> Optional[str]:
    """
    Ask the image model to synthesize an image from prompt (+ images).

    Returns:
        The first returned image as a data URI, or None when the
        response carries no image.

    Raises:
        ValueError: invalid image input (raised before any network call)
        RuntimeError: provider or configuration failure
    """
    contents = build_contents(prompt, images)
    config = types.GenerateContentConfig(
        response_modalities=["IMAGE", "TEXT"],
        system_instruction=[types.Part.from_text(text=system)],
    )

    model = Config.GEMINI_IMAGE_MODEL
    logger.info(f"Image generation with {model} ({len(images or [])} images)")
    parts = _stream(model, contents, config)

    for part in parts:
        inline = getattr(part, "inline_data", None)
        if inline and getattr(inline, "data", None):
            mime_type = getattr(inline, "mime_type", None) or "image/png"
            logger.info(f"Image returned: {mime_type} ({len(inline.data)} bytes)")
            return to_data_uri(inline.data, mime_type)
        text = getattr(part, "text", None)
        if text:
            logger.debug(f"Model text alongside image request: {text[:200]}")

    logger.warning(f"No image in response from {model}")
    return None
