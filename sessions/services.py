"""Design studio session services.

A session holds what a user works with between actions: uploaded
reference images, prompt text, the optimized prompt, the selected style
reference, the current thumbnail and the generation history. Sessions
live in process memory only.
"""
import time
from datetime import datetime, timedelta, timezone
from typing import Optional, List, Dict, Any

from config import Config
from database import db
from common.models import AspectRatio, ConsistencyMode
from common.prompts import studio_consistency_suffix
from thumbnails.services import optimize_prompt, generate_thumbnail, edit_thumbnail
from utils.data_uri import parse_data_uri
from utils.logger import get_logger

logger = get_logger("sessions.services")

COLLECTION = "sessions"


def _now() -> str:
    # Fixed-width timestamps so string order matches time order
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def evict_sessions(max_sessions: Optional[int] = None) -> List[str]:
    """Drop sessions idle for longer than SESSION_TTL_SECONDS, then the least recently
    updated ones beyond max_sessions (MAX_SESSIONS by default)."""
    cutoff = datetime.now(timezone.utc) - timedelta(seconds=Config.SESSION_TTL_SECONDS)
    limit = Config.MAX_SESSIONS if max_sessions is None else max_sessions
    return db.evict(COLLECTION, cutoff.isoformat(timespec="microseconds"), limit)


def create_session(aspect_ratio: AspectRatio = AspectRatio.SQUARE) -> Dict[str, Any]:
    """
    Create an empty session. Fields:
      id, created_at, updated_at, reference_images, prompt, optimized_prompt,
      aspect_ratio, consistency_mode, style_reference, current_thumbnail, history
    """
    # Leave room for the new session under the cap
    evict_sessions(Config.MAX_SESSIONS - 1)
    now = _now()
    session = {
        "created_at": now,
        "updated_at": now,
        "reference_images": [],
        "prompt": "",
        "optimized_prompt": "",
        "aspect_ratio": AspectRatio(aspect_ratio).value,
        "consistency_mode": ConsistencyMode.NONE.value,
        "style_reference": None,
        "current_thumbnail": None,
        "history": [],  # entries: {prompt, image, timestamp, aspect_ratio}
    }
    inserted = db.insert_one(COLLECTION, session)
    logger.info(f"Created session {inserted['id']}")
    return inserted


def get_session(session_id: str) -> Dict[str, Any]:
    """Get a session or raise KeyError. Expired sessions are gone."""
    evict_sessions()
    session = db.find_one(COLLECTION, session_id)
    if not session:
        raise KeyError("session not found")
    return session


def delete_session(session_id: str) -> Dict[str, Any]:
    return db.delete_one(COLLECTION, session_id)


def _update(session_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
    patch = dict(patch, updated_at=_now())
    return db.update_one(COLLECTION, session_id, patch)


def session_view(session: Dict[str, Any], limit: Optional[int] = None) -> Dict[str, Any]:
    """Session with only the most recent `limit` history entries (oldest first)."""
    limit = Config.HISTORY_DISPLAY_LIMIT if limit is None else limit
    history = session.get("history", [])
    start = max(len(history) - limit, 0)
    view = dict(session)
    view["history"] = [dict(entry, index=i) for i, entry in enumerate(history) if i >= start]
    view["history_count"] = len(history)
    return view


# ---------- Reference images ----------
def add_reference_images(session_id: str, images: List[str]) -> Dict[str, Any]:
    """Append uploaded reference images; the total may not exceed MAX_REFERENCE_IMAGES."""
    session = get_session(session_id)
    current = session.get("reference_images", [])
    remaining = Config.MAX_REFERENCE_IMAGES - len(current)
    if len(images) > remaining:
        raise ValueError(f"You can only upload up to {Config.MAX_REFERENCE_IMAGES} images in total.")
    for index, image in enumerate(images):
        try:
            parse_data_uri(image)
        except ValueError as e:
            raise ValueError(f"Image {index + 1}: {e}")
    logger.info(f"Session {session_id}: added {len(images)} reference image(s)")
    return _update(session_id, {"reference_images": current + list(images)})


def remove_reference_image(session_id: str, index: int) -> Dict[str, Any]:
    session = get_session(session_id)
    current = session.get("reference_images", [])
    if not 0 <= index < len(current):
        raise ValueError(f"There is no reference image at position {index}.")
    return _update(session_id, {"reference_images": current[:index] + current[index + 1:]})


# ---------- Settings ----------
def update_settings(
    session_id: str,
    prompt: Optional[str] = None,
    optimized_prompt: Optional[str] = None,
    aspect_ratio: Optional[AspectRatio] = None,
    consistency_mode: Optional[ConsistencyMode] = None
) -> Dict[str, Any]:
    """Update any of the editable text fields and selectors."""
    get_session(session_id)
    patch = {}
    if prompt is not None:
        patch["prompt"] = prompt
    if optimized_prompt is not None:
        patch["optimized_prompt"] = optimized_prompt
    if aspect_ratio is not None:
        patch["aspect_ratio"] = AspectRatio(aspect_ratio).value
    if consistency_mode is not None:
        patch["consistency_mode"] = ConsistencyMode(consistency_mode).value
    return _update(session_id, patch)


# ---------- Generation flow ----------
def optimize_session_prompt(session_id: str) -> Dict[str, Any]:
    """Optimize the session prompt; clears the previous optimized prompt and thumbnail."""
    session = get_session(session_id)
    if not session.get("prompt", "").strip():
        raise ValueError("Please provide a prompt to optimize.")

    _update(session_id, {"optimized_prompt": "", "current_thumbnail": None})
    optimized = optimize_prompt(
        session["prompt"],
        session["aspect_ratio"],
        session.get("reference_images", []),
    )
    return _update(session_id, {"optimized_prompt": optimized})


def build_generation_input(session: Dict[str, Any]) -> Dict[str, Any]:
    """
    Prompt and image slots for a session generation.

    The selected style reference takes the first image slot in place of
    the first upload, and the consistency sentence is appended only when a
    style reference is selected.
    """
    prompt = session.get("optimized_prompt", "")
    style_reference = session.get("style_reference")
    uploads = session.get("reference_images", [])

    if style_reference:
        prompt += studio_consistency_suffix(session.get("consistency_mode", ConsistencyMode.NONE.value))

    slots = [style_reference or (uploads[0] if uploads else None)] + uploads[1:Config.MAX_REFERENCE_IMAGES]
    return {"prompt": prompt, "images": [img for img in slots if img]}


def generate_session_thumbnail(session_id: str) -> Dict[str, Any]:
    """
    Generate from the optimized prompt, set it as the current thumbnail and
    append exactly one history entry.
    """
    session = get_session(session_id)
    optimized = session.get("optimized_prompt", "")
    if not optimized.strip():
        raise ValueError("Please optimize a prompt before generating.")

    _update(session_id, {"current_thumbnail": None})
    generation = build_generation_input(session)
    thumbnail = generate_thumbnail(generation["prompt"], session["aspect_ratio"], generation["images"])

    entry = {
        "prompt": optimized,
        "image": thumbnail,
        "timestamp": int(time.time() * 1000),
        "aspect_ratio": session["aspect_ratio"],
    }
    updated = db.append_to(
        COLLECTION, session_id, "history", entry,
        patch={"current_thumbnail": thumbnail, "updated_at": _now()},
    )
    logger.info(f"Session {session_id}: history now has {len(updated['history'])} entries")
    return updated


def edit_session_thumbnail(session_id: str, edit_prompt: str) -> Dict[str, Any]:
    """Edit the current thumbnail; the result becomes the new current thumbnail."""
    session = get_session(session_id)
    if not (edit_prompt or "").strip() or not session.get("current_thumbnail"):
        raise ValueError("Please describe the changes you want to make.")

    edited = edit_thumbnail(session["current_thumbnail"], edit_prompt, session["aspect_ratio"])
    return _update(session_id, {"current_thumbnail": edited})


# ---------- Style reference ----------
def select_style_reference(session_id: str, history_index: Optional[int] = None) -> Dict[str, Any]:
    """Use a history entry, or the current thumbnail when no index is given, as style reference."""
    session = get_session(session_id)
    if history_index is None:
        image = session.get("current_thumbnail")
        if not image:
            raise ValueError("There is no current thumbnail to use as a style reference.")
    else:
        history = session.get("history", [])
        if not 0 <= history_index < len(history):
            raise ValueError(f"There is no history entry at position {history_index}.")
        image = history[history_index]["image"]
    return _update(session_id, {"style_reference": image})


def clear_style_reference(session_id: str) -> Dict[str, Any]:
    get_session(session_id)
    return _update(session_id, {"style_reference": None})
