"""Design studio session routes."""
from typing import Optional

from fastapi import APIRouter, HTTPException, Path, Body

from sessions.models import (
    SessionResponse,
    SessionSettingsRequest,
    AddReferencesRequest,
    EditRequest,
    StyleReferenceRequest,
)
from sessions import services
from common.error_messages import ErrorCode, action_failure, format_error_detail
from common.models import ActionResponse
from utils.logger import get_logger

logger = get_logger("sessions")
router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail=format_error_detail(ErrorCode.SESSION_NOT_FOUND))


def _ok(session) -> dict:
    return {"success": True, "session": services.session_view(session)}


@router.post("", response_model=SessionResponse, response_model_exclude_none=True)
def api_create_session():
    """Start a new design session."""
    return _ok(services.create_session())


@router.get("/{session_id}", response_model=SessionResponse, response_model_exclude_none=True)
def api_get_session(session_id: str = Path(...)):
    """Get a session with its most recent history entries."""
    try:
        return _ok(services.get_session(session_id))
    except KeyError:
        raise _not_found()


@router.delete("/{session_id}", response_model=ActionResponse, response_model_exclude_none=True)
def api_delete_session(session_id: str = Path(...)):
    """Discard a session."""
    try:
        services.delete_session(session_id)
        return {"success": True}
    except KeyError:
        raise _not_found()


@router.patch("/{session_id}", response_model=SessionResponse, response_model_exclude_none=True)
def api_update_settings(req: SessionSettingsRequest, session_id: str = Path(...)):
    """Update prompt text, optimized prompt, aspect ratio or consistency mode."""
    try:
        return _ok(services.update_settings(
            session_id,
            prompt=req.prompt,
            optimized_prompt=req.optimized_prompt,
            aspect_ratio=req.aspect_ratio,
            consistency_mode=req.consistency_mode,
        ))
    except KeyError:
        raise _not_found()


@router.post("/{session_id}/references", response_model=SessionResponse, response_model_exclude_none=True)
def api_add_references(req: AddReferencesRequest, session_id: str = Path(...)):
    """Upload reference images (data URIs)."""
    try:
        return _ok(services.add_reference_images(session_id, req.images))
    except KeyError:
        raise _not_found()
    except ValueError as e:
        logger.warning(f"Rejected reference upload for session {session_id}: {e}")
        return action_failure(ErrorCode.INVALID_IMAGE_DATA, str(e))


@router.delete("/{session_id}/references/{index}", response_model=SessionResponse, response_model_exclude_none=True)
def api_remove_reference(session_id: str = Path(...), index: int = Path(..., ge=0)):
    """Remove one uploaded reference image."""
    try:
        return _ok(services.remove_reference_image(session_id, index))
    except KeyError:
        raise _not_found()
    except ValueError as e:
        return action_failure(ErrorCode.INVALID_PARAMETER, str(e))


@router.post("/{session_id}/optimize", response_model=SessionResponse, response_model_exclude_none=True)
def api_optimize(session_id: str = Path(...)):
    """Optimize the session prompt."""
    try:
        return _ok(services.optimize_session_prompt(session_id))
    except KeyError:
        raise _not_found()
    except ValueError as e:
        return action_failure(ErrorCode.MISSING_FIELD, str(e))
    except Exception as e:
        logger.error(f"Optimization failed for session {session_id}: {e}")
        return action_failure(ErrorCode.OPTIMIZATION_FAILED, str(e))


@router.post("/{session_id}/generate", response_model=SessionResponse, response_model_exclude_none=True)
def api_generate(session_id: str = Path(...)):
    """Generate a thumbnail (or a new variation) from the optimized prompt."""
    try:
        return _ok(services.generate_session_thumbnail(session_id))
    except KeyError:
        raise _not_found()
    except ValueError as e:
        return action_failure(ErrorCode.MISSING_FIELD, str(e))
    except Exception as e:
        logger.error(f"Generation failed for session {session_id}: {e}")
        return action_failure(ErrorCode.IMAGE_GENERATION_FAILED, str(e))


@router.post("/{session_id}/edit", response_model=SessionResponse, response_model_exclude_none=True)
def api_edit(req: EditRequest, session_id: str = Path(...)):
    """Refine the current thumbnail with an edit instruction."""
    try:
        return _ok(services.edit_session_thumbnail(session_id, req.prompt))
    except KeyError:
        raise _not_found()
    except ValueError as e:
        return action_failure(ErrorCode.MISSING_FIELD, str(e))
    except Exception as e:
        logger.error(f"Edit failed for session {session_id}: {e}")
        return action_failure(ErrorCode.EDIT_FAILED, str(e))


@router.post("/{session_id}/style-reference", response_model=SessionResponse, response_model_exclude_none=True)
def api_select_style_reference(session_id: str = Path(...), req: Optional[StyleReferenceRequest] = Body(None)):
    """Use the current thumbnail or a history entry as the style reference."""
    history_index = req.history_index if req else None
    try:
        return _ok(services.select_style_reference(session_id, history_index))
    except KeyError:
        raise _not_found()
    except ValueError as e:
        return action_failure(ErrorCode.INVALID_PARAMETER, str(e))


@router.delete("/{session_id}/style-reference", response_model=SessionResponse, response_model_exclude_none=True)
def api_clear_style_reference(session_id: str = Path(...)):
    """Stop using a style reference."""
    try:
        return _ok(services.clear_style_reference(session_id))
    except KeyError:
        raise _not_found()
