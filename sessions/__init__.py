"""Design studio sessions module."""
from sessions.services import (
    create_session,
    get_session,
    delete_session,
    session_view,
    add_reference_images,
    remove_reference_image,
    update_settings,
    optimize_session_prompt,
    generate_session_thumbnail,
    edit_session_thumbnail,
    select_style_reference,
    clear_style_reference
)

__all__ = [
    "create_session",
    "get_session",
    "delete_session",
    "session_view",
    "add_reference_images",
    "remove_reference_image",
    "update_settings",
    "optimize_session_prompt",
    "generate_session_thumbnail",
    "edit_session_thumbnail",
    "select_style_reference",
    "clear_style_reference"
]
