"""Input capture: text, screenshot selection and submission readiness."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import replace

from trustlens.config import settings
from trustlens.schemas import AnalysisRequest, ImagePayload
from trustlens.state import ViewState

log = logging.getLogger("trustlens.capture")

NOT_AN_IMAGE_MESSAGE = "Please upload an image file (PNG, JPG, etc.)"
EMPTY_SUBMISSION_MESSAGE = "Please provide some text or an image of the content to analyze."


class InputValidationError(ValueError):
    """Raised when user input is rejected before any remote call is made."""


def declared_media_type(filename: str | None, content_type: str | None = None) -> str:
    """Return the media type the browser declared, falling back to the file name."""
    if content_type:
        return content_type.split(";", 1)[0].strip().lower()
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return "application/octet-stream"


def validate_image(media_type: str, data: bytes, max_bytes: int | None = None) -> ImagePayload:
    """Check a selected file and wrap it as an :class:`ImagePayload`."""
    if not media_type.lower().startswith("image/") or not data:
        raise InputValidationError(NOT_AN_IMAGE_MESSAGE)

    limit = settings.max_image_bytes if max_bytes is None else max_bytes
    if len(data) > limit:
        raise InputValidationError(
            "The image is too large to analyze. "
            f"Please upload a file under {limit // (1024 * 1024)} MB."
        )
    return ImagePayload(data=data, mime_type=media_type.lower())


def update_text(state: ViewState, text: str | None) -> ViewState:
    return replace(state, text=text or "")


def select_image(
    state: ViewState,
    *,
    filename: str | None,
    media_type: str | None,
    data: bytes,
) -> ViewState:
    """
    Apply a file selection to the view.

    A rejected file leaves the current image untouched and surfaces the
    reason as the inline error. An accepted file replaces the image and
    clears any earlier error.
    """
    mime = declared_media_type(filename, media_type)
    try:
        image = validate_image(mime, data)
    except InputValidationError as exc:
        log.info("image rejected | type=%s bytes=%d", mime, len(data))
        return replace(state, error=str(exc), result=None)

    log.info("image selected | type=%s bytes=%d", mime, len(data))
    return replace(state, image=image, error=None)


def remove_image(state: ViewState) -> ViewState:
    return replace(state, image=None)


def is_ready(state: ViewState) -> bool:
    """True iff there is non-blank text or an image to analyze."""
    return bool(state.text.strip()) or state.image is not None


def build_request(state: ViewState) -> AnalysisRequest:
    if not is_ready(state):
        raise InputValidationError(EMPTY_SUBMISSION_MESSAGE)
    return AnalysisRequest(text=state.text or None, image=state.image)
