"""Gradio front end: input view, result view and reset."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import gradio as gr

from trustlens.capture import remove_image, select_image, update_text
from trustlens.presentation import render_error, render_result, reset_state
from trustlens.session import AssessmentSession
from trustlens.state import ViewState

log = logging.getLogger("trustlens.ui")

SUBMIT_LABEL = "🔍 Assess Content Safety"
LOADING_LABEL = "⏳ Analyzing for Threats..."

INTRO = """
## Is that message *suspicious?*
Paste suspicious emails, SMS, or upload a screenshot. TrustLens helps small businesses spot fraud before it happens.
"""

TIPS = """
| 🕒 Spot Urgency | 💳 Verify Payments | 🔗 Check Links |
|---|---|---|
| Scammers use pressure to make you act without thinking. Look for "Immediate action required!" | Requests to change bank details via email are a huge red flag. Always call the vendor to confirm. | Hover over links to see their real destination. Be wary of shortened URLs or strange domain names. |
"""

FOOTER = (
    "Building digital resilience for small businesses. "
    "TrustLens AI is not a substitute for cybersecurity software or expert consultation."
)

session = AssessmentSession()

# Sentinel for "leave the component's value alone".
KEEP = object()


def _capture_control(editable: bool, value: Any = KEEP) -> Any:
    if value is KEEP:
        return gr.update(interactive=editable)
    return gr.update(value=value, interactive=editable)


def render_view(state: ViewState, *, text: Any = KEEP, image: Any = KEEP) -> tuple[Any, ...]:
    """
    Map a state onto every component it drives.

    Order: state, input view, result view, result html, error html, submit
    button, text box, image picker. The text box and picker are locked while
    a submission is in flight.
    """
    editable = not state.loading
    return (
        state,
        gr.update(visible=state.result is None),
        gr.update(visible=state.result is not None),
        render_result(state.result) if state.result is not None else "",
        render_error(state.error),
        gr.update(
            interactive=editable,
            value=SUBMIT_LABEL if editable else LOADING_LABEL,
        ),
        _capture_control(editable, text),
        _capture_control(editable, image),
    )


def on_image_upload(path: str | None, accepted: str | None, state: ViewState) -> tuple[Any, ...]:
    """
    Validate a picked file; ``accepted`` is the path of the image held in state.

    A rejected file is swapped back for the accepted one so the picker always
    shows what will be submitted.
    """
    if not path:
        return (*render_view(state), accepted)
    file = Path(path)
    new_state = select_image(state, filename=file.name, media_type=None, data=file.read_bytes())
    if new_state.error is not None:
        return (*render_view(new_state, image=accepted), accepted)
    return (*render_view(new_state), path)


def on_image_clear(state: ViewState) -> tuple[Any, ...]:
    return (*render_view(remove_image(state)), None)


async def on_submit(text: str, state: ViewState):
    async for next_state in session.submit(update_text(state, text)):
        yield render_view(next_state)


def on_reset(state: ViewState) -> tuple[Any, ...]:
    return (*render_view(reset_state(state), text="", image=None), None)


def build_demo() -> gr.Blocks:
    with gr.Blocks(title="TrustLens", analytics_enabled=False) as demo:
        state = gr.State(ViewState())
        accepted = gr.State(None)
        gr.Markdown("# 🛡️ TrustLens")

        with gr.Column(visible=True) as input_view:
            gr.Markdown(INTRO)
            text = gr.Textbox(
                label="Option 1: Paste Text Content",
                placeholder="Paste the email content, SMS message, or link details here...",
                lines=8,
            )
            image = gr.File(
                label="Option 2: Upload Screenshot",
                file_types=["image"],
                type="filepath",
            )
            error = gr.HTML()
            submit = gr.Button(SUBMIT_LABEL, variant="primary")
            gr.Markdown(TIPS)

        with gr.Column(visible=False) as result_view:
            result_html = gr.HTML()
            reset = gr.Button("Check Another Content")

        gr.Markdown(FOOTER)

        view = [state, input_view, result_view, result_html, error, submit, text, image]
        image.upload(on_image_upload, inputs=[image, accepted, state], outputs=[*view, accepted])
        image.clear(on_image_clear, inputs=[state], outputs=[*view, accepted])
        submit.click(on_submit, inputs=[text, state], outputs=view)
        reset.click(on_reset, inputs=[state], outputs=[*view, accepted])

    return demo


demo = build_demo()
