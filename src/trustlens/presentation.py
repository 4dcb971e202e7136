"""Result presentation: view transitions and HTML rendering of verdicts."""

from __future__ import annotations

from dataclasses import dataclass, replace
from html import escape

from trustlens.schemas import AssessmentResult, ThreatLevel
from trustlens.state import ViewState

NO_RED_FLAGS_MESSAGE = "No specific red flags were found in this content."
ADVISORY_NOTE = (
    "Note: TrustLens is an advisory tool. Always verify communications through "
    "official channels before sharing sensitive information or making payments."
)


@dataclass(frozen=True)
class BadgeStyle:
    color: str
    background: str
    border: str
    icon: str


THREAT_STYLES: dict[ThreatLevel, BadgeStyle] = {
    ThreatLevel.SAFE: BadgeStyle(color="#047857", background="#d1fae5", border="#a7f3d0", icon="✅"),
    ThreatLevel.SUSPICIOUS: BadgeStyle(color="#b45309", background="#fef3c7", border="#fde68a", icon="⚠️"),
    ThreatLevel.HIGH_RISK: BadgeStyle(color="#be123c", background="#ffe4e6", border="#fecdd3", icon="⛔"),
}


# -- transitions ---------------------------------------------------------------


def start_loading(state: ViewState) -> ViewState:
    return replace(state, loading=True, result=None, error=None)


def show_result(state: ViewState, result: AssessmentResult) -> ViewState:
    return replace(state, loading=False, result=result, error=None)


def show_error(state: ViewState, message: str) -> ViewState:
    """Back to the editable input view with the message as a banner."""
    return replace(state, loading=False, result=None, error=message)


def reset_state(state: ViewState | None = None) -> ViewState:
    return ViewState()


# -- rendering -----------------------------------------------------------------


def render_badge(level: ThreatLevel) -> str:
    style = THREAT_STYLES[level]
    return (
        '<span class="tl-badge" '
        f'style="color:{style.color};background:{style.background};'
        f'border:1px solid {style.border};border-radius:9999px;'
        'padding:4px 12px;font-weight:600;display:inline-flex;gap:6px">'
        f"<span>{style.icon}</span><span>{escape(level.value)}</span></span>"
    )


def render_red_flags(red_flags: list[str]) -> str:
    if not red_flags:
        return f'<div class="tl-no-flags">{escape(NO_RED_FLAGS_MESSAGE)}</div>'
    items = "".join(f"<li>🚩 {escape(flag)}</li>" for flag in red_flags)
    return f'<ul class="tl-red-flags">{items}</ul>'


def render_next_steps(next_steps: list[str]) -> str:
    items = "".join(f"<li>{escape(step)}</li>" for step in next_steps)
    return f'<ol class="tl-next-steps">{items}</ol>'


def render_result(result: AssessmentResult) -> str:
    """Full result card: badge, reasoning, red flags, next steps and the advisory note."""
    return (
        '<div class="tl-result">'
        '<div class="tl-result-header">'
        "<h2>Analysis Result</h2>"
        f"{render_badge(result.threat_level)}"
        "</div>"
        "<h3>Why This Assessment</h3>"
        f'<p class="tl-reasoning">{escape(result.reasoning)}</p>'
        "<h3>Red Flags Identified</h3>"
        f"{render_red_flags(result.red_flags)}"
        "<h3>Recommended Next Steps</h3>"
        f"{render_next_steps(result.next_steps)}"
        f'<p class="tl-note"><small>{escape(ADVISORY_NOTE)}</small></p>'
        "</div>"
    )


def render_error(message: str | None) -> str:
    if not message:
        return ""
    return (
        '<div class="tl-error" style="color:#be123c;background:#fff1f2;'
        'border:1px solid #fecdd3;border-radius:12px;padding:12px">'
        f"❗ {escape(message)}</div>"
    )
