"""Session management and orchestration: analyze → render looks → refine."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from atelier.config import SESSION_TTL_SECONDS
from atelier.errors import ServiceError
from atelier.imaging import strip_data_uri
from atelier.models import AnalysisResult, SkinTone, UserMetrics, UserPreferences
from atelier.prompts import build_look_modification
from atelier.skin_tone import apply_skin_tone
from atelier.stylist import analyze_image, generate_visual_edit

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Session:
    session_id: str
    image: str
    result: AnalysisResult
    skin_tone: SkinTone
    metrics: UserMetrics | None = None
    preferences: UserPreferences | None = None
    created_at: datetime = field(default_factory=_now)


_sessions: dict[str, Session] = {}


def get_session(session_id: str) -> Session | None:
    return _sessions.get(session_id)


def _require_session(session_id: str) -> Session:
    session = get_session(session_id)
    if session is None:
        raise ValueError(f"Session {session_id} not found or expired")
    return session


def _cleanup_expired() -> None:
    """Remove sessions older than TTL."""
    now = _now()
    expired = [
        sid for sid, s in _sessions.items()
        if (now - s.created_at).total_seconds() > SESSION_TTL_SECONDS
    ]
    for sid in expired:
        del _sessions[sid]


def _check_index(result: AnalysisResult, index: int) -> None:
    if not 0 <= index < len(result.sugestoes_roupa):
        raise ValueError(f"Look {index} does not exist (have {len(result.sugestoes_roupa)})")


def _replace_look(result: AnalysisResult, index: int, **changes) -> AnalysisResult:
    """Rebuild ``result`` with look ``index`` swapped for an updated copy."""
    looks = list(result.sugestoes_roupa)
    looks[index] = looks[index].model_copy(update=changes)
    return result.model_copy(update={"sugestoes_roupa": looks})


# --- core operations (no session, no notifications) ---

async def render_look_image(
    image: str,
    result: AnalysisResult,
    index: int,
    refinement: str | None = None,
) -> str:
    """Generate the try-on image for one look. Returns a data URI."""
    _check_index(result, index)
    outfit = result.sugestoes_roupa[index]

    return await generate_visual_edit(
        strip_data_uri(image),
        "clothing",
        build_look_modification(outfit, result.biotipo),
        outfit.visagismo_sugerido,
        {"biotype": result.biotipo, "palette": "harmonious"},
        refinement,
    )


async def render_look(
    image: str,
    result: AnalysisResult,
    index: int,
    refinement: str | None = None,
) -> AnalysisResult:
    """Generate the try-on image for one look and return the updated result."""
    generated = await render_look_image(image, result, index, refinement)
    return _replace_look(result, index, generated_image=generated, last_modification_prompt=refinement)


def _carry_images(current: AnalysisResult, rendered: AnalysisResult) -> AnalysisResult:
    """Copy images produced in ``rendered`` onto looks of ``current`` that lack one."""
    for index, (look, done) in enumerate(zip(current.sugestoes_roupa, rendered.sugestoes_roupa)):
        if done.generated_image and not look.generated_image:
            current = _replace_look(current, index, generated_image=done.generated_image,
                                    last_modification_prompt=None)
    return current


async def generate_missing_looks(image: str, result: AnalysisResult) -> AnalysisResult:
    """
    Render every look that has no image yet, one at a time.

    Looks are processed in order and each call is awaited before the next
    starts so the image API never sees more than one request from a batch.
    A failing look is logged and skipped; callers tell which looks succeeded
    by checking ``generated_image``.
    """
    for index, outfit in enumerate(result.sugestoes_roupa):
        if outfit.generated_image:
            continue
        try:
            result = await render_look(image, result, index)
        except ServiceError as e:
            logger.warning("Look %d (%s) failed during batch: %s", index, outfit.titulo, e)
    return result


# --- session operations ---

async def start_analysis(
    image: str,
    metrics: UserMetrics | None = None,
    preferences: UserPreferences | None = None,
) -> Session:
    """Analyze a portrait and open a session around the result."""
    _cleanup_expired()

    image = strip_data_uri(image)
    result = await analyze_image(image, metrics, preferences)

    session = Session(
        session_id=uuid.uuid4().hex[:12],
        image=image,
        result=result,
        skin_tone=result.tom_pele_detectado,
        metrics=metrics,
        preferences=preferences,
    )
    _sessions[session.session_id] = session
    logger.info("Analysis complete: session=%s looks=%d", session.session_id, len(result.sugestoes_roupa))
    return session


async def generate_look(session_id: str, index: int, refinement: str | None = None) -> Session:
    """Render (or refine) a single look; errors reach the caller."""
    session = _require_session(session_id)
    generated = await render_look_image(session.image, session.result, index, refinement)
    # session.result may have been replaced while the call was in flight
    session.result = _replace_look(
        session.result, index, generated_image=generated, last_modification_prompt=refinement,
    )
    logger.info("Look %d rendered for session %s", index, session_id)
    return session


async def generate_all_looks(session_id: str) -> Session:
    session = _require_session(session_id)
    rendered = await generate_missing_looks(session.image, session.result)
    session.result = _carry_images(session.result, rendered)
    return session


def change_skin_tone(session_id: str, tone: SkinTone) -> Session:
    session = _require_session(session_id)
    session.result = apply_skin_tone(session.result, tone)
    session.skin_tone = tone
    return session


def toggle_favorite(session_id: str, index: int) -> Session:
    session = _require_session(session_id)
    _check_index(session.result, index)
    current = session.result.sugestoes_roupa[index].is_favorite
    session.result = _replace_look(session.result, index, is_favorite=not current)
    return session


def update_note(session_id: str, index: int, note: str) -> Session:
    session = _require_session(session_id)
    _check_index(session.result, index)
    session.result = _replace_look(session.result, index, user_note=note)
    return session
