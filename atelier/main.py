import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from atelier.config import LOG_LEVEL
from atelier.errors import ServiceError
from atelier.models import (
    AnalyzeRequest, AnalyzeResponse, BatchResponse, HealthResponse,
    ImageQualityResult, LookRequest, LookResponse, NoteRequest,
    QualityCheckRequest, SessionResponse, SkinToneRequest,
)
from atelier.pipeline import (
    Session, change_skin_tone, generate_all_looks, generate_look,
    get_session, start_analysis, toggle_favorite, update_note,
)
from atelier.stylist import validate_image_quality

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="Atelier")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _not_found(error: ValueError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"status": "error", "error": str(error)})


def _session_response(session: Session) -> SessionResponse:
    return SessionResponse(
        status="success",
        session_id=session.session_id,
        skin_tone=session.skin_tone,
        result=session.result,
    )


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok")


@app.post("/quality-check", response_model=ImageQualityResult)
async def quality_check(request: QualityCheckRequest) -> ImageQualityResult:
    return await validate_image_quality(request.image)


@app.post("/analyze", response_model=AnalyzeResponse)
async def analyze(request: AnalyzeRequest) -> AnalyzeResponse:
    try:
        session = await start_analysis(
            image=request.image,
            metrics=request.metrics,
            preferences=request.preferences,
        )
        return AnalyzeResponse(status="success", session_id=session.session_id, result=session.result)
    except ServiceError as e:
        return AnalyzeResponse(status="error", error=str(e))


@app.get("/sessions/{session_id}", response_model=SessionResponse)
async def read_session(session_id: str) -> SessionResponse:
    session = get_session(session_id)
    if session is None:
        return _not_found(ValueError(f"Session {session_id} not found or expired"))
    return _session_response(session)


@app.post("/sessions/{session_id}/looks", response_model=BatchResponse)
async def render_all_looks(session_id: str) -> BatchResponse:
    """Render every look still missing an image, one after another."""
    try:
        session = await generate_all_looks(session_id)
    except ValueError as e:
        return _not_found(e)

    looks = session.result.sugestoes_roupa
    done = sum(1 for look in looks if look.generated_image)
    return BatchResponse(status="success", generated=done, pending=len(looks) - done, result=session.result)


@app.post("/sessions/{session_id}/looks/{index}", response_model=LookResponse)
async def render_one_look(session_id: str, index: int, request: LookRequest | None = None) -> LookResponse:
    refinement = request.refinement if request else None
    try:
        session = await generate_look(session_id, index, refinement)
    except ValueError as e:
        return _not_found(e)
    except ServiceError as e:
        return LookResponse(status="error", index=index, error=str(e))

    return LookResponse(
        status="success",
        index=index,
        generated_image=session.result.sugestoes_roupa[index].generated_image,
    )


@app.post("/sessions/{session_id}/skin-tone", response_model=SessionResponse)
async def override_skin_tone(session_id: str, request: SkinToneRequest) -> SessionResponse:
    try:
        return _session_response(change_skin_tone(session_id, request.tone))
    except ValueError as e:
        return _not_found(e)


@app.post("/sessions/{session_id}/looks/{index}/favorite", response_model=SessionResponse)
async def favorite_look(session_id: str, index: int) -> SessionResponse:
    try:
        return _session_response(toggle_favorite(session_id, index))
    except ValueError as e:
        return _not_found(e)


@app.put("/sessions/{session_id}/looks/{index}/note", response_model=SessionResponse)
async def note_look(session_id: str, index: int, request: NoteRequest) -> SessionResponse:
    try:
        return _session_response(update_note(session_id, index, request.note))
    except ValueError as e:
        return _not_found(e)
