# api/chat.py
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from typing import Any, Dict, List, Optional
import time

from core.chat_orchestrator import ConversationController
from memory.models import Session

from telemetry.logger import log_event, recent_events

router = APIRouter()


# ----------------------------
# Request / response models
# ----------------------------
class ChatRequest(BaseModel):
    message: str


class SessionSummary(BaseModel):
    id: str
    title: str
    createdAt: str
    messageCount: int
    complete: bool


# ----------------------------
# Helpers
# ----------------------------
def get_controller(request: Request) -> ConversationController:
    return request.app.state.controller


def _state_response(
    controller: ConversationController,
    accepted: Optional[bool] = None,
    debug: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    out = controller.snapshot()
    if accepted is not None:
        out["accepted"] = accepted
    out["debug"] = debug or {}
    return out


def _summary(session: Session) -> SessionSummary:
    return SessionSummary(
        id=session.id,
        title=session.title,
        createdAt=session.created_at.isoformat(),
        messageCount=len(session.messages),
        complete=session.profile is not None,
    )


# ----------------------------
# Routes
# ----------------------------
@router.post("/chat")
async def chat(req: ChatRequest, controller: ConversationController = Depends(get_controller)):
    """
    Submit the current input. Replies arrive asynchronously after the pacing
    delay, so clients poll GET /state (isTyping tells them one is on the way).
    """
    t0 = time.time()
    sid = controller.state.active_session_id

    try:
        accepted = await controller.handle_input(req.message or "")
    except Exception as e:
        log_event("chat_error", {"error_code": "INTERNAL", "detail": repr(e)[:200]}, session_id=sid)
        return _state_response(controller, accepted=False, debug={"error_code": "INTERNAL"})

    log_event(
        "chat_responded",
        {"accepted": accepted, "state": controller.state.name, "latency_ms": int((time.time() - t0) * 1000)},
        session_id=sid,
    )
    return _state_response(controller, accepted=accepted)


@router.get("/state")
async def state(controller: ConversationController = Depends(get_controller)):
    return _state_response(controller)


@router.get("/sessions", response_model=List[SessionSummary])
async def list_sessions(controller: ConversationController = Depends(get_controller)):
    return [_summary(s) for s in controller.list_sessions()]


@router.post("/sessions")
async def new_session(controller: ConversationController = Depends(get_controller)):
    await controller.start_new_chat()
    return _state_response(controller)


@router.post("/sessions/{session_id}/load")
async def load_session(session_id: str, controller: ConversationController = Depends(get_controller)):
    session = await controller.load_session(session_id)
    debug = {} if session.id == session_id else {"error_code": "SESSION_NOT_FOUND", "sessionId": session_id}
    return _state_response(controller, debug=debug)


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str, controller: ConversationController = Depends(get_controller)):
    deleted = await controller.delete_session(session_id)
    debug = {} if deleted else {"error_code": "SESSION_NOT_FOUND", "sessionId": session_id}
    out = _state_response(controller, debug=debug)
    out["deleted"] = deleted
    return out


@router.post("/history/toggle")
async def toggle_history(controller: ConversationController = Depends(get_controller)):
    controller.toggle_history()
    out = _state_response(controller)
    out["sessions"] = [_summary(s).model_dump() for s in controller.list_sessions()] if out["showHistory"] else []
    return out


@router.get("/sessions/{session_id}/events")
async def session_events(session_id: str, limit: int = 100, controller: ConversationController = Depends(get_controller)):
    """Telemetry trail of one conversation (meta only, no answer text)."""
    if session_id not in controller.store:
        return {"sessionId": session_id, "events": [], "debug": {"error_code": "SESSION_NOT_FOUND"}}
    return {"sessionId": session_id, "events": recent_events(limit, session_id=session_id), "debug": {}}
