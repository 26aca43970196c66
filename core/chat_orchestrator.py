# core/chat_orchestrator.py
from __future__ import annotations

import asyncio
import random
from typing import Any, Awaitable, Callable, Coroutine, Dict, List, Optional, Set, Tuple

from ai.gateway import GenerationGateway
from ai.generation import build_career_prompt
from core.errors import EmptyInput, NoActiveSession, SessionNotFound
from core.state_machine import (
    APOLOGY_TEXT,
    CLOSING_TEXT,
    PHASE_GENERATING,
    PHASE_DONE,
    RESULT_PREFIX,
    WELCOME_TEXT,
    ControllerState,
    apply_step,
    career_title,
    plan_step,
)
from memory.models import Profile, Session
from memory.session_store import SessionStore
from settings import OPENING_DELAY_SECONDS, PACING_MAX_SECONDS, PACING_MIN_SECONDS
from telemetry.logger import forget_session, log_event


class ConversationController:
    """
    Single-writer owner of the conversation: the active session, the step
    cursor and the working profile all live in `self.state`.

    User input is applied synchronously (message appended, cursor advanced,
    store updated). Assistant replies are scheduled tasks keyed by session id:
    each waits out the pacing delay, then appends only if its session is still
    the active one. Replies for one session are serialized by a per-session lock.
    """

    def __init__(
        self,
        store: SessionStore,
        gateway: GenerationGateway,
        *,
        pacing: Tuple[float, float] = (PACING_MIN_SECONDS, PACING_MAX_SECONDS),
        opening_delay: float = OPENING_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.store = store
        self.gateway = gateway
        self.state = ControllerState()
        self._pacing = pacing
        self._opening_delay = opening_delay
        self._sleep = sleep
        self._tasks: Dict[str, Set[asyncio.Task]] = {}
        self._emit_locks: Dict[str, asyncio.Lock] = {}
        self._typing: Dict[str, int] = {}

    # -------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------
    @property
    def active_session(self) -> Optional[Session]:
        sid = self.state.active_session_id
        if sid is None or sid not in self.store:
            return None
        return self.store.get(sid)

    @property
    def is_typing(self) -> bool:
        return self._typing.get(self.state.active_session_id or "", 0) > 0

    def list_sessions(self) -> List[Session]:
        return self.store.list()

    def snapshot(self) -> Dict[str, Any]:
        session = self.active_session
        return {
            "activeSessionId": self.state.active_session_id,
            "state": self.state.name,
            "step": self.state.step,
            "isTyping": self.is_typing,
            "showHistory": self.state.show_history,
            "title": session.title if session else None,
            "profile": self.state.profile.answered(),
            "messages": [m.model_dump(mode="json") for m in session.messages] if session else [],
        }

    # -------------------------------------------------------------------
    # UI events
    # -------------------------------------------------------------------
    async def start(self) -> Session:
        """Boot: read persisted history once, then open a fresh conversation."""
        restored = await self.store.load_all()
        log_event("sessions_restored", {"count": len(restored)})
        return await self.start_new_chat()

    async def start_new_chat(self) -> Session:
        session = await self.store.create()
        self.state.restart(session.id)
        log_event("session_created", {"sessions": len(self.store)}, session_id=session.id)
        self._schedule(session.id, self._open(session.id))
        return session

    async def handle_input(self, text: str) -> bool:
        """
        Accept one user message. Returns False when the input was ignored
        (empty text or no active session); nothing changes in that case.
        """
        try:
            session = self._accepting_session(text)
        except EmptyInput:
            return False
        except NoActiveSession:
            print("[DEBUG] handle_input with no active session; ignored")
            return False

        session.add_message("user", text)
        answer = text.strip()
        plan = plan_step(self.state, answer)
        apply_step(self.state, plan, answer)
        await self.store.update(session)

        log_event(
            "input_accepted",
            {"state": self.state.name, "step": self.state.step, "len": len(answer), "advanced": plan.advances},
            session_id=session.id,
        )

        if plan.replies or plan.finalize:
            profile = self.state.profile.model_copy() if plan.finalize else None
            self._schedule(session.id, self._reply(session.id, plan.replies, profile))
        return True

    async def load_session(self, session_id: str) -> Session:
        try:
            session = self.store.get(session_id)
        except SessionNotFound:
            print(f"[DEBUG] load_session: {session_id} not found, starting a new chat")
            log_event("session_not_found", {"action": "load"}, session_id=session_id)
            return await self.start_new_chat()

        self.state.view(session.id, session.profile)
        log_event("session_loaded", {"messages": len(session.messages)}, session_id=session.id)
        return session

    async def delete_session(self, session_id: str) -> bool:
        try:
            await self.store.delete(session_id)
        except SessionNotFound:
            log_event("session_not_found", {"action": "delete"}, session_id=session_id)
            return False

        purged = forget_session(session_id)
        log_event("session_deleted", {"remaining": len(self.store), "events_purged": purged}, session_id=session_id)

        if self.state.active_session_id == session_id:
            await self.start_new_chat()
        return True

    def toggle_history(self) -> bool:
        self.state.show_history = not self.state.show_history
        return self.state.show_history

    async def wait_idle(self) -> None:
        """Wait until every scheduled reply (including generation) has finished."""
        while True:
            pending = [t for bucket in self._tasks.values() for t in bucket]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _accepting_session(self, text: str) -> Session:
        if not (text or "").strip():
            raise EmptyInput("empty message")
        session = self.active_session
        if session is None:
            raise NoActiveSession()
        return session

    def _schedule(self, session_id: str, job: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.create_task(job)
        self._tasks.setdefault(session_id, set()).add(task)
        task.add_done_callback(lambda t: self._task_done(session_id, t))
        return task

    def _task_done(self, session_id: str, task: asyncio.Task) -> None:
        bucket = self._tasks.get(session_id)
        if bucket is not None:
            bucket.discard(task)
            if not bucket:
                # only scheduled tasks take the emit lock; none left for this session
                self._tasks.pop(session_id, None)
                self._emit_locks.pop(session_id, None)
        if not task.cancelled() and task.exception() is not None:
            print(f"[DEBUG] scheduled reply failed for {session_id}: {task.exception()!r}")
            log_event("reply_task_failed", {"error": repr(task.exception())[:200]}, session_id=session_id)

    def _emit_lock(self, session_id: str) -> asyncio.Lock:
        return self._emit_locks.setdefault(session_id, asyncio.Lock())

    def _is_active(self, session_id: str) -> bool:
        return session_id == self.state.active_session_id and session_id in self.store

    async def _open(self, session_id: str) -> None:
        # hold the lock through the opening delay so no reply can overtake the welcome
        async with self._emit_lock(session_id):
            await self._sleep(self._opening_delay)
            await self._paced_emit(session_id, WELCOME_TEXT)

    async def _reply(self, session_id: str, replies: List[str], profile: Optional[Profile]) -> None:
        for content in replies:
            await self._type_message(session_id, content)
        if profile is not None:
            await self._finalize(session_id, profile)

    async def _type_message(self, session_id: str, content: str) -> bool:
        async with self._emit_lock(session_id):
            return await self._paced_emit(session_id, content)

    async def _paced_emit(self, session_id: str, content: str) -> bool:
        self._typing[session_id] = self._typing.get(session_id, 0) + 1
        try:
            await self._sleep(random.uniform(*self._pacing))
        finally:
            self._typing[session_id] -= 1
            if not self._typing[session_id]:
                del self._typing[session_id]

        if not self._is_active(session_id):
            log_event("bot_message_discarded", {"reason": "inactive"}, session_id=session_id)
            return False

        session = self.store.get(session_id)
        session.add_message("bot", content)
        await self.store.update(session)
        return True

    async def _finalize(self, session_id: str, profile: Profile) -> None:
        """
        At most one generation attempt per completed profile, and only while
        its session is still the active one. A superseded session keeps its
        default title and no profile.
        """
        if not self._is_active(session_id):
            log_event("generation_discarded", {"reason": "inactive", "when": "before"}, session_id=session_id)
            return

        prompt = build_career_prompt(profile)
        try:
            text = await self.gateway.generate(prompt)
        except Exception as e:
            print(f"[DEBUG] career path generation failed: {e!r}")
            log_event("generation_failed", {"error": type(e).__name__}, session_id=session_id)
            await self._type_message(session_id, APOLOGY_TEXT)
            self._finish(session_id)
            return

        if not self._is_active(session_id):
            print(f"[DEBUG] session {session_id} left during generation; result dropped")
            log_event("generation_discarded", {"reason": "inactive", "when": "after"}, session_id=session_id)
            return

        session = self.store.get(session_id)
        session.title = career_title(profile.name)
        session.profile = profile
        await self.store.update(session)
        log_event("generation_succeeded", {"len": len(text)}, session_id=session_id)

        await self._type_message(session_id, RESULT_PREFIX + text)
        await self._type_message(session_id, CLOSING_TEXT)
        self._finish(session_id)

    def _finish(self, session_id: str) -> None:
        if self.state.active_session_id == session_id and self.state.phase == PHASE_GENERATING:
            self.state.phase = PHASE_DONE
