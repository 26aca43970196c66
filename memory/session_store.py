# memory/session_store.py
from __future__ import annotations

import asyncio
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.database import AsyncSessionLocal
from core.errors import SessionNotFound
from memory.models import Session, dump_collection, load_collection
from models.storage_slot import StorageSlot
from settings import SESSION_SLOT_NAME
from telemetry.logger import log_event


class SessionStore:
    """
    Process-local session collection (newest first) mirrored into one storage slot.

    Every mutation rewrites the whole collection in a single transaction.
    An empty collection removes the slot entirely.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
        slot_name: str = SESSION_SLOT_NAME,
    ):
        self._session_factory = session_factory
        self.slot_name = slot_name
        self._sessions: List[Session] = []
        self._write_lock = asyncio.Lock()

    # -----------------------
    # Accessors
    # -----------------------
    def list(self) -> List[Session]:
        return list(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return any(s.id == session_id for s in self._sessions)

    def get(self, session_id: str) -> Session:
        for s in self._sessions:
            if s.id == session_id:
                return s
        raise SessionNotFound(session_id)

    def _index(self, session_id: str) -> int:
        for i, s in enumerate(self._sessions):
            if s.id == session_id:
                return i
        raise SessionNotFound(session_id)

    # -----------------------
    # Mutators
    # -----------------------
    async def create(self) -> Session:
        session = Session()
        self._sessions.insert(0, session)
        await self.persist_all()
        return session

    async def update(self, session: Session) -> Session:
        """Full-record replace of the entry with the same id."""
        self._sessions[self._index(session.id)] = session
        await self.persist_all()
        return session

    async def delete(self, session_id: str) -> Session:
        removed = self._sessions.pop(self._index(session_id))
        await self.persist_all()
        return removed

    # -----------------------
    # Durable slot
    # -----------------------
    async def load_all(self) -> List[Session]:
        """Read the slot once (startup). Unreadable data starts an empty history."""
        async with self._session_factory() as db:
            slot: Optional[StorageSlot] = await db.get(StorageSlot, self.slot_name)
            raw = slot.value if slot is not None else None

        if raw is None:
            self._sessions = []
            return []

        try:
            self._sessions = load_collection(raw)
        except ValidationError as e:
            print(f"[DEBUG] SessionStore.load_all: unreadable slot '{self.slot_name}': {e}")
            log_event("sessions_load_failed", {"slot": self.slot_name, "errors": e.error_count()})
            self._sessions = []

        return self.list()

    async def persist_all(self) -> None:
        # Snapshot is taken under the lock so an older write never lands after a newer one.
        async with self._write_lock:
            payload = dump_collection(self._sessions) if self._sessions else None
            async with self._session_factory() as db:
                slot = await db.get(StorageSlot, self.slot_name)
                if payload is None:
                    if slot is not None:
                        await db.delete(slot)
                elif slot is None:
                    db.add(StorageSlot(name=self.slot_name, value=payload))
                else:
                    slot.value = payload
                await db.commit()

    async def read_raw(self) -> Optional[str]:
        async with self._session_factory() as db:
            slot = await db.get(StorageSlot, self.slot_name)
            return slot.value if slot is not None else None
