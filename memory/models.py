# memory/models.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

DEFAULT_TITLE = "New Career Path"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    role: Literal["bot", "user"]
    content: str
    timestamp: datetime = Field(default_factory=_utcnow)


class Profile(BaseModel):
    """
    Closed profile record. JSON uses camelCase keys (currentRole, ...),
    Python uses the snake_case field names. None == not answered yet.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    country: Optional[str] = None
    religion: Optional[str] = None
    current_role: Optional[str] = None
    experience_level: Optional[str] = None
    skills: Optional[str] = None
    interests: Optional[str] = None
    work_environment: Optional[str] = None
    industry: Optional[str] = None
    career_goals: Optional[str] = None

    @classmethod
    def field_for(cls, key: str) -> Optional[str]:
        """Accepts either the field name or its camelCase alias."""
        if key in cls.model_fields:
            return key
        for name in cls.model_fields:
            if to_camel(name) == key:
                return name
        return None

    def set_field(self, key: str, value: str) -> bool:
        field = self.field_for(key)
        if field is None:
            print(f"[DEBUG] Profile.set_field ignored unknown key={key!r}")
            return False
        setattr(self, field, value)
        return True

    def answered(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def is_complete(self) -> bool:
        return all(getattr(self, name) is not None for name in type(self).model_fields)


class Session(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    title: str = DEFAULT_TITLE
    messages: List[Message] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    profile: Optional[Profile] = None

    def add_message(self, role: str, content: str) -> Message:
        msg = Message(role=role, content=content)
        self.messages.append(msg)
        return msg

    def count(self, role: str) -> int:
        return sum(1 for m in self.messages if m.role == role)


# -------------------------------------------------------------------
# SessionCollection JSON codec (newest first)
# -------------------------------------------------------------------
_COLLECTION = TypeAdapter(List[Session])


def dump_collection(sessions: List[Session]) -> str:
    return _COLLECTION.dump_json(sessions, by_alias=True, exclude_none=True).decode("utf-8")


def load_collection(raw: str) -> List[Session]:
    """Parse stored JSON back into Sessions; ISO-8601 strings become datetimes."""
    sessions = _COLLECTION.validate_json(raw)
    seen: set[str] = set()
    unique: List[Session] = []
    for s in sessions:
        if s.id in seen:
            print(f"[DEBUG] load_collection dropped duplicate session id={s.id}")
            continue
        seen.add(s.id)
        unique.append(s)
    return unique
