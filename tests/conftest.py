# tests/conftest.py
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import telemetry.logger
from core.chat_orchestrator import ConversationController
from core.database import init_db
from memory.session_store import SessionStore


class FakeGateway:
    def __init__(self, text="<p>Become a data engineer.</p>", error=None):
        self.text = text
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture(autouse=True)
def telemetry_db(tmp_path, monkeypatch):
    path = str(tmp_path / "telemetry.sqlite3")
    monkeypatch.setattr(telemetry.logger, "DB_PATH", path)
    return path


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'sessions.db'}")
    await init_db(engine)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def store(session_factory):
    return SessionStore(session_factory, slot_name="testSessions")


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def controller(store, gateway):
    return ConversationController(store, gateway, pacing=(0.0, 0.0), opening_delay=0.0)
