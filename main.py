#main.py
from pathlib import Path
from dotenv import load_dotenv
load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.chat import router as chat_router
from api.generate import router as generate_router
from ai.gateway import build_gateway
from core.chat_orchestrator import ConversationController
from core.database import init_db
from memory.session_store import SessionStore


app = FastAPI(title="Career Path Assistant")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # dev only
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(generate_router)
app.include_router(chat_router)

@app.on_event("startup")
async def startup():
    await init_db()
    app.state.controller = ConversationController(SessionStore(), build_gateway())
    await app.state.controller.start()

@app.get("/")
def health():
    return {"status": "ok"}
