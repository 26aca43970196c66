# api/generate.py
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ai.generation import generate_career_path
from telemetry.logger import log_event

router = APIRouter(prefix="/api", tags=["generation"])


class GenerateRequest(BaseModel):
    prompt: str


@router.post("/generate-career-path")
async def generate(req: GenerateRequest):
    try:
        text = await generate_career_path(req.prompt)
    except Exception as e:
        print(f"[DEBUG] Error generating career path: {e!r}")
        log_event("generation_endpoint_error", {"error": type(e).__name__})
        return JSONResponse({"error": "Failed to generate career path"}, status_code=500)
    return {"response": text}
