import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Set

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ValidationError

from config.settings import Settings, get_settings
from portfolio.profile_store import PROFILE, Profile
from qa.cache import AnswerCache
from qa.local_engine import LocalAnswerEngine
from qa.orchestrator import QuestionOrchestrator
from qa.remote_client import RemoteAnswerClient
from query_logging.query_logger import log_query_async
from telemetry.emitter import telemetry_stream


logger = logging.getLogger("portfolio")

WEB_DIR = Path(__file__).parent / "web"

# pending ask-log writes; discarded when each one completes
_background_tasks: Set[asyncio.Task] = set()

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; img-src 'self' data:; style-src 'self' 'unsafe-inline'; "
    "script-src 'self' 'unsafe-inline'; connect-src 'self'; media-src 'self';"
)
SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
}


# API Contract Models
class AskRequest(BaseModel):
    q: str = ""

class AskResponse(BaseModel):
    a: str

class PingResponse(BaseModel):
    ok: bool
    now: str


def build_orchestrator(settings: Settings, profile: Profile = PROFILE) -> QuestionOrchestrator:
    remote = None
    if settings.remote_enabled:
        remote = RemoteAnswerClient(
            api_key=settings.groq_api_key,
            model=settings.groq_model,
            profile=profile,
            timeout=settings.remote_timeout,
            temperature=settings.remote_temperature,
        )
    return QuestionOrchestrator(AnswerCache(), LocalAnswerEngine(profile), remote)


# Dependencies read the components owned by the app instance
def get_orchestrator(request: Request) -> QuestionOrchestrator:
    return request.app.state.orchestrator

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_app_profile(request: Request) -> Profile:
    return request.app.state.profile


router = APIRouter()


@router.get("/api/profile")
def profile_endpoint(profile: Profile = Depends(get_app_profile)):
    return JSONResponse(profile.model_dump(mode="json"), headers={"Cache-Control": "no-store"})


@router.get("/api/ping", response_model=PingResponse)
def ping_endpoint():
    now = datetime.now(timezone.utc).astimezone().isoformat(timespec="seconds")
    return PingResponse(ok=True, now=now)


@router.post("/api/ask", response_model=AskResponse)
async def ask_endpoint(
    request: Request,
    orchestrator: QuestionOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_app_settings),
):
    start_time = time.time()

    # Undecodable or invalid bodies are treated as an empty question
    try:
        payload = AskRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        payload = AskRequest()

    result = await orchestrator.resolve(payload.q)

    if result.source != "empty":
        log_data = {
            "question":     payload.q.strip(),
            "source":       result.source,
            "answer_chars": len(result.answer),
            "latency_ms":   int((time.time() - start_time) * 1000),
            "timestamp":    datetime.now(timezone.utc).isoformat(),
        }
        task = asyncio.create_task(log_query_async(settings.ask_log_file, log_data))
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)

    return AskResponse(a=result.answer)


@router.get("/sse")
async def sse_endpoint(request: Request, settings: Settings = Depends(get_app_settings)):
    return StreamingResponse(
        telemetry_stream(request.is_disconnected, interval=settings.telemetry_interval),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive", "X-Accel-Buffering": "no"},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    orchestrator: QuestionOrchestrator = app.state.orchestrator
    logger.info("HUD online -> http://localhost:%s", settings.port)
    logger.info("Remote answering %s", "enabled" if orchestrator.remote else "disabled (no GROQ_API_KEY)")
    yield
    if orchestrator.remote is not None:
        await orchestrator.remote.aclose()
    logger.info("Server shutting down. Answer cache stats: %s", orchestrator.cache.stats())


def create_app(
    settings: Optional[Settings] = None,
    orchestrator: Optional[QuestionOrchestrator] = None,
    profile: Profile = PROFILE,
    web_dir: Path = WEB_DIR,
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="Portfolio HUD API", lifespan=lifespan)
    app.state.settings = settings
    app.state.profile = profile
    app.state.orchestrator = orchestrator or build_orchestrator(settings, profile)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response

    app.include_router(router)
    # Mounted last so the API routes above take precedence
    app.mount("/", StaticFiles(directory=web_dir, html=True), name="web")
    return app


_settings = get_settings()
logging.basicConfig(level=_settings.log_level, format="[%(asctime)s] %(levelname)s - %(message)s")

app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=_settings.host, port=_settings.port)
