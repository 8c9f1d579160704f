"""
SwitchUp Terminal Service

Hosts one terminal session (boot gate, command interpreter, culture quiz,
shutdown narrative, live system log) and exposes it over HTTP for renderers
and the console client.

Endpoints:
    GET  /health            - Health check
    GET  /session/status    - Renderer-facing session state
    GET  /boot/lines        - Boot narration and password prompt
    POST /boot/password     - Submit the pass-phrase
    GET  /transcript        - Terminal transcript (optionally after a sequence)
    POST /terminal/submit   - Submit one terminal line
    GET  /commands          - Command table listing
    GET  /commands/{name}   - One command by name or alias
    GET  /logs              - Live system log window
    GET  /logs/stream       - Live system log as NDJSON
    POST /shutdown          - Power off
    POST /reboot            - Clear the offline flag and boot again
    GET  /stats             - Statistics

Internal binding: configured by SERVICE_HOST/SERVICE_PORT (default 0.0.0.0:8770)
"""

from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Any, AsyncIterator, TypedDict

import aiofiles
import uvicorn
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from switchup_platform import PLATFORM_NAME, EngineSpec, load_engine_spec
from terminal_commands import CommandSpec, all_commands, load_command
from terminal_engine import (
    AsyncioScheduler,
    FlagStore,
    InMemoryFlagStore,
    JsonFileFlagStore,
    LiveLogFeed,
    PasswordResult,
    SessionFlags,
    SessionSettings,
    SessionView,
    TerminalSession,
    TranscriptEntry,
)
from terminal_engine import __version__ as ENGINE_VERSION

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

_env_path = Path(__file__).parent / ".env"
load_dotenv(_env_path)


# =============================================================================
# Configuration
# =============================================================================

SERVICE_NAME = "SwitchUp Terminal Service"


@dataclass(frozen=True)
class RuntimeConfig:
    """Runtime config for one terminal service instance."""

    engine_spec_path: str
    instance_id: str
    service_host: str
    service_port: int
    flags_file: Path | None
    transcript_file: Path | None


def load_runtime_config() -> RuntimeConfig:
    """Load runtime config from environment with strict validation."""
    engine_spec_path = (os.environ.get("ENGINE_SPEC_PATH") or "").strip()
    if not engine_spec_path:
        raise RuntimeError(
            "ENGINE_SPEC_PATH is required. Provide an engine spec path at runtime."
        )

    instance_id = (os.environ.get("INSTANCE_ID", "default") or "").strip()
    if not instance_id:
        raise RuntimeError("INSTANCE_ID resolved to empty value.")

    service_host = (os.environ.get("SERVICE_HOST", "0.0.0.0") or "").strip()
    if not service_host:
        raise RuntimeError("SERVICE_HOST resolved to empty value.")

    service_port_raw = (os.environ.get("SERVICE_PORT", "8770") or "").strip()
    if not service_port_raw:
        raise RuntimeError("SERVICE_PORT resolved to empty value.")

    try:
        service_port = int(service_port_raw)
    except ValueError as exc:
        raise RuntimeError(f"SERVICE_PORT must be an integer. Got: {service_port_raw}") from exc

    if service_port < 1 or service_port > 65535:
        raise RuntimeError(f"SERVICE_PORT must be in range 1-65535. Got: {service_port}.")

    flags_override = (os.environ.get("FLAGS_FILE") or "").strip()
    flags_file = Path(flags_override).expanduser() if flags_override else None

    transcript_override = (os.environ.get("TRANSCRIPT_FILE") or "").strip()
    transcript_file = Path(transcript_override).expanduser() if transcript_override else None

    return RuntimeConfig(
        engine_spec_path=engine_spec_path,
        instance_id=instance_id,
        service_host=service_host,
        service_port=service_port,
        flags_file=flags_file,
        transcript_file=transcript_file,
    )


RUNTIME_CONFIG = load_runtime_config()
ENGINE_SPEC, ENGINE_SPEC_PATH = load_engine_spec(RUNTIME_CONFIG.engine_spec_path)

# CORS configuration - modify for production
CORS_ORIGINS: list[str] = [
    "http://localhost:3000",  # Common React dev port
    "http://localhost:5173",  # Vite dev server
    "https://switchup.tech",
]


def _format_utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def build_session_settings(spec: EngineSpec) -> SessionSettings:
    """Map a validated engine spec onto session settings."""
    return SessionSettings(
        passphrase=spec.boot.passphrase,
        mask_symbol=spec.boot.mask_symbol,
        line_delay_min=spec.boot.line_delay_min,
        line_delay_span=spec.boot.line_delay_span,
        prompt_delay=spec.boot.prompt_delay,
        grant_delay=spec.boot.grant_delay,
        error_flash=spec.boot.error_flash,
        exit_delay=spec.terminal.exit_delay,
        welcome_message=spec.terminal.welcome_message,
        quiz_reveal_delay=spec.quiz.reveal_delay,
        quiz_high_threshold=spec.quiz.high_threshold,
        quiz_mixed_threshold=spec.quiz.mixed_threshold,
        shutdown_line_interval=spec.shutdown.line_interval,
        live_logs_enabled=spec.live_logs.enabled,
        live_log_interval=spec.live_logs.interval,
        live_log_max_entries=spec.live_logs.max_entries,
        visit_announce_delay=spec.visits.announce_delay,
    )


def build_flag_store(config: RuntimeConfig) -> FlagStore:
    """JSON file store when FLAGS_FILE is set, in-memory otherwise."""
    if config.flags_file is not None:
        logger.info("Persisting session flags to %s", config.flags_file)
        return JsonFileFlagStore(config.flags_file)
    logger.info("FLAGS_FILE not set; session flags are in-memory only")
    return InMemoryFlagStore()


# =============================================================================
# Request Models
# =============================================================================


class PasswordRequest(BaseModel):
    """Pass-phrase submission."""

    password: str = Field(..., description="Pass-phrase, compared exactly and case-sensitively")


class SubmitRequest(BaseModel):
    """One terminal input line."""

    input: str = Field(..., description="Raw line as typed")


# =============================================================================
# Response Models
# =============================================================================


class BaseResponse(BaseModel):
    """Base response model with common fields."""

    ok: bool = Field(..., description="Whether the operation succeeded")
    message: str | None = Field(default=None, description="Optional status message")


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = Field(default=False)
    error: str = Field(..., description="Error description")
    error_code: str | None = Field(default=None, description="Machine-readable error code")


class SessionStatusResponse(BaseModel):
    """Renderer-facing session state."""

    view: str = Field(..., description="boot, terminal, shutdown or offline")
    show_password_prompt: bool
    password_error: bool
    quiz_active: bool
    quiz_step: int
    quiz_score: int
    exit_pending: bool = Field(..., description="exit typed; shutdown starts after the exit delay")
    shutdown_phase: int = Field(..., ge=0, description="0 before shutdown, 7 when offline")
    is_shutdown: bool = Field(..., description="Persisted shutdown flag")
    input_buffer: str
    transcript_length: int
    transcript_generation: int
    last_sequence: int
    live_logs_running: bool
    visits: dict[str, int]


class BootLinesResponse(BaseModel):
    """Boot narration state."""

    lines: list[TranscriptEntry]
    prompt: list[str] = Field(default_factory=list, description="Prompt lines once shown")
    show_password_prompt: bool
    password_error: bool
    granted: bool
    view: str


class PasswordResponse(BaseResponse):
    """Result of a pass-phrase submission."""

    result: str = Field(..., description="granted or denied")
    view: str


class TranscriptResponse(BaseModel):
    """Terminal transcript slice."""

    entries: list[TranscriptEntry]
    generation: int = Field(..., description="Bumped on every clear")
    last_sequence: int


class SubmitResponse(BaseResponse):
    """Result of one terminal submission."""

    accepted: bool = Field(..., description="False for blank input")
    entries: list[TranscriptEntry] = Field(default_factory=list, description="Entries appended synchronously")
    generation: int
    quiz_active: bool
    view: str


class CommandInfo(BaseModel):
    name: str
    aliases: list[str]
    description: str
    category: str
    hidden: bool


class CommandsResponse(BaseModel):
    commands: list[CommandInfo]
    hidden_count: int


class LogsResponse(BaseModel):
    running: bool
    entries: list[dict[str, Any]]


class PowerResponse(BaseResponse):
    view: str
    shutdown_phase: int
    is_shutdown: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service health status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Engine version")
    timestamp: str = Field(..., description="Current server timestamp")
    engine_id: str = Field(..., description="Active engine spec id")
    instance_id: str = Field(..., description="Active instance ID")
    view: str = Field(..., description="Current session view")


class StatsResponse(BaseModel):
    """Statistics response."""

    stats: dict[str, Any] = Field(..., description="Service statistics")
    interpreter: dict[str, int] = Field(..., description="Interpreter counters")
    quiz: dict[str, Any] = Field(..., description="Quiz state")
    archive_queue_size: int = Field(..., description="Entries waiting to be archived")
    live_log_subscribers: int = Field(..., description="Open live log streams")
    engine_id: str
    instance_id: str


# =============================================================================
# Application State (Type-safe Lifespan State)
# =============================================================================


class AppStats(TypedDict):
    """Application statistics tracking."""

    submissions: int
    password_attempts: int
    password_failures: int
    shutdowns: int
    reboots: int
    archived_entries: int
    archive_errors: int
    started_at: str


class AppState(TypedDict):
    """Type-safe application state managed by lifespan."""

    session: TerminalSession
    archive_queue: asyncio.Queue[TranscriptEntry] | None
    archive_task: asyncio.Task[None] | None
    stats: AppStats


def get_initial_stats() -> AppStats:
    """Create initial statistics dictionary."""
    return AppStats(
        submissions=0,
        password_attempts=0,
        password_failures=0,
        shutdowns=0,
        reboots=0,
        archived_entries=0,
        archive_errors=0,
        started_at=_format_utc_timestamp(),
    )


# =============================================================================
# Custom Exceptions
# =============================================================================


class TerminalServiceError(Exception):
    """Base exception for terminal service errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)


class TerminalLockedError(TerminalServiceError):
    """Raised when terminal input arrives before the pass-phrase unlocked it."""

    def __init__(self, message: str = "Terminal is locked. Complete the boot gate first.") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="TERMINAL_LOCKED",
        )


class SystemOfflineError(TerminalServiceError):
    """Raised when the system is shutting down or offline."""

    def __init__(self, message: str = "System is offline. Reboot first.") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="SYSTEM_OFFLINE",
        )


class BootPromptNotReadyError(TerminalServiceError):
    """Raised when a pass-phrase arrives while the gate is not accepting one."""

    def __init__(self, message: str = "Password prompt is not shown yet.") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="BOOT_PROMPT_NOT_READY",
        )


class BootAlreadyGrantedError(TerminalServiceError):
    """Raised when a pass-phrase arrives after access was granted."""

    def __init__(self, message: str = "Access already granted.") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="BOOT_ALREADY_GRANTED",
        )


class CommandNotFoundError(TerminalServiceError):
    """Raised when a command lookup names no known command or alias."""

    def __init__(self, message: str) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="COMMAND_NOT_FOUND",
        )


class SystemOnlineError(TerminalServiceError):
    """Raised when reboot is requested while the system is running."""

    def __init__(self, message: str = "System is online. Nothing to reboot.") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="SYSTEM_ONLINE",
        )


# =============================================================================
# Dependencies
# =============================================================================


def get_app_state(request: Request) -> AppState:
    """
    Dependency to retrieve application state from request.

    Raises:
        RuntimeError: If state is not properly initialized.
    """
    state = getattr(request, "state", None)
    if state is None:
        raise RuntimeError("Application state not initialized")
    return AppState(
        session=state.session,
        archive_queue=state.archive_queue,
        archive_task=state.archive_task,
        stats=state.stats,
    )


# Type alias for dependency injection
AppStateDep = Annotated[AppState, Depends(get_app_state)]


def _require_powered(session: TerminalSession) -> None:
    if session.view in (SessionView.SHUTDOWN, SessionView.OFFLINE):
        raise SystemOfflineError()


# =============================================================================
# Transcript Archive
# =============================================================================


async def archive_loop(
    queue: asyncio.Queue[TranscriptEntry],
    transcript_file: Path,
    stats: AppStats,
) -> None:
    """
    Append queued terminal entries to the transcript file.

    Args:
        queue: Entries captured by the transcript listener.
        transcript_file: Archive file, appended to.
        stats: Counters updated per entry.
    """
    logger.info("Transcript archive started: %s", transcript_file)
    while True:
        entry = await queue.get()
        try:
            transcript_file.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(transcript_file, "a", encoding="utf-8") as f:
                for line in entry.lines:
                    await f.write(f"[{entry.created_at}] {entry.kind.value.upper()}: {line}\n")
            stats["archived_entries"] += 1
        except OSError as e:
            stats["archive_errors"] += 1
            logger.error("Failed to archive transcript entry #%d: %s", entry.sequence, e)
        finally:
            queue.task_done()


# =============================================================================
# Live Log Stream
# =============================================================================


async def stream_live_logs(feed: LiveLogFeed, limit: int | None) -> AsyncIterator[str]:
    """
    Yield live log entries as NDJSON lines, history first.

    Args:
        feed: Session live log feed.
        limit: Stop after this many entries; None streams until the client goes away.
    """
    queue = feed.subscribe()
    sent = 0
    try:
        while limit is None or sent < limit:
            entry = await queue.get()
            yield entry.to_json() + "\n"
            sent += 1
    finally:
        feed.unsubscribe(queue)


# =============================================================================
# Exception Handlers
# =============================================================================


async def terminal_service_error_handler(
    request: Request, exc: TerminalServiceError
) -> JSONResponse:
    """Render a TerminalServiceError as an ErrorResponse."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            ok=False,
            error=exc.message,
            error_code=exc.error_code,
        ).model_dump(),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            ok=False,
            error="Internal server error",
            error_code="INTERNAL_ERROR",
        ).model_dump(),
    )


# =============================================================================
# FastAPI App Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[dict[str, Any]]:
    """
    Build the flag store, scheduler and session; start the session.

    On shutdown every engine timer is cancelled and the archive task stops.
    """
    logger.info("Starting %s", SERVICE_NAME)
    logger.info(
        "Runtime: platform=%s engine=%s instance=%s host=%s port=%d",
        PLATFORM_NAME,
        ENGINE_SPEC.engine_id,
        RUNTIME_CONFIG.instance_id,
        RUNTIME_CONFIG.service_host,
        RUNTIME_CONFIG.service_port,
    )
    logger.info("Engine spec path: %s", ENGINE_SPEC_PATH)

    stats = get_initial_stats()
    flags = SessionFlags(build_flag_store(RUNTIME_CONFIG))
    session = TerminalSession(
        flags,
        AsyncioScheduler(asyncio.get_running_loop()),
        settings=build_session_settings(ENGINE_SPEC),
    )

    archive_queue: asyncio.Queue[TranscriptEntry] | None = None
    archive_task: asyncio.Task[None] | None = None
    if RUNTIME_CONFIG.transcript_file is not None:
        archive_queue = asyncio.Queue()
        for entry in session.transcript.entries:
            archive_queue.put_nowait(entry)
        archive_listener = archive_queue.put_nowait
        session.add_transcript_listener(archive_listener)
        archive_task = asyncio.create_task(
            archive_loop(archive_queue, RUNTIME_CONFIG.transcript_file, stats)
        )

    session.start()

    state = {
        "session": session,
        "archive_queue": archive_queue,
        "archive_task": archive_task,
        "stats": stats,
    }

    yield state

    # Shutdown
    logger.info("Shutting down...")
    session.teardown()
    if archive_task is not None:
        session.remove_transcript_listener(archive_listener)
        archive_task.cancel()
        try:
            await archive_task
        except asyncio.CancelledError:
            pass


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title=f"{SERVICE_NAME} ({ENGINE_SPEC.engine_id})",
    version=ENGINE_VERSION,
    description="Simulated terminal with boot gate, command interpreter and culture-fit quiz",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
    max_age=3600,
)

# Register exception handlers
app.add_exception_handler(TerminalServiceError, terminal_service_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)


# =============================================================================
# Endpoints
# =============================================================================


@app.get("/health", response_model=HealthResponse)
async def health(state: AppStateDep) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=ENGINE_VERSION,
        timestamp=_format_utc_timestamp(),
        engine_id=ENGINE_SPEC.engine_id,
        instance_id=RUNTIME_CONFIG.instance_id,
        view=state["session"].view.value,
    )


@app.get("/session/status", response_model=SessionStatusResponse)
async def get_session_status(state: AppStateDep) -> SessionStatusResponse:
    return SessionStatusResponse(**state["session"].get_status())


@app.get("/boot/lines", response_model=BootLinesResponse)
async def get_boot_lines(state: AppStateDep) -> BootLinesResponse:
    session = state["session"]
    boot = session.boot
    return BootLinesResponse(
        lines=boot.transcript.entries,
        prompt=boot.prompt_lines(),
        show_password_prompt=boot.show_password_prompt,
        password_error=boot.password_error,
        granted=boot.granted,
        view=session.view.value,
    )


@app.post("/boot/password", response_model=PasswordResponse)
async def submit_password(request: PasswordRequest, state: AppStateDep) -> PasswordResponse:
    """
    Submit the pass-phrase.

    Raises:
        SystemOfflineError: If the system is shutting down or offline.
        BootPromptNotReadyError: If the prompt is not shown yet.
        BootAlreadyGrantedError: If access was already granted.
    """
    session = state["session"]
    _require_powered(session)

    result = session.submit_password(request.password)
    if result == PasswordResult.NOT_READY:
        if session.view == SessionView.TERMINAL or session.boot.granted:
            raise BootAlreadyGrantedError()
        raise BootPromptNotReadyError()

    state["stats"]["password_attempts"] += 1
    if result == PasswordResult.DENIED:
        state["stats"]["password_failures"] += 1
        return PasswordResponse(
            ok=False,
            message="ACCESS DENIED. TRY AGAIN.",
            result=result.value,
            view=session.view.value,
        )

    return PasswordResponse(
        ok=True,
        message="ACCESS GRANTED.",
        result=result.value,
        view=session.view.value,
    )


@app.get("/transcript", response_model=TranscriptResponse)
async def get_transcript(
    state: AppStateDep,
    after: Annotated[int, Query(ge=0, description="Only entries with a larger sequence")] = 0,
) -> TranscriptResponse:
    transcript = state["session"].transcript
    return TranscriptResponse(
        entries=transcript.entries_after(after),
        generation=transcript.generation,
        last_sequence=transcript.last_sequence,
    )


@app.post("/terminal/submit", response_model=SubmitResponse)
async def submit_line(request: SubmitRequest, state: AppStateDep) -> SubmitResponse:
    """
    Submit one terminal line.

    Raises:
        SystemOfflineError: If the system is shutting down or offline.
        TerminalLockedError: If the boot gate has not unlocked the terminal.
    """
    session = state["session"]
    _require_powered(session)
    if session.view != SessionView.TERMINAL:
        raise TerminalLockedError()

    transcript = session.transcript
    before = transcript.last_sequence
    generation = transcript.generation
    accepted = session.submit(request.input)
    if accepted:
        state["stats"]["submissions"] += 1

    entries = transcript.entries_after(before) if transcript.generation == generation else []
    return SubmitResponse(
        ok=True,
        accepted=accepted,
        entries=entries,
        generation=transcript.generation,
        quiz_active=session.quiz.is_active,
        view=session.view.value,
    )


def _command_info(spec: CommandSpec) -> CommandInfo:
    return CommandInfo(
        name=spec.name,
        aliases=list(spec.aliases),
        description=spec.description,
        category=spec.category.value,
        hidden=spec.hidden,
    )


@app.get("/commands", response_model=CommandsResponse)
async def list_commands(
    include_hidden: Annotated[bool, Query(description="Also list hidden commands")] = False,
) -> CommandsResponse:
    specs = all_commands()
    listed = [spec for spec in specs if include_hidden or not spec.hidden]
    return CommandsResponse(
        commands=[_command_info(spec) for spec in listed],
        hidden_count=sum(1 for spec in specs if spec.hidden),
    )


@app.get("/commands/{name}", response_model=CommandInfo)
async def get_command(name: str) -> CommandInfo:
    """
    Look up one command by name or alias.

    Raises:
        CommandNotFoundError: If nothing in the command table matches.
    """
    try:
        spec = load_command(name)
    except ValueError as e:
        raise CommandNotFoundError(str(e)) from e
    return _command_info(spec)


@app.get("/logs", response_model=LogsResponse)
async def get_logs(state: AppStateDep) -> LogsResponse:
    feed = state["session"].live_logs
    return LogsResponse(
        running=feed.is_running,
        entries=[entry.to_dict() for entry in feed.entries],
    )


@app.get("/logs/stream")
async def stream_logs(
    state: AppStateDep,
    limit: Annotated[int | None, Query(ge=1, description="Close the stream after this many entries")] = None,
) -> StreamingResponse:
    return StreamingResponse(
        stream_live_logs(state["session"].live_logs, limit),
        media_type="application/x-ndjson",
    )


@app.post("/shutdown", response_model=PowerResponse)
async def shutdown(state: AppStateDep) -> PowerResponse:
    """
    Power off. The persisted flag is written before the narrative starts.

    Raises:
        SystemOfflineError: If a shutdown is already active.
    """
    session = state["session"]
    if not session.request_shutdown():
        raise SystemOfflineError("Shutdown already in progress or complete.")
    state["stats"]["shutdowns"] += 1
    return PowerResponse(
        ok=True,
        message="Shutdown sequence initiated",
        view=session.view.value,
        shutdown_phase=session.shutdown.phase,
        is_shutdown=session.flags.is_shutdown,
    )


@app.post("/reboot", response_model=PowerResponse)
async def reboot(state: AppStateDep) -> PowerResponse:
    """
    Clear the persisted flag and restart from boot.

    Raises:
        SystemOnlineError: If no shutdown is active.
    """
    session = state["session"]
    if not session.shutdown.active:
        raise SystemOnlineError()
    session.reboot()
    state["stats"]["reboots"] += 1
    return PowerResponse(
        ok=True,
        message="Rebooting",
        view=session.view.value,
        shutdown_phase=session.shutdown.phase,
        is_shutdown=session.flags.is_shutdown,
    )


@app.get("/stats", response_model=StatsResponse)
async def get_stats(state: AppStateDep) -> StatsResponse:
    session = state["session"]
    archive_queue = state["archive_queue"]
    return StatsResponse(
        stats=dict(state["stats"]),
        interpreter=session.interpreter.stats,
        quiz=session.quiz.get_status(),
        archive_queue_size=archive_queue.qsize() if archive_queue is not None else 0,
        live_log_subscribers=session.live_logs.subscriber_count,
        engine_id=ENGINE_SPEC.engine_id,
        instance_id=RUNTIME_CONFIG.instance_id,
    )


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    logger.info("=" * 60)
    logger.info(SERVICE_NAME)
    logger.info("=" * 60)
    logger.info(
        "Binding to: http://%s:%d",
        RUNTIME_CONFIG.service_host,
        RUNTIME_CONFIG.service_port,
    )
    logger.info(
        "Platform: %s, Engine: %s (%s), Instance: %s",
        PLATFORM_NAME,
        ENGINE_SPEC.engine_id,
        ENGINE_SPEC.display_name,
        RUNTIME_CONFIG.instance_id,
    )
    logger.info("Engine spec path: %s", ENGINE_SPEC_PATH)
    logger.info("Flags file: %s", RUNTIME_CONFIG.flags_file or "(in-memory)")
    logger.info("Transcript archive: %s", RUNTIME_CONFIG.transcript_file or "(disabled)")
    logger.info("=" * 60)

    uvicorn.run(
        app,
        host=RUNTIME_CONFIG.service_host,
        port=RUNTIME_CONFIG.service_port,
        log_level="info",
    )
