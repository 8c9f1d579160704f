"""SwitchUp engine-spec platform package."""

from switchup_platform.spec_loader import (
    BUNDLED_SPEC_PATH,
    PLATFORM_NAME,
    load_engine_spec,
    resolve_spec_path,
)
from switchup_platform.spec_models import (
    BootSpec,
    EngineSpec,
    LiveLogSpec,
    QuizSpec,
    ShutdownSpec,
    TerminalSpec,
    VisitSpec,
)

__all__ = [
    "load_engine_spec",
    "resolve_spec_path",
    "BUNDLED_SPEC_PATH",
    "PLATFORM_NAME",
    "BootSpec",
    "EngineSpec",
    "LiveLogSpec",
    "QuizSpec",
    "ShutdownSpec",
    "TerminalSpec",
    "VisitSpec",
]
