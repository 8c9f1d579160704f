"""Engine specification models for the SwitchUp terminal."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class BootSpec(BaseModel):
    """Boot narration pacing and pass-phrase gate."""

    passphrase: str = Field(default="SwitchMeUp", min_length=1)
    mask_symbol: str = Field(default="*", min_length=1, max_length=1)
    line_delay_min: float = Field(default=0.1, ge=0)
    line_delay_span: float = Field(default=0.3, ge=0)
    prompt_delay: float = Field(default=0.8, ge=0)
    grant_delay: float = Field(default=0.6, ge=0)
    error_flash: float = Field(default=0.5, ge=0)

    model_config = {"extra": "forbid"}


class TerminalSpec(BaseModel):
    """Interpreter settings."""

    exit_delay: float = Field(default=2.0, ge=0)
    welcome_message: str = Field(default="Welcome, Architect of the Future.", min_length=1)

    model_config = {"extra": "forbid"}


class QuizSpec(BaseModel):
    """Quiz pacing and verdict thresholds."""

    reveal_delay: float = Field(default=0.5, ge=0)
    high_threshold: int = Field(default=8, ge=0)
    mixed_threshold: int = Field(default=6, ge=0)

    @model_validator(mode="after")
    def validate_thresholds(self) -> "QuizSpec":
        if self.mixed_threshold >= self.high_threshold:
            raise ValueError("quiz.mixed_threshold must be lower than quiz.high_threshold")
        if self.high_threshold > 10:
            raise ValueError("quiz.high_threshold cannot exceed the 10 quiz questions")
        return self

    model_config = {"extra": "forbid"}


class ShutdownSpec(BaseModel):
    """Shutdown narrative pacing."""

    line_interval: float = Field(default=0.4, ge=0)

    model_config = {"extra": "forbid"}


class LiveLogSpec(BaseModel):
    """Live log feed settings."""

    enabled: bool = True
    interval: float = Field(default=2.0, gt=0)
    max_entries: int = Field(default=12, ge=1)

    model_config = {"extra": "forbid"}


class VisitSpec(BaseModel):
    """Visit milestone announcements."""

    announce_delay: float = Field(default=1.5, ge=0)

    model_config = {"extra": "forbid"}


class EngineSpec(BaseModel):
    """Canonical configuration for one terminal engine instance."""

    engine_id: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)
    boot: BootSpec = Field(default_factory=BootSpec)
    terminal: TerminalSpec = Field(default_factory=TerminalSpec)
    quiz: QuizSpec = Field(default_factory=QuizSpec)
    shutdown: ShutdownSpec = Field(default_factory=ShutdownSpec)
    live_logs: LiveLogSpec = Field(default_factory=LiveLogSpec)
    visits: VisitSpec = Field(default_factory=VisitSpec)

    model_config = {"extra": "forbid"}
