"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class LLMConfig(BaseSettings):
    """LLM provider configuration."""

    model_config = {"env_prefix": "PRESOLVE_LLM_"}

    provider: str = "gemini"
    base_url: str = "https://generativelanguage.googleapis.com"
    model: str = "gemini-3-flash-preview"
    api_key: str | None = None
    # None disables the timeout; the summary call is awaited until it returns.
    timeout_seconds: float | None = None
    max_retries: int = 0
    temperature: float = 0.2
    max_tokens: int = 256
    top_p: float | None = None


class WebhookConfig(BaseSettings):
    """Case submission webhook configuration."""

    model_config = {"env_prefix": "PRESOLVE_WEBHOOK_"}

    url: str = (
        "https://script.google.com/macros/s/"
        "AKfycbz5yO59g3BMYW2F2Mvpd8GI8BE0XgQnn3s-Zw3T-fX0ZZrgvO6FRXyXy-x4RBKSOs97/exec"
    )
    timeout_seconds: float | None = None
    confirm_delivery: bool = False


class IntakeConfig(BaseSettings):
    """Intake wizard configuration."""

    model_config = {"env_prefix": "PRESOLVE_INTAKE_"}

    wizard_path: str | None = None
    currency_locale: str = "en-IN"
    currency_code: str = "INR"
    min_processing_seconds: float = 3.0
    # Filing sessions idle longer than this are evicted; None keeps them.
    session_idle_seconds: float | None = 3600.0


class SupportConfig(BaseSettings):
    """Static support contact shown alongside the wizard."""

    model_config = {"env_prefix": "PRESOLVE_SUPPORT_"}

    phone: str = "+91 8447728708"
    email: str = "info@presolv360.com"


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "PRESOLVE_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    llm: LLMConfig = Field(default_factory=LLMConfig)
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    intake: IntakeConfig = Field(default_factory=IntakeConfig)
    support: SupportConfig = Field(default_factory=SupportConfig)
