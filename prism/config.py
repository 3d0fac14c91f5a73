"""
Prism Configuration — pydantic-settings based.

All settings are read from environment variables or .env file.
Every value has a default, so the engine runs with no environment at all.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Risk Profiles ──
    profiles_dir: str = Field(
        default="risk_profiles",
        description="Directory holding <profile-id>.yaml risk profile files",
    )

    # ── Classification ──
    reference_data_path: str | None = Field(
        default=None,
        description="Override for the canonical risk factor JSON table (defaults to the packaged copy)",
    )
    classification_cache_enabled: bool = Field(
        default=True,
        description="Cache factor id → descriptor lookups (least recently used evicted first)",
    )
    classification_cache_size: int = Field(
        default=4096,
        description="Maximum number of factor ids held in the classification cache",
    )

    # ── Server ──
    port: int = Field(default=5001, description="Server port")
    host: str = Field(default="0.0.0.0", description="Server bind host")
    cors_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )
    log_level: str = Field(default="INFO", description="Root log level")

    # ── Audit ──
    audit_enabled: bool = Field(
        default=True, description="Record every scoring decision to the audit log"
    )
    audit_log_path: str = Field(
        default="audit.jsonl", description="Path to JSON-lines audit log file"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance — imported by other modules
settings = Settings()
