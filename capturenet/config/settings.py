"""capturenet configuration via environment / .env file."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CAPTURENET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Dataset ---
    # Empty means the bundled demo dataset.
    DATASET_PATH: str = ""
    INCLUDE_ORPHAN_NODES: bool = False

    # --- Path queries ---
    CENTER_ENTITY_ID: str = "bitcoin-protocol"
    DEFAULT_MAX_PATH_LENGTH: int = 5
    MAX_PATH_LENGTH_LIMIT: int = 8

    # --- Metrics ---
    HUB_DEGREE_THRESHOLD: int = 10
    TOP_HUBS: int = 5
    TOP_CUSTODIANS: int = 5
    # Empirical normalization constant for the curated dataset's scale,
    # not a theoretical maximum.
    REGULATORY_CAPTURE_CEILING: float = 150.0
    RANKING_LIMIT: int = 10

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    # --- CORS ---
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return str(v).upper()

    @field_validator("REGULATORY_CAPTURE_CEILING")
    @classmethod
    def _positive_ceiling(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("REGULATORY_CAPTURE_CEILING must be positive")
        return v


settings = Settings()
