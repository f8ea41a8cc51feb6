"""
Runtime configuration for the credential Attestor.

This module centralizes environment-driven configuration: resource limits
applied at the verifier boundary and logging setup.

Configuration is read-only at runtime and must not influence extraction or
commitment outcomes.
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, field_validator


_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class AttestorConfig(BaseModel):
    """
    Runtime configuration for the Attestor.

    Configuration is environment-driven and read-only at runtime.
    """

    # ------------------------------------------------------------------
    # Safety and resource limits
    # ------------------------------------------------------------------

    MAX_PDF_SIZE_MB: int = Field(
        25,
        description="Maximum allowed PDF size in megabytes",
    )

    MAX_PAGE_COUNT: int = Field(
        500,
        description="Maximum allowed number of pages in the PDF",
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    LOG_LEVEL: str = Field(
        "INFO",
        description="Root log level applied by configure_logging()",
    )

    # ------------------------------------------------------------------
    # Validators (Pydantic v2)
    # ------------------------------------------------------------------

    @field_validator("MAX_PDF_SIZE_MB", "MAX_PAGE_COUNT")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Resource limits must be positive integers.")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Unsupported LOG_LEVEL '{v}'. "
                f"Allowed values: {sorted(_LOG_LEVELS)}"
            )
        return level

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def max_pdf_size_bytes(self) -> int:
        return self.MAX_PDF_SIZE_MB * 1024 * 1024

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "AttestorConfig":
        """
        Load configuration from environment variables.

        All values are parsed once at startup and must remain immutable.
        """
        return cls(
            MAX_PDF_SIZE_MB=int(
                os.getenv("ATTESTOR_MAX_PDF_SIZE_MB", "25")
            ),
            MAX_PAGE_COUNT=int(
                os.getenv("ATTESTOR_MAX_PAGE_COUNT", "500")
            ),
            LOG_LEVEL=os.getenv("ATTESTOR_LOG_LEVEL", "INFO"),
        )

    model_config = {
        "frozen": True,
    }


def configure_logging(config: AttestorConfig) -> None:
    """Apply process-wide logging configuration."""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
