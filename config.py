import os
import logging
import sys

import structlog

logger = logging.getLogger("consensus")


def get_logger(name: str = "consensus"):
    """Get a structured logger instance

    Usage:
        logger = get_logger(__name__)
        logger = logger.bind(component="consensus_engine")
        logger.info("analyzed consensus", n_participants=12, n_statements=4)

    Args:
        name: Logger name (typically __name__ or module path)

    Returns:
        Structured logger instance with context binding support
    """
    return structlog.get_logger(name)


class Config:
    """Configuration management for the consensus kernel hosts

    The kernel itself reads nothing from here; these settings only shape
    logging and the CLI/HTTP hosts wrapped around it.
    """

    def __init__(self):
        # Logging
        self.LOG_LEVEL = os.getenv("CONSENSUS_LOG_LEVEL", "INFO").upper()
        self.DEBUG = os.getenv("CONSENSUS_DEBUG", "false").lower() == "true"

        # HTTP host
        self.API_HOST = os.getenv("CONSENSUS_HOST", "0.0.0.0")
        self.API_PORT = int(os.getenv("CONSENSUS_PORT", "8000"))
        self.MAX_PAYLOAD_BYTES = int(
            os.getenv("CONSENSUS_MAX_PAYLOAD_BYTES", str(5 * 1024 * 1024))
        )

        # CORS settings
        self.ALLOWED_ORIGINS = self._parse_origins(
            os.getenv(
                "CONSENSUS_ALLOWED_ORIGINS",
                "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000",
            )
        )

        self._validate()

    def _parse_origins(self, origins_str: str) -> list:
        """Parse comma-separated origins string"""
        if not origins_str:
            return []
        return [origin.strip() for origin in origins_str.split(",") if origin.strip()]

    def _validate(self):
        """Validate configuration values"""
        if self.API_PORT <= 0 or self.API_PORT > 65535:
            raise ValueError("CONSENSUS_PORT must be between 1 and 65535")

        if self.MAX_PAYLOAD_BYTES <= 0:
            raise ValueError("CONSENSUS_MAX_PAYLOAD_BYTES must be positive")

        if self.LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"CONSENSUS_LOG_LEVEL is not a logging level: {self.LOG_LEVEL}")

    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.DEBUG or "localhost" in str(self.ALLOWED_ORIGINS)

    def summary(self) -> dict:
        """Get a summary of current configuration"""
        return {
            "api_host": self.API_HOST,
            "api_port": self.API_PORT,
            "debug": self.DEBUG,
            "max_payload_bytes": self.MAX_PAYLOAD_BYTES,
            "allowed_origins_count": len(self.ALLOWED_ORIGINS),
            "log_level": self.LOG_LEVEL,
            "is_development": self.is_development(),
        }


def configure_structlog(is_development: bool = False, log_level: str = "INFO"):
    """Configure structlog for structured logging

    Args:
        is_development: If True, use human-readable key-value output. If False, use JSON.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # No timestamp processor - the host (systemd, container runtime) stamps lines
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if is_development:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stderr keeps stdout clean for CLI result payloads
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )


# Global configuration instance
config = Config()

configure_structlog(
    is_development=config.is_development(),
    log_level=config.LOG_LEVEL
)
