"""
Process-wide logging setup for the SpikeTime club core.
"""

import logging

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _LiteLLMNoiseFilter(logging.Filter):
    """Drop LiteLLM's per-request banner lines; failures still come through."""

    def filter(self, record):
        return "LiteLLM completion()" not in record.getMessage()


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """
    Configure root logging once for the host process and return the app logger.

    Call this from the embedding application's entry point before creating the
    ServiceContainer.
    """
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        force=True,  # Override any handlers installed by imported libraries
    )
    logging.getLogger("LiteLLM").addFilter(_LiteLLMNoiseFilter())
    return logging.getLogger("spiketime")
