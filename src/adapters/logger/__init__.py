"""Logger adapters - Request logger implementations."""

from .request_logger import LoggingRequestLogger

__all__ = ["LoggingRequestLogger"]
