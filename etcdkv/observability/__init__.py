"""
Observability for etcdkv: loguru logging setup and Prometheus metrics.
"""

from .logging_setup import setup_logging_dev, get_logger, with_context
from . import metrics

__all__ = ["setup_logging_dev", "get_logger", "with_context", "metrics"]
