from dotinstall.core.observability.logging_config import setup_logging
from dotinstall.core.observability.reporter import Reporter

__all__ = ["Reporter", "setup_logging"]
