from .config import get_logger, setup_logging
from .context import RequestContext, new_correlation_id

__all__ = ["setup_logging", "get_logger", "RequestContext", "new_correlation_id"]
