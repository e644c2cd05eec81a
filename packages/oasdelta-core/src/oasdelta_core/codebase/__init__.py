from .log import configure_logger, get_logger

__all__ = ["configure_logger", "get_logger"]
