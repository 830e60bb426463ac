from .logging_config import setup_logger, log_network_io

__all__ = ["setup_logger", "log_network_io"]
