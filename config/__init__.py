from .logging_config import setup_logging, setup_script_logging

__all__ = ["setup_logging", "setup_script_logging"]
