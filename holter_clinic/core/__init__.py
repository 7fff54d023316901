# Core package initialization
# Configuration, logging and the exception hierarchy shared by every layer

from . import config, exceptions, logging_config

__all__ = [
    "config",
    "exceptions",
    "logging_config",
]
