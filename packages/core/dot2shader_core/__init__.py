"""Core services for settings, logging, admission checks, and render sessions."""

from .admission import MAX_FILE_BYTES, MAX_PALETTE_SIZE, AdmissionError, check_file_size, check_palette_size
from .config import (
    CONFIG_VERSION,
    config_from_dict,
    config_path,
    config_to_dict,
    load_config,
    resolve_config,
    save_config,
)
from .session import RenderSession, SessionState, SessionStatus

__all__ = [
    "AdmissionError",
    "CONFIG_VERSION",
    "MAX_FILE_BYTES",
    "MAX_PALETTE_SIZE",
    "RenderSession",
    "SessionState",
    "SessionStatus",
    "check_file_size",
    "check_palette_size",
    "config_from_dict",
    "config_path",
    "config_to_dict",
    "load_config",
    "resolve_config",
    "save_config",
]
