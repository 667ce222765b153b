"""
Destino - Logging Configuration

Installs one stream handler on the root logger. Streamlit re-executes the
app script on every interaction, so repeated calls must not stack handlers.
"""

import logging

_HANDLER_NAME = "destino"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> logging.Logger:
    """Configure root logging once.

    Args:
        level: Log level name. Defaults to ``Settings.log_level``, or INFO
            when settings cannot be loaded.

    Returns:
        The root logger
    """
    if level is None:
        level = _level_from_settings()

    root = logging.getLogger()
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level {level!r}.")
    root.setLevel(numeric_level)

    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    return root


def _level_from_settings() -> str:
    from pydantic import ValidationError

    from src.config.settings import get_settings

    try:
        return get_settings().log_level
    except ValidationError:
        # Supabase credentials missing; logging still works without them
        return "INFO"
