# src/sensei/utils/configure_logging.py
import logging
import sys
from typing import Dict, Optional, Union

from tqdm import tqdm

from sensei.managers.config_manager import ConfigManager

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"

Level = Union[str, int]

# Werkzeug logs every request line at INFO
DEFAULT_SILENCED_LOGGERS: Dict[str, Level] = {"werkzeug": "WARNING"}


class LogWithTqdm(logging.Handler):
    """
    Sends records through `tqdm.write()` so they print above an active
    `seo-sensei audit` progress bar instead of breaking it.
    """
    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg, file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def _to_level(level: Level, fallback: int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return level


def configure_logger(
        general_level: Optional[Level] = None,
        module_specific_levels: Optional[Dict[str, Level]] = None,
        silenced_loggers: Optional[Dict[str, Level]] = None,
        config: Optional[ConfigManager] = None
) -> LogWithTqdm:
    """
    Installs the tqdm-aware handler on the root logger.

    The root level defaults to 'debug.level' of the configuration. Loggers in
    DEFAULT_SILENCED_LOGGERS are raised to their level unless ``silenced_loggers``
    overrides them. Calling this again replaces the previously installed
    handler and leaves foreign handlers alone.
    """
    if general_level is None:
        general_level = (config or ConfigManager()).get_nested("debug.level", "INFO")

    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(general_level, logging.INFO))
    for existing in [h for h in root_logger.handlers if isinstance(h, LogWithTqdm)]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    for name, level in (module_specific_levels or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.INFO))

    for name, level in {**DEFAULT_SILENCED_LOGGERS, **(silenced_loggers or {})}.items():
        logging.getLogger(name).setLevel(_to_level(level, logging.CRITICAL))

    return handler
