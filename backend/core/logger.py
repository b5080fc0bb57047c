# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Centralised logging configuration.

All log settings (levels, rotation, format …) live in  etc/logging.conf.
This module patches the log-file path into the config text and applies it
via the standard-library fileConfig loader.

Import the logger anywhere:
    from core.logger import logger

``setup_logging`` is called once by ``main.create_app``.
"""

import configparser as _cp
import logging
import logging.config
from pathlib import Path

# project root: backend/core/logger.py  →  ../../  →  chirpy/
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_LOGGING_CONF = _PROJECT_ROOT / "etc" / "logging.conf"

logger = logging.getLogger("chirpy")


def setup_logging(log_file: Path, conf_path: Path = _LOGGING_CONF) -> None:
    """
    Load *conf_path* and point its file handler at *log_file*.

    logging.conf uses %(log_file)s as a placeholder.  We read the raw text,
    replace it with the real absolute path, then feed the result to fileConfig
    via a ConfigParser-compatible object.
    """
    log_file = Path(log_file)
    # Ensure the log directory exists before the handler tries to open the file
    log_file.parent.mkdir(parents=True, exist_ok=True)

    raw = conf_path.read_text(encoding="utf-8")
    raw = raw.replace("%(log_file)s", str(log_file))

    # RawConfigParser is required: the logging format strings contain %(asctime)s
    # etc. which ConfigParser would try to interpolate and fail on.
    parser = _cp.RawConfigParser()
    parser.read_string(raw)

    logging.config.fileConfig(parser, disable_existing_loggers=False)
