# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""
Logging setup for the blog API.

Levels, handlers and formats are declared in etc/logging.conf; the only
value filled in at runtime is the log-file path (``%(log_file)s``), which
goes to ``<log_dir>/app.log``.  ``log_dir`` comes from the LOG_DIR setting
and defaults to ``log/`` under the project root.

When etc/logging.conf is not shipped (e.g. an installed wheel) the process
logs to the console only.

    from core.logger import logger
"""

import configparser
import logging
import logging.config
from pathlib import Path
from typing import Optional, Union

from core.config import settings

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGGING_CONF = _PROJECT_ROOT / "etc" / "logging.conf"
DEFAULT_LOG_DIR = _PROJECT_ROOT / "log"
LOG_FILE_NAME = "app.log"

_CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def load_logging_config(conf_path: Path, log_file: Path) -> configparser.RawConfigParser:
    """Parse *conf_path* with the ``%(log_file)s`` placeholder resolved."""
    text = conf_path.read_text(encoding="utf-8").replace("%(log_file)s", str(log_file))
    # Raw: the format strings carry %(asctime)s and friends
    parser = configparser.RawConfigParser()
    parser.read_string(text)
    return parser


def configure_logging(
    conf_path: Path = LOGGING_CONF,
    log_dir: Optional[Union[str, Path]] = None,
) -> None:
    if not conf_path.is_file():
        logging.basicConfig(level=logging.INFO, format=_CONSOLE_FORMAT)
        return

    log_dir = Path(log_dir) if log_dir else DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    parser = load_logging_config(conf_path, log_dir / LOG_FILE_NAME)
    logging.config.fileConfig(parser, disable_existing_loggers=False)


configure_logging(log_dir=settings.log_dir)

logger = logging.getLogger("blogapi")
