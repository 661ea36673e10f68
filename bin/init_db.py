# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""
Bootstrap script – creates the database and the users/posts tables.

The API does the same on startup; run this when you want the schema in
place before the first deploy:
    python bin/init_db.py

Safe to run repeatedly: every statement is create-if-not-exists.
"""

import os
import sys

# bin/init_db.py  →  ../  →  project root
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR  = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from core.logger import logger  # noqa: E402
from database import engine, init_db  # noqa: E402


def main() -> int:
    try:
        init_db()
    except Exception:
        logger.error("[init_db] failed for %s", engine.url.render_as_string(hide_password=True))
        return 1
    print(f"[init_db] schema ready on {engine.url.render_as_string(hide_password=True)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
