# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""
Alembic environment – runs migrations through the same engine factory the
application uses, so DATABASE_URL (environment or etc/app.conf) is the single
source of truth for the connection string.

Usage, from the project root:
    alembic upgrade head
"""

import os
import sys

# ``backend/`` holds top-level modules (core, database, models …)
_BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from alembic import context  # noqa: E402

from core.config import settings  # noqa: E402
from database import Base, make_engine  # noqa: E402

# Register every table on Base.metadata for --autogenerate.
import models.user  # noqa: F401, E402
import models.post  # noqa: F401, E402


def run_migrations_online():
    connectable = make_engine(settings.database_url)
    with connectable.connect() as conn:
        context.configure(
            connection=conn,
            target_metadata=Base.metadata,
            compare_type=True,
            # SQLite cannot ALTER most things in place
            render_as_batch=conn.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()
    connectable.dispose()


def run_migrations_offline():
    """Emit SQL to stdout instead of executing it."""
    context.configure(
        url=settings.database_url,
        target_metadata=Base.metadata,
        literal_binds=True,
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
