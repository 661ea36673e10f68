from sqlalchemy import inspect

from database import init_db, make_engine


def test_init_db_is_idempotent():
    engine = make_engine("sqlite://")
    try:
        init_db(bind=engine)
        init_db(bind=engine)

        inspector = inspect(engine)
        assert set(inspector.get_table_names()) >= {"users", "posts"}
        fks = inspector.get_foreign_keys("posts")
        assert fks[0]["referred_table"] == "users"
        assert fks[0]["options"].get("ondelete") == "CASCADE"
    finally:
        engine.dispose()


def test_sqlite_engine_enforces_foreign_keys():
    engine = make_engine("sqlite://")
    try:
        with engine.connect() as conn:
            assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
    finally:
        engine.dispose()
