import logging

from core import logger as log_setup


def test_log_file_placeholder_resolved(tmp_path):
    parser = log_setup.load_logging_config(log_setup.LOGGING_CONF, tmp_path / "app.log")

    assert str(tmp_path / "app.log") in parser.get("handler_file", "args")
    assert parser.get("logger_blogapi", "qualname") == "blogapi"


def test_configure_logging_writes_to_log_dir(tmp_path):
    log_dir = tmp_path / "nested" / "log"

    log_setup.configure_logging(log_dir=log_dir)
    logging.getLogger("blogapi").info("configured for test")
    for handler in logging.getLogger("blogapi").handlers:
        handler.flush()

    assert "configured for test" in (log_dir / "app.log").read_text(encoding="utf-8")


def test_missing_conf_falls_back_to_console(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    log_setup.configure_logging(conf_path=tmp_path / "absent.conf", log_dir=tmp_path)

    assert calls and calls[0]["level"] == logging.INFO
    assert not (tmp_path / "app.log").exists()
