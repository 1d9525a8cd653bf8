import os

from radar_plotter.utils.log import describe_text, log_event, log_exception, resolve_log_path


def test_env_var_selects_log_file(log_file):
    assert resolve_log_path() == log_file
    assert resolve_log_path(log_file.parent / "other.log") == log_file.parent / "other.log"


def test_event_is_one_line_with_pid_and_fields(log_file):
    log_event("cli.parse", "no table\nfound", path="a\tb.tsv", lines=1)
    text = log_file.read_text(encoding="utf-8")
    assert text.count("\n") == 1
    assert f"pid={os.getpid()} [cli.parse]" in text
    assert "no table\\nfound" in text
    assert "lines=1 path=a\\tb.tsv" in text


def test_exception_logged_with_traceback(log_file):
    try:
        raise ValueError("bad range")
    except ValueError:
        log_exception("session.edit")
    text = log_file.read_text(encoding="utf-8")
    assert "[session.edit] ValueError: bad range" in text
    assert "    Traceback" in text


def test_logging_failure_is_silent(tmp_path):
    log_event("x", "y", log_path=tmp_path / "missing-dir" / "log.txt")


def test_describe_text():
    assert describe_text("Model,A\n\nX,1\n") == "chars=13 lines=2 first='Model,A'"
    assert describe_text(None) == "type=NoneType"
