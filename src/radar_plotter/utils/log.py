import os
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

LOG_PATH_ENV = "RADAR_PLOTTER_LOG"
DEFAULT_LOG_PATH = Path.home() / "RadarPlotter_error.log"
MAX_FIELD_LEN = 400


def resolve_log_path(log_path: Optional[Path] = None) -> Path:
    """Explicit path first, then $RADAR_PLOTTER_LOG, then the home-directory default."""
    if log_path is not None:
        return Path(log_path)
    env = os.environ.get(LOG_PATH_ENV, "").strip()
    if env:
        return Path(env).expanduser()
    return DEFAULT_LOG_PATH


def _one_line(value: Any) -> str:
    text = value if isinstance(value, str) else repr(value)
    text = text.encode("unicode_escape", errors="backslashreplace").decode("ascii")
    if len(text) > MAX_FIELD_LEN:
        text = text[: MAX_FIELD_LEN - 3] + "..."
    return text


def describe_text(text: Any, preview_len: int = 60) -> str:
    """Short summary of pasted input for a log line: size, line count, first line."""
    if not isinstance(text, str):
        return f"type={type(text).__name__}"
    lines = [ln for ln in text.splitlines() if ln.strip()]
    first = lines[0].strip() if lines else ""
    if len(first) > preview_len:
        first = first[: preview_len - 3] + "..."
    return f"chars={len(text)} lines={len(lines)} first={first!r}"


def _header(context: str) -> str:
    return f"{datetime.now().isoformat(timespec='seconds')} pid={os.getpid()} [{context}]"


def _append(lines: str, log_path: Optional[Path]) -> None:
    # Diagnostics must never take the engine down with them.
    try:
        with open(resolve_log_path(log_path), "a", encoding="utf-8") as f:
            f.write(lines)
    except OSError:
        pass


def log_event(context: str, message: str, log_path: Optional[Path] = None, **fields: Any) -> None:
    """One line per event: timestamp, pid, context, message, then key=value fields."""
    extra = "".join(f" {k}={_one_line(v)}" for k, v in sorted(fields.items()))
    _append(f"{_header(context)} {_one_line(message)}{extra}\n", log_path)


def log_exception(context: str, log_path: Optional[Path] = None) -> None:
    """Event line naming the active exception, followed by its indented traceback."""
    exc_type, exc, tb = sys.exc_info()
    if exc_type is None:
        log_event(context, "log_exception called without an active exception", log_path)
        return
    body = "".join(traceback.format_exception(exc_type, exc, tb))
    indented = "".join(f"    {ln}\n" for ln in body.rstrip("\n").split("\n"))
    _append(f"{_header(context)} {exc_type.__name__}: {_one_line(str(exc))}\n{indented}", log_path)
