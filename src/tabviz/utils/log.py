import os
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

DEFAULT_LOG_PATH = Path(os.environ.get("TABVIZ_LOG_PATH") or (Path.home() / "TabViz_error.log"))


def _one_line(value: Any, max_len: int = 800) -> str:
    """Render a CLI argument, row index or message as one bounded log field."""
    try:
        text = str(value)
    except Exception:
        text = repr(value)
    text = text.replace("\r", "\\r").replace("\n", "\\n")
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def _write(log_path: Path, text: str) -> None:
    try:
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(text)
    except Exception:
        # Never crash a render because the log file is unwritable
        pass


def _line(stamp: str, context: str, message: Any) -> str:
    return f"{stamp}  |  {context}  |  {_one_line(message)}\n"


def log_event(context: str, message: str, log_path: Path = DEFAULT_LOG_PATH) -> None:
    """Record a load or render step, e.g. ``log_event("load", "tumors.csv: 3 row(s)")``."""
    _write(log_path, _line(datetime.now().isoformat(), context, message))


def log_events(context: str, messages: Iterable[Any], log_path: Path = DEFAULT_LOG_PATH) -> int:
    """Record one line per item (such as skipped rows) under a shared timestamp; returns the count."""
    stamp = datetime.now().isoformat()
    lines = [_line(stamp, context, m) for m in messages]
    if lines:
        _write(log_path, "".join(lines))
    return len(lines)


def log_exception(context: str, log_path: Path = DEFAULT_LOG_PATH) -> None:
    """Record the failing CLI command and the traceback being handled."""
    header = "\n\n" + "=" * 80 + f"\n{datetime.now().isoformat()}  |  {context}\n"
    _write(log_path, header + traceback.format_exc())
