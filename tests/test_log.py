from tabviz.utils.log import log_event, log_events, log_exception


def test_log_event_is_single_line(tmp_path):
    path = tmp_path / "app.log"
    log_event("load", "two\nlines", log_path=path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert lines[0].endswith("|  load  |  two\\nlines")


def test_log_events_counts(tmp_path):
    path = tmp_path / "app.log"
    assert log_events("skip", [3, 7], log_path=path) == 2
    assert log_events("skip", [], log_path=path) == 0
    assert len(path.read_text(encoding="utf-8").splitlines()) == 2


def test_log_exception_writes_traceback(tmp_path):
    path = tmp_path / "app.log"
    try:
        raise KeyError("boom")
    except KeyError:
        log_exception("render", log_path=path)
    text = path.read_text(encoding="utf-8")
    assert "render" in text
    assert "KeyError: 'boom'" in text


def test_unwritable_log_is_ignored(tmp_path):
    log_event("load", "fine", log_path=tmp_path / "missing" / "app.log")
