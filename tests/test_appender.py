import csv
import io
import threading

import pytest

from app.appender import append_row, format_header, format_row

COLUMNS = ("Event Name", "College", "Phone")


def test_format_row_quotes_every_field():
    assert format_row(["a", "", 5]) == '"a","","5"\n'


def test_quote_escaping_round_trip():
    value = 'College: Joe\'s "Best" College'
    line = format_row([value])
    assert line == '"College: Joe\'s ""Best"" College"\n'
    assert next(csv.reader(io.StringIO(line))) == [value]


def test_header_is_bare():
    assert format_header(COLUMNS) == "Event Name,College,Phone\n"


def test_header_written_once(tmp_path):
    path = tmp_path / "logs" / "event.csv"
    first = append_row(path, COLUMNS, ["E", "C1", "1"])
    header_bytes = path.read_bytes().split(b"\n")[0]

    second = append_row(path, COLUMNS, ["E", "C2", "2"])
    assert first == second == str(path.resolve())

    content = path.read_text(encoding="utf-8")
    assert content == (
        "Event Name,College,Phone\n"
        '"E","C1","1"\n'
        '"E","C2","2"\n'
    )
    assert path.read_bytes().split(b"\n")[0] == header_bytes


def test_existing_file_is_only_appended(tmp_path):
    path = tmp_path / "event.csv"
    path.write_text("Old,Header\n", encoding="utf-8")
    append_row(path, COLUMNS, ["a", "b", "c"])
    assert path.read_text(encoding="utf-8") == 'Old,Header\n"a","b","c"\n'


def test_row_length_mismatch(tmp_path):
    with pytest.raises(ValueError):
        append_row(tmp_path / "x.csv", COLUMNS, ["only one"])
    assert not (tmp_path / "x.csv").exists()


def test_unicode_is_written_as_utf8(tmp_path):
    path = tmp_path / "u.csv"
    append_row(path, ("Name",), ["Ānanya"])
    assert path.read_bytes() == 'Name\n"Ānanya"\n'.encode("utf-8")


def test_io_error_propagates(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not dir")
    with pytest.raises(OSError):
        append_row(blocker / "event.csv", COLUMNS, ["a", "b", "c"])


def test_concurrent_appends_write_one_header(tmp_path):
    path = tmp_path / "busy.csv"
    start = threading.Barrier(8)

    def worker(n):
        start.wait()
        for i in range(25):
            append_row(path, COLUMNS, [f"w{n}", str(i), "x" * 50])

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    with open(path, newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    assert rows[0] == list(COLUMNS)
    assert len(rows) == 1 + 8 * 25
    assert all(len(r) == 3 for r in rows[1:])
    assert list(COLUMNS) not in rows[1:]


def test_unencodable_value_leaves_no_file(tmp_path):
    path = tmp_path / "event.csv"
    with pytest.raises(UnicodeEncodeError):
        append_row(path, ("Name", "College"), ["\ud800", "x"])
    assert not path.exists()

    append_row(path, ("Name", "College"), ["ok", "x"])
    assert path.read_text(encoding="utf-8") == 'Name,College\n"ok","x"\n'


def test_unencodable_value_on_existing_file_appends_nothing(tmp_path):
    path = tmp_path / "event.csv"
    append_row(path, ("Name",), ["first"])
    before = path.read_bytes()

    with pytest.raises(UnicodeEncodeError):
        append_row(path, ("Name",), ["bad \udcff"])
    assert path.read_bytes() == before
