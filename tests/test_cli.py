import io

from radar_plotter.app import main

SCENARIO = "Model\tA\tB\nX\t10\t90\nY\t20\t10\n"


def write_table(tmp_path, text=SCENARIO):
    path = tmp_path / "table.tsv"
    path.write_text(text, encoding="utf-8")
    return path


def test_prints_ranges_and_points(tmp_path, capsys):
    assert main([str(write_table(tmp_path)), "--integer"]) == 0
    out = capsys.readouterr().out
    assert "Ranges" in out and "Points" in out
    ranges_block = out.split("Points")[0]
    assert "30.0" in ranges_block
    assert "100.0" in ranges_block


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(SCENARIO))
    assert main(["--integer"]) == 0
    assert "Ranges" in capsys.readouterr().out


def test_manual_range_reverse_and_unit(tmp_path, capsys):
    code = main([str(write_table(tmp_path)), "--range", "A=5:50", "--reverse", "B", "--unit", "B=ms"])
    assert code == 0
    out = capsys.readouterr().out
    line_a = next(ln for ln in out.splitlines() if ln.strip().startswith("A "))
    assert "5.0" in line_a and "50.0" in line_a
    line_b = next(ln for ln in out.splitlines() if ln.strip().startswith("B "))
    assert "True" in line_b and "ms" in line_b


def test_unparseable_input_exits_2(tmp_path, capsys, log_file):
    assert main([str(write_table(tmp_path, "just a header"))]) == 2
    assert "header row" in capsys.readouterr().err
    assert "cli.parse" in log_file.read_text(encoding="utf-8")


def test_unknown_dimension_exits_2(tmp_path, capsys):
    assert main([str(write_table(tmp_path)), "--reverse", "Nope"]) == 2
    assert "Nope" in capsys.readouterr().err


def test_missing_file_exits_1(tmp_path, capsys):
    assert main([str(tmp_path / "missing.tsv")]) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_non_utf8_file_exits_1(tmp_path, capsys, log_file):
    path = tmp_path / "latin.csv"
    path.write_bytes(b"Model,A\nX\xff,1\nY,2\n")
    assert main([str(path)]) == 1
    assert "Cannot read" in capsys.readouterr().err
    assert "cli.read_input" in log_file.read_text(encoding="utf-8")
