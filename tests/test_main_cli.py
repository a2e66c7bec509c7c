import json

import pytest

from cavitation_checker.__main__ import build_parser, main, run_headless


def _run(argv):
    return run_headless(build_parser().parse_args(argv))


def test_headless_summary(write_csv, mixed_csv, capsys):
    path = write_csv(mixed_csv, name="log.csv")
    assert _run([path]) == 0
    out = capsys.readouterr().out
    assert "Successfully loaded 2 records from log.csv" in out
    assert "Risk percentage:  50.0%" in out
    assert "Cavitation Risk" in out


def test_headless_exports(write_csv, mixed_csv, tmp_path, capsys):
    path = write_csv(mixed_csv)
    png = tmp_path / "chart.png"
    out_csv = tmp_path / "records.csv"
    assert _run([path, "--png", str(png), "--csv", str(out_csv)]) == 0
    assert png.read_bytes()[:4] == b"\x89PNG"
    assert out_csv.read_text(encoding="utf-8").startswith("Temperature (°C)")
    out = capsys.readouterr().out
    assert "Chart written to" in out
    assert "Records written to" in out


def test_headless_missing_file(tmp_path, capsys):
    assert _run([str(tmp_path / "missing.csv")]) == 1
    assert capsys.readouterr().err.startswith("Error reading file:")


def test_headless_format_error(write_csv, capsys):
    path = write_csv("Temperature,Pressure,Flow,NPSHr,NPSHa\n")
    assert _run([path]) == 1
    assert "at least a header" in capsys.readouterr().err


def test_headless_no_valid_rows(write_csv, capsys):
    path = write_csv("Temperature,Pressure,Flow,NPSHr,NPSHa\n20,5,N/A,10,12\n")
    assert _run([path]) == 0
    assert "No valid data found in the CSV file." in capsys.readouterr().out


def test_headless_verbose_lists_skipped_rows(write_csv, capsys):
    path = write_csv("Temperature,Pressure,Flow,NPSHr,NPSHa\n20,5,100\n30,5,100,10,12\n")
    assert _run([path, "--verbose"]) == 0
    assert "skipped [data] line 2: expected 5 fields, found 3" in capsys.readouterr().err


def test_headless_curve_warning_and_strict(write_csv, capsys):
    path = write_csv(
        "#operating data\nTemperature,Pressure,Flow,NPSHr,NPSHa\n20,5,100,10,12\n"
        "#npshr curve\nPoint,Head\n1,2\n"
    )
    assert _run([path]) == 0
    assert "Warning: NPSHr curve section" in capsys.readouterr().err

    assert _run([path, "--strict-curve"]) == 1
    assert "Error reading file: NPSHr curve section" in capsys.readouterr().err


def test_headless_envelope_json(write_csv, mixed_csv, tmp_path, capsys):
    env = tmp_path / "envelope.json"
    env.write_text(json.dumps({"pump_type": "BB2", "rated_flow": 500}), encoding="utf-8")
    assert _run([write_csv(mixed_csv), "--envelope-json", str(env)]) == 0
    assert "Rated flow should lie inside the POR." in capsys.readouterr().err

    env.write_text(json.dumps({"aor_min": "low"}), encoding="utf-8")
    assert _run([write_csv(mixed_csv), "--envelope-json", str(env)]) == 2
    assert "Invalid pump envelope" in capsys.readouterr().err


def test_main_exits_with_status(write_csv, mixed_csv):
    with pytest.raises(SystemExit) as excinfo:
        main([write_csv(mixed_csv)])
    assert excinfo.value.code == 0


def test_headless_png_into_new_directory(write_csv, mixed_csv, tmp_path):
    png = tmp_path / "reports" / "chart.png"
    assert _run([write_csv(mixed_csv), "--png", str(png)]) == 0
    assert png.read_bytes()[:4] == b"\x89PNG"


def test_headless_export_failure_is_reported(write_csv, mixed_csv, tmp_path, capsys):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    out_csv = blocker / "records.csv"
    assert _run([write_csv(mixed_csv), "--csv", str(out_csv)]) == 1
    assert "Export failed:" in capsys.readouterr().err
