from cavitation_checker.analysis import analyze
from cavitation_checker.data_model import Record
from cavitation_checker.report import (
    error_message,
    format_record_row,
    format_table,
    load_message,
    summary_lines,
    table_headers,
)


def test_table_headers():
    assert table_headers() == [
        "Temperature (°C)",
        "Pressure (bar)",
        "Flow (m3/h)",
        "NPSHr (m)",
        "NPSHa (m)",
        "Status",
    ]


def test_format_record_row_uses_fixed_decimals():
    record = Record(20.04, 5.0, 100.0, 10.0, 12.3, True)
    assert format_record_row(record) == ["20.0", "5.00", "100.0", "10.00", "12.30", "✅ OK"]


def test_format_record_row_risk_label():
    record = Record(60.0, 1.25, 85.5, 4.1, 3.9, False)
    row = format_record_row(record)
    assert row[1] == "1.25"
    assert row[-1] == "⚠️ Cavitation Risk"


def test_summary_lines(mixed_csv):
    lines = summary_lines(analyze(mixed_csv))
    assert lines == [
        "Total records:    2",
        "Safe:             1",
        "Cavitation risk:  1",
        "Risk percentage:  50.0%",
    ]


def test_summary_mentions_curve(sectioned_csv):
    lines = summary_lines(analyze(sectioned_csv))
    assert len(lines) == 5
    assert lines[-1].startswith("NPSHr curve:      2 points")


def test_format_table(mixed_csv):
    text = format_table(analyze(mixed_csv))
    lines = text.splitlines()
    assert len(lines) == 4
    assert lines[0].startswith("Temperature (°C)")
    assert "Cavitation Risk" in lines[3]


def test_format_table_without_records():
    from cavitation_checker.data_model import AnalysisResult

    lines = format_table(AnalysisResult()).splitlines()
    assert len(lines) == 2


def test_banner_messages(mixed_csv):
    result = analyze(mixed_csv)
    assert load_message(result, "pump.csv") == "Successfully loaded 2 records from pump.csv"
    assert load_message(result) == "Successfully loaded 2 records"
    assert error_message(FileNotFoundError("no such file")) == "Error reading file: no such file"
