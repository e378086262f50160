"""Tests for the command-line entry point."""

import json

import pandas as pd

from orgaudit.run import main


def _roster(write_roster):
    return write_roster(
        "100,CEO,Boss,100000,",
        "101,Manager,A,47000,100",
        "102,Subordinate,X,40000,101",
        "103,Subordinate,Y,40000,101",
    )


def test_text_output(write_roster, capsys):
    exit_code = main([str(_roster(write_roster))])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "Successfully loaded 4 employees." in out
    assert "--- Manager Salary Analysis ---" in out
    assert "Manager A (ID: 101) earns less than they should." in out
    assert "No excessively long reporting lines found." in out


def test_json_output(write_roster, capsys):
    exit_code = main([str(_roster(write_roster)), "--format", "json"])
    document = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert document["summary"]["employees"] == 4
    assert {f["manager_id"] for f in document["salary"]} == {100, 101}


def test_missing_file(tmp_path, capsys):
    exit_code = main([str(tmp_path / "missing.csv")])
    assert exit_code == 1
    assert "Error reading CSV file" in capsys.readouterr().err


def test_invalid_data(write_roster, capsys):
    path = write_roster("100,CEO,Boss,100000,", "200,CEO,Two,110000,")
    exit_code = main([str(path)])
    assert exit_code == 1
    assert "found 2" in capsys.readouterr().err


def test_config_file(write_roster, tmp_path, capsys):
    config = tmp_path / "policy.yaml"
    config.write_text("min_factor: 1.0\nmax_factor: 3.0\n")
    exit_code = main([str(_roster(write_roster)), "--config", str(config)])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "No salary discrepancies found among managers." in out


def test_bad_config(write_roster, tmp_path, capsys):
    config = tmp_path / "policy.yaml"
    config.write_text("max_depth: -2\n")
    assert main([str(_roster(write_roster)), "--config", str(config)]) == 1


def test_export(write_roster, tmp_path, capsys):
    output = tmp_path / "out" / "findings.csv"
    exit_code = main([str(_roster(write_roster)), "--output", str(output)])

    assert exit_code == 0
    frame = pd.read_csv(output)
    assert sorted(frame["manager_id"].tolist()) == [100, 101]
    assert set(frame["kind"]) == {"salary"}


def test_export_unsupported_suffix(write_roster, tmp_path, capsys):
    exit_code = main([str(_roster(write_roster)), "--output", str(tmp_path / "findings.xlsx")])
    assert exit_code == 1


def test_validate_flag(write_roster, capsys):
    assert main([str(_roster(write_roster)), "--validate"]) == 0
    assert "4 employees" in capsys.readouterr().out


def test_validate_flag_reports_errors(write_roster, capsys):
    path = write_roster("1,Ann,Lee,90000,7")
    assert main([str(path), "--validate"]) == 1


def test_export_to_unwritable_path(write_roster, tmp_path, capsys):
    blocker = tmp_path / "taken"
    blocker.write_text("not a directory")
    exit_code = main([str(_roster(write_roster)), "--output", str(blocker / "findings.csv")])

    assert exit_code == 1
    assert "Could not write findings" in capsys.readouterr().err


def test_config_with_wrong_value_type(write_roster, tmp_path, capsys):
    config = tmp_path / "policy.yaml"
    config.write_text('max_depth: "four"\n')
    exit_code = main([str(_roster(write_roster)), "--config", str(config)])

    assert exit_code == 1
    assert "max_depth must be an integer" in capsys.readouterr().err


def test_validate_flag_with_bracketed_value(write_roster, capsys):
    """Offending cell text is shown as-is in the validation table."""
    path = write_roster("1,Ann,Lee,[/],")
    assert main([str(path), "--validate"]) == 1
    assert "Malformed" in capsys.readouterr().out
