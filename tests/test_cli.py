"""Tests for the ``splitbox`` command line (in-process, via ``main``)."""

from __future__ import annotations

import io
import json
import zipfile
from pathlib import Path

import pytest

from splitbox.__main__ import main
from splitbox.utils.exit_codes import ExitCode


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    p = tmp_path / "items.txt"
    p.write_text("alpha\nbeta\n\ngamma\nbeta\nbad value\n", encoding="utf-8")
    return p


class TestSplitCommand:
    """``splitbox split``"""

    def test_prints_every_batch(self, input_file, capsys) -> None:
        rc = main(["split", str(input_file), "--delimiter", "newline", "--value", "2", "--in-process"])
        assert rc == ExitCode.SUCCESS
        out = capsys.readouterr().out
        assert "== Batch 1 (2 items) ==\nalpha\nbeta\n" in out
        assert "== Batch 2 (2 items) ==\ngamma\nbeta\n" in out
        assert "== Batch 3 (1 item) ==\nbad value\n" in out

    def test_summary_on_stderr(self, input_file, capsys) -> None:
        main(["split", str(input_file), "--delimiter", "newline", "--dedupe", "case_sensitive", "--in-process"])
        err = capsys.readouterr().err
        assert "Prepared 4 item(s) from 7 token(s) into 1 batch(es)" in err
        assert "empty=2, invalid=0, duplicates=1" in err

    def test_json_output(self, input_file, capsys) -> None:
        rc = main(
            [
                "split", str(input_file),
                "--delimiter", "newline",
                "--validation", "alphanumeric",
                "--mode", "target_group_count",
                "--value", "2",
                "--json", "--in-process",
            ]
        )
        assert rc == ExitCode.SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert [g["items"] for g in data["groups"]] == [["alpha", "beta"], ["gamma", "beta"]]
        assert data["stats"]["invalidExamples"] == ["bad value"]

    def test_single_batch_with_template(self, input_file, capsys) -> None:
        rc = main(
            [
                "split", str(input_file),
                "--delimiter", "newline",
                "--value", "2",
                "--batch", "2",
                "--template", "sql_in",
                "--in-process",
            ]
        )
        assert rc == ExitCode.SUCCESS
        assert capsys.readouterr().out == "('gamma', 'beta')\n"

    def test_batch_out_of_range(self, input_file, capsys) -> None:
        rc = main(["split", str(input_file), "--value", "100", "--batch", "3", "--in-process"])
        assert rc == ExitCode.ERROR
        assert "--batch must be between 1 and 1" in capsys.readouterr().err

    def test_batch_zero_is_out_of_range(self, input_file, capsys) -> None:
        rc = main(["split", str(input_file), "--value", "1", "--batch", "0", "--in-process"])
        assert rc == ExitCode.ERROR
        assert "--batch must be between 1 and" in capsys.readouterr().err

    def test_input_not_utf8(self, tmp_path, capsys) -> None:
        p = tmp_path / "latin.txt"
        p.write_bytes(b"ok\n\xff\xfe\n")
        rc = main(["split", str(p), "--in-process"])
        assert rc == ExitCode.ERROR
        assert "input is not valid UTF-8" in capsys.readouterr().err

    def test_out_file(self, input_file, tmp_path) -> None:
        out = tmp_path / "batch.txt"
        rc = main(
            [
                "split", str(input_file),
                "--delimiter", "newline",
                "--template", "plain",
                "--output-delimiter", "comma",
                "--out", str(out),
                "--in-process",
            ]
        )
        assert rc == ExitCode.SUCCESS
        assert out.read_text(encoding="utf-8") == "alpha,beta,gamma,beta,bad value"

    def test_strict_fails_on_invalid_items(self, input_file) -> None:
        rc = main(
            ["split", str(input_file), "--delimiter", "newline", "--validation", "alphanumeric", "--strict", "--in-process"]
        )
        assert rc == ExitCode.VIOLATION

    def test_strict_passes_when_all_valid(self, tmp_path) -> None:
        p = tmp_path / "ok.txt"
        p.write_text("a\nb", encoding="utf-8")
        rc = main(["split", str(p), "--validation", "alphanumeric", "--strict", "--in-process"])
        assert rc == ExitCode.SUCCESS

    def test_invalid_value_reports_worker_error(self, input_file, capsys) -> None:
        rc = main(["split", str(input_file), "--value", "0", "--in-process"])
        assert rc == ExitCode.ERROR
        assert "error: value must be a positive integer" in capsys.readouterr().err

    def test_missing_custom_pattern(self, input_file, capsys) -> None:
        rc = main(["split", str(input_file), "--validation", "custom_regex", "--in-process"])
        assert rc == ExitCode.ERROR
        assert "custom_pattern is required" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, capsys) -> None:
        rc = main(["split", str(tmp_path / "nope.txt"), "--in-process"])
        assert rc == ExitCode.ERROR
        assert "input file does not exist" in capsys.readouterr().err

    def test_reads_stdin(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("x,y,z"))
        rc = main(["split", "--value", "2", "--json", "--in-process"])
        assert rc == ExitCode.SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert [g["items"] for g in data["groups"]] == [["x", "y"], ["z"]]

    def test_worker_process(self, input_file, capsys) -> None:
        rc = main(["split", str(input_file), "--delimiter", "newline", "--json"])
        assert rc == ExitCode.SUCCESS
        assert len(json.loads(capsys.readouterr().out)["groups"]) == 1


class TestPresets:
    """``--preset`` supplies defaults; flags win."""

    def test_preset_values_apply(self, input_file, tmp_path, capsys) -> None:
        preset = tmp_path / "preset.yaml"
        preset.write_text(
            "delimiter: newline\nmode: target_group_count\nvalue: 2\noutput-delimiter: comma\n",
            encoding="utf-8",
        )
        rc = main(["split", str(input_file), "--preset", str(preset), "--in-process"])
        assert rc == ExitCode.SUCCESS
        out = capsys.readouterr().out
        assert "alpha,beta,gamma" in out

    def test_flags_override_preset(self, input_file, tmp_path, capsys) -> None:
        preset = tmp_path / "preset.yaml"
        preset.write_text("delimiter: newline\nvalue: 1\n", encoding="utf-8")
        rc = main(["split", str(input_file), "--preset", str(preset), "--value", "10", "--json", "--in-process"])
        assert rc == ExitCode.SUCCESS
        assert len(json.loads(capsys.readouterr().out)["groups"]) == 1

    def test_unknown_preset_key(self, input_file, tmp_path, capsys) -> None:
        preset = tmp_path / "preset.yaml"
        preset.write_text("colour: blue\n", encoding="utf-8")
        rc = main(["split", str(input_file), "--preset", str(preset), "--in-process"])
        assert rc == ExitCode.ERROR
        assert "unknown keys: colour" in capsys.readouterr().err


class TestExportCommand:
    """``splitbox export``"""

    def test_out_dir(self, input_file, tmp_path, capsys) -> None:
        out_dir = tmp_path / "out"
        rc = main(
            [
                "export", str(input_file),
                "--delimiter", "newline",
                "--value", "2",
                "--template", "json_array",
                "--out-dir", str(out_dir),
                "--ci", "--in-process",
            ]
        )
        assert rc == ExitCode.SUCCESS
        assert sorted(p.name for p in out_dir.iterdir()) == [
            "batch-1.json", "batch-2.json", "batch-3.json", "manifest.json",
        ]
        manifest = json.loads((out_dir / "manifest.json").read_text(encoding="utf-8"))
        assert manifest["createdAt"] == "2000-01-01T00:00:00+00:00"
        assert manifest["totalItems"] == 5
        assert "Exported 3 batch file(s)" in capsys.readouterr().err

    def test_zip_into_directory_gets_generated_name(self, input_file, tmp_path) -> None:
        rc = main(
            ["export", str(input_file), "--delimiter", "newline", "--zip", str(tmp_path), "--ci", "--in-process"]
        )
        assert rc == ExitCode.SUCCESS
        with zipfile.ZipFile(tmp_path / "splitbox-batches-0.zip") as zf:
            assert zf.namelist() == ["batch-1.txt", "manifest.json"]

    def test_zip_path(self, input_file, tmp_path) -> None:
        target = tmp_path / "batches.zip"
        rc = main(["export", str(input_file), "--value", "3", "--zip", str(target), "--in-process"])
        assert rc == ExitCode.SUCCESS
        assert target.is_file()

    def test_requires_a_target(self, input_file) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["export", str(input_file)])
        assert exc.value.code == 2


class TestValidateCommand:
    """``splitbox validate``"""

    def test_ok(self, tmp_path, capsys) -> None:
        p = tmp_path / "resp.json"
        p.write_text(json.dumps({"error": "boom"}), encoding="utf-8")
        assert main(["validate", str(p), "split_response.schema.json"]) == ExitCode.SUCCESS
        assert capsys.readouterr().out.strip() == "OK"

    def test_violation(self, tmp_path, capsys) -> None:
        p = tmp_path / "req.json"
        p.write_text(json.dumps({"rawInput": "a"}), encoding="utf-8")
        assert main(["validate", str(p), "split_request.schema.json"]) == ExitCode.VIOLATION
        assert capsys.readouterr().err.startswith("FAIL:")

    def test_unknown_schema(self, tmp_path, capsys) -> None:
        p = tmp_path / "x.json"
        p.write_text("{}", encoding="utf-8")
        assert main(["validate", str(p), "nope.schema.json"]) == ExitCode.ERROR
        assert "schema not found" in capsys.readouterr().err

    def test_unreadable_instance(self, tmp_path) -> None:
        assert main(["validate", str(tmp_path / "missing.json"), "split_request.schema.json"]) == ExitCode.ERROR


def test_no_subcommand(capsys) -> None:
    assert main([]) == ExitCode.ERROR
    assert "please choose a subcommand" in capsys.readouterr().err
