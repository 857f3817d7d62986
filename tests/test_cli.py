"""Tests for the command-line interface."""

import json

from click.testing import CliRunner

from meter_sim.cli import main


def _invoke(tmp_path, *extra):
    args = [
        "--output", str(tmp_path / "out.json"),
        "--pretty-output", str(tmp_path / "out_pretty.json"),
        "--n-trials", "2000",
        "--seed", "1",
        "--workers", "1",
        "--quiet",
    ]
    return CliRunner().invoke(main, args + list(extra))


class TestCli:
    def test_full_run(self, tmp_path, dump_file):
        result = _invoke(tmp_path, "--input", str(dump_file))
        assert result.exit_code == 0, result.output
        written = json.loads((tmp_path / "out.json").read_text())
        assert set(written) == {"catacombs_f7", "catacombs_f5", "entrance"}
        assert (tmp_path / "out_pretty.json").exists()

    def test_summary_csv(self, tmp_path, dump_file):
        csv_path = tmp_path / "summary.csv"
        result = _invoke(tmp_path, "--input", str(dump_file), "--summary-csv", str(csv_path))
        assert result.exit_code == 0, result.output
        assert csv_path.exists()

    def test_sim_config_file(self, tmp_path, dump_file):
        sim_config = tmp_path / "sim.json"
        sim_config.write_text(json.dumps({"s_plus_run_score": 500.0}))
        result = _invoke(tmp_path, "--input", str(dump_file), "--sim-config", str(sim_config))
        assert result.exit_code == 0, result.output
        assert "S+ run score: 500" in result.output

    def test_missing_input_fails(self, tmp_path):
        result = _invoke(tmp_path, "--input", str(tmp_path / "missing.json"))
        assert result.exit_code == 1
        assert "not found" in result.output
        assert not (tmp_path / "out.json").exists()

    def test_malformed_input_fails(self, tmp_path):
        dump = tmp_path / "dump.json"
        dump.write_text(json.dumps({"f1": [{"displayName": "X", "id": "X", "chance": 0.1, "maxScore": 0}]}))
        result = _invoke(tmp_path, "--input", str(dump))
        assert result.exit_code == 1
        assert "maxScore must be positive" in result.output

    def test_rejects_non_positive_trials(self, tmp_path, dump_file):
        result = CliRunner().invoke(main, ["--input", str(dump_file), "--n-trials", "0"])
        assert result.exit_code == 2

    def test_malformed_sim_config_fails(self, tmp_path, dump_file):
        sim_config = tmp_path / "sim.json"
        sim_config.write_text(json.dumps({"seed": "abc"}))
        result = _invoke(tmp_path, "--input", str(dump_file), "--sim-config", str(sim_config))
        assert result.exit_code == 1
        assert "Invalid simulation config" in result.output
        assert not (tmp_path / "out.json").exists()
