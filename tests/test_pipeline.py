"""Tests for end-to-end orchestration."""

import json
import math
from dataclasses import replace

from meter_sim.data.loader import parse_catalog
from meter_sim.pipeline import build_tasks, run_pipeline, run_simulation


# ---------------------------------------------------------------------------
# Task partitioning
# ---------------------------------------------------------------------------

class TestBuildTasks:
    def test_one_task_per_entry(self, sample_dump):
        catalog = parse_catalog(sample_dump)
        tasks = build_tasks(catalog, seed=1)
        assert len(tasks) == 3
        assert [(floor, idx) for floor, idx, _, _ in tasks] == [
            ("catacombs_f7", 0), ("catacombs_f7", 1), ("catacombs_f5", 0),
        ]

    def test_streams_are_distinct(self, sample_dump):
        tasks = build_tasks(parse_catalog(sample_dump), seed=1)
        spawn_keys = {stream.spawn_key for _, _, _, stream in tasks}
        assert len(spawn_keys) == len(tasks)


# ---------------------------------------------------------------------------
# run_simulation
# ---------------------------------------------------------------------------

class TestRunSimulation:
    def test_every_entry_has_one_result(self, sample_dump, fast_config):
        catalog = parse_catalog(sample_dump)
        results = run_simulation(catalog, fast_config)

        assert set(results) == set(catalog)
        for floor, entries in catalog.items():
            assert len(results[floor]) == len(entries)
            assert [r.id for r in results[floor]] == [e.id for e in entries]

    def test_empty_floor_kept(self, sample_dump, fast_config):
        results = run_simulation(parse_catalog(sample_dump), fast_config)
        assert results["entrance"] == []

    def test_empty_catalog(self, fast_config):
        assert run_simulation({}, fast_config) == {}

    def test_fixed_seed_is_reproducible(self, sample_dump, fast_config):
        catalog = parse_catalog(sample_dump)
        assert run_simulation(catalog, fast_config) == run_simulation(catalog, fast_config)

    def test_worker_count_does_not_change_results(self, sample_dump, fast_config):
        catalog = parse_catalog(sample_dump)
        inline = run_simulation(catalog, fast_config)
        pooled = run_simulation(catalog, replace(fast_config, max_workers=2))
        assert inline == pooled

    def test_fast_meter_beats_base(self, sample_dump, fast_config):
        results = run_simulation(parse_catalog(sample_dump), fast_config)
        shadow_fury = results["catacombs_f5"][0]
        assert shadow_fury.meter_s_chance > shadow_fury.base_chance
        assert shadow_fury.meter_s_plus_chance > shadow_fury.meter_s_chance


# ---------------------------------------------------------------------------
# run_pipeline
# ---------------------------------------------------------------------------

class TestRunPipeline:
    def test_writes_both_documents(self, tmp_path, dump_file, fast_config):
        out = tmp_path / "out.json"
        pretty = tmp_path / "out_pretty.json"
        results = run_pipeline(str(dump_file), str(out), str(pretty), fast_config)

        compact = json.loads(out.read_text())
        assert compact == json.loads(pretty.read_text())
        assert set(compact) == set(results)
        assert compact["catacombs_f7"][1]["id"] == "RECOMBOBULATOR_3000"
        assert compact["catacombs_f7"][1]["meter_s_plus_reroll_amount_per_drop"] == 0.0

    def test_optional_summary_csv(self, tmp_path, dump_file, fast_config):
        csv_path = tmp_path / "summary.csv"
        run_pipeline(
            str(dump_file), str(tmp_path / "out.json"), str(tmp_path / "out_pretty.json"),
            fast_config, summary_csv_path=str(csv_path)
        )
        assert csv_path.exists()
        assert len(csv_path.read_text().strip().splitlines()) == 4  # header + 3 entries

    def test_zero_chance_written_as_null(self, tmp_path, fast_config):
        dump = tmp_path / "dump.json"
        dump.write_text(json.dumps({
            "f1": [{"displayName": "Ancient Rose", "id": "ANCIENT_ROSE", "chance": 0, "maxScore": 1e18}]
        }))
        out = tmp_path / "out.json"
        results = run_pipeline(str(dump), str(out), str(tmp_path / "pretty.json"), fast_config)

        assert math.isnan(results["f1"][0].base_reroll_amount_per_drop)
        written = json.loads(out.read_text())["f1"][0]
        assert written["base_reroll_amount_per_drop"] is None
        assert written["base_reroll_chance"] == 0.0
