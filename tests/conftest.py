"""Shared fixtures for the simulator test suite."""

import json

import pytest

from meter_sim.config import SimulationConfig
from meter_sim.types import LootEntry, SimulationResult


# ------------------------------------------------------------------
# Sample catalog – small enough to simulate in well under a second
# ------------------------------------------------------------------

SAMPLE_DUMP = {
    "catacombs_f7": [
        {"displayName": "Necron's Handle", "id": "NECRON_HANDLE", "chance": 0.05, "maxScore": 2800000},
        {"displayName": "Recombobulator 3000", "id": "RECOMBOBULATOR_3000", "chance": 1.0, "maxScore": 1000},
    ],
    "catacombs_f5": [
        {"displayName": "Shadow Fury", "id": "SHADOW_FURY", "chance": 0.05, "maxScore": 1890},
    ],
    "entrance": [],
}


@pytest.fixture
def sample_dump():
    return json.loads(json.dumps(SAMPLE_DUMP))


@pytest.fixture
def dump_file(tmp_path, sample_dump):
    """Sample catalog written to a temporary dump.json."""
    path = tmp_path / "dump.json"
    path.write_text(json.dumps(sample_dump))
    return path


@pytest.fixture
def fast_config():
    """Small, seeded, single-process run."""
    return SimulationConfig(n_trials=20_000, chunk_size=7_000, seed=42, max_workers=1)


def make_result(**overrides):
    defaults = {
        "display_name": "Giant's Sword",
        "id": "GIANTS_SWORD",
        "max_score": 900000.0,
        "base_chance": 0.1,
        "meter_s_chance": 0.1001,
        "meter_s_plus_chance": 0.1002,
        "base_reroll_chance": 0.19,
        "base_reroll_amount_per_drop": 4.7,
        "meter_s_reroll_chance": 0.1901,
        "meter_s_reroll_amount_per_drop": 4.69,
        "meter_s_plus_reroll_chance": 0.1902,
        "meter_s_plus_reroll_amount_per_drop": 4.68,
    }
    defaults.update(overrides)
    return SimulationResult(**defaults)


@pytest.fixture
def result_catalog():
    return {
        "catacombs_f6": [
            make_result(),
            make_result(
                display_name="Ancient Rose",
                id="ANCIENT_ROSE",
                base_chance=0.0,
                meter_s_chance=0.0,
                base_reroll_chance=0.0,
                base_reroll_amount_per_drop=float("nan"),
            ),
        ],
        "entrance": [],
    }


@pytest.fixture
def certain_entry():
    return LootEntry(display_name="Recombobulator 3000", id="RECOMBOBULATOR_3000",
                     base_chance=1.0, max_score=1000.0)
