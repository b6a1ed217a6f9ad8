"""
Candidate Factory Tests

Run with: pytest tests/test_factory.py -v
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import json

import pytest

from candidate_factory import (
    create_candidate,
    create_candidate_batch,
    create_candidate_pool,
    get_default_enhancer,
    list_archetypes,
    list_flaws,
    load_candidates_from_json,
    save_candidates_to_json,
)
from candidates.enhancement import AnthropicEnhancer


def test_create_candidate_is_seeded():
    first = create_candidate(seed=10, enhance=False, experience_level="senior", personality_archetype="leader")
    second = create_candidate(seed=10, enhance=False, experience_level="senior", personality_archetype="leader")

    assert first.id == second.id
    assert first.has_tag("senior")
    assert first.has_tag("leader")


def test_create_candidate_batch_with_mix():
    batch = create_candidate_batch(10, seed=1, enhance=False, max_workers=2, quality_mix="standard")

    assert len(batch) == 10
    assert all(c.has_tag("mixed-batch") for c in batch)


def test_create_candidate_pool_is_realistic():
    pool = create_candidate_pool(10, seed=3, enhance=False)

    counts = {level: sum(c.has_tag(level) for c in pool) for level in ("excellent", "good", "poor", "terrible")}
    assert counts == {"excellent": 4, "good": 3, "poor": 2, "terrible": 1}


def test_json_round_trip(tmp_path):
    candidates = create_candidate_batch(3, seed=4, enhance=False, quality_level="terrible", flaws=["job_hopper"])
    json_path = tmp_path / "out" / "candidates.json"

    save_candidates_to_json(candidates, str(json_path))
    loaded = load_candidates_from_json(str(json_path))

    assert [c.model_dump() for c in loaded] == [c.model_dump() for c in candidates]
    assert all(c.has_tag("job_hopper") for c in loaded)


def test_load_single_record(tmp_path):
    candidate = create_candidate(seed=6, enhance=False)
    json_path = tmp_path / "one.json"
    json_path.write_text(json.dumps(candidate.model_dump(mode="json")), encoding="utf-8")

    loaded = load_candidates_from_json(str(json_path))

    assert len(loaded) == 1
    assert loaded[0].id == candidate.id


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_candidates_from_json(str(tmp_path / "missing.json"))


def test_catalogues():
    archetypes = list_archetypes()
    assert len(archetypes) == 5
    assert not any(a["problematic"] for a in archetypes)
    assert len(list_archetypes(include_problematic=True)) == 10

    flaws = list_flaws()
    assert len(flaws) == 12
    assert {"type", "severity", "description", "impact"} <= set(flaws[0])
    assert flaws[0]["type"] == "skill_exaggeration"


def test_default_enhancer_follows_flag(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")

    assert get_default_enhancer(enhance=False) is None
    assert isinstance(get_default_enhancer(enhance=True), AnthropicEnhancer)
