"""
Archetype Library Tests

Run with: pytest tests/test_archetypes.py -v
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import random

import pytest

from candidates.archetypes import (
    CONSTRUCTIVE_ARCHETYPES,
    PROBLEMATIC_ARCHETYPES,
    get_archetype,
    get_problematic_archetype,
    list_archetypes,
    random_problematic_archetype,
)


def test_constructive_baselines():
    innovator = get_archetype("innovator")
    assert innovator.traits.openness == 90
    assert innovator.traits.extraversion == 75

    leader = get_archetype("leader")
    assert leader.traits.conscientiousness == 80
    assert leader.traits.neuroticism == 30


def test_unknown_archetype_falls_back_to_balanced():
    assert get_archetype("astronaut").key == "balanced"
    assert get_archetype("").key == "balanced"


def test_unknown_problematic_archetype_falls_back_to_arrogant():
    assert get_problematic_archetype("saint").key == "arrogant"
    assert get_problematic_archetype("toxic").traits.agreeableness == 15


def test_problematic_archetypes_carry_behavior_presets():
    for archetype in PROBLEMATIC_ARCHETYPES.values():
        assert archetype.behavior is not None, f"{archetype.key} has no behavior preset"

    for archetype in CONSTRUCTIVE_ARCHETYPES.values():
        assert archetype.behavior is None


def test_random_problematic_is_reproducible():
    picks_a = [random_problematic_archetype(random.Random(seed)).key for seed in range(20)]
    picks_b = [random_problematic_archetype(random.Random(seed)).key for seed in range(20)]

    assert picks_a == picks_b
    assert set(picks_a) <= set(PROBLEMATIC_ARCHETYPES)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        CONSTRUCTIVE_ARCHETYPES["rockstar"] = get_archetype("balanced")


def test_list_archetypes():
    assert [a.key for a in list_archetypes()] == [
        "balanced", "innovator", "specialist", "leader", "collaborator",
    ]
    assert len(list_archetypes(problematic=True)) == 5
