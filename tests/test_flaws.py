"""
Flaw Injection Tests

Quality degradation and named flaws applied to freshly assembled candidates.

Run with: pytest tests/test_flaws.py -v
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import random
from datetime import date, timedelta

from candidates.archetypes import PROBLEMATIC_ARCHETYPES
from candidates.assembler import assemble_candidate
from candidates.candidate_schema import CandidateGenerationParams, QualityLevel
from candidates.flaws import (
    FLAW_LIBRARY,
    RED_FLAGS_TAG,
    SCORE_GROUPS,
    FlawType,
    apply_flaw,
    apply_flaws,
    auto_select_flaws,
    degrade_by_quality,
    inject_quality,
    list_flaws,
)

TODAY = date(2025, 6, 1)


def fresh_candidate(seed: int = 1, **params):
    return assemble_candidate(CandidateGenerationParams(**params), random.Random(seed), TODAY)


def all_scores(candidate) -> dict:
    scores = candidate.interview_performance.simulated_interview_scores
    return {
        f"{group}.{name}": value
        for group in SCORE_GROUPS
        for name, value in getattr(scores, group).model_dump().items()
    }


# =============================================================================
# LIBRARY
# =============================================================================

def test_library_covers_every_flaw():
    assert set(FLAW_LIBRARY) == set(FlawType)
    assert len(list_flaws()) == 12
    assert FLAW_LIBRARY[FlawType.TOXIC_PERSONALITY].severity == "severe"
    assert FLAW_LIBRARY[FlawType.SKILL_GAPS].impact.technical == 4


# =============================================================================
# SINGLE FLAWS
# =============================================================================

def test_job_hopper_history():
    for seed in range(10):
        candidate = apply_flaw(fresh_candidate(seed, experience_level="senior"), "job_hopper", random.Random(seed))
        experience = candidate.experience

        assert len(experience.previous_positions) >= 3
        assert experience.current_position.is_current_role is False
        assert experience.current_position.end_date >= date.today() - timedelta(days=90)
        assert candidate.has_tag("job_hopper")
        assert "History of frequent job changes" in candidate.interview_performance.potential_red_flags

        starts = [p.start_date for p in experience.previous_positions]
        assert starts == sorted(starts, reverse=True)


def test_unknown_flaw_is_a_no_op():
    candidate = fresh_candidate(4)
    before = candidate.model_dump()

    apply_flaw(candidate, "chronic_lateness", random.Random(0))

    assert candidate.model_dump() == before


def test_flaw_sets_fields_and_tags():
    candidate = apply_flaw(fresh_candidate(2), FlawType.TOXIC_PERSONALITY, random.Random(0))

    assert 10 <= candidate.personality.agreeableness <= 30
    assert 70 <= candidate.personality.neuroticism <= 90
    assert candidate.work_behavior.conflict_resolution_style == "competing"
    assert candidate.has_tag("toxic_personality")


def test_skill_gaps_strip_skills():
    candidate = apply_flaw(fresh_candidate(3), "skill_gaps", random.Random(0))
    skills = candidate.technical_skills

    assert len(skills.programming_languages) == 1
    assert skills.frameworks_and_tools == []
    assert skills.system_design.cloud_native <= 2


def test_score_impact_is_applied_and_floored():
    candidate = fresh_candidate(6)
    before = all_scores(candidate)

    apply_flaw(candidate, "skill_gaps", random.Random(0))
    after = all_scores(candidate)

    for name, value in before.items():
        if name.startswith("technical."):
            assert after[name] == max(1, value - 4), name
        else:
            assert after[name] == value, name


def test_unreliable_adds_an_employment_gap():
    for seed in range(40):
        candidate = fresh_candidate(seed, experience_level="principal")
        count = len(candidate.experience.previous_positions)
        apply_flaw(candidate, "unreliable", random.Random(seed))

        titles = [p.title for p in candidate.experience.previous_positions]
        if count > 1:
            assert titles[-1] == "Gap in Employment"
            assert len(titles) == count + 1
        else:
            assert "Gap in Employment" not in titles


def test_apply_flaws_records_notes():
    candidate = apply_flaws(fresh_candidate(8), ["lazy_worker", "not_a_flaw", "attention_issues"], random.Random(0))

    assert candidate.has_tag(RED_FLAGS_TAG)
    assert candidate.has_tag("lazy_worker")
    assert candidate.has_tag("attention_issues")
    assert not candidate.has_tag("not_a_flaw")
    assert candidate.metadata.notes == "Candidate has concerning traits: lazy_worker, attention_issues"


def test_apply_flaws_with_only_unknown_names():
    candidate = apply_flaws(fresh_candidate(8), ["not_a_flaw"], random.Random(0))

    assert not candidate.has_tag(RED_FLAGS_TAG)
    assert candidate.metadata.notes is None


# =============================================================================
# QUALITY
# =============================================================================

def test_degradation_is_monotonic():
    ordered = [
        QualityLevel.EXCELLENT, QualityLevel.GOOD, QualityLevel.AVERAGE,
        QualityLevel.POOR, QualityLevel.TERRIBLE,
    ]
    for seed in range(10):
        degraded = [all_scores(degrade_by_quality(fresh_candidate(seed), level, random.Random(0))) for level in ordered]
        for better, worse in zip(degraded, degraded[1:]):
            for name in better:
                assert worse[name] <= better[name], f"{name} rose from {better[name]} to {worse[name]}"
                assert 1 <= worse[name] <= 10


def test_excellent_keeps_scores():
    candidate = fresh_candidate(12)
    before = all_scores(candidate)

    degrade_by_quality(candidate, "excellent", random.Random(0))

    assert all_scores(candidate) == before


def test_poor_quality_swaps_in_a_problematic_archetype():
    candidate = degrade_by_quality(fresh_candidate(5), "poor", random.Random(0))

    matches = [
        key for key, archetype in PROBLEMATIC_ARCHETYPES.items()
        if archetype.traits == candidate.personality and candidate.has_tag(key)
    ]
    assert len(matches) == 1
    assert candidate.work_behavior == PROBLEMATIC_ARCHETYPES[matches[0]].behavior


def test_auto_selected_flaw_counts():
    expected = {"excellent": 0, "good": 0, "average": 1, "poor": 2, "terrible": 4}
    for level, count in expected.items():
        for seed in range(5):
            flaws = auto_select_flaws(level, random.Random(seed))
            assert len(flaws) == count
            assert len(set(flaws)) == count


def test_terrible_candidate():
    candidate = inject_quality(fresh_candidate(21, experience_level="entry"), "terrible", rng=random.Random(21))

    flaw_tags = [flaw.value for flaw in FlawType if candidate.has_tag(flaw.value)]
    assert len(flaw_tags) >= 4
    assert candidate.has_tag("terrible")
    assert candidate.has_tag(RED_FLAGS_TAG)
    assert candidate.interview_performance.potential_red_flags
    assert all(value <= 2 for value in all_scores(candidate).values())


def test_explicit_flaws_override_auto_selection():
    candidate = inject_quality(fresh_candidate(30), "average", ["arrogant_attitude"], random.Random(0))

    applied = [flaw.value for flaw in FlawType if candidate.has_tag(flaw.value)]
    assert applied == ["arrogant_attitude"]
    assert candidate.has_tag("average")


def test_unknown_flaw_names_keep_auto_selection():
    auto = inject_quality(fresh_candidate(3), "terrible", rng=random.Random(3))
    typo = inject_quality(fresh_candidate(3), "terrible", ["typo"], random.Random(3))

    assert len(auto.metadata.flaws) == 4
    assert typo.metadata.flaws == auto.metadata.flaws
    assert typo.has_tag(RED_FLAGS_TAG)
    assert all_scores(typo) == all_scores(auto)


def test_metadata_records_quality_and_flaws():
    candidate = inject_quality(fresh_candidate(9), "average", ["lazy_worker", "not_a_flaw"], random.Random(0))

    assert candidate.metadata.quality_level == "average"
    assert candidate.metadata.flaws == ["lazy_worker"]
