"""
Profile Assembler Tests

Run with: pytest tests/test_assembler.py -v
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import random
from datetime import date, timedelta

from candidates.archetypes import get_archetype
from candidates.assembler import YEARS_OF_EXPERIENCE, assemble_candidate
from candidates.candidate_schema import CandidateGenerationParams, ExperienceLevel
from candidates.derivation import TRAIT_JITTER

TODAY = date(2025, 6, 1)


def content(candidate) -> dict:
    """Candidate fields that do not depend on wall-clock time"""
    return candidate.model_dump(exclude={"metadata": {"date_created", "last_updated"}})


def test_same_seed_same_candidate():
    params = CandidateGenerationParams(target_role="Data Engineer", experience_level="senior")
    first = assemble_candidate(params, random.Random(123), TODAY)
    second = assemble_candidate(params, random.Random(123), TODAY)

    assert content(first) == content(second)
    assert first.id != assemble_candidate(params, random.Random(124), TODAY).id


def test_years_of_experience_match_level():
    for level in ExperienceLevel:
        low, high = YEARS_OF_EXPERIENCE[level]
        for seed in range(10):
            params = CandidateGenerationParams(experience_level=level)
            candidate = assemble_candidate(params, random.Random(seed), TODAY)
            assert low <= candidate.experience.years_of_experience <= high


def test_career_timeline_is_consistent():
    params = CandidateGenerationParams(experience_level="lead")
    for seed in range(30):
        experience = assemble_candidate(params, random.Random(seed), TODAY).experience
        current = experience.current_position

        assert current.start_date <= TODAY - timedelta(days=30)
        if current.is_current_role:
            assert current.end_date is None
        else:
            assert current.start_date <= current.end_date <= TODAY

        newer_start = current.start_date
        for position in experience.previous_positions:
            assert position.start_date < position.end_date
            assert position.end_date <= newer_start, "previous roles must not overlap"
            newer_start = position.start_date

        assert len(experience.previous_positions) <= 3
        assert current.direct_reports is not None


def test_target_role_and_industry_are_used():
    params = CandidateGenerationParams(target_role="Platform Engineer", industry_background="Gaming")
    current = assemble_candidate(params, random.Random(5), TODAY).experience.current_position

    assert current.title == "Platform Engineer"
    assert current.industry == "Gaming"


def test_location_preference():
    params = CandidateGenerationParams(location_preference="Austin, TX")
    location = assemble_candidate(params, random.Random(9), TODAY).personal_info.location

    assert location.city == "Austin"
    assert location.state == "TX"
    assert location.country == "USA"


def test_identity_and_education():
    candidate = assemble_candidate(CandidateGenerationParams(), random.Random(17), TODAY)
    info = candidate.personal_info

    assert info.first_name and info.last_name
    assert "@" in info.email
    assert candidate.full_name == f"{info.first_name} {info.last_name}"
    assert len(candidate.experience.education) == 1
    assert candidate.experience.education[0].graduation_year <= TODAY.year


def test_metadata_records_provenance():
    params = CandidateGenerationParams(
        experience_level="junior",
        personality_archetype="collaborator",
        technical_focus=["frontend"],
        custom_requirements=["remote-only"],
    )
    candidate = assemble_candidate(params, random.Random(2), TODAY)
    metadata = candidate.metadata

    assert metadata.tags == ["junior", "collaborator", "frontend", "remote-only"]
    assert metadata.source == "generated"
    assert metadata.version == "1.0.0"
    assert metadata.generation_params["personality_archetype"] == "collaborator"
    assert metadata.generation_params["experience_level"] == "junior"


def test_unknown_archetype_assembles_as_balanced():
    candidate = assemble_candidate(CandidateGenerationParams(personality_archetype="wizard"), random.Random(3), TODAY)
    assert candidate.has_tag("balanced")


def test_entry_balanced_candidate():
    params = CandidateGenerationParams(experience_level="entry", personality_archetype="balanced")
    baseline = get_archetype("balanced").traits

    for seed in range(20):
        candidate = assemble_candidate(params, random.Random(seed), TODAY)

        for trait, width in TRAIT_JITTER.items():
            assert abs(getattr(candidate.personality, trait) - getattr(baseline, trait)) <= width

        skills = candidate.technical_skills
        for skill in skills.programming_languages + skills.frameworks_and_tools:
            assert skill.proficiency != "expert"

        assert candidate.has_tag("entry")
        assert candidate.has_tag("balanced")
        assert not candidate.metadata.notes
