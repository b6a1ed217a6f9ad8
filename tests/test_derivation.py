"""
Derivation Engine Tests

Personality, behavior, skills and interview scoring derived from an
archetype with a fixed random source.

Run with: pytest tests/test_derivation.py -v
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import random

from candidates.archetypes import CONSTRUCTIVE_ARCHETYPES, get_archetype
from candidates.candidate_schema import (
    CognitiveProfile,
    LanguageSkill,
    MethodologyScores,
    PersonalityTraits,
    SystemDesignScores,
    TechnicalSkills,
)
from candidates.derivation import (
    TRAIT_JITTER,
    calculate_coding_score,
    derive_proficiency,
    derive_work_behavior,
    generate_cognitive_profile,
    generate_personality_traits,
    generate_technical_skills,
    round_half_up,
    scale_skill_years,
    score_interview,
    select_stack,
)


def make_traits(**overrides) -> PersonalityTraits:
    values = dict(openness=50, conscientiousness=50, extraversion=50, agreeableness=50, neuroticism=50)
    values.update(overrides)
    return PersonalityTraits(**values)


def make_cognition(value: int = 6, **overrides) -> CognitiveProfile:
    values = {
        field: value
        for field in (
            "logical_reasoning", "creative_thinking", "social_intelligence",
            "abstract_reasoning", "verbal_communication", "quantitative_ability",
        )
    }
    values.update(overrides)
    return CognitiveProfile(**values)


def make_skills(proficiency: str = "advanced", value: int = 5, testing: int = 6, documentation: int = 5) -> TechnicalSkills:
    return TechnicalSkills(
        programming_languages=[LanguageSkill(language="Python", proficiency=proficiency, years_experience=4)],
        system_design=SystemDesignScores(
            microservices=value, monolithic=value, cloud_native=value, database=value, security=value,
        ),
        methodologies=MethodologyScores(
            agile=value, waterfall=value, devops=value, testing=testing, documentation=documentation,
        ),
    )


# =============================================================================
# PERSONALITY & COGNITION
# =============================================================================

def test_traits_stay_near_baseline_and_in_range():
    for key, archetype in CONSTRUCTIVE_ARCHETYPES.items():
        for seed in range(25):
            traits = generate_personality_traits(archetype, random.Random(seed))
            for trait, width in TRAIT_JITTER.items():
                value = getattr(traits, trait)
                base = getattr(archetype.traits, trait)
                assert 1 <= value <= 100
                assert abs(value - base) <= width, f"{key}.{trait}={value} too far from {base}"


def test_traits_are_reproducible():
    archetype = get_archetype("specialist")
    assert generate_personality_traits(archetype, random.Random(7)) == generate_personality_traits(archetype, random.Random(7))


def test_cognitive_profile_range():
    for seed in range(50):
        profile = generate_cognitive_profile(random.Random(seed))
        assert all(1 <= v <= 10 for v in profile.model_dump().values())


# =============================================================================
# BEHAVIOR RULES
# =============================================================================

def test_high_extraversion_makes_a_leader():
    behavior = derive_work_behavior(make_traits(extraversion=85, agreeableness=80), random.Random(1))
    assert behavior.team_player_type == "leader"
    assert behavior.communication_style in ("direct", "collaborative")


def test_agreeable_introvert_collaborates():
    behavior = derive_work_behavior(make_traits(extraversion=40, agreeableness=80), random.Random(1))
    assert behavior.team_player_type == "collaborator"
    assert behavior.communication_style in ("diplomatic", "collaborative")


def test_conscientious_falls_through_to_specialist():
    behavior = derive_work_behavior(make_traits(conscientiousness=90), random.Random(1))
    assert behavior.team_player_type == "specialist"
    assert behavior.decision_making_style in ("analytical", "comprehensive")


def test_default_rules():
    behavior = derive_work_behavior(make_traits(), random.Random(3))
    assert behavior.team_player_type == "contributor"
    assert behavior.communication_style in ("analytical", "direct")


# =============================================================================
# SKILLS
# =============================================================================

def test_proficiency_anchors():
    assert derive_proficiency(0) == "beginner"
    assert derive_proficiency(1) == "intermediate"
    assert derive_proficiency(2) == "intermediate"
    assert derive_proficiency(3) == "advanced"
    assert derive_proficiency(6) == "advanced"
    assert derive_proficiency(7) == "expert"
    assert derive_proficiency(30) == "expert"


def test_scale_skill_years_bounds():
    for seed in range(30):
        rng = random.Random(seed)
        assert 1 <= scale_skill_years(3, 10, "entry", rng) <= 3
        assert 7 <= scale_skill_years(3, 10, "principal", rng) <= 25
        assert scale_skill_years(1, 2, "entry", rng) == 1


def test_scale_skill_years_never_below_one():
    for level in ("entry", "junior", "mid", "senior", "lead", "principal"):
        assert scale_skill_years(0, 0, level, random.Random(0)) == 1


def test_select_stack_prefers_focus():
    assert select_stack(["Frontend", "backend"], random.Random(0)) == "frontend"
    assert select_stack(["devops"], random.Random(0)) == "devops"
    assert select_stack([], random.Random(0)) in ("fullstack", "backend", "frontend", "devops")


def test_entry_level_is_never_expert():
    for seed in range(40):
        skills = generate_technical_skills("entry", ["frontend"], random.Random(seed))
        for skill in skills.programming_languages + skills.frameworks_and_tools:
            assert skill.proficiency != "expert", f"{skill} at entry level"
            assert skill.years_experience >= 1


def test_senior_skill_shape():
    skills = generate_technical_skills("senior", ["backend"], random.Random(11))
    assert [lang.language for lang in skills.programming_languages] == ["Java", "Python", "Go"]
    assert [tool.name for tool in skills.frameworks_and_tools] == ["Spring Boot", "Django", "Docker"]
    assert all(1 <= v <= 10 for v in skills.system_design.model_dump().values())


# =============================================================================
# INTERVIEW SCORING
# =============================================================================

def test_scores_stay_in_range_at_the_extremes():
    extremes = [
        (make_traits(openness=100, conscientiousness=100, extraversion=100, agreeableness=100, neuroticism=1),
         make_cognition(10), make_skills("expert", 10, 10, 10)),
        (make_traits(openness=1, conscientiousness=1, extraversion=1, agreeableness=1, neuroticism=100),
         make_cognition(1), make_skills("beginner", 1, 1, 1)),
    ]
    for traits, cognition, skills in extremes:
        performance = score_interview(traits, cognition, skills, random.Random(0))
        for group in performance.simulated_interview_scores.group_means():
            values = getattr(performance.simulated_interview_scores, group).model_dump().values()
            assert all(1 <= v <= 10 for v in values), f"{group} out of range: {list(values)}"
        patterns = performance.response_patterns
        assert 1 <= patterns.enthusiasm_level <= 10
        assert 1 <= patterns.self_awareness_level <= 10


def test_best_practices_averages_testing_and_documentation():
    performance = score_interview(make_traits(), make_cognition(), make_skills(testing=6, documentation=5), random.Random(0))
    assert performance.simulated_interview_scores.technical.best_practices == 6

    performance = score_interview(make_traits(), make_cognition(), make_skills(testing=8, documentation=2), random.Random(0))
    assert performance.simulated_interview_scores.technical.best_practices == 5


def test_weighted_scores():
    traits = make_traits(openness=80, agreeableness=70, extraversion=60)
    performance = score_interview(traits, make_cognition(6), make_skills(), random.Random(0))
    scores = performance.simulated_interview_scores

    assert scores.behavioral.teamwork == 7
    assert scores.behavioral.overall == round_half_up((60 + 70 + 60) / 30)
    assert scores.cultural.innovation == 8
    assert scores.cultural.company_fit == 8  # (70 + 80) / 20 = 7.5
    assert scores.technical.coding == 8


def test_red_flags_and_strengths():
    traits = make_traits(neuroticism=80, agreeableness=20, openness=90)
    performance = score_interview(traits, make_cognition(6, quantitative_ability=3), make_skills(), random.Random(0))

    assert "May experience stress in high-pressure situations" in performance.potential_red_flags
    assert "May struggle with team collaboration" in performance.potential_red_flags
    assert "Limited quantitative reasoning skills" in performance.potential_red_flags
    assert performance.key_strengths == ["Highly innovative and adaptable to new technologies"]


def test_answer_structure_rules():
    performance = score_interview(make_traits(conscientiousness=80), make_cognition(), make_skills(), random.Random(0))
    assert performance.response_patterns.answer_structure == "comprehensive"

    performance = score_interview(make_traits(conscientiousness=30), make_cognition(), make_skills(), random.Random(0))
    assert performance.response_patterns.answer_structure == "concise"


def test_coding_score_without_languages():
    assert calculate_coding_score([]) == 1
