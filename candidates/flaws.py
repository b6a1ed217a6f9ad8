"""
Flaw Injection

Deliberately degrades assembled candidates to simulate hiring red flags.

- FLAW_LIBRARY: every flaw type with its severity, description and declared
  score impact
- FLAW_MUTATORS: one field-mutation function per flaw type
- degrade_by_quality: quality-level score multiplier, plus problematic
  archetype substitution for poor/terrible candidates
- auto_select_flaws: quality-dependent random flaw selection

Mutation happens in place on a freshly assembled candidate. An unknown flaw
type is a no-op.
"""

import logging
import math
import random
from datetime import date, timedelta
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field
from enum import Enum

from .archetypes import random_problematic_archetype
from .assembler import create_faker
from .candidate_schema import (
    Candidate,
    QualityLevel,
    Proficiency,
    CommunicationStyle,
    ConflictResolutionStyle,
    TeamPlayerType,
    WorkStyle,
    DecisionMakingStyle,
    AnswerStructure,
    SystemDesignScores,
    MethodologyScores,
    PreviousPosition,
)
from .derivation import clamp

logger = logging.getLogger(__name__)

RED_FLAGS_TAG = "has-red-flags"
SCORE_GROUPS = ("behavioral", "technical", "cultural")


# =============================================================================
# FLAW LIBRARY
# =============================================================================

class FlawType(str, Enum):
    SKILL_EXAGGERATION = "skill_exaggeration"
    POOR_COMMUNICATION = "poor_communication"
    TOXIC_PERSONALITY = "toxic_personality"
    JOB_HOPPER = "job_hopper"
    SKILL_GAPS = "skill_gaps"
    CULTURAL_MISFIT = "cultural_misfit"
    LAZY_WORKER = "lazy_worker"
    ARROGANT_ATTITUDE = "arrogant_attitude"
    UNRELIABLE = "unreliable"
    RESISTANT_TO_FEEDBACK = "resistant_to_feedback"
    POOR_PROBLEM_SOLVING = "poor_problem_solving"
    ATTENTION_ISSUES = "attention_issues"


class FlawSeverity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class ScoreImpact(BaseModel):
    """Points subtracted from each sub-score of a group (0-10)"""
    model_config = ConfigDict(frozen=True)

    technical: int = Field(default=0, ge=0, le=10)
    behavioral: int = Field(default=0, ge=0, le=10)
    cultural: int = Field(default=0, ge=0, le=10)


class FlawDefinition(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    type: FlawType
    severity: FlawSeverity
    description: str
    impact: ScoreImpact


def _build_flaw_library() -> Dict[FlawType, FlawDefinition]:
    entries = [
        (FlawType.SKILL_EXAGGERATION, FlawSeverity.MODERATE,
         "Claims 5+ years of experience but struggles with basic concepts",
         ScoreImpact(technical=3, behavioral=2)),
        (FlawType.POOR_COMMUNICATION, FlawSeverity.SEVERE,
         "Cannot articulate thoughts clearly, gives vague answers",
         ScoreImpact(behavioral=4, cultural=3)),
        (FlawType.TOXIC_PERSONALITY, FlawSeverity.SEVERE,
         "Arrogant, dismissive of teammates, creates conflict",
         ScoreImpact(cultural=5, behavioral=4)),
        (FlawType.JOB_HOPPER, FlawSeverity.MODERATE,
         "Multiple jobs in past year, no clear career progression",
         ScoreImpact(behavioral=3, cultural=2)),
        (FlawType.SKILL_GAPS, FlawSeverity.MODERATE,
         "Missing fundamental skills for the role",
         ScoreImpact(technical=4)),
        (FlawType.CULTURAL_MISFIT, FlawSeverity.MODERATE,
         "Values misaligned with company culture, resistant to change",
         ScoreImpact(cultural=4, behavioral=2)),
        (FlawType.LAZY_WORKER, FlawSeverity.SEVERE,
         "Minimal effort, avoids responsibility, poor attention to detail",
         ScoreImpact(behavioral=4, technical=2)),
        (FlawType.ARROGANT_ATTITUDE, FlawSeverity.MODERATE,
         "Overconfident, dismisses feedback, difficult to manage",
         ScoreImpact(behavioral=3, cultural=3)),
        (FlawType.UNRELIABLE, FlawSeverity.SEVERE,
         "Poor attendance history, misses deadlines, inconsistent work",
         ScoreImpact(behavioral=5, cultural=3)),
        (FlawType.RESISTANT_TO_FEEDBACK, FlawSeverity.MODERATE,
         "Defensive when criticized, refuses to acknowledge mistakes",
         ScoreImpact(behavioral=3, cultural=2)),
        (FlawType.POOR_PROBLEM_SOLVING, FlawSeverity.MODERATE,
         "Cannot break down complex problems, gives up easily",
         ScoreImpact(technical=3, behavioral=2)),
        (FlawType.ATTENTION_ISSUES, FlawSeverity.MODERATE,
         "Makes careless mistakes, misses important details",
         ScoreImpact(technical=3, behavioral=2)),
    ]
    return {
        flaw_type: FlawDefinition(type=flaw_type, severity=severity, description=description, impact=impact)
        for flaw_type, severity, description, impact in entries
    }


FLAW_LIBRARY: Mapping[FlawType, FlawDefinition] = MappingProxyType(_build_flaw_library())

QUALITY_MULTIPLIERS: Dict[QualityLevel, float] = {
    QualityLevel.EXCELLENT: 1.0,
    QualityLevel.GOOD: 0.85,
    QualityLevel.AVERAGE: 0.65,
    QualityLevel.POOR: 0.4,
    QualityLevel.TERRIBLE: 0.2,
}

FLAW_COUNTS: Dict[QualityLevel, int] = {
    QualityLevel.EXCELLENT: 0,
    QualityLevel.GOOD: 0,
    QualityLevel.AVERAGE: 1,
    QualityLevel.POOR: 2,
    QualityLevel.TERRIBLE: 4,
}

PROBLEMATIC_QUALITY_LEVELS = (QualityLevel.POOR, QualityLevel.TERRIBLE)


def parse_flaw_type(flaw_type) -> Optional[FlawType]:
    """The FlawType for a name, or None if unknown"""
    try:
        return FlawType(flaw_type)
    except ValueError:
        return None


def known_flaws(flaws: Optional[Sequence]) -> List[FlawType]:
    """Parse flaw names, dropping unknown ones"""
    parsed = (parse_flaw_type(f) for f in (flaws or []))
    return [f for f in parsed if f is not None]


def to_quality_level(quality_level) -> QualityLevel:
    """Coerce a quality value to the enum, defaulting to poor"""
    try:
        return QualityLevel(quality_level)
    except ValueError:
        return QualityLevel.POOR


# =============================================================================
# MUTATORS
# =============================================================================

def _add_red_flags(candidate: Candidate, *flags: str) -> None:
    candidate.interview_performance.potential_red_flags.extend(flags)


def _skill_exaggeration(candidate: Candidate, rng: random.Random) -> None:
    # Inflated years but junior-level proficiency
    for lang in candidate.technical_skills.programming_languages:
        lang.years_experience = rng.randint(5, 12)
        lang.proficiency = rng.choice([Proficiency.BEGINNER, Proficiency.INTERMEDIATE]).value

    _add_red_flags(
        candidate,
        "Claims extensive experience but demonstrates junior-level skills",
        "Unable to explain concepts that should be familiar",
        "Resume doesn't match demonstrated abilities",
    )


def _poor_communication(candidate: Candidate, rng: random.Random) -> None:
    candidate.work_behavior.communication_style = CommunicationStyle.DIRECT.value
    candidate.cognitive_profile.verbal_communication = rng.randint(1, 4)
    candidate.cognitive_profile.social_intelligence = rng.randint(1, 4)
    candidate.interview_performance.response_patterns.answer_structure = AnswerStructure.CONCISE.value

    _add_red_flags(
        candidate,
        "Gives very brief, unclear answers",
        "Struggles to articulate complex thoughts",
        "Poor at explaining technical concepts",
    )


def _toxic_personality(candidate: Candidate, rng: random.Random) -> None:
    candidate.personality.agreeableness = rng.randint(10, 30)
    candidate.personality.neuroticism = rng.randint(70, 90)
    candidate.work_behavior.conflict_resolution_style = ConflictResolutionStyle.COMPETING.value
    candidate.work_behavior.team_player_type = TeamPlayerType.CONTRIBUTOR.value

    _add_red_flags(
        candidate,
        "Speaks negatively about previous coworkers",
        "Shows inability to work in teams",
        "Defensive when questioned",
    )


def _job_hopper(candidate: Candidate, rng: random.Random) -> None:
    """Replace history with 3-6 short stints and end the current role recently"""
    fake = create_faker(rng)
    today = date.today()

    stints = []
    for index in range(rng.randint(3, 6)):
        start_date = today - timedelta(days=rng.randint(60, int(365 * (1 + index * 0.5))))
        end_date = min(today, start_date + timedelta(days=rng.randint(45, 240)))
        stints.append(PreviousPosition(
            title=fake.job(),
            company=fake.company(),
            industry=rng.choice(["Technology", "Finance", "Healthcare"]),
            location=f"{fake.city()}, {fake.state_abbr()}",
            start_date=start_date,
            end_date=end_date,
            description="Brief contract role",
            key_achievements=["Completed assigned tasks"],
            technologies_used=["JavaScript", "React"],
        ))
    stints.sort(key=lambda position: position.start_date, reverse=True)

    current = candidate.experience.current_position
    candidate.experience.previous_positions = stints
    current.end_date = max(current.start_date, today - timedelta(days=rng.randint(0, 89)))
    current.is_current_role = False

    _add_red_flags(
        candidate,
        "History of frequent job changes",
        "No clear career progression",
        "Short tenure at multiple positions",
    )


def _skill_gaps(candidate: Candidate, rng: random.Random) -> None:
    skills = candidate.technical_skills
    skills.programming_languages = skills.programming_languages[:1]
    skills.frameworks_and_tools = []
    skills.system_design = SystemDesignScores(
        microservices=rng.randint(1, 3),
        monolithic=rng.randint(2, 4),
        cloud_native=rng.randint(1, 2),
        database=rng.randint(2, 4),
        security=rng.randint(1, 3),
    )

    _add_red_flags(
        candidate,
        "Missing critical skills for the position",
        "Limited technical knowledge depth",
        "Struggles with system design questions",
    )


def _cultural_misfit(candidate: Candidate, rng: random.Random) -> None:
    candidate.personality.openness = rng.randint(20, 40)
    candidate.personality.agreeableness = rng.randint(25, 45)
    candidate.work_behavior.decision_making_style = DecisionMakingStyle.DECISIVE.value
    candidate.work_behavior.conflict_resolution_style = ConflictResolutionStyle.AVOIDING.value

    _add_red_flags(
        candidate,
        "Appears resistant to new ideas",
        "Prefers working alone",
        "Struggles with collaborative environments",
    )


def _lazy_worker(candidate: Candidate, rng: random.Random) -> None:
    candidate.personality.conscientiousness = rng.randint(10, 30)
    candidate.work_behavior.work_style = WorkStyle.RAPID.value
    candidate.technical_skills.methodologies = MethodologyScores(
        agile=rng.randint(1, 3),
        waterfall=rng.randint(2, 4),
        devops=rng.randint(1, 3),
        testing=rng.randint(1, 2),
        documentation=rng.randint(1, 2),
    )
    candidate.experience.current_position.key_achievements = ["Completed assigned tasks"]

    _add_red_flags(
        candidate,
        "Shows limited initiative",
        "Minimal attention to detail",
        "Focuses on minimum requirements",
    )


def _arrogant_attitude(candidate: Candidate, rng: random.Random) -> None:
    candidate.personality.extraversion = rng.randint(80, 95)
    candidate.personality.agreeableness = rng.randint(20, 40)
    candidate.work_behavior.communication_style = CommunicationStyle.DIRECT.value
    candidate.work_behavior.conflict_resolution_style = ConflictResolutionStyle.COMPETING.value
    candidate.interview_performance.response_patterns.enthusiasm_level = rng.randint(8, 10)

    _add_red_flags(
        candidate,
        "Appears overconfident in abilities",
        "Dismissive of others' contributions",
        "Difficulty accepting constructive feedback",
    )


def _unreliable(candidate: Candidate, rng: random.Random) -> None:
    candidate.personality.conscientiousness = rng.randint(15, 35)
    candidate.personality.neuroticism = rng.randint(60, 80)

    # Employment gap ending where the second most recent role ended
    previous = candidate.experience.previous_positions
    if len(previous) > 1:
        gap_end = previous[1].end_date
        gap_start = gap_end - timedelta(days=30 * rng.randint(6, 18))
        previous.append(PreviousPosition(
            title="Gap in Employment",
            company="Unemployed",
            industry="Personal",
            location=candidate.personal_info.location.city,
            start_date=gap_start,
            end_date=gap_end,
            description="Period of unemployment",
        ))

    _add_red_flags(
        candidate,
        "Unexplained gaps in employment",
        "History of leaving positions without notice",
        "Inconsistent work history",
    )


def _resistant_to_feedback(candidate: Candidate, rng: random.Random) -> None:
    candidate.personality.neuroticism = rng.randint(70, 90)
    candidate.personality.agreeableness = rng.randint(20, 40)

    _add_red_flags(
        candidate,
        "Becomes defensive when questioned",
        "Unable to acknowledge areas for improvement",
        "Blames others for past failures",
    )


def _poor_problem_solving(candidate: Candidate, rng: random.Random) -> None:
    candidate.cognitive_profile.logical_reasoning = rng.randint(1, 4)
    candidate.cognitive_profile.abstract_reasoning = rng.randint(1, 4)
    candidate.cognitive_profile.creative_thinking = rng.randint(1, 4)
    candidate.interview_performance.simulated_interview_scores.technical.troubleshooting = rng.randint(1, 3)

    _add_red_flags(
        candidate,
        "Struggles with analytical problems",
        "Unable to break down complex issues",
        "Gives up easily on challenging problems",
    )


def _attention_issues(candidate: Candidate, rng: random.Random) -> None:
    candidate.cognitive_profile.logical_reasoning = rng.randint(2, 4)
    candidate.personality.conscientiousness = rng.randint(20, 40)
    candidate.technical_skills.methodologies.testing = rng.randint(1, 3)
    candidate.technical_skills.methodologies.documentation = rng.randint(1, 2)

    _add_red_flags(
        candidate,
        "Makes careless errors in responses",
        "Misses important details in questions",
        "Poor attention to detail in work samples",
    )


FLAW_MUTATORS: Mapping[FlawType, Callable[[Candidate, random.Random], None]] = MappingProxyType({
    FlawType.SKILL_EXAGGERATION: _skill_exaggeration,
    FlawType.POOR_COMMUNICATION: _poor_communication,
    FlawType.TOXIC_PERSONALITY: _toxic_personality,
    FlawType.JOB_HOPPER: _job_hopper,
    FlawType.SKILL_GAPS: _skill_gaps,
    FlawType.CULTURAL_MISFIT: _cultural_misfit,
    FlawType.LAZY_WORKER: _lazy_worker,
    FlawType.ARROGANT_ATTITUDE: _arrogant_attitude,
    FlawType.UNRELIABLE: _unreliable,
    FlawType.RESISTANT_TO_FEEDBACK: _resistant_to_feedback,
    FlawType.POOR_PROBLEM_SOLVING: _poor_problem_solving,
    FlawType.ATTENTION_ISSUES: _attention_issues,
})


# =============================================================================
# APPLICATION
# =============================================================================

def apply_score_impact(candidate: Candidate, impact: ScoreImpact) -> None:
    """Subtract a flaw's declared impact from every sub-score of each group"""
    scores = candidate.interview_performance.simulated_interview_scores
    for group_name in SCORE_GROUPS:
        delta = getattr(impact, group_name)
        if not delta:
            continue
        group = getattr(scores, group_name)
        for field_name, value in group.model_dump().items():
            setattr(group, field_name, clamp(value - delta, 1, 10))


def apply_flaw(candidate: Candidate, flaw_type, rng: Optional[random.Random] = None) -> Candidate:
    """
    Apply one named flaw to a candidate.

    The flaw's mutator overwrites fields and appends red flags, its declared
    score impact is applied, and the flaw name is added to the tags.
    Unknown flaw types leave the candidate untouched.
    """
    parsed = parse_flaw_type(flaw_type)
    if parsed is None:
        logger.debug("Ignoring unknown flaw type %r", flaw_type)
        return candidate

    rng = rng or random.Random()
    FLAW_MUTATORS[parsed](candidate, rng)
    apply_score_impact(candidate, FLAW_LIBRARY[parsed].impact)
    candidate.metadata.add_tag(parsed.value)
    if parsed.value not in candidate.metadata.flaws:
        candidate.metadata.flaws.append(parsed.value)
    return candidate


def apply_flaws(candidate: Candidate, flaws: Sequence, rng: Optional[random.Random] = None) -> Candidate:
    """Apply several flaws and record them in the metadata"""
    rng = rng or random.Random()
    applied = []
    for flaw_type in flaws:
        apply_flaw(candidate, flaw_type, rng)
        parsed = parse_flaw_type(flaw_type)
        if parsed is not None:
            applied.append(parsed.value)

    if applied:
        candidate.metadata.add_tag(RED_FLAGS_TAG)
        candidate.metadata.notes = f"Candidate has concerning traits: {', '.join(applied)}"
    return candidate


def degrade_by_quality(candidate: Candidate, quality_level, rng: Optional[random.Random] = None) -> Candidate:
    """
    Scale interview scores down by quality level.

    Every sub-score of the behavioral, technical and cultural groups is
    multiplied, floored and kept within [1,10]. Poor and terrible candidates
    also take the personality and behavior preset of a random problematic
    archetype.
    """
    rng = rng or random.Random()
    level = to_quality_level(quality_level)
    multiplier = QUALITY_MULTIPLIERS[level]

    scores = candidate.interview_performance.simulated_interview_scores
    for group_name in SCORE_GROUPS:
        group = getattr(scores, group_name)
        for field_name, value in group.model_dump().items():
            setattr(group, field_name, clamp(math.floor(value * multiplier), 1, 10))
    candidate.metadata.quality_level = level.value

    if level in PROBLEMATIC_QUALITY_LEVELS:
        archetype = random_problematic_archetype(rng)
        candidate.personality = archetype.traits.model_copy()
        candidate.work_behavior = archetype.behavior.model_copy()
        candidate.metadata.add_tag(archetype.key)

    return candidate


def auto_select_flaws(quality_level, rng: Optional[random.Random] = None) -> List[FlawType]:
    """Pick a quality-dependent number of distinct flaws at random"""
    rng = rng or random.Random()
    count = FLAW_COUNTS[to_quality_level(quality_level)]
    return rng.sample(list(FlawType), k=min(count, len(FlawType)))


def inject_quality(
    candidate: Candidate,
    quality_level,
    flaws: Optional[Sequence] = None,
    rng: Optional[random.Random] = None,
) -> Candidate:
    """
    Degrade a candidate to a quality level, then apply the explicit flaws or,
    if none were given, flaws picked for that level.
    """
    rng = rng or random.Random()
    level = to_quality_level(quality_level)

    degrade_by_quality(candidate, level, rng)
    candidate.metadata.add_tag(level.value)

    # A list holding only unknown names counts as no flaws given
    selected = known_flaws(flaws) or auto_select_flaws(level, rng)
    return apply_flaws(candidate, selected, rng)


def list_flaws() -> List[FlawDefinition]:
    return list(FLAW_LIBRARY.values())
