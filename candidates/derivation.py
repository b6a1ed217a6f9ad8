"""
Derivation Engine

Computes dependent candidate attributes from independent ones:
- personality traits from an archetype baseline (bounded jitter)
- work behavior from personality (ordered rule tables)
- skill proficiency from years of experience
- skill depth scaled by experience level
- interview performance from personality, cognition and skills

Every random choice goes through the `rng` argument so results are
reproducible for a fixed seed and safe to run in parallel.
"""

import math
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from .candidate_schema import (
    Archetype,
    PersonalityTraits,
    WorkBehaviorPatterns,
    CognitiveProfile,
    TechnicalSkills,
    LanguageSkill,
    ToolSkill,
    SystemDesignScores,
    MethodologyScores,
    InterviewPerformance,
    SimulatedInterviewScores,
    BehavioralScores,
    TechnicalScores,
    CulturalScores,
    ResponsePatterns,
    ExperienceLevel,
    Proficiency,
    CommunicationStyle,
    ConflictResolutionStyle,
    TeamPlayerType,
    WorkStyle,
    DecisionMakingStyle,
    AnswerStructure,
    StorytellingStyle,
)

T = TypeVar("T")

# A rule pairs a predicate over inputs with the values it allows
Rule = Tuple[Callable[..., bool], Sequence[T]]


# =============================================================================
# DESIGN CONSTANTS
# =============================================================================

# Jitter half-widths around the archetype baseline; extraversion varies most
TRAIT_JITTER: Dict[str, int] = {
    "openness": 15,
    "conscientiousness": 10,
    "extraversion": 20,
    "agreeableness": 15,
    "neuroticism": 15,
}

COGNITIVE_JITTER: Dict[str, int] = {
    "logical_reasoning": 2,
    "creative_thinking": 3,
    "social_intelligence": 2,
    "abstract_reasoning": 3,
    "verbal_communication": 2,
    "quantitative_ability": 3,
}

EXPERIENCE_MULTIPLIERS: Dict[ExperienceLevel, float] = {
    ExperienceLevel.ENTRY: 0.3,
    ExperienceLevel.JUNIOR: 0.5,
    ExperienceLevel.MID: 1.0,
    ExperienceLevel.SENIOR: 1.5,
    ExperienceLevel.LEAD: 2.0,
    ExperienceLevel.PRINCIPAL: 2.5,
}

# Upper bounds (exclusive) in years; anything beyond the last is expert
PROFICIENCY_THRESHOLDS: List[Tuple[int, Proficiency]] = [
    (1, Proficiency.BEGINNER),
    (3, Proficiency.INTERMEDIATE),
    (7, Proficiency.ADVANCED),
]

PROFICIENCY_POINTS: Dict[Proficiency, int] = {
    Proficiency.BEGINNER: 3,
    Proficiency.INTERMEDIATE: 5,
    Proficiency.ADVANCED: 8,
    Proficiency.EXPERT: 10,
}

# Baseline system-design competence per level
SYSTEM_DESIGN_BASE: Dict[ExperienceLevel, int] = {
    ExperienceLevel.ENTRY: 2,
    ExperienceLevel.JUNIOR: 3,
    ExperienceLevel.MID: 5,
    ExperienceLevel.SENIOR: 7,
    ExperienceLevel.LEAD: 8,
    ExperienceLevel.PRINCIPAL: 9,
}

# Frameworks lag language experience slightly
FRAMEWORK_MIN_FACTOR = 0.8
FRAMEWORK_MAX_FACTOR = 0.9

TECHNOLOGY_STACKS: Dict[str, Dict[str, List[Tuple[str, int, int]]]] = {
    "fullstack": {
        "programming": [("JavaScript", 2, 8), ("TypeScript", 1, 6), ("Python", 1, 5)],
        "frameworks": [("React", 2, 7), ("Node.js", 2, 6), ("Next.js", 1, 4)],
    },
    "backend": {
        "programming": [("Java", 3, 10), ("Python", 2, 8), ("Go", 1, 5)],
        "frameworks": [("Spring Boot", 2, 8), ("Django", 1, 6), ("Docker", 2, 6)],
    },
    "frontend": {
        "programming": [("JavaScript", 3, 10), ("TypeScript", 2, 8)],
        "frameworks": [("React", 3, 10), ("Vue.js", 1, 5), ("Angular", 1, 6)],
    },
    "devops": {
        "programming": [("Python", 2, 7), ("Bash", 3, 10), ("Go", 1, 4)],
        "frameworks": [("Kubernetes", 1, 6), ("Terraform", 1, 5), ("Jenkins", 2, 8)],
    },
}

# Focus tags checked in this order
STACK_PRIORITY = ["frontend", "backend", "devops", "fullstack"]


# =============================================================================
# BEHAVIOR RULE TABLES (first match wins)
# =============================================================================

COMMUNICATION_RULES: List[Rule] = [
    (lambda t: t.extraversion > 70, [CommunicationStyle.DIRECT, CommunicationStyle.COLLABORATIVE]),
    (lambda t: t.agreeableness > 70, [CommunicationStyle.DIPLOMATIC, CommunicationStyle.COLLABORATIVE]),
    (lambda t: True, [CommunicationStyle.ANALYTICAL, CommunicationStyle.DIRECT]),
]

TEAM_PLAYER_RULES: List[Rule] = [
    (lambda t: t.extraversion > 80, [TeamPlayerType.LEADER]),
    (lambda t: t.agreeableness > 75, [TeamPlayerType.COLLABORATOR]),
    (lambda t: t.conscientiousness > 80, [TeamPlayerType.SPECIALIST]),
    (lambda t: True, [TeamPlayerType.CONTRIBUTOR]),
]

DECISION_MAKING_RULES: List[Rule] = [
    (lambda t: t.conscientiousness > 70, [DecisionMakingStyle.ANALYTICAL, DecisionMakingStyle.COMPREHENSIVE]),
    (lambda t: True, [
        DecisionMakingStyle.ANALYTICAL,
        DecisionMakingStyle.INTUITIVE,
        DecisionMakingStyle.COLLABORATIVE,
        DecisionMakingStyle.DECISIVE,
    ]),
]

CONFLICT_RESOLUTION_RULES: List[Rule] = [
    (lambda t: True, list(ConflictResolutionStyle)),
]

WORK_STYLE_RULES: List[Rule] = [
    (lambda t: True, list(WorkStyle)),
]

ANSWER_STRUCTURE_RULES: List[Rule] = [
    (lambda t: t.conscientiousness > 70, [AnswerStructure.COMPREHENSIVE]),
    (lambda t: t.extraversion > 60, [AnswerStructure.DETAILED]),
    (lambda t: t.conscientiousness < 40, [AnswerStructure.CONCISE]),
    (lambda t: True, [AnswerStructure.STORYTELLING]),
]

# Additive: every matching entry contributes
RED_FLAG_RULES: List[Tuple[Callable[[PersonalityTraits, CognitiveProfile], bool], str]] = [
    (lambda t, c: t.neuroticism > 70, "May experience stress in high-pressure situations"),
    (lambda t, c: t.agreeableness < 30, "May struggle with team collaboration"),
    (lambda t, c: c.quantitative_ability < 4, "Limited quantitative reasoning skills"),
]

STRENGTH_RULES: List[Tuple[Callable[[PersonalityTraits, CognitiveProfile], bool], str]] = [
    (lambda t, c: t.openness > 80, "Highly innovative and adaptable to new technologies"),
    (lambda t, c: t.conscientiousness > 80, "Exceptional attention to detail and reliability"),
    (lambda t, c: c.social_intelligence > 8, "Strong interpersonal and communication skills"),
]


# =============================================================================
# HELPERS
# =============================================================================

def clamp(value: float, low: int, high: int) -> int:
    """Clamp and coerce to int"""
    return int(max(low, min(high, value)))


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for positive values"""
    return int(math.floor(value + 0.5))


def jitter(base: int, width: int, low: int, high: int, rng: random.Random) -> int:
    """Uniform integer within base ± width, restricted to [low, high]"""
    lower = max(low, base - width)
    upper = min(high, base + width)
    if lower > upper:
        return clamp(base, low, high)
    return rng.randint(lower, upper)


def evaluate_rules(rules: Sequence[Rule], subject, rng: random.Random):
    """Return a value from the first rule whose predicate matches `subject`"""
    for predicate, options in rules:
        if predicate(subject):
            return options[0] if len(options) == 1 else rng.choice(list(options))
    raise ValueError("Rule table has no fallback rule")


def to_experience_level(level) -> ExperienceLevel:
    """Coerce a level value to the enum, defaulting to mid"""
    try:
        return ExperienceLevel(level)
    except ValueError:
        return ExperienceLevel.MID


# =============================================================================
# PERSONALITY & BEHAVIOR
# =============================================================================

def generate_personality_traits(archetype: Archetype, rng: random.Random) -> PersonalityTraits:
    """Draw traits around the archetype baseline, clamped to [1,100]"""
    base = archetype.traits
    return PersonalityTraits(**{
        trait: jitter(getattr(base, trait), width, 1, 100, rng)
        for trait, width in TRAIT_JITTER.items()
    })


def derive_work_behavior(traits: PersonalityTraits, rng: random.Random) -> WorkBehaviorPatterns:
    """
    Derive work behavior from personality.

    Fields are evaluated in a fixed order so a fixed seed gives a fixed result.
    """
    return WorkBehaviorPatterns(
        communication_style=evaluate_rules(COMMUNICATION_RULES, traits, rng),
        conflict_resolution_style=evaluate_rules(CONFLICT_RESOLUTION_RULES, traits, rng),
        team_player_type=evaluate_rules(TEAM_PLAYER_RULES, traits, rng),
        work_style=evaluate_rules(WORK_STYLE_RULES, traits, rng),
        decision_making_style=evaluate_rules(DECISION_MAKING_RULES, traits, rng),
    )


def generate_cognitive_profile(rng: random.Random) -> CognitiveProfile:
    """Cognitive scores share a base level so profiles stay balanced"""
    base = rng.randint(4, 8)
    return CognitiveProfile(**{
        field: jitter(base, width, 1, 10, rng)
        for field, width in COGNITIVE_JITTER.items()
    })


# =============================================================================
# SKILLS
# =============================================================================

def derive_proficiency(years: int) -> Proficiency:
    """Map years of experience to a proficiency bucket"""
    for upper_bound, proficiency in PROFICIENCY_THRESHOLDS:
        if years < upper_bound:
            return proficiency
    return Proficiency.EXPERT


def scale_skill_years(
    min_years: int,
    max_years: int,
    experience_level,
    rng: random.Random,
    min_factor: float = 1.0,
    max_factor: float = 1.0,
) -> int:
    """
    Scale a technology's base experience range by the level multiplier
    and draw whole years from it. Never returns less than 1.
    """
    multiplier = EXPERIENCE_MULTIPLIERS[to_experience_level(experience_level)]
    lower = max(1, math.floor(min_years * multiplier * min_factor))
    upper = max(lower, math.floor(max_years * multiplier * max_factor))
    return rng.randint(lower, upper)


def select_stack(technical_focus: Optional[List[str]], rng: random.Random) -> str:
    """Pick a technology stack from focus tags, or at random"""
    focus = {tag.strip().lower() for tag in (technical_focus or [])}
    for stack in STACK_PRIORITY:
        if stack in focus:
            return stack
    return rng.choice(sorted(TECHNOLOGY_STACKS))


def generate_technical_skills(
    experience_level,
    technical_focus: Optional[List[str]],
    rng: random.Random,
) -> TechnicalSkills:
    """Build skill lists and design/methodology maps for a level"""
    level = to_experience_level(experience_level)
    stack = TECHNOLOGY_STACKS[select_stack(technical_focus, rng)]

    languages = []
    for language, min_years, max_years in stack["programming"]:
        years = scale_skill_years(min_years, max_years, level, rng)
        languages.append(LanguageSkill(
            language=language,
            proficiency=derive_proficiency(years),
            years_experience=years,
        ))

    tools = []
    for name, min_years, max_years in stack["frameworks"]:
        years = scale_skill_years(
            min_years, max_years, level, rng,
            min_factor=FRAMEWORK_MIN_FACTOR,
            max_factor=FRAMEWORK_MAX_FACTOR,
        )
        tools.append(ToolSkill(
            name=name,
            proficiency=derive_proficiency(years),
            years_experience=years,
        ))

    base = SYSTEM_DESIGN_BASE[level]

    return TechnicalSkills(
        programming_languages=languages,
        frameworks_and_tools=tools,
        system_design=SystemDesignScores(
            microservices=jitter(base, 2, 1, 10, rng),
            monolithic=jitter(base + 1, 2, 1, 10, rng),
            cloud_native=jitter(base - 1, 2, 1, 10, rng),
            database=jitter(base, 2, 1, 10, rng),
            security=jitter(base - 1, 3, 1, 10, rng),
        ),
        methodologies=MethodologyScores(
            agile=jitter(7, 2, 1, 10, rng),
            waterfall=jitter(4, 2, 1, 10, rng),
            devops=jitter(base - 1, 2, 1, 10, rng),
            testing=jitter(6, 2, 1, 10, rng),
            documentation=jitter(5, 3, 1, 10, rng),
        ),
    )


# =============================================================================
# INTERVIEW PERFORMANCE
# =============================================================================

def _score(value: float) -> int:
    return clamp(round_half_up(value), 1, 10)


def calculate_coding_score(languages: List[LanguageSkill]) -> int:
    """Average proficiency points across languages (1 if none)"""
    if not languages:
        return 1
    points = [PROFICIENCY_POINTS[Proficiency(lang.proficiency)] for lang in languages]
    return _score(sum(points) / len(points))


def score_interview(
    traits: PersonalityTraits,
    cognition: CognitiveProfile,
    skills: TechnicalSkills,
    rng: random.Random,
) -> InterviewPerformance:
    """
    Predict interview performance.

    Scores are weighted averages of normalized inputs, rounded and clamped
    to [1,10]. Red flags and strengths are additive threshold checks.
    """
    t, c = traits, cognition
    system_design = list(skills.system_design.model_dump().values())

    scores = SimulatedInterviewScores(
        behavioral=BehavioralScores(
            overall=_score((t.extraversion + t.agreeableness + c.social_intelligence * 10) / 3 / 10),
            communication=_score((t.extraversion + c.verbal_communication * 10) / 20),
            problem_solving=_score((c.logical_reasoning + c.creative_thinking) / 2),
            leadership=_score((t.extraversion + c.social_intelligence * 10) / 20),
            teamwork=_score(t.agreeableness / 10),
        ),
        technical=TechnicalScores(
            coding=calculate_coding_score(skills.programming_languages),
            system_design=_score(sum(system_design) / len(system_design)),
            troubleshooting=_score((c.logical_reasoning + c.abstract_reasoning) / 2),
            best_practices=_score((skills.methodologies.testing + skills.methodologies.documentation) / 2),
        ),
        cultural=CulturalScores(
            company_fit=_score((t.agreeableness + t.openness) / 20),
            values_alignment=_score(t.agreeableness / 10),
            collaboration=_score((t.agreeableness + t.extraversion) / 20),
            innovation=_score(t.openness / 10),
        ),
    )

    patterns = ResponsePatterns(
        answer_structure=evaluate_rules(ANSWER_STRUCTURE_RULES, t, rng),
        storytelling_style=rng.choice(list(StorytellingStyle)),
        enthusiasm_level=_score((t.extraversion + t.openness) / 20),
        self_awareness_level=_score((100 - t.neuroticism + t.conscientiousness) / 20),
    )

    return InterviewPerformance(
        simulated_interview_scores=scores,
        response_patterns=patterns,
        potential_red_flags=[flag for check, flag in RED_FLAG_RULES if check(t, c)],
        key_strengths=[strength for check, strength in STRENGTH_RULES if check(t, c)],
    )
