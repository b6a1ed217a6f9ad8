"""
Archetype Library

Named personality presets used as generation baselines.

Two pools:
- CONSTRUCTIVE_ARCHETYPES: baselines for normal candidate generation
- PROBLEMATIC_ARCHETYPES: baselines (plus fixed behavior presets) used when
  a profile is degraded to poor/terrible quality

Both tables are built once at import time and only read afterwards.
"""

import logging
import random
from types import MappingProxyType
from typing import Dict, List, Mapping

from .candidate_schema import (
    Archetype,
    PersonalityTraits,
    WorkBehaviorPatterns,
    CommunicationStyle,
    ConflictResolutionStyle,
    TeamPlayerType,
    WorkStyle,
    DecisionMakingStyle,
)

logger = logging.getLogger(__name__)

DEFAULT_ARCHETYPE = "balanced"
DEFAULT_PROBLEMATIC_ARCHETYPE = "arrogant"


def _build_constructive_archetypes() -> Dict[str, Archetype]:
    archetypes = {}

    archetypes["balanced"] = Archetype(
        key="balanced",
        name="Balanced Professional",
        description="Well-rounded professional with balanced traits",
        traits=PersonalityTraits(
            openness=60, conscientiousness=70, extraversion=50, agreeableness=65, neuroticism=40
        ),
    )

    archetypes["innovator"] = Archetype(
        key="innovator",
        name="Innovation Leader",
        description="Creative thinker who thrives on new challenges and ideas",
        traits=PersonalityTraits(
            openness=90, conscientiousness=60, extraversion=75, agreeableness=55, neuroticism=35
        ),
    )

    archetypes["specialist"] = Archetype(
        key="specialist",
        name="Technical Expert",
        description="Deep technical expertise with strong attention to detail",
        traits=PersonalityTraits(
            openness=50, conscientiousness=85, extraversion=35, agreeableness=60, neuroticism=45
        ),
    )

    archetypes["leader"] = Archetype(
        key="leader",
        name="Natural Leader",
        description="Charismatic leader who inspires and motivates others",
        traits=PersonalityTraits(
            openness=75, conscientiousness=80, extraversion=85, agreeableness=70, neuroticism=30
        ),
    )

    archetypes["collaborator"] = Archetype(
        key="collaborator",
        name="Team Collaborator",
        description="Excellent team player who builds strong relationships",
        traits=PersonalityTraits(
            openness=65, conscientiousness=70, extraversion=70, agreeableness=85, neuroticism=40
        ),
    )

    return archetypes


def _build_problematic_archetypes() -> Dict[str, Archetype]:
    archetypes = {}

    archetypes["arrogant"] = Archetype(
        key="arrogant",
        name="Arrogant Expert",
        description="Thinks they know everything, dismisses others, overconfident",
        traits=PersonalityTraits(
            openness=85, conscientiousness=60, extraversion=90, agreeableness=25, neuroticism=30
        ),
        behavior=WorkBehaviorPatterns(
            communication_style=CommunicationStyle.DIRECT,
            conflict_resolution_style=ConflictResolutionStyle.COMPETING,
            team_player_type=TeamPlayerType.LEADER,
            work_style=WorkStyle.RAPID,
            decision_making_style=DecisionMakingStyle.DECISIVE,
        ),
    )

    archetypes["lazy"] = Archetype(
        key="lazy",
        name="Coasting Employee",
        description="Minimal effort, avoids responsibility, poor work ethic",
        traits=PersonalityTraits(
            openness=40, conscientiousness=20, extraversion=50, agreeableness=70, neuroticism=60
        ),
        behavior=WorkBehaviorPatterns(
            communication_style=CommunicationStyle.DIPLOMATIC,
            conflict_resolution_style=ConflictResolutionStyle.AVOIDING,
            team_player_type=TeamPlayerType.CONTRIBUTOR,
            work_style=WorkStyle.RAPID,
            decision_making_style=DecisionMakingStyle.INTUITIVE,
        ),
    )

    archetypes["toxic"] = Archetype(
        key="toxic",
        name="Toxic Teammate",
        description="Creates conflict, blames others, poor team player",
        traits=PersonalityTraits(
            openness=45, conscientiousness=50, extraversion=75, agreeableness=15, neuroticism=80
        ),
        behavior=WorkBehaviorPatterns(
            communication_style=CommunicationStyle.DIRECT,
            conflict_resolution_style=ConflictResolutionStyle.COMPETING,
            team_player_type=TeamPlayerType.SPECIALIST,
            work_style=WorkStyle.ITERATIVE,
            decision_making_style=DecisionMakingStyle.DECISIVE,
        ),
    )

    archetypes["job_hopper"] = Archetype(
        key="job_hopper",
        name="Job Hopper",
        description="Frequently changes jobs, lacks commitment, inconsistent",
        traits=PersonalityTraits(
            openness=70, conscientiousness=35, extraversion=65, agreeableness=50, neuroticism=65
        ),
        behavior=WorkBehaviorPatterns(
            communication_style=CommunicationStyle.DIPLOMATIC,
            conflict_resolution_style=ConflictResolutionStyle.AVOIDING,
            team_player_type=TeamPlayerType.CONTRIBUTOR,
            work_style=WorkStyle.RAPID,
            decision_making_style=DecisionMakingStyle.INTUITIVE,
        ),
    )

    archetypes["inexperienced"] = Archetype(
        key="inexperienced",
        name="Inexperienced Pretender",
        description="Claims experience they don't have, struggles with basic tasks",
        traits=PersonalityTraits(
            openness=60, conscientiousness=40, extraversion=45, agreeableness=65, neuroticism=75
        ),
        behavior=WorkBehaviorPatterns(
            communication_style=CommunicationStyle.DIPLOMATIC,
            conflict_resolution_style=ConflictResolutionStyle.ACCOMMODATING,
            team_player_type=TeamPlayerType.CONTRIBUTOR,
            work_style=WorkStyle.METHODICAL,
            decision_making_style=DecisionMakingStyle.COLLABORATIVE,
        ),
    )

    return archetypes


# Read-only tables
CONSTRUCTIVE_ARCHETYPES: Mapping[str, Archetype] = MappingProxyType(_build_constructive_archetypes())
PROBLEMATIC_ARCHETYPES: Mapping[str, Archetype] = MappingProxyType(_build_problematic_archetypes())


def get_archetype(name: str) -> Archetype:
    """
    Look up a constructive archetype by key.

    Never fails: an unknown or empty name falls back to the balanced archetype.
    """
    archetype = CONSTRUCTIVE_ARCHETYPES.get((name or "").strip().lower())
    if archetype is None:
        logger.debug("Unknown archetype %r, falling back to %s", name, DEFAULT_ARCHETYPE)
        return CONSTRUCTIVE_ARCHETYPES[DEFAULT_ARCHETYPE]
    return archetype


def get_problematic_archetype(name: str) -> Archetype:
    """Look up a problematic archetype by key, falling back to 'arrogant'"""
    archetype = PROBLEMATIC_ARCHETYPES.get((name or "").strip().lower())
    if archetype is None:
        logger.debug("Unknown problematic archetype %r, falling back to %s", name, DEFAULT_PROBLEMATIC_ARCHETYPE)
        return PROBLEMATIC_ARCHETYPES[DEFAULT_PROBLEMATIC_ARCHETYPE]
    return archetype


def random_problematic_archetype(rng: random.Random) -> Archetype:
    """Pick a problematic archetype uniformly at random"""
    key = rng.choice(sorted(PROBLEMATIC_ARCHETYPES))
    return PROBLEMATIC_ARCHETYPES[key]


def list_archetypes(problematic: bool = False) -> List[Archetype]:
    """All archetypes of one pool, in definition order"""
    pool = PROBLEMATIC_ARCHETYPES if problematic else CONSTRUCTIVE_ARCHETYPES
    return list(pool.values())
