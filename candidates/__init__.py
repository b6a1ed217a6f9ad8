"""
Synthetic Candidate System

Generates realistic, internally consistent job-candidate profiles for
exercising recruiting and interview tooling. Every candidate starts from a
personality archetype; behavior, cognition, skills, experience and interview
scores are derived from it, and quality levels or named flaws can push a
candidate down to a believably bad one.

Usage:
    from candidates import (
        CandidateGenerationParams,
        generate_candidate,
        generate_batch,
        list_archetypes,
        list_flaws,
    )

    # One mid-level innovator
    params = CandidateGenerationParams(
        target_role="Backend Engineer",
        experience_level="mid",
        personality_archetype="innovator",
    )
    candidate = generate_candidate(params, rng=random.Random(42))

    # A 60/30/10 good/average/bad population
    batch = generate_batch(params.model_copy(update={"count": 20, "quality_mix": "standard"}))

    # Or a deliberately bad one
    params = CandidateGenerationParams(quality_level="terrible", flaws=["job_hopper"])
"""

from .candidate_schema import (
    # Enums
    ExperienceLevel,
    QualityLevel,
    QualityMix,
    Proficiency,
    CommunicationStyle,
    ConflictResolutionStyle,
    TeamPlayerType,
    WorkStyle,
    DecisionMakingStyle,
    AnswerStructure,
    StorytellingStyle,
    CandidateSource,

    # Trait model
    PersonalityTraits,
    WorkBehaviorPatterns,
    Archetype,
    CognitiveProfile,

    # Skills & experience
    LanguageSkill,
    ToolSkill,
    SystemDesignScores,
    MethodologyScores,
    TechnicalSkills,
    CurrentPosition,
    PreviousPosition,
    Education,
    Certification,
    ProfessionalExperience,

    # Interview performance
    BehavioralScores,
    TechnicalScores,
    CulturalScores,
    SimulatedInterviewScores,
    ResponsePatterns,
    InterviewPerformance,

    # Candidate
    CandidateGenerationParams,
    Location,
    PersonalInfo,
    CandidateMetadata,
    Candidate,
)

from .archetypes import (
    CONSTRUCTIVE_ARCHETYPES,
    PROBLEMATIC_ARCHETYPES,
    get_archetype,
    get_problematic_archetype,
    random_problematic_archetype,
    list_archetypes,
)

from .derivation import (
    generate_personality_traits,
    derive_work_behavior,
    generate_cognitive_profile,
    derive_proficiency,
    scale_skill_years,
    generate_technical_skills,
    score_interview,
)

from .assembler import assemble_candidate

from .flaws import (
    FlawType,
    FlawSeverity,
    FlawDefinition,
    FLAW_LIBRARY,
    apply_flaw,
    apply_flaws,
    degrade_by_quality,
    auto_select_flaws,
    inject_quality,
    list_flaws,
)

from .enhancement import (
    CandidateEnhancer,
    EnhancedProfile,
    EnhancementResult,
    AnthropicEnhancer,
    apply_enhancement,
)

from .generator import (
    QUALITY_MIXES,
    generate_candidate,
    generate_batch,
)

from .config import Settings, get_settings

__all__ = [
    # Enums
    "ExperienceLevel",
    "QualityLevel",
    "QualityMix",
    "Proficiency",
    "CommunicationStyle",
    "ConflictResolutionStyle",
    "TeamPlayerType",
    "WorkStyle",
    "DecisionMakingStyle",
    "AnswerStructure",
    "StorytellingStyle",
    "CandidateSource",

    # Trait model
    "PersonalityTraits",
    "WorkBehaviorPatterns",
    "Archetype",
    "CognitiveProfile",

    # Skills & experience
    "LanguageSkill",
    "ToolSkill",
    "SystemDesignScores",
    "MethodologyScores",
    "TechnicalSkills",
    "CurrentPosition",
    "PreviousPosition",
    "Education",
    "Certification",
    "ProfessionalExperience",

    # Interview performance
    "BehavioralScores",
    "TechnicalScores",
    "CulturalScores",
    "SimulatedInterviewScores",
    "ResponsePatterns",
    "InterviewPerformance",

    # Candidate
    "CandidateGenerationParams",
    "Location",
    "PersonalInfo",
    "CandidateMetadata",
    "Candidate",

    # Archetypes
    "CONSTRUCTIVE_ARCHETYPES",
    "PROBLEMATIC_ARCHETYPES",
    "get_archetype",
    "get_problematic_archetype",
    "random_problematic_archetype",
    "list_archetypes",

    # Derivation
    "generate_personality_traits",
    "derive_work_behavior",
    "generate_cognitive_profile",
    "derive_proficiency",
    "scale_skill_years",
    "generate_technical_skills",
    "score_interview",

    # Assembly
    "assemble_candidate",

    # Flaws
    "FlawType",
    "FlawSeverity",
    "FlawDefinition",
    "FLAW_LIBRARY",
    "apply_flaw",
    "apply_flaws",
    "degrade_by_quality",
    "auto_select_flaws",
    "inject_quality",
    "list_flaws",

    # Enhancement (LLM-powered, optional)
    "CandidateEnhancer",
    "EnhancedProfile",
    "EnhancementResult",
    "AnthropicEnhancer",
    "apply_enhancement",

    # Generation
    "QUALITY_MIXES",
    "generate_candidate",
    "generate_batch",

    # Config
    "Settings",
    "get_settings",
]
