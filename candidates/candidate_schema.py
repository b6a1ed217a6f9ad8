"""
Candidate Schema

Data structures for synthetic job candidates.

Key concepts:
- PersonalityTraits: Big Five scores (1-100) that drive most derived attributes
- WorkBehaviorPatterns: categorical work styles derived from personality
- CognitiveProfile / TechnicalSkills: ability and skill scores (1-10)
- ProfessionalExperience: synthetic career history
- InterviewPerformance: predicted interview scores, red flags and strengths
- Candidate: the root aggregate handed to downstream evaluators
- CandidateGenerationParams: the configuration input for generation
"""

from datetime import date, datetime
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================

class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    PRINCIPAL = "principal"


class QualityLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"
    TERRIBLE = "terrible"


class QualityMix(str, Enum):
    """
    Batch population mixes:
    - STANDARD: 60% good, 30% average, 10% bad
    - REALISTIC: 40% excellent, 30% good, 20% poor, 10% terrible
    """
    STANDARD = "standard"
    REALISTIC = "realistic"


class Proficiency(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class CommunicationStyle(str, Enum):
    DIRECT = "direct"
    COLLABORATIVE = "collaborative"
    DIPLOMATIC = "diplomatic"
    ANALYTICAL = "analytical"


class ConflictResolutionStyle(str, Enum):
    COLLABORATIVE = "collaborative"
    COMPETING = "competing"
    ACCOMMODATING = "accommodating"
    AVOIDING = "avoiding"


class TeamPlayerType(str, Enum):
    LEADER = "leader"
    COLLABORATOR = "collaborator"
    SPECIALIST = "specialist"
    CONTRIBUTOR = "contributor"


class WorkStyle(str, Enum):
    METHODICAL = "methodical"
    RAPID = "rapid"
    ITERATIVE = "iterative"
    COMPREHENSIVE = "comprehensive"


class DecisionMakingStyle(str, Enum):
    ANALYTICAL = "analytical"
    INTUITIVE = "intuitive"
    COLLABORATIVE = "collaborative"
    DECISIVE = "decisive"
    # Only reachable through the conscientious branch of the decision rule
    COMPREHENSIVE = "comprehensive"


class AnswerStructure(str, Enum):
    CONCISE = "concise"
    DETAILED = "detailed"
    COMPREHENSIVE = "comprehensive"
    STORYTELLING = "storytelling"


class StorytellingStyle(str, Enum):
    STAR = "STAR"
    CAR = "CAR"
    PAR = "PAR"
    NARRATIVE = "narrative"


class CandidateSource(str, Enum):
    GENERATED = "generated"
    AI_ENHANCED = "ai-enhanced"
    MANUAL = "manual"
    IMPORTED = "imported"


# =============================================================================
# PERSONALITY, BEHAVIOR & COGNITION
# =============================================================================

class PersonalityTraits(BaseModel):
    """Big Five personality scores, each 1-100"""
    openness: int = Field(ge=1, le=100)
    conscientiousness: int = Field(ge=1, le=100)
    extraversion: int = Field(ge=1, le=100)
    agreeableness: int = Field(ge=1, le=100)
    neuroticism: int = Field(ge=1, le=100)


class WorkBehaviorPatterns(BaseModel):
    """How the candidate works with others. Derived from personality."""
    model_config = ConfigDict(use_enum_values=True)

    communication_style: CommunicationStyle
    conflict_resolution_style: ConflictResolutionStyle
    team_player_type: TeamPlayerType
    work_style: WorkStyle
    decision_making_style: DecisionMakingStyle


class Archetype(BaseModel):
    """A named personality preset used as a generation baseline"""
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    description: str
    traits: PersonalityTraits
    behavior: Optional[WorkBehaviorPatterns] = None  # Preset for problematic archetypes


class CognitiveProfile(BaseModel):
    """Reasoning abilities, each 1-10"""
    logical_reasoning: int = Field(ge=1, le=10)
    creative_thinking: int = Field(ge=1, le=10)
    social_intelligence: int = Field(ge=1, le=10)
    abstract_reasoning: int = Field(ge=1, le=10)
    verbal_communication: int = Field(ge=1, le=10)
    quantitative_ability: int = Field(ge=1, le=10)


# =============================================================================
# TECHNICAL SKILLS
# =============================================================================

class LanguageSkill(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    language: str
    proficiency: Proficiency
    years_experience: int = Field(ge=0)


class ToolSkill(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str
    proficiency: Proficiency
    years_experience: int = Field(ge=0)


class SystemDesignScores(BaseModel):
    microservices: int = Field(ge=1, le=10)
    monolithic: int = Field(ge=1, le=10)
    cloud_native: int = Field(ge=1, le=10)
    database: int = Field(ge=1, le=10)
    security: int = Field(ge=1, le=10)


class MethodologyScores(BaseModel):
    agile: int = Field(ge=1, le=10)
    waterfall: int = Field(ge=1, le=10)
    devops: int = Field(ge=1, le=10)
    testing: int = Field(ge=1, le=10)
    documentation: int = Field(ge=1, le=10)


class TechnicalSkills(BaseModel):
    programming_languages: List[LanguageSkill] = Field(default_factory=list)
    frameworks_and_tools: List[ToolSkill] = Field(default_factory=list)
    system_design: SystemDesignScores
    methodologies: MethodologyScores


# =============================================================================
# PROFESSIONAL EXPERIENCE
# =============================================================================

class CurrentPosition(BaseModel):
    """Current or most recent role"""
    title: str
    company: str
    industry: str
    location: str
    start_date: date
    end_date: Optional[date] = None
    is_current_role: bool = True
    description: str = ""
    key_achievements: List[str] = Field(default_factory=list)
    team_size: Optional[int] = None
    direct_reports: Optional[int] = None


class PreviousPosition(BaseModel):
    title: str
    company: str
    industry: str
    location: str
    start_date: date
    end_date: date
    description: str = ""
    key_achievements: List[str] = Field(default_factory=list)
    team_size: Optional[int] = None
    technologies_used: List[str] = Field(default_factory=list)


class Education(BaseModel):
    degree: str
    field: str
    institution: str
    location: str
    graduation_year: int
    gpa: Optional[float] = None
    honors: Optional[List[str]] = None


class Certification(BaseModel):
    name: str
    issuer: str
    issue_date: date
    expiry_date: Optional[date] = None
    credential_id: Optional[str] = None


class ProfessionalExperience(BaseModel):
    current_position: CurrentPosition
    previous_positions: List[PreviousPosition] = Field(default_factory=list)  # Most recent first
    education: List[Education] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    years_of_experience: int = Field(default=0, ge=0)


# =============================================================================
# INTERVIEW PERFORMANCE
# =============================================================================

class BehavioralScores(BaseModel):
    overall: int = Field(ge=1, le=10)
    communication: int = Field(ge=1, le=10)
    problem_solving: int = Field(ge=1, le=10)
    leadership: int = Field(ge=1, le=10)
    teamwork: int = Field(ge=1, le=10)


class TechnicalScores(BaseModel):
    coding: int = Field(ge=1, le=10)
    system_design: int = Field(ge=1, le=10)
    troubleshooting: int = Field(ge=1, le=10)
    best_practices: int = Field(ge=1, le=10)


class CulturalScores(BaseModel):
    company_fit: int = Field(ge=1, le=10)
    values_alignment: int = Field(ge=1, le=10)
    collaboration: int = Field(ge=1, le=10)
    innovation: int = Field(ge=1, le=10)


class SimulatedInterviewScores(BaseModel):
    behavioral: BehavioralScores
    technical: TechnicalScores
    cultural: CulturalScores

    def group_means(self) -> Dict[str, float]:
        """Mean sub-score of each of the three score groups"""
        means = {}
        for group_name in ("behavioral", "technical", "cultural"):
            values = list(getattr(self, group_name).model_dump().values())
            means[group_name] = sum(values) / len(values)
        return means

    def overall_mean(self) -> float:
        """Mean of the three group means"""
        means = self.group_means()
        return sum(means.values()) / len(means)


class ResponsePatterns(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    answer_structure: AnswerStructure
    storytelling_style: StorytellingStyle
    enthusiasm_level: int = Field(ge=1, le=10)
    self_awareness_level: int = Field(ge=1, le=10)


class InterviewPerformance(BaseModel):
    simulated_interview_scores: SimulatedInterviewScores
    response_patterns: ResponsePatterns
    potential_red_flags: List[str] = Field(default_factory=list)
    key_strengths: List[str] = Field(default_factory=list)


# =============================================================================
# GENERATION PARAMETERS
# =============================================================================

class CandidateGenerationParams(BaseModel):
    """
    Configuration input for candidate generation.
    Unknown experience/quality values degrade to defaults instead of failing.
    """
    model_config = ConfigDict(use_enum_values=True)

    target_role: Optional[str] = None
    experience_level: ExperienceLevel = ExperienceLevel.MID
    personality_archetype: str = "balanced"  # Resolved by the archetype library
    technical_focus: List[str] = Field(default_factory=list)
    industry_background: Optional[str] = None
    location_preference: Optional[str] = None
    quality_level: Optional[QualityLevel] = None  # None = random mixed-quality policy
    quality_mix: Optional[QualityMix] = None  # Batch-only population mix
    flaws: List[str] = Field(default_factory=list)
    count: int = Field(default=1, ge=1)
    custom_requirements: List[str] = Field(default_factory=list)  # Provenance tags only

    @field_validator("experience_level", mode="before")
    @classmethod
    def _fallback_experience_level(cls, value: Any) -> Any:
        if value is None:
            return ExperienceLevel.MID
        valid = {level.value for level in ExperienceLevel}
        raw = value.value if isinstance(value, Enum) else value
        return raw if raw in valid else ExperienceLevel.MID

    @field_validator("quality_level", mode="before")
    @classmethod
    def _fallback_quality_level(cls, value: Any) -> Any:
        valid = {level.value for level in QualityLevel}
        raw = value.value if isinstance(value, Enum) else value
        return raw if raw in valid else None

    @field_validator("quality_mix", mode="before")
    @classmethod
    def _fallback_quality_mix(cls, value: Any) -> Any:
        valid = {mix.value for mix in QualityMix}
        raw = value.value if isinstance(value, Enum) else value
        return raw if raw in valid else None

    @field_validator("personality_archetype", mode="before")
    @classmethod
    def _fallback_archetype(cls, value: Any) -> Any:
        return value or "balanced"


# =============================================================================
# THE CANDIDATE
# =============================================================================

class Location(BaseModel):
    city: str
    state: str
    country: str = "USA"
    timezone: str = ""


class PersonalInfo(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    location: Location
    portfolio_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None


class CandidateMetadata(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    date_created: datetime
    last_updated: datetime
    version: str = "1.0.0"
    source: CandidateSource = CandidateSource.GENERATED
    generation_params: Dict[str, Any] = Field(default_factory=dict)
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None

    # Set when the candidate was degraded; flaws lists the flaw types applied
    quality_level: Optional[QualityLevel] = None
    flaws: List[str] = Field(default_factory=list)

    def add_tag(self, tag: str) -> None:
        """Append a tag once"""
        if tag and tag not in self.tags:
            self.tags.append(tag)


class Candidate(BaseModel):
    """
    Complete synthetic candidate profile.
    Self-contained: every field is materialized, nothing is derived at read time.
    """
    id: str
    personal_info: PersonalInfo
    personality: PersonalityTraits
    work_behavior: WorkBehaviorPatterns
    cognitive_profile: CognitiveProfile
    technical_skills: TechnicalSkills
    experience: ProfessionalExperience
    interview_performance: InterviewPerformance
    metadata: CandidateMetadata

    @property
    def full_name(self) -> str:
        return f"{self.personal_info.first_name} {self.personal_info.last_name}"

    def has_tag(self, tag: str) -> bool:
        return tag in self.metadata.tags
