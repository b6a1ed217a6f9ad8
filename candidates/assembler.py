"""
Profile Assembler

Builds one complete, internally consistent candidate from generation params:

1. Resolve the archetype and draw personality traits
2. Derive work behavior, cognition and technical skills
3. Synthesize a career history that scales with experience level
4. Score predicted interview performance
5. Generate identity details and provenance metadata

Identity and prose come from Faker, seeded from the injected rng so a fixed
seed reproduces the whole profile.
"""

import random
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from faker import Faker

from .archetypes import get_archetype
from .candidate_schema import (
    Candidate,
    CandidateGenerationParams,
    CandidateMetadata,
    CandidateSource,
    Certification,
    CurrentPosition,
    Education,
    ExperienceLevel,
    Location,
    PersonalInfo,
    PreviousPosition,
    ProfessionalExperience,
    TechnicalSkills,
)
from .derivation import (
    derive_work_behavior,
    generate_cognitive_profile,
    generate_personality_traits,
    generate_technical_skills,
    score_interview,
    to_experience_level,
)

CANDIDATE_VERSION = "1.0.0"

# Inclusive ranges of total years of experience per level
YEARS_OF_EXPERIENCE: Dict[ExperienceLevel, Tuple[int, int]] = {
    ExperienceLevel.ENTRY: (0, 2),
    ExperienceLevel.JUNIOR: (2, 4),
    ExperienceLevel.MID: (4, 8),
    ExperienceLevel.SENIOR: (8, 15),
    ExperienceLevel.LEAD: (12, 20),
    ExperienceLevel.PRINCIPAL: (15, 25),
}

MAX_PREVIOUS_POSITIONS = 3

LEVEL_ORDER: List[ExperienceLevel] = list(ExperienceLevel)

TITLES_BY_LEVEL: Dict[ExperienceLevel, List[str]] = {
    ExperienceLevel.ENTRY: ["Junior Developer", "Software Engineer I", "Associate Developer"],
    ExperienceLevel.JUNIOR: ["Software Engineer", "Frontend Developer", "Backend Developer"],
    ExperienceLevel.MID: ["Senior Software Engineer", "Full Stack Developer", "Software Engineer II"],
    ExperienceLevel.SENIOR: ["Senior Software Engineer", "Lead Developer", "Principal Software Engineer"],
    ExperienceLevel.LEAD: ["Engineering Lead", "Tech Lead", "Senior Engineering Lead"],
    ExperienceLevel.PRINCIPAL: ["Principal Engineer", "Staff Engineer", "Architect"],
}

COMPANY_NAMES = [
    "TechCorp Solutions", "InnovateLabs", "DigitalForge", "CloudNine Systems",
    "DataDriven Inc", "NextGen Technologies", "AlphaSoftware", "BetaDynamics",
    "GammaInnovations", "DeltaSystems", "EpsilonTech", "ZetaDigital",
    "EtaSolutions", "ThetaPlatforms", "IotaTechnologies", "KappaSystems",
]

INDUSTRIES = [
    "Technology", "Finance", "Healthcare", "E-commerce", "SaaS",
    "Consulting", "Manufacturing", "Media", "Education", "Retail",
]

DEGREES = ["Bachelor of Science", "Bachelor of Arts", "Master of Science", "Master of Engineering"]
FIELDS_OF_STUDY = ["Computer Science", "Software Engineering", "Information Technology", "Computer Engineering"]
INSTITUTIONS = ["State University", "Tech Institute", "College of Engineering", "University of Technology"]

CERTIFICATIONS = [
    ("AWS Certified Developer", "Amazon Web Services"),
    ("Google Cloud Professional", "Google"),
    ("Microsoft Certified: Azure Developer", "Microsoft"),
    ("Certified Kubernetes Administrator", "Cloud Native Computing Foundation"),
    ("Professional Scrum Master", "Scrum.org"),
    ("Certified Java Developer", "Oracle"),
]


def create_faker(rng: random.Random) -> Faker:
    """A Faker instance seeded from the rng"""
    fake = Faker("en_US")
    fake.seed_instance(rng.getrandbits(32))
    return fake


def _chance(rng: random.Random, probability: float) -> bool:
    return rng.random() < probability


def _random_location(fake: Faker) -> str:
    return f"{fake.city()}, {fake.state_abbr()}"


def _days_between(rng: random.Random, start: date, end: date) -> date:
    """Random date in [start, end]"""
    if end <= start:
        return start
    return start + timedelta(days=rng.randint(0, (end - start).days))


# =============================================================================
# CAREER HISTORY
# =============================================================================

def draw_years_of_experience(experience_level, rng: random.Random) -> int:
    low, high = YEARS_OF_EXPERIENCE[to_experience_level(experience_level)]
    return rng.randint(low, high)


def previous_title(experience_level, steps_back: int, rng: random.Random) -> str:
    """A title one or more seniority steps below the given level"""
    index = LEVEL_ORDER.index(to_experience_level(experience_level))
    earlier = LEVEL_ORDER[max(0, index - steps_back)]
    return rng.choice(TITLES_BY_LEVEL[earlier])


def build_previous_positions(
    experience_level,
    years_of_experience: int,
    current_start: date,
    technical_skills: TechnicalSkills,
    current_company: str,
    fake: Faker,
    rng: random.Random,
    today: date,
) -> List[PreviousPosition]:
    """
    Lay out earlier roles backwards from the current start date.

    Roles are returned most recent first and never overlap each other or the
    current position.
    """
    count = min(rng.randint(0, years_of_experience // 2), MAX_PREVIOUS_POSITIONS)
    if count == 0:
        return []

    career_start = today - timedelta(days=max(years_of_experience, 1) * 365)
    span_days = max((current_start - career_start).days, count * 60)
    slot_days = span_days // count

    technologies = (
        [lang.language for lang in technical_skills.programming_languages]
        + [tool.name for tool in technical_skills.frameworks_and_tools]
    )
    other_companies = [c for c in COMPANY_NAMES if c != current_company]

    positions = []
    cursor = current_start
    for index in range(count):
        end_date = cursor - timedelta(days=rng.randint(0, min(30, slot_days // 4)))
        tenure_days = max(30, int(slot_days * rng.uniform(0.6, 0.9)))
        start_date = end_date - timedelta(days=tenure_days)

        positions.append(PreviousPosition(
            title=previous_title(experience_level, index + 1, rng),
            company=rng.choice(other_companies),
            industry=rng.choice(INDUSTRIES),
            location=_random_location(fake),
            start_date=start_date,
            end_date=end_date,
            description=fake.paragraph(),
            key_achievements=[fake.sentence() for _ in range(rng.randint(1, 3))],
            team_size=rng.randint(1, 10) if _chance(rng, 0.5) else None,
            technologies_used=rng.sample(technologies, k=min(len(technologies), rng.randint(2, 5))),
        ))
        cursor = start_date

    return positions


def build_experience(
    params: CandidateGenerationParams,
    technical_skills: TechnicalSkills,
    fake: Faker,
    rng: random.Random,
    today: Optional[date] = None,
) -> ProfessionalExperience:
    """Synthesize current role, earlier roles, education and certifications"""
    today = today or date.today()
    level = to_experience_level(params.experience_level)
    years = draw_years_of_experience(level, rng)

    current_company = rng.choice(COMPANY_NAMES)
    earliest_start = today - timedelta(days=max(years * 365, 90))
    start_date = _days_between(rng, earliest_start, today - timedelta(days=30))
    is_current_role = _chance(rng, 0.7)

    current = CurrentPosition(
        title=params.target_role or rng.choice(TITLES_BY_LEVEL[level]),
        company=current_company,
        industry=params.industry_background or rng.choice(INDUSTRIES),
        location=_random_location(fake),
        start_date=start_date,
        end_date=None if is_current_role else _days_between(rng, max(start_date, today - timedelta(days=365)), today),
        is_current_role=is_current_role,
        description=" ".join(fake.paragraphs(nb=2)),
        key_achievements=[fake.sentence() for _ in range(rng.randint(2, 4))],
        team_size=rng.randint(2, 15) if _chance(rng, 0.5) else None,
        direct_reports=rng.randint(1, 8) if level in (ExperienceLevel.LEAD, ExperienceLevel.PRINCIPAL) else None,
    )

    previous = build_previous_positions(
        level, years, start_date, technical_skills, current_company, fake, rng, today
    )

    graduation_year = today.year - years - rng.randint(0, 1)
    education = [Education(
        degree=rng.choice(DEGREES),
        field=rng.choice(FIELDS_OF_STUDY),
        institution=rng.choice(INSTITUTIONS),
        location=_random_location(fake),
        graduation_year=graduation_year,
        gpa=round(rng.uniform(3.0, 4.0), 1) if _chance(rng, 0.5) else None,
        honors=[fake.catch_phrase() for _ in range(rng.randint(1, 2))] if _chance(rng, 0.3) else None,
    )]

    certifications = []
    if _chance(rng, 0.6):
        for name, issuer in rng.sample(CERTIFICATIONS, k=rng.randint(1, 3)):
            issue_date = _days_between(rng, today - timedelta(days=3 * 365), today)
            certifications.append(Certification(
                name=name,
                issuer=issuer,
                issue_date=issue_date,
                expiry_date=issue_date + timedelta(days=rng.randint(365, 3 * 365)) if _chance(rng, 0.5) else None,
                credential_id=fake.bothify("??########").upper() if _chance(rng, 0.5) else None,
            ))

    return ProfessionalExperience(
        current_position=current,
        previous_positions=previous,
        education=education,
        certifications=certifications,
        years_of_experience=years,
    )


# =============================================================================
# IDENTITY
# =============================================================================

def parse_location(location_preference: str, fake: Faker) -> Location:
    """Parse 'City, ST' (state optional) into a Location"""
    parts = [part.strip() for part in location_preference.split(",")]
    city = parts[0] or fake.city()
    state = parts[1] if len(parts) > 1 and parts[1] else fake.state_abbr()
    return Location(city=city, state=state, country="USA", timezone=fake.timezone())


def build_personal_info(params: CandidateGenerationParams, fake: Faker, rng: random.Random) -> PersonalInfo:
    first_name = fake.first_name()
    last_name = fake.last_name()
    handle = f"{first_name}{last_name}".lower().replace("'", "")

    if params.location_preference:
        location = parse_location(params.location_preference, fake)
    else:
        location = Location(city=fake.city(), state=fake.state_abbr(), country="USA", timezone=fake.timezone())

    return PersonalInfo(
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name}.{last_name}@{fake.free_email_domain()}".lower().replace("'", ""),
        phone=fake.phone_number(),
        location=location,
        portfolio_url=fake.url() if _chance(rng, 0.4) else None,
        linkedin_url=f"https://linkedin.com/in/{handle}" if _chance(rng, 0.7) else None,
        github_url=f"https://github.com/{handle}" if _chance(rng, 0.6) else None,
    )


def build_tags(params: CandidateGenerationParams, archetype_key: str) -> List[str]:
    tags = [to_experience_level(params.experience_level).value, archetype_key]
    for tag in list(params.technical_focus) + list(params.custom_requirements):
        if tag and tag not in tags:
            tags.append(tag)
    return tags


# =============================================================================
# ASSEMBLY
# =============================================================================

def assemble_candidate(
    params: CandidateGenerationParams,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> Candidate:
    """
    Assemble a complete candidate from params.

    Args:
        params: Generation parameters
        rng: Random source (a fresh unseeded one if omitted)
        today: Reference date for the career timeline (defaults to today)

    Returns:
        A clean candidate with no flaws or quality degradation applied
    """
    rng = rng or random.Random()
    fake = create_faker(rng)

    archetype = get_archetype(params.personality_archetype)
    personality = generate_personality_traits(archetype, rng)
    work_behavior = derive_work_behavior(personality, rng)
    cognitive_profile = generate_cognitive_profile(rng)
    technical_skills = generate_technical_skills(params.experience_level, params.technical_focus, rng)
    experience = build_experience(params, technical_skills, fake, rng, today)
    interview_performance = score_interview(personality, cognitive_profile, technical_skills, rng)
    personal_info = build_personal_info(params, fake, rng)

    now = datetime.now(timezone.utc)

    return Candidate(
        id=uuid.UUID(int=rng.getrandbits(128), version=4).hex,
        personal_info=personal_info,
        personality=personality,
        work_behavior=work_behavior,
        cognitive_profile=cognitive_profile,
        technical_skills=technical_skills,
        experience=experience,
        interview_performance=interview_performance,
        metadata=CandidateMetadata(
            date_created=now,
            last_updated=now,
            version=CANDIDATE_VERSION,
            source=CandidateSource.GENERATED,
            generation_params=params.model_dump(mode="json"),
            tags=build_tags(params, archetype.key),
        ),
    )
