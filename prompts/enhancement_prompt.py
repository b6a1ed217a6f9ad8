"""
Candidate enhancement prompt - asks the LLM to enrich a generated profile.
"""

from typing import Dict, Any
import json


def get_enhancement_system_prompt() -> str:
    return """You are an expert technical recruiter who writes realistic candidate profiles.

You receive a candidate's Big Five personality scores and the parameters used to generate them.
Produce a richer, internally consistent profile for that person.

Rules:
- Keep personality scores within 1-100 and close to the scores you were given
- Keep every interview score within 1-10
- Dates use ISO format (YYYY-MM-DD); earlier roles end before the current role starts
- Respond with valid JSON only."""


def get_enhancement_prompt(traits: Dict[str, Any], params: Dict[str, Any]) -> str:
    """
    Build the user prompt for one candidate.

    Args:
        traits: Personality traits (openness, conscientiousness, ...)
        params: Serialized generation params
    """
    technical_focus = ", ".join(params.get("technical_focus") or []) or "Full-stack development"
    custom = params.get("custom_requirements") or []
    custom_text = "\n".join(f"- {req}" for req in custom) if custom else "- None"

    return f"""## Candidate Brief

**Role:** {params.get("target_role") or "Software Engineer"}
**Experience Level:** {params.get("experience_level") or "mid"}
**Technical Focus:** {technical_focus}
**Industry Background:** {params.get("industry_background") or "Technology"}

**Personality Traits (1-100):**
- Openness: {traits.get("openness")} (how open to new experiences)
- Conscientiousness: {traits.get("conscientiousness")} (how organized and detail-oriented)
- Extraversion: {traits.get("extraversion")} (how outgoing and sociable)
- Agreeableness: {traits.get("agreeableness")} (how cooperative and empathetic)
- Neuroticism: {traits.get("neuroticism")} (how emotionally reactive)

**Additional Requirements:**
{custom_text}

---

Respond with this JSON structure (omit any section you cannot fill in):

```json
{json.dumps(_response_shape(), indent=2)}
```"""


def _response_shape() -> Dict[str, Any]:
    return {
        "personality": {
            "openness": 0, "conscientiousness": 0, "extraversion": 0,
            "agreeableness": 0, "neuroticism": 0,
        },
        "experience": {
            "current_position": {
                "title": "", "company": "", "industry": "", "location": "",
                "start_date": "YYYY-MM-DD", "end_date": None, "is_current_role": True,
                "description": "", "key_achievements": [""], "team_size": None, "direct_reports": None,
            },
            "previous_positions": [{
                "title": "", "company": "", "industry": "", "location": "",
                "start_date": "YYYY-MM-DD", "end_date": "YYYY-MM-DD",
                "description": "", "key_achievements": [""], "technologies_used": [""],
            }],
            "education": [{
                "degree": "", "field": "", "institution": "", "location": "", "graduation_year": 0,
            }],
            "certifications": [{"name": "", "issuer": "", "issue_date": "YYYY-MM-DD"}],
            "years_of_experience": 0,
        },
        "interview_performance": {
            "simulated_interview_scores": {
                "behavioral": {"overall": 0, "communication": 0, "problem_solving": 0, "leadership": 0, "teamwork": 0},
                "technical": {"coding": 0, "system_design": 0, "troubleshooting": 0, "best_practices": 0},
                "cultural": {"company_fit": 0, "values_alignment": 0, "collaboration": 0, "innovation": 0},
            },
            "response_patterns": {
                "answer_structure": "concise|detailed|comprehensive|storytelling",
                "storytelling_style": "STAR|CAR|PAR|narrative",
                "enthusiasm_level": 0,
                "self_awareness_level": 0,
            },
            "potential_red_flags": [""],
            "key_strengths": [""],
        },
    }
