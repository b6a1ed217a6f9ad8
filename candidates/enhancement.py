"""
Candidate Enhancement

Optional refinement of a generated candidate by an external LLM.

The contract:
- An enhancer takes (PersonalityTraits, CandidateGenerationParams) and returns
  an EnhancementResult: either enhanced sections or a failure reason.
  It does not raise.
- apply_enhancement() is the fallback combinator: it bounds the call with a
  timeout and returns the deterministic candidate unchanged on any failure.

Enhancement only adds; a candidate is complete without it.
"""

import json
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

from langchain_anthropic import ChatAnthropic
from langchain_core.messages import SystemMessage, HumanMessage
from pydantic import BaseModel, ValidationError

from prompts.enhancement_prompt import get_enhancement_prompt, get_enhancement_system_prompt

from .candidate_schema import (
    Candidate,
    CandidateGenerationParams,
    CandidateSource,
    InterviewPerformance,
    PersonalityTraits,
    ProfessionalExperience,
    QualityLevel,
)
from .config import Settings, get_settings
from .flaws import PROBLEMATIC_QUALITY_LEVELS, RED_FLAGS_TAG

logger = logging.getLogger(__name__)

ENHANCED_TAG = "ai-enhanced"
ENHANCED_VERSION = "2.0.0-ai-enhanced"
ENHANCER_THREAD_NAME = "candidate-enhancer"

PROBLEMATIC_LEVEL_VALUES = tuple(level.value for level in PROBLEMATIC_QUALITY_LEVELS)


class EnhancedProfile(BaseModel):
    """Sections an enhancer may supply; missing sections keep generated values"""
    personality: Optional[PersonalityTraits] = None
    experience: Optional[ProfessionalExperience] = None
    interview_performance: Optional[InterviewPerformance] = None


class EnhancementResult(BaseModel):
    ok: bool
    data: Optional[EnhancedProfile] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, data: EnhancedProfile) -> "EnhancementResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "EnhancementResult":
        return cls(ok=False, error=error)


class CandidateEnhancer(Protocol):
    def enhance(
        self, traits: PersonalityTraits, params: CandidateGenerationParams
    ) -> EnhancementResult:
        ...


def parse_json_response(response_text: str) -> Dict[str, Any]:
    """Parse JSON from an LLM response, with or without a code fence."""
    try:
        text = response_text
        if "```json" in text:
            text = text.split("```json")[1].split("```")[0]
        elif "```" in text:
            text = text.split("```")[1].split("```")[0]

        parsed = json.loads(text.strip())
        return parsed if isinstance(parsed, dict) else {}
    except json.JSONDecodeError:
        return {}


class AnthropicEnhancer:
    """Enhancer backed by Claude through LangChain"""

    def __init__(self, settings: Optional[Settings] = None, llm: Optional[Any] = None):
        self.settings = settings or get_settings()
        self.llm = llm or ChatAnthropic(
            model=self.settings.enhancer_model,
            temperature=self.settings.enhancer_temperature,
            max_tokens=self.settings.enhancer_max_tokens,
            timeout=self.settings.enhancer_timeout_seconds,
        )

    def enhance(
        self, traits: PersonalityTraits, params: CandidateGenerationParams
    ) -> EnhancementResult:
        messages = [
            SystemMessage(content=get_enhancement_system_prompt()),
            HumanMessage(content=get_enhancement_prompt(
                traits.model_dump(), params.model_dump(mode="json")
            )),
        ]

        try:
            response = self.llm.invoke(messages)
        except Exception as e:
            return EnhancementResult.failure(f"LLM call failed: {e}")

        parsed = parse_json_response(response.content)
        if not parsed:
            return EnhancementResult.failure("Response was not valid JSON")

        try:
            profile = EnhancedProfile(**parsed)
        except ValidationError as e:
            return EnhancementResult.failure(f"Response did not match the profile schema: {e.error_count()} errors")

        if profile.personality is None and profile.experience is None and profile.interview_performance is None:
            return EnhancementResult.failure("Response contained no usable sections")

        return EnhancementResult.success(profile)


def call_with_timeout(
    enhancer: CandidateEnhancer,
    traits: PersonalityTraits,
    params: CandidateGenerationParams,
    timeout: float,
) -> EnhancementResult:
    """
    Run an enhancer call, turning timeouts and stray errors into failed results.

    The call runs on a daemon thread. A call that overruns the timeout is
    abandoned, not interrupted: it keeps running in the background but never
    blocks interpreter exit.
    """
    outcome: Dict[str, Any] = {}

    def run() -> None:
        try:
            outcome["result"] = enhancer.enhance(traits, params)
        except Exception as e:
            outcome["error"] = e

    worker = threading.Thread(target=run, name=ENHANCER_THREAD_NAME, daemon=True)
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        return EnhancementResult.failure(f"Enhancement timed out after {timeout}s")
    if "error" in outcome:
        e = outcome["error"]
        return EnhancementResult.failure(f"Enhancer raised {type(e).__name__}: {e}")

    result = outcome.get("result")
    if not isinstance(result, EnhancementResult):
        return EnhancementResult.failure("Enhancer returned an unexpected result type")
    return result


def merge_enhancement(candidate: Candidate, profile: EnhancedProfile) -> Candidate:
    """
    Copy enhanced sections onto a candidate.

    Generated quality is never undone:
    - flawed candidates keep experience, personality and interview scores,
      since flaw mutators rewrite all three
    - poor and terrible candidates keep their problematic personality
    - any candidate degraded below excellent keeps its interview scores
    """
    enhanced = candidate.model_copy(deep=True)
    metadata = enhanced.metadata
    flawed = bool(metadata.flaws) or RED_FLAGS_TAG in metadata.tags
    problematic = flawed or metadata.quality_level in PROBLEMATIC_LEVEL_VALUES
    degraded = problematic or metadata.quality_level not in (None, QualityLevel.EXCELLENT.value)

    if profile.experience is not None and not flawed:
        enhanced.experience = profile.experience
    if profile.personality is not None and not problematic:
        enhanced.personality = profile.personality
    if profile.interview_performance is not None and not degraded:
        enhanced.interview_performance = profile.interview_performance

    metadata.source = CandidateSource.AI_ENHANCED.value
    metadata.version = ENHANCED_VERSION
    metadata.last_updated = datetime.now(timezone.utc)
    metadata.add_tag(ENHANCED_TAG)
    return enhanced


def apply_enhancement(
    candidate: Candidate,
    params: CandidateGenerationParams,
    enhancer: Optional[CandidateEnhancer],
    timeout: Optional[float] = None,
) -> Candidate:
    """
    Enhance a candidate, falling back to it unchanged on any failure.

    Args:
        candidate: The deterministic, fully assembled candidate
        params: Params the candidate was generated from
        enhancer: Adapter to call; None skips enhancement
        timeout: Per-call timeout in seconds (settings default if omitted)

    Returns:
        The enhanced candidate, or the input candidate unchanged
    """
    if enhancer is None:
        return candidate

    timeout = timeout if timeout is not None else get_settings().enhancer_timeout_seconds
    result = call_with_timeout(enhancer, candidate.personality, params, timeout)

    if not result.ok or result.data is None:
        logger.warning("Enhancement failed for candidate %s, using generated profile: %s", candidate.id, result.error)
        return candidate

    return merge_enhancement(candidate, result.data)
