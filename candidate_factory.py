"""
Candidate Factory

Convenience functions for creating synthetic candidates.
This is the recommended entry point; it wires the LLM enhancer from settings
so callers only pass what they care about.

Usage:
    from candidate_factory import (
        create_candidate,
        create_candidate_batch,
        create_candidate_pool,
        save_candidates_to_json,
    )

    # One senior leader
    candidate = create_candidate(experience_level="senior", personality_archetype="leader")

    # Ten backend engineers, 60/30/10 good/average/bad
    batch = create_candidate_batch(10, target_role="Backend Engineer", quality_mix="standard")

    # A realistic hiring pool, written to disk
    pool = create_candidate_pool(50, seed=7)
    save_candidates_to_json(pool, "output/pool.json")
"""

from typing import Dict, Any, Optional, List
from pathlib import Path
import json
import random
import threading

from candidates import (
    AnthropicEnhancer,
    Candidate,
    CandidateEnhancer,
    CandidateGenerationParams,
    QualityMix,
    generate_batch,
    generate_candidate,
    get_settings,
)
from candidates import list_archetypes as _list_archetypes
from candidates import list_flaws as _list_flaws
from candidates.generator import ProgressCallback


# =============================================================================
# ENHANCER
# =============================================================================

def get_default_enhancer(enhance: Optional[bool] = None) -> Optional[CandidateEnhancer]:
    """
    The enhancer to use, or None.

    Args:
        enhance: Force enhancement on or off; None follows
                 CANDIDATE_ENHANCEMENT_ENABLED
    """
    enabled = get_settings().enhancement_enabled if enhance is None else enhance
    return AnthropicEnhancer() if enabled else None


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed) if seed is not None else random.Random()


# =============================================================================
# SINGLE CANDIDATE
# =============================================================================

def create_candidate(
    seed: Optional[int] = None,
    enhance: Optional[bool] = None,
    **params: Any,
) -> Candidate:
    """
    Create one candidate.

    Args:
        seed: Fix the random source for a reproducible candidate
        enhance: Force LLM enhancement on or off (settings default)
        **params: Any CandidateGenerationParams field, e.g.
            target_role, experience_level, personality_archetype,
            technical_focus, quality_level, flaws

    Returns:
        A complete Candidate

    Example:
        candidate = create_candidate(
            experience_level="entry",
            quality_level="terrible",
            flaws=["job_hopper"],
        )
    """
    generation_params = CandidateGenerationParams(**params)
    return generate_candidate(generation_params, _rng(seed), get_default_enhancer(enhance))


# =============================================================================
# BATCHES
# =============================================================================

def create_candidate_batch(
    count: int,
    seed: Optional[int] = None,
    enhance: Optional[bool] = None,
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
    on_progress: Optional[ProgressCallback] = None,
    **params: Any,
) -> List[Candidate]:
    """
    Create `count` independent candidates.

    Pass quality_mix="standard" for a 60/30/10 good/average/bad population,
    or leave it unset for candidates sharing the same params.

    Args:
        count: Number of candidates (>= 1)
        seed: Fix the random source for a reproducible batch
        enhance: Force LLM enhancement on or off (settings default)
        max_workers: Parallel generation cap (settings default)
        cancel_event: Set to stop the batch early
        on_progress: Called as (percent, completed, total, message)
        **params: Any other CandidateGenerationParams field

    Returns:
        Generated candidates (fewer than count if cancelled)
    """
    generation_params = CandidateGenerationParams(count=count, **params)
    return generate_batch(
        generation_params,
        rng=_rng(seed),
        enhancer=get_default_enhancer(enhance),
        max_workers=max_workers,
        cancel_event=cancel_event,
        on_progress=on_progress,
    )


def create_candidate_pool(
    count: int,
    seed: Optional[int] = None,
    enhance: Optional[bool] = None,
    **params: Any,
) -> List[Candidate]:
    """
    Create a realistic hiring pool: 40% excellent, 30% good, 20% poor,
    10% terrible, shuffled.
    """
    params["quality_mix"] = QualityMix.REALISTIC
    return create_candidate_batch(count, seed=seed, enhance=enhance, **params)


# =============================================================================
# PERSISTENCE
# =============================================================================

def save_candidates_to_json(candidates: List[Candidate], json_path: str) -> None:
    """Save candidates as a JSON array of self-contained records"""
    path = Path(json_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([c.model_dump(mode="json") for c in candidates], f, indent=2)


def load_candidates_from_json(json_path: str) -> List[Candidate]:
    """Load candidates saved by save_candidates_to_json (a single record also works)"""
    path = Path(json_path)
    if not path.exists():
        raise FileNotFoundError(f"Candidate file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    records = data if isinstance(data, list) else [data]
    return [Candidate(**record) for record in records]


# =============================================================================
# CATALOGUES
# =============================================================================

def list_archetypes(include_problematic: bool = False) -> List[Dict[str, Any]]:
    """
    List archetypes with their base traits.

    Returns:
        List of dicts with 'key', 'name', 'description', 'traits', 'problematic'
    """
    entries = [(a, False) for a in _list_archetypes()]
    if include_problematic:
        entries += [(a, True) for a in _list_archetypes(problematic=True)]

    return [
        {
            "key": archetype.key,
            "name": archetype.name,
            "description": archetype.description,
            "traits": archetype.traits.model_dump(),
            "problematic": problematic,
        }
        for archetype, problematic in entries
    ]


def list_flaws() -> List[Dict[str, Any]]:
    """
    List injectable flaws.

    Returns:
        List of dicts with 'type', 'severity', 'description', 'impact'
    """
    return [flaw.model_dump() for flaw in _list_flaws()]


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    # Generation
    "create_candidate",
    "create_candidate_batch",
    "create_candidate_pool",
    "get_default_enhancer",

    # Persistence
    "save_candidates_to_json",
    "load_candidates_from_json",

    # Catalogues
    "list_archetypes",
    "list_flaws",
]
