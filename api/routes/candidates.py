"""
Candidate API routes.
Wraps the candidate factory for services that need synthetic candidates.
"""
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field
from typing import Optional, Dict, List
import random

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from candidates import Candidate, CandidateGenerationParams, generate_batch, generate_candidate
from candidate_factory import get_default_enhancer, list_archetypes, list_flaws

router = APIRouter(prefix="/api", tags=["candidates"])

# In-memory candidate storage (use a DB in production)
candidates_store: Dict[str, Candidate] = {}


class ArchetypeInfo(BaseModel):
    key: str
    name: str
    description: str
    traits: Dict[str, int]
    problematic: bool


class FlawInfo(BaseModel):
    type: str
    severity: str
    description: str
    impact: Dict[str, int]


class BatchResponse(BaseModel):
    requested: int
    generated: int
    candidates: List[Candidate] = Field(default_factory=list)


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed) if seed is not None else random.Random()


@router.get("/archetypes", response_model=list[ArchetypeInfo])
async def get_archetypes(include_problematic: bool = False):
    """List personality archetypes."""
    return list_archetypes(include_problematic=include_problematic)


@router.get("/flaws", response_model=list[FlawInfo])
async def get_flaws():
    """List injectable flaws."""
    return list_flaws()


@router.post("/candidates", response_model=Candidate)
def create_candidate(
    params: CandidateGenerationParams,
    seed: Optional[int] = Query(None, description="Random seed for a reproducible candidate"),
    enhance: Optional[bool] = Query(None, description="Force LLM enhancement on or off"),
):
    """Generate one candidate."""
    candidate = generate_candidate(params, _rng(seed), get_default_enhancer(enhance))
    candidates_store[candidate.id] = candidate
    return candidate


@router.post("/candidates/batch", response_model=BatchResponse)
def create_candidate_batch(
    params: CandidateGenerationParams,
    seed: Optional[int] = Query(None, description="Random seed for a reproducible batch"),
    enhance: Optional[bool] = Query(None, description="Force LLM enhancement on or off"),
):
    """Generate params.count candidates, optionally as a quality mix."""
    batch = generate_batch(params, rng=_rng(seed), enhancer=get_default_enhancer(enhance))
    for candidate in batch:
        candidates_store[candidate.id] = candidate

    return BatchResponse(requested=params.count, generated=len(batch), candidates=batch)


@router.get("/candidates/{candidate_id}", response_model=Candidate)
async def get_candidate(candidate_id: str):
    """Fetch a previously generated candidate."""
    if candidate_id not in candidates_store:
        raise HTTPException(status_code=404, detail="Candidate not found")

    return candidates_store[candidate_id]
