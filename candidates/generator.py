"""
Candidate Generator

Entry points for producing finished candidates:

1. generate_candidate(): assemble one profile, apply the quality policy,
   optionally enhance it
2. generate_batch(): generate `count` independent candidates in parallel,
   optionally as a fixed-proportion mixed-quality population

Each batch member gets its own seed drawn up front, so a seeded batch is
reproducible regardless of thread scheduling.
"""

import logging
import math
import random
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .assembler import assemble_candidate
from .candidate_schema import (
    Candidate,
    CandidateGenerationParams,
    QualityLevel,
    QualityMix,
)
from .config import get_settings
from .enhancement import CandidateEnhancer, apply_enhancement
from .flaws import FlawType, apply_flaws, inject_quality, known_flaws

logger = logging.getLogger(__name__)

# Chance that a candidate with no quality level comes out poor
RANDOM_BAD_PROBABILITY = 0.3

MIXED_BATCH_TAG = "mixed-batch"

ProgressCallback = Callable[[float, int, int, str], None]


# =============================================================================
# QUALITY MIXES
# =============================================================================

class MixBucket(BaseModel):
    """One slice of a mixed-quality population"""
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    label: str
    share: float
    quality_level: QualityLevel
    flaws: List[FlawType] = Field(default_factory=list)


QUALITY_MIXES: Dict[QualityMix, List[MixBucket]] = {
    QualityMix.STANDARD: [
        MixBucket(label="good", share=0.6, quality_level=QualityLevel.GOOD),
        MixBucket(label="average", share=0.3, quality_level=QualityLevel.AVERAGE,
                  flaws=[FlawType.ATTENTION_ISSUES]),
        MixBucket(label="bad", share=0.1, quality_level=QualityLevel.POOR,
                  flaws=[FlawType.SKILL_EXAGGERATION, FlawType.POOR_COMMUNICATION]),
    ],
    QualityMix.REALISTIC: [
        MixBucket(label="excellent", share=0.4, quality_level=QualityLevel.EXCELLENT),
        MixBucket(label="good", share=0.3, quality_level=QualityLevel.GOOD),
        MixBucket(label="poor", share=0.2, quality_level=QualityLevel.POOR),
        MixBucket(label="terrible", share=0.1, quality_level=QualityLevel.TERRIBLE),
    ],
}


def split_counts(count: int, shares: Sequence[float]) -> List[int]:
    """Floor each share of count; the remainder goes to the last bucket"""
    counts = [math.floor(count * share) for share in shares[:-1]]
    counts.append(count - sum(counts))
    return counts


# =============================================================================
# SINGLE CANDIDATE
# =============================================================================

def generate_candidate(
    params: CandidateGenerationParams,
    rng: Optional[random.Random] = None,
    enhancer: Optional[CandidateEnhancer] = None,
    timeout: Optional[float] = None,
) -> Candidate:
    """
    Generate one finished candidate.

    Quality policy:
    - quality_level set: degrade to that level, then apply the explicit flaws
      or flaws auto-selected for the level
    - no quality level but explicit flaws: apply just those flaws
    - neither: 30% of candidates come out poor with auto-selected flaws

    Args:
        params: Generation parameters
        rng: Random source (a fresh unseeded one if omitted)
        enhancer: Optional external enhancer; failures fall back silently
        timeout: Per-call enhancement timeout in seconds
    """
    rng = rng or random.Random()
    candidate = assemble_candidate(params, rng)

    flaws = known_flaws(params.flaws)
    quality_level = params.quality_level
    if quality_level is None and not flaws and rng.random() < RANDOM_BAD_PROBABILITY:
        quality_level = QualityLevel.POOR

    if quality_level is not None:
        inject_quality(candidate, quality_level, flaws, rng)
    elif flaws:
        apply_flaws(candidate, flaws, rng)

    return apply_enhancement(candidate, params, enhancer, timeout)


# =============================================================================
# BATCH GENERATION
# =============================================================================

class _BatchJob(BaseModel):
    index: int
    seed: int
    params: CandidateGenerationParams
    extra_tags: List[str] = Field(default_factory=list)


def _plan_jobs(params: CandidateGenerationParams, rng: random.Random) -> List[_BatchJob]:
    """Expand batch params into one job per candidate"""
    base_requirements = list(params.custom_requirements)
    jobs = []

    if params.quality_mix is None:
        for i in range(params.count):
            job_params = params.model_copy(update={
                "count": 1,
                "custom_requirements": base_requirements + [f"variation-{i + 1}"],
            })
            jobs.append(_BatchJob(index=i, seed=rng.getrandbits(64), params=job_params))
        return jobs

    buckets = QUALITY_MIXES[QualityMix(params.quality_mix)]
    counts = split_counts(params.count, [bucket.share for bucket in buckets])
    for bucket, bucket_count in zip(buckets, counts):
        for i in range(bucket_count):
            job_params = params.model_copy(update={
                "count": 1,
                "quality_level": bucket.quality_level,
                "quality_mix": None,
                "flaws": list(bucket.flaws),
                "custom_requirements": base_requirements + [f"{bucket.label}-{i + 1}"],
            })
            jobs.append(_BatchJob(
                index=len(jobs),
                seed=rng.getrandbits(64),
                params=job_params,
                extra_tags=[bucket.label, MIXED_BATCH_TAG],
            ))
    return jobs


def _run_job(
    job: _BatchJob,
    enhancer: Optional[CandidateEnhancer],
    timeout: Optional[float],
    cancel_event: Optional[threading.Event],
) -> Optional[Candidate]:
    if cancel_event is not None and cancel_event.is_set():
        return None

    candidate = generate_candidate(job.params, random.Random(job.seed), enhancer, timeout)
    for tag in job.extra_tags:
        candidate.metadata.add_tag(tag)
    return candidate


def generate_batch(
    params: CandidateGenerationParams,
    rng: Optional[random.Random] = None,
    enhancer: Optional[CandidateEnhancer] = None,
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
    on_progress: Optional[ProgressCallback] = None,
    timeout: Optional[float] = None,
) -> List[Candidate]:
    """
    Generate params.count independent candidates.

    Args:
        params: Generation parameters; quality_mix switches to a mixed population
        rng: Random source for seeds and the final shuffle
        enhancer: Optional external enhancer applied per candidate
        max_workers: Thread cap (settings default); 1 runs sequentially
        cancel_event: Set it to stop starting new candidates
        on_progress: Called as (percent, completed, total, message)
        timeout: Per-call enhancement timeout in seconds

    Returns:
        Candidates in job order, or shuffled for mixed populations.
        Cancelled or failed candidates are left out.
    """
    rng = rng or random.Random()
    jobs = _plan_jobs(params, rng)
    total = len(jobs)
    workers = max_workers if max_workers is not None else get_settings().batch_max_workers

    results: Dict[int, Candidate] = {}
    completed = 0

    def record(job: _BatchJob, candidate: Optional[Candidate]) -> None:
        nonlocal completed
        completed += 1
        if candidate is not None:
            results[job.index] = candidate
        if on_progress is not None:
            on_progress(completed / total * 100, completed, total, f"Generated candidate {completed} of {total}")

    def run_sequentially() -> None:
        for job in jobs:
            if cancel_event is not None and cancel_event.is_set():
                break
            try:
                record(job, _run_job(job, enhancer, timeout, cancel_event))
            except Exception:
                logger.exception("Failed to generate candidate %d of %d", job.index + 1, total)
                record(job, None)

    executor = None
    if workers > 1 and total > 1:
        try:
            executor = ThreadPoolExecutor(max_workers=min(workers, total))
            futures = {
                executor.submit(_run_job, job, enhancer, timeout, cancel_event): job
                for job in jobs
            }
        except RuntimeError:
            # No threads available; nothing has been recorded yet
            logger.warning("Could not start worker threads, generating sequentially", exc_info=True)
            if executor is not None:
                executor.shutdown(wait=True, cancel_futures=True)
            executor = None

    if executor is None:
        run_sequentially()
    else:
        with executor:
            for future in as_completed(futures):
                job = futures[future]
                if future.cancelled():
                    continue
                try:
                    record(job, future.result())
                except Exception:
                    logger.exception("Failed to generate candidate %d of %d", job.index + 1, total)
                    record(job, None)
                if cancel_event is not None and cancel_event.is_set():
                    for pending in futures:
                        pending.cancel()

    candidates = [results[index] for index in sorted(results)]
    if cancel_event is not None and cancel_event.is_set():
        logger.info("Batch cancelled after %d of %d candidates", len(candidates), total)

    if params.quality_mix is not None:
        rng.shuffle(candidates)

    logger.info("Generated %d of %d candidates", len(candidates), total)
    return candidates
