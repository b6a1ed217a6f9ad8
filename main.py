"""
Main entry point for the Synthetic Candidate Generator.
Provides a CLI for generating candidates to stdout or a JSON file.
"""
import json
import logging
import sys

from candidates import get_settings
from candidate_factory import (
    create_candidate_batch,
    list_archetypes,
    list_flaws,
    save_candidates_to_json,
)


def print_separator():
    print("=" * 60)


def print_candidate_summary(candidate):
    """One-paragraph summary of a generated candidate."""
    scores = candidate.interview_performance.simulated_interview_scores
    experience = candidate.experience

    print(f"{candidate.full_name} <{candidate.personal_info.email}>")
    print(f"  {experience.current_position.title} at {experience.current_position.company}"
          f" ({experience.years_of_experience} yrs)")
    print(f"  Behavioral {scores.behavioral.overall}/10, "
          f"Coding {scores.technical.coding}/10, "
          f"Culture fit {scores.cultural.company_fit}/10")

    red_flags = candidate.interview_performance.potential_red_flags
    if red_flags:
        print(f"  Red flags: {', '.join(red_flags)}")
    print(f"  Tags: {', '.join(candidate.metadata.tags)}")
    print()


def print_catalogues():
    print("\nArchetypes:")
    print("-" * 40)
    for archetype in list_archetypes(include_problematic=True):
        marker = " (problematic)" if archetype["problematic"] else ""
        print(f"  {archetype['key']:<14} {archetype['name']}{marker}")

    print("\nFlaws:")
    print("-" * 40)
    for flaw in list_flaws():
        print(f"  {flaw['type']:<22} [{flaw['severity']}] {flaw['description']}")
    print()


def print_progress(progress_pct, current, total, message):
    print(f"[{progress_pct:5.1f}%] {message}", file=sys.stderr)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Synthetic Candidate Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                  # One random candidate
  python main.py -n 10 --mix standard             # 60/30/10 good/average/bad
  python main.py --level entry --quality terrible --flaw job_hopper
  python main.py -n 50 --mix realistic --seed 7 -o output/pool.json
  python main.py --list                           # Show archetypes and flaws
        """,
    )
    parser.add_argument("-n", "--count", type=int, default=1, help="Number of candidates")
    parser.add_argument("--role", dest="target_role", help="Target role title")
    parser.add_argument("--level", dest="experience_level", default="mid",
                        help="entry, junior, mid, senior, lead or principal")
    parser.add_argument("--archetype", dest="personality_archetype", default="balanced",
                        help="Personality archetype key")
    parser.add_argument("--focus", dest="technical_focus", action="append", default=[],
                        help="Technical focus area (repeatable)")
    parser.add_argument("--industry", dest="industry_background", help="Industry background")
    parser.add_argument("--location", dest="location_preference", help="City, State")
    parser.add_argument("--quality", dest="quality_level",
                        help="excellent, good, average, poor or terrible")
    parser.add_argument("--mix", dest="quality_mix", choices=["standard", "realistic"],
                        help="Generate a mixed-quality population")
    parser.add_argument("--flaw", dest="flaws", action="append", default=[],
                        help="Flaw to inject (repeatable)")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible output")
    parser.add_argument("--workers", type=int, help="Parallel generation threads")
    parser.add_argument("--enhance", action="store_true", default=None,
                        help="Enhance candidates with the LLM")
    parser.add_argument("-o", "--output", help="Write candidates to this JSON file")
    parser.add_argument("--json", action="store_true", help="Print full JSON to stdout")
    parser.add_argument("--list", action="store_true", help="List archetypes and flaws and exit")

    args = parser.parse_args()

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        print_catalogues()
        return

    if args.count < 1:
        print("Count must be at least 1.")
        sys.exit(1)

    params = {
        key: value
        for key, value in vars(args).items()
        if key in (
            "target_role", "experience_level", "personality_archetype", "technical_focus",
            "industry_background", "location_preference", "quality_level", "quality_mix", "flaws",
        )
        and value is not None
    }

    try:
        candidates = create_candidate_batch(
            args.count,
            seed=args.seed,
            enhance=args.enhance,
            max_workers=args.workers,
            on_progress=print_progress if args.count > 1 else None,
            **params,
        )
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(130)

    if args.output:
        save_candidates_to_json(candidates, args.output)
        print(f"Saved {len(candidates)} candidates to {args.output}")
        return

    if args.json:
        print(json.dumps([c.model_dump(mode="json") for c in candidates], indent=2))
        return

    print_separator()
    print(f"GENERATED {len(candidates)} CANDIDATE(S)")
    print_separator()
    print()
    for candidate in candidates:
        print_candidate_summary(candidate)


if __name__ == "__main__":
    main()
