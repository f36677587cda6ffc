"""
Command-line interface for the loyalty What-If Simulator.
Reads a JSON profile (loyalty standing, booked cruises, offers) and prints
simulations, comparisons, timelines and tier/level status.
"""

import argparse
import json
import sys
from dataclasses import fields
from pathlib import Path
from typing import List, Tuple

from simulator.context import build_player_context, validate_player_inputs
from simulator.models import BookedCruise, CasinoOffer, PlayerContext, ScenarioInput, ScenarioType, SimulationResult
from simulator.simulation import run_comparison_simulation, run_simulation
from simulator.thresholds import CLUB_ROYALE_TIERS, CROWN_ANCHOR_LEVELS
from simulator.timeline import generate_timeline_projections


# Default profile file path
PROFILE_PATH = Path("data/profile.json")


def _from_dict(cls, data: dict):
    """Build a dataclass from a dict, ignoring keys the dataclass does not define."""
    known = {f.name for f in fields(cls)}
    return cls(**{key: value for key, value in data.items() if key in known})


def load_profile(path: Path) -> Tuple[PlayerContext, List[BookedCruise], List[CasinoOffer]]:
    """
    Load a player profile from a JSON file.

    Expected keys:
    - current_points, current_nights: loyalty standing
    - average_nights_per_month: optional, defaults to 7
    - player_context: optional full context; overrides the derived one
    - booked_cruises: list of cruise objects (must have "id")
    - offers: list of offer objects (must have "id")

    Returns:
        Tuple of (PlayerContext, booked cruises, offers)

    Raises:
        ValueError: If the file is not a usable profile
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Profile {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Profile {path} must contain a JSON object.")

    try:
        cruises = [_from_dict(BookedCruise, row) for row in data.get("booked_cruises", [])]
        offers = [_from_dict(CasinoOffer, row) for row in data.get("offers", [])]

        if "player_context" in data:
            player_context = _from_dict(PlayerContext, data["player_context"])
        else:
            player_context = build_player_context(
                cruises,
                current_points=data.get("current_points", 0),
                current_nights=data.get("current_nights", 0),
                average_nights_per_month=data.get("average_nights_per_month"),
            )
    except TypeError as exc:
        # Missing required dataclass fields surface as TypeError
        raise ValueError(f"Profile {path} is missing required fields: {exc}") from exc

    return player_context, cruises, offers


def _load_or_exit(args) -> Tuple[PlayerContext, List[BookedCruise], List[CasinoOffer]]:
    path = Path(args.profile)
    if not path.exists():
        print(f"Error: Profile file '{path}' not found.")
        sys.exit(1)

    try:
        player_context, cruises, offers = load_profile(path)
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    if getattr(args, "strict", False):
        problems = validate_player_inputs(player_context, cruises, offers)
        if problems:
            print("Error: Profile failed strict validation:")
            for problem in problems:
                print(f"  - {problem}")
            sys.exit(1)

    return player_context, cruises, offers


def build_scenario(args) -> ScenarioInput:
    """Build a ScenarioInput from parsed scenario arguments."""
    return ScenarioInput(
        type=args.type,
        cruise_id=args.cruise_id,
        new_nights=args.nights,
        new_spend=args.spend,
        new_cabin_type=args.cabin,
        offer_id=args.offer_id,
        custom_points=args.points,
        custom_nights=args.custom_nights,
    )


def _format_date(value) -> str:
    return value.strftime("%Y-%m-%d") if value else "n/a"


def print_result(result: SimulationResult):
    tier = result.tier_forecast
    level = result.loyalty_forecast
    roi = result.roi_projection
    risk = result.risk_analysis

    print("\n--- Club Royale Tier ---")
    print(f"Points: {tier.current_points:,.0f} -> {tier.projected_points:,.0f} ({tier.points_gained:+,.0f})")
    print(f"Tier: {tier.current_tier} -> {tier.projected_tier}" + (" (upgrade)" if tier.tier_upgrade else ""))
    if tier.points_to_next_tier > 0:
        print(f"Next tier in {tier.points_to_next_tier:,.0f} points, "
              f"~{tier.months_to_next_tier} month(s), around {_format_date(tier.projected_date)}")

    print("\n--- Crown & Anchor Level ---")
    print(f"Nights: {level.current_nights:,.0f} -> {level.projected_nights:,.0f} ({level.nights_gained:+,.0f})")
    print(f"Level: {level.current_level} -> {level.projected_level}" + (" (upgrade)" if level.level_upgrade else ""))
    if level.nights_to_next_level > 0:
        print(f"Next level in {level.nights_to_next_level:,.0f} nights, "
              f"~{level.months_to_next_level} month(s), around {_format_date(level.projected_date)}")

    print("\n--- ROI ---")
    print(f"Investment: ${roi.total_investment:,.2f}")
    print(f"Projected value: ${roi.projected_value:,.2f} "
          f"(points ${roi.points_value:,.2f}, comps ${roi.comp_value:,.2f}, savings ${roi.savings:,.2f})")
    print(f"ROI: {roi.projected_roi:.1f}% ({roi.monthly_roi:.1f}%/month, risk-adjusted {roi.risk_adjusted_roi:.1f}%)")
    if roi.break_even_date:
        print(f"Break-even: {_format_date(roi.break_even_date)}")

    print("\n--- Risk ---")
    print(f"Risk: {risk.overall_risk.upper()} ({risk.risk_score:.0f}/100), "
          f"ROI range {risk.confidence_interval.low:.1f}% to {risk.confidence_interval.high:.1f}%")
    for factor in risk.factors:
        print(f"   • [{factor.impact}] {factor.name}: {factor.description}")
    print("Recommendations:")
    for recommendation in risk.recommendations:
        print(f"   • {recommendation}")


def cmd_simulate(args):
    """
    Run a scenario and print the result.

    Args:
        args: Parsed command-line arguments with the profile path and
            scenario fields (type, nights, spend, cabin, cruise_id,
            offer_id, points, custom_nights)
    """
    player_context, cruises, offers = _load_or_exit(args)
    scenario = build_scenario(args)

    result = run_simulation(player_context, cruises, scenario, offers)

    print(f"\n=== Simulation: {scenario.type} ===")
    print_result(result)
    print()


def cmd_compare(args):
    """Run a scenario next to the do-nothing baseline and print the difference."""
    player_context, cruises, offers = _load_or_exit(args)
    scenario = build_scenario(args)

    result = run_comparison_simulation(player_context, cruises, scenario, offers)
    difference = result.comparison.difference

    print(f"\n=== Comparison: {scenario.type} vs baseline ===")
    print_result(result)

    print("\n--- Versus Baseline ---")
    print(f"Points: {difference.points_diff:+,.0f}")
    print(f"Nights: {difference.nights_diff:+,.0f}")
    print(f"ROI: {difference.roi_diff:+.1f} pts")
    print(f"Tier changes: {'yes' if difference.tier_change else 'no'}")
    print(f"Level changes: {'yes' if difference.level_change else 'no'}")
    print()


def cmd_timeline(args):
    """Print the month-by-month tier/level projection."""
    if args.months < 0:
        print(f"Error: Months must be 0 or more. Got: {args.months}")
        sys.exit(1)

    player_context, cruises, _ = _load_or_exit(args)
    timeline = generate_timeline_projections(player_context, cruises, months_ahead=args.months)

    print(f"\n=== Timeline: next {args.months} month(s) ===\n")
    print(f"{'Month':>5}  {'Points':>10}  {'Tier':<10}  {'Nights':>7}  Level")
    for point in timeline:
        print(f"{point.month:>5}  {point.points:>10,.0f}  {point.tier:<10}  {point.nights:>7,.0f}  {point.level}")
    print()


def cmd_status(args):
    """Show the player's current tier and level with progress to the next rung."""
    player_context, _, _ = _load_or_exit(args)

    tier = CLUB_ROYALE_TIERS.lookup(player_context.current_points)
    level = CROWN_ANCHOR_LEVELS.lookup(player_context.current_nights)
    tier_progress = CLUB_ROYALE_TIERS.progress(player_context.current_points, tier)
    level_progress = CROWN_ANCHOR_LEVELS.progress(player_context.current_nights, level)

    print("\n=== Loyalty Status ===\n")
    print(f"Club Royale: {tier} ({player_context.current_points:,.0f} points)")
    if tier_progress.next_name:
        nights = CLUB_ROYALE_TIERS.nights_to_threshold(
            player_context.current_points, tier_progress.next_name, player_context.average_points_per_night
        )
        print(f"  {tier_progress.percent_complete:.0f}% to {tier_progress.next_name}: "
              f"{tier_progress.remaining:,.0f} points (~{nights} nights)")
    else:
        print("  Top tier reached")

    print(f"Crown & Anchor: {level} ({player_context.current_nights:,.0f} nights)")
    if level_progress.next_name:
        print(f"  {level_progress.percent_complete:.0f}% to {level_progress.next_name}: "
              f"{level_progress.remaining:,.0f} nights")
    else:
        print("  Top level reached")
    print()


def _add_profile_args(parser):
    parser.add_argument("--profile", default=str(PROFILE_PATH), help=f"Profile JSON file (default: {PROFILE_PATH})")
    parser.add_argument("--strict", action="store_true", help="Reject negative or non-finite profile values")


def _add_scenario_args(parser):
    scenario_types = [t.value for t in ScenarioType]
    parser.add_argument("--type", required=True, help=f"Scenario type ({' | '.join(scenario_types)})")
    parser.add_argument("--nights", type=float, default=None, help="Nights for add_cruise")
    parser.add_argument("--spend", type=float, default=None, help="Spend for add_cruise or custom")
    parser.add_argument("--cabin", default=None, help="Cabin for change_cabin (Interior | Oceanview | Balcony | Suite)")
    parser.add_argument("--cruise-id", default=None, help="Booked cruise ID for remove_cruise")
    parser.add_argument("--offer-id", default=None, help="Offer ID for book_offer")
    parser.add_argument("--points", type=float, default=None, help="Points for custom")
    parser.add_argument("--custom-nights", type=float, default=None, help="Nights for custom")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Cruise loyalty What-If Simulator CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Simulate command
    parser_simulate = subparsers.add_parser("simulate", help="Simulate a scenario")
    _add_profile_args(parser_simulate)
    _add_scenario_args(parser_simulate)

    # Compare command
    parser_compare = subparsers.add_parser("compare", help="Simulate a scenario against the baseline")
    _add_profile_args(parser_compare)
    _add_scenario_args(parser_compare)

    # Timeline command
    parser_timeline = subparsers.add_parser("timeline", help="Project tier and level month by month")
    _add_profile_args(parser_timeline)
    parser_timeline.add_argument("--months", type=int, default=24, help="Months to project (default: 24)")

    # Status command
    parser_status = subparsers.add_parser("status", help="Show current tier and level progress")
    _add_profile_args(parser_status)

    # Parse arguments
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute command
    if args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "compare":
        cmd_compare(args)
    elif args.command == "timeline":
        cmd_timeline(args)
    elif args.command == "status":
        cmd_status(args)


if __name__ == "__main__":
    main()
