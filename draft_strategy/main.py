"""
Main CLI entry point for the draft strategy adjustment engine.

Loads a draft snapshot from CSV files, runs one evaluation for the pick on the
clock and writes the result as JSON.
"""

import argparse
import logging
import sys

from . import config
from .draft.models import (
    DraftContext,
    LeagueSettings,
    UserTeam,
    calculate_round,
    calculate_picks_remaining,
)
from .draft.strategy_engine import StrategyAdjustmentEngine
from .draft.api_serializers import serialize_analysis
from .snapshot_loader import load_players, load_recent_picks, load_roster, filter_available
from .output_writer import OutputWriter


def setup_logging(verbose: bool = False):
    """
    Configure logging for the application.

    Args:
        verbose: Enable verbose (DEBUG) logging
    """
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL)
    logging.basicConfig(
        level=level,
        format=config.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Draft Strategy Adjustment Engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze pick 25 with the default strategy
  python -m draft_strategy.main --players players.csv --pick 25

  # With recent picks and the user's roster, on the clock
  python -m draft_strategy.main --players players.csv --pick 25 \\
      --recent-picks picks.csv --roster roster.csv --user-turn --time-remaining 20

  # Evaluate under the Zero RB strategy
  python -m draft_strategy.main --players players.csv --pick 25 --strategy zero-rb
        """
    )

    parser.add_argument(
        '--players',
        type=str,
        required=True,
        help='CSV with the player pool (player_id, name, position, adp, tier, ...)'
    )

    parser.add_argument(
        '--pick',
        type=int,
        required=True,
        help='Overall pick number on the clock'
    )

    parser.add_argument(
        '--round',
        type=int,
        default=None,
        help='Current round (default: derived from --pick and --num-teams)'
    )

    parser.add_argument(
        '--recent-picks',
        type=str,
        default=None,
        help='CSV with picks already made (player columns + pick_number)'
    )

    parser.add_argument(
        '--roster',
        type=str,
        default=None,
        help="CSV with the user's rostered players"
    )

    parser.add_argument(
        '--num-teams',
        type=int,
        default=config.NUM_TEAMS,
        help=f'Number of teams in league (default: {config.NUM_TEAMS})'
    )

    parser.add_argument(
        '--num-rounds',
        type=int,
        default=config.NUM_ROUNDS,
        help=f'Number of draft rounds (default: {config.NUM_ROUNDS})'
    )

    parser.add_argument(
        '--strategy',
        type=str,
        default=None,
        help='Strategy to activate before analysis (balanced-value, zero-rb, robust-rb)'
    )

    parser.add_argument(
        '--time-remaining',
        type=float,
        default=90.0,
        help='Seconds left on the pick clock (default: 90)'
    )

    parser.add_argument(
        '--user-turn',
        action='store_true',
        help="It is the user's turn to pick"
    )

    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Output JSON filename (default: analysis_<timestamp>.json)'
    )

    parser.add_argument(
        '--recommendations-csv',
        type=str,
        default=None,
        help='Also write ranked recommendations to this CSV file'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser.parse_args(argv)


def build_context(args) -> DraftContext:
    """Load the snapshot files into a DraftContext."""
    players = load_players(args.players)
    recent_picks = load_recent_picks(args.recent_picks) if args.recent_picks else []
    user_team = load_roster(args.roster) if args.roster else UserTeam()

    available = filter_available(
        players,
        drafted_ids=[pick.player.player_id for pick in recent_picks],
        rostered=user_team
    )

    league = LeagueSettings(num_teams=args.num_teams, num_rounds=args.num_rounds)
    current_round = args.round or calculate_round(args.pick, args.num_teams)

    return DraftContext(
        current_round=current_round,
        current_pick=args.pick,
        available_players=available,
        user_team=user_team,
        league=league,
        recent_picks=recent_picks,
        picks_remaining=calculate_picks_remaining(args.pick, args.num_teams, args.num_rounds),
        time_remaining=args.time_remaining,
        is_user_turn=args.user_turn,
    )


def run_analysis(args) -> int:
    """Run one evaluation and write the output. Returns the exit code."""
    logger = logging.getLogger(__name__)

    logger.info("="*60)
    logger.info("Draft Strategy Adjustment Engine")
    logger.info("="*60)

    try:
        context = build_context(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load draft snapshot: {e}")
        return 1

    engine = StrategyAdjustmentEngine()

    if args.strategy and not engine.switch_strategy(args.strategy):
        logger.error(f"Unknown strategy: {args.strategy}")
        return 1

    result = engine.analyze_and_adjust(context)
    response = serialize_analysis(result, context.current_pick, context.current_round)

    writer = OutputWriter()
    output_path = writer.write_analysis(response, args.output)
    if args.recommendations_csv:
        writer.write_recommendations_csv(response, args.recommendations_csv)

    # Summary
    logger.info("="*60)
    logger.info(f"Pick {context.current_pick}, round {context.current_round} "
                f"({context.picks_remaining} picks remaining)")
    logger.info(f"Active strategy: {response.active_strategy}")
    for inefficiency in result.inefficiencies[:config.TOP_RECOMMENDATIONS]:
        logger.info(f"  [{inefficiency.severity}] {inefficiency.description}")
    for rec in engine.get_top_recommendations():
        names = ', '.join(p.name for p in rec.suggested_players)
        logger.info(f"  {rec.title} (urgency {rec.urgency:.0f}, confidence {rec.confidence:.0f}): {names}")
    for guideline in engine.get_round_guidelines(context.current_round):
        logger.info(f"  Guideline: {guideline.recommendation}")
    logger.info(f"Output file: {output_path}")
    logger.info("="*60)

    return 0


def main():
    """Main execution function."""
    args = parse_arguments()

    setup_logging(args.verbose)

    sys.exit(run_analysis(args))


if __name__ == '__main__':
    main()
