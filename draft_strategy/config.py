"""
Configuration constants for the draft strategy adjustment engine.
"""

# Positions
ALL_POSITIONS = ['QB', 'RB', 'WR', 'TE', 'K', 'DST']
SKILL_POSITIONS = ['QB', 'RB', 'WR', 'TE']  # Positions analyzed for runs, tier breaks, scarcity

# Position capacity per user roster (used for need-fill and run-join decisions)
POSITION_LIMITS = {
    'QB': 2,
    'RB': 4,
    'WR': 5,
    'TE': 2,
    'K': 1,
    'DST': 1,
}
DEFAULT_POSITION_LIMIT = 1

# League defaults
NUM_TEAMS = 12
NUM_ROUNDS = 16

# Missing player field defaults (conservative)
DEFAULT_ADP = 999.0
DEFAULT_TIER = 10
DEFAULT_PROJECTION = 0.0
DEFAULT_PICK_TIME = 60.0  # seconds
DEFAULT_ADP_DIFFERENCE = 0.0
DEFAULT_PRIORITY = 1.0  # Position priority when a strategy has no entry

# ===== INEFFICIENCY DETECTION =====

# Recent pick windows (the detector's only memory of the draft)
RECENT_PICK_WINDOW = 10
RUN_INTENSITY_WINDOW = 5
POSITION_TREND_WINDOW = 5
PANIC_WINDOW = 3

# Reference pick position by position (historical average)
BASE_POSITION_ADP = {
    'QB': 60,
    'RB': 25,
    'WR': 30,
    'TE': 70,
    'K': 140,
    'DST': 130,
}
DEFAULT_BASE_ADP = 100
TREND_TOLERANCE = 5  # Picks of drift before a trend is accelerating/declining

# Expected count of elite (tier <= 2) players per position
EXPECTED_ELITE_COUNT = {
    'QB': 12,
    'RB': 24,
    'WR': 30,
    'TE': 12,
    'K': 5,
    'DST': 5,
}
DEFAULT_EXPECTED_ELITE = 10
ELITE_TIER = 2
NO_TIER_BREAK = 999

# Undervalued players
UNDERVALUED_SCAN_DEPTH = 20
UNDERVALUED_MIN_ADP_DIFF = 10
UNDERVALUED_THRESHOLDS = [10, 20, 30]

# Positional runs
RUN_MIN_LENGTH = 3
RUN_THRESHOLDS = [3, 4, 6]
RUN_CONTINUE_INTENSITY = 0.4
RUN_CONTINUE_LENGTH = 2
RUN_HEAVY_LENGTH = 5

# Tier breaks
TIER_BREAK_PROJECTION_GAP = 20
TIER_BREAK_DEFAULT_VALUE = 20
TIER_BREAK_DEFAULT_IMPACT = 25

# Positional scarcity
SCARCITY_THRESHOLD = 0.7
SCARCITY_MAX_ELITE = 2

# Bye week value
BYE_WEEK_MIN_ROUND = 8
BYE_WEEK_OPTIMAL_RATIO = 1.2

# Market panic
PANIC_REACH_THRESHOLD = 10
PANIC_MIN_REACHES = 2

# Priority scoring
SEVERITY_WEIGHTS = {
    'low': 1,
    'medium': 2,
    'high': 3,
    'critical': 4,
}

# ===== STRATEGY ADJUSTMENT =====

# Draft flow
FLOW_RUN_WINDOW = 5
FLOW_DEVIATION_WINDOW = 10
FLOW_SENTIMENT_WINDOW = 5
FLOW_RUN_PATTERN_LENGTH = 3
VOLATILITY_DEVIATION = 10
VOLATILITY_MIN_COUNT = 3
SLOW_PACE_SECONDS = 90
SENTIMENT_THRESHOLD = 15

# Risk tolerance buckets
RISK_TOLERANCE_VALUES = {
    'conservative': 0.3,
    'moderate': 0.6,
    'aggressive': 0.9,
}
RISK_CONSERVATIVE_CUTOFF = 0.4
RISK_MODERATE_CUTOFF = 0.7

# Trigger action deltas (position -> priority change)
TRIGGER_ACTION_DELTAS = {
    'increase_rb_priority': {'RB': 0.3},
    'pivot_to_rb': {'RB': 0.4, 'WR': -0.2},
}
TRIGGER_ACTION_REASONS = {
    'increase_rb_priority': 'Increased RB priority due to scarcity',
    'pivot_to_rb': 'Pivoting to RB due to WR run',
}

# Contextual adjustments
SCARCITY_PRIORITY_BOOST = 0.3
TIER_BREAK_RISK_SHIFT = 0.1
RUN_JOIN_BOOST = 0.2
RUN_FADE_PENALTY = -0.1
TIME_PRESSURE_SECONDS = 30
TIME_PRESSURE_RISK_SHIFT = -0.2
LATE_ROUND = 10
LATE_ROUND_PRIORITY_BOOST = 0.5
LATE_ROUND_POSITIONS = ['K', 'DST']
LATE_ROUND_RISK_SHIFT = 0.1

# ===== RECOMMENDATIONS =====

NEED_FILL_MIN_PRIORITY = 1.0
NEED_FILL_MIN_NEED = 0.5
NEED_FILL_SUGGESTIONS = 3

VALUE_HUNT_MIN_ADP_DIFF = 10
VALUE_HUNT_SUGGESTIONS = 5

PIVOT_MIN_RUN = 2
PIVOT_MIN_PRIORITY = 0.8
PIVOT_SUGGESTIONS = 2

# Recommendation risk level by tolerance
RISK_LEVEL_BY_TOLERANCE = {
    'conservative': 20,
    'moderate': 40,
    'aggressive': 60,
}

TOP_RECOMMENDATIONS = 3

# Output
OUTPUT_DIR = 'data/output'

# Logging
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
