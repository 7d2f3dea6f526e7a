from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Output directory for computed awards
AWARDS_DIR = PROJECT_ROOT / "data" / "awards"

# Rank that wins the contest outright
WINNER_RANK = 1

# Medal cutoffs as (max_rank, tier), checked first-match-wins.
# Bronze is widened by the contest's additional bronze medals.
MEDAL_TIERS = [
    (4, "gold"),
    (8, "silver"),
    (12, "bronze"),
]
EXTENDABLE_TIER = "bronze"

DEFAULT_ADDITIONAL_BRONZE_MEDALS = 0

# Award id prefixes / fixed ids
GROUP_WINNER_PREFIX = "group-winner-"
FIRST_TO_SOLVE_PREFIX = "first-to-solve-"
WINNER_ID = "winner"
MEDAL_SUFFIX = "-medal"
