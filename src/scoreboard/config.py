from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
CONTESTS_DIR = DATA_DIR / "contests"

# Files expected inside a contest directory
FILE_PATTERNS = {
    "contest": "contest.json",
    "teams": "teams.csv",
    "problems": "problems.csv",
    "scores": "scores.csv",
    "results": "results.csv",
}

# Required columns per CSV export
TEAM_COLUMNS = ["team_id", "name", "category_id", "category_name"]
PROBLEM_COLUMNS = ["problem_id"]
SCORE_COLUMNS = ["team_id", "rank", "num_points"]
RESULT_COLUMNS = ["team_id", "problem_id", "is_correct", "solve_time"]

# Values accepted as "true" in boolean CSV columns
TRUE_STRINGS = {"1", "true", "yes", "y", "t"}
