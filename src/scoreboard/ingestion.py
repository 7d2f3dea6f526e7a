"""CSV/JSON ingestion for exported contest scoreboards.

A contest directory holds one JSON file with contest metadata and four CSV
exports (teams, problems, scores, results). Handles the quirks of
hand-edited exports:
- Ids that look numeric ("001") must stay strings
- Boolean columns spelled as 1/0, true/false, yes/no
- Optional columns that may be missing entirely
- Blank trailing rows
"""

import json
import logging
from pathlib import Path

import pandas as pd

from src.scoreboard.config import (
    FILE_PATTERNS,
    PROBLEM_COLUMNS,
    RESULT_COLUMNS,
    SCORE_COLUMNS,
    TEAM_COLUMNS,
    TRUE_STRINGS,
)

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when scoreboard ingestion fails."""


def _parse_bool(value) -> bool:
    """Parse a boolean CSV cell (e.g. 'yes' -> True, '' -> False)."""
    if pd.isna(value):
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_STRINGS


class ScoreboardIngester:
    """Reads the files of one exported contest directory.

    Each CSV read method returns a pandas DataFrame with:
    - All id columns as stripped strings
    - Numeric columns parsed as integers
    - Boolean columns parsed as bools (optional ones defaulted to False)
    - Rows without an id removed
    """

    def __init__(self, contest_dir: Path):
        self.contest_dir = Path(contest_dir)

    def _resolve_path(self, file_key: str) -> Path:
        """Build the full file path for a given file key, raising if missing."""
        filepath = self.contest_dir / FILE_PATTERNS[file_key]
        if not filepath.exists():
            raise FileNotFoundError(
                f"Expected file not found: {filepath}"
            )
        return filepath

    def _read_csv(self, file_key: str, required: list[str]) -> pd.DataFrame:
        filepath = self._resolve_path(file_key)
        logger.info("Reading %s: %s", file_key, filepath.name)

        df = pd.read_csv(filepath, dtype=str, keep_default_na=False, skipinitialspace=True)
        df.columns = [c.strip() for c in df.columns]

        missing = [c for c in required if c not in df.columns]
        if missing:
            raise ValueError(f"{filepath.name} is missing columns: {missing}")

        for col in df.columns:
            df[col] = df[col].str.strip()

        # Drop blank rows (first required column is always the row id)
        df = df[df[required[0]] != ""].reset_index(drop=True)
        return df

    # ------------------------------------------------------------------
    # Contest metadata
    # ------------------------------------------------------------------
    def read_contest(self) -> dict:
        """Read ``contest.json`` as a plain dict."""
        filepath = self._resolve_path("contest")
        logger.info("Reading contest: %s", filepath.name)
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------
    def read_teams(self) -> pd.DataFrame:
        """Read the teams export.

        Returns DataFrame with columns:
            team_id, name, category_id, category_name, hidden
        """
        df = self._read_csv("teams", TEAM_COLUMNS)
        if "hidden" in df.columns:
            df["hidden"] = df["hidden"].apply(_parse_bool)
        else:
            df["hidden"] = False

        logger.info("Loaded %d teams", len(df))
        return df

    # ------------------------------------------------------------------
    # Problems
    # ------------------------------------------------------------------
    def read_problems(self) -> pd.DataFrame:
        """Read the problems export.

        Returns DataFrame with columns:
            problem_id, label
        """
        df = self._read_csv("problems", PROBLEM_COLUMNS)
        if "label" not in df.columns:
            df["label"] = df["problem_id"]
        df.loc[df["label"] == "", "label"] = df["problem_id"]

        logger.info("Loaded %d problems", len(df))
        return df

    # ------------------------------------------------------------------
    # Scores
    # ------------------------------------------------------------------
    def read_scores(self) -> pd.DataFrame:
        """Read the ranked scores export, preserving file order.

        Returns DataFrame with columns:
            team_id, rank, num_points
        """
        df = self._read_csv("scores", SCORE_COLUMNS)
        df["rank"] = pd.to_numeric(df["rank"], errors="raise").astype(int)
        # Blank points mean nothing solved; anything else must be a number
        df["num_points"] = (
            pd.to_numeric(df["num_points"].replace("", "0"), errors="raise").astype(int)
        )

        logger.info("Loaded %d ranked teams", len(df))
        return df

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------
    def read_results(self) -> pd.DataFrame:
        """Read per team/problem results.

        Returns DataFrame with columns:
            team_id, problem_id, is_correct, solve_time, after_freeze
        """
        df = self._read_csv("results", RESULT_COLUMNS)
        df["is_correct"] = df["is_correct"].apply(_parse_bool)
        df["solve_time"] = pd.to_numeric(df["solve_time"], errors="coerce")
        if "after_freeze" in df.columns:
            df["after_freeze"] = df["after_freeze"].apply(_parse_bool)
        else:
            df["after_freeze"] = False

        logger.info(
            "Loaded %d results (%d correct)", len(df), int(df["is_correct"].sum())
        )
        return df

    def read_all(self) -> dict[str, pd.DataFrame]:
        """Read all four CSV exports and return them as a dict.

        Returns:
            dict with keys: 'teams', 'problems', 'scores', 'results'

        Raises:
            IngestionError: if any file cannot be read.
        """
        try:
            return {
                "teams": self.read_teams(),
                "problems": self.read_problems(),
                "scores": self.read_scores(),
                "results": self.read_results(),
            }
        except Exception as e:
            raise IngestionError(f"Failed to read scoreboard files: {e}") from e
