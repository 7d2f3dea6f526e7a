"""Compute the awards of an exported contest.

Usage:
    python -m src.awards_engine.run_awards <contest_dir|contest_id> [award_id] [--public]

Examples:
    python -m src.awards_engine.run_awards demo
    python -m src.awards_engine.run_awards data/contests/demo
    python -m src.awards_engine.run_awards data/contests/demo gold-medal
    python -m src.awards_engine.run_awards data/contests/demo --public
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from src.awards_engine.config import AWARDS_DIR
from src.awards_engine.models import AwardNotFoundError
from src.contest_api.awards_service import AwardsService
from src.contest_api.contest import Contest
from src.logging_config import setup_logging
from src.scoreboard.config import CONTESTS_DIR
from src.scoreboard.ingestion import ScoreboardIngester
from src.scoreboard.transformation import ScoreboardProvider

logger = logging.getLogger(__name__)


def resolve_contest_dir(name_or_path: str) -> Path:
    """Accept either a directory or the id of a contest under data/contests/."""
    path = Path(name_or_path)
    if path.is_dir():
        return path
    return CONTESTS_DIR / name_or_path


def load_contest(contest_dir: Path) -> Contest:
    """Read the contest metadata of *contest_dir*."""
    return Contest.from_dict(ScoreboardIngester(contest_dir).read_contest())


def run_awards(
    contest_dir: Path,
    public: bool = False,
    output_dir: Path | None = None,
) -> Path:
    """Compute all awards of a contest and write them as JSON.

    Awards are computed as the jury, optionally restricted to the
    public scoreboard view.

    Args:
        contest_dir: Directory holding the contest exports.
        public: Use the public scoreboard instead of the jury one.
        output_dir: Directory for JSON output. Defaults to ``data/awards/``.

    Returns:
        Path to the generated JSON file.

    Raises:
        FileNotFoundError: If the contest directory doesn't exist.
    """
    contest_dir = Path(contest_dir)
    if output_dir is None:
        output_dir = AWARDS_DIR

    if not contest_dir.is_dir():
        raise FileNotFoundError(f"Contest directory not found: {contest_dir}")

    logger.info("Computing awards for %s (%s view)", contest_dir, "public" if public else "jury")

    contest = load_contest(contest_dir)
    service = AwardsService(ScoreboardProvider(contest_dir))
    awards = service.list_awards(contest, is_jury=True, public=public)

    output_data = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "contest_id": contest.contest_id,
            "contest_name": contest.name,
            "public": public,
            "additional_bronze_medals": contest.get_additional_bronze_medals(),
            "total_awards": len(awards),
        },
        "awards": awards,
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / f"awards_{contest.contest_id}.json"

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(output_data, f, indent=2)

    logger.info("Awards complete! Output: %s", output_file)
    for award in awards:
        logger.info("  %s: %s", award["id"], ", ".join(award["team_ids"]))

    return output_file


def show_award(contest_dir: Path, award_id: str, public: bool = False) -> dict:
    """Compute a single award of a contest.

    Raises:
        AwardNotFoundError: If the contest has no award *award_id*.
    """
    contest_dir = Path(contest_dir)
    contest = load_contest(contest_dir)
    service = AwardsService(ScoreboardProvider(contest_dir))
    return service.get_award(contest, award_id, is_jury=True, public=public)


if __name__ == "__main__":
    setup_logging()

    args = [a for a in sys.argv[1:] if a != "--public"]
    public = "--public" in sys.argv[1:]

    if not args:
        print(__doc__)
        sys.exit(2)

    contest_dir = resolve_contest_dir(args[0])
    award_id = args[1] if len(args) > 1 else None

    try:
        if award_id is None:
            output = run_awards(contest_dir, public=public)
            print(f"Awards complete: {output}")
        else:
            print(json.dumps(show_award(contest_dir, award_id, public=public), indent=2))
    except AwardNotFoundError as e:
        logger.error("%s", e)
        sys.exit(1)
    except Exception:
        logger.exception("Awards computation failed")
        sys.exit(1)
