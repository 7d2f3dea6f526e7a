"""Scoreboard construction from ingested contest exports.

Turns the ingested DataFrames into a :class:`Scoreboard` for one view:
- Public view drops hidden teams and results submitted after the freeze,
  and re-ranks the remaining teams (from the frozen results if needed)
- Derives first-to-solve pairs from the earliest correct solve times
- Derives best-in-category teams from the ranked scores
- Keeps the jury scores in the order they were exported
"""

import logging
from pathlib import Path

import pandas as pd

from src.scoreboard.ingestion import ScoreboardIngester
from src.scoreboard.models import Category, Problem, Scoreboard, Team, TeamScore

logger = logging.getLogger(__name__)

# Keys expected in the ingested data dict passed to build()
_REQUIRED_KEYS = {"teams", "problems", "scores", "results"}


class ScoreboardBuilder:
    """Builds a read-only :class:`Scoreboard` from ingested exports."""

    def build(self, frames: dict[str, pd.DataFrame], public: bool) -> Scoreboard:
        """Build the scoreboard for the public or the jury view.

        Args:
            frames: Output of :meth:`ScoreboardIngester.read_all`.
            public: Build the public view instead of the jury view. Hidden
                teams are removed and the remaining teams re-ranked; when
                some results came in after the freeze, points and ranks
                are recomputed from the results before it.

        Returns:
            A fully populated :class:`Scoreboard`.
        """
        missing = _REQUIRED_KEYS - set(frames)
        if missing:
            raise ValueError(f"Missing scoreboard data: {sorted(missing)}")

        teams_df = frames["teams"]
        scores_df = frames["scores"]
        results_df = frames["results"]

        if public:
            visible = set(teams_df.loc[~teams_df["hidden"].astype(bool), "team_id"])
            hidden_count = len(teams_df) - len(visible)
            teams_df = teams_df[teams_df["team_id"].isin(visible)]
            scores_df = scores_df[scores_df["team_id"].isin(visible)]
            results_df = results_df[results_df["team_id"].isin(visible)]

            after_freeze = results_df["after_freeze"].astype(bool)
            results_df = results_df[~after_freeze]
            if after_freeze.any():
                scores_df = self.freeze_scores(scores_df, results_df)
            else:
                scores_df = self.rerank(scores_df, by=["rank"])
            logger.debug(
                "Public view: dropped %d hidden teams, %d results after the freeze",
                hidden_count, int(after_freeze.sum()),
            )

        teams = self._build_teams(teams_df)
        team_index = {team.team_id: team for team in teams}
        problems = [
            Problem(problem_id=row["problem_id"], label=row["label"])
            for _, row in frames["problems"].iterrows()
        ]
        scores = self._build_scores(scores_df, team_index)

        scoreboard = Scoreboard(
            teams=teams,
            problems=problems,
            scores=scores,
            first_solves=self.find_first_solves(results_df),
            best_in_category=self.find_best_in_category(scores),
            public=public,
        )
        logger.info(
            "Built %s scoreboard: %d teams, %d problems, %d first solves",
            "public" if public else "jury",
            len(teams), len(problems), len(scoreboard.first_solves),
        )
        return scoreboard

    # ------------------------------------------------------------------
    # Teams and scores
    # ------------------------------------------------------------------
    @staticmethod
    def _build_teams(teams_df: pd.DataFrame) -> list[Team]:
        categories: dict[str, Category] = {}
        teams = []
        for _, row in teams_df.iterrows():
            category = categories.setdefault(
                row["category_id"],
                Category(category_id=row["category_id"], name=row["category_name"]),
            )
            teams.append(Team(
                team_id=row["team_id"],
                name=row["name"],
                category=category,
                hidden=bool(row["hidden"]),
            ))
        return teams

    @staticmethod
    def _build_scores(
        scores_df: pd.DataFrame, team_index: dict[str, Team]
    ) -> list[TeamScore]:
        """Convert score rows to TeamScores in export order.

        Rows for unknown teams are dropped. A rank that goes down while
        scanning is reported but left alone: tie-breaking belongs to
        whoever ranked the teams.
        """
        scores = []
        previous_rank = 0
        for _, row in scores_df.iterrows():
            team = team_index.get(row["team_id"])
            if team is None:
                logger.warning("Score row for unknown team %s ignored", row["team_id"])
                continue
            rank = int(row["rank"])
            if rank < previous_rank:
                logger.warning(
                    "Scores not rank-ordered: team %s has rank %d after rank %d",
                    team.team_id, rank, previous_rank,
                )
            previous_rank = rank
            scores.append(TeamScore(
                team=team, rank=rank, num_points=int(row["num_points"]),
            ))
        return scores

    # ------------------------------------------------------------------
    # Public ranking
    # ------------------------------------------------------------------
    @staticmethod
    def rerank(scores_df: pd.DataFrame, by: list[str]) -> pd.DataFrame:
        """Assign ranks by position, in the current row order.

        Consecutive rows with equal *by* values share the rank of the
        first of them (1, 2, 2, 4, ...).
        """
        ranks = []
        previous = None
        rank = 0
        for position, key in enumerate(
            scores_df[by].itertuples(index=False, name=None), start=1
        ):
            if key != previous:
                rank = position
            ranks.append(rank)
            previous = key

        out = scores_df.copy()
        out["rank"] = ranks
        return out

    @classmethod
    def freeze_scores(
        cls, scores_df: pd.DataFrame, results_df: pd.DataFrame
    ) -> pd.DataFrame:
        """Recompute points and ranks from results before the freeze.

        Points count the distinct problems solved; penalty sums the
        earliest correct solve time per problem. Teams are ordered by
        points (descending), then penalty, then export order, and
        teams equal on both share a rank.

        Args:
            scores_df: Visible score rows in export order.
            results_df: Visible results, already without those after
                the freeze.

        Returns:
            DataFrame with columns ``team_id``, ``rank``, ``num_points``,
            ``penalty``, ordered by the new rank.
        """
        correct = results_df[results_df["is_correct"].astype(bool)]
        solved = (
            correct.groupby(["team_id", "problem_id"])["solve_time"].min().reset_index()
        )
        points = solved.groupby("team_id")["problem_id"].count()
        penalty = solved.groupby("team_id")["solve_time"].sum()

        out = scores_df[["team_id"]].copy()
        out["num_points"] = out["team_id"].map(points).fillna(0).astype(int)
        out["penalty"] = out["team_id"].map(penalty).fillna(0).astype(float)
        out = out.sort_values(
            ["num_points", "penalty"], ascending=[False, True], kind="stable"
        )
        return cls.rerank(out, by=["num_points", "penalty"])

    # ------------------------------------------------------------------
    # Derived flags
    # ------------------------------------------------------------------
    @staticmethod
    def find_first_solves(results_df: pd.DataFrame) -> frozenset:
        """Return ``(team_id, problem_id)`` pairs that solved a problem first.

        All teams sharing the earliest correct solve time of a problem
        count as first solvers.
        """
        correct = results_df[
            results_df["is_correct"].astype(bool) & results_df["solve_time"].notna()
        ]
        if correct.empty:
            return frozenset()

        earliest = correct.groupby("problem_id")["solve_time"].transform("min")
        firsts = correct[correct["solve_time"] == earliest]
        return frozenset(zip(firsts["team_id"], firsts["problem_id"]))

    @staticmethod
    def find_best_in_category(scores: list[TeamScore]) -> frozenset:
        """Return ids of the best ranked scoring team(s) of every category."""
        best_rank: dict[str, int] = {}
        for score in scores:
            if score.num_points <= 0:
                continue
            cat_id = score.team.category.category_id
            if cat_id not in best_rank or score.rank < best_rank[cat_id]:
                best_rank[cat_id] = score.rank

        return frozenset(
            score.team.team_id
            for score in scores
            if score.num_points > 0
            and score.rank == best_rank[score.team.category.category_id]
        )


class ScoreboardProvider:
    """File-backed scoreboard source for a single contest directory."""

    def __init__(self, contest_dir: Path):
        self.contest_dir = Path(contest_dir)
        self.ingester = ScoreboardIngester(self.contest_dir)
        self.builder = ScoreboardBuilder()

    def get_scoreboard(self, public: bool) -> Scoreboard:
        """Ingest the contest exports and build the requested view."""
        return self.builder.build(self.ingester.read_all(), public=public)
