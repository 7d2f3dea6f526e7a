"""Awards calculation from a ranked contest scoreboard.

Derives four award categories from one scoreboard, always in this order:

1. Group winners - best ranked team(s) of each team category.
2. First to solve - first solver(s) of each problem.
3. Contest winner - team(s) ranked first.
4. Medals - gold, silver and bronze by rank band.

The scoreboard decides ranks, ties, first solves and category bests; this
module only groups teams into awards.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple, Union

from src.awards_engine.config import (
    DEFAULT_ADDITIONAL_BRONZE_MEDALS,
    EXTENDABLE_TIER,
    FIRST_TO_SOLVE_PREFIX,
    GROUP_WINNER_PREFIX,
    MEDAL_SUFFIX,
    MEDAL_TIERS,
    WINNER_ID,
    WINNER_RANK,
)
from src.awards_engine.models import AwardNotFoundError, AwardRecord
from src.scoreboard.models import Scoreboard

logger = logging.getLogger(__name__)


def medal_thresholds(additional_bronze_medals: int) -> List[Tuple[int, str]]:
    """Medal cutoffs with the bronze band widened by *additional_bronze_medals*."""
    return [
        (max_rank + additional_bronze_medals if tier == EXTENDABLE_TIER else max_rank, tier)
        for max_rank, tier in MEDAL_TIERS
    ]


def medal_for_rank(rank: int, thresholds: List[Tuple[int, str]]) -> Optional[str]:
    """Return the medal tier for *rank*, or None if it earns no medal."""
    for max_rank, tier in thresholds:
        if rank <= max_rank:
            return tier
    return None


class AwardsCalculator:
    """Compute contest awards from a :class:`Scoreboard`.

    The calculator is stateless: every call scans the scoreboard it is
    given and builds fresh :class:`AwardRecord` objects. Scores are taken
    in the order the scoreboard lists them and are never re-sorted.
    """

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compute(
        self,
        scoreboard: Scoreboard,
        additional_bronze_medals: int = DEFAULT_ADDITIONAL_BRONZE_MEDALS,
        requested_id: Optional[str] = None,
    ) -> Union[List[AwardRecord], AwardRecord]:
        """Compute all awards, or only the one named *requested_id*.

        Raises:
            AwardNotFoundError: if *requested_id* is given and no award
                with that id exists.
        """
        if requested_id is not None:
            return self.find_award(scoreboard, requested_id, additional_bronze_medals)
        return self.compute_awards(scoreboard, additional_bronze_medals)

    def compute_awards(
        self,
        scoreboard: Scoreboard,
        additional_bronze_medals: int = DEFAULT_ADDITIONAL_BRONZE_MEDALS,
    ) -> List[AwardRecord]:
        """Return every award with at least one qualifying team.

        Args:
            scoreboard: Ranked scoreboard of the view to compute for.
            additional_bronze_medals: Extra bronze slots beyond rank 12.

        Returns:
            Group winners, first-to-solve awards, the contest winner and
            the medal tiers, in that order.
        """
        awards = list(self._iter_awards(scoreboard, additional_bronze_medals))
        logger.info(
            "Computed %d awards (%s view, %d extra bronze)",
            len(awards),
            "public" if scoreboard.public else "jury",
            additional_bronze_medals,
        )
        return awards

    def find_award(
        self,
        scoreboard: Scoreboard,
        award_id: str,
        additional_bronze_medals: int = DEFAULT_ADDITIONAL_BRONZE_MEDALS,
    ) -> AwardRecord:
        """Return the award named *award_id*.

        Stops scanning as soon as the award is produced, so later award
        categories are not evaluated.

        Raises:
            AwardNotFoundError: if no award with that id exists.
        """
        for award in self._iter_awards(scoreboard, additional_bronze_medals):
            if award.id == award_id:
                return award
        raise AwardNotFoundError(award_id)

    # ------------------------------------------------------------------
    # Award phases
    # ------------------------------------------------------------------

    def _iter_awards(
        self, scoreboard: Scoreboard, additional_bronze_medals: int
    ) -> Iterator[AwardRecord]:
        yield from self._group_winners(scoreboard)
        yield from self._first_to_solve(scoreboard)
        yield from self._rank_awards(scoreboard, additional_bronze_medals)

    @staticmethod
    def _group_winners(scoreboard: Scoreboard) -> Iterator[AwardRecord]:
        winners: Dict[str, List[str]] = {}
        group_names: Dict[str, str] = {}
        for team in scoreboard.teams:
            if scoreboard.is_best_in_category(team):
                category = team.category
                winners.setdefault(category.category_id, []).append(team.team_id)
                group_names[category.category_id] = category.name

        for category_id, team_ids in winners.items():
            logger.debug("Group %s winners: %s", category_id, team_ids)
            yield AwardRecord(
                id=GROUP_WINNER_PREFIX + category_id,
                citation=f"Winner(s) of group {group_names[category_id]}",
                team_ids=team_ids,
            )

    @staticmethod
    def _first_to_solve(scoreboard: Scoreboard) -> Iterator[AwardRecord]:
        solvers: Dict[str, List[str]] = {}
        for team in scoreboard.teams:
            for problem in scoreboard.problems:
                if scoreboard.solved_first(team, problem):
                    solvers.setdefault(problem.problem_id, []).append(team.team_id)

        for problem_id, team_ids in solvers.items():
            logger.debug("First to solve %s: %s", problem_id, team_ids)
            yield AwardRecord(
                id=FIRST_TO_SOLVE_PREFIX + problem_id,
                citation=f"First to solve problem {problem_id}",
                team_ids=team_ids,
            )

    @staticmethod
    def _rank_awards(
        scoreboard: Scoreboard, additional_bronze_medals: int
    ) -> Iterator[AwardRecord]:
        thresholds = medal_thresholds(additional_bronze_medals)
        overall_winners: List[str] = []
        medal_winners: Dict[str, List[str]] = {}

        for team_score in scoreboard.scores:
            # Teams without a solve get neither the win nor a medal
            if team_score.num_points <= 0:
                continue
            team_id = team_score.team.team_id
            if team_score.rank == WINNER_RANK:
                overall_winners.append(team_id)
            tier = medal_for_rank(team_score.rank, thresholds)
            if tier is not None:
                medal_winners.setdefault(tier, []).append(team_id)

        if overall_winners:
            yield AwardRecord(
                id=WINNER_ID,
                citation="Contest winner",
                team_ids=overall_winners,
            )

        for tier, team_ids in medal_winners.items():
            logger.debug("%s medal: %s", tier.capitalize(), team_ids)
            yield AwardRecord(
                id=tier + MEDAL_SUFFIX,
                citation=f"{tier.capitalize()} medal winner",
                team_ids=team_ids,
            )
