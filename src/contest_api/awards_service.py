"""Awards service - the caller side of the awards engine.

Resolves which scoreboard view the caller gets, enforces contest access,
and turns engine results into API-shaped dicts.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from src.awards_engine.calculator import AwardsCalculator
from src.awards_engine.models import AwardNotFoundError
from src.contest_api.access import check_access, resolve_public_view
from src.contest_api.contest import Contest
from src.scoreboard.models import Scoreboard

logger = logging.getLogger(__name__)


class AwardsService:
    """Serves award listings and single-award lookups for a contest.

    Coordinates between the access rules, a scoreboard provider (any
    object with ``get_scoreboard(public) -> Scoreboard``) and the
    AwardsCalculator.
    """

    def __init__(self, scoreboard_provider, calculator: Optional[AwardsCalculator] = None):
        self.scoreboard_provider = scoreboard_provider
        self.calculator = calculator or AwardsCalculator()

    def list_awards(
        self,
        contest: Contest,
        is_jury: bool,
        public: Optional[bool] = None,
        now: Optional[datetime] = None,
    ) -> List[Dict]:
        """Return all awards of *contest* as ``{id, citation, team_ids}`` dicts.

        Raises:
            AccessDeniedError: If the caller may not read the contest.
        """
        scoreboard, bronze = self._prepare(contest, is_jury, public, now)
        awards = self.calculator.compute_awards(scoreboard, bronze)
        return [award.to_dict() for award in awards]

    def get_award(
        self,
        contest: Contest,
        award_id: str,
        is_jury: bool,
        public: Optional[bool] = None,
        now: Optional[datetime] = None,
    ) -> Dict:
        """Return a single award of *contest*.

        Raises:
            AccessDeniedError: If the caller may not read the contest.
            AwardNotFoundError: If no award with *award_id* exists.
        """
        scoreboard, bronze = self._prepare(contest, is_jury, public, now)
        try:
            award = self.calculator.find_award(scoreboard, award_id, bronze)
        except AwardNotFoundError:
            logger.info("Award %s not found in contest %s", award_id, contest.contest_id)
            raise
        return award.to_dict()

    def _prepare(
        self,
        contest: Contest,
        is_jury: bool,
        public: Optional[bool],
        now: Optional[datetime],
    ) -> tuple[Scoreboard, int]:
        check_access(contest, is_jury, now)

        bronze = contest.get_additional_bronze_medals()
        if bronze < 0:
            raise ValueError(
                f"additional_bronze_medals must be non-negative, got {bronze}"
            )

        public_view = resolve_public_view(is_jury, public)
        logger.debug(
            "Contest %s: %s view, %d extra bronze",
            contest.contest_id, "public" if public_view else "jury", bronze,
        )
        return self.scoreboard_provider.get_scoreboard(public_view), bronze
