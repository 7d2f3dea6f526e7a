"""Scoreboard data models - a read-only ranked snapshot of a contest."""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Tuple


@dataclass(frozen=True)
class Category:
    """A team category (group), e.g. participants or observers."""

    category_id: str
    name: str


@dataclass(frozen=True)
class Team:
    """A contest team, identified by its external API id."""

    team_id: str
    name: str
    category: Category
    hidden: bool = False


@dataclass(frozen=True)
class Problem:
    """A contest problem, identified by its external API id."""

    problem_id: str
    label: str = ""


@dataclass(frozen=True)
class TeamScore:
    """One scoreboard row: a team and its (already tie-broken) rank."""

    team: Team
    rank: int
    num_points: int = 0


@dataclass(frozen=True)
class Scoreboard:
    """Complete ranked scoreboard for one contest view.

    ``scores`` is ordered by rank ascending as delivered by whoever built
    the scoreboard; consumers must not re-sort it.
    """

    teams: List[Team]
    problems: List[Problem]
    scores: List[TeamScore]
    first_solves: FrozenSet[Tuple[str, str]] = field(default_factory=frozenset)
    best_in_category: FrozenSet[str] = field(default_factory=frozenset)
    public: bool = True

    def solved_first(self, team: Team, problem: Problem) -> bool:
        """Whether *team* was (one of) the first to solve *problem*."""
        return (team.team_id, problem.problem_id) in self.first_solves

    def is_best_in_category(self, team: Team) -> bool:
        """Whether *team* is (one of) the best ranked in its category."""
        return team.team_id in self.best_in_category
