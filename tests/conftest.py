"""Shared fixtures for the awards engine test suite."""

import json
import textwrap
from pathlib import Path

import pytest

from src.awards_engine.calculator import AwardsCalculator
from src.scoreboard.transformation import ScoreboardBuilder

# ------------------------------------------------------------------
# Contest export used by ingestion, builder, service and CLI tests.
#
# Jury ranking: t1, t2 (tied rank 2), t3, t4 (hidden), t5 (no solves).
# Categories: "3" participants (t1, t2, t3, t5), "4" observers (t4).
# Problem A is solved first by t1 and t2 simultaneously; problem B is
# solved first by hidden t4, and after the freeze, so the public view
# sees t3 as its first solver. t1 and t2 also solve B after the freeze:
# publicly t1, t2 and t3 have one solve each and rank 1, 1, 3.
# ------------------------------------------------------------------

CONTEST_JSON = {
    "contest_id": "demo",
    "name": "Demo Contest",
    "enabled": True,
    "public": True,
    "activate_time": "2020-01-01T00:00:00+00:00",
    "deactivate_time": None,
    "additional_bronze_medals": None,
}

TEAMS_CSV = """\
    team_id,name,category_id,category_name,hidden
    t1,Alpha,3,Participants,0
    t2,Beta,3,Participants,0
    t3,Gamma,3,Participants,no
    t4,Delta,4,Observers,yes
    t5,Epsilon,3,Participants,
"""

PROBLEMS_CSV = """\
    problem_id,label
    pA,A
    pB,
"""

SCORES_CSV = """\
    team_id,rank,num_points
    t1,1,2
    t4,2,2
    t2,2,2
    t3,4,1
    t5,5,0
"""

RESULTS_CSV = """\
    team_id,problem_id,is_correct,solve_time,after_freeze
    t1,pA,1,10,0
    t2,pA,true,10,0
    t4,pA,1,12,0
    t1,pB,1,90,1
    t2,pB,1,95,1
    t4,pB,1,50,1
    t3,pB,1,60,0
    t5,pA,0,,0
"""


def write_contest(contest_dir: Path, **overrides) -> Path:
    """Write the demo contest export to *contest_dir*.

    Keyword overrides replace whole files, e.g. ``scores="..."``, or
    patch the contest JSON via ``contest={...}``.
    """
    contest_dir.mkdir(parents=True, exist_ok=True)
    contest = dict(CONTEST_JSON, **overrides.pop("contest", {}))
    (contest_dir / "contest.json").write_text(json.dumps(contest))

    files = {
        "teams": TEAMS_CSV,
        "problems": PROBLEMS_CSV,
        "scores": SCORES_CSV,
        "results": RESULTS_CSV,
    }
    files.update(overrides)
    for key, content in files.items():
        if content is None:
            continue
        (contest_dir / f"{key}.csv").write_text(textwrap.dedent(content))
    return contest_dir


@pytest.fixture
def contest_dir(tmp_path):
    """A complete demo contest export in a temporary directory."""
    return write_contest(tmp_path / "demo")


@pytest.fixture
def make_contest(tmp_path):
    """Factory writing a demo contest export with file overrides."""
    def _make(name="demo", **overrides):
        return write_contest(tmp_path / name, **overrides)
    return _make


@pytest.fixture(scope="module")
def calculator():
    return AwardsCalculator()


@pytest.fixture(scope="module")
def builder():
    return ScoreboardBuilder()
