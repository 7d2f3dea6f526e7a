"""Tests for src.awards_engine.run_awards (end-to-end over a contest export)."""

import json
import logging
from contextlib import contextmanager

import pytest

from src.awards_engine.models import AwardNotFoundError
from src.awards_engine.run_awards import (
    load_contest,
    resolve_contest_dir,
    run_awards,
    show_award,
)
from src.logging_config import LOG_FILE_NAME, setup_logging
from src.scoreboard.config import CONTESTS_DIR


class TestRunAwards:
    @pytest.fixture
    def output(self, contest_dir, tmp_path):
        output_path = run_awards(contest_dir, output_dir=tmp_path / "awards")
        with open(output_path) as f:
            return json.load(f), output_path

    def test_output_file_named_after_contest(self, output):
        _, output_path = output
        assert output_path.name == "awards_demo.json"

    def test_metadata(self, output):
        data, _ = output
        meta = data["metadata"]
        assert meta["contest_id"] == "demo"
        assert meta["contest_name"] == "Demo Contest"
        assert meta["public"] is False
        assert meta["additional_bronze_medals"] == 0
        assert meta["total_awards"] == len(data["awards"])

    def test_award_shape(self, output):
        data, _ = output
        for award in data["awards"]:
            assert set(award) == {"id", "citation", "team_ids"}
            assert award["team_ids"]

    def test_public_run(self, contest_dir, tmp_path):
        output_path = run_awards(contest_dir, public=True, output_dir=tmp_path)
        data = json.loads(output_path.read_text())
        ids = [a["id"] for a in data["awards"]]
        assert "group-winner-4" not in ids
        assert data["metadata"]["public"] is True

    def test_configured_bronze_medals(self, make_contest, tmp_path):
        contest_dir = make_contest(contest={"additional_bronze_medals": 3})
        output_path = run_awards(contest_dir, output_dir=tmp_path)
        data = json.loads(output_path.read_text())
        assert data["metadata"]["additional_bronze_medals"] == 3

    def test_missing_contest_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            run_awards(tmp_path / "nope", output_dir=tmp_path)


class TestShowAward:
    def test_single_award(self, contest_dir):
        award = show_award(contest_dir, "first-to-solve-pB")
        assert award["team_ids"] == ["t4"]

    def test_unknown_award(self, contest_dir):
        with pytest.raises(AwardNotFoundError):
            show_award(contest_dir, "silver-medal")

    def test_load_contest(self, contest_dir):
        assert load_contest(contest_dir).contest_id == "demo"


@contextmanager
def _bare_root_logger():
    """Detach the root logger's handlers (pytest's included) for a block."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    for handler in saved_handlers:
        root.removeHandler(handler)
    try:
        yield root
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


class TestSetupLogging:
    def test_installs_file_and_console_handlers(self, tmp_path):
        with _bare_root_logger() as root:
            setup_logging("DEBUG", log_dir=tmp_path)
            handler_count, level = len(root.handlers), root.level

        assert (tmp_path / LOG_FILE_NAME).exists()
        assert handler_count == 2
        assert level == logging.DEBUG

    def test_noop_when_configured(self, tmp_path):
        with _bare_root_logger() as root:
            root.addHandler(logging.NullHandler())
            setup_logging(log_dir=tmp_path / "logs")
            handler_count = len(root.handlers)

        assert not (tmp_path / "logs").exists()
        assert handler_count == 1


# ── Bundled demo contest ──────────────────────────────────────────────

DEMO_DIR = CONTESTS_DIR / "demo"

requires_demo_data = pytest.mark.skipif(
    not (DEMO_DIR / "contest.json").exists(),
    reason=f"Demo contest not found at {DEMO_DIR}",
)


class TestResolveContestDir:
    def test_existing_directory(self, contest_dir):
        assert resolve_contest_dir(str(contest_dir)) == contest_dir

    def test_contest_id(self):
        assert resolve_contest_dir("some-contest") == CONTESTS_DIR / "some-contest"


@requires_demo_data
class TestDemoContest:
    @pytest.fixture(scope="class")
    def jury_awards(self, tmp_path_factory):
        output_path = run_awards(DEMO_DIR, output_dir=tmp_path_factory.mktemp("awards"))
        data = json.loads(output_path.read_text())
        return {a["id"]: a for a in data["awards"]}

    def test_jury_award_order(self, jury_awards):
        assert list(jury_awards) == [
            "group-winner-3", "group-winner-4",
            "first-to-solve-fltcmp", "first-to-solve-boolfind", "first-to-solve-hello",
            "winner", "gold-medal", "silver-medal", "bronze-medal",
        ]

    def test_hidden_team_counts_for_jury(self, jury_awards):
        assert jury_awards["first-to-solve-hello"]["team_ids"] == ["16"]
        assert jury_awards["group-winner-4"]["team_ids"] == ["16"]

    def test_extra_bronze_medal(self, jury_awards):
        assert jury_awards["bronze-medal"]["team_ids"] == ["16", "9", "10", "11", "12", "13"]

    def test_public_view(self):
        award = show_award(DEMO_DIR, "first-to-solve-hello", public=True)
        assert award["team_ids"] == ["1", "2"]
        with pytest.raises(AwardNotFoundError):
            show_award(DEMO_DIR, "first-to-solve-fltcmp", public=True)

    def test_public_medals_use_frozen_scores(self):
        award = show_award(DEMO_DIR, "gold-medal", public=True)
        assert award["team_ids"] == ["1", "4", "5", "6"]
