"""
test_engine.py

Tests for the composite score, the suggestion prioritizer, strengths, the
legend floor and the full score_portfolio() pipeline.
"""

import copy
import json
import unittest
from datetime import datetime, timedelta

from config import SCORING_CONFIG
from engine import (
    aggregate_score,
    apply_legend_floor,
    identify_strengths,
    prioritize_suggestions,
    score_portfolio,
)
from models import (
    ActivityMetrics,
    Difficulty,
    Dimension,
    Priority,
    ProfileType,
    ScoreDimension,
    Suggestion,
    SuggestionKind,
)
from snapshot_factory import AS_OF, days_ago, make_repo, make_snapshot, make_user


def _dim(score, weight, name="Code Quality"):
    return ScoreDimension(name=name, score=score, weight=weight, feedback="", why_it_matters="")


def _suggestion(kind, priority, points, title=None):
    return Suggestion(
        kind=kind,
        title=title or kind.value,
        points=points,
        category="Code Quality",
        difficulty=Difficulty.EASY,
        time_estimate="5 min",
        priority=priority,
    )


def _rich_snapshot():
    repos = [
        make_repo(
            "portfolio",
            description="Personal site",
            topics=["react"],
            language="TypeScript",
            homepage="https://me.vercel.app",
            has_readme=True,
            readme_content="Why I built this: I wanted one place for my projects. " * 5,
            stars=30,
            open_issues=2,
            updated_at=days_ago(2),
            code_quality={"has_ci": True, "has_linting": True, "has_typescript": True},
            commit_dates=[days_ago(0), days_ago(1), days_ago(2), days_ago(20)],
            total_commit_count=80,
        ),
        make_repo(
            "api",
            description="REST backend",
            topics=["django"],
            language="Python",
            has_readme=True,
            readme_content="The problem: slow reports. " * 10,
            stars=25,
            updated_at=days_ago(10),
            code_quality={"has_tests": True},
            commit_dates=[days_ago(10), days_ago(40)],
        ),
        make_repo("notes", language="Go", updated_at=days_ago(100)),
        make_repo("forked-lib", is_fork=True, language="C", commit_dates=[days_ago(0)]),
    ]
    user = make_user(
        bio="Full-stack developer building tools for small teams.",
        followers=12,
        created_at=AS_OF - timedelta(days=365 * 4),
    )
    return make_snapshot(repos, pinned=["api", "portfolio"], user=user)


class TestAggregate(unittest.TestCase):

    def test_weighted_sum(self):
        dims = [_dim(80, 50), _dim(60, 50)]
        self.assertEqual(aggregate_score(dims), 70)

    def test_rounds_once_half_up(self):
        # 0.5 + 0.5 + 0.5 = 1.5 -> 2 (rounding each term first would give 3 or 0)
        dims = [_dim(5, 10), _dim(5, 10), _dim(5, 10)]
        self.assertEqual(aggregate_score(dims), 2)

    def test_empty(self):
        self.assertEqual(aggregate_score([]), 0)

    def test_perfect(self):
        weights = [20, 25, 20, 10, 15, 10]
        self.assertEqual(aggregate_score([_dim(100, w) for w in weights]), 100)


class TestPrioritizer(unittest.TestCase):

    def test_priority_beats_points(self):
        low = _suggestion(SuggestionKind.LEARN_LANGUAGE, Priority.LOW, 50)
        critical = _suggestion(SuggestionKind.ADD_README, Priority.CRITICAL, 1)

        self.assertEqual(prioritize_suggestions([low, critical]), [critical, low])

    def test_points_break_ties_within_priority(self):
        a = _suggestion(SuggestionKind.ADD_CICD, Priority.MEDIUM, 10)
        b = _suggestion(SuggestionKind.ADD_TESTS, Priority.MEDIUM, 20)
        self.assertEqual(prioritize_suggestions([a, b]), [b, a])

    def test_equal_keys_keep_emission_order(self):
        items = [
            _suggestion(SuggestionKind.ADD_LINTING, Priority.MEDIUM, 6),
            _suggestion(SuggestionKind.ADD_CICD, Priority.MEDIUM, 6),
            _suggestion(SuggestionKind.ADD_TESTS, Priority.MEDIUM, 6),
        ]
        self.assertEqual(prioritize_suggestions(items), items)

    def test_duplicates_are_dropped_first_wins(self):
        first = _suggestion(SuggestionKind.ADD_README, Priority.CRITICAL, 8, title="first")
        second = _suggestion(SuggestionKind.ADD_README, Priority.CRITICAL, 40, title="second")

        result = prioritize_suggestions([first, second])

        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].title, "first")

    def test_capped_at_top_n(self):
        items = [_suggestion(kind, Priority.LOW, 1) for kind in SuggestionKind]
        self.assertEqual(len(prioritize_suggestions(items)), 5)
        self.assertEqual(len(prioritize_suggestions(items, top_n=3)), 3)

    def test_inputs_are_not_modified(self):
        items = [
            _suggestion(SuggestionKind.CREATE_ISSUES, Priority.LOW, 3),
            _suggestion(SuggestionKind.ADD_README, Priority.CRITICAL, 8),
        ]
        before = list(items)
        prioritize_suggestions(items)
        self.assertEqual(items, before)


class TestStrengths(unittest.TestCase):

    def test_fallback_when_nothing_stands_out(self):
        snap = make_snapshot([make_repo("a")])
        result = identify_strengths([_dim(40, 100)], snap, ActivityMetrics())
        self.assertEqual(result, ["Keep building!"])

    def test_dimensions_and_badges(self):
        repos = [make_repo(f"r{i}", stars=10) for i in range(4)]
        snap = make_snapshot(repos, pinned=[r.name for r in repos])
        activity = ActivityMetrics(commit_frequency=16.0, current_streak=7)
        dims = [_dim(70, 50, name="Code Quality"), _dim(69, 50, name="Project Impact")]

        result = identify_strengths(dims, snap, activity)

        self.assertEqual(result, [
            "Code Quality",
            "Highly Active Developer",
            "Community Recognition",
            "Well-Curated Profile",
            "Daily Committer",
        ])


class TestLegendFloor(unittest.TestCase):

    def setUp(self):
        self.famous = make_snapshot([make_repo("kernel", stars=150000)], user=make_user(followers=200000))

    def test_disabled_by_default(self):
        self.assertEqual(apply_legend_floor(55, self.famous), 55)

    def test_enabled_raises_to_floor(self):
        legend = dict(SCORING_CONFIG["legend"], enabled=True)
        self.assertEqual(apply_legend_floor(55, self.famous, legend), 90)
        self.assertEqual(apply_legend_floor(97, self.famous, legend), 97)

    def test_enabled_leaves_regular_accounts_alone(self):
        legend = dict(SCORING_CONFIG["legend"], enabled=True)
        regular = make_snapshot([make_repo("a", stars=3)])
        self.assertEqual(apply_legend_floor(55, regular, legend), 55)


class TestScorePortfolio(unittest.TestCase):

    def test_empty_snapshot(self):
        snap = make_snapshot([], user=make_user(created_at=AS_OF - timedelta(days=100)))

        score = score_portfolio(snap, as_of=AS_OF)

        self.assertEqual(score.profile_type, ProfileType.STUDENT)
        self.assertEqual([d.name for d in score.dimensions], [d.value for d in Dimension])
        self.assertTrue(0 <= score.total_score <= 100)
        self.assertEqual(score.dimension("Code Quality").score, 0)
        self.assertEqual(score.top_repos, ())
        self.assertIsNone(score.activity.last_commit_date)
        self.assertLessEqual(len(score.top_suggestions), 5)
        self.assertEqual(score.top_suggestions[0].priority, Priority.CRITICAL)
        self.assertNotIn(SuggestionKind.COMMIT_RECENTLY, [s.kind for s in score.top_suggestions])

    def test_rich_snapshot(self):
        score = score_portfolio(_rich_snapshot(), as_of=AS_OF)

        self.assertEqual(score.profile_type, ProfileType.PROFESSIONAL)
        self.assertEqual(sum(d.weight for d in score.dimensions), 100)
        self.assertEqual([r.name for r in score.top_repos], ["api", "portfolio"])

        # fork commits never count toward activity
        self.assertEqual(score.activity.last_commit_date, days_ago(0))
        self.assertEqual(score.activity.current_streak, 3)
        self.assertEqual(score.activity.total_contributions, 82)

        self.assertEqual(score.dimension("Production Readiness").score, 95)
        self.assertEqual(score.dimension("Community Trust").score, 40)

        expected = 0
        for d in score.dimensions:
            expected += d.score * d.weight / 100.0
        self.assertEqual(score.total_score, int(expected + 0.5))

        kinds = [s.kind for s in score.top_suggestions]
        self.assertEqual(len(kinds), len(set(kinds)))
        self.assertEqual(score.config_version, SCORING_CONFIG["version"])
        self.assertEqual(score.summary["original_repos"], 3)

    def test_idempotent_for_same_as_of(self):
        snap = _rich_snapshot()

        first = json.dumps(score_portfolio(snap, as_of=AS_OF).to_dict(), sort_keys=True)
        second = json.dumps(score_portfolio(snap, as_of=AS_OF).to_dict(), sort_keys=True)

        self.assertEqual(first, second)

    def test_naive_as_of_is_utc(self):
        snap = _rich_snapshot()
        naive = datetime(2025, 6, 15, 12, 0)

        self.assertEqual(
            score_portfolio(snap, as_of=naive).to_dict(),
            score_portfolio(snap, as_of=AS_OF).to_dict(),
        )

    def test_per_profile_threshold_override(self):
        config = copy.deepcopy(SCORING_CONFIG)
        config["profiles"]["professional"]["thresholds"] = {
            "production_readiness": {"base_points": 0},
        }

        score = score_portfolio(_rich_snapshot(), as_of=AS_OF, config=config)

        self.assertEqual(score.dimension("Production Readiness").score, 45)

    def test_legend_floor_via_config(self):
        config = copy.deepcopy(SCORING_CONFIG)
        config["legend"]["enabled"] = True
        snap = make_snapshot([make_repo("kernel", stars=20000)])

        score = score_portfolio(snap, as_of=AS_OF, config=config)

        self.assertGreaterEqual(score.total_score, 90)


if __name__ == "__main__":
    unittest.main()
