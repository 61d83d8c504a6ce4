"""
test_red_flags.py

Tests for detect_red_flags().
"""

import unittest

from models import ActivityMetrics
from red_flags import detect_red_flags
from snapshot_factory import AS_OF, days_ago, make_repo, make_snapshot, make_user

GOOD_BIO = "Backend developer who likes small, boring, reliable services."


def _titles(flags):
    return [f.title for f in flags]


class TestRedFlags(unittest.TestCase):

    def test_clean_profile(self):
        repos = [make_repo("a", has_readme=True, size=500), make_repo("b", has_readme=True, size=800)]
        snap = make_snapshot(repos, pinned=["a", "b"], user=make_user(bio=GOOD_BIO))
        activity = ActivityMetrics(last_commit_date=days_ago(1))

        self.assertEqual(detect_red_flags(snap, activity, AS_OF), [])

    def test_visible_repos_without_readmes(self):
        repos = [make_repo("a"), make_repo("b"), make_repo("c", has_readme=True), make_repo("d")]
        snap = make_snapshot(repos)

        flags = detect_red_flags(snap, ActivityMetrics(), AS_OF)

        self.assertEqual(_titles(flags), [
            "Missing READMEs in Visible Repos",
            "No Pinned Repositories",
            "Missing Profile Bio",
        ])
        self.assertEqual([f.severity for f in flags], ["high", "medium", "low"])
        # only the first three repos are visible without pins
        self.assertTrue(flags[0].description.startswith("2 of your"))

    def test_pinned_repos_define_visibility(self):
        repos = [make_repo("a"), make_repo("b"), make_repo("c", has_readme=True)]
        snap = make_snapshot(repos, pinned=["c"], user=make_user(bio=GOOD_BIO))

        self.assertEqual(detect_red_flags(snap, ActivityMetrics(), AS_OF), [])

    def test_inactive_account(self):
        snap = make_snapshot([make_repo("a", has_readme=True)], pinned=["a"], user=make_user(bio=GOOD_BIO))

        flags = detect_red_flags(snap, ActivityMetrics(last_commit_date=days_ago(200)), AS_OF)

        self.assertEqual(_titles(flags), ["Account Inactive"])
        self.assertIn("6 months", flags[0].description)

    def test_recent_enough_is_not_inactive(self):
        snap = make_snapshot([make_repo("a", has_readme=True)], pinned=["a"], user=make_user(bio=GOOD_BIO))
        flags = detect_red_flags(snap, ActivityMetrics(last_commit_date=days_ago(179)), AS_OF)
        self.assertEqual(flags, [])

    def test_only_forks(self):
        repos = [make_repo("x", is_fork=True, has_readme=True)]
        snap = make_snapshot(repos, pinned=["x"], user=make_user(bio=GOOD_BIO))

        self.assertEqual(_titles(detect_red_flags(snap, ActivityMetrics(), AS_OF)), ["No Original Work"])

    def test_portfolio_dilution(self):
        tiny = [make_repo(f"tiny{i}", size=2) for i in range(11)]
        keeper = make_repo("keeper", has_readme=True, size=900)
        snap = make_snapshot([keeper] + tiny, pinned=["keeper"], user=make_user(bio=GOOD_BIO))

        flags = detect_red_flags(snap, ActivityMetrics(), AS_OF)

        self.assertEqual(_titles(flags), ["Portfolio Dilution"])
        self.assertTrue(flags[0].description.startswith("11 "))

    def test_ten_tiny_repos_is_fine(self):
        tiny = [make_repo(f"tiny{i}", size=2) for i in range(10)]
        keeper = make_repo("keeper", has_readme=True, size=900)
        snap = make_snapshot([keeper] + tiny, pinned=["keeper"], user=make_user(bio=GOOD_BIO))

        self.assertEqual(detect_red_flags(snap, ActivityMetrics(), AS_OF), [])


if __name__ == "__main__":
    unittest.main()
