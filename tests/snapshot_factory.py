"""
snapshot_factory.py

Small builders shared by the test modules. Every test scores against the
same fixed AS_OF so nothing depends on the real clock.
"""

from datetime import datetime, timedelta, timezone

from models import AnalysisSnapshot, CodeQualityFlags, RepositorySummary, UserProfile

AS_OF = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def days_ago(n, hour=12):
    """A timestamp n calendar days before AS_OF, at the given hour."""
    base = AS_OF - timedelta(days=n)
    return base.replace(hour=hour, minute=0, second=0)


def make_repo(name, **kwargs):
    if "code_quality" in kwargs and isinstance(kwargs["code_quality"], dict):
        kwargs["code_quality"] = CodeQualityFlags(**kwargs["code_quality"])
    if "topics" in kwargs:
        kwargs["topics"] = tuple(kwargs["topics"])
    if "commit_dates" in kwargs:
        kwargs["commit_dates"] = tuple(kwargs["commit_dates"])
    return RepositorySummary(name=name, **kwargs)


def make_user(login="octocat", **kwargs):
    kwargs.setdefault("created_at", AS_OF - timedelta(days=365 * 5))
    return UserProfile(login=login, **kwargs)


def make_snapshot(repos=(), pinned=(), languages=None, user=None):
    if languages is None:
        languages = {}
        for r in repos:
            if r.language and not r.is_fork:
                languages[r.language] = languages.get(r.language, 0) + 1
    return AnalysisSnapshot(
        user=user or make_user(),
        repositories=tuple(repos),
        pinned_repository_names=tuple(pinned),
        language_distribution=languages,
    )
