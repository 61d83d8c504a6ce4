import calendar                 # monthrange() for month arithmetic
from datetime import timezone   # UTC normalization
import numpy as np              # NumPy for day-ordinal arrays and run lengths

from models import ActivityMetrics


def _utc(dt):
    """Return dt as an aware UTC datetime (naive values are treated as UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def days_since(dt, as_of):
    """
    Return integer days between dt and as_of.
    If dt is None, return None.
    """
    if dt is None:
        return None

    delta = _utc(as_of) - _utc(dt)

    # Convert seconds into whole days (floor division)
    return int(delta.total_seconds() // 86400)


def months_before(dt, months):
    """
    Step back a number of calendar months.
    The day is clamped to the end of the target month (Mar 31 - 1 month = Feb 28/29).
    """
    total = dt.year * 12 + (dt.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def account_age_years(created_at, as_of):
    """Account age in (365-day) years; 0.0 when the creation date is unknown."""
    days = days_since(created_at, as_of)
    if days is None or days < 0:
        return 0.0
    return days / 365.0


# ----------------------------
# Activity Aggregator
# ----------------------------
def flatten_commit_samples(repositories):
    """
    Turn every repo's commit list into flat (is_fork, timestamp) pairs.
    The aggregator decides what to do with fork samples, not the caller.
    """
    samples = []
    for r in repositories:
        for ts in r.commit_dates:
            samples.append((bool(r.is_fork), ts))
    return samples


def contribution_count(repositories):
    """
    Total commits across non-fork repos.
    Uses the history total when the fetch layer supplied one, otherwise the
    number of sampled timestamps.
    """
    total = 0
    for r in repositories:
        if r.is_fork:
            continue
        if r.total_commit_count is not None:
            total += max(int(r.total_commit_count), len(r.commit_dates))
        else:
            total += len(r.commit_dates)
    return total


def _streak_runs(ordinals):
    """
    Lengths of every run of consecutive days.

    ordinals must be sorted and unique. A gap larger than one day starts a
    new run, so [1, 2, 3, 7, 8] -> [3, 2].
    """
    if ordinals.size == 0:
        return np.array([], dtype=int)

    breaks = np.flatnonzero(np.diff(ordinals) != 1)
    starts = np.concatenate(([0], breaks + 1))
    ends = np.concatenate((breaks, [ordinals.size - 1]))
    return ends - starts + 1


def compute_activity_metrics(samples, as_of, window_months=6, total_contributions=None):
    """
    Reduce commit samples into ActivityMetrics.

    Inputs:
      samples: list of (is_fork, datetime) pairs
      as_of: the single "now" for this scoring run
      window_months: trailing window for commit frequency
      total_contributions: optional override (see contribution_count)

    Fork samples are skipped, and so are timestamps after as_of (they were not
    observable at as_of). Dates are compared as UTC calendar days.
    """
    as_of = _utc(as_of)
    dates = sorted(_utc(ts) for is_fork, ts in samples if not is_fork and ts is not None)
    dates = [d for d in dates if d <= as_of]

    if total_contributions is None:
        total_contributions = len(dates)

    if not dates:
        return ActivityMetrics(total_contributions=int(total_contributions))

    last_commit = dates[-1]

    window_start = months_before(as_of, window_months)
    recent = sum(1 for d in dates if d >= window_start)
    frequency = recent / max(window_months, 1)

    ordinals = np.unique(np.array([d.date().toordinal() for d in dates], dtype=np.int64))
    runs = _streak_runs(ordinals)
    longest = int(runs.max())

    # The current streak only counts if it reaches today or yesterday.
    gap = as_of.date().toordinal() - int(ordinals[-1])
    current = int(runs[-1]) if gap <= 1 else 0

    return ActivityMetrics(
        last_commit_date=last_commit,
        commit_frequency=float(frequency),
        active_days=int(ordinals.size),
        current_streak=current,
        longest_streak=longest,
        total_contributions=int(total_contributions),
    )


# ----------------------------
# Portfolio summary helpers
# ----------------------------
def top_languages(language_distribution, n=10):
    """
    Rank languages by repo count (ties broken by name so output is stable).
    Returns rows like {"language": "Python", "repo_count": 3}.
    """
    rows = [
        {"language": lang, "repo_count": int(count or 0)}
        for lang, count in (language_distribution or {}).items()
        if lang
    ]
    return sorted(rows, key=lambda x: (-x["repo_count"], x["language"]))[:n]


def compute_summary(snapshot, activity):
    """
    Plain-dict metadata that travels with the score.
    Every value is JSON-safe.
    """
    repos = snapshot.repositories
    original = [r for r in repos if not r.is_fork]

    return {
        "login": snapshot.user.login,
        "total_repos": len(repos),
        "original_repos": len(original),
        "total_stars": snapshot.total_stars,
        "followers": int(snapshot.user.followers or 0),
        "languages": [row["language"] for row in top_languages(snapshot.language_distribution, n=100)],
        "last_commit_date": activity.last_commit_date.isoformat() if activity.last_commit_date else None,
        "issue_count": int(snapshot.user.issue_count or 0),
        "pull_request_count": int(snapshot.user.pull_request_count or 0),
        "contributed_to_count": int(snapshot.user.contributed_to_count or 0),
    }
