# profiling.py
#
# Purpose:
# The three small decisions every scoring run makes before any dimension is
# scored:
#   1) classify_profile()        -> student / professional / open-source
#   2) resolve_weights()         -> the six weights for that profile
#   3) select_scoring_repos()    -> the (max 6) repos every scorer looks at
#
# Plus select_display_repos(), the short list shown next to the score.
#
# All of these are pure functions of the snapshot (and as_of), so they are
# computed once per run and shared by every scorer.

from analytics import account_age_years
from config import MAX_DISPLAY_REPOS, MAX_SCORED_REPOS, SCORING_CONFIG, resolve_profile_config
from models import ProfileType


def classify_profile(snapshot, as_of, thresholds=None):
    """
    Assign a profile archetype. First match wins:

      1) young account AND few repos AND few stars   -> student
      2) many stars OR many followers                -> open-source
      3) otherwise                                   -> professional

    The student check runs first on purpose. Its star ceiling (200) sits
    below the open-source star floor (500), and config.validate_config()
    refuses any recalibration that would let the two overlap.
    """
    t = thresholds or SCORING_CONFIG["thresholds"]["classifier"]

    age = account_age_years(snapshot.user.created_at, as_of)
    total_repos = len(snapshot.repositories)
    total_stars = snapshot.total_stars
    followers = int(snapshot.user.followers or 0)

    if (
        age < t["student_max_account_years"]
        and total_repos <= t["student_max_repos"]
        and total_stars < t["student_max_stars"]
    ):
        return ProfileType.STUDENT

    if total_stars > t["open_source_min_stars"] or followers > t["open_source_min_followers"]:
        return ProfileType.OPEN_SOURCE

    return ProfileType.PROFESSIONAL


def resolve_weights(profile_type, config=None):
    """
    Six-entry weight table for a profile type.
    Unknown values fall back to the professional table.
    """
    return resolve_profile_config(config or SCORING_CONFIG, profile_type)["weights"]


def _updated_key(repo):
    # Repos without an update timestamp sort last.
    if repo.updated_at is None:
        return (1, 0.0)
    return (0, -repo.updated_at.timestamp())


def select_scoring_repos(repositories, pinned_names, limit=MAX_SCORED_REPOS):
    """
    Representative repos for scoring.

    Pinned repos come first, in pinned order. Remaining slots are filled with
    non-fork, non-pinned repos, most recently updated first.
    """
    by_name = {r.name: r for r in repositories}

    selected = []
    for name in pinned_names:
        repo = by_name.get(name)
        if repo is not None and repo not in selected:
            selected.append(repo)
    selected = selected[:limit]

    pinned = set(pinned_names)
    fillers = [r for r in repositories if not r.is_fork and r.name not in pinned]
    fillers = sorted(fillers, key=_updated_key)

    for repo in fillers:
        if len(selected) >= limit:
            break
        selected.append(repo)

    return selected


def select_display_repos(repositories, pinned_names, limit=MAX_DISPLAY_REPOS):
    """
    Repos to show next to the score.
    Pinned repos if any exist, otherwise non-fork repos by stars (descending).
    """
    if pinned_names:
        by_name = {r.name: r for r in repositories}
        return [by_name[n] for n in pinned_names if n in by_name][:limit]

    originals = [r for r in repositories if not r.is_fork]
    return sorted(originals, key=lambda r: int(r.stars or 0), reverse=True)[:limit]
