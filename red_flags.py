# red_flags.py
#
# Purpose:
# Deal-breakers a recruiter would notice in the first minute, listed
# separately from the dimension scores. These never change the numeric score.
#
# Severity is one of "high", "medium", "low".

from analytics import days_since
from config import SCORING_CONFIG
from models import RedFlag


def _visible_repos(snapshot):
    """Pinned repos, or the first three repos when nothing is pinned."""
    if snapshot.pinned_repository_names:
        names = set(snapshot.pinned_repository_names)
    else:
        names = {r.name for r in snapshot.repositories[:3]}
    return [r for r in snapshot.repositories if r.name in names]


def detect_red_flags(snapshot, activity, as_of, thresholds=None):
    """
    Return a list of RedFlag objects (possibly empty), most severe first.

    Checks:
      - visible repos missing READMEs
      - no commit for 6+ months
      - only forks
      - nothing pinned
      - lots of tiny, undocumented, unstarred repos
      - missing or very short bio
    """
    t = thresholds or SCORING_CONFIG["red_flags"]
    flags = []
    repos = snapshot.repositories
    originals = [r for r in repos if not r.is_fork]

    no_readme = [r for r in _visible_repos(snapshot) if not r.has_readme]
    if len(no_readme) >= t["visible_missing_readme_min"]:
        flags.append(RedFlag(
            "Missing READMEs in Visible Repos",
            f"{len(no_readme)} of your most visible repos lack READMEs. "
            "This is a deal-breaker for most recruiters.",
            "high",
        ))

    days = days_since(activity.last_commit_date, as_of)
    if days is not None:
        months = days // 30
        if months >= t["inactive_after_months"]:
            flags.append(RedFlag(
                "Account Inactive",
                f"Last commit was {months} months ago. "
                "Recruiters filter out profiles with no recent activity.",
                "high",
            ))

    if repos and not originals:
        flags.append(RedFlag(
            "No Original Work",
            "All visible repos are forks. Recruiters need to see YOUR projects, not cloned tutorials.",
            "high",
        ))

    if not snapshot.pinned_repository_names:
        flags.append(RedFlag(
            "No Pinned Repositories",
            "Pin 4-6 best projects. Pinned repos control your first impression.",
            "medium",
        ))

    trivial = [
        r for r in originals
        if int(r.size or 0) < t["trivial_max_size_kb"]
        and not r.has_readme
        and int(r.stars or 0) == 0
        and int(r.forks or 0) == 0
    ]
    if len(trivial) > t["trivial_min_count"]:
        flags.append(RedFlag(
            "Portfolio Dilution",
            f"{len(trivial)} very small/undocumented repos clutter your profile. "
            "Archive or delete them to focus attention on real work.",
            "medium",
        ))

    bio = snapshot.user.bio or ""
    if len(bio) < t["bio_min_chars"]:
        flags.append(RedFlag(
            "Missing Profile Bio",
            "Your bio is your elevator pitch. Add 1-2 sentences about what you build and why.",
            "low",
        ))

    return flags
