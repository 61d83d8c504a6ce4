# engine.py
#
# What this file is:
# The pipeline entry point, score_portfolio(), plus the steps that need all
# six dimensions to be finished first:
#   - aggregate_score()        weighted composite (0–100)
#   - prioritize_suggestions() dedupe + order + cap at top N
#   - identify_strengths()     dimension names >= 70 + qualitative badges
#   - apply_legend_floor()     optional post-processing floor (off by default)
#
# Flow of score_portfolio():
#   as_of (sampled once) -> activity metrics -> profile type -> weights
#   -> representative repos -> six dimensions -> composite -> suggestions
#   -> strengths / red flags / display repos / summary -> PortfolioScore
#
# Nothing here does I/O or reads the clock more than once, so two calls with
# the same snapshot and as_of return equal results.

from datetime import datetime, timezone

from analytics import (
    compute_activity_metrics,
    compute_summary,
    contribution_count,
    flatten_commit_samples,
)
from config import SCORING_CONFIG, resolve_profile_config
from models import PRIORITY_RANK, PortfolioScore, flatten_suggestions
from profiling import classify_profile, select_display_repos, select_scoring_repos
from red_flags import detect_red_flags
from scoring import ScoringContext, clamp, round_half_up, score_dimensions


def aggregate_score(dimensions):
    """
    Composite = round(sum(score * weight / 100)).

    One accumulation pass over the dimensions, then a single half-up
    rounding, then a clamp into [0, 100].
    """
    total = 0.0
    for d in dimensions:
        total += d.score * d.weight / 100.0
    return int(clamp(round_half_up(total)))


def prioritize_suggestions(suggestions, top_n=5):
    """
    Order suggestions for display.

      1) drop repeats of a kind already seen (first one wins)
      2) priority: critical, high, medium, low
      3) points, highest first
      4) ties keep emission order (sorted() is stable)

    Suggestion objects are returned as-is, never modified.
    """
    seen = set()
    unique = []
    for s in suggestions:
        if s.kind in seen:
            continue
        seen.add(s.kind)
        unique.append(s)

    ordered = sorted(unique, key=lambda s: (PRIORITY_RANK[s.priority], -s.points))
    return ordered[:top_n]


def identify_strengths(dimensions, snapshot, activity, thresholds=None):
    """Dimension names scoring >= 70, then badges; never empty."""
    t = thresholds or SCORING_CONFIG["strengths"]

    strengths = [d.name for d in dimensions if d.score >= t["dimension_min_score"]]

    if activity.commit_frequency > t["active_min_frequency"]:
        strengths.append("Highly Active Developer")

    if snapshot.total_stars > t["recognition_min_stars"]:
        strengths.append("Community Recognition")

    if len(snapshot.pinned_repository_names) >= t["curated_min_pinned"]:
        strengths.append("Well-Curated Profile")

    if activity.current_streak >= t["streak_min_days"]:
        strengths.append("Daily Committer")

    return strengths if strengths else ["Keep building!"]


def apply_legend_floor(total_score, snapshot, legend=None):
    """
    Optional floor for extremely well-known accounts.

    When enabled and the account clears either the star or the follower bar,
    the composite is raised to at least legend["floor"]. Disabled by default,
    in which case total_score is returned unchanged.
    """
    legend = legend or SCORING_CONFIG["legend"]
    if not legend.get("enabled"):
        return total_score

    is_legend = (
        snapshot.total_stars >= legend["min_stars"]
        or int(snapshot.user.followers or 0) >= legend["min_followers"]
    )
    if not is_legend:
        return total_score

    return int(clamp(max(total_score, legend["floor"])))


def _normalize_as_of(as_of):
    if as_of is None:
        return datetime.now(timezone.utc)
    if as_of.tzinfo is None:
        return as_of.replace(tzinfo=timezone.utc)
    return as_of.astimezone(timezone.utc)


def score_portfolio(snapshot, as_of=None, config=None):
    """
    Score one snapshot.

    Inputs:
      snapshot: AnalysisSnapshot
      as_of: datetime used for every recency/age calculation in this run.
             Sampled once from the clock when omitted.
      config: scoring config dict (config.load_scoring_config()); defaults
              to SCORING_CONFIG.

    Output:
      PortfolioScore
    """
    config = config or SCORING_CONFIG
    as_of = _normalize_as_of(as_of)

    base_thresholds = config["thresholds"]
    activity = compute_activity_metrics(
        flatten_commit_samples(snapshot.repositories),
        as_of,
        window_months=base_thresholds["activity"]["frequency_window_months"],
        total_contributions=contribution_count(snapshot.repositories),
    )

    profile_type = classify_profile(snapshot, as_of, base_thresholds["classifier"])
    resolved = resolve_profile_config(config, profile_type)

    repos = select_scoring_repos(snapshot.repositories, snapshot.pinned_repository_names)

    ctx = ScoringContext(as_of=as_of, activity=activity, thresholds=resolved["thresholds"])
    dimensions = score_dimensions(snapshot, repos, resolved["weights"], ctx)

    total = aggregate_score(dimensions)
    total = apply_legend_floor(total, snapshot, config["legend"])

    top_suggestions = prioritize_suggestions(
        flatten_suggestions(dimensions),
        top_n=config["suggestions"]["top_n"],
    )

    return PortfolioScore(
        total_score=total,
        profile_type=profile_type,
        dimensions=tuple(dimensions),
        top_repos=tuple(select_display_repos(snapshot.repositories, snapshot.pinned_repository_names)),
        strengths=tuple(identify_strengths(dimensions, snapshot, activity, config["strengths"])),
        top_suggestions=tuple(top_suggestions),
        red_flags=tuple(detect_red_flags(snapshot, activity, as_of, config["red_flags"])),
        activity=activity,
        summary=compute_summary(snapshot, activity),
        as_of=as_of,
        config_version=str(config.get("version", "")),
    )
