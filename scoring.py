# scoring.py
#
# What this file is:
# The six dimension scorers. Each one turns the snapshot + the shared list of
# representative repos into a ScoreDimension: a 0–100 score, a feedback line,
# a "why it matters" line, and suggestions for the points it could not award.
#
# Every scorer follows the same recipe:
#   - add up sub-components, each capped on its own
#   - clamp the raw total into [0, 100] as the last step
#   - round half-up to an integer
#
# Tier boundaries and keyword lists come from the thresholds dict resolved in
# config.py, never from literals in this file.
#
# Failure rules: no scorer raises on incomplete data. Every ratio divides by
# max(n, 1) and every optional field is read as absent/False.

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from analytics import days_since, top_languages
from config import SCORING_CONFIG
from models import (
    DIMENSION_KEYS,
    DIMENSION_ORDER,
    ActivityMetrics,
    Difficulty,
    Dimension,
    Priority,
    ScoreDimension,
    Suggestion,
    SuggestionKind,
)


@dataclass(frozen=True)
class ScoringContext:
    """Run-wide values every scorer may read (sampled once per run)."""
    as_of: datetime
    activity: ActivityMetrics
    thresholds: Optional[dict] = None

    def section(self, name):
        thresholds = self.thresholds or SCORING_CONFIG["thresholds"]
        return thresholds[name]


def clamp(x, lo=0, hi=100):
    """
    Clamp a number into a bounded range.

    Every dimension score passes through this before rounding, so a
    miscalibrated sub-component can never push a score outside [0, 100].
    """
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def round_half_up(x):
    """Round to the nearest integer, .5 going up (2.5 -> 3, not 2)."""
    return int(math.floor(x + 0.5))


def _ratio(count, total):
    return count / max(total, 1)


def _plural(n, word):
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def _tier_at_most(value, tiers, floor):
    """First tier whose bound is >= value, e.g. days since last commit."""
    for bound, points in tiers:
        if value <= bound:
            return points
    return floor


def _tier_at_least(value, tiers, floor):
    """First tier whose bound is <= value, e.g. commits per month."""
    for bound, points in tiers:
        if value >= bound:
            return points
    return floor


def _finish(dimension, raw_score, weight, feedback, why, suggestions):
    return ScoreDimension(
        name=dimension.value,
        score=round_half_up(clamp(raw_score)),
        weight=int(weight),
        feedback=feedback,
        why_it_matters=why,
        suggestions=tuple(suggestions),
    )


def _suggest(kind, title, points, dimension, difficulty, time_estimate, priority):
    return Suggestion(
        kind=kind,
        title=title,
        points=int(points),
        category=dimension.value,
        difficulty=difficulty,
        time_estimate=time_estimate,
        priority=priority,
    )


# ----------------------------
# 1) Code Quality
# ----------------------------
def score_code_quality(snapshot, repos, weight, ctx):
    """
    README coverage (50) + description & topics (30) + lint config (20),
    each as a ratio over the representative repos.
    """
    t = ctx.section("code_quality")
    dim = Dimension.CODE_QUALITY
    n = len(repos)
    suggestions = []

    with_readme = sum(1 for r in repos if r.has_readme)
    score = _ratio(with_readme, n) * t["readme_points"]

    missing = n - with_readme
    if missing > 0:
        suggestions.append(_suggest(
            SuggestionKind.ADD_README,
            f"Add READMEs to {_plural(missing, 'repo')}",
            missing * t["readme_suggestion_points_per_repo"],
            dim, Difficulty.EASY, "15 min per repo", Priority.CRITICAL,
        ))

    organized = sum(1 for r in repos if r.description and r.topics)
    score += _ratio(organized, n) * t["organization_points"]

    if organized < n:
        suggestions.append(_suggest(
            SuggestionKind.ADD_DESCRIPTIONS,
            "Add descriptions and topics to repos",
            5, dim, Difficulty.EASY, "5 min", Priority.HIGH,
        ))

    linted = sum(1 for r in repos if r.quality.has_linting)
    score += _ratio(linted, n) * t["linting_points"]

    if linted == 0:
        suggestions.append(_suggest(
            SuggestionKind.ADD_LINTING,
            "Add ESLint or Prettier configuration",
            6, dim, Difficulty.EASY, "10 min", Priority.MEDIUM,
        ))

    if n == 0:
        feedback = "No repositories to review yet. Publish or pin your best projects."
    elif missing == 0:
        feedback = f"Excellent documentation across all {n} top repos!"
    else:
        feedback = f"{_plural(missing, 'repo')} need READMEs"

    return _finish(
        dim, score, weight, feedback,
        "Recruiters skip repos without documentation. Clean code signals professionalism.",
        suggestions,
    )


# ----------------------------
# 2) Project Impact
# ----------------------------
def _has_demo(repo, domains):
    if repo.homepage:
        return True
    text = (repo.readme_content or "").lower()
    return any(d in text for d in domains)


def _has_story(repo, keywords):
    text = (repo.readme_content or "").lower()
    return any(k in text for k in keywords)


def score_project_impact(snapshot, repos, weight, ctx):
    """
    Live demos (7 per repo, max 35) + README storytelling ratio (35)
    + completeness ratio (30: description AND a README over 200 chars).
    """
    t = ctx.section("project_impact")
    dim = Dimension.PROJECT_IMPACT
    n = len(repos)
    suggestions = []

    demos = sum(1 for r in repos if _has_demo(r, t["hosting_domains"]))
    score = min(demos * t["demo_points_per_repo"], t["demo_points_cap"])

    if demos == 0:
        suggestions.append(_suggest(
            SuggestionKind.DEPLOY_PROJECT,
            "Deploy 1-2 projects to Vercel or Netlify",
            14, dim, Difficulty.EASY, "10 min", Priority.CRITICAL,
        ))

    stories = sum(1 for r in repos if _has_story(r, t["story_keywords"]))
    score += _ratio(stories, n) * t["story_points"]

    if stories < t["story_min_repos"]:
        suggestions.append(_suggest(
            SuggestionKind.ADD_STORYTELLING,
            'Add "Why I Built This" section to READMEs',
            7, dim, Difficulty.EASY, "15 min", Priority.HIGH,
        ))

    complete = sum(
        1 for r in repos
        if r.description and r.readme_chars > t["complete_readme_min_chars"]
    )
    score += _ratio(complete, n) * t["completeness_points"]

    if complete < n:
        suggestions.append(_suggest(
            SuggestionKind.COMPLETE_PROJECTS,
            f"Give {_plural(n - complete, 'repo')} a description and a detailed README",
            round_half_up(_ratio(n - complete, n) * t["completeness_points"]),
            dim, Difficulty.EASY, "20 min per repo", Priority.MEDIUM,
        ))

    if demos > 0:
        feedback = f"{_plural(demos, 'live demo')} prove real-world impact!"
    else:
        feedback = "Deploy projects to show they actually work"

    return _finish(
        dim, score, weight, feedback,
        "Live demos prove your code works. Storytelling shows problem-solving skills.",
        suggestions,
    )


# ----------------------------
# 3) Current & Active
# ----------------------------
def score_current_active(snapshot, repos, weight, ctx):
    """
    Recency of the last commit (max 50) + commits per month (max 50).
    Reads ActivityMetrics from the context; never looks at the clock.
    """
    t = ctx.section("current_active")
    dim = Dimension.CURRENT_ACTIVE
    activity = ctx.activity
    suggestions = []

    days = days_since(activity.last_commit_date, ctx.as_of)
    if days is None:
        score = 0
    else:
        score = _tier_at_most(days, t["recency_tiers"], t["recency_floor_points"])

    # Stale only when a last commit exists and is old.
    if days is not None and days > t["stale_after_days"]:
        suggestions.append(_suggest(
            SuggestionKind.COMMIT_RECENTLY,
            "Make at least 1 commit this month",
            10, dim, Difficulty.EASY, "1 hour", Priority.CRITICAL,
        ))

    frequency = activity.commit_frequency
    score += _tier_at_least(frequency, t["frequency_tiers"], t["frequency_floor_points"])

    if frequency < t["consistent_min_frequency"]:
        suggestions.append(_suggest(
            SuggestionKind.COMMIT_CONSISTENTLY,
            "Commit at least once per week for 1 month",
            15, dim, Difficulty.MEDIUM, "Ongoing", Priority.HIGH,
        ))

    per_month = round_half_up(frequency)
    if frequency >= t["excellent_min_frequency"]:
        feedback = f"Excellent activity: {per_month} commits/month!"
    else:
        feedback = f"Low activity ({per_month}/month). Code regularly to show current skills."

    if activity.current_streak > 0:
        feedback += f" Current streak: {_plural(activity.current_streak, 'day')}."

    return _finish(
        dim, score, weight, feedback,
        "Recruiters filter for recent activity. Dormant accounts suggest outdated skills.",
        suggestions,
    )


# ----------------------------
# 4) Production Readiness
# ----------------------------
def score_production_readiness(snapshot, repos, weight, ctx):
    """
    Starts at 50: missing CI or tests is neutral, never a penalty.
    +25 if any representative repo has CI, +20 if any has tests.
    """
    t = ctx.section("production_readiness")
    dim = Dimension.PRODUCTION_READINESS
    suggestions = []

    score = t["base_points"]

    if any(r.quality.has_ci for r in repos):
        score += t["ci_points"]
    else:
        suggestions.append(_suggest(
            SuggestionKind.ADD_CICD,
            "Add GitHub Actions CI/CD workflow",
            t["ci_points"], dim, Difficulty.EASY, "10 min", Priority.MEDIUM,
        ))

    if any(r.quality.has_tests for r in repos):
        score += t["tests_points"]
    else:
        suggestions.append(_suggest(
            SuggestionKind.ADD_TESTS,
            "Add basic tests to 1-2 projects",
            t["tests_points"], dim, Difficulty.MEDIUM, "30 min", Priority.MEDIUM,
        ))

    if score > t["ready_above"]:
        feedback = "Production-ready code with CI/CD and tests!"
    else:
        feedback = "Add CI/CD and tests to show professional workflows (optional for students)"

    return _finish(
        dim, score, weight, feedback,
        "Shows you can ship to production. Not required for students, but impressive.",
        suggestions,
    )


# ----------------------------
# 5) Technical Skill
# ----------------------------
def score_technical_skill(snapshot, repos, weight, ctx):
    """
    Language breadth (max 40) + any modern language in the distribution (30)
    + framework topic tags on representative repos (10 each, max 30).
    """
    t = ctx.section("technical_skill")
    dim = Dimension.TECHNICAL_SKILL
    suggestions = []

    ranked = [row["language"] for row in top_languages(snapshot.language_distribution, n=1000)]
    unique_langs = len(ranked)

    score = _tier_at_least(unique_langs, t["language_tiers"], t["language_floor_points"])

    if unique_langs < t["breadth_min_languages"]:
        suggestions.append(_suggest(
            SuggestionKind.LEARN_LANGUAGE,
            "Learn a complementary language (e.g., TypeScript, Python)",
            10, dim, Difficulty.HARD, "1-2 months", Priority.LOW,
        ))

    modern = set(t["modern_languages"])
    if any(lang in modern for lang in ranked):
        score += t["modern_points"]

    frameworks = {f.lower() for f in t["frameworks"]}
    framework_repos = sum(
        1 for r in repos if any(topic.lower() in frameworks for topic in r.topics)
    )
    score += min(framework_repos * t["framework_points_per_repo"], t["framework_points_cap"])

    if framework_repos == 0 and repos:
        suggestions.append(_suggest(
            SuggestionKind.TAG_FRAMEWORKS,
            "Tag framework topics (e.g., react, django) on your top repos",
            t["framework_points_per_repo"], dim, Difficulty.EASY, "5 min", Priority.LOW,
        ))

    if unique_langs >= t["breadth_min_languages"]:
        feedback = f"Strong technical breadth: {', '.join(ranked[:3])}"
    elif unique_langs == 0:
        feedback = "No languages detected yet. Publish code to show your stack."
    else:
        feedback = f"Limited to {', '.join(ranked)}. Learn 1-2 more languages."

    return _finish(
        dim, score, weight, feedback,
        "Breadth shows adaptability, depth shows mastery. Both matter to recruiters.",
        suggestions,
    )


# ----------------------------
# 6) Community Trust
# ----------------------------
def score_community_trust(snapshot, repos, weight, ctx):
    """
    Small integer points, then x10:
      +3 if any repo (all repos, not only representative ones) has open issues
      +2 for 200+ total stars, +1 for 50+
    The raw thresholds and the x10 scale only make sense together.
    """
    t = ctx.section("community_trust")
    dim = Dimension.COMMUNITY_TRUST
    suggestions = []

    raw_points = 0
    if any(int(r.open_issues or 0) > 0 for r in snapshot.repositories):
        raw_points += t["issue_points"]
    else:
        suggestions.append(_suggest(
            SuggestionKind.CREATE_ISSUES,
            "Create issues for feature ideas in your repos",
            t["issue_points"], dim, Difficulty.EASY, "10 min", Priority.LOW,
        ))

    total_stars = snapshot.total_stars
    raw_points += _tier_at_least(total_stars, t["star_tiers"], 0)

    score = raw_points * t["scale"]

    if total_stars > t["validated_above_stars"]:
        feedback = f"{total_stars} stars show community validation!"
    else:
        feedback = "Build impressive projects to earn stars (not critical for students)"

    return _finish(
        dim, score, weight, feedback,
        "External validation matters, but not critical for early-career developers.",
        suggestions,
    )


SCORERS = {
    Dimension.CODE_QUALITY: score_code_quality,
    Dimension.PROJECT_IMPACT: score_project_impact,
    Dimension.CURRENT_ACTIVE: score_current_active,
    Dimension.PRODUCTION_READINESS: score_production_readiness,
    Dimension.TECHNICAL_SKILL: score_technical_skill,
    Dimension.COMMUNITY_TRUST: score_community_trust,
}


def score_dimensions(snapshot, repos, weights, ctx):
    """
    Run all six scorers in emission order.

    weights is keyed by the config names (code_quality, ...). The scorers
    don't depend on each other, so order only matters for output order.
    """
    return [
        SCORERS[dim](snapshot, repos, weights[DIMENSION_KEYS[dim]], ctx)
        for dim in DIMENSION_ORDER
    ]
