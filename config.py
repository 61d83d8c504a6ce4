# config.py
#
# Purpose:
# One place for every number the scorers use: weight tables per profile type,
# tier boundaries (days, commits/month, stars), keyword lists and caps.
#
# Recalibrating the engine means editing SCORING_CONFIG (or dropping a JSON
# override file next to the project and pointing PORTFOLIO_SCORING_CONFIG at
# it). The scorer functions in scoring.py never hard-code a threshold.
#
# Layout:
#   version      -> bumped whenever any number below changes
#   profiles     -> per profile type: "weights" (must sum to 100) and
#                   optional "thresholds" that override the shared ones
#   thresholds   -> shared tier boundaries and keyword lists
#   strengths    -> badge cutoffs
#   red_flags    -> red-flag cutoffs
#   legend       -> optional composite floor for very well-known accounts
#   suggestions  -> how many prioritized suggestions to return

import copy
import json
import os

ENV_SCORING_CONFIG = "PORTFOLIO_SCORING_CONFIG"

WEIGHT_KEYS = (
    "code_quality",
    "project_impact",
    "current_active",
    "production_readiness",
    "technical_skill",
    "community_trust",
)

# How many repositories every scorer looks at (pinned first).
MAX_SCORED_REPOS = 6
# How many repositories are listed for display.
MAX_DISPLAY_REPOS = 5

SCORING_CONFIG = {
    "version": "2025.1",
    "profiles": {
        "student": {
            "weights": {
                "code_quality": 20,
                "project_impact": 25,
                "current_active": 20,
                "production_readiness": 10,
                "technical_skill": 15,
                "community_trust": 10,
            },
        },
        "professional": {
            "weights": {
                "code_quality": 18,
                "project_impact": 15,
                "current_active": 17,
                "production_readiness": 25,
                "technical_skill": 15,
                "community_trust": 10,
            },
        },
        "open-source": {
            "weights": {
                "code_quality": 20,
                "project_impact": 15,
                "current_active": 15,
                "production_readiness": 20,
                "technical_skill": 15,
                "community_trust": 15,
            },
        },
    },
    "thresholds": {
        "classifier": {
            "student_max_account_years": 3,
            "student_max_repos": 20,
            "student_max_stars": 200,
            "open_source_min_stars": 500,
            "open_source_min_followers": 100,
        },
        "activity": {
            "frequency_window_months": 6,
        },
        "code_quality": {
            "readme_points": 50,
            "organization_points": 30,
            "linting_points": 20,
            "readme_suggestion_points_per_repo": 8,
        },
        "project_impact": {
            "demo_points_per_repo": 7,
            "demo_points_cap": 35,
            "story_points": 35,
            "completeness_points": 30,
            "complete_readme_min_chars": 200,
            "story_min_repos": 2,
            "hosting_domains": [
                "vercel.app",
                "netlify.app",
                "github.io",
                "herokuapp.com",
                "pages.dev",
                "onrender.com",
            ],
            "story_keywords": ["why i built", "problem", "motivation"],
        },
        "current_active": {
            # (max days since last commit, points), checked in order
            "recency_tiers": [[7, 50], [30, 40], [90, 25]],
            "recency_floor_points": 10,
            # (min commits per month, points), checked in order
            "frequency_tiers": [[20, 50], [10, 35], [5, 20]],
            "frequency_floor_points": 5,
            "stale_after_days": 30,
            "consistent_min_frequency": 5,
            "excellent_min_frequency": 10,
        },
        "production_readiness": {
            "base_points": 50,
            "ci_points": 25,
            "tests_points": 20,
            "ready_above": 70,
        },
        "technical_skill": {
            # (min distinct languages, points), checked in order
            "language_tiers": [[5, 40], [3, 30], [2, 20]],
            "language_floor_points": 10,
            "modern_points": 30,
            "modern_languages": ["TypeScript", "Python", "Java", "Kotlin", "Swift", "Go", "Rust"],
            "framework_points_per_repo": 10,
            "framework_points_cap": 30,
            "frameworks": ["react", "vue", "angular", "nextjs", "svelte", "express", "django", "spring"],
            "breadth_min_languages": 3,
        },
        "community_trust": {
            "issue_points": 3,
            # (min total stars, raw points), checked in order
            "star_tiers": [[200, 2], [50, 1]],
            "scale": 10,
            "validated_above_stars": 50,
        },
    },
    "strengths": {
        "dimension_min_score": 70,
        "active_min_frequency": 15,
        "recognition_min_stars": 20,
        "curated_min_pinned": 4,
        "streak_min_days": 7,
    },
    "red_flags": {
        "visible_missing_readme_min": 2,
        "inactive_after_months": 6,
        "trivial_max_size_kb": 10,
        "trivial_min_count": 10,
        "bio_min_chars": 20,
    },
    "legend": {
        "enabled": False,
        "min_stars": 10000,
        "min_followers": 5000,
        "floor": 90,
    },
    "suggestions": {
        "top_n": 5,
    },
}


def _merge_dicts(base, override):
    """
    Deep-merge override onto base and return a new dict.
    Nested dicts are merged key by key; anything else is replaced.
    """
    result = {}
    for key, value in base.items():
        if isinstance(value, dict) and isinstance(override.get(key), dict):
            result[key] = _merge_dicts(value, override[key])
        elif key in override:
            result[key] = copy.deepcopy(override[key])
        else:
            result[key] = copy.deepcopy(value)
    for key, value in override.items():
        if key not in result:
            result[key] = copy.deepcopy(value)
    return result


def validate_config(config):
    """
    Check the structural rules every config must keep.

    Raises ValueError when:
      - a profile weight table is missing a dimension
      - a profile weight table does not sum to exactly 100
      - the student star ceiling is above the open-source star floor
        (the classifier branches would overlap)
    """
    for profile_name, profile in config.get("profiles", {}).items():
        weights = profile.get("weights", {})
        missing = [k for k in WEIGHT_KEYS if k not in weights]
        if missing:
            raise ValueError(f"Profile '{profile_name}' is missing weights: {', '.join(missing)}")
        total = sum(int(weights[k]) for k in WEIGHT_KEYS)
        if total != 100:
            raise ValueError(f"Profile '{profile_name}' weights sum to {total}, expected 100")

    classifier = config.get("thresholds", {}).get("classifier", {})
    if classifier.get("student_max_stars", 0) > classifier.get("open_source_min_stars", 0):
        raise ValueError("student_max_stars must not exceed open_source_min_stars")

    return config


def load_scoring_config(path=None):
    """
    Load the scoring config.

    Inputs:
      path (str | None)
        JSON file with overrides. If None, the PORTFOLIO_SCORING_CONFIG
        environment variable is used. Missing file => defaults.

    Output:
      a validated config dict (never the SCORING_CONFIG object itself,
      so callers can't accidentally edit the defaults)
    """
    if path is None:
        path = os.getenv(ENV_SCORING_CONFIG)

    if not path or not os.path.exists(path):
        return validate_config(copy.deepcopy(SCORING_CONFIG))

    with open(path, "r", encoding="utf-8") as f:
        override = json.load(f)

    if not isinstance(override, dict):
        raise ValueError(f"Scoring config must be a JSON object: {path}")

    return validate_config(_merge_dicts(SCORING_CONFIG, override))


def resolve_profile_config(config, profile_type):
    """
    Weights + thresholds for one profile type.

    profile_type may be a ProfileType or its string value. Anything not in
    config["profiles"] falls back to the professional table.

    Returns:
      {"profile": <name used>, "weights": {...}, "thresholds": {...}}
    """
    name = getattr(profile_type, "value", profile_type)
    profiles = config.get("profiles", {})
    if name not in profiles:
        name = "professional"

    profile = profiles[name]
    thresholds = _merge_dicts(config.get("thresholds", {}), profile.get("thresholds", {}))

    return {
        "profile": name,
        "weights": dict(profile["weights"]),
        "thresholds": thresholds,
    }
