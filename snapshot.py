# snapshot.py
#
# Purpose:
# Normalization glue between "whatever the fetch layer produced" and the
# immutable AnalysisSnapshot the scorers consume.
#
# The fetch layer (REST or GraphQL) is not part of this project. It is
# expected to hand over a JSON document. I accept both naming styles GitHub
# uses (stargazers_count vs stargazerCount, fork vs isFork, ...) so either
# kind of dump can be scored without a converter.
#
# Rules applied while normalizing:
#   - missing optional fields become None / 0 / False / empty
#   - duplicate repository names keep the first record
#   - pinned names that don't match a repository are dropped
#   - pinned names are de-duplicated and capped at 6
#   - language distribution is counted from non-fork repos if not supplied

import json
import re
from datetime import datetime, timezone

from models import AnalysisSnapshot, CodeQualityFlags, RepositorySummary, UserProfile

MAX_PINNED = 6


def parse_github_datetime(dt_str):
    """
    GitHub timestamps look like: '2024-01-01T12:34:56Z'
    Convert that string into a timezone-aware (UTC) datetime.
    Return None if dt_str is missing or invalid.

    datetime objects are passed through (naive ones are treated as UTC).
    """
    if not dt_str:
        return None
    if isinstance(dt_str, datetime):
        dt = dt_str
    else:
        try:
            # fromisoformat doesn't understand "Z" on older Pythons, so swap it
            dt = datetime.fromisoformat(str(dt_str).replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _first(d, *keys, default=None):
    """Return the first present, non-None value among keys."""
    for k in keys:
        v = d.get(k)
        if v is not None:
            return v
    return default


def _as_int(value):
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _count(value):
    """GraphQL wraps counts as {"totalCount": n}; REST uses plain ints."""
    if isinstance(value, dict):
        return _as_int(value.get("totalCount"))
    return _as_int(value)


# ----------------------------
# File-tree probes -> quality flags
# ----------------------------
CI_PATTERNS = (".github/workflows/", ".circleci/", ".travis.yml")
TEST_DIRS = ("tests", "test", "__tests__", "spec")
LINT_PATTERNS = (r"(^|/)\.eslintrc", r"(^|/)\.prettierrc", r"(^|/)eslint\.config\.")


def detect_ci(files):
    for name in files or []:
        lowered = name.lower()
        if any(p in lowered or lowered.startswith(p.strip("/")) for p in CI_PATTERNS):
            return True
    return False


def detect_tests(files):
    for name in files or []:
        parts = name.lower().strip("/").split("/")
        if any(part in TEST_DIRS for part in parts[:-1]) or parts[0] in TEST_DIRS:
            return True
    return False


def detect_typescript(files):
    return any(name.lower().rsplit("/", 1)[-1] == "tsconfig.json" for name in files or [])


def detect_linting(files):
    for name in files or []:
        lowered = name.lower()
        if any(re.search(p, lowered) for p in LINT_PATTERNS):
            return True
    return False


def quality_flags_from_files(files):
    """Derive CodeQualityFlags from a list of probed file paths."""
    return CodeQualityFlags(
        has_ci=detect_ci(files),
        has_tests=detect_tests(files),
        has_typescript=detect_typescript(files),
        has_linting=detect_linting(files),
    )


def _quality_flags(raw):
    flags = raw.get("code_quality")
    if isinstance(flags, dict):
        return CodeQualityFlags(
            has_ci=bool(_first(flags, "has_ci", "hasCI", default=False)),
            has_tests=bool(_first(flags, "has_tests", "hasTests", default=False)),
            has_typescript=bool(_first(flags, "has_typescript", "hasTypeScript", default=False)),
            has_linting=bool(_first(flags, "has_linting", "hasLinting", default=False)),
        )
    files = raw.get("files")
    if files:
        return quality_flags_from_files(files)
    return None


# ----------------------------
# Raw dict -> model objects
# ----------------------------
def _topics(raw):
    topics = raw.get("topics")
    if topics is None:
        nodes = (raw.get("repositoryTopics") or {}).get("nodes") or []
        topics = [((n or {}).get("topic") or {}).get("name") for n in nodes]
    return tuple(t for t in topics if t)


def _language(raw):
    lang = raw.get("language")
    if lang is None:
        lang = (raw.get("primaryLanguage") or {}).get("name")
    return lang or None


def _commit_dates(raw):
    dates = raw.get("commit_dates")
    if dates is None:
        history = (((raw.get("defaultBranchRef") or {}).get("target") or {}).get("history") or {})
        dates = [(n or {}).get("committedDate") for n in history.get("nodes") or []]
    parsed = (parse_github_datetime(d) for d in dates or [])
    return tuple(d for d in parsed if d is not None)


def _total_commit_count(raw):
    total = raw.get("total_commit_count")
    if total is None:
        history = (((raw.get("defaultBranchRef") or {}).get("target") or {}).get("history") or {})
        total = history.get("totalCount")
    return None if total is None else _as_int(total)


def build_repository(raw):
    """Convert one raw repo dict into a RepositorySummary."""
    readme_content = raw.get("readme_content")
    if readme_content is None and isinstance(raw.get("readme"), dict):
        readme_content = raw["readme"].get("text")

    has_readme = raw.get("has_readme")
    if has_readme is None:
        has_readme = bool(readme_content)

    readme_length = raw.get("readme_length")
    if readme_length is not None:
        readme_length = _as_int(readme_length)

    return RepositorySummary(
        name=str(raw.get("name", "")),
        description=raw.get("description") or None,
        stars=_as_int(_first(raw, "stars", "stargazers_count", "stargazerCount")),
        forks=_as_int(_first(raw, "forks", "forks_count", "forkCount")),
        language=_language(raw),
        topics=_topics(raw),
        is_fork=bool(_first(raw, "is_fork", "fork", "isFork", default=False)),
        homepage=_first(raw, "homepage", "homepageUrl") or None,
        size=_as_int(raw.get("size")),
        open_issues=_count(_first(raw, "open_issues", "open_issues_count", "issues")),
        updated_at=parse_github_datetime(_first(raw, "updated_at", "updatedAt", "pushed_at")),
        has_readme=bool(has_readme),
        readme_content=readme_content,
        readme_length=readme_length,
        code_quality=_quality_flags(raw),
        commit_dates=_commit_dates(raw),
        total_commit_count=_total_commit_count(raw),
    )


def build_user(raw):
    """Convert a raw user/profile dict into a UserProfile."""
    raw = raw or {}
    return UserProfile(
        login=str(raw.get("login", "")),
        bio=raw.get("bio") or None,
        followers=_count(raw.get("followers")),
        created_at=parse_github_datetime(_first(raw, "created_at", "createdAt")),
        issue_count=_count(_first(raw, "issue_count", "issues")),
        pull_request_count=_count(_first(raw, "pull_request_count", "pullRequests")),
        contributed_to_count=_count(_first(raw, "contributed_to_count", "repositoriesContributedTo")),
    )


def compute_language_distribution(repositories):
    """
    Count repos per primary language (non-fork repos only).
    Returns a plain dict {language: repo_count}.
    """
    counts = {}
    for r in repositories:
        if r.is_fork or not r.language:
            continue
        if r.language not in counts:
            counts[r.language] = 0
        counts[r.language] += 1
    return counts


def build_snapshot(data):
    """
    Build an AnalysisSnapshot from a JSON-like dict.

    Expected top-level keys (all optional except user.login in practice):
      user / profile       -> profile dict
      repositories / repos -> list of repo dicts
      pinned_repos / pinnedRepos / pinned_repository_names -> list of names
      language_stats / languageStats / language_distribution -> {lang: count}
    """
    if not isinstance(data, dict):
        raise ValueError("Snapshot data must be a JSON object.")

    user = build_user(_first(data, "user", "profile", default={}))

    repositories = []
    seen = set()
    for raw in _first(data, "repositories", "repos", default=[]) or []:
        if not isinstance(raw, dict) or not raw.get("name"):
            continue
        repo = build_repository(raw)
        if repo.name in seen:
            continue
        seen.add(repo.name)
        repositories.append(repo)

    pinned = []
    for name in _first(data, "pinned_repository_names", "pinned_repos", "pinnedRepos", default=[]) or []:
        if isinstance(name, dict):
            name = name.get("name")
        if name in seen and name not in pinned:
            pinned.append(name)
    pinned = pinned[:MAX_PINNED]

    languages = _first(data, "language_distribution", "language_stats", "languageStats")
    if isinstance(languages, dict):
        languages = {str(k): _as_int(v) for k, v in languages.items() if k}
    else:
        languages = compute_language_distribution(repositories)

    return AnalysisSnapshot(
        user=user,
        repositories=tuple(repositories),
        pinned_repository_names=tuple(pinned),
        language_distribution=languages,
    )


def load_snapshot(path):
    """Read a snapshot JSON file from disk and normalize it."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return build_snapshot(data)
