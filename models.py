# models.py
#
# Purpose:
# This file defines the data structures that flow through the scoring pipeline.
#
#   AnalysisSnapshot  -> input (profile + repositories + pinned names + languages)
#   ActivityMetrics   -> derived once per snapshot from commit timestamps
#   ScoreDimension    -> one per scored axis (six in total)
#   Suggestion        -> an actionable improvement emitted by a dimension
#   PortfolioScore    -> the final output handed to reports / exports
#
# Everything here is a frozen dataclass, so a snapshot or a score cannot be
# changed after it has been built. Collections are stored as tuples for the
# same reason.

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple


class ProfileType(Enum):
    STUDENT = "student"
    PROFESSIONAL = "professional"
    OPEN_SOURCE = "open-source"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Priority(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Lower rank = shown first.
PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class SuggestionKind(Enum):
    """
    Every kind of improvement the scorers can recommend.

    The value is the stable string key that shows up in exports, and the
    enum member itself is what the prioritizer deduplicates on.
    """
    ADD_README = "add-readme"
    ADD_DESCRIPTIONS = "add-descriptions"
    ADD_LINTING = "add-linting"
    DEPLOY_PROJECT = "deploy-project"
    ADD_STORYTELLING = "add-storytelling"
    COMPLETE_PROJECTS = "complete-projects"
    COMMIT_RECENTLY = "commit-recently"
    COMMIT_CONSISTENTLY = "commit-consistently"
    ADD_CICD = "add-cicd"
    ADD_TESTS = "add-tests"
    LEARN_LANGUAGE = "learn-language"
    TAG_FRAMEWORKS = "tag-frameworks"
    CREATE_ISSUES = "create-issues"


class Dimension(Enum):
    """The six scored axes, in emission order."""
    CODE_QUALITY = "Code Quality"
    PROJECT_IMPACT = "Project Impact"
    CURRENT_ACTIVE = "Current & Active"
    PRODUCTION_READINESS = "Production Readiness"
    TECHNICAL_SKILL = "Technical Skill"
    COMMUNITY_TRUST = "Community Trust"


DIMENSION_ORDER = (
    Dimension.CODE_QUALITY,
    Dimension.PROJECT_IMPACT,
    Dimension.CURRENT_ACTIVE,
    Dimension.PRODUCTION_READINESS,
    Dimension.TECHNICAL_SKILL,
    Dimension.COMMUNITY_TRUST,
)

# Keys used in the weight tables (config.py) for each dimension.
DIMENSION_KEYS = {
    Dimension.CODE_QUALITY: "code_quality",
    Dimension.PROJECT_IMPACT: "project_impact",
    Dimension.CURRENT_ACTIVE: "current_active",
    Dimension.PRODUCTION_READINESS: "production_readiness",
    Dimension.TECHNICAL_SKILL: "technical_skill",
    Dimension.COMMUNITY_TRUST: "community_trust",
}


def _iso(dt):
    return dt.isoformat() if dt is not None else None


# ----------------------------
# Input
# ----------------------------
@dataclass(frozen=True)
class UserProfile:
    login: str
    bio: Optional[str] = None
    followers: int = 0
    created_at: Optional[datetime] = None
    issue_count: int = 0
    pull_request_count: int = 0
    contributed_to_count: int = 0


@dataclass(frozen=True)
class CodeQualityFlags:
    has_ci: bool = False
    has_tests: bool = False
    has_typescript: bool = False
    has_linting: bool = False


@dataclass(frozen=True)
class RepositorySummary:
    name: str
    description: Optional[str] = None
    stars: int = 0
    forks: int = 0
    language: Optional[str] = None
    topics: Tuple[str, ...] = ()
    is_fork: bool = False
    homepage: Optional[str] = None
    size: int = 0
    open_issues: int = 0
    updated_at: Optional[datetime] = None
    has_readme: bool = False
    readme_content: Optional[str] = None
    readme_length: Optional[int] = None
    code_quality: Optional[CodeQualityFlags] = None
    commit_dates: Tuple[datetime, ...] = ()
    total_commit_count: Optional[int] = None

    @property
    def readme_chars(self):
        """README length, falling back to the length of the README text."""
        if self.readme_length is not None:
            return int(self.readme_length)
        return len(self.readme_content or "")

    @property
    def quality(self):
        """Code-quality flags, all False when the probe data is missing."""
        return self.code_quality or CodeQualityFlags()


@dataclass(frozen=True)
class AnalysisSnapshot:
    user: UserProfile
    repositories: Tuple[RepositorySummary, ...] = ()
    pinned_repository_names: Tuple[str, ...] = ()
    language_distribution: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        names = [r.name for r in self.repositories]
        if len(names) != len(set(names)):
            raise ValueError("Repository names must be unique within a snapshot.")

        if len(self.pinned_repository_names) > 6:
            raise ValueError("At most 6 pinned repositories are allowed.")

        missing = [n for n in self.pinned_repository_names if n not in set(names)]
        if missing:
            raise ValueError(f"Pinned repositories not in snapshot: {', '.join(missing)}")

    @property
    def total_stars(self):
        return sum(int(r.stars or 0) for r in self.repositories)


# ----------------------------
# Derived
# ----------------------------
@dataclass(frozen=True)
class ActivityMetrics:
    last_commit_date: Optional[datetime] = None
    commit_frequency: float = 0.0
    active_days: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    total_contributions: int = 0

    def to_dict(self):
        return {
            "last_commit_date": _iso(self.last_commit_date),
            "commit_frequency": self.commit_frequency,
            "active_days": self.active_days,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "total_contributions": self.total_contributions,
        }


# ----------------------------
# Output
# ----------------------------
@dataclass(frozen=True)
class Suggestion:
    kind: SuggestionKind
    title: str
    points: int
    category: str
    difficulty: Difficulty
    time_estimate: str
    priority: Priority

    @property
    def id(self):
        return self.kind.value

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "points": self.points,
            "category": self.category,
            "difficulty": self.difficulty.value,
            "time_estimate": self.time_estimate,
            "priority": self.priority.value,
        }


@dataclass(frozen=True)
class ScoreDimension:
    name: str
    score: int
    weight: int
    feedback: str
    why_it_matters: str
    suggestions: Tuple[Suggestion, ...] = ()

    def to_dict(self):
        return {
            "name": self.name,
            "score": self.score,
            "weight": self.weight,
            "feedback": self.feedback,
            "why_it_matters": self.why_it_matters,
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


@dataclass(frozen=True)
class RedFlag:
    title: str
    description: str
    severity: str

    def to_dict(self):
        return {"title": self.title, "description": self.description, "severity": self.severity}


def repository_to_dict(repo):
    """Short, JSON-safe view of a repository (used for display lists)."""
    return {
        "name": repo.name,
        "description": repo.description,
        "stars": repo.stars,
        "forks": repo.forks,
        "language": repo.language,
        "topics": list(repo.topics),
        "is_fork": repo.is_fork,
        "homepage": repo.homepage,
        "updated_at": _iso(repo.updated_at),
        "has_readme": repo.has_readme,
    }


@dataclass(frozen=True)
class PortfolioScore:
    total_score: int
    profile_type: ProfileType
    dimensions: Tuple[ScoreDimension, ...]
    top_repos: Tuple[RepositorySummary, ...]
    strengths: Tuple[str, ...]
    top_suggestions: Tuple[Suggestion, ...]
    red_flags: Tuple[RedFlag, ...] = ()
    activity: ActivityMetrics = field(default_factory=ActivityMetrics)
    summary: Dict[str, object] = field(default_factory=dict)
    as_of: Optional[datetime] = None
    config_version: str = ""

    def dimension(self, name):
        """Return the dimension with this name, or None."""
        for d in self.dimensions:
            if d.name == name:
                return d
        return None

    def to_dict(self):
        return {
            "total_score": self.total_score,
            "profile_type": self.profile_type.value,
            "dimensions": [d.to_dict() for d in self.dimensions],
            "top_repos": [repository_to_dict(r) for r in self.top_repos],
            "strengths": list(self.strengths),
            "top_suggestions": [s.to_dict() for s in self.top_suggestions],
            "red_flags": [f.to_dict() for f in self.red_flags],
            "activity": self.activity.to_dict(),
            "summary": dict(self.summary),
            "as_of": _iso(self.as_of),
            "config_version": self.config_version,
        }


def flatten_suggestions(dimensions):
    """All suggestions across dimensions, in dimension emission order."""
    out = []
    for d in dimensions:
        out.extend(d.suggestions)
    return out
