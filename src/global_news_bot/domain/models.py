"""Domain models – story records, synthesis results and publish outcomes."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Tuple, TypedDict, TypeVar


class HeadlineItem(TypedDict, total=False):
    """Raw item from a headline API (per-country top headlines)."""
    title: str
    description: str
    url: str
    sourceName: str
    publishedAt: str


class FeedItem(TypedDict, total=False):
    """Raw item from a syndication feed."""
    title: str
    snippetOrSummary: str
    link: str
    publishDate: str


@dataclass(frozen=True)
class StoryCandidate:
    """
    One ingested news item.

    Identity and content come from the source. viral_score, category, region and
    hashtags are derived and filled in once by the scoring pass (see with_derived).
    """
    title: str
    description: str
    source: str
    country: str
    url: Optional[str] = None
    published_at: Optional[datetime] = None
    kind: str = "api"
    viral_score: int = 0
    category: Optional[str] = None
    region: Optional[str] = None
    hashtags: Optional[str] = None

    @property
    def scored(self) -> bool:
        return self.region is not None

    @property
    def key(self) -> str:
        """Stable identity used for de-duplication and publish history."""
        if self.url:
            return self.url.strip().lower()
        return " ".join(self.title.lower().split())

    def with_derived(
        self,
        *,
        viral_score: int,
        category: str,
        region: str,
        hashtags: str,
    ) -> "StoryCandidate":
        if self.scored:
            raise ValueError(f"Story already scored: {self.title[:40]}")
        return replace(
            self,
            viral_score=viral_score,
            category=category,
            region=region,
            hashtags=hashtags,
        )


SelectionResult = List[StoryCandidate]


class StageStatus(str, Enum):
    OK = "ok"
    DEGRADED = "degraded"
    FAILED = "failed"


T = TypeVar("T")


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Outcome of one synthesis stage: Ok(value) | Degraded(fallback) | Failed(reason)."""
    status: StageStatus
    value: Optional[T] = None
    reason: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "StageResult[T]":
        return cls(StageStatus.OK, value)

    @classmethod
    def degraded(cls, value: T, reason: str) -> "StageResult[T]":
        return cls(StageStatus.DEGRADED, value, reason)

    @classmethod
    def failed(cls, reason: str) -> "StageResult[T]":
        return cls(StageStatus.FAILED, None, reason)

    @property
    def usable(self) -> bool:
        return self.status is not StageStatus.FAILED and self.value is not None


@dataclass(frozen=True)
class OverlayText:
    """One text element drawn over the video background."""
    text: str
    y: int
    font_size: int
    color: str = "white"
    box_opacity: float = 0.0
    align: str = "center"  # 'center' | 'left' | 'right'


@dataclass(frozen=True)
class PublishCredentials:
    username: str
    password: str

    @classmethod
    def from_values(cls, username: Optional[str], password: Optional[str]) -> Optional["PublishCredentials"]:
        if not username or not password:
            return None
        return cls(username=username, password=password)


class PublishState(str, Enum):
    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    UPLOADING = "uploading"
    CAPTIONING = "captioning"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (PublishState.SUCCEEDED, PublishState.FAILED)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PublishAttempt:
    """
    Outcome record for publishing one story.
    Created when the attempt starts and finalized exactly once.
    """
    story: StoryCandidate
    script: str = ""
    hashtags: str = ""
    media_path: Optional[str] = None
    state: PublishState = PublishState.IDLE
    success: Optional[bool] = None
    reason: Optional[str] = None
    started_at: datetime = field(default_factory=utc_now)
    finished_at: Optional[datetime] = None
    transitions: List[PublishState] = field(default_factory=lambda: [PublishState.IDLE])

    @property
    def finalized(self) -> bool:
        return self.state.terminal

    def advance(self, state: PublishState) -> None:
        if self.finalized:
            raise RuntimeError(f"Publish attempt already finalized as {self.state.value}")
        if state.terminal:
            raise ValueError("Use succeed() or fail() to reach a terminal state")
        self.state = state
        self.transitions.append(state)

    def succeed(self) -> None:
        self._finalize(PublishState.SUCCEEDED, True, None)

    def fail(self, reason: str) -> None:
        self._finalize(PublishState.FAILED, False, reason)

    def _finalize(self, state: PublishState, success: bool, reason: Optional[str]) -> None:
        if self.finalized:
            raise RuntimeError(f"Publish attempt already finalized as {self.state.value}")
        self.state = state
        self.transitions.append(state)
        self.success = success
        self.reason = reason
        self.finished_at = utc_now()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.story.title,
            "region": self.story.region,
            "state": self.state.value,
            "success": bool(self.success),
            "error": self.reason,
            "caption": self.script,
            "hashtags": self.hashtags,
            "transitions": [s.value for s in self.transitions],
            "startedAt": self.started_at.isoformat(),
            "finishedAt": self.finished_at.isoformat() if self.finished_at else None,
        }


@dataclass(frozen=True)
class SourceReport:
    """Per-source fetch outcome: how many stories it contributed or why it failed."""
    name: str
    kind: str
    accepted: int = 0
    dropped: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CycleStatus(str, Enum):
    COMPLETED = "completed"
    NO_STORIES = "no_stories"
    BUSY = "busy"


@dataclass
class CycleReport:
    """Everything the thin HTTP/cron layer needs to know about one cycle."""
    status: CycleStatus
    started_at: datetime = field(default_factory=utc_now)
    finished_at: Optional[datetime] = None
    sources: List[SourceReport] = field(default_factory=list)
    candidates: int = 0
    selected: SelectionResult = field(default_factory=list)
    attempts: List[PublishAttempt] = field(default_factory=list)
    message: str = ""

    @property
    def processed(self) -> int:
        return len(self.attempts)

    @property
    def succeeded(self) -> int:
        return sum(1 for a in self.attempts if a.success)

    def breakdown(self) -> List[Tuple[str, bool]]:
        return [(a.story.title, bool(a.success)) for a in self.attempts]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "startedAt": self.started_at.isoformat(),
            "finishedAt": self.finished_at.isoformat() if self.finished_at else None,
            "candidates": self.candidates,
            "sources": [
                {"name": s.name, "kind": s.kind, "accepted": s.accepted, "error": s.error}
                for s in self.sources
            ],
            "storiesProcessed": self.processed,
            "storiesSucceeded": self.succeeded,
            "stories": [a.to_dict() for a in self.attempts],
        }
