"""
Region-diverse top-N selection.

Pass 1 walks candidates by descending score and takes the best story of every
region not yet represented. Pass 2 fills the remaining slots with the
highest-scoring stories left over, whatever their region. The result order is
the publish order: diverse picks first, then fill picks, each by score.
Equal scores keep their input order (stable sort).
"""

from typing import Iterable, List, Optional, Sequence

from global_news_bot.domain.models import SelectionResult, StoryCandidate


def rank(candidates: Sequence[StoryCandidate]) -> List[StoryCandidate]:
    return sorted(candidates, key=lambda s: s.viral_score, reverse=True)


def select_diverse(
    candidates: Sequence[StoryCandidate],
    count: int,
    exclude_keys: Optional[Iterable[str]] = None,
) -> SelectionResult:
    """
    Pick up to count stories maximizing region coverage.

    exclude_keys: story keys (e.g. already published) that must not be selected again.
    Fewer candidates than count → all of them, no padding.
    """
    if count <= 0:
        return []

    excluded = set(exclude_keys or ())
    ranked = [s for s in rank(candidates) if s.key not in excluded]

    selected: List[StoryCandidate] = []
    taken = set()
    used_regions = set()

    for index, story in enumerate(ranked):
        if len(selected) >= count:
            break
        if story.region not in used_regions:
            selected.append(story)
            taken.add(index)
            used_regions.add(story.region)

    for index, story in enumerate(ranked):
        if len(selected) >= count:
            break
        if index not in taken:
            selected.append(story)
            taken.add(index)

    return selected
