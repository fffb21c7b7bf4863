"""
Hierarchy assembler: Brand → Platform → Angle → Idea → GeneratedContent.

Pure functions, no I/O. Output does not depend on input row order (every level
is sorted by creation time then id, newest first) and re-running on the same
input gives equal output. Only ideas whose platform equals their angle's
platform are part of an angle; counts at every level are a fold over the
ideas' has_content flag.
"""
from typing import Any, Iterable, List, Optional, Sequence

from content_studio.schemas.common import PLATFORMS
from content_studio.schemas.content import (
    BrandWithContent,
    ContentAngleOut,
    ContentAngleWithIdeas,
    ContentIdeaOut,
    ContentIdeaWithGenerated,
    GeneratedContentOut,
)
from content_studio.schemas.brand import BrandOut
from content_studio.schemas.hierarchy import (
    AngleNode,
    BrandTree,
    ContentCounts,
    ContentTotals,
    IdeaNode,
    PlatformGroup,
)


def newest_first(items: Iterable[Any], stamp: str = "created_at") -> List[Any]:
    return sorted(items, key=lambda i: (getattr(i, stamp), str(i.id)), reverse=True)


def _fold(flags: Iterable[bool]) -> ContentCounts:
    total = generated = 0
    for has_content in flags:
        total += 1
        generated += int(has_content)
    return ContentCounts(idea_count=total, generated_count=generated, pending_count=total - generated)


def _add(counts: Iterable[ContentCounts]) -> ContentCounts:
    out = ContentCounts()
    for c in counts:
        out.idea_count += c.idea_count
        out.generated_count += c.generated_count
        out.pending_count += c.pending_count
    return out


def latest_content(idea: ContentIdeaWithGenerated) -> Optional[GeneratedContentOut]:
    rows = newest_first(idea.generated_content, "updated_at")
    return rows[0] if rows else None


def matching_ideas(angle: ContentAngleWithIdeas) -> List[ContentIdeaWithGenerated]:
    return [idea for idea in angle.content_ideas if idea.platform == angle.platform]


def angle_counts(angle: ContentAngleWithIdeas) -> ContentCounts:
    return _fold(bool(idea.generated_content) for idea in matching_ideas(angle))


def idea_node(idea: ContentIdeaWithGenerated) -> IdeaNode:
    return IdeaNode(
        idea=ContentIdeaOut(**idea.model_dump(exclude={"generated_content"})),
        has_content=bool(idea.generated_content),
        latest_content=latest_content(idea),
    )


def angle_node(angle: ContentAngleWithIdeas) -> AngleNode:
    ideas = [idea_node(i) for i in newest_first(matching_ideas(angle))]
    return AngleNode(
        angle=ContentAngleOut(**angle.model_dump(exclude={"content_ideas"})),
        ideas=ideas,
        counts=_fold(node.has_content for node in ideas),
    )


def assemble_brand(brand: Any) -> BrandTree:
    if not isinstance(brand, BrandWithContent):
        brand = BrandWithContent.model_validate(brand)
    angles = [angle_node(a) for a in newest_first(brand.content_angles)]
    groups = []
    for platform in PLATFORMS:
        nodes = [n for n in angles if n.angle.platform == platform]
        if not nodes:
            continue
        groups.append(
            PlatformGroup(
                platform=platform,
                angle_count=len(nodes),
                angles=nodes,
                counts=_add(n.counts for n in nodes),
            )
        )
    return BrandTree(
        brand=BrandOut(**brand.model_dump(exclude={"content_angles"})),
        total_angles=len(angles),
        platforms=groups,
        totals=_add(g.counts for g in groups),
    )


def assemble(brands: Sequence[Any]) -> List[BrandTree]:
    """One BrandTree per brand row, newest brand first."""
    return [assemble_brand(b) for b in newest_first(brands)]


def summarize(trees: Sequence[BrandTree]) -> ContentTotals:
    totals = _add(t.totals for t in trees)
    return ContentTotals(
        brands=len(trees),
        angles=sum(t.total_angles for t in trees),
        ideas=totals.idea_count,
        generated=totals.generated_count,
        pending=totals.pending_count,
    )
