"""
Hierarchy assembler: count invariants, order independence, idempotence and edge cases.
Inputs are built directly as nested schemas; no database involved.
"""
import random
import uuid
from datetime import datetime, timedelta, timezone

from content_studio.schemas.content import (
    BrandWithContent,
    ContentAngleWithIdeas,
    ContentIdeaWithGenerated,
    GeneratedContentOut,
)
from content_studio.services import hierarchy

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _content(idea_id, brand_id, platform, minute=0):
    return GeneratedContentOut(
        id=uuid.uuid4(),
        idea_id=idea_id,
        brand_id=brand_id,
        platform=platform,
        content="Post",
        created_at=T0 + timedelta(minutes=minute),
        updated_at=T0 + timedelta(minutes=minute),
    )


def _idea(angle_id, brand_id, platform, with_content, minute):
    idea_id = uuid.uuid4()
    generated = [_content(idea_id, brand_id, platform, minute)] if with_content else []
    return ContentIdeaWithGenerated(
        id=idea_id,
        angle_id=angle_id,
        platform=platform,
        topic=f"Idea {minute}",
        created_at=T0 + timedelta(minutes=minute),
        generated_content=generated,
    )


def _angle(brand_id, platform, idea_layout, minute):
    """idea_layout: list of (platform, has_content)."""
    angle_id = uuid.uuid4()
    ideas = [
        _idea(angle_id, brand_id, p, has, minute * 100 + i)
        for i, (p, has) in enumerate(idea_layout)
    ]
    return ContentAngleWithIdeas(
        id=angle_id,
        brand_id=brand_id,
        platform=platform,
        header=f"Angle {minute}",
        created_at=T0 + timedelta(minutes=minute),
        content_ideas=ideas,
    )


def _brand(angle_layout, name="Acme"):
    """angle_layout: list of (platform, idea_layout)."""
    brand_id = uuid.uuid4()
    angles = [_angle(brand_id, p, layout, i) for i, (p, layout) in enumerate(angle_layout)]
    return BrandWithContent(
        id=brand_id,
        user_id=uuid.uuid4(),
        name=name,
        website="https://acme.example",
        created_at=T0,
        updated_at=T0,
        content_angles=angles,
    )


def _random_brand(rng: random.Random, name: str) -> BrandWithContent:
    platforms = ["twitter", "linkedin", "newsletter"]
    layout = []
    for _ in range(rng.randint(0, 6)):
        ideas = [(rng.choice(platforms), rng.random() < 0.5) for _ in range(rng.randint(0, 5))]
        layout.append((rng.choice(platforms), ideas))
    return _brand(layout, name=name)


def _check_counts(counts) -> None:
    assert counts.generated_count + counts.pending_count == counts.idea_count


def test_counts_hold_at_every_level() -> None:
    """generated + pending == ideas for each angle, platform and brand; brand totals are sums over platforms."""
    rng = random.Random(11)
    brands = [_random_brand(rng, f"Brand {i}") for i in range(25)]
    for tree in hierarchy.assemble(brands):
        for group in tree.platforms:
            _check_counts(group.counts)
            assert group.angle_count == len(group.angles)
            for node in group.angles:
                _check_counts(node.counts)
                assert node.counts.idea_count == len(node.ideas)
            assert group.counts.idea_count == sum(n.counts.idea_count for n in group.angles)
        _check_counts(tree.totals)
        assert tree.totals.idea_count == sum(g.counts.idea_count for g in tree.platforms)
        assert tree.totals.generated_count == sum(g.counts.generated_count for g in tree.platforms)
        assert tree.total_angles == sum(g.angle_count for g in tree.platforms)


def test_assemble_is_idempotent() -> None:
    rng = random.Random(3)
    brands = [_random_brand(rng, f"Brand {i}") for i in range(5)]
    first = [t.model_dump_json() for t in hierarchy.assemble(brands)]
    second = [t.model_dump_json() for t in hierarchy.assemble(brands)]
    assert first == second


def test_assemble_is_order_independent() -> None:
    rng = random.Random(5)
    brands = [_random_brand(rng, f"Brand {i}") for i in range(6)]
    expected = [t.model_dump_json() for t in hierarchy.assemble(brands)]
    shuffled = []
    for brand in reversed(brands):
        angles = []
        for angle in brand.content_angles:
            ideas = list(angle.content_ideas)
            rng.shuffle(ideas)
            angles.append(angle.model_copy(update={"content_ideas": ideas}))
        rng.shuffle(angles)
        shuffled.append(brand.model_copy(update={"content_angles": angles}))
    assert [t.model_dump_json() for t in hierarchy.assemble(shuffled)] == expected


def test_mismatched_platform_ideas_are_left_out() -> None:
    brand = _brand([("twitter", [("twitter", True), ("linkedin", True), ("twitter", False)])])
    tree = hierarchy.assemble_brand(brand)
    (group,) = tree.platforms
    assert group.platform.value == "twitter"
    assert group.counts.model_dump() == {"idea_count": 2, "generated_count": 1, "pending_count": 1}
    assert all(n.idea.platform.value == "twitter" for n in group.angles[0].ideas)


def test_angle_without_ideas_contributes_zeros() -> None:
    tree = hierarchy.assemble_brand(_brand([("linkedin", []), ("linkedin", [("linkedin", True)])]))
    (group,) = tree.platforms
    assert group.angle_count == 2
    assert group.counts.model_dump() == {"idea_count": 1, "generated_count": 1, "pending_count": 0}
    empty = [n for n in group.angles if not n.ideas][0]
    assert empty.counts.model_dump() == {"idea_count": 0, "generated_count": 0, "pending_count": 0}


def test_brand_without_angles_has_empty_platforms() -> None:
    (tree,) = hierarchy.assemble([_brand([])])
    assert tree.platforms == []
    assert tree.total_angles == 0
    assert tree.totals.idea_count == 0


def test_platform_groups_follow_display_order() -> None:
    tree = hierarchy.assemble_brand(_brand([("newsletter", []), ("twitter", []), ("linkedin", [])]))
    assert [g.platform.value for g in tree.platforms] == ["twitter", "linkedin", "newsletter"]


def test_summarize_totals() -> None:
    trees = hierarchy.assemble(
        [
            _brand([("twitter", [("twitter", True), ("twitter", False)])], name="A"),
            _brand([("linkedin", [("linkedin", True)]), ("newsletter", [])], name="B"),
            _brand([], name="C"),
        ]
    )
    totals = hierarchy.summarize(trees)
    assert totals.model_dump() == {"brands": 3, "angles": 3, "ideas": 3, "generated": 2, "pending": 1}
