"""
RecordStore on SQLite: ownership scoping, nested loading, upsert by idea_id,
ordered deletes and error mapping.
"""
import uuid

import pytest

from content_studio.errors import NotFoundError, StoreValidationError
from content_studio.services.record_store import BRAND_TREE_SHAPE, Collection
from helpers import seed_angle, seed_brand, seed_content, seed_ideas


@pytest.mark.asyncio
async def test_rows_are_scoped_to_their_owner(ctx, user_id) -> None:
    brand = await seed_brand(ctx, user_id)
    angle = await seed_angle(ctx, user_id, brand.id)
    (idea,) = await seed_ideas(ctx, user_id, angle, 1)
    await seed_content(ctx, user_id, idea, brand.id)
    stranger = uuid.uuid4()

    for collection in Collection:
        assert len(await ctx.store.select(collection, owner_id=user_id)) == 1
        assert await ctx.store.select(collection, owner_id=stranger) == []
    with pytest.raises(NotFoundError) as exc:
        await ctx.store.get(Collection.BRANDS, brand.id, owner_id=stranger)
    assert exc.value.redirect_to == "/dashboard"
    with pytest.raises(NotFoundError):
        await ctx.store.update(Collection.BRANDS, brand.id, {"name": "Hijack"}, owner_id=stranger)
    assert await ctx.store.delete(Collection.BRANDS, {"id": brand.id}, owner_id=stranger) == 0


@pytest.mark.asyncio
async def test_children_need_an_owned_parent(ctx, user_id) -> None:
    brand = await seed_brand(ctx, user_id)
    with pytest.raises(NotFoundError) as exc:
        await seed_angle(ctx, uuid.uuid4(), brand.id)
    assert exc.value.entity == "Brand"
    with pytest.raises(NotFoundError):
        await ctx.store.insert(
            Collection.CONTENT_IDEAS,
            [{"angle_id": uuid.uuid4(), "platform": "twitter", "topic": "t"}],
            owner_id=user_id,
        )


@pytest.mark.asyncio
async def test_nested_shape_loads_three_levels(ctx, user_id) -> None:
    brand = await seed_brand(ctx, user_id)
    angle = await seed_angle(ctx, user_id, brand.id, platform="linkedin")
    ideas = await seed_ideas(ctx, user_id, angle, 2)
    await seed_content(ctx, user_id, ideas[0], brand.id, text="Hello")

    (row,) = await ctx.store.select(Collection.BRANDS, owner_id=user_id, shape=BRAND_TREE_SHAPE)
    (loaded_angle,) = row.content_angles
    assert len(loaded_angle.content_ideas) == 2
    contents = [c.content for i in loaded_angle.content_ideas for c in i.generated_content]
    assert contents == ["Hello"]


@pytest.mark.asyncio
async def test_upsert_keeps_one_row_per_idea(ctx, user_id) -> None:
    brand = await seed_brand(ctx, user_id)
    angle = await seed_angle(ctx, user_id, brand.id)
    (idea,) = await seed_ideas(ctx, user_id, angle, 1)

    first = await seed_content(ctx, user_id, idea, brand.id, text="v1")
    second = await seed_content(ctx, user_id, idea, brand.id, text="v2")

    assert second.id == first.id
    assert second.content == "v2"
    rows = await ctx.store.select(Collection.GENERATED_CONTENT, owner_id=user_id, filters={"idea_id": idea.id})
    assert [r.content for r in rows] == ["v2"]


@pytest.mark.asyncio
async def test_delete_in_order_reports_counts(ctx, user_id) -> None:
    brand = await seed_brand(ctx, user_id)
    angle = await seed_angle(ctx, user_id, brand.id)
    ideas = await seed_ideas(ctx, user_id, angle, 3)
    await seed_content(ctx, user_id, ideas[0], brand.id)

    counts = await ctx.store.delete_in_order(
        [
            (Collection.GENERATED_CONTENT, {"brand_id": brand.id}),
            (Collection.CONTENT_IDEAS, {"angle_id": [angle.id]}),
            (Collection.CONTENT_ANGLES, {"brand_id": brand.id}),
            (Collection.BRANDS, {"id": brand.id}),
        ],
        owner_id=user_id,
    )
    assert counts == [1, 3, 1, 1]
    for collection in Collection:
        assert await ctx.store.count(collection, owner_id=user_id) == 0


@pytest.mark.asyncio
async def test_constraint_violation_is_validation_error(ctx, user_id) -> None:
    brand = await seed_brand(ctx, user_id)
    with pytest.raises(StoreValidationError) as exc:
        await seed_angle(ctx, user_id, brand.id, platform="tiktok")
    assert exc.value.extra == {"collection": "content_angles"}


@pytest.mark.asyncio
async def test_update_and_order_by(ctx, user_id) -> None:
    brand = await seed_brand(ctx, user_id)
    await seed_angle(ctx, user_id, brand.id, header="B")
    await seed_angle(ctx, user_id, brand.id, header="A")

    updated = await ctx.store.update(Collection.BRANDS, brand.id, {"brand_tone": "Bold"}, owner_id=user_id)
    assert updated.brand_tone == "Bold"
    rows = await ctx.store.select(Collection.CONTENT_ANGLES, owner_id=user_id, order_by=["-header"])
    assert [r.header for r in rows] == ["B", "A"]


@pytest.mark.asyncio
async def test_parent_column_filter(ctx, user_id) -> None:
    brand = await seed_brand(ctx, user_id)
    first = await seed_angle(ctx, user_id, brand.id, header="First")
    second = await seed_angle(ctx, user_id, brand.id, header="Second")
    (a,) = await seed_ideas(ctx, user_id, first, 1)
    (b,) = await seed_ideas(ctx, user_id, second, 1)
    await seed_content(ctx, user_id, a, brand.id, text="A")
    await seed_content(ctx, user_id, b, brand.id, text="B")

    rows = await ctx.store.select(Collection.GENERATED_CONTENT, owner_id=user_id, filters={"idea.angle_id": first.id})
    assert [r.content for r in rows] == ["A"]
    ideas = await ctx.store.select(Collection.CONTENT_IDEAS, owner_id=user_id, filters={"angle.brand_id": brand.id})
    assert {i.id for i in ideas} == {a.id, b.id}
