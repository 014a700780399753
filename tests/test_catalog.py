from __future__ import annotations

import asyncio

import pytest

from conftest import NOW, TickingClock
from restaurant_console import config
from restaurant_console.catalog import CatalogStore
from restaurant_console.errors import NotFound, ValidationFailure
from restaurant_console.models import CategoryDraft, MenuCategory, MenuItem, MenuItemDraft, NutritionInfo
from restaurant_console.scheduler import AsyncioScheduler, ManualScheduler


def _draft(category_id: str = "2", **overrides) -> MenuItemDraft:
    fields = dict(
        name="Mushroom Risotto",
        description="Arborio rice with wild mushrooms",
        price=18.5,
        category_id=category_id,
        preparation_time=25,
        ingredients=("Arborio rice", "Porcini", "Parmesan"),
        allergens=frozenset({"Dairy"}),
        nutrition=NutritionInfo(calories=520, protein=14, carbs=70, fat=18, fiber=3),
    )
    fields.update(overrides)
    return MenuItemDraft(**fields)


def test_seeded_catalog(catalog):
    items = catalog.items.get_snapshot()
    categories = catalog.categories.get_snapshot()

    assert [item.name for item in items][:2] == ["Caesar Salad", "Grilled Salmon"]
    assert len(items) == 5
    assert [category.name for category in categories] == [
        "Appetizers",
        "Main Courses",
        "Desserts",
        "Beverages",
        "Salads",
    ]


def test_list_operations_return_current_collections(run, catalog):
    assert run(catalog.list_items) == catalog.items.get_snapshot()
    assert run(catalog.list_categories) == catalog.categories.get_snapshot()


def test_create_then_get_returns_input_plus_id_and_timestamps(run, catalog):
    draft = _draft()

    created = run(lambda: catalog.create_item(draft))
    fetched = run(lambda: catalog.get_item_by_id(created.id))

    main_courses = catalog.categories.get_snapshot()[1]
    assert fetched == MenuItem(
        id="6",
        name=draft.name,
        description=draft.description,
        price=draft.price,
        category=main_courses,
        is_available=True,
        preparation_time=draft.preparation_time,
        ingredients=draft.ingredients,
        allergens=draft.allergens,
        created_at=NOW,
        updated_at=NOW,
        nutrition=draft.nutrition,
    )
    assert catalog.items.get_snapshot()[0] == fetched


def test_get_missing_item_fails(run, catalog):
    with pytest.raises(NotFound):
        run(lambda: catalog.get_item_by_id("404"))


def test_delete_then_get_fails(run, catalog):
    assert run(lambda: catalog.delete_item("3")) is True

    with pytest.raises(NotFound):
        run(lambda: catalog.get_item_by_id("3"))
    assert [item.id for item in catalog.items.get_snapshot()] == ["1", "2", "4", "5"]


def test_delete_missing_item_leaves_collection_untouched(run, catalog):
    before = catalog.items.get_snapshot()

    with pytest.raises(NotFound):
        run(lambda: catalog.delete_item("404"))

    assert catalog.items.get_snapshot() is before
    assert catalog.is_loading.get_snapshot() is False


def test_toggle_availability_twice_restores_original(run, catalog):
    original = run(lambda: catalog.get_item_by_id("2")).is_available

    first = run(lambda: catalog.toggle_availability("2"))
    second = run(lambda: catalog.toggle_availability("2"))

    assert first.is_available is not original
    assert second.is_available is original


def test_toggle_missing_item_fails_without_scheduling(run):
    scheduler = ManualScheduler()
    catalog = CatalogStore(scheduler, clock=lambda: NOW)

    async def scenario():
        pending = catalog.toggle_availability("404")
        assert pending.done()
        assert scheduler.pending == 0
        return await pending

    with pytest.raises(NotFound):
        run(scenario)


def test_update_merges_and_refreshes_timestamp(run):
    clock = TickingClock()
    catalog = CatalogStore(AsyncioScheduler(scale=0), clock=clock)
    original = catalog.items.get_snapshot()[0]

    updated = run(lambda: catalog.update_item("1", {"price": 13.49, "ingredients": ["Romaine lettuce"]}))

    assert updated.price == 13.49
    assert updated.ingredients == ("Romaine lettuce",)
    assert updated.name == original.name
    assert updated.created_at == original.created_at
    assert updated.updated_at > original.updated_at
    assert catalog.items.get_snapshot()[0] == updated


@pytest.mark.parametrize(
    "changes",
    [
        {"price": 0},
        {"preparation_time": 0},
        {"ingredients": []},
        {"name": "   "},
        {"category_id": "404"},
        {"colour": "red"},
        {"ingredients": "Romaine lettuce"},
        {"allergens": "Dairy"},
        {"ingredients": ["Romaine lettuce", 3]},
        {"price": "12.50"},
        {"price": True},
        {"preparation_time": "10"},
        {"category": MenuCategory(id="404", name="Ghost")},
    ],
)
def test_invalid_update_is_rejected_atomically(run, catalog, changes):
    before = catalog.items.get_snapshot()

    with pytest.raises(ValidationFailure):
        run(lambda: catalog.update_item("1", changes))

    assert catalog.items.get_snapshot() is before


def test_update_keeps_ingredient_order_and_allergen_names(run, catalog):
    updated = run(
        lambda: catalog.update_item("1", {"ingredients": ["Romaine", "Croutons", "Anchovy"], "allergens": {"Fish", "Gluten"}})
    )

    assert updated.ingredients == ("Romaine", "Croutons", "Anchovy")
    assert updated.allergens == frozenset({"Fish", "Gluten"})


def test_update_missing_item_fails(run, catalog):
    with pytest.raises(NotFound):
        run(lambda: catalog.update_item("404", {"price": 3.0}))


@pytest.mark.parametrize(
    "overrides",
    [
        {"price": 0.0},
        {"preparation_time": 0},
        {"ingredients": ()},
        {"category_id": "404"},
        {"ingredients": "Arborio rice"},
        {"allergens": "Dairy"},
        {"price": "18.50"},
        {"preparation_time": None},
    ],
)
def test_invalid_create_is_rejected(run, catalog, overrides):
    with pytest.raises(ValidationFailure):
        run(lambda: catalog.create_item(_draft(**overrides)))

    assert len(catalog.items.get_snapshot()) == 5


def test_rejected_create_does_not_consume_an_id(run, catalog):
    with pytest.raises(ValidationFailure):
        run(lambda: catalog.create_item(_draft(price=0.0)))

    created = run(lambda: catalog.create_item(_draft()))

    assert created.id == "6"


def test_ids_stay_unique_after_deletes(run, catalog):
    run(lambda: catalog.delete_item("1"))

    created = run(lambda: catalog.create_item(_draft()))

    assert created.id == "6"
    assert len({item.id for item in catalog.items.get_snapshot()}) == 5


def test_category_snapshot_survives_rename(run, catalog):
    prior_max = max(int(category.id) for category in catalog.categories.get_snapshot())

    soups = run(lambda: catalog.create_category(CategoryDraft(name="Soups")))
    assert len(catalog.categories.get_snapshot()) == 6
    assert int(soups.id) == prior_max + 1
    assert soups.display_order == 6

    item = run(lambda: catalog.create_item(_draft(category_id=soups.id, name="Minestrone")))
    assert run(lambda: catalog.get_item_by_id(item.id)).category.name == "Soups"

    renamed = run(lambda: catalog.update_category(soups.id, {"name": "Broths"}))

    assert renamed.name == "Broths"
    assert catalog.categories.get_snapshot()[-1].name == "Broths"
    assert run(lambda: catalog.get_item_by_id(item.id)).category.name == "Soups"

    resaved = run(lambda: catalog.update_item(item.id, {"category_id": soups.id}))
    assert resaved.category.name == "Broths"


def test_update_missing_category_fails(run, catalog):
    with pytest.raises(NotFound):
        run(lambda: catalog.update_category("404", {"name": "Nope"}))


def test_derived_views_follow_mutations(run, catalog):
    salads = catalog.by_category("5")
    cheesy = catalog.search("CHEESE")
    seen = []
    cheesy.subscribe(lambda items: seen.append([item.name for item in items]))

    assert [item.name for item in salads.get_snapshot()] == ["Greek Salad"]

    run(lambda: catalog.create_item(_draft(category_id="5", name="Nicoise", ingredients=("Tuna", "Egg"))))
    run(lambda: catalog.delete_item("5"))

    assert [item.name for item in salads.get_snapshot()] == ["Nicoise"]
    assert seen[0] == ["Caesar Salad", "Greek Salad"]
    assert seen[-1] == ["Caesar Salad"]


def test_search_matches_description_and_ingredients(catalog):
    assert [item.name for item in catalog.search("molten").get_snapshot()] == ["Chocolate Lava Cake"]
    assert [item.name for item in catalog.search("jasmine").get_snapshot()] == ["Grilled Salmon"]


def test_emitted_collections_cannot_be_mutated(catalog):
    items = catalog.items.get_snapshot()

    with pytest.raises(AttributeError):
        items.append(items[0])  # type: ignore[attr-defined]


def test_faster_write_overtakes_slower_one(run):
    scheduler = ManualScheduler()
    catalog = CatalogStore(scheduler, clock=lambda: NOW)
    completed: list[str] = []

    async def scenario():
        rename = catalog.update_item("1", {"name": "Caesar Deluxe"})
        delete = catalog.delete_item("1")
        rename.add_done_callback(lambda _f: completed.append("update"))
        delete.add_done_callback(lambda _f: completed.append("delete"))

        scheduler.advance(config.DELETE_ITEM_DELAY)
        assert delete.done() and not rename.done()
        assert catalog.is_loading.get_snapshot() is True

        scheduler.run_all()
        assert catalog.is_loading.get_snapshot() is False
        assert await delete is True
        with pytest.raises(NotFound):
            await rename
        await asyncio.sleep(0)

    run(scenario)

    assert completed == ["delete", "update"]
    assert "1" not in {item.id for item in catalog.items.get_snapshot()}


def test_loading_flag_holds_while_any_operation_is_pending(run):
    scheduler = ManualScheduler()
    catalog = CatalogStore(scheduler, clock=lambda: NOW)
    flags: list[bool] = []
    catalog.is_loading.subscribe(flags.append)

    async def scenario():
        catalog.create_item(_draft())
        catalog.toggle_availability("2")
        scheduler.run_all()

    run(scenario)

    assert flags == [False, True, False]
