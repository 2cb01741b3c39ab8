"""Tests for the unit resolver and fixture seeding."""

import pytest

from curricula.app.fixtures import seed_fixtures
from curricula.app.resolver import UnitResolver, next_id
from curricula.app.schemas import ActivityInput, Criterion, Details, Location, Resource
from curricula.core.exceptions import ActivityNotFoundError, UnitNotFoundError
from curricula.entities import ActivityType, CritType, ResourceType, Unit


@pytest.fixture
def resolver(store):
    return UnitResolver(store)


@pytest.fixture
def seeded(resolver):
    seed_fixtures(resolver)
    return resolver


def test_next_id():
    assert next_id([]) == "1"
    assert next_id(["1", "9", "abc", "10"]) == "11"
    assert next_id(["2", "²"]) == "3"


def test_seed_fixtures(seeded):
    units = seeded.units()

    assert [u.id for u in units] == ["1", "2"]
    titanic, magnus = units
    assert titanic.details.goal == "Learn about the Titanic"
    assert titanic.criteria[0] == Criterion(type=CritType.AGE, min=6, max=12)
    assert [c.text for c in titanic.criteria[1:]] == ["engineering", "robotics", "cartography"]
    assert len(titanic.activities) == 8
    assert [a.id for a in magnus.activities][-2:] == ["9", "10"], "Activities sort numerically"
    assert titanic.activities[0].resources[0].type is ResourceType.BOOK
    assert titanic.activities[6].title == "Plot"
    assert titanic.activities[6].location.name == "Wreck of the Titanic"


def test_unknown_unit(resolver):
    assert resolver.unit("42") is None
    with pytest.raises(UnitNotFoundError, match="No unit with id '42'"):
        resolver.update_details("42", Details(goal="x"))
    with pytest.raises(UnitNotFoundError):
        resolver.add_activity("42", ActivityInput(type=ActivityType.READ))


def test_create_unit_assigns_next_numeric_id(seeded):
    unit = seeded.create_unit("Learn about bridges")
    assert unit.id == "3"
    assert seeded.unit("3").details.goal == "Learn about bridges"
    assert seeded.unit("3").criteria == []


def test_update_details_clears_unset_fields(seeded):
    seeded.update_details("1", Details(goal="New goal", justification="Because"))
    details = seeded.unit("1").details
    assert details == Details(goal="New goal", benefits=None, justification="Because")


def test_update_criteria_replaces_in_order(seeded):
    seeded.update_criteria("2", [
        Criterion(type=CritType.INTEREST, text="physics"),
        Criterion(type=CritType.AGE, min=10, max=14),
    ])
    criteria = seeded.unit("2").criteria
    assert [c.type for c in criteria] == [CritType.INTEREST, CritType.AGE]
    assert seeded.store.document("units/2").get()["critOrder"] == ["1", "2"]


def test_add_and_update_activity(seeded):
    added = seeded.add_activity("1", ActivityInput(
        type=ActivityType.WATCH,
        intro="Watch it",
        resources=[Resource(type=ResourceType.VIDEO, url="https://example.com/v", previewUrl="p.png")],
    ))
    assert added.id == "9"

    updated = seeded.update_activity("1", "9", ActivityInput(
        type=ActivityType.CUSTOM, title="Go", location=Location(name="Museum")))

    stored = seeded.unit("1").activities[-1]
    assert stored == updated
    assert stored.resources == []
    assert stored.location.name == "Museum"


def test_update_unknown_activity(seeded):
    with pytest.raises(ActivityNotFoundError, match="No activity with id '99'"):
        seeded.update_activity("1", "99", ActivityInput(type=ActivityType.READ))


def test_live_unit_sees_resolver_edits(seeded):
    """Resolver writes use the document layout, so open documents follow them."""
    ref = seeded.store.document("units/1")
    with Unit(ref, live=True) as unit:
        seeded.update_details("1", Details(goal="Changed remotely"))
        seeded.update_criteria("1", [Criterion(type=CritType.AGE, min=8, max=10)])

        assert unit.goal.value == "Changed remotely"
        assert unit.criteria.keys == ["1"]
        assert unit.criteria[0].min.value == 8
