"""End-to-end tests for the Unit and Activity documents."""

from curricula.entities import Activity, ActivityType, CritType, ResourceType, Unit
from curricula.persistence.memory import MemoryStore


def test_unit_reads_goal_and_criteria(unit_ref):
    unit = Unit(unit_ref, {
        "goal": "Learn X",
        "crits": {"1": {"type": "age", "min": 6, "max": 12}},
        "critOrder": ["1"],
    })

    assert unit.goal.value == "Learn X"
    assert len(unit.criteria) == 1
    assert unit.criteria[0].min.value == 6
    assert unit.criteria[0].max.value == 12
    assert unit.criteria[0].type.value is CritType.AGE
    assert unit.benefits.value is None


def test_add_criterion_issues_one_update(store, unit_ref):
    unit = Unit(unit_ref, unit_ref.get())

    result = unit.add_criterion("interest")

    assert result.ok
    assert result.key == "2"
    assert unit.criteria.keys == ["1", "2"]
    assert store.updates == [
        ("units/1", {"crits.2": {"type": "interest"}, "critOrder": ["1", "2"]}),
    ], f"Unexpected updates: {store.updates}"
    assert unit_ref.get()["crits"]["2"] == {"type": "interest"}


def test_add_criterion_with_fields(store, unit_ref):
    with Unit(unit_ref, live=True) as unit:
        result = unit.add_criterion(CritType.INTEREST, text="robotics")

        assert unit.criteria.get(result.key).text.value == "robotics"
        assert len(store.updates) == 1
        assert unit_ref.get()["crits"]["2"] == {"type": "interest", "text": "robotics"}


def test_element_edit_writes_nested_path(store, unit_ref):
    unit = Unit(unit_ref, unit_ref.get())

    unit.criteria.get("1").max.value = 14

    assert store.updates == [("units/1", {"crits.1.max": 14})]
    assert unit_ref.get()["crits"]["1"]["max"] == 14


def test_live_unit_sees_remote_criteria(unit_ref):
    with Unit(unit_ref, live=True) as unit:
        unit_ref.update({"crits.5": {"type": "interest", "text": "flight"}})

        assert unit.criteria.keys == ["1", "5"]
        assert unit.criteria.get("5").text.value == "flight"

        unit_ref.update({"crits.1.min": 7})
        assert unit.criteria.get("1").min.value == 7


def test_two_clients_adding_share_a_key():
    """Concurrent adds compute the same key and end up on the same element."""
    store = MemoryStore()
    ref = store.collection("units").add({"crits": {"1": {}}, "critOrder": ["1"]}, doc_id="1")
    mine = Unit(ref, ref.get())
    theirs = Unit(ref, ref.get())

    assert mine.add_criterion("age", min=6).key == theirs.add_criterion("interest").key == "2"
    assert ref.get()["crits"]["2"] == {"type": "interest"}
    store.close()


def test_unit_summary(unit_ref):
    unit = Unit(unit_ref, unit_ref.get())
    summary = unit.summary()
    assert summary.id == "1"
    assert summary.goal == "Learn about the Titanic"


def test_activity_resources_and_location(store):
    ref = store.collection("units/1/activities").add({
        "type": "watch",
        "intro": "Watch these",
        "rsrcs": {
            "1": {"type": "video", "url": "https://example.com/a", "previewUrl": "https://example.com/a.png"},
            "2": {"type": "video", "url": "https://example.com/b"},
        },
        "rsrcOrder": ["2", "1"],
        "loc": {"name": "Harbor", "lat": "41.7", "lon": "-49.9"},
    }, doc_id="1")

    activity = Activity(ref, ref.get())

    assert activity.type.value is ActivityType.WATCH
    assert activity.title.value is None
    assert [r.url.value for r in activity.resources] == ["https://example.com/b", "https://example.com/a"]
    assert activity.resources.get("1").preview_url.value == "https://example.com/a.png"
    assert activity.location.name.value == "Harbor"
    assert activity.location.lat.value == "41.7"


def test_activity_defaults(store):
    ref = store.collection("units/1/activities").add({}, doc_id="2")
    activity = Activity(ref, {})

    assert activity.type.value is ActivityType.READ
    assert activity.location.name.value == ""
    assert len(activity.resources) == 0


def test_activity_resource_mutations(store):
    ref = store.collection("units/1/activities").add({"type": "read"}, doc_id="3")
    activity = Activity(ref, ref.get())

    first = activity.add_resource(ResourceType.BOOK, url="https://example.com/book")
    second = activity.add_resource("page", title="Wiki")
    activity.move_resource(second.key, -1)
    activity.location.name.value = "Library"

    record = ref.get()
    assert record["rsrcOrder"] == ["2", "1"]
    assert record["rsrcs"]["1"] == {"type": "book", "url": "https://example.com/book"}
    assert record["loc"] == {"name": "Library"}

    result = activity.delete_resource(first.key)
    assert result.ok
    assert ref.get()["rsrcOrder"] == ["2"]


def test_deletes_reach_other_clients():
    store = MemoryStore()
    ref = store.collection("units").add({
        "goal": "Learn X",
        "crits": {"1": {"type": "age", "min": 6}, "2": {"type": "interest", "text": "kites"}},
        "critOrder": ["1", "2"],
    }, doc_id="1")

    with Unit(ref, live=True) as mine, Unit(ref, live=True) as theirs:
        assert mine.delete_criterion("2").ok
        mine.goal.value = None

        assert "2" not in ref.get()["crits"]
        assert "goal" not in ref.get()
        assert theirs.criteria.keys == ["1"]
        assert theirs.goal.value is None
    store.close()


def test_fractional_age_bound_is_rejected(unit_ref, caplog):
    unit = Unit(unit_ref, {"crits": {"1": {"min": 6.5, "max": 12.0}}, "critOrder": ["1"]})

    crit = unit.criteria.get("1")
    assert crit.min.value is None
    assert crit.max.value == 12
    assert "Failed to read prop" in caplog.text
