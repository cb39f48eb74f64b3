"""Tests for the in-memory assignment store."""

from hypothesis import given
from hypothesis import strategies as st

from colonytasks.core.assignment import (
    AssignmentKind,
    Construct,
    Deposit,
    Harvest,
    Repair,
    Upgrade,
)
from colonytasks.core.identity import ObjectId, Position
from colonytasks.storage import AssignmentStore, LocalAssignmentStore

names = st.sampled_from(["a", "b", "c", "d"])
assignments = st.one_of(
    st.builds(Deposit, st.builds(Position, st.integers(0, 3), st.integers(0, 3))),
    st.builds(Harvest, st.builds(ObjectId, st.sampled_from(["n1", "n2"]))),
    st.builds(Upgrade, st.just(ObjectId("ctrl"))),
)


def test_local_store_satisfies_protocol() -> None:
    assert isinstance(LocalAssignmentStore(), AssignmentStore)


def test_set_replaces_previous_assignment() -> None:
    store = LocalAssignmentStore()
    store.set("a", Upgrade(ObjectId("ctrl")))
    store.set("a", Deposit(Position(1, 1)))

    assert store.get("a") == Deposit(Position(1, 1))
    assert len(store) == 1


def test_remove_is_idempotent() -> None:
    store = LocalAssignmentStore({"a": Upgrade(ObjectId("ctrl"))})

    assert store.remove("a") is True
    assert store.remove("a") is False
    assert "a" not in store
    assert store.get("a") is None


def test_initial_entries_are_copied() -> None:
    entries = {"a": Upgrade(ObjectId("ctrl"))}
    store = LocalAssignmentStore(entries)
    store.remove("a")
    assert "a" in entries


def test_items_tolerates_removal_while_iterating() -> None:
    store = LocalAssignmentStore(
        {"a": Upgrade(ObjectId("ctrl")), "b": Deposit(Position(1, 1))}
    )
    for name, _ in store.items():
        store.remove(name)
    assert len(store) == 0


def test_any_holds_without_liveness_counts_dead_holders() -> None:
    store = LocalAssignmentStore({"ghost": Deposit(Position(2, 2))})

    assert store.any_holds(AssignmentKind.DEPOSIT)
    assert not store.any_holds(AssignmentKind.DEPOSIT, live={"alive"})


def test_any_holds_with_liveness_ignores_dead_holders() -> None:
    store = LocalAssignmentStore({"ghost": Repair(Position(2, 2)), "alive": Repair(Position(3, 3))})

    assert store.any_holds(AssignmentKind.REPAIR, live={"alive"})
    assert not store.any_holds(AssignmentKind.CONSTRUCT)


def test_has_claim_matches_exact_assignment() -> None:
    store = LocalAssignmentStore({"h1": Harvest(ObjectId("n1"))})

    assert store.has_claim(Harvest(ObjectId("n1")))
    assert not store.has_claim(Harvest(ObjectId("n2")))
    assert not store.has_claim(Harvest(ObjectId("n1")), live={"h2"})


def test_holders_and_counts() -> None:
    store = LocalAssignmentStore(
        {
            "a": Harvest(ObjectId("n1")),
            "b": Harvest(ObjectId("n2")),
            "c": Construct(Position(5, 5)),
        }
    )

    assert sorted(store.holders(AssignmentKind.HARVEST)) == ["a", "b"]
    assert store.count_by_kind() == {AssignmentKind.HARVEST: 2, AssignmentKind.CONSTRUCT: 1}


def test_prune_removes_only_dead_agents() -> None:
    store = LocalAssignmentStore(
        {"a": Upgrade(ObjectId("ctrl")), "b": Upgrade(ObjectId("ctrl"))}
    )

    assert store.prune({"a"}) == ["b"]
    assert list(store.snapshot()) == ["a"]
    assert store.prune({"a"}) == []


def test_clear_empties_store() -> None:
    store = LocalAssignmentStore({"a": Upgrade(ObjectId("ctrl"))})
    store.clear()
    assert len(store) == 0


@given(ops=st.lists(st.tuples(names, st.one_of(st.none(), assignments)), max_size=30))
def test_store_mirrors_last_write_per_agent(ops) -> None:
    """PROPERTY: The store behaves like a dict of the last write per agent."""
    store = LocalAssignmentStore()
    expected = {}
    for name, assignment in ops:
        if assignment is None:
            store.remove(name)
            expected.pop(name, None)
        else:
            store.set(name, assignment)
            expected[name] = assignment

    assert store.snapshot() == expected
    assert sum(store.count_by_kind().values()) == len(store)
