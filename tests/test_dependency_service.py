"""
Tests for the dependency graph engine: validation order, cycle rejection and
edge removal.
"""

import random

import pytest

from trekker.dependency import dependency_service
from trekker.errors import ConflictError, NotFoundError, ValidationError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _edges(store):
    return {(e.task_id, e.depends_on_id) for e in store.list("dependency")}


def _is_acyclic(nodes, edges):
    indegree = {n: 0 for n in nodes}
    for _, target in edges:
        indegree[target] += 1
    ready = [n for n, d in indegree.items() if d == 0]
    seen = 0
    while ready:
        node = ready.pop()
        seen += 1
        for source, target in edges:
            if source == node:
                indegree[target] -= 1
                if indegree[target] == 0:
                    ready.append(target)
    return seen == len(nodes)


def _reachable(edges, start, goal):
    stack, seen = [start], set()
    while stack:
        node = stack.pop()
        if node == goal:
            return True
        if node in seen:
            continue
        seen.add(node)
        stack.extend(t for s, t in edges if s == node)
    return False


# ---------------------------------------------------------------------------
# add_dependency
# ---------------------------------------------------------------------------

class TestAddDependency:
    def test_creates_edge(self, store, make_task):
        a, b = make_task("A"), make_task("B")
        dep = dependency_service.add_dependency(store, a.id, b.id)

        assert dep.task_id == a.id
        assert dep.depends_on_id == b.id
        assert dep.id
        assert _edges(store) == {(a.id, b.id)}

    def test_self_dependency_rejected(self, store, make_task):
        a = make_task("A")
        with pytest.raises(ValidationError, match="cannot depend on itself"):
            dependency_service.add_dependency(store, a.id, a.id)
        assert _edges(store) == set()

    def test_self_dependency_checked_before_existence(self, store, project):
        with pytest.raises(ValidationError):
            dependency_service.add_dependency(store, "TREK-missing", "TREK-missing")

    def test_missing_task(self, store, make_task):
        b = make_task("B")
        with pytest.raises(NotFoundError, match="Task not found: TREK-nope"):
            dependency_service.add_dependency(store, "TREK-nope", b.id)

    def test_missing_prerequisite(self, store, make_task):
        a = make_task("A")
        with pytest.raises(NotFoundError, match="Dependency task not found"):
            dependency_service.add_dependency(store, a.id, "TREK-nope")

    def test_duplicate_rejected(self, store, make_task):
        a, b = make_task("A"), make_task("B")
        dependency_service.add_dependency(store, a.id, b.id)

        with pytest.raises(ConflictError):
            dependency_service.add_dependency(store, a.id, b.id)
        assert len(store.list("dependency")) == 1

    def test_reverse_pair_is_a_cycle_not_a_duplicate(self, store, make_task):
        a, b = make_task("A"), make_task("B")
        dependency_service.add_dependency(store, a.id, b.id)

        with pytest.raises(ValidationError, match="cycle"):
            dependency_service.add_dependency(store, b.id, a.id)

    def test_long_cycle_rejected(self, store, make_task):
        a, b, c, d = (make_task(n) for n in "ABCD")
        dependency_service.add_dependency(store, a.id, b.id)
        dependency_service.add_dependency(store, b.id, c.id)
        dependency_service.add_dependency(store, c.id, d.id)

        with pytest.raises(ValidationError):
            dependency_service.add_dependency(store, d.id, a.id)
        assert len(store.list("dependency")) == 3

    def test_diamond_is_allowed(self, store, make_task):
        a, b, c, d = (make_task(n) for n in "ABCD")
        dependency_service.add_dependency(store, a.id, b.id)
        dependency_service.add_dependency(store, a.id, c.id)
        dependency_service.add_dependency(store, b.id, d.id)
        dependency_service.add_dependency(store, c.id, d.id)

        assert len(store.list("dependency")) == 4


class TestWouldCreateCycle:
    def test_terminates_on_existing_cycle(self, store, make_task):
        # write a cycle straight to the store, bypassing the engine
        a, b, c = make_task("A"), make_task("B"), make_task("C")
        store.insert("dependency", {"id": "e1", "task_id": a.id, "depends_on_id": b.id})
        store.insert("dependency", {"id": "e2", "task_id": b.id, "depends_on_id": a.id})

        assert dependency_service.would_create_cycle(store, c.id, a.id) is False
        assert dependency_service.would_create_cycle(store, a.id, b.id) is True


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_random_insertions_keep_graph_acyclic(store, make_task, seed):
    rng = random.Random(seed)
    ids = [make_task(f"T{i}").id for i in range(8)]

    for _ in range(60):
        source, target = rng.sample(ids, 2)
        before = _edges(store)

        if (source, target) in before:
            with pytest.raises(ConflictError):
                dependency_service.add_dependency(store, source, target)
        elif _reachable(before, target, source):
            with pytest.raises(ValidationError):
                dependency_service.add_dependency(store, source, target)
        else:
            dependency_service.add_dependency(store, source, target)

        after = _edges(store)
        if (source, target) not in before and not _reachable(before, target, source):
            assert after == before | {(source, target)}
        else:
            assert after == before
        assert _is_acyclic(ids, after)


# ---------------------------------------------------------------------------
# remove_dependency
# ---------------------------------------------------------------------------

class TestRemoveDependency:
    def test_removes_edge(self, store, make_task):
        a, b = make_task("A"), make_task("B")
        dependency_service.add_dependency(store, a.id, b.id)

        dependency_service.remove_dependency(store, a.id, b.id)
        assert _edges(store) == set()

    def test_missing_edge(self, store, make_task):
        a, b = make_task("A"), make_task("B")
        dependency_service.add_dependency(store, a.id, b.id)

        with pytest.raises(NotFoundError, match="Dependency not found"):
            dependency_service.remove_dependency(store, b.id, a.id)
        assert _edges(store) == {(a.id, b.id)}

    def test_removal_allows_reverse_edge(self, store, make_task):
        a, b = make_task("A"), make_task("B")
        dependency_service.add_dependency(store, a.id, b.id)
        dependency_service.remove_dependency(store, a.id, b.id)

        dependency_service.add_dependency(store, b.id, a.id)
        assert _edges(store) == {(b.id, a.id)}
