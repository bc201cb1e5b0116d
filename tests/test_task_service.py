"""
Tests for task CRUD, cascade deletion and epic orphaning.
"""

import pytest

from trekker.comment import comment_service
from trekker.dependency import dependency_service
from trekker.epic import epic_service
from trekker.errors import NotFoundError, ValidationError
from trekker.schemas.comment_schema import CommentCreate
from trekker.schemas.task_schema import TaskCreate, TaskUpdate
from trekker.task import task_service


def _comment(store, task_id, text="note"):
    return comment_service.create_comment(store, task_id, CommentCreate(author="ana", content=text))


# ---------------------------------------------------------------------------
# create / update
# ---------------------------------------------------------------------------

class TestCreateTask:
    def test_defaults(self, make_task):
        task = make_task("Write docs")
        assert task.id.startswith("TREK-")
        assert task.status == "todo"
        assert task.priority == 2
        assert task.depends_on == []
        assert task.blocks == []
        assert task.created_at == task.updated_at

    def test_requires_project(self, store):
        with pytest.raises(ValidationError, match="Project not initialized"):
            task_service.create_task(store, TaskCreate(title="Orphan"))

    def test_unknown_epic(self, store, project):
        with pytest.raises(NotFoundError, match="Epic not found"):
            task_service.create_task(store, TaskCreate(title="X", epic_id="EPIC-none"))

    def test_unknown_parent(self, store, project):
        with pytest.raises(NotFoundError, match="Task not found"):
            task_service.create_task(store, TaskCreate(title="X", parent_task_id="TREK-none"))

    def test_subtask(self, store, make_task):
        parent = make_task("Parent")
        child = make_task("Child", parent_task_id=parent.id)

        assert child.parent_task_id == parent.id
        assert [t.id for t in task_service.list_subtasks(store, parent.id)] == [child.id]


class TestUpdateTask:
    def test_updates_fields_and_timestamp(self, store, make_task):
        task = make_task("Old")
        updated = task_service.update_task(store, task.id, TaskUpdate(title="New", status="in_progress"))

        assert updated.title == "New"
        assert updated.status == "in_progress"
        assert updated.updated_at > task.updated_at

    def test_explicit_null_clears_description(self, store, make_task):
        task = make_task("T", description="text")
        updated = task_service.update_task(store, task.id, TaskUpdate(description=None))
        assert updated.description is None

    def test_unknown_task(self, store, project):
        with pytest.raises(NotFoundError):
            task_service.update_task(store, "TREK-none", TaskUpdate(title="x"))

    def test_dependency_lists(self, store, make_task):
        a, b = make_task("A"), make_task("B")
        dependency_service.add_dependency(store, a.id, b.id)

        assert task_service.get_task_with_deps(store, a.id).depends_on == [b.id]
        assert task_service.get_task_with_deps(store, b.id).blocks == [a.id]


# ---------------------------------------------------------------------------
# delete_task
# ---------------------------------------------------------------------------

class TestDeleteTask:
    @pytest.fixture
    def tree(self, store, make_task):
        root = make_task("Root")
        child1 = make_task("Child 1", parent_task_id=root.id)
        child2 = make_task("Child 2", parent_task_id=root.id)
        grandchild = make_task("Grandchild", parent_task_id=child1.id)
        upstream = make_task("Upstream")
        downstream = make_task("Downstream")

        _comment(store, root.id, "first")
        _comment(store, root.id, "second")
        _comment(store, grandchild.id)
        _comment(store, upstream.id)

        dependency_service.add_dependency(store, root.id, upstream.id)
        dependency_service.add_dependency(store, downstream.id, root.id)
        dependency_service.add_dependency(store, child2.id, upstream.id)

        return {
            "root": root.id,
            "child1": child1.id,
            "child2": child2.id,
            "grandchild": grandchild.id,
            "upstream": upstream.id,
            "downstream": downstream.id,
        }

    def test_cascade_removes_everything_owned(self, store, tree):
        task_service.delete_task(store, tree["root"])

        deleted = {tree["root"], tree["child1"], tree["child2"], tree["grandchild"]}
        remaining_tasks = {t.id for t in store.list("task")}
        assert remaining_tasks == {tree["upstream"], tree["downstream"]}

        for comment in store.list("comment"):
            assert comment.task_id not in deleted
        assert len(store.list("comment")) == 1

        for edge in store.list("dependency"):
            assert edge.task_id not in deleted
            assert edge.depends_on_id not in deleted
        assert store.list("dependency") == []

    def test_children_deleted_before_parents(self, store, tree):
        order = task_service.delete_task(store, tree["root"])

        assert order[-1] == tree["root"]
        assert order.index(tree["grandchild"]) < order.index(tree["child1"])
        assert set(order) == {tree["root"], tree["child1"], tree["child2"], tree["grandchild"]}

    def test_deletion_order_is_deterministic(self, store, tree):
        order = task_service.delete_task(store, tree["root"])
        assert order == [tree["child2"], tree["grandchild"], tree["child1"], tree["root"]]

    def test_second_delete_is_not_found(self, store, tree):
        task_service.delete_task(store, tree["root"])
        before = (len(store.list("task")), len(store.list("comment")), len(store.list("dependency")))

        with pytest.raises(NotFoundError):
            task_service.delete_task(store, tree["root"])
        with pytest.raises(NotFoundError):
            task_service.delete_task(store, tree["grandchild"])

        after = (len(store.list("task")), len(store.list("comment")), len(store.list("dependency")))
        assert before == after

    def test_delete_leaf_leaves_parent(self, store, tree):
        task_service.delete_task(store, tree["grandchild"])
        assert store.get("task", tree["child1"]) is not None
        assert store.get("task", tree["grandchild"]) is None


# ---------------------------------------------------------------------------
# epics
# ---------------------------------------------------------------------------

class TestDeleteEpic:
    def test_orphans_tasks(self, store, make_epic, make_task):
        epic = make_epic("Launch")
        t1 = make_task("One", epic_id=epic.id)
        t2 = make_task("Two", epic_id=epic.id)

        epic_service.delete_epic(store, epic.id)

        assert store.get("epic", epic.id) is None
        for task_id in (t1.id, t2.id):
            task = task_service.get_task(store, task_id)
            assert task.epic_id == epic.id

    def test_unknown_epic(self, store, project):
        with pytest.raises(NotFoundError, match="Epic not found: EPIC-none"):
            epic_service.delete_epic(store, "EPIC-none")
