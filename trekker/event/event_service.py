# trekker/event/event_service.py
"""Change feed.

``ChangeNotifier`` keeps the last-seen ``{id, status, title, updated_at}`` of
every task and epic and turns a fresh full read into created/updated/deleted
events. ``EventBroadcaster`` owns the single notifier of a process, polls it on
a fixed interval while anyone is listening and fans the events out to every
subscriber queue.

Polling keeps one snapshot per process: several server instances would each
report changes independently.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from trekker.schemas.event_schema import ChangeEvent, EpicEvent, TaskEvent
from trekker.store import EntityStore

logger = logging.getLogger("trekker.events")


@dataclass(frozen=True)
class Snapshot:
    id: str
    status: str
    title: str
    updated_at: datetime


def _snapshot_map(rows: Iterable[Any]) -> dict[str, Snapshot]:
    # dicts keep insertion order, so iteration follows the store's read order
    return {
        row.id: Snapshot(id=row.id, status=row.status, title=row.title, updated_at=row.updated_at)
        for row in rows
    }


def _diff(
    previous: dict[str, Snapshot],
    current: dict[str, Snapshot],
    make_event: Callable[..., ChangeEvent],
    prefix: str,
) -> list[ChangeEvent]:
    events: list[ChangeEvent] = []

    for entity_id, now in current.items():
        before = previous.get(entity_id)
        if before is None:
            events.append(make_event(f"{prefix}_created", now.id, now.title, now.status))
        elif before.updated_at != now.updated_at:
            # exact equality: a write that only bumps updated_at still counts
            events.append(make_event(f"{prefix}_updated", now.id, now.title, now.status))

    for entity_id, before in previous.items():
        if entity_id not in current:
            events.append(make_event(f"{prefix}_deleted", entity_id, before.title, None))

    return events


def _task_event(type_: str, entity_id: str, title: str, status: str | None) -> TaskEvent:
    return TaskEvent(type=type_, task_id=entity_id, task_title=title, status=status)


def _epic_event(type_: str, entity_id: str, title: str, status: str | None) -> EpicEvent:
    return EpicEvent(type=type_, epic_id=entity_id, epic_title=title, status=status)


class ChangeNotifier:
    """Snapshot-diff engine for tasks and epics.

    Not safe for concurrent callers: one driving loop calls ``initialize``
    and then ``compute_changes`` serially.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._tasks: dict[str, Snapshot] = {}
        self._epics: dict[str, Snapshot] = {}
        self._primed = False

    @property
    def primed(self) -> bool:
        return self._primed

    def task_snapshot(self, task_id: str) -> Snapshot | None:
        return self._tasks.get(task_id)

    def epic_snapshot(self, epic_id: str) -> Snapshot | None:
        return self._epics.get(epic_id)

    def _read_current(self) -> tuple[dict[str, Snapshot], dict[str, Snapshot]]:
        db = self._session_factory()
        try:
            store = EntityStore(db)
            return _snapshot_map(store.list("task")), _snapshot_map(store.list("epic"))
        finally:
            db.close()

    def initialize(self) -> None:
        """Take the first snapshot. Store failures leave the notifier
        unprimed so the next call can retry."""
        if self._primed:
            return

        try:
            tasks, epics = self._read_current()
        except Exception:
            # store not reachable yet; stay unprimed and retry on the next call
            logger.warning("change_feed_initialize_failed", exc_info=True)
            return

        self._tasks, self._epics = tasks, epics
        self._primed = True
        logger.info(
            "change_feed_initialized",
            extra={"task_count": len(tasks), "epic_count": len(epics)},
        )

    def compute_changes(self) -> list[ChangeEvent]:
        """Diff a fresh read against the snapshot, then replace the snapshot.

        Task events come before epic events. When unprimed every entity is
        reported as created.
        """
        tasks, epics = self._read_current()

        events = _diff(self._tasks, tasks, _task_event, "task")
        events.extend(_diff(self._epics, epics, _epic_event, "epic"))

        self._tasks, self._epics = tasks, epics
        self._primed = True
        return events


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class EventBroadcaster:
    """Single polling loop per process feeding any number of subscribers.

    The loop starts with the first subscriber and exits at the top of its next
    tick once the last one has left. A subscriber arriving before that reuses
    the live loop, so at most one ``compute_changes`` is ever in flight.
    """

    def __init__(self, notifier: ChangeNotifier, interval: float = 2.0):
        self.notifier = notifier
        self.interval = interval
        self._subscribers: set[asyncio.Queue] = set()
        self._loop_task: asyncio.Task | None = None
        self._start_lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue()
        async with self._start_lock:
            if not self.running:
                await run_in_threadpool(self.notifier.initialize)
            self._subscribers.add(queue)
            if not self.running:
                self._loop_task = asyncio.create_task(self._poll())
        logger.info("change_feed_subscribed", extra={"subscribers": len(self._subscribers)})
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)
        logger.info("change_feed_unsubscribed", extra={"subscribers": len(self._subscribers)})

    async def close(self) -> None:
        self._subscribers.clear()
        if self._loop_task is not None:
            self._loop_task.cancel()
            try:
                await self._loop_task
            except asyncio.CancelledError:
                pass
            self._loop_task = None

    def publish(self, events: Iterable[ChangeEvent]) -> None:
        for event in events:
            message = {**event.to_payload(), "timestamp": _timestamp()}
            for queue in list(self._subscribers):
                queue.put_nowait(message)

    async def _poll(self) -> None:
        while self._subscribers:
            try:
                events = await run_in_threadpool(self.notifier.compute_changes)
            except Exception:
                # keep polling; the next tick diffs against the last good snapshot
                logger.exception("change_feed_poll_failed")
            else:
                self.publish(events)
            await asyncio.sleep(self.interval)
