"""Firestore-backed task repository (implements ITaskRepository)."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from app.domain.entities.task import TaskEntity
from app.domain.enums import TaskPriority, TaskStatus
from app.domain.value_objects.checklist import build_checklist
from app.infrastructure.firebase._rest_client import DESCENDING, FirestoreRESTClient
from app.infrastructure.firebase.collections import COLLECTION_TASKS
from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid

_OLDEST = datetime.min.replace(tzinfo=UTC)


def task_to_document(task: TaskEntity) -> dict[str, Any]:
    """Serialize a task to the stored field map (ids and enums as strings)."""
    return {
        "title": task.title,
        "description": task.description,
        "priority": task.priority.value,
        "status": task.status.value,
        "due_date": task.due_date,
        "assigned_to": list(task.assigned_to),
        "attachments": list(task.attachments),
        "todo_checklist": [item.to_dict() for item in task.todo_checklist],
        "progress": task.progress,
        "created_by": task.created_by,
        "created_at": task.created_at,
        "updated_at": task.updated_at,
    }


def task_from_document(doc_id: str, data: dict[str, Any]) -> TaskEntity:
    return TaskEntity(
        id=doc_id,
        title=data.get("title", ""),
        created_by=data.get("created_by", ""),
        description=data.get("description") or "",
        priority=TaskPriority(data.get("priority", TaskPriority.MEDIUM.value)),
        status=TaskStatus(data.get("status", TaskStatus.PENDING.value)),
        due_date=ensure_utc(data.get("due_date")),
        assigned_to=list(data.get("assigned_to") or []),
        attachments=list(data.get("attachments") or []),
        todo_checklist=build_checklist(data.get("todo_checklist") or []),
        progress=int(data.get("progress") or 0),
        created_at=ensure_utc(data.get("created_at")),
        updated_at=ensure_utc(data.get("updated_at")),
    )


def newest_first(tasks: list[TaskEntity]) -> list[TaskEntity]:
    return sorted(tasks, key=lambda t: t.created_at or _OLDEST, reverse=True)


class FirestoreTaskRepository:
    """Task repository using Firestore. Writes are whole-document (last write wins)."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_TASKS)

    async def create(self, task: TaskEntity) -> TaskEntity:
        now = utc_now()
        stored = replace(task, id=generate_cuid(), created_at=now, updated_at=now)
        await self._coll.document(stored.id).set(task_to_document(stored))
        return stored

    async def get_by_id(self, task_id: str) -> TaskEntity | None:
        doc = await self._coll.document(task_id).get()
        if not doc:
            return None
        return task_from_document(doc.id, doc.to_dict())

    async def save(self, task: TaskEntity) -> TaskEntity:
        task.updated_at = utc_now()
        await self._coll.document(task.id).set(task_to_document(task))
        return task

    async def delete(self, task_id: str) -> None:
        await self._coll.document(task_id).delete()

    async def list_all(self) -> list[TaskEntity]:
        q = self._coll.order_by("created_at", DESCENDING)
        return [task_from_document(s.id, s.to_dict()) async for s in q.stream()]

    async def list_by_assignee(self, user_id: str) -> list[TaskEntity]:
        # array-contains with orderBy needs a composite index; sort locally instead.
        q = self._coll.where("assigned_to", "array-contains", user_id)
        return newest_first(
            [task_from_document(s.id, s.to_dict()) async for s in q.stream()]
        )
