from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException
from typing import Dict, List, Optional
from pydantic import ConfigDict
from sqlmodel import Field, SQLModel, select

from ..db import get_session
from ..models import Comment, Task, TaskBase, TaskStatusEnum, TaskTagLink


router = APIRouter(prefix="/tasks", tags=["tasks"])


class CommentOutput(SQLModel, table=False):
    id: int
    content: str
    task_id: int
    author_id: int
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class TaskOutput(TaskBase, table=False):
    id: int
    tag_ids: List[int] = Field(default_factory=list)
    subtask_ids: List[int] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)


class TaskDetail(TaskOutput, table=False):
    comments: List[CommentOutput] = Field(default_factory=list)


@router.get("/", response_model=List[TaskOutput])
def list_tasks(status: Optional[TaskStatusEnum] = None, session=Depends(get_session)):
    query = select(Task).order_by(Task.id)
    if status is not None:
        query = query.where(Task.status == status)
    tasks = session.exec(query).all()
    return _build_task_collection(session, tasks)


@router.get("/{task_id}", response_model=TaskDetail)
def get_task(task_id: int, session=Depends(get_session)):
    obj = session.get(Task, task_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Tarea no encontrada")
    tag_map = _load_tag_map(session, [task_id])
    subtask_map = _load_subtask_map(session, [task_id])
    comments = session.exec(
        select(Comment).where(Comment.task_id == task_id).order_by(Comment.id)
    ).all()
    return TaskDetail.model_validate(
        obj,
        update={
            "tag_ids": tag_map.get(task_id, []),
            "subtask_ids": subtask_map.get(task_id, []),
            "comments": [CommentOutput.model_validate(comment) for comment in comments],
        },
    )


def _build_task_collection(session, tasks: List[Task]) -> List[TaskOutput]:
    if not tasks:
        return []
    task_ids = [task.id for task in tasks]
    tag_map = _load_tag_map(session, task_ids)
    subtask_map = _load_subtask_map(session, task_ids)
    return [
        TaskOutput.model_validate(
            task,
            update={
                "tag_ids": tag_map.get(task.id, []),
                "subtask_ids": subtask_map.get(task.id, []),
            },
        )
        for task in tasks
    ]


def _load_tag_map(session, task_ids: List[int]) -> Dict[int, List[int]]:
    rows = session.exec(
        select(TaskTagLink.task_id, TaskTagLink.tag_id)
        .where(TaskTagLink.task_id.in_(task_ids))
        .order_by(TaskTagLink.tag_id)
    ).all()
    mapping: Dict[int, List[int]] = {}
    for task_id, tag_id in rows:
        mapping.setdefault(task_id, []).append(tag_id)
    return mapping


def _load_subtask_map(session, task_ids: List[int]) -> Dict[int, List[int]]:
    rows = session.exec(
        select(Task.parent_id, Task.id)
        .where(Task.parent_id.in_(task_ids))
        .order_by(Task.id)
    ).all()
    mapping: Dict[int, List[int]] = {}
    for parent_id, child_id in rows:
        mapping.setdefault(parent_id, []).append(child_id)
    return mapping
