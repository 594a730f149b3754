from datetime import UTC, datetime
from typing import Optional
from enum import Enum
from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(UTC)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes on every backend.

    SQLite stores the value without its offset, so results are re-tagged as
    UTC on the way out. Naive values are rejected when binding.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("Datetime values must have timezone information")
        return value.astimezone(UTC)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class Timestamped(SQLModel):
    created_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=UTCDateTime)


class PersonRoleEnum(str, Enum):
    manager = "manager"
    developer = "developer"
    designer = "designer"


class TaskStatusEnum(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriorityEnum(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Person(Timestamped, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: str
    role: PersonRoleEnum = Field(default=PersonRoleEnum.developer)


class Tag(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    color: str = Field(default="#999999")  # código hexadecimal


class TaskBase(Timestamped):
    title: str
    description: Optional[str] = None
    status: TaskStatusEnum = Field(default=TaskStatusEnum.TODO, index=True)
    priority: TaskPriorityEnum = Field(default=TaskPriorityEnum.MEDIUM)
    creator_id: int = Field(foreign_key="person.id", index=True)
    assignee_id: Optional[int] = Field(default=None, foreign_key="person.id", index=True)
    due_date: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    # Tarea padre (jerarquía de subtareas)
    parent_id: Optional[int] = Field(default=None, foreign_key="task.id", index=True)


class Task(TaskBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)


class TaskTagLink(SQLModel, table=True):
    task_id: Optional[int] = Field(
        default=None,
        foreign_key="task.id",
        primary_key=True,
    )
    tag_id: Optional[int] = Field(
        default=None,
        foreign_key="tag.id",
        primary_key=True,
    )


class Comment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    content: str
    task_id: int = Field(foreign_key="task.id", index=True)
    author_id: int = Field(foreign_key="person.id", index=True)
    created_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=UTCDateTime)
