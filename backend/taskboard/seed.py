"""Deterministic sample data for a fresh Taskboard database.

Persons and tags are upserted on their natural keys (email, name) and are left
untouched when they already exist. Tasks and comments have no natural key and
are always inserted, so running the seeder twice duplicates them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional

from sqlmodel import Session, select

from .db import engine
from .models import (
    Comment,
    Person,
    PersonRoleEnum,
    Tag,
    Task,
    TaskPriorityEnum,
    TaskStatusEnum,
    TaskTagLink,
    utcnow,
)


logger = logging.getLogger(__name__)

DUE_DATE_OFFSET = timedelta(days=7)

SAMPLE_PERSONS = [
    {"email": "alice@example.com", "name": "Alice Anderson", "role": PersonRoleEnum.manager},
    {"email": "bob@example.com", "name": "Bob Builder", "role": PersonRoleEnum.developer},
]

SAMPLE_TAGS = [
    {"name": "Urgent", "color": "#FF0000"},
    {"name": "Frontend", "color": "#00AAFF"},
]


@dataclass
class SeedResult:
    person_ids: Dict[str, int] = field(default_factory=dict)
    tag_ids: Dict[str, int] = field(default_factory=dict)
    task_ids: List[int] = field(default_factory=list)
    comment_ids: List[int] = field(default_factory=list)


def upsert_person(session: Session, *, email: str, name: str, role: PersonRoleEnum) -> Person:
    """Return the person registered under *email*, inserting it if missing.

    An existing row is returned as stored: name and role are not overwritten.
    """
    person = session.exec(select(Person).where(Person.email == email)).first()
    if person:
        logger.debug("Person %s already present (id=%s)", email, person.id)
        return person
    person = Person(email=email, name=name, role=role)
    session.add(person)
    session.commit()
    session.refresh(person)
    logger.debug("Inserted person %s (id=%s)", email, person.id)
    return person


def upsert_tag(session: Session, *, name: str, color: str) -> Tag:
    """Return the tag called *name*, inserting it if missing."""
    tag = session.exec(select(Tag).where(Tag.name == name)).first()
    if tag:
        logger.debug("Tag %s already present (id=%s)", name, tag.id)
        return tag
    tag = Tag(name=name, color=color)
    session.add(tag)
    session.commit()
    session.refresh(tag)
    logger.debug("Inserted tag %s (id=%s)", name, tag.id)
    return tag


def create_task(
    session: Session,
    *,
    title: str,
    description: Optional[str],
    status: TaskStatusEnum,
    priority: TaskPriorityEnum,
    creator_id: int,
    assignee_id: Optional[int],
    due_date: Optional[datetime] = None,
    parent_id: Optional[int] = None,
    tag_ids: Iterable[int] = (),
) -> Task:
    """Insert a task and connect it to already existing tags.

    The task row and its tag links are committed together.
    """
    task = Task(
        title=title,
        description=description,
        status=status,
        priority=priority,
        creator_id=creator_id,
        assignee_id=assignee_id,
        due_date=due_date,
        parent_id=parent_id,
    )
    session.add(task)
    session.flush()
    for tag_id in tag_ids:
        session.add(TaskTagLink(task_id=task.id, tag_id=tag_id))
    session.commit()
    session.refresh(task)
    logger.debug("Inserted task %r (id=%s)", title, task.id)
    return task


def create_comment(session: Session, *, task_id: int, author_id: int, content: str) -> Comment:
    comment = Comment(task_id=task_id, author_id=author_id, content=content)
    session.add(comment)
    session.commit()
    session.refresh(comment)
    logger.debug("Inserted comment id=%s on task %s", comment.id, task_id)
    return comment


def seed_sample_data(session: Session) -> SeedResult:
    """Load the sample persons, tags, tasks and comment in dependency order."""
    result = SeedResult()

    person_map = _ensure_persons(session)
    result.person_ids = {email: person.id for email, person in person_map.items()}
    alice_id = result.person_ids["alice@example.com"]
    bob_id = result.person_ids["bob@example.com"]

    tag_map = _ensure_tags(session)
    result.tag_ids = {name: tag.id for name, tag in tag_map.items()}

    setup_repo = create_task(
        session,
        title="Setup project repo",
        description="Initialize repository with basic configs",
        status=TaskStatusEnum.TODO,
        priority=TaskPriorityEnum.HIGH,
        creator_id=alice_id,
        assignee_id=bob_id,
        due_date=utcnow() + DUE_DATE_OFFSET,
        tag_ids=[result.tag_ids["Urgent"]],
    )
    result.task_ids.append(setup_repo.id)

    login_page = create_task(
        session,
        title="Build login page",
        description="Create React login form with validation",
        status=TaskStatusEnum.IN_PROGRESS,
        priority=TaskPriorityEnum.MEDIUM,
        creator_id=bob_id,
        assignee_id=bob_id,
        parent_id=setup_repo.id,
        tag_ids=[result.tag_ids["Frontend"]],
    )
    result.task_ids.append(login_page.id)

    comment = create_comment(
        session,
        task_id=login_page.id,
        author_id=alice_id,
        content="Make sure to include password reset link!",
    )
    result.comment_ids.append(comment.id)
    return result


def run_seed(session_factory: Optional[Callable[[], Session]] = None) -> SeedResult:
    """Open a session, seed the sample data and always close the session.

    Errors raised by the database layer propagate unchanged; nothing is retried.
    """
    session = (session_factory or _new_session)()
    try:
        return seed_sample_data(session)
    finally:
        session.close()


def _new_session() -> Session:
    return Session(engine)


def _ensure_persons(session: Session) -> Dict[str, Person]:
    mapping: Dict[str, Person] = {}
    for item in SAMPLE_PERSONS:
        mapping[item["email"]] = upsert_person(session, **item)
    return mapping


def _ensure_tags(session: Session) -> Dict[str, Tag]:
    mapping: Dict[str, Tag] = {}
    for item in SAMPLE_TAGS:
        mapping[item["name"]] = upsert_tag(session, **item)
    return mapping
