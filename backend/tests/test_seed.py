import logging
from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import Session, select

from taskboard.models import (
    Comment,
    Person,
    PersonRoleEnum,
    Tag,
    Task,
    TaskPriorityEnum,
    TaskStatusEnum,
    TaskTagLink,
)
from taskboard.seed import DUE_DATE_OFFSET, create_task, run_seed, seed_sample_data

from conftest import CountingSession


def _count(session: Session, model) -> int:
    return len(session.exec(select(model)).all())


def test_seed_populates_empty_store(session: Session):
    seed_sample_data(session)

    assert _count(session, Person) == 2
    assert _count(session, Tag) == 2
    assert _count(session, Task) == 2
    assert _count(session, Comment) == 1
    assert _count(session, TaskTagLink) == 2


def test_seed_twice_duplicates_only_tasks_and_comments(session: Session):
    first = seed_sample_data(session)
    second = seed_sample_data(session)

    assert second.person_ids == first.person_ids
    assert second.tag_ids == first.tag_ids
    assert set(second.task_ids).isdisjoint(first.task_ids)

    assert _count(session, Person) == 2
    assert _count(session, Tag) == 2
    assert _count(session, Task) == 4
    assert _count(session, Comment) == 2
    assert _count(session, TaskTagLink) == 4


def test_existing_person_and_tag_are_left_unchanged(session: Session):
    session.add(Person(email="alice@example.com", name="Alice Renamed", role=PersonRoleEnum.designer))
    session.add(Tag(name="Urgent", color="#123456"))
    session.commit()

    result = seed_sample_data(session)

    alice = session.exec(select(Person).where(Person.email == "alice@example.com")).one()
    assert alice.name == "Alice Renamed"
    assert alice.role == PersonRoleEnum.designer
    assert result.person_ids["alice@example.com"] == alice.id

    urgent = session.exec(select(Tag).where(Tag.name == "Urgent")).one()
    assert urgent.color == "#123456"
    assert result.tag_ids["Urgent"] == urgent.id


def test_sample_tasks_reference_persons_and_parent(session: Session):
    result = seed_sample_data(session)
    alice_id = result.person_ids["alice@example.com"]
    bob_id = result.person_ids["bob@example.com"]
    setup_repo = session.get(Task, result.task_ids[0])
    login_page = session.get(Task, result.task_ids[1])

    assert setup_repo.title == "Setup project repo"
    assert setup_repo.status == TaskStatusEnum.TODO
    assert setup_repo.priority == TaskPriorityEnum.HIGH
    assert (setup_repo.creator_id, setup_repo.assignee_id) == (alice_id, bob_id)
    assert setup_repo.parent_id is None

    assert login_page.title == "Build login page"
    assert login_page.status == TaskStatusEnum.IN_PROGRESS
    assert login_page.priority == TaskPriorityEnum.MEDIUM
    assert (login_page.creator_id, login_page.assignee_id) == (bob_id, bob_id)
    assert login_page.parent_id == setup_repo.id
    assert login_page.due_date is None


def test_first_task_is_due_seven_days_after_creation(session: Session):
    result = seed_sample_data(session)
    setup_repo = session.get(Task, result.task_ids[0])

    assert DUE_DATE_OFFSET == timedelta(days=7)
    drift = (setup_repo.due_date - setup_repo.created_at) - DUE_DATE_OFFSET
    assert abs(drift) < timedelta(seconds=5)


def test_tasks_are_linked_to_their_tags(session: Session):
    result = seed_sample_data(session)

    links = {(link.task_id, link.tag_id) for link in session.exec(select(TaskTagLink)).all()}
    assert links == {
        (result.task_ids[0], result.tag_ids["Urgent"]),
        (result.task_ids[1], result.tag_ids["Frontend"]),
    }


def test_comment_targets_second_task_and_first_person(session: Session):
    result = seed_sample_data(session)

    comment = session.get(Comment, result.comment_ids[0])
    assert comment.content == "Make sure to include password reset link!"
    assert comment.task_id == result.task_ids[1]
    assert comment.author_id == result.person_ids["alice@example.com"]


def test_create_task_with_unknown_tag_rolls_back_the_task(session: Session):
    person = Person(email="carol@example.com", name="Carol", role=PersonRoleEnum.manager)
    session.add(person)
    session.commit()
    session.refresh(person)

    with pytest.raises(IntegrityError):
        create_task(
            session,
            title="Orphan",
            description=None,
            status=TaskStatusEnum.TODO,
            priority=TaskPriorityEnum.LOW,
            creator_id=person.id,
            assignee_id=None,
            tag_ids=[999],
        )
    session.rollback()

    assert _count(session, Task) == 0
    assert _count(session, TaskTagLink) == 0


def test_run_seed_closes_session_after_success(engine):
    sessions = []

    def factory():
        sessions.append(CountingSession(engine))
        return sessions[-1]

    result = run_seed(factory)

    assert len(result.task_ids) == 2
    assert len(sessions) == 1
    assert sessions[0].close_calls == 1
    assert sessions[0].commit_calls == 7


@pytest.mark.parametrize("fail_at_commit", range(1, 8))
def test_run_seed_propagates_failure_and_closes_session_once(engine, fail_at_commit):
    sessions = []

    def factory():
        sessions.append(CountingSession(engine, fail_at_commit=fail_at_commit))
        return sessions[-1]

    with pytest.raises(OperationalError):
        run_seed(factory)

    assert len(sessions) == 1
    assert sessions[0].close_calls == 1
    # Sin reintentos: el primer error corta la secuencia
    assert sessions[0].commit_calls == fail_at_commit


def test_failure_keeps_rows_committed_before_it(engine):
    # Falla al insertar la primera tarea (quinto commit)
    with pytest.raises(OperationalError):
        run_seed(lambda: CountingSession(engine, fail_at_commit=5))

    with Session(engine) as session:
        assert _count(session, Person) == 2
        assert _count(session, Tag) == 2
        assert _count(session, Task) == 0
        assert _count(session, TaskTagLink) == 0


def test_row_messages_stay_below_info(session: Session, caplog):
    with caplog.at_level(logging.INFO, logger="taskboard.seed"):
        seed_sample_data(session)

    assert [record for record in caplog.records if record.name == "taskboard.seed"] == []
