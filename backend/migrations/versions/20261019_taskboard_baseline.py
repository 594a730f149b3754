"""taskboard baseline: persons, tags, tasks, comments

Revision ID: 20261019_taskboard_baseline
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision: str = "20261019_taskboard_baseline"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


person_role = sa.Enum("manager", "developer", "designer", name="personroleenum")
task_status = sa.Enum("TODO", "IN_PROGRESS", "DONE", name="taskstatusenum")
task_priority = sa.Enum("LOW", "MEDIUM", "HIGH", name="taskpriorityenum")


def upgrade() -> None:
    bind = op.get_bind()
    existing_tables = set(inspect(bind).get_table_names())

    if "person" not in existing_tables:
        op.create_table(
            "person",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("email", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("role", person_role, nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_person_email"), "person", ["email"], unique=True)

    if "tag" not in existing_tables:
        op.create_table(
            "tag",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("color", sa.String(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_tag_name"), "tag", ["name"], unique=True)

    if "task" not in existing_tables:
        op.create_table(
            "task",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("title", sa.String(), nullable=False),
            sa.Column("description", sa.String(), nullable=True),
            sa.Column("status", task_status, nullable=False),
            sa.Column("priority", task_priority, nullable=False),
            sa.Column("creator_id", sa.Integer(), nullable=False),
            sa.Column("assignee_id", sa.Integer(), nullable=True),
            sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
            sa.Column("parent_id", sa.Integer(), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(["creator_id"], ["person.id"], ),
            sa.ForeignKeyConstraint(["assignee_id"], ["person.id"], ),
            sa.ForeignKeyConstraint(["parent_id"], ["task.id"], ),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_task_status"), "task", ["status"], unique=False)
        op.create_index(op.f("ix_task_creator_id"), "task", ["creator_id"], unique=False)
        op.create_index(op.f("ix_task_assignee_id"), "task", ["assignee_id"], unique=False)
        op.create_index(op.f("ix_task_parent_id"), "task", ["parent_id"], unique=False)

    if "tasktaglink" not in existing_tables:
        op.create_table(
            "tasktaglink",
            sa.Column("task_id", sa.Integer(), nullable=False),
            sa.Column("tag_id", sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(["task_id"], ["task.id"], ),
            sa.ForeignKeyConstraint(["tag_id"], ["tag.id"], ),
            sa.PrimaryKeyConstraint("task_id", "tag_id"),
        )

    if "comment" not in existing_tables:
        op.create_table(
            "comment",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("content", sa.String(), nullable=False),
            sa.Column("task_id", sa.Integer(), nullable=False),
            sa.Column("author_id", sa.Integer(), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(["task_id"], ["task.id"], ),
            sa.ForeignKeyConstraint(["author_id"], ["person.id"], ),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_comment_task_id"), "comment", ["task_id"], unique=False)
        op.create_index(op.f("ix_comment_author_id"), "comment", ["author_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_comment_author_id"), table_name="comment")
    op.drop_index(op.f("ix_comment_task_id"), table_name="comment")
    op.drop_table("comment")
    op.drop_table("tasktaglink")
    op.drop_index(op.f("ix_task_parent_id"), table_name="task")
    op.drop_index(op.f("ix_task_assignee_id"), table_name="task")
    op.drop_index(op.f("ix_task_creator_id"), table_name="task")
    op.drop_index(op.f("ix_task_status"), table_name="task")
    op.drop_table("task")
    op.drop_index(op.f("ix_tag_name"), table_name="tag")
    op.drop_table("tag")
    op.drop_index(op.f("ix_person_email"), table_name="person")
    op.drop_table("person")

    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        task_priority.drop(bind, checkfirst=True)
        task_status.drop(bind, checkfirst=True)
        person_role.drop(bind, checkfirst=True)
