"""Create articles, projects and contacts tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the three document collections served by the API.
How:   UUID primary keys assigned by the application (uuid4 on insert), JSON
       attributes for the schemaless part of articles and projects, and
       created_at indexes backing the store order used by every listing. No
       database-side UUID function is needed, so any PostgreSQL version works.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.Uuid(as_uuid=True),
        nullable=False,
        comment="Document identifier, assigned on insert",
    )


def _created_at_column() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
        comment="When this document was inserted (UTC)",
    )


def upgrade() -> None:
    """Create the articles, projects and contacts tables with their indexes."""
    op.create_table(
        "articles",
        _id_column(),
        _created_at_column(),
        sa.Column("title", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("content", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "attributes",
            sa.JSON(),
            nullable=False,
            server_default=sa.text("'{}'"),
            comment="Schemaless remainder of the article document",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_articles_created_at", "articles", ["created_at"])

    op.create_table(
        "projects",
        _id_column(),
        _created_at_column(),
        sa.Column(
            "attributes",
            sa.JSON(),
            nullable=False,
            server_default=sa.text("'{}'"),
            comment="Project document fields",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_projects_created_at", "projects", ["created_at"])

    op.create_table(
        "contacts",
        _id_column(),
        _created_at_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop all three tables. All stored documents are lost."""
    op.drop_table("contacts")
    op.drop_index("idx_projects_created_at", table_name="projects")
    op.drop_table("projects")
    op.drop_index("idx_articles_created_at", table_name="articles")
    op.drop_table("articles")
