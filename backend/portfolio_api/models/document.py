"""
Portfolio API — Document ORM Models
=====================================

What:  ORM models for the three collections: articles, projects, contacts.
How:   Each collection is a table with a UUID primary key generated on insert,
       a UTC created_at timestamp, and (for articles and projects) a JSON
       `attributes` column holding the schemaless part of the document.
Who:   Queried by the services; read by Alembic and the seed command.

Document shape:
    to_document() flattens a row into the JSON object the API returns:
        {**attributes, "id": "<uuid>", <named columns>}
    Named columns always win over same-named keys inside `attributes`.

Store order:
    Rows are listed by created_at ascending, ties broken by id
    (see STORE_ORDER in the services).
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_api.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentMixin:
    """Columns shared by every collection."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Store-assigned document identifier",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this document was inserted (UTC)",
    )


class Article(DocumentMixin, Base):
    """
    A blog article shown on the portfolio site.

    Articles are written by an out-of-band process (see portfolio_api.seed);
    the API only reads them. `title` and `content` are real columns because
    search matches against them.
    """

    __tablename__ = "articles"

    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Schemaless remainder of the document (author, tags, image, ...)
    attributes: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index("idx_articles_created_at", "created_at"),
    )

    def to_document(self) -> Dict[str, Any]:
        document = dict(self.attributes or {})
        document.update(id=str(self.id), title=self.title, content=self.content)
        return document

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, title='{self.title}')>"


class Project(DocumentMixin, Base):
    """A portfolio project. Entirely schemaless apart from its identifier."""

    __tablename__ = "projects"

    attributes: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index("idx_projects_created_at", "created_at"),
    )

    def to_document(self) -> Dict[str, Any]:
        document = dict(self.attributes or {})
        document["id"] = str(self.id)
        return document

    def __repr__(self) -> str:
        return f"<Project(id={self.id})>"


class ContactMessage(DocumentMixin, Base):
    """
    A message submitted through the contact form.

    Lifecycle:
        Inserted by POST /contact with a server-assigned created_at.
        Never read back, modified or deleted through the API.
    """

    __tablename__ = "contacts"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    def to_document(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<ContactMessage(id={self.id}, email='{self.email}')>"
