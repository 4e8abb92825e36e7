"""
Portfolio API — Seed Command
==============================

What:  Inserts starter content so a fresh install has something to show.
How:   Connects with the same settings as the server, optionally creates
       missing tables, and inserts the starter article unless an article with
       the same title already exists.
Who:   Run by hand after migrations:

           portfolio-seed [--create-tables]
           python -m portfolio_api.seed [--create-tables]

Exit status is non-zero when configuration is missing or the store is
unreachable.
"""

import asyncio
import logging
from typing import Annotated

import pydantic
import typer
from sqlalchemy import select

from portfolio_api.config import get_settings
from portfolio_api.database import Database
from portfolio_api.main import setup_logging
from portfolio_api.models.document import Article

logger = logging.getLogger(__name__)

STARTER_ARTICLES = [
    {"title": "First Article", "content": "This is the first article."},
]

app = typer.Typer(
    name="portfolio-seed",
    help="Insert starter portfolio content.",
    add_completion=False,
)


async def seed(database: Database, create_tables: bool = False) -> int:
    """
    Insert the starter articles that are not present yet.

    Returns:
        Number of articles inserted.
    """
    if create_tables:
        await database.create_all()

    inserted = 0
    async with database.session_factory() as session:
        for data in STARTER_ARTICLES:
            result = await session.execute(
                select(Article.id).where(Article.title == data["title"])
            )
            if result.first() is not None:
                logger.info("Article %r already present, skipping", data["title"])
                continue
            session.add(Article(title=data["title"], content=data["content"], attributes={}))
            inserted += 1
        await session.commit()

    logger.info("Inserted %d article(s)", inserted)
    return inserted


async def _run(database: Database, create_tables: bool) -> int:
    try:
        await database.ping()
        return await seed(database, create_tables=create_tables)
    finally:
        await database.dispose()


@app.command()
def main(
    create_tables: Annotated[
        bool,
        typer.Option(
            "--create-tables",
            help="Create missing tables first (development only; use Alembic in production).",
        ),
    ] = False,
) -> None:
    """Insert the starter article into the configured store."""
    setup_logging()

    try:
        settings = get_settings()
    except pydantic.ValidationError as e:
        logger.critical("Configuration error: %s", e)
        raise typer.Exit(code=1)

    database = Database.from_settings(settings)
    try:
        inserted = asyncio.run(_run(database, create_tables))
    except Exception as e:
        logger.critical("Seeding failed: %s", e)
        raise typer.Exit(code=1)

    typer.echo(f"Inserted {inserted} article(s)")


if __name__ == "__main__":
    app()
