"""
Database initialization and seeding.

This script:
- Creates all database tables
- Optionally adds sample labels and todos for development
- Can reset the database (drop and recreate)

Usage:
    # Create tables
    python -m todolabels.database.init_db

    # Reset database (drops all tables and recreates)
    python -m todolabels.database.init_db --reset

    # Add sample data for testing
    python -m todolabels.database.init_db --sample-data
"""

import argparse
import asyncio

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine

from todolabels.config import settings
from todolabels.core.errors import DuplicateError
from todolabels.core.log import configure_logging
from todolabels.database.session import (
    create_all_tables,
    create_db_engine,
    create_session_factory,
    drop_all_tables,
    transaction,
)
from todolabels.models import LabelRow, TodoLabelRow, TodoRow
from todolabels.repositories.database import DatabaseLabelRepository, DatabaseTodoRepository
from todolabels.schemas import CreateLabel, CreateTodo, UpdateTodo

SAMPLE_LABELS = ["home", "work", "errand"]

SAMPLE_TODOS = [
    ("Buy milk", ["home", "errand"], False),
    ("Write weekly report", ["work"], True),
    ("Call the plumber", [], False),
]


async def create_tables(engine: AsyncEngine, reset: bool = False) -> None:
    """
    Create all database tables.

    Args:
        engine: Engine to create the tables with
        reset: If True, drop existing tables first
    """
    if reset:
        print("Dropping existing tables...")
        await drop_all_tables(engine)
        print("Tables dropped")

    print("Creating database tables...")
    await create_all_tables(engine)
    print("Tables created")


async def seed_sample_data(session_factory) -> None:
    """
    Seed sample labels and todos through the repositories.

    Labels that already exist are reused, so running twice only adds todos.
    """
    print("\nSeeding sample data...")
    labels = DatabaseLabelRepository(session_factory)
    todos = DatabaseTodoRepository(session_factory)

    label_ids = {}
    for name in SAMPLE_LABELS:
        try:
            label = await labels.create(CreateLabel(name=name))
            label_ids[name] = label.id
            print(f"  Created label: {label.name} (id={label.id})")
        except DuplicateError as exc:
            label_ids[name] = exc.existing_id
            print(f"  Label '{name}' already exists (id={exc.existing_id})")

    for text, names, completed in SAMPLE_TODOS:
        todo = await todos.create(
            CreateTodo(text=text, label_ids={label_ids[name] for name in names})
        )
        if completed:
            todo = await todos.update(todo.id, UpdateTodo(completed=True))
        print(f"  Created todo: {todo.text} (id={todo.id}, labels={[l.name for l in todo.labels]})")

    print("Sample data seeded")


async def print_database_status(session_factory) -> None:
    """Print current row counts."""
    print("\n" + "=" * 60)
    print("Database Status")
    print("=" * 60)

    async with transaction(session_factory) as session:
        for title, model in (("Todos", TodoRow), ("Labels", LabelRow), ("Links", TodoLabelRow)):
            count = await session.scalar(select(func.count()).select_from(model))
            print(f"  {title + ':':<8} {count}")

    print("=" * 60)


async def initialize_database(reset: bool = False, sample_data: bool = False) -> None:
    """
    Initialize the database at settings.database_url.

    Args:
        reset: Drop existing tables before creating
        sample_data: Add sample data for testing
    """
    engine = create_db_engine()
    session_factory = create_session_factory(engine)
    try:
        await create_tables(engine, reset=reset)
        if sample_data:
            await seed_sample_data(session_factory)
        await print_database_status(session_factory)
    finally:
        await engine.dispose()

    print("\nDatabase initialization complete!")


def main():
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Initialize and seed the todo/label database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create the tables
  python -m todolabels.database.init_db

  # Full reset with sample data
  python -m todolabels.database.init_db --reset --sample-data
        """
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing tables before creating (WARNING: deletes all data!)"
    )

    parser.add_argument(
        "--sample-data",
        action="store_true",
        help="Add sample labels and todos"
    )

    parser.add_argument(
        "--yes",
        action="store_true",
        help="Do not ask for confirmation before --reset"
    )

    args = parser.parse_args()
    configure_logging(settings.log_level)

    # Confirm reset if requested
    if args.reset and not args.yes:
        print("WARNING: This will DELETE ALL DATA in the database!")
        response = input("Are you sure? Type 'yes' to continue: ")
        if response.lower() != 'yes':
            print("Aborted")
            return

    asyncio.run(initialize_database(reset=args.reset, sample_data=args.sample_data))


if __name__ == "__main__":
    main()
