"""Seed script for local development data."""

from __future__ import annotations

from random import choice, randint

from faker import Faker
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from packages.db.base import Base, get_engine
from packages.db.models import Child, Parent

fake = Faker()


def seed_parents(session: Session, count: int = 30) -> list[Parent]:
    """Create parents, each pointing at one created before it (if any)."""
    parents: list[Parent] = []
    for _ in range(count):
        parent = Parent(
            name=fake.name(),
            # Mixed case so case-insensitive sorts differ from plain ones
            field_1=choice([str.lower, str.upper, str.title])(fake.word()),
            field_2=randint(0, 1000),
            parent=choice(parents) if parents else None,
        )
        parents.append(parent)
    session.add_all(parents)
    session.flush()
    return parents


def seed_children(session: Session, parents: list[Parent], count: int = 60) -> None:
    children = [Child(name=fake.first_name(), parent=choice(parents)) for _ in range(count)]
    session.add_all(children)


def seed(engine: Engine) -> None:
    """Create tables and fill them with fake data."""
    Base.metadata.create_all(engine)

    with Session(engine) as session:
        try:
            parents = seed_parents(session)
            seed_children(session, parents)
            session.commit()
        except Exception:
            session.rollback()
            raise


def main() -> None:
    seed(get_engine())
    print("Seeded database with fake data.")


if __name__ == "__main__":
    main()
