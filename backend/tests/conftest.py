from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

# Must run before ``backend`` is imported: config and engine are module level.
_TMP = Path(tempfile.mkdtemp(prefix="review-backend-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["BLOB_STORAGE_DIR"] = str(_TMP / "blobs")
os.environ["LOG_FILE"] = str(_TMP / "app.log")
os.environ["ENABLE_RATE_LIMIT"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["APP_ENV"] = "test"

import pytest  # noqa: E402

from backend.infrastructure.db import ENGINE, Base, SessionLocal, init_db  # noqa: E402
from backend.infrastructure.db.models import Label, Restaurant, Review, User  # noqa: E402


@pytest.fixture()
def database() -> Iterator[None]:
    init_db()
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)


@pytest.fixture()
def session_factory(database):
    return SessionLocal


def seed_restaurant(name: str, labels: tuple[str, ...] = ()) -> int:
    session = SessionLocal()
    try:
        restaurant = Restaurant(name=name, address="1 Main St", opening_hours="11-21", phone="02-000")
        for label_name in labels:
            label = session.query(Label).filter(Label.name == label_name).first()
            restaurant.labels.append(label or Label(name=label_name))
        session.add(restaurant)
        session.commit()
        return restaurant.id
    finally:
        session.close()


def seed_user(username: str, tag_number: int, nickname: str = "nick") -> int:
    session = SessionLocal()
    try:
        user = User(
            username=username,
            password_hash="x",
            nickname=nickname,
            tag_number=tag_number,
            tag=f"#{tag_number:02d}",
        )
        session.add(user)
        session.commit()
        return user.id
    finally:
        session.close()


def seed_reviews(user_id: int, restaurant_id: int, count: int) -> list[int]:
    session = SessionLocal()
    try:
        rows = [
            Review(user_id=user_id, restaurant_id=restaurant_id, content=f"review {i}")
            for i in range(count)
        ]
        session.add_all(rows)
        session.commit()
        return [row.id for row in rows]
    finally:
        session.close()
