# tests/conftest.py
from __future__ import annotations

import io
from collections.abc import Callable, Generator, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from PIL import Image as PILImage
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from picvoter.core.context import AppContext
from picvoter.core.settings import Settings
from picvoter.db.session import Base, build_session_factory
from picvoter.main import create_app
from picvoter.models import Image
from picvoter.services.ranking import rank

TEST_DB_URL = "sqlite://"


class FixedDraw:
    """Injectable uniform draw returning a settable value."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def __call__(self) -> float:
        return self.value


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        PICVOTER_STORAGE_DIR=tmp_path / "storage",
        DATABASE_URL=TEST_DB_URL,
        PICVOTER_IMPORT_ENABLED=False,
        PICVOTER_IMPORT_INTERVAL_SECONDS=0.1,
    )


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def context(settings: Settings, engine: Engine) -> AppContext:
    settings.ensure_storage_dirs()
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=build_session_factory(engine),
    )


@pytest.fixture()
def db_session(context: AppContext) -> Iterator[Session]:
    session = context.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def draw() -> FixedDraw:
    return FixedDraw(0.0)


@pytest.fixture()
def app(context: AppContext, draw: FixedDraw) -> FastAPI:
    return create_app(context=context, draw=draw)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def image_bytes() -> Callable[..., bytes]:
    """Encode a solid-colour image; distinct colours give distinct bytes."""

    def _make(
        color: tuple[int, int, int] = (200, 40, 40),
        size: tuple[int, int] = (64, 48),
        fmt: str = "PNG",
    ) -> bytes:
        buffer = io.BytesIO()
        PILImage.new("RGB", size, color).save(buffer, format=fmt)
        return buffer.getvalue()

    return _make


@pytest.fixture()
def make_image(db_session: Session) -> Callable[..., Image]:
    """Insert an image row with the given tallies, ranked consistently."""
    counter = iter(range(1, 10_000))

    def _make(upvotes: int = 0, downvotes: int = 0, **overrides: object) -> Image:
        n = next(counter)
        ranking = rank(upvotes, downvotes)
        fields: dict[str, object] = {
            "id": f"01TEST{n:020d}",
            "filename": f"image-{n}.png",
            "hash": str(1_000_000 + n),
            "upvotes": upvotes,
            "downvotes": downvotes,
            "sorting": ranking.sorting,
            "confidence": ranking.confidence,
        }
        fields.update(overrides)
        image = Image(**fields)
        db_session.add(image)
        db_session.commit()
        return image

    return _make
