"""Explicit application context shared by the watcher and request handlers."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from picvoter.core.settings import Settings
from picvoter.db.session import build_engine, build_session_factory


@dataclass
class AppContext:
    """Configuration plus the pooled session factory.

    One instance is built at startup and handed to every component that
    touches storage; nothing reads these from module globals.
    """

    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        """Build the engine and session factory for ``settings``."""
        engine = build_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
        )

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
