"""Shared FastAPI dependencies for the v1 API."""
from __future__ import annotations

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from picvoter.core.context import AppContext
from picvoter.core.settings import Settings
from picvoter.db.session import get_db


def get_context(request: Request) -> AppContext:
    """Return the application context built at startup."""
    return request.app.state.context


def get_settings(context: Annotated[AppContext, Depends(get_context)]) -> Settings:
    """Return the settings carried by the application context."""
    return context.settings


def get_draw(request: Request) -> Callable[[], float]:
    """Return the uniform draw used by the image selector."""
    return request.app.state.draw


SessionDep = Annotated[Session, Depends(get_db)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
