"""Image presentation endpoints for the picvoter API."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from picvoter.api.v1.dependencies import SessionDep, SettingsDep, get_draw
from picvoter.core.errors import EmptyPoolError, NotFoundError
from picvoter.repositories.image_repo import ImageRepository
from picvoter.schemas.image import ImageOut, ImageRef
from picvoter.services.sampler import ImageSelector

router = APIRouter(prefix="/images", tags=["images"])

DrawDep = Annotated[Callable[[], float], Depends(get_draw)]


@router.get("/next", response_model=list[ImageRef])
async def get_next(
    db: SessionDep,
    settings: SettingsDep,
    draw: DrawDep,
    count: Annotated[int, Query(ge=1)] = 1,
) -> list[ImageRef]:
    """Pick the next images to present, favouring those needing more votes.

    Returns ``count`` distinct images (capped by the configured maximum and
    by the pool size). An empty rotation pool is reported as 404.
    """
    selector = ImageSelector(db, threshold=settings.suppression_threshold, draw=draw)
    refs = selector.next_images(min(count, settings.max_next_count))
    if not refs:
        raise EmptyPoolError("No images available")
    return refs


@router.get("/{image_id}", response_model=ImageOut)
async def get_image(image_id: str, db: SessionDep) -> ImageOut:
    """Return an image's tallies and ranking."""
    image = ImageRepository(db).get_by_id(image_id)
    if image is None:
        raise NotFoundError(f"Image {image_id!r} not found")
    return ImageOut.model_validate(image)
