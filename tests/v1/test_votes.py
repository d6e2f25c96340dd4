"""Tests for vote-related endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from picvoter.services.ranking import rank


def test_cast_upvote(client: TestClient, make_image) -> None:
    image = make_image()

    response = client.post("/api/v1/votes/", json={"id": image.id, "value": 1})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True}

    data = client.get(f"/api/v1/images/{image.id}").json()
    assert (data["upvotes"], data["downvotes"]) == (1, 0)
    assert data["sorting"] == pytest.approx(rank(1, 0).sorting)
    assert data["confidence"] == pytest.approx(rank(1, 0).confidence)


def test_cast_downvote(client: TestClient, make_image) -> None:
    image = make_image()

    response = client.post("/api/v1/votes/", json={"id": image.id, "value": -1})

    assert response.status_code == status.HTTP_200_OK
    data = client.get(f"/api/v1/images/{image.id}").json()
    assert (data["upvotes"], data["downvotes"]) == (0, 1)
    assert data["sorting"] == -1


def test_vote_invalid_value(client: TestClient, make_image) -> None:
    image = make_image()

    response = client.post("/api/v1/votes/", json={"id": image.id, "value": 2})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = client.get(f"/api/v1/images/{image.id}").json()
    assert (data["upvotes"], data["downvotes"]) == (0, 0)


def test_vote_nonexistent_image(client: TestClient) -> None:
    response = client.post("/api/v1/votes/", json={"id": "unknown-id", "value": 1})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/v1/system/stats").json()["images"] == 0


def test_vote_missing_fields(client: TestClient) -> None:
    response = client.post("/api/v1/votes/", json={"value": 1})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_vote_store_failure_is_server_error(client: TestClient, make_image, mocker) -> None:
    image = make_image()
    mocker.patch(
        "picvoter.services.vote_service.ImageRepository.save_tally",
        side_effect=OperationalError("UPDATE", {}, Exception("database is locked")),
    )

    response = client.post("/api/v1/votes/", json={"id": image.id, "value": 1})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR


@pytest.mark.parametrize("value", [1.5, -0.5, 1e9])
def test_vote_fractional_value_is_invalid(client: TestClient, make_image, value) -> None:
    image = make_image()

    response = client.post("/api/v1/votes/", json={"id": image.id, "value": value})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = client.get(f"/api/v1/images/{image.id}").json()
    assert (data["upvotes"], data["downvotes"]) == (0, 0)
