"""HTTP layer: estate, tree and drone-plan endpoints served with Flask."""

from __future__ import annotations

import functools
import json
import logging
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Flask, request

from droneplan.distance import Tree, calculate_drone_distance, max_distance_drone
from droneplan.repository import EstateDetail, RepositoryError, RepositoryProtocol

logger = logging.getLogger(__name__)

Response = tuple[dict[str, Any], int]

_F = TypeVar("_F", bound=Callable[..., Response])

_INVALID_PAYLOAD = "Invalid request payload"
_INVALID_ID = "Invalid format for parameter id"


class _Failure(Exception):
    """Aborts a request with an error status and message."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


def _responds(method: _F) -> _F:
    """Turn a raised ``_Failure`` into an error response."""

    @functools.wraps(method)
    def wrapper(*args: Any, **kwargs: Any) -> Response:
        try:
            return method(*args, **kwargs)
        except _Failure as failure:
            return {"message": failure.message}, failure.status

    return wrapper  # type: ignore[return-value]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _int_field(payload: Any, key: str) -> int:
    """Read an integer field from a JSON object; a missing field reads as 0."""
    if not isinstance(payload, dict):
        raise _Failure(400, _INVALID_PAYLOAD)
    value = payload.get(key, 0)
    if not _is_int(value):
        raise _Failure(400, _INVALID_PAYLOAD)
    return value


def _estate_uuid(value: uuid.UUID | str) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError as exc:
        raise _Failure(400, _INVALID_ID) from exc


def _plan_trees(estate: EstateDetail) -> list[Tree]:
    return [Tree(tree.x, tree.y, tree.height) for tree in estate.trees]


class Server:
    """Request handlers backed by a repository."""

    def __init__(self, repository: RepositoryProtocol) -> None:
        self.repository = repository

    def _estate(self, estate_id: uuid.UUID | str) -> EstateDetail:
        key = _estate_uuid(estate_id)
        try:
            return self.repository.get_detail_estate(key)
        except RepositoryError as exc:
            logger.info("Failed to get estate %s: %s", key, exc)
            raise _Failure(500, "Failed to get estate details") from exc

    @_responds
    def get_hello(self, user_id: int) -> Response:
        """Greet a user by numeric id."""
        return {"message": f"Hello User {user_id}"}, 200

    @_responds
    def post_estate(self, payload: Any) -> Response:
        """Create an estate from a ``{"width": .., "length": ..}`` object."""
        width = _int_field(payload, "width")
        length = _int_field(payload, "length")
        if width <= 0 or length <= 0:
            raise _Failure(400, "Width and length must be greater than 0")
        logger.debug("Creating estate width=%d length=%d", width, length)
        try:
            estate_id = self.repository.create_estate(width, length)
        except RepositoryError as exc:
            logger.info("Failed to create estate: %s", exc)
            raise _Failure(500, "Failed to create estate") from exc
        return {"id": str(estate_id)}, 200

    @_responds
    def post_estate_tree(self, estate_id: uuid.UUID | str, payload: Any) -> Response:
        """Plant a tree on an estate from a ``{"x", "y", "height"}`` object."""
        x = _int_field(payload, "x")
        y = _int_field(payload, "y")
        height = _int_field(payload, "height")
        if x <= 0 or y <= 0 or height <= 0:
            raise _Failure(
                400, "X and Y coordinates and Height must be greater than or equal to 0"
            )
        estate = self._estate(estate_id)
        if x > estate.length or y > estate.width:
            raise _Failure(
                400,
                f"Tree coordinates ({x}, {y}) are out of bounds for estate "
                f"({estate.width}, {estate.length})",
            )
        if any(tree.x == x and tree.y == y for tree in estate.trees):
            raise _Failure(400, f"Tree already exists at coordinates ({x}, {y})")
        try:
            tree_id = self.repository.create_tree(estate.id, x, y, height)
        except RepositoryError as exc:
            logger.info("Failed to create tree: %s", exc)
            raise _Failure(500, "Failed to create tree") from exc
        return {"id": str(tree_id)}, 200

    @_responds
    def get_estate_stats(self, estate_id: uuid.UUID | str) -> Response:
        """Return count, min, max and median of the tree heights on an estate."""
        estate = self._estate(estate_id)
        heights = [tree.height for tree in estate.trees]
        if not heights:
            return {"count": 0, "min": 0, "max": 0, "median": 0}, 200
        count = len(heights)
        # The reported median is the first height plus the sum, over the count.
        median = (heights[0] + sum(heights)) // count
        return {
            "count": count,
            "min": min(heights),
            "max": max(heights),
            "median": median,
        }, 200

    @_responds
    def get_drone_plan(self, estate_id: uuid.UUID | str) -> Response:
        """Return the total distance needed to survey an estate."""
        estate = self._estate(estate_id)
        total = calculate_drone_distance(estate.length, estate.width, _plan_trees(estate))
        return {"totalDistance": total}, 200

    @_responds
    def get_drone_plan_max(
        self, estate_id: uuid.UUID | str, max_distance: int
    ) -> Response:
        """Return where the drone has to rest when limited to ``max_distance``."""
        estate = self._estate(estate_id)
        x, y = max_distance_drone(
            estate.length, estate.width, _plan_trees(estate), max_distance
        )
        if not (1 <= x <= estate.length and 1 <= y <= estate.width):
            raise _Failure(
                400,
                f"Last rest coordinates ({x}, {y}) are out of bounds for estate "
                f"({estate.width}, {estate.length})",
            )
        return {"maxDistance": max_distance, "rest": {"x": x, "y": y}}, 200


def _json_body() -> Any:
    """Return the request's JSON body: ``{}`` when empty, ``None`` when malformed."""
    raw = request.get_data()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _int_query(name: str) -> int | None:
    value = request.args.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise _Failure(400, f"Invalid format for parameter {name}") from exc


def create_app(repository: RepositoryProtocol) -> Flask:
    """Build the Flask application serving the estate API."""
    app = Flask(__name__)
    server = Server(repository)

    @app.get("/hello")
    @_responds
    def hello() -> Response:
        user_id = _int_query("id")
        if user_id is None:
            raise _Failure(400, "Query argument id is required, but not found")
        return server.get_hello(user_id)

    @app.post("/estate")
    def post_estate() -> Response:
        return server.post_estate(_json_body())

    @app.post("/estate/<estate_id>/tree")
    def post_estate_tree(estate_id: str) -> Response:
        return server.post_estate_tree(estate_id, _json_body())

    @app.get("/estate/<estate_id>/stats")
    def estate_stats(estate_id: str) -> Response:
        return server.get_estate_stats(estate_id)

    @app.get("/estate/<estate_id>/drone-plan")
    @_responds
    def drone_plan(estate_id: str) -> Response:
        max_distance = _int_query("max_distance")
        if max_distance is None:
            return server.get_drone_plan(estate_id)
        return server.get_drone_plan_max(estate_id, max_distance)

    return app