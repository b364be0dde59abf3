"""FastAPI dependencies."""

from fastapi import Request

from mealbook.store import Store


def get_store(request: Request) -> Store:
    """Return the store constructed by the application factory."""
    return request.app.state.store
