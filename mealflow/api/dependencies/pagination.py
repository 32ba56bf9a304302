from fastapi import Query
from pydantic import BaseModel


class PaginationParams(BaseModel):
    page: int
    limit: int


def get_pagination_params(
    page: int = Query(1, ge=1, description="Page number (starting at 1)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
) -> PaginationParams:
    """
    Returns an object with page and limit fields for pagination.
    """
    return PaginationParams(page=page, limit=limit)
