"""Shared query-parameter dependencies."""

from typing import Annotated

from fastapi import Depends, Query

from app.schemas.common import PageParams


def page_params(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 100,
    sort: Annotated[str | None, Query(max_length=200)] = None,
) -> PageParams:
    """Pagination and sort options for list endpoints (`sort=-price,name`)."""
    return PageParams(page=page, limit=limit, sort=sort)


Page = Annotated[PageParams, Depends(page_params)]
