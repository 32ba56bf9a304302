from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RWSchema(BaseModel):
    """
    Base for every API schema.

    Reads from ORM objects and speaks camelCase on the wire
    (``prep_time`` <-> ``prepTime``); snake_case input is accepted as well.
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(RWSchema):
    message: str


class PaginationInfo(RWSchema):
    """
    Page metadata returned next to a list.

    Attributes:
    - total (int): number of records matching the filters.
    - page (int): current page, starting at 1.
    - limit (int): page size.
    - total_pages (int): number of pages.
    """
    total: int
    page: int
    limit: int
    total_pages: int = Field(..., ge=0)

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PaginationInfo":
        return cls(
            total=total,
            page=page,
            limit=limit,
            total_pages=(total // limit + int(total % limit != 0)),
        )
