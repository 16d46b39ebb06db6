from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys, e.g. ``studentId``/``student_id``."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class ErrorResponse(CamelModel):
    success: bool = False
    error: str


def partial_fields(payload: BaseModel, nullable: frozenset[str] = frozenset()) -> dict:
    """Fields the client actually sent; ``null`` only clears nullable ones."""
    return {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key in nullable
    }
