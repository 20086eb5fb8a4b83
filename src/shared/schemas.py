from typing import Generic, Literal, Optional, TypeVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.shared.exceptions import CatalogError

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base for response payloads: snake_case attributes, camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ErrorDetail(CamelModel):
    type: str
    message: str

    @classmethod
    def from_exception(cls, exc: CatalogError) -> "ErrorDetail":
        return cls(type=exc.error_type, message=exc.message)


class ApiResponse(CamelModel, Generic[DataT]):
    success: Literal[True] = True
    data: DataT


class ErrorResponse(CamelModel):
    success: Literal[False] = False
    error: ErrorDetail
    data: None = None
