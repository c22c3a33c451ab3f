from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _clean_name(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("name cannot be empty or whitespace only")
    return v.strip()


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v) if v is not None else v
