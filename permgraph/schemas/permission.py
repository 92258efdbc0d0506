"""Permission API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class PermissionCreate(BaseModel):
    """Request body for creating a permission."""

    name: str = Field(..., min_length=3, max_length=100, examples=["users.edit"])
    display_name: str = Field(..., min_length=1, max_length=200)
    module: str = Field(..., min_length=1, max_length=50, examples=["users"])
    type: str = Field(..., min_length=1, max_length=50, examples=["edit"])
    description: str | None = Field(default=None, max_length=500)
    is_system_permission: bool = False


class PermissionResponse(BaseModel):
    """Permission list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    display_name: str
    description: str | None
    module: str
    type: str
    is_system_permission: bool
