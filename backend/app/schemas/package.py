"""
Package tracking Pydantic schemas.

Defines request and response models for the tracking endpoints.
"""

from pydantic import BaseModel, Field


class PackageRegister(BaseModel):
    """Schema for registering a new package."""
    description: str = Field(default="", description="Free-form package description")


class StatusUpdate(BaseModel):
    """Schema for recording a new package status."""
    id: str = Field(..., description="Package ID")
    status: str = Field(..., description="New status label (any value accepted)")


class PackageResponse(BaseModel):
    """Schema for package response."""
    id: str
    status: str
    description: str
    timestamp: str

    class Config:
        from_attributes = True


class StatusHistoryResponse(BaseModel):
    """Schema for one status history entry."""
    id: str
    package_id: str
    status: str
    timestamp: str

    class Config:
        from_attributes = True
