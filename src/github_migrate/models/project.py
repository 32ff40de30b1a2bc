"""Organization project (Projects V2) models."""

from pydantic import BaseModel, Field


class Project(BaseModel):
    """A project owned by an organization."""

    id: str = Field(..., description='Project node ID')
    title: str = Field(..., description='Project title')


class SourceProject(BaseModel):
    """A source project together with the organization that owns it."""

    organization_id: str = Field(..., description='Owning organization node ID')
    project_id: str = Field(..., description='Project node ID')
    title: str = Field(..., description='Project title')
