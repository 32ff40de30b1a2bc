"""Repository reference model."""

from typing import Optional

from pydantic import BaseModel, Field


class RepoRef(BaseModel):
    """A GitHub repository addressed by owner and name."""

    owner: str = Field(..., description='Owning organization or user login')
    name: str = Field(..., description='Repository name')
    node_id: Optional[str] = Field(
        default=None, description='GraphQL node ID, once resolved'
    )

    @property
    def full_name(self) -> str:
        return f'{self.owner}/{self.name}'

    def __str__(self) -> str:
        return self.full_name


class RepositoryCreate(BaseModel):
    """Body for ``POST /orgs/{org}/repos``."""

    name: str = Field(..., description='Repository name')
    private: bool = Field(default=True, description='Create as private')
    has_issues: bool = Field(default=True, description='Enable issues')
    has_projects: bool = Field(default=True, description='Enable projects')
