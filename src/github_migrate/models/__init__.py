"""Data models for GitHub entities."""

from .repository import RepoRef, RepositoryCreate
from .label import Label
from .issue import Issue
from .project import Project, SourceProject

__all__ = [
    'RepoRef',
    'RepositoryCreate',
    'Label',
    'Issue',
    'Project',
    'SourceProject',
]
