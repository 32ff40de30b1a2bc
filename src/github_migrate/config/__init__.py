"""Configuration loading."""

from .config import (
    GitHubInstanceConfig,
    MigrationConfig,
    create_template,
    resolve_token,
)

__all__ = ['GitHubInstanceConfig', 'MigrationConfig', 'create_template', 'resolve_token']
