"""Configuration management for GitHub Migration Tool."""

from typing import Optional
from pathlib import Path
import os

from pydantic import BaseModel, Field, validator
import yaml
from dotenv import load_dotenv

TOKEN_ENV_VAR = 'GITHUB_TOKEN'


class GitHubInstanceConfig(BaseModel):
    """Connection settings for a GitHub API endpoint."""

    api_url: str = Field(
        default='https://api.github.com', description='GitHub REST API base URL'
    )
    token: Optional[str] = Field(default=None, description='Personal access token')
    api_version: str = Field(
        default='2022-11-28', description='Value of the X-GitHub-Api-Version header'
    )
    timeout: Optional[int] = Field(
        default=None, description='Request timeout in seconds, transport default if unset'
    )

    @validator('api_url')
    def validate_api_url(cls, v):
        """Validate API URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('URL must start with http:// or https://')
        return v.rstrip('/')

    @validator('timeout')
    def validate_timeout(cls, v):
        """Validate timeout is positive."""
        if v is not None and v <= 0:
            raise ValueError('Timeout must be positive')
        return v

    @property
    def graphql_url(self) -> str:
        """GraphQL endpoint for this API base URL."""
        return f'{self.api_url}/graphql'


class APISettings(BaseModel):
    """Optional ``github:`` section of the migration file."""

    api_url: str = Field(
        default='https://api.github.com', description='GitHub REST API base URL'
    )
    api_version: str = Field(default='2022-11-28', description='REST API version')
    timeout: Optional[int] = Field(
        default=None, description='Request timeout in seconds, transport default if unset'
    )

    class Config:
        """Pydantic configuration."""

        extra = 'forbid'
        frozen = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default='INFO', description='Log level')
    file: Optional[str] = Field(default=None, description='Log file path')

    @validator('level')
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()

    class Config:
        """Pydantic configuration."""

        extra = 'forbid'
        frozen = True


class MigrationConfig(BaseModel):
    """What to copy and where to copy it.

    Loaded once from YAML and never mutated during a run.
    """

    source_organization: str = Field(..., description='Organization owning the source repo')
    source_repo: str = Field(..., description='Source repository name')
    source_project_number: int = Field(
        ..., description='Number of the organization project to copy'
    )
    dest_organization: str = Field(..., description='Destination organization')
    dest_repo: str = Field(..., description='Destination repository name')
    dest_project_name: str = Field(..., description='Title for the copied project')

    github: APISettings = Field(
        default_factory=APISettings, description='GitHub API settings'
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description='Logging settings'
    )

    class Config:
        """Pydantic configuration."""

        extra = 'forbid'  # Don't allow extra fields
        frozen = True

    @validator(
        'source_organization',
        'source_repo',
        'dest_organization',
        'dest_repo',
        'dest_project_name',
    )
    def validate_not_blank(cls, v):
        """Names must not be blank."""
        if not v or not v.strip():
            raise ValueError('Value must not be empty')
        return v.strip()

    @validator('source_project_number')
    def validate_project_number(cls, v):
        """Project numbers start at 1."""
        if v <= 0:
            raise ValueError('source_project_number must be a positive integer')
        return v

    @classmethod
    def from_file(cls, config_path: str) -> 'MigrationConfig':
        """Load configuration from YAML file."""
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f'Configuration file not found: {config_path}')

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)

        if not isinstance(config_data, dict):
            raise ValueError(f'Configuration file must contain a mapping: {config_path}')

        return cls(**config_data)

    def instance_config(self, token: str) -> GitHubInstanceConfig:
        """Build client settings for this migration with the given token."""
        return GitHubInstanceConfig(
            api_url=self.github.api_url,
            token=token,
            api_version=self.github.api_version,
            timeout=self.github.timeout,
        )


def resolve_token(token: Optional[str] = None, token_env: bool = False) -> str:
    """Pick the credential from the CLI flags or the environment.

    Args:
        token: Value of ``--token``
        token_env: Whether ``--token-env`` was given

    Returns:
        The token to authenticate with

    Raises:
        ValueError: If both sources were requested or no token is available
    """
    if token and token_env:
        raise ValueError('--token and --token-env are mutually exclusive')

    if token:
        return token

    load_dotenv()
    env_token = os.getenv(TOKEN_ENV_VAR)
    if not env_token:
        if token_env:
            raise ValueError(f'{TOKEN_ENV_VAR} is not set')
        raise ValueError(f'No token provided. Use --token, --token-env or set {TOKEN_ENV_VAR}')
    return env_token


def create_template(output_path: str) -> None:
    """Create a configuration template file."""
    template_config = {
        'source_organization': 'source-org',
        'source_repo': 'source-repo',
        'source_project_number': 1,
        'dest_organization': 'dest-org',
        'dest_repo': 'dest-repo',
        'dest_project_name': 'Migrated project',
        'github': {
            'api_url': 'https://api.github.com',
            'api_version': '2022-11-28',
        },
        'logging': {
            'level': 'INFO',
            'file': 'migration.log',
        },
    }

    config_file = Path(output_path)
    config_file.parent.mkdir(parents=True, exist_ok=True)

    with open(config_file, 'w', encoding='utf-8') as f:
        yaml.dump(
            template_config, f, default_flow_style=False, indent=2, sort_keys=False
        )
