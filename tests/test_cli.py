"""Tests for CLI interface."""

import os
import tempfile

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from click.testing import CliRunner

from github_migrate.cli.main import cli
from github_migrate.config.config import MigrationConfig
from github_migrate.migration.exceptions import (
    MigrationStepError,
    RepositoryNotFoundError,
)
from github_migrate.migration.runner import MigrationReport, MigrationStep, StepStatus

CONFIG_CONTENT = """
source_organization: orgA
source_repo: repoA
source_project_number: 1
dest_organization: orgB
dest_repo: repoB
dest_project_name: Copied board
"""


@pytest.fixture
def config_file():
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, 'migration.yml')
        with open(path, 'w') as f:
            f.write(CONFIG_CONTENT)
        yield path


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch('github_migrate.cli.main.setup_logging'):
        yield


def _report():
    report = MigrationReport(source='orgA/repoA', destination='orgB/repoB')
    for record in report.steps:
        record.status = StepStatus.COMPLETED
    return report


class TestCLI:
    """Test CLI commands."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_cli_help(self):
        """Test CLI help command."""
        result = self.runner.invoke(cli, ['--help'])

        assert result.exit_code == 0
        assert 'GitHub Migration Tool' in result.output
        assert 'migrate' in result.output
        assert 'init' in result.output
        assert 'validate' in result.output

    def test_cli_version(self):
        """Test CLI version command."""
        result = self.runner.invoke(cli, ['--version'])

        assert result.exit_code == 0
        assert '0.1.0' in result.output

    def test_migrate_help_lists_flags(self):
        result = self.runner.invoke(cli, ['migrate', '--help'])

        assert result.exit_code == 0
        for flag in ('--token', '-t', '--create-repo', '-c', '--token-env'):
            assert flag in result.output

    def test_init_command(self):
        """Test init command."""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = os.path.join(temp_dir, 'migration.yml')

            result = self.runner.invoke(cli, ['init', '--output', config_path])

            assert result.exit_code == 0
            assert 'Configuration template created' in result.output
            with open(config_path, 'r') as f:
                content = f.read()
            assert 'source_organization:' in content
            assert 'dest_project_name:' in content

    @patch('github_migrate.cli.main._run_migration', new_callable=AsyncMock)
    def test_migrate_command_success(self, mock_run_migration, config_file):
        """Test successful migrate command."""
        mock_run_migration.return_value = _report()

        result = self.runner.invoke(cli, ['migrate', config_file, '-t', 'secret'])

        assert result.exit_code == 0, result.output
        assert 'Migration completed successfully' in result.output
        config, token, create_repo = mock_run_migration.call_args.args
        assert isinstance(config, MigrationConfig)
        assert config.dest_repo == 'repoB'
        assert token == 'secret'
        assert create_repo is False

    @patch('github_migrate.cli.main._run_migration', new_callable=AsyncMock)
    def test_migrate_reads_given_file(self, mock_run_migration):
        """The FILE argument is the config that gets loaded."""
        mock_run_migration.return_value = _report()

        with self.runner.isolated_filesystem():
            with open('config.yml', 'w') as f:
                f.write(CONFIG_CONTENT)
            with open('other.yml', 'w') as f:
                f.write(CONFIG_CONTENT.replace('repoB', 'elsewhere'))

            result = self.runner.invoke(cli, ['migrate', 'other.yml', '-t', 'secret'])

        assert result.exit_code == 0, result.output
        assert mock_run_migration.call_args.args[0].dest_repo == 'elsewhere'

    @patch('github_migrate.cli.main._run_migration', new_callable=AsyncMock)
    def test_migrate_create_repo_flag(self, mock_run_migration, config_file):
        mock_run_migration.return_value = _report()

        result = self.runner.invoke(
            cli, ['migrate', config_file, '--token', 'secret', '--create-repo']
        )

        assert result.exit_code == 0, result.output
        assert mock_run_migration.call_args.args[2] is True

    @patch('github_migrate.cli.main._run_migration', new_callable=AsyncMock)
    def test_migrate_token_env(self, mock_run_migration, config_file, monkeypatch):
        monkeypatch.setenv('GITHUB_TOKEN', 'from-env')
        mock_run_migration.return_value = _report()

        result = self.runner.invoke(cli, ['migrate', config_file, '--token-env'])

        assert result.exit_code == 0, result.output
        assert mock_run_migration.call_args.args[1] == 'from-env'

    @patch('github_migrate.cli.main._run_migration', new_callable=AsyncMock)
    def test_token_flags_conflict(self, mock_run_migration, config_file):
        result = self.runner.invoke(
            cli, ['migrate', config_file, '--token', 'secret', '--token-env']
        )

        assert result.exit_code == 2
        assert 'mutually exclusive' in result.output
        mock_run_migration.assert_not_called()

    @patch('github_migrate.cli.main._run_migration', new_callable=AsyncMock)
    def test_missing_repo_exits_1(self, mock_run_migration, config_file):
        mock_run_migration.side_effect = RepositoryNotFoundError('orgB', 'repoB')

        result = self.runner.invoke(cli, ['migrate', config_file, '-t', 'secret'])

        assert result.exit_code == 1
        assert 'Repository does not exist: orgB/repoB' in result.output
        assert '--create-repo' in result.output

    @patch('github_migrate.cli.main._run_migration', new_callable=AsyncMock)
    def test_step_failure_shows_report(self, mock_run_migration, config_file):
        report = MigrationReport(source='orgA/repoA', destination='orgB/repoB')
        report.record(MigrationStep.RESOLVE_SOURCE_REPO).status = StepStatus.COMPLETED
        report.record(MigrationStep.RESOLVE_DEST_REPO).status = StepStatus.FAILED
        mock_run_migration.side_effect = MigrationStepError(
            'resolve_dest_repo', report, RuntimeError('boom')
        )

        result = self.runner.invoke(cli, ['migrate', config_file, '-t', 'secret'])

        assert result.exit_code == 1
        assert 'resolve_dest_repo' in result.output
        assert 'boom' in result.output
        assert 'resolve source repo' in result.output

    def test_migrate_missing_file(self):
        result = self.runner.invoke(cli, ['migrate', '/nonexistent/config.yml', '-t', 'x'])

        assert result.exit_code == 2

    def test_migrate_invalid_config(self):
        with self.runner.isolated_filesystem():
            with open('bad.yml', 'w') as f:
                f.write('source_repo: only-this\n')

            result = self.runner.invoke(cli, ['migrate', 'bad.yml', '-t', 'secret'])

        assert result.exit_code == 1
        assert 'Migration failed' in result.output

    @patch('github_migrate.cli.main.GitHubClient')
    def test_validate_command(self, mock_client_cls, config_file):
        client = MagicMock()
        client.test_connection.return_value = True
        mock_client_cls.return_value.__enter__.return_value = client

        result = self.runner.invoke(cli, ['validate', config_file, '-t', 'secret'])

        assert result.exit_code == 0, result.output
        assert 'Connectivity validation passed' in result.output
        assert mock_client_cls.call_args.args[0].token == 'secret'

    @patch('github_migrate.cli.main.GitHubClient')
    def test_validate_connection_failure(self, mock_client_cls, config_file):
        client = MagicMock()
        client.test_connection.return_value = False
        client.base_url = 'https://api.github.com'
        mock_client_cls.return_value.__enter__.return_value = client

        result = self.runner.invoke(cli, ['validate', config_file, '-t', 'secret'])

        assert result.exit_code == 1
        assert 'Validation failed' in result.output
