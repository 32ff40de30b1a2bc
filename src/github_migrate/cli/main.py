"""Main CLI entry point for GitHub Migration Tool."""

import sys
import asyncio
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..api.client import GitHubClient
from ..config.config import MigrationConfig, create_template, resolve_token
from ..migration.engine import MigrationEngine
from ..migration.exceptions import MigrationStepError, RepositoryNotFoundError
from ..migration.runner import MigrationReport, StepStatus
from ..utils.logging import setup_logging

console = Console()

STATUS_STYLES = {
    StepStatus.COMPLETED: '[green]✓ completed[/green]',
    StepStatus.FAILED: '[red]✗ failed[/red]',
    StepStatus.SKIPPED: '[yellow]- skipped[/yellow]',
    StepStatus.PENDING: '[dim]pending[/dim]',
}


def token_options(f):
    """Attach the shared credential flags to a command."""
    f = click.option(
        '--token-env',
        is_flag=True,
        help='Read the token from the GITHUB_TOKEN environment variable',
    )(f)
    f = click.option(
        '--token', '-t', default=None, help='Token for GitHub authentication'
    )(f)
    return f


@click.group()
@click.version_option(version=__version__, prog_name='github-migrate')
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose logging',
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """GitHub Migration Tool - Copy issues, labels and a project board between GitHub repositories."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    # Setup basic logging first (will be enhanced later with config)
    setup_logging('DEBUG' if verbose else 'INFO')


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@token_options
@click.option(
    '--create-repo',
    '-c',
    is_flag=True,
    help='Create the destination repository if it does not exist',
)
@click.pass_context
def migrate(
    ctx: click.Context,
    file: str,
    token: Optional[str],
    token_env: bool,
    create_repo: bool,
) -> None:
    """Copy labels, issues and the project described in FILE."""
    console.print(
        Panel.fit(
            '[bold blue]GitHub Migration Tool[/bold blue]\n'
            'Starting migration process...',
            border_style='blue',
        )
    )

    github_token = _resolve_token(token, token_env)

    try:
        config = _load_config(file)
        _setup_logging_with_config(ctx, config)

        report = asyncio.run(_run_migration(config, github_token, create_repo))

    except RepositoryNotFoundError as e:
        console.print(f'[red]✗[/red] {e}')
        console.print('[yellow]Use --create-repo to create it[/yellow]')
        sys.exit(1)

    except MigrationStepError as e:
        console.print(f'[red]✗[/red] Migration failed at step {e.step}: {e.cause}')
        _display_report(e.report)
        if ctx.obj.get('verbose'):
            console.print_exception()
        sys.exit(1)

    except Exception as e:
        console.print(f'[red]✗[/red] Migration failed: {e}')
        if ctx.obj.get('verbose'):
            console.print_exception()
        sys.exit(1)

    console.print('[green]✓[/green] Migration completed successfully')
    _display_report(report)


@cli.command()
@click.option(
    '--output',
    '-o',
    default='migration.yml',
    help='Output configuration file path',
)
def init(output: str) -> None:
    """Initialize a new configuration file."""
    console.print(
        Panel.fit(
            '[bold green]GitHub Migration Tool[/bold green]\n'
            'Initializing configuration...',
            border_style='green',
        )
    )

    try:
        create_template(output)

        console.print(f'[green]✓[/green] Configuration template created at: {output}')
        console.print(
            f'[yellow]Please edit {output} with your organizations and repositories[/yellow]'
        )

    except Exception as e:
        console.print(f'[red]✗[/red] Failed to create configuration: {e}')
        sys.exit(1)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@token_options
@click.pass_context
def validate(
    ctx: click.Context, file: str, token: Optional[str], token_env: bool
) -> None:
    """Check FILE and the token without changing anything."""
    console.print(
        Panel.fit(
            '[bold cyan]GitHub Migration Tool[/bold cyan]\nValidating configuration...',
            border_style='cyan',
        )
    )

    github_token = _resolve_token(token, token_env)

    try:
        config = _load_config(file)
        _display_config(config)

        with GitHubClient(config.instance_config(github_token)) as client:
            if not client.test_connection():
                raise ConnectionError(f'Cannot connect to {client.base_url}')

        console.print('[green]✓[/green] Connectivity validation passed')
        console.print('[green]✓[/green] Configuration validation completed')

    except Exception as e:
        console.print(f'[red]✗[/red] Validation failed: {e}')
        if ctx.obj.get('verbose'):
            console.print_exception()
        sys.exit(1)


def _resolve_token(token: Optional[str], token_env: bool) -> str:
    try:
        return resolve_token(token, token_env)
    except ValueError as e:
        raise click.UsageError(str(e))


def _load_config(path: str) -> MigrationConfig:
    """Load configuration from the file given on the command line."""
    return MigrationConfig.from_file(path)


def _setup_logging_with_config(ctx: click.Context, config: MigrationConfig) -> None:
    """Setup logging with configuration from config file."""
    verbose = ctx.obj.get('verbose', False)

    # Use config logging settings, but allow verbose flag to override level
    log_level = 'DEBUG' if verbose else config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)


async def _run_migration(
    config: MigrationConfig, token: str, create_repo: bool = False
) -> MigrationReport:
    """Run the migration with a spinner on the console."""
    engine = MigrationEngine(config, token, create_repo=create_repo)

    with console.status('[blue]Migration in progress...'):
        return await engine.migrate()


def _display_report(report: MigrationReport) -> None:
    """Display the step log of a run."""
    table = Table(title=f'Migration {report.source} → {report.destination}')
    table.add_column('Step', style='cyan')
    table.add_column('Status')
    table.add_column('Detail', style='blue')

    for record in report.steps:
        table.add_row(
            record.step.value.replace('_', ' '),
            STATUS_STYLES[record.status],
            record.detail or '',
        )

    console.print(table)

    if report.completed_at:
        duration = report.completed_at - report.started_at
        console.print(f'\n[blue]Migration Duration:[/blue] {duration}')


def _display_config(config: MigrationConfig) -> None:
    table = Table(title='Migration Configuration')
    table.add_column('Setting', style='cyan')
    table.add_column('Value', style='green')

    table.add_row('Source', f'{config.source_organization}/{config.source_repo}')
    table.add_row('Source project', str(config.source_project_number))
    table.add_row('Destination', f'{config.dest_organization}/{config.dest_repo}')
    table.add_row('Destination project', config.dest_project_name)
    table.add_row('API URL', config.github.api_url)

    console.print(table)


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print('\n[red]Migration interrupted by user[/red]')
        sys.exit(1)


if __name__ == '__main__':
    main()
