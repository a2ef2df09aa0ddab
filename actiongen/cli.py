import logging
import traceback
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from actiongen.codegen.codegen import Codegen
from actiongen.config import CodegenConfig, DocumentConfig, get_config
from actiongen.exceptions import ActionGenError, ConfigurationError

console = Console()
app = typer.Typer(
    name='actiongen',
    help='Generate TypeScript server actions from OpenAPI descriptions',
    no_args_is_help=True,
)


def configure_logging(verbose: bool = False) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(message)s',
        datefmt='[%X]',
        handlers=[RichHandler(console=console, show_path=verbose)],
        force=True,
    )


def _resolve_config(
    config: str | None, source: str | None, output: str | None
) -> CodegenConfig:
    if source is None and output is None:
        return get_config(config)

    if source is None or output is None:
        raise ConfigurationError('--source and --output must be given together')

    return CodegenConfig(documents=[DocumentConfig(source=source, output=output)])


@app.command()
def generate(
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
    source: Annotated[
        str | None,
        typer.Option('--source', '-s', help='Path or URL of the OpenAPI document'),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option('--output', '-o', help='Directory to write server actions to'),
    ] = None,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Show debug logging')
    ] = False,
) -> None:
    """Generate TypeScript server actions from configuration.

    If no config file is specified, will look for default config files
    in the current directory or a [tool.actiongen] table in pyproject.toml.

    Examples:
        actiongen generate
        actiongen generate --config my-config.yaml
        actiongen generate -s ./openapi.yaml -o ./app/actions
    """
    configure_logging(verbose)

    try:
        codegen_config = _resolve_config(config, source, output)

        for document_config in codegen_config.documents:
            with Progress(
                SpinnerColumn(),
                TextColumn('[progress.description]{task.description}'),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f'Generating server actions for {document_config.source} '
                    f'in {document_config.output}...',
                    total=None,
                )

                codegen = Codegen(document_config)
                written = codegen.generate()

                progress.update(
                    task,
                    description=f'Code generation completed for {document_config.source}!',
                )

            console.print(
                f'[green]Successfully generated {len(written)} server actions[/green] '
                f'in {document_config.output}'
            )

    except ActionGenError as e:
        console.print(f'[red]Error:[/red] {escape(e.message)}')
        raise typer.Exit(1)
    except Exception as e:
        console.print(f'[red]Error:[/red] {escape(str(e))}')
        if verbose:
            traceback.print_exc()
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the version of actiongen."""
    console.print(f'actiongen version: {get_version()}')


def get_version() -> str:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as package_version

    try:
        return package_version('actiongen')
    except PackageNotFoundError:
        return 'unknown'


if __name__ == '__main__':
    app()
