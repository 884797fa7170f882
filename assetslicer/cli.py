import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from assetslicer.config import SplitConfig, get_config
from assetslicer.emitter import SplitPlanEmitter
from assetslicer.exceptions import AssetSlicerError
from assetslicer.loader import ModuleLoader
from assetslicer.splitting import AssetModuleSplitter

console = Console()
app = typer.Typer(
    name='assetslicer',
    help='Split asset modules into device-targeted delivery units',
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


def _splits_table(module_name: str, splits) -> Table:
    table = Table(title=f'Splits for {module_name}')
    table.add_column('Split')
    table.add_column('Master', justify='center')
    table.add_column('Targeting')
    table.add_column('Files', justify='right')
    for split in splits:
        table.add_row(
            split.split_id,
            'yes' if split.master else '',
            str(split.apk_targeting),
            str(len(split.files)),
        )
    return table


@app.command()
def split(
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Enable debug logging')
    ] = False,
) -> None:
    """Split every module named in the configuration.

    If no config file is specified, will look for default config files
    in the current directory or use environment variables.

    Examples:
        assetslicer split
        assetslicer split --config slicer.yaml
    """
    _configure_logging(verbose)

    try:
        slicer_config = get_config(config)
        loader = ModuleLoader()

        for module_config in slicer_config.modules:
            with Progress(
                SpinnerColumn(),
                TextColumn('[progress.description]{task.description}'),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f'Splitting {module_config.source}...', total=None
                )

                module = loader.load(module_config.source, module_config.name)
                splits = AssetModuleSplitter(module, slicer_config.split).split_module()

                progress.update(task, description=f'Split {module.name}')

            console.print(_splits_table(module.name, splits))

            if slicer_config.emit_plan:
                plan = SplitPlanEmitter(module_config.output).emit(module, splits)
                console.print(f'[dim]Wrote plan:[/dim] {plan.path}')

        console.print('[green]Successfully split all modules[/green]')

    except (AssetSlicerError, FileNotFoundError, ValueError) as e:
        console.print(f'[red]Error:[/red] {str(e)}')
        raise typer.Exit(1)


@app.command()
def show(
    source: Annotated[str, typer.Argument(help='Path or URL to a module description')],
    dimension: Annotated[
        list[str] | None,
        typer.Option(
            '--dimension', '-d', help='Optimization dimension to split on (repeatable)'
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Enable debug logging')
    ] = False,
) -> None:
    """Print the splits of a single module without writing anything.

    Examples:
        assetslicer show assets_module.yaml -d language -d tcf
    """
    _configure_logging(verbose)

    try:
        split_config = SplitConfig(optimization_dimensions=dimension or [])
        module = ModuleLoader().load(source)
        splits = AssetModuleSplitter(module, split_config).split_module()
    except (AssetSlicerError, ValueError) as e:
        console.print(f'[red]Error:[/red] {str(e)}')
        raise typer.Exit(1)

    console.print(_splits_table(module.name, splits))


@app.command()
def version() -> None:
    """Show the version of assetslicer."""
    from assetslicer import __version__

    console.print(f'assetslicer version: {__version__}')


if __name__ == '__main__':
    app()
