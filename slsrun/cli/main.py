"""
Main CLI entry point for slsrun.

This module defines the command-line interface using Typer. Tool output is
streamed straight to the terminal while commands run, so no spinner is used.
"""

from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from slsrun import config
from slsrun.runtime.deploy_runtime import ServerlessRuntime
from slsrun.services.descriptor_service import DescriptorService
from slsrun.utils.log import configure_logging

console = Console()

app = typer.Typer(
    name="slsrun",
    help="slsrun - Build and deploy multi-runtime serverless services",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

DirectoryOption = typer.Option(
    None,
    "-f",
    "--directory",
    help="Directory containing serverless.yml (default: $SLSRUN_DIRECTORY or .)",
)
ProviderOption = typer.Option(
    None,
    "--provider",
    help="Expected provider name (default: $SLSRUN_PROVIDER or aws)",
)
OptOption = typer.Option(
    None,
    "--opt",
    help="Extra serverless option as name=value, may be repeated",
)
VerboseOption = typer.Option(
    False,
    "--verbose",
    help="Enable detailed logging",
)


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        from slsrun import __version__
        console.print(f"slsrun version: [bold green]{__version__}[/bold green]")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """slsrun - Serverless deployment orchestration."""


def _load_runtime(
    directory: Optional[str],
    provider: Optional[str],
    opt: Optional[List[str]],
    verbose: bool,
) -> ServerlessRuntime:
    configure_logging(verbose)

    options: Dict[str, str] = config.get_extra_options()
    options.update(config.parse_options(opt or []))

    service_path = Path(directory or config.get_directory()).resolve()
    return ServerlessRuntime(
        provider or config.get_provider(),
        service_path,
        options=options,
        verbose=verbose,
    )


def _fail(action: str, error: Exception, verbose: bool) -> None:
    console.print(f"❌ Error {action}: [red]{str(error)}[/red]")
    if verbose:
        import traceback
        console.print(traceback.format_exc())
    raise typer.Exit(1)


@app.command()
def deploy(
    directory: Optional[str] = DirectoryOption,
    provider: Optional[str] = ProviderOption,
    opt: Optional[List[str]] = OptOption,
    verbose: bool = VerboseOption,
) -> None:
    """
    Build every runtime present and deploy the service.

    A fresh run suffix is generated and substituted into function names
    before the serverless framework is invoked.
    """
    try:
        runtime = _load_runtime(directory, provider, opt, verbose)
        runtime.deploy()
    except Exception as e:
        _fail("deploying service", e, verbose)

    console.print(f"✅ Successfully deployed: [bold green]{runtime.stack_id}[/bold green]")
    console.print(f"🏷️  Suffix: [blue]{runtime.suffix}[/blue]")
    for key, spec in runtime.functions.items():
        console.print(f"   {key}: [blue]{spec.name}[/blue]")


@app.command()
def remove(
    directory: Optional[str] = DirectoryOption,
    provider: Optional[str] = ProviderOption,
    opt: Optional[List[str]] = OptOption,
    verbose: bool = VerboseOption,
) -> None:
    """Remove the deployed service."""
    try:
        runtime = _load_runtime(directory, provider, opt, verbose)
        runtime.remove()
    except Exception as e:
        _fail("removing service", e, verbose)

    console.print(f"✅ Successfully removed: [bold green]{runtime.stack_id}[/bold green]")


@app.command("list")
def list_functions(
    directory: Optional[str] = DirectoryOption,
    provider: Optional[str] = ProviderOption,
    opt: Optional[List[str]] = OptOption,
    verbose: bool = VerboseOption,
) -> None:
    """List deployed functions through the serverless framework."""
    try:
        runtime = _load_runtime(directory, provider, opt, verbose)
        runtime.list_functions()
    except Exception as e:
        _fail("listing functions", e, verbose)


@app.command()
def info(
    directory: Optional[str] = DirectoryOption,
    provider: Optional[str] = ProviderOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show the parsed service descriptor without invoking any tool."""
    configure_logging(verbose)
    provider = provider or config.get_provider()
    service_path = Path(directory or config.get_directory()).resolve()
    try:
        descriptor = DescriptorService(verbose=verbose).load_descriptor(service_path, provider)
    except Exception as e:
        _fail("loading service", e, verbose)

    table = Table(title="Service")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Stack ID", descriptor.stack_name)
    table.add_row("Provider", descriptor.provider.name)
    table.add_row("Project", descriptor.provider.project or "N/A")
    table.add_row("Stage", descriptor.provider.stage or "N/A")
    console.print(table)

    functions = Table(title="Functions")
    for column in ("Key", "Name", "Handler", "Runtime", "Memory"):
        functions.add_column(column)
    for key, spec in descriptor.functions.items():
        functions.add_row(key, spec.name, spec.handler, spec.runtime, spec.memory_size)
    console.print(functions)


if __name__ == "__main__":
    app()
