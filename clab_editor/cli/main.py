# clab_editor/cli/main.py

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint

from clab_editor.models.topology import EditorContext
from clab_editor.services.element_factory import ElementFactory
from clab_editor.services.node_editor import NodeEditorService
from clab_editor.utils.constants import SPECIAL_NETWORK_TYPES
from clab_editor.utils.exceptions import ClabEditorError
from clab_editor.utils.logging_config import setup_logging
from clab_editor.utils.yaml_processor import YAMLProcessor


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


app = typer.Typer(
    name="clab-editor",
    help="Resolve node configuration and allocate identifiers for containerlab topologies",
    add_completion=True,
)

log_level_option = typer.Option(
    LogLevel.WARNING,
    "--log-level",
    "-l",
    help="Set logging level",
)

log_file_option = typer.Option(
    None,
    "--log-file",
    "-f",
    help="Optional log file path",
)


def complete_topology_files(
    _ctx: typer.Context, _param: typer.Option, incomplete: str
) -> list[str]:
    """Complete containerlab topology file paths for CLI autocomplete."""

    current = Path(incomplete) if incomplete else Path.cwd()
    if not current.is_dir():
        current = current.parent
    return [
        str(path)
        for pattern in ("*.clab.yml", "*.clab.yaml")
        for path in current.glob(pattern)
        if incomplete in str(path)
    ]


TopologyFile = Annotated[
    Path,
    typer.Option(
        "--topology",
        "-t",
        help="Path to the containerlab topology file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        shell_complete=complete_topology_files,
    ),
]


def _load_context(topology: Path, log_level: LogLevel, log_file: str | None):
    setup_logging(log_level.value, log_file)
    try:
        return EditorContext.from_topology_file(str(topology))
    except ClabEditorError as e:
        rprint(f"[red]Error: {e!s}[/red]")
        raise typer.Exit(code=1) from e


@app.command(name="resolve", help="Show the effective configuration of a node")
def resolve_cmd(
    topology: TopologyFile,
    node: Annotated[str, typer.Argument(help="Node name")],
    log_level: LogLevel = log_level_option,
    log_file: str | None = log_file_option,
):
    """Print a node's effective configuration and its inherited properties."""
    context = _load_context(topology, log_level, log_file)
    if node not in context.nodes:
        rprint(f"[red]Error: node '{node}' not found in {topology}[/red]")
        raise typer.Exit(code=1)

    state = NodeEditorService(context).open_node(node)
    typer.echo(YAMLProcessor().dump_yaml({node: state.effective}), nl=False)
    inherited = ", ".join(state.inherited) if state.inherited else "-"
    rprint(f"[bold]inherited:[/bold] {inherited}")


@app.command(name="persist", help="Show the node record a save would write")
def persist_cmd(
    topology: TopologyFile,
    node: Annotated[str, typer.Argument(help="Node name")],
    output: str | None = typer.Option(
        None, "--output", "-o", help="Write the record to this YAML file"
    ),
    log_level: LogLevel = log_level_option,
    log_file: str | None = log_file_option,
):
    """Prune a node record of the values it inherits anyway."""
    context = _load_context(topology, log_level, log_file)
    if node not in context.nodes:
        rprint(f"[red]Error: node '{node}' not found in {topology}[/red]")
        raise typer.Exit(code=1)

    record = {node: NodeEditorService(context).save_node(node)}
    processor = YAMLProcessor()
    if output:
        processor.save_yaml(record, output)
    else:
        typer.echo(processor.dump_yaml(record), nl=False)


@app.command(name="next-id", help="Allocate identifiers for new elements")
def next_id_cmd(
    topology: TopologyFile,
    base_name: Annotated[str, typer.Argument(help="Requested name, e.g. srl1")],
    count: int = typer.Option(1, "--count", "-n", min=1, help="How many ids"),
    log_level: LogLevel = log_level_option,
    log_file: str | None = log_file_option,
):
    """Print ``count`` fresh identifiers derived from ``base_name``."""
    context = _load_context(topology, log_level, log_file)
    factory = ElementFactory(context)
    for _ in range(count):
        typer.echo(factory.create_node(base_name))


@app.command(name="network-id", help="Allocate a network endpoint identifier")
def network_id_cmd(
    topology: TopologyFile,
    network_type: Annotated[
        str,
        typer.Argument(help=f"One of: {', '.join(SPECIAL_NETWORK_TYPES)}"),
    ],
    log_level: LogLevel = log_level_option,
    log_file: str | None = log_file_option,
):
    """Print the next identifier for a network node."""
    context = _load_context(topology, log_level, log_file)
    try:
        typer.echo(ElementFactory(context).create_network(network_type))
    except ClabEditorError as e:
        rprint(f"[red]Error: {e!s}[/red]")
        raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
