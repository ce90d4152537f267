"""
Integration Nodes CLI - Main entry point.

Provides commands for:
- Listing and describing registered nodes
- Running a node over input items
- Testing credentials
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from pathlib import Path
from typing import Any, Optional

import click

from src.integration_nodes.config import get_settings
from src.integration_nodes.observability import get_logger, setup_logging, with_execution_context
from src.node_registry import NodeRegistry, get_global_registry
from src.node_sdk import HttpClient, NodeOperationError, NodeRunner


logger = get_logger("integration_nodes")

# Packs shipped with this distribution, loaded even when entry points
# are not installed (e.g. running from a source checkout)
BUILTIN_PACKS = ("nodepacks.jenkins", "nodepacks.bamboohr")


def load_registry() -> NodeRegistry:
    """Global registry with entry-point packs and the built-in packs."""
    registry = get_global_registry()
    registry.discover_entry_points()
    loaded = {pack.name for pack in registry.list_packs()}
    for module_path in BUILTIN_PACKS:
        if module_path.rsplit(".", 1)[-1] not in loaded:
            registry.load_pack(module_path)
    return registry


def build_runner(registry: NodeRegistry) -> NodeRunner:
    """Runner wired to the configured credential store and transport."""
    settings = get_settings()
    return NodeRunner(
        registry=registry,
        credential_store=settings.load_credentials(),
        http_client_factory=lambda: HttpClient(
            timeout=settings.http_timeout_s,
            verify=settings.http_verify_ssl,
        ),
    )


def parse_json_option(value: Optional[str], name: str) -> Any:
    """Parse an option given as inline JSON or as @path/to/file.json."""
    if value is None:
        return None
    try:
        if value.startswith("@"):
            return json.loads(Path(value[1:]).read_text(encoding="utf-8"))
        return json.loads(value)
    except (OSError, ValueError) as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint=f"--{name}")


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-q", "--quiet", is_flag=True, help="Suppress output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool):
    """Integration Nodes - Run workflow integration nodes from the shell."""
    ctx.ensure_object(dict)

    level = None
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    setup_logging(level)

    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# ==============================================================================
# Node Commands
# ==============================================================================

@cli.group()
def nodes():
    """List, describe and run nodes."""
    pass


@nodes.command("list")
def nodes_list():
    """List registered nodes."""
    registry = load_registry()
    echo_json([
        {
            "type": definition.node_type,
            "displayName": definition.display_name,
            "version": definition.version,
            "pack": definition.node_pack,
        }
        for definition in registry.list_nodes()
    ])


@nodes.command("describe")
@click.argument("node_type")
def nodes_describe(node_type: str):
    """
    Print the full definition of a node.

    NODE_TYPE: Node type identifier (e.g., 'jenkins')
    """
    registry = load_registry()
    definition = registry.get_node(node_type)
    if definition is None:
        click.echo(f"Error: Unknown node type: {node_type}", err=True)
        sys.exit(1)
    echo_json(definition.model_dump())


@nodes.command("run")
@click.argument("node_type")
@click.option(
    "--params", "-p",
    default="{}",
    help="Node parameters as JSON or @file.json",
)
@click.option(
    "--input", "-i", "input_items",
    default=None,
    help="Input items as a JSON array or @file.json",
)
@click.option(
    "--credentials", "-c",
    default=None,
    help="Map of credential type to store name or inline values",
)
@click.option(
    "--continue-on-fail", is_flag=True,
    help="Record item errors in the output instead of stopping",
)
def nodes_run(
    node_type: str,
    params: str,
    input_items: Optional[str],
    credentials: Optional[str],
    continue_on_fail: bool,
):
    """
    Run a node and print its output items.

    NODE_TYPE: Node type identifier (e.g., 'jenkins')

    Examples:

        # Trigger a Jenkins job with credentials from the store
        integration-nodes nodes run jenkins \\
            -p '{"resource": "job", "operation": "trigger", "job": "build-app"}' \\
            -c '{"jenkinsApi": "ci"}'
    """
    parameters = parse_json_option(params, "params") or {}
    items = parse_json_option(input_items, "input") or []
    if not isinstance(items, list):
        raise click.BadParameter("Expected a JSON array", param_hint="--input")
    # Bare JSON objects are accepted as items
    items = [
        item if isinstance(item, dict) and "json" in item else {"json": item}
        for item in items
    ]

    registry = load_registry()
    runner = build_runner(registry)
    execution_id = uuid.uuid4().hex

    logger.debug(
        "Running node from CLI",
        extra=with_execution_context(execution_id=execution_id, node_type=node_type),
    )

    try:
        output = runner.execute_node(
            node_type,
            parameters=parameters,
            credentials=parse_json_option(credentials, "credentials") or {},
            input_data=items,
            continue_on_fail=continue_on_fail,
            execution_id=execution_id,
        )
    except NodeOperationError as e:
        click.echo(f"Error: {e}", err=True)
        if e.partial_results:
            echo_json(e.partial_results)
        sys.exit(1)

    echo_json(output)


# ==============================================================================
# Credential Commands
# ==============================================================================

@cli.group()
def credentials():
    """Manage credentials."""
    pass


@credentials.command("test")
@click.argument("credential_type")
@click.option(
    "--credentials", "-c", "data",
    required=True,
    help="Credential values as JSON, @file.json or a store name",
)
def credentials_test(credential_type: str, data: str):
    """
    Test credentials against their API.

    CREDENTIAL_TYPE: Credential type name (e.g., 'jenkinsApi')
    """
    registry = load_registry()
    runner = build_runner(registry)

    if data.startswith(("{", "@")):
        values = parse_json_option(data, "credentials")
    else:
        values = runner.resolve_credentials({credential_type: data}).get(credential_type)
    if not isinstance(values, dict):
        click.echo(f"Error: Credentials '{data}' not found", err=True)
        sys.exit(1)

    try:
        result = runner.test_credential(credential_type, values)
    except NodeOperationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    echo_json(result)
    if not result.get("success"):
        sys.exit(1)


app = cli


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
