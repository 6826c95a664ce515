"""
pvemcp CLI

Commands:
    pvemcp                  Start the MCP server (same as `pvemcp serve`)
    pvemcp serve            Start the MCP server on the configured transport
    pvemcp tools            List the tools the current tier/categories admit
    pvemcp --version        Show version

Configuration comes from environment variables (PVE_BASE_URL,
PVE_TOKEN_ID, PVE_TOKEN_SECRET, PVE_ACCESS_TIER, PVE_CATEGORIES,
PVE_VERIFY_SSL, MCP_TRANSPORT, MCP_HOST, MCP_PORT, DEBUG).

stdout belongs to the MCP stdio stream while serving; everything the
server reports goes to stderr through the pvemcp logger.
"""

from __future__ import annotations

import asyncio
import json
import sys

import click

from pvemcp import __version__
from pvemcp.client import create_client
from pvemcp.config import AppConfig, load_config, parse_access_tier, parse_categories
from pvemcp.exceptions import ConfigError, PveError
from pvemcp.logging import configure_logging, get_logger
from pvemcp.sanitizer import sanitize
from pvemcp.server import build_server, run_http, run_stdio
from pvemcp.tools.catalog import ALL_TOOLS, register_all_tools
from pvemcp.tools.registry import ToolRegistry, admit

logger = get_logger("pvemcp.cli")


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pvemcp")
@click.option("--json-logs", is_flag=True, help="Write log lines as JSON")
@click.pass_context
def cli(ctx: click.Context, json_logs: bool) -> None:
    """Proxmox VE MCP server"""
    ctx.ensure_object(dict)
    ctx.obj["json_logs"] = json_logs
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Start the MCP server."""
    json_logs = bool(ctx.obj and ctx.obj.get("json_logs"))

    try:
        config = load_config()
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    configure_logging("DEBUG" if config.debug else "INFO", json_output=json_logs)

    if not config.verify_ssl:
        logger.warning(
            "TLS certificate verification disabled (PVE_VERIFY_SSL=false). "
            "This is insecure and should only be used with self-signed certificates."
        )

    try:
        asyncio.run(_serve(config))
    except PveError as e:
        logger.error(sanitize(str(e)))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Shutting down")


async def _serve(config: AppConfig) -> None:
    client = create_client(config)
    try:
        await client.validate_connection()
        logger.info("Access tier: %s", config.access_tier.value, extra={"tier": config.access_tier.value})

        registry = ToolRegistry(client, config.access_tier, config.categories)
        count = register_all_tools(registry)
        logger.info("Registered %d of %d tools", count, len(ALL_TOOLS))

        server = build_server(registry)
        if config.transport == "http":
            await run_http(server, config.http_host, config.http_port)
        else:
            await run_stdio(server)
    finally:
        await client.close()


@cli.command()
@click.option(
    "--tier",
    envvar="PVE_ACCESS_TIER",
    default="full",
    show_default=True,
    help="Access tier: read-only, read-execute or full",
)
@click.option(
    "--categories",
    envvar="PVE_CATEGORIES",
    default=None,
    help="Comma-separated category allow-list",
)
@click.option("--json-output", is_flag=True, help="Output as JSON")
def tools(tier: str, categories: str | None, json_output: bool) -> None:
    """List the tools a tier and category filter would expose."""
    access_tier = parse_access_tier(tier)
    allowed = parse_categories(categories)
    admitted = [d for d in ALL_TOOLS if admit(d, access_tier, allowed)]

    if json_output:
        click.echo(json.dumps(
            [
                {
                    "name": d.name,
                    "tier": d.tier.value,
                    "category": d.category.value,
                    "destructive": d.destructive_hint,
                    "description": d.description,
                }
                for d in admitted
            ],
            indent=2,
        ))
        return

    for d in admitted:
        marker = " !" if d.destructive_hint else ""
        click.echo(f"{d.name:36s} {d.tier.value:13s} {d.category.value:9s}{marker}")
    click.echo(f"\n{len(admitted)} of {len(ALL_TOOLS)} tools ({access_tier.value})")


if __name__ == "__main__":
    cli()
