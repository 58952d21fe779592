"""Command-line interface for the bridge."""

import asyncio
import json
import sys
import threading
from typing import Optional

import click

from .logger import configure_logging
from .metadata import TARGET_STORE_KEY, StaticAppMetadata
from .report import save_report, summary_to_dict
from .scenarios import ScenarioContext, run_all_suites
from .server import BridgeClient, BridgeServer, BridgeServerState
from .types import ScenarioSummary


def print_summary(summary: ScenarioSummary, output_format: str = "text") -> None:
    """
    Print scenario results summary.

    Args:
        summary: Scenario summary to print
        output_format: Output format ('text' or 'json')
    """
    if output_format == "json":
        click.echo(json.dumps(summary_to_dict(summary), indent=2))
        return

    click.echo()
    click.echo("=" * 70)
    click.echo(" Pollfish Bridge Scenario Results ".center(70))
    click.echo("=" * 70)

    for suite in summary.suites:
        click.echo(f"\n{suite.name.upper()} Scenarios:")
        click.echo("-" * 70)

        for result in suite.results:
            status = click.style("✓", fg="green") if result.passed else click.style("✗", fg="red")
            click.echo(f"  {status} {result.name} ({result.duration_ms}ms)")

            if result.message:
                click.echo(click.style(f"    {result.message}", fg="bright_black"))

    click.echo()
    click.echo("-" * 70)
    click.echo(
        f"  Total: {summary.total} | "
        f"{click.style(f'{summary.passed} passed', fg='green')} | "
        f"{click.style(f'{summary.failed} failed', fg='red' if summary.failed else 'bright_black')} | "
        f"Duration: {summary.duration_ms}ms"
    )

    click.echo()
    if summary.failed == 0:
        click.echo(click.style("  All scenarios passed! ✓", fg="green"))
    else:
        click.echo(click.style(f"  {summary.failed} scenario(s) failed", fg="red"))
    click.echo("=" * 70)
    click.echo()


def build_server(target_store: str) -> BridgeServer:
    """Create a server whose bridge reports the given target store."""
    metadata = StaticAppMetadata({TARGET_STORE_KEY: target_store})
    return BridgeServer(BridgeServerState(metadata=metadata))


@click.group()
@click.option(
    "--log-level",
    default="INFO",
    envvar="POLLFISH_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level",
)
def cli(log_level: str) -> None:
    """Pollfish survey SDK bridge."""
    configure_logging(log_level)


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to")
@click.option("--port", default=8090, envvar="POLLFISH_BRIDGE_PORT", help="Port to listen on")
@click.option(
    "--target-store",
    default="google",
    envvar="POLLFISH_TARGET_STORE",
    help="App store the host app targets (selects the SDK variant)",
)
def serve(host: str, port: int, target_store: str) -> None:
    """Serve a bridge backed by the mock SDK."""
    click.echo(f"Starting Pollfish bridge server on port {port}...")

    server = build_server(target_store)

    try:
        server.run(host=host, port=port, debug=False)
    except KeyboardInterrupt:
        click.echo("\nShutting down bridge server...")
    finally:
        server.state.shutdown()


@cli.command()
@click.option(
    "--bridge-url",
    envvar="POLLFISH_BRIDGE_URL",
    help="URL of a running bridge server (default: start one locally)",
)
@click.option("--port", default=8090, envvar="POLLFISH_BRIDGE_PORT", help="Port for the local bridge server")
@click.option("--target-store", default="google", envvar="POLLFISH_TARGET_STORE", help="Target store of the local server")
@click.option("--scenarios", "scenarios_path", default=None, help="Path to the scenarios file")
@click.option("--timeout", default=30, help="Timeout for the server health check (seconds)")
@click.option(
    "--output",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--suite", multiple=True, help="Specific scenario suite(s) to run")
@click.option("--report", help="Path to save report (markdown or json based on extension)")
def run(
    bridge_url: Optional[str],
    port: int,
    target_store: str,
    scenarios_path: Optional[str],
    timeout: int,
    output: str,
    suite: tuple,
    report: Optional[str],
) -> None:
    """Run scenarios against a bridge server."""
    asyncio.run(
        _run_scenarios(bridge_url, port, target_store, scenarios_path, timeout, output, list(suite), report)
    )


async def _run_scenarios(
    bridge_url: Optional[str],
    port: int,
    target_store: str,
    scenarios_path: Optional[str],
    timeout: int,
    output: str,
    suite_names: list,
    report_path: Optional[str],
) -> None:
    """Async implementation of run command."""
    if not bridge_url:
        bridge_url = f"http://localhost:{port}"
        server = build_server(target_store)

        def run_server() -> None:
            server.run(host="127.0.0.1", port=port, debug=False)

        server_thread = threading.Thread(target=run_server, daemon=True)
        server_thread.start()
        click.echo(f"Started local bridge server on port {port}")

    client = BridgeClient(bridge_url)
    click.echo(f"Bridge server: {bridge_url}")
    click.echo("Waiting for bridge server to be ready...")

    try:
        health_info = await client.wait_for_health(timeout_seconds=timeout)
        click.echo(f"Bridge ready: {health_info.bridge_name} v{health_info.bridge_version} (SDK: {health_info.sdk_version})")
        click.echo()
    except Exception as e:
        click.echo(f"Error: bridge server not ready: {e}", err=True)
        sys.exit(1)

    ctx = ScenarioContext(client=client)

    click.echo("Running scenarios...")
    summary = await run_all_suites(ctx, suite_names=suite_names or None, scenarios_path=scenarios_path)

    print_summary(summary, output)

    if report_path:
        report_format = "json" if report_path.endswith(".json") else "markdown"
        save_report(summary, report_path, report_format, bridge_name=health_info.bridge_name)
        click.echo(f"\n✓ Report saved to {report_path}")

    if summary.failed > 0:
        sys.exit(1)


@cli.command()
@click.option(
    "--bridge-url",
    required=True,
    envvar="POLLFISH_BRIDGE_URL",
    help="URL of the bridge server",
)
def health(bridge_url: str) -> None:
    """Check health of a bridge server."""
    asyncio.run(_check_health(bridge_url))


async def _check_health(bridge_url: str) -> None:
    """Async implementation of health command."""
    client = BridgeClient(bridge_url)

    try:
        health_info = await client.health()
        click.echo(click.style("Bridge Health: OK", fg="green"))
        click.echo(f"  Bridge: {health_info.bridge_name}")
        click.echo(f"  Version: {health_info.bridge_version}")
        click.echo(f"  SDK: {health_info.sdk_version}")
    except Exception as e:
        click.echo(f"{click.style('Bridge Health: FAILED', fg='red')} - {e}", err=True)
        sys.exit(1)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
