import signal
import sys

# Handle Ctrl+C gracefully before any other imports
signal.signal(signal.SIGINT, lambda *_: sys.exit(130))

from typing import List, Optional

import click
import typer

from .api.client import get_client
from .config import DEFAULT_CONFIG_PATH, load_config, set_dotenv_path
from .errors import ConnectionFailedError, SwoLogsError
from .query import DEFAULT_MIN_TIME, build_search_request
from .stream import stream_results

app = typer.Typer()

GET_EXAMPLES = """
Examples:

  swologs get something

  swologs get 1.2.3 Failure

  swologs get -s ns1 "connection refused"

  swologs get -f "(www OR db) (nginx OR pgsql) -accepted"

  swologs get -f -g <GROUP_NAME> "(nginx OR pgsql) -accepted"

  swologs get --min-time 'yesterday at noon' --max-time 'today at 4am' -g <GROUP_NAME>

  swologs get -- -redis
"""


@app.callback()
def root(
	ctx: typer.Context,
	env: Optional[str] = typer.Option(None, "--env", help="Path to a .env file to load"),
	config_path: str = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Path to the YAML config file"),
	api_url: Optional[str] = typer.Option(None, "--api-url", help="Log service API URL"),
):
	"""Command-line search for a remote log management service."""
	if env:
		set_dotenv_path(env)
	ctx.obj = {"config_path": config_path, "api_url": api_url}


def _error(message):
	typer.echo(typer.style(f"Error: {message}", fg=typer.colors.RED), err=True)


@app.command(epilog=GET_EXAMPLES)
def get(
	ctx: typer.Context,
	terms: Optional[List[str]] = typer.Argument(None, help="Search terms"),
	group: Optional[str] = typer.Option(None, "--group", "-g", help="Group name to search"),
	min_time: str = typer.Option(DEFAULT_MIN_TIME, "--min-time", help="Earliest time to search from"),
	max_time: Optional[str] = typer.Option(None, "--max-time", help="Latest time to search from"),
	system: Optional[str] = typer.Option(None, "--system", "-s", help="System to search"),
	json_out: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
	follow: bool = typer.Option(False, "--follow", "-f", help="Enable live tailing"),
	verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
	"""Search logs, optionally following new entries."""
	options = ctx.obj or {}

	def _verbose_echo(message, color=typer.colors.BLUE):
		if verbose:
			typer.echo(typer.style(message, fg=color), err=True)

	try:
		cfg = load_config(options.get("config_path", DEFAULT_CONFIG_PATH), api_url=options.get("api_url"))
		request = build_search_request(
			terms,
			group=group,
			system=system,
			min_time=min_time,
			max_time=max_time,
			follow=follow,
		)
	except SwoLogsError as e:
		_error(e)
		raise typer.Exit(1)

	typer.echo(request.filter or "")
	_verbose_echo(f"Searching {cfg.api_url} with {request.to_params()}, follow={follow}")

	client = get_client(cfg)
	try:
		total = stream_results(client, request, json_out, follow, echo=typer.echo, log=_verbose_echo)
	except ConnectionFailedError as e:
		_error(f"Lost connection to log service: {e}")
		raise typer.Exit(1)
	except SwoLogsError as e:
		_error(e)
		raise typer.Exit(1)

	if not total and not follow:
		typer.echo(typer.style("No logs found.", dim=True), err=True)


def main():
	"""Console entry point for swologs."""
	if len(sys.argv) < 2:
		# Bare invocation prints usage on stderr
		command = typer.main.get_command(app)
		with click.Context(command, info_name="swologs") as ctx:
			typer.echo(command.get_help(ctx), err=True)
		return 0
	try:
		app(prog_name="swologs")
	except typer.Exit:
		raise
	except SwoLogsError as e:
		_error(e)
		sys.exit(1)
	except Exception as e:
		message = f"Fatal error: {type(e).__name__}: {e}"
		typer.echo(typer.style(message, fg=typer.colors.RED), err=True)
		sys.exit(1)

if __name__ == "__main__":
	main()
