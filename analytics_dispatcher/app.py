# ==============================================================================
# Analytics Dispatcher CLI
# ==============================================================================
"""
Command-line interface for the analytics dispatcher.

Usage:
    analytics-dispatcher --help
    analytics-dispatcher config show
    analytics-dispatcher providers list
    analytics-dispatcher replay session.jsonl --provider console
    analytics-dispatcher session estimate --raw 20000 --idle-timeout 5000 -p 1000 -p 2000
"""

import os

import typer

# Set consistent terminal width for help output formatting
if "COLUMNS" not in os.environ:
    os.environ["COLUMNS"] = "115"

app = typer.Typer(
    name="analytics-dispatcher",
    help="Analytics event dispatcher CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(
    help="Configuration management",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

# Register config commands from cli.config module
from analytics_dispatcher.cli.config import config_show

config_app.command("show")(config_show)

providers_app = typer.Typer(
    help="Provider operations",
    no_args_is_help=True,
)
app.add_typer(providers_app, name="providers")

from analytics_dispatcher.cli.providers import providers_list

providers_app.command("list")(providers_list)

session_app = typer.Typer(
    help="Session timing operations",
    no_args_is_help=True,
)
app.add_typer(session_app, name="session")

from analytics_dispatcher.cli.session import session_estimate

session_app.command("estimate")(session_estimate)

# Replay command is imported from analytics_dispatcher.cli.replay
from analytics_dispatcher.cli.replay import replay

app.command("replay")(replay)


# ==============================================================================
# Entry Point
# ==============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
