# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

import os
import sys

import typer
from colorama import init
from dotenv import load_dotenv

from gitdrop.commands import clean, preview, run, status
from gitdrop.commands import init as init_command
from gitdrop.constants import APP_NAME
from gitdrop.context import GlobalOptions
from gitdrop.core.exceptions import handle_gitdrop_exception
from gitdrop.core.logging.logging import setup_logger
from gitdrop.core.ui.theme import set_theme
from gitdrop.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    setup_signal_handlers,
    version_callback,
)

# Initialize colorama (colored output in terminal)
init(autoreset=True)

# main cli app
app = typer.Typer(
    help=f"{APP_NAME}: Publish local changes to a remote as commits spread across your day",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

# Main cli commands
app.command(name="init")(init_command.main)
app.command(name="preview")(preview.main)
app.command(name="run")(run.main)
app.command(name="status")(status.main)
app.command(name="clean")(clean.main)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        "-LD",
        callback=get_log_dir_callback,
        is_eager=True,
        help="Show log path (where logs for gitdrop live) and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging output"
    ),
    silent: bool = typer.Option(
        False, "--silent", "-s", help="Do not output any text to the console"
    ),
) -> None:
    """
    Global setup callback. Initialize logging and options used by commands
    """
    with handle_gitdrop_exception(exit_on_fail=True):
        if ctx.invoked_subcommand is None:
            print(ctx.get_help())
            raise typer.Exit()

        # skip --help in subcommands
        if any(arg in ctx.help_option_names for arg in sys.argv):
            return

        if os.environ.get("NO_COLOR"):
            set_theme("mono")

        setup_logger(ctx.invoked_subcommand, debug=verbose, silent=silent)
        setup_signal_handlers()

        ctx.obj = GlobalOptions(verbose=verbose, silent=silent)


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8
    ensure_utf8_output()
    # load any .env files (config values possibly set through env)
    load_dotenv()
    # launch cli
    app(prog_name=APP_NAME)


if __name__ == "__main__":
    run_app()
