"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated

import typer

from fmpub.cli.commands import build_cmd, check_cmd, show_cmd


app = typer.Typer(name="fmpub", no_args_is_help=True, help="Front-matter validation and post publishing pipeline")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level")] = False,
    ):
    ctx.obj = {"verbose": verbose}


app.command(name="check")(check_cmd)
app.command(name="show")(show_cmd)
app.command(name="build")(build_cmd)
