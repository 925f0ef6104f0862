import logging
from typing import Annotated

import typer

from datalist.cli.query import query_app
from datalist.config import get_settings

app = typer.Typer(
    name="datalist",
    help="Datalist CLI: match, compare, filter and sort typed values.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(query_app, name="query")


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level.")] = False,
) -> None:
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main() -> None:
    app()
