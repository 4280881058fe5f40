"""Custom Click base classes and shared graph-input options.

Provides CtlCommand and CtlGroup that accept an ``examples`` parameter.
When ``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

_F = TypeVar("_F", bound=Callable[..., Any])


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class CtlCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class CtlGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = CtlCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    """

    command_class = CtlCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def graph_source(func: _F) -> _F:
    """Add the edge-list SOURCE argument plus ``--directed`` and ``--vertices``.

    SOURCE is a file path or ``-`` for stdin. Without ``--vertices`` the
    first integer in SOURCE is the vertex count.
    """
    func = click.option(
        "--vertices",
        "vertex_count",
        type=int,
        default=None,
        help="Vertex count; SOURCE then holds only edge pairs.",
    )(func)
    func = click.option(
        "--directed/--undirected",
        default=None,
        help="Graph kind (default from [graph] directed).",
    )(func)
    func = click.argument("source", type=click.File("r"), default="-")(func)
    return func
