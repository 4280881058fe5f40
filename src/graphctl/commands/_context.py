"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides graph loading from an edge-list stream and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TextIO

import click

from graphctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from graphctl.config.settings import GraphSettings
    from graphctl.domain.graph import Graph
    from graphctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.
    """

    def __init__(self, settings: GraphSettings) -> None:
        self.settings = settings

        # Configure structured logging
        from graphctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from graphctl.services.telemetry import enable_telemetry

            enable_telemetry()

    def load_graph(
        self,
        source: TextIO,
        *,
        directed: bool | None = None,
        vertex_count: int | None = None,
    ) -> Graph:
        """Read an edge list from *source*, exiting with an error result on failure.

        *directed* falls back to the ``[graph] directed`` setting.
        """
        from graphctl.domain.errors import GraphError
        from graphctl.domain.reader import read_graph
        from graphctl.services._helpers import error_result

        if directed is None:
            directed = self.settings.graph.directed
        try:
            graph = read_graph(
                source,
                directed=directed,
                vertex_count=vertex_count,
                comment_prefix=self.settings.reader.comment_prefix,
                max_vertex=self.settings.graph.max_vertex,
            )
        except GraphError as exc:
            logger.debug("Failed to load graph from %s", getattr(source, "name", "?"))
            self.emit(error_result("load", exc))
            raise SystemExit(1) from exc
        logger.debug("Loaded %r", graph)
        return graph

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output and not settings.quiet:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
