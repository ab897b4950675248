"""Typer CLI entrypoint with structured error handling."""

from __future__ import annotations

import sys
from typing import List, Optional

import click
import typer

from arima_pipeline.cli.commands.analyze import analyze
from arima_pipeline.cli.commands.fetch import fetch
from arima_pipeline.exceptions import (
    ConfigError,
    DataSourceError,
    DependencyError,
    ModelFitError,
    ModelSelectionError,
)
from arima_pipeline.utils.logging import configure_logging, get_logger

app = typer.Typer(help="ARIMA analysis pipeline CLI")


app.command()(fetch)
app.command()(analyze)


log = get_logger(__name__, component="cli")

EXIT_CONFIG = 1
EXIT_DATA = 2
EXIT_FIT = 3
EXIT_INTERRUPTED = 130
EXIT_UNEXPECTED = 255


def main(argv: Optional[List[str]] = None) -> None:
    """Run the CLI, mapping failures to exit codes.

    Runs typer outside standalone mode so Ctrl-C (raised by click as Abort)
    and domain errors reach the handlers below.
    """
    configure_logging(component="cli")
    try:
        code = app(args=argv, prog_name="arima-pipeline", standalone_mode=False)
    except (click.exceptions.Abort, KeyboardInterrupt):
        log.info("Interrupted")
        raise SystemExit(EXIT_INTERRUPTED)
    except click.ClickException as exc:
        exc.show()
        raise SystemExit(exc.exit_code)
    except (ConfigError, DependencyError) as exc:
        log.error(str(exc))
        raise SystemExit(EXIT_CONFIG)
    except DataSourceError as exc:
        log.error(f"Data retrieval failed: {exc}")
        raise SystemExit(EXIT_DATA)
    except (ModelFitError, ModelSelectionError) as exc:
        log.error(f"Model fitting failed: {exc}")
        raise SystemExit(EXIT_FIT)
    except Exception:
        log.exception("Unhandled exception")
        raise SystemExit(EXIT_UNEXPECTED)
    if isinstance(code, int) and code != 0:
        raise SystemExit(code)


if __name__ == "__main__":
    sys.exit(main())
