"""Unified CLI handler for input, output and error reporting."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from osftext.config import get_logger
from osftext.exceptions import DocumentIOError

logger = get_logger(__name__)


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None, quiet: bool = False) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for error output (standard error by default)
            quiet: Suppress error messages
        """
        self.console = console or Console(stderr=True)
        self.quiet = quiet

    def handle_error(self, error: Exception, exit_code: int = 1) -> None:
        """Report an error unless quiet and exit with ``exit_code``."""
        logger.debug(f"Command failed: {error}", exc_info=error)

        if not self.quiet:
            self.console.print(f"[red]{escape(str(error))}[/red]")

        raise typer.Exit(exit_code)

    def read_input(self, input_path: Path | None) -> bytes:
        """Read the named input file, or standard input when none is given.

        Raises:
            DocumentIOError: If the named file cannot be read
        """
        if input_path is None:
            return typer.get_binary_stream("stdin").read()
        try:
            return input_path.read_bytes()
        except OSError as e:
            raise DocumentIOError(
                message=f"Cannot read input: {input_path}",
                details={"file": str(input_path), "reason": str(e)},
            ) from e

    def write_output(self, data: bytes, output_path: Path | None) -> None:
        """Write ``data`` to the named output file, or standard output.

        Raises:
            DocumentIOError: If the output file cannot be written
        """
        if output_path is None:
            stdout = typer.get_binary_stream("stdout")
            stdout.write(data)
            stdout.flush()
            return
        try:
            output_path.write_bytes(data)
        except OSError as e:
            raise DocumentIOError(
                message=f"Cannot write output: {output_path}",
                details={"file": str(output_path), "reason": str(e)},
            ) from e
        logger.info("Wrote output", file=str(output_path), size=len(data))
