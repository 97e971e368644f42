"""Command line entry points: ``osf2txt`` and ``osf2xml``."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from osftext import __version__
from osftext.cli.utils.cli_handler import CLIHandler
from osftext.config import get_logger, get_settings_for_cli
from osftext.config.settings import OSFTextSettings
from osftext.exceptions import OSFTextError
from osftext.parser.osf_models import Document
from osftext.parser.osf_parser import OSFParser, to_xml

logger = get_logger(__name__)

LICENSE_TEXT = """BSD 2-Clause License

Copyright (c) 2017, osftext contributors
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

* Redistributions of source code must retain the above copyright notice, this
  list of conditions and the following disclaimer.

* Redistributions in binary form must reproduce the above copyright notice,
  this list of conditions and the following disclaimer in the documentation
  and/or other materials provided with the distribution.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""

InputOption = Annotated[
    Path | None,
    typer.Option("--input", "-i", help="Input filename (default: standard input)"),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Output filename (default: standard output)"),
]
QuietOption = Annotated[
    bool, typer.Option("--quiet", help="Suppress error messages")
]
LicenseOption = Annotated[
    bool, typer.Option("--license", "-l", help="Display license and exit")
]
VersionOption = Annotated[
    bool, typer.Option("--version", "-v", help="Display version and exit")
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config", "-c", help="Path to configuration file", envvar="OSFTEXT_CONFIG"
    ),
]

text_app = typer.Typer(
    name="osf2txt",
    help="Read an Open Screenplay Format file and write plain text.",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

xml_app = typer.Typer(
    name="osf2xml",
    help="Read an OSF file or .fadein project and write normalized OSF XML.",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)


def _show_info(program: str, show_license: bool, show_version: bool) -> None:
    if show_license:
        typer.echo(LICENSE_TEXT)
        raise typer.Exit(0)
    if show_version:
        typer.echo(f"{program} {__version__}")
        raise typer.Exit(0)


def load_document(
    handler: CLIHandler, settings: OSFTextSettings, input_path: Path | None
) -> Document:
    """Parse the input source.

    A named input with an extension goes through ``parse_file``, so packaged
    projects are unpacked. Anything else is read whole and parsed as flat
    OSF XML.
    """
    parser = OSFParser(
        packaged_extensions=settings.packaged_extensions,
        document_member=settings.document_member,
    )
    if input_path is not None and input_path.suffix:
        return parser.parse_file(input_path)
    return parser.parse(handler.read_input(input_path))


@text_app.command()
def osf2txt(
    input_path: InputOption = None,
    output_path: OutputOption = None,
    newline: Annotated[
        bool, typer.Option("--newline", "--nl", help="Add a trailing newline")
    ] = False,
    quiet: QuietOption = False,
    show_license: LicenseOption = False,
    show_version: VersionOption = False,
    config: ConfigOption = None,
) -> None:
    """Convert an OSF document into plain text.

    Example: osf2txt -i screenplay.osf -o screenplay.txt
    """
    _show_info("osf2txt", show_license, show_version)
    handler = CLIHandler(quiet=quiet)

    try:
        settings = get_settings_for_cli(
            config_file=config,
            cli_overrides={"trailing_newline": True} if newline else None,
        )
        document = load_document(handler, settings, input_path)
        text = document.render()
        if settings.trailing_newline:
            text += "\n"
        handler.write_output(text.encode("utf-8"), output_path)
    except (OSFTextError, FileNotFoundError) as e:
        handler.handle_error(e)


@xml_app.command()
def osf2xml(
    input_path: InputOption = None,
    output_path: OutputOption = None,
    quiet: QuietOption = False,
    show_license: LicenseOption = False,
    show_version: VersionOption = False,
    config: ConfigOption = None,
) -> None:
    """Re-serialize an OSF document with self-closing empty elements.

    Example: osf2xml -i screenplay.fadein -o screenplay.osf
    """
    _show_info("osf2xml", show_license, show_version)
    handler = CLIHandler(quiet=quiet)

    try:
        settings = get_settings_for_cli(config_file=config)
        document = load_document(handler, settings, input_path)
        handler.write_output(to_xml(document), output_path)
    except (OSFTextError, FileNotFoundError) as e:
        handler.handle_error(e)


def main() -> None:
    """Main CLI entry point for ``osf2txt``."""
    text_app()


def xml_main() -> None:
    """Main CLI entry point for ``osf2xml``."""
    xml_app()


if __name__ == "__main__":
    main()
