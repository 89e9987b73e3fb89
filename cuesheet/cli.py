#!/usr/bin/env python

"""
Command line parser
"""
import argparse
import logging
import signal
import sys
import textwrap
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from cuesheet.config import (
    OUTPUT_FORMATS,
    Config,
    ConfigInput,
    ConfigOutput,
    ConfigRuntime,
    CuesheetConfigError,
    ParserConfig,
    TimestampPolicy,
)
from cuesheet.errors import CueError
from cuesheet.render import disc_panel
from cuesheet.sheets import (
    CueSheetFile,
    SheetLoadError,
    find_cue_sheets,
    load_cue_sheet,
)
from cuesheet.tracklist import build_tracklist, format_musicbrainz
from cuesheet.writer import dumps

logger = logging.getLogger(__name__)


def print_sheet(console: Console, cue_sheet: CueSheetFile, out_format: str) -> None:
    """
    Print a parsed cue sheet in the requested format
    """
    if out_format == "tracklist":
        console.out(format_musicbrainz(build_tracklist(cue_sheet.disc)))
    elif out_format == "cue":
        console.out(dumps(cue_sheet.disc), end="")
    else:
        console.print(disc_panel(cue_sheet))


def main(argv: list[str] | None = None) -> None:
    """
    Parse cmd args
    Parse every requested cue sheet
    Print the results, exit with 1 if any sheet failed
    """

    console = Console()
    err_console = Console(stderr=True)

    # pylint: disable=unused-argument
    def signal_handler(sig, frame) -> None:
        """
        Handle ctrl+c
        """
        # take cli cursor back from rich
        console.show_cursor(show=True)
        sys.exit(130)

    signal.signal(signal.SIGINT, signal_handler)

    argparser = argparse.ArgumentParser(
        prog="cuesheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """\
            Output formats:
                summary   = disc info and a track table
                tracklist = MusicBrainz track parser format
                cue       = normalized cue sheet text

            Timestamp policies:
                per-file     = INDEX times restart with every FILE
                across-files = INDEX times never go back, even across FILEs
            """
        ),
    )
    argparser.add_argument(
        "src_path",
        help="path to a CUE file or a directory",
        type=Path,
    )
    argparser.add_argument(
        "-e",
        "--encoding",
        help="CUE sheet file encoding. Default: detected by chardet",
        type=str,
        default=None,
    )
    argparser.add_argument(
        "-f",
        "--format",
        help="output format. Default: summary",
        choices=OUTPUT_FORMATS,
        default="summary",
    )
    argparser.add_argument(
        "-t",
        "--timestamps",
        help="INDEX time ordering policy. Default: per-file",
        choices=[x.value for x in TimestampPolicy],
        default=TimestampPolicy.PER_FILE.value,
    )
    argparser.add_argument(
        "-x",
        "--extra-directive",
        help="extension directive to accept and ignore, may be repeated",
        action="append",
        default=[],
    )
    argparser.add_argument(
        "--no-comments",
        help="drop REM lines instead of keeping them as comments",
        action="store_true",
    )
    argparser.add_argument(
        "-v",
        "--verbose",
        help="debug logging",
        action="store_true",
    )
    parsed = argparser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )

    try:
        config = Config(
            input_=ConfigInput(src_path=parsed.src_path),
            output_=ConfigOutput(out_format=parsed.format),
            runtime_=ConfigRuntime(
                cue_encoding=parsed.encoding,
                verbose=parsed.verbose,
                parser=ParserConfig(
                    timestamp_policy=TimestampPolicy(parsed.timestamps),
                    retain_comments=not parsed.no_comments,
                    extra_directives=frozenset(parsed.extra_directive),
                ),
            ),
        )
    except CuesheetConfigError as exc:
        argparser.error(str(exc))

    src_path = config.input_.src_path
    if src_path.is_dir():
        with console.status("Searching for cue files\n"):
            cue_paths = list(find_cue_sheets(src_path))
        if not cue_paths:
            err_console.print(f"No cue sheets found in '{escape(str(src_path))}'")
            sys.exit(1)
    else:
        cue_paths = [src_path]

    failed = 0
    for cue_path in cue_paths:
        try:
            cue_sheet = load_cue_sheet(
                cue_path,
                cue_encoding=config.runtime_.cue_encoding,
                config=config.runtime_.parser,
            )
        except (CueError, SheetLoadError) as exc:
            err_console.print(
                f"[red]{escape(str(cue_path))}[/red]: {escape(str(exc))}"
            )
            failed += 1
            continue

        logger.debug("%s: %d track(s)", cue_path, len(cue_sheet.disc.tracks))
        print_sheet(console, cue_sheet, config.output_.out_format)

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
