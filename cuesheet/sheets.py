"""
Read cue sheets from the filesystem

"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import chardet

from cuesheet.config import ParserConfig
from cuesheet.models import Disc
from cuesheet.parser import parse_cue

logger = logging.getLogger(__name__)


class SheetLoadError(Exception):
    """Cue sheet file could not be read"""


@dataclass
class CueSheetFile:
    """
    Disc as returned by parse_cue
    with filesystem path to the CUE file and the encoding it was read with
    """

    disc: Disc
    cue_path: Path
    encoding: str


def read_cue_text(cue_path: Path, cue_encoding: str | None = None) -> tuple[str, str]:
    """
    Read a cue file, detecting its encoding when not given
    Return the text and the encoding used
    """
    cue_path = Path(cue_path).absolute()
    if not cue_path.is_file():
        raise SheetLoadError(f"Cue sheet '{cue_path}' not found")

    raw = cue_path.read_bytes()
    if not cue_encoding:
        cue_encoding = chardet.detect(raw)["encoding"] or "utf-8"
        logger.debug("%s: detected encoding %s", cue_path.name, cue_encoding)

    try:
        return raw.decode(cue_encoding), cue_encoding
    except (UnicodeDecodeError, LookupError) as exc:
        raise SheetLoadError(
            f"Couldn't decode '{cue_path}' as {cue_encoding}, "
            "try to specify the encoding explicitly"
        ) from exc


def load_cue_sheet(
    cue_path: Path,
    cue_encoding: str | None = None,
    config: ParserConfig | None = None,
) -> CueSheetFile:
    """
    Read and parse a single cue file
    """
    text, encoding = read_cue_text(cue_path, cue_encoding)
    return CueSheetFile(
        disc=parse_cue(text, config),
        cue_path=Path(cue_path).absolute(),
        encoding=encoding,
    )


def find_cue_sheets(src_dir: Path) -> Iterator[Path]:
    """
    Search for .cue files in src_dir and below, sorted per directory
    """
    for root, dirs, files in os.walk(src_dir):
        dirs.sort()
        for file in sorted(files):
            if Path(file).suffix.lower() == ".cue":
                yield Path(root).joinpath(file)
