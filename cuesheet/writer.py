"""
Render a Disc as cue sheet text

Layout is normalized: two-space indentation, quoted strings,
directives in the conventional order
"""

from cuesheet.models import Disc, FileEntry, Track
from cuesheet.tokenizer import QUOTE

INDENT = "  "


def quote(value: str) -> str:
    if QUOTE in value:
        raise ValueError(f"cannot write a value containing a double quote: {value}")
    return f'"{value}"'


def _comment_lines(comments: dict[str, list[str]]) -> list[str]:
    lines = []
    for key, values in comments.items():
        for value in values:
            # REM is free text, quotes are only needed around whitespace
            if value and QUOTE not in value and value.split() != [value]:
                value = quote(value)
            lines.append(" ".join(x for x in ("REM", key, value) if x))
    return lines


def _metadata_lines(owner: Disc | Track) -> list[str]:
    return [
        f"{keyword} {quote(value)}"
        for keyword, value in (
            ("CDTEXTFILE", owner.cdtextfile),
            ("PERFORMER", owner.performer),
            ("TITLE", owner.title),
            ("SONGWRITER", owner.songwriter),
        )
        if value is not None
    ]


def _track_lines(track: Track) -> list[str]:
    lines = [f"TRACK {track.number:02d} {track.track_type}"]
    body = _metadata_lines(track)
    if track.isrc:
        body.append(f"ISRC {track.isrc}")
    if track.flags:
        body.append("FLAGS " + " ".join(str(x) for x in track.flags))
    body.extend(_comment_lines(track.comments))
    if track.pregap is not None:
        body.append(f"PREGAP {track.pregap}")
    body.extend(f"INDEX {x.number:02d} {x.time}" for x in track.indices)
    if track.postgap is not None:
        body.append(f"POSTGAP {track.postgap}")
    return lines + [INDENT + x for x in body]


def _file_lines(file_entry: FileEntry) -> list[str]:
    lines = [f"FILE {quote(file_entry.name)} {file_entry.file_type}"]
    body = _comment_lines(file_entry.comments)
    for track in file_entry.tracks:
        body.extend(_track_lines(track))
    return lines + [INDENT + x for x in body]


def dumps(disc: Disc, line_ending: str = "\n") -> str:
    """
    Cue sheet text for disc, ending with a line break
    """
    lines = _comment_lines(disc.comments)
    if disc.catalog:
        lines.append(f"CATALOG {disc.catalog}")
    lines.extend(_metadata_lines(disc))
    for file_entry in disc.files:
        lines.extend(_file_lines(file_entry))
    return line_ending.join(lines) + line_ending
