"""
Rich based cue sheet summary
"""

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from cuesheet.sheets import CueSheetFile
from cuesheet.tracklist import UNKNOWN_DURATION, build_tracklist


def get_general_info(cue_sheet: CueSheetFile) -> Text:
    """
    General info rich text
    """
    disc = cue_sheet.disc

    text = Text()
    text.append(f"Cue sheet: {cue_sheet.cue_path}\n")
    text.append(f"Encoding: {cue_sheet.encoding}\n")
    if disc.catalog:
        text.append(f"Catalog: {disc.catalog}\n")
    for key in ("GENRE", "DATE"):
        if value := disc.get_comment(key):
            text.append(f"{key.title()}: {value}\n")
    text.append(
        f"Files: {len(disc.files)}  Tracks: {len(disc.tracks)}",
    )
    return text


def get_tracks_table(cue_sheet: CueSheetFile) -> Table:
    table = Table("Track", "File", "Title", "Performer", "Start", "Duration")
    for entry in build_tracklist(cue_sheet.disc):
        table.add_row(
            f"{entry.number:02d}",
            escape(entry.file_name),
            escape(entry.title or ""),
            escape(entry.performer or ""),
            str(entry.start),
            entry.duration.to_mm_ss() if entry.duration else UNKNOWN_DURATION,
        )
    return table


def disc_panel(cue_sheet: CueSheetFile) -> Panel:
    """
    Summary panel titled after the disc performer and title
    """
    disc = cue_sheet.disc
    title = " - ".join(x for x in (disc.performer, disc.title) if x)

    return Panel.fit(
        Group(get_general_info(cue_sheet), Text(), get_tracks_table(cue_sheet)),
        title=Text(title or cue_sheet.cue_path.name),
        border_style="green",
        title_align="left",
        padding=(1, 1),
    )
