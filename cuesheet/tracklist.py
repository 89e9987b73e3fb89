"""
Tracklist view of a parsed cue sheet

Track durations can only be worked out between tracks of the same file,
the last track of every file has an unknown duration
"""

from dataclasses import dataclass

from cuesheet.models import Disc, Time, Track

UNKNOWN_DURATION = "??:??"


@dataclass
class TracklistEntry:
    """
    One track with the file it belongs to and its duration if known
    """

    number: int
    title: str | None
    performer: str | None
    file_name: str
    start: Time
    duration: Time | None


def track_duration(track: Track, next_track: Track | None) -> Time | None:
    """
    Time from INDEX 01 of track to the first index of the next track
    """
    if next_track is None:
        return None
    return next_track.first_time - track.start


def build_tracklist(disc: Disc) -> list[TracklistEntry]:
    """
    Flatten a Disc into tracklist entries
    Track performer falls back to the disc performer
    """
    entries = []
    for file_entry in disc.files:
        tracks = file_entry.tracks
        for idx, track in enumerate(tracks):
            next_track = tracks[idx + 1] if idx + 1 < len(tracks) else None
            entries.append(
                TracklistEntry(
                    number=track.number,
                    title=track.title,
                    performer=track.performer or disc.performer,
                    file_name=file_entry.name,
                    start=track.start,
                    duration=track_duration(track, next_track),
                )
            )
    return entries


def format_musicbrainz(entries: list[TracklistEntry]) -> str:
    """
    Tracklist text accepted by the MusicBrainz track parser:
    '01 Title - Performer 04:17'
    """
    lines = []
    for entry in entries:
        title = entry.title or f"Track {entry.number:02d}"
        performer = f" - {entry.performer}" if entry.performer else ""
        duration = entry.duration.to_mm_ss() if entry.duration else UNKNOWN_DURATION
        lines.append(f"{entry.number:02d} {title}{performer} {duration}")
    return "\n".join(lines)
