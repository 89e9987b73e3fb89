"""
Cue sheet data model

Disc -> FileEntry -> Track -> Index, each level exclusively owning the next
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

FRAMES_PER_SECOND = 75
SECONDS_PER_MINUTE = 60


class CueEnum(Enum):
    """
    Closed set of cue sheet tokens
    Member values are the tokens as written in a cue sheet
    """

    @classmethod
    def from_token(cls, token: str) -> "CueEnum":
        """
        Case-insensitive lookup, ValueError for tokens outside the set
        """
        try:
            return cls(token.upper())
        except ValueError as exc:
            raise ValueError(f"unknown {cls.__name__} '{token}'") from exc

    def __str__(self) -> str:
        return self.value


class FileType(CueEnum):
    BINARY = "BINARY"
    MOTOROLA = "MOTOROLA"
    AIFF = "AIFF"
    WAVE = "WAVE"
    MP3 = "MP3"


class TrackType(CueEnum):
    AUDIO = "AUDIO"
    CDG = "CDG"
    MODE1_2048 = "MODE1/2048"
    MODE1_2352 = "MODE1/2352"
    MODE2_2048 = "MODE2/2048"
    MODE2_2324 = "MODE2/2324"
    MODE2_2336 = "MODE2/2336"
    MODE2_2352 = "MODE2/2352"
    CDI_2336 = "CDI/2336"
    CDI_2352 = "CDI/2352"


class TrackFlag(CueEnum):
    DCP = "DCP"
    FOUR_CHANNEL = "4CH"
    PRE = "PRE"
    SCMS = "SCMS"


@dataclass(frozen=True, order=True)
class Time:
    """
    Disc time as a frame count, 75 frames per second
    """

    total_frames: int = 0

    @classmethod
    def from_msf(cls, minutes: int, seconds: int, frames: int) -> "Time":
        """
        Build from minutes/seconds/frames
        Raise ValueError for seconds or frames out of range
        """
        if minutes < 0:
            raise ValueError(f"minutes must not be negative, got {minutes}")
        if not 0 <= seconds < SECONDS_PER_MINUTE:
            raise ValueError(f"seconds must be within 0-59, got {seconds}")
        if not 0 <= frames < FRAMES_PER_SECOND:
            raise ValueError(f"frames must be within 0-74, got {frames}")
        return cls(
            (minutes * SECONDS_PER_MINUTE + seconds) * FRAMES_PER_SECOND + frames
        )

    @property
    def minutes(self) -> int:
        return self.total_frames // (SECONDS_PER_MINUTE * FRAMES_PER_SECOND)

    @property
    def seconds(self) -> int:
        return (self.total_frames // FRAMES_PER_SECOND) % SECONDS_PER_MINUTE

    @property
    def frames(self) -> int:
        return self.total_frames % FRAMES_PER_SECOND

    @property
    def total_seconds(self) -> float:
        return self.total_frames / FRAMES_PER_SECOND

    def __sub__(self, other: "Time") -> "Time":
        if not isinstance(other, Time):
            return NotImplemented
        return Time(self.total_frames - other.total_frames)

    def __add__(self, other: "Time") -> "Time":
        if not isinstance(other, Time):
            return NotImplemented
        return Time(self.total_frames + other.total_frames)

    def __str__(self) -> str:
        return f"{self.minutes:02d}:{self.seconds:02d}:{self.frames:02d}"

    def to_mm_ss(self) -> str:
        """
        mm:ss rendering, frames dropped
        """
        return f"{self.minutes:02d}:{self.seconds:02d}"


@dataclass(frozen=True)
class Index:
    number: int
    time: Time


@dataclass
class Track:
    """
    A TRACK block
    Indices, flags and metadata in the order they were declared
    """

    number: int
    track_type: TrackType
    indices: list[Index] = field(default_factory=list)
    title: str | None = None
    performer: str | None = None
    songwriter: str | None = None
    cdtextfile: str | None = None
    isrc: str | None = None
    flags: list[TrackFlag] = field(default_factory=list)
    pregap: Time | None = None
    postgap: Time | None = None
    comments: dict[str, list[str]] = field(default_factory=dict)

    def get_index(self, number: int) -> Index | None:
        return next((x for x in self.indices if x.number == number), None)

    @property
    def start(self) -> Time | None:
        """
        INDEX 01 time
        """
        if index := self.get_index(1):
            return index.time
        return None

    @property
    def first_time(self) -> Time | None:
        """
        Earliest index time, INDEX 00 when present
        """
        return self.indices[0].time if self.indices else None


@dataclass
class FileEntry:
    name: str
    file_type: FileType
    tracks: list[Track] = field(default_factory=list)
    comments: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class Disc:
    """
    Parsed cue sheet root
    """

    catalog: str | None = None
    title: str | None = None
    performer: str | None = None
    songwriter: str | None = None
    cdtextfile: str | None = None
    files: list[FileEntry] = field(default_factory=list)
    comments: dict[str, list[str]] = field(default_factory=dict)

    @property
    def tracks(self) -> list[Track]:
        """
        All tracks across all files, in disc order
        """
        return list(self.iter_tracks())

    def iter_tracks(self) -> Iterator[Track]:
        for file_entry in self.files:
            yield from file_entry.tracks

    def get_comment(self, key: str) -> str | None:
        """
        First disc level REM value for key (e.g. GENRE, DATE)
        """
        if values := self.comments.get(key.upper()):
            return values[0]
        return None
