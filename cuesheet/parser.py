"""
Cue sheet parser

Fold tokenized lines into a Disc, tracking the enclosing block
(disc, file or track) to decide which directives are legal
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from cuesheet.config import ParserConfig, TimestampPolicy
from cuesheet.errors import (
    CueSyntaxError,
    CueValidationError,
    UnexpectedDirectiveError,
    UnknownEnumError,
)
from cuesheet.models import (
    CueEnum,
    Disc,
    FileEntry,
    FileType,
    Index,
    Time,
    Track,
    TrackFlag,
    TrackType,
)
from cuesheet.tokenizer import QUOTE, Line, tokenize

logger = logging.getLogger(__name__)

NUMBER_RE = re.compile(r"[0-9]+")
TIME_RE = re.compile(r"([0-9]+):([0-9]{2}):([0-9]{2})")
CATALOG_RE = re.compile(r"[0-9]{13}")
ISRC_RE = re.compile(r"[A-Za-z0-9]{12}")

MAX_TRACK_NUMBER = 99
MAX_INDEX_NUMBER = 99


class Context(Enum):
    """
    Block the parser is in
    """

    AT_DISC = "AtDisc"
    AT_FILE = "AtFile"
    AT_TRACK = "AtTrack"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Directive:
    """
    Handler method name, contexts the keyword is legal in
    and the exact argument count (None when variable)
    """

    handler: str
    contexts: frozenset[Context]
    argc: int | None


_DISC_OR_TRACK = frozenset({Context.AT_DISC, Context.AT_TRACK})
_FILE_OR_TRACK = frozenset({Context.AT_FILE, Context.AT_TRACK})
_TRACK = frozenset({Context.AT_TRACK})
_ANY = frozenset(Context)

DIRECTIVES = {
    "CATALOG": Directive("_cmd_catalog", frozenset({Context.AT_DISC}), 1),
    "CDTEXTFILE": Directive("_cmd_metadata", _DISC_OR_TRACK, 1),
    "TITLE": Directive("_cmd_metadata", _DISC_OR_TRACK, 1),
    "PERFORMER": Directive("_cmd_metadata", _DISC_OR_TRACK, 1),
    "SONGWRITER": Directive("_cmd_metadata", _DISC_OR_TRACK, 1),
    "FILE": Directive("_cmd_file", _DISC_OR_TRACK, 2),
    "TRACK": Directive("_cmd_track", _FILE_OR_TRACK, 2),
    "INDEX": Directive("_cmd_index", _TRACK, 2),
    "PREGAP": Directive("_cmd_pregap", _TRACK, 1),
    "POSTGAP": Directive("_cmd_postgap", _TRACK, 1),
    "FLAGS": Directive("_cmd_flags", _TRACK, None),
    "ISRC": Directive("_cmd_isrc", _TRACK, 1),
    "REM": Directive("_cmd_rem", _ANY, None),
}


def parse_cue(text: str, config: ParserConfig | None = None) -> Disc:
    """
    Parse cue sheet text into a Disc
    Raise a CueError subclass on the first problem found
    """
    return CueParser(config).parse(text)


class CueParser:
    """
    Cue sheet parser
    Holds at most one open FileEntry and one open Track,
    each is validated and attached to its parent when sealed
    """

    def __init__(self, config: ParserConfig | None = None):
        self.config = config or ParserConfig()
        self.reset()

    def reset(self) -> None:
        """
        Reset parser state for new text
        """
        self.disc = Disc()
        self.context = Context.AT_DISC
        self.current_file: FileEntry | None = None
        self.current_track: Track | None = None
        self.track_line_number = 0
        self.last_track_number = 0
        self.last_time: Time | None = None
        self.line_number = 0

    def parse(self, text: str) -> Disc:
        """
        Parse cue sheet text
        Return the finished Disc
        """
        self.reset()
        for line in tokenize(text):
            self.line_number = line.line_number
            self.feed(line)
        return self.finish()

    def feed(self, line: Line) -> None:
        """
        Apply one line to the tree under construction
        """
        if line.keyword in self.config.extra_directives:
            logger.debug("line %d: ignoring %s", line.line_number, line.keyword)
            return

        directive = DIRECTIVES.get(line.keyword)
        if directive is None:
            raise UnexpectedDirectiveError(
                f"unknown directive {line.keyword} in {self.context}",
                line_number=line.line_number,
                keyword=line.keyword,
                context=str(self.context),
            )
        if self.context not in directive.contexts:
            raise UnexpectedDirectiveError(
                f"{line.keyword} is not allowed in {self.context}",
                line_number=line.line_number,
                keyword=line.keyword,
                context=str(self.context),
            )
        if directive.argc is not None and len(line.arguments) != directive.argc:
            raise CueSyntaxError(
                f"{line.keyword} expects {directive.argc} argument(s), "
                f"got {len(line.arguments)}",
                line_number=line.line_number,
                keyword=line.keyword,
            )

        getattr(self, directive.handler)(line)

    def finish(self) -> Disc:
        """
        Seal the open track and file at end of input
        """
        if self.context is Context.AT_DISC:
            raise CueSyntaxError(
                "empty sheet, no FILE directive found",
                line_number=self.line_number or 1,
            )
        if self.context is Context.AT_FILE:
            raise CueValidationError(
                f"file '{self.current_file.name}' has no TRACK",
                line_number=self.line_number,
                keyword="FILE",
            )

        self._seal_track(self.line_number)
        self._seal_file()
        logger.debug(
            "parsed %d file(s), %d track(s)",
            len(self.disc.files),
            self.last_track_number,
        )
        return self.disc

    def _cmd_catalog(self, line: Line) -> None:
        catalog = line.arguments[0]
        if self.disc.catalog is not None:
            raise CueValidationError(
                "CATALOG is already set",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        if not CATALOG_RE.fullmatch(catalog):
            raise CueValidationError(
                f"CATALOG must be 13 digits, got '{catalog}'",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        self.disc.catalog = catalog

    def _cmd_metadata(self, line: Line) -> None:
        """
        TITLE, PERFORMER, SONGWRITER and CDTEXTFILE
        on the disc or on the open track
        """
        owner = self.disc if self.context is Context.AT_DISC else self.current_track
        attr = line.keyword.lower()
        if getattr(owner, attr) is not None:
            raise CueValidationError(
                f"{line.keyword} is already set for this {self._owner_name()}",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        setattr(owner, attr, line.arguments[0])

    def _cmd_file(self, line: Line) -> None:
        name, type_token = line.arguments
        self._seal_track(line.line_number)
        self._seal_file()

        self.current_file = FileEntry(
            name=name,
            file_type=self._enum(FileType, type_token, line),
        )
        self.context = Context.AT_FILE
        if self.config.timestamp_policy is TimestampPolicy.PER_FILE:
            self.last_time = None
        logger.debug(
            "line %d: FILE '%s' %s",
            line.line_number,
            name,
            self.current_file.file_type,
        )

    def _cmd_track(self, line: Line) -> None:
        number_token, type_token = line.arguments
        self._seal_track(line.line_number)
        number = self._number(number_token, line)
        track_type = self._enum(TrackType, type_token, line)

        if not 1 <= number <= MAX_TRACK_NUMBER:
            raise CueValidationError(
                f"track number must be within 1-{MAX_TRACK_NUMBER}, got {number}",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        if number != self.last_track_number + 1:
            raise CueValidationError(
                f"expected track {self.last_track_number + 1:02d}, got {number:02d}",
                line_number=line.line_number,
                keyword=line.keyword,
            )

        self.current_track = Track(number=number, track_type=track_type)
        self.last_track_number = number
        self.track_line_number = line.line_number
        self.context = Context.AT_TRACK
        logger.debug("line %d: TRACK %02d %s", line.line_number, number, track_type)

    def _cmd_index(self, line: Line) -> None:
        number_token, time_token = line.arguments
        number = self._number(number_token, line)
        time = self._time(time_token, line)
        indices = self.current_track.indices

        if number > MAX_INDEX_NUMBER:
            raise CueValidationError(
                f"index number must be within 0-{MAX_INDEX_NUMBER}, got {number}",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        if not indices and number > 1:
            raise CueValidationError(
                f"first index of a track must be INDEX 00 or 01, got {number:02d}",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        if indices and number <= indices[-1].number:
            raise CueValidationError(
                f"INDEX {number:02d} follows INDEX {indices[-1].number:02d}, "
                "index numbers must increase",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        if indices and indices[-1].number == 0 and number != 1:
            raise CueValidationError(
                f"INDEX 00 must be followed by INDEX 01, got {number:02d}",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        if self.last_time is not None and time < self.last_time:
            raise CueValidationError(
                f"INDEX {number:02d} time {time} is earlier than {self.last_time}",
                line_number=line.line_number,
                keyword=line.keyword,
            )

        indices.append(Index(number=number, time=time))
        self.last_time = time

    def _cmd_pregap(self, line: Line) -> None:
        if self.current_track.pregap is not None:
            raise CueValidationError(
                "PREGAP is already set for this track",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        if self.current_track.indices:
            raise CueValidationError(
                "PREGAP must precede the track's INDEX directives",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        self.current_track.pregap = self._time(line.arguments[0], line)

    def _cmd_postgap(self, line: Line) -> None:
        if self.current_track.postgap is not None:
            raise CueValidationError(
                "POSTGAP is already set for this track",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        self.current_track.postgap = self._time(line.arguments[0], line)

    def _cmd_flags(self, line: Line) -> None:
        if not line.arguments:
            raise CueSyntaxError(
                "FLAGS expects at least one flag",
                line_number=line.line_number,
                keyword=line.keyword,
            )

        flags = list(self.current_track.flags)
        for token in line.arguments:
            flag = self._enum(TrackFlag, token, line)
            if flag in flags:
                raise CueValidationError(
                    f"duplicate flag {flag}",
                    line_number=line.line_number,
                    keyword=line.keyword,
                )
            flags.append(flag)
        self.current_track.flags = flags

    def _cmd_isrc(self, line: Line) -> None:
        isrc = line.arguments[0]
        if self.current_track.isrc is not None:
            raise CueValidationError(
                "ISRC is already set for this track",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        if not ISRC_RE.fullmatch(isrc):
            raise CueValidationError(
                f"ISRC must be 12 alphanumeric characters, got '{isrc}'",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        self.current_track.isrc = isrc

    def _cmd_rem(self, line: Line) -> None:
        if not self.config.retain_comments:
            return

        owner = {
            Context.AT_DISC: self.disc,
            Context.AT_FILE: self.current_file,
            Context.AT_TRACK: self.current_track,
        }[self.context]
        key = line.arguments[0].upper() if line.arguments else ""
        value = unquote(line.arguments[1]) if len(line.arguments) > 1 else ""
        owner.comments.setdefault(key, []).append(value)

    def _seal_track(self, line_number: int) -> None:
        """
        Validate the open track and attach it to the open file
        """
        if self.current_track is None:
            return
        if self.current_track.start is None:
            raise CueValidationError(
                f"track {self.current_track.number:02d} "
                f"(line {self.track_line_number}) has no INDEX 01",
                line_number=line_number,
                keyword="TRACK",
            )
        self.current_file.tracks.append(self.current_track)
        self.current_track = None

    def _seal_file(self) -> None:
        if self.current_file is None:
            return
        self.disc.files.append(self.current_file)
        self.current_file = None

    def _owner_name(self) -> str:
        return "disc" if self.context is Context.AT_DISC else "track"

    @staticmethod
    def _number(token: str, line: Line) -> int:
        """
        ASCII digits only, no sign
        """
        if not NUMBER_RE.fullmatch(token):
            raise CueSyntaxError(
                f"malformed number '{token}'",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        return int(token)

    @staticmethod
    def _time(token: str, line: Line) -> Time:
        """
        mm:ss:ff timestamp
        """
        if not (match := TIME_RE.fullmatch(token)):
            raise CueSyntaxError(
                f"malformed timestamp '{token}', expected mm:ss:ff",
                line_number=line.line_number,
                keyword=line.keyword,
            )
        try:
            return Time.from_msf(*(int(x) for x in match.groups()))
        except ValueError as exc:
            raise CueValidationError(
                f"invalid timestamp '{token}': {exc}",
                line_number=line.line_number,
                keyword=line.keyword,
            ) from exc

    @staticmethod
    def _enum(enum_cls: type[CueEnum], token: str, line: Line) -> CueEnum:
        try:
            return enum_cls.from_token(token)
        except ValueError as exc:
            raise UnknownEnumError(
                str(exc),
                line_number=line.line_number,
                keyword=line.keyword,
            ) from exc


def unquote(value: str) -> str:
    """
    Strip one pair of surrounding double quotes
    """
    if len(value) >= 2 and value[0] == QUOTE and value[-1] == QUOTE:
        return value[1:-1]
    return value
