"""
cuesheet config

"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

OUTPUT_FORMATS = ("summary", "tracklist", "cue")

# keywords handled by the parser, never accepted as extension directives
CORE_DIRECTIVES = frozenset(
    {
        "CATALOG",
        "CDTEXTFILE",
        "TITLE",
        "PERFORMER",
        "SONGWRITER",
        "FILE",
        "TRACK",
        "INDEX",
        "PREGAP",
        "POSTGAP",
        "FLAGS",
        "ISRC",
        "REM",
    }
)


class CuesheetConfigError(Exception):
    """cuesheet configuration error"""


class TimestampPolicy(Enum):
    """
    Scope of the non-decreasing INDEX time check

    PER_FILE: times restart at every FILE, each file is checked on its own
    ACROSS_FILES: times never go back, even when a new FILE starts
    """

    PER_FILE = "per-file"
    ACROSS_FILES = "across-files"


@dataclass(frozen=True)
class ParserConfig:
    """
    Parser config

    extra_directives: allow-list of extension keywords accepted
    anywhere and ignored like REM
    """

    timestamp_policy: TimestampPolicy = TimestampPolicy.PER_FILE
    retain_comments: bool = True
    extra_directives: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.timestamp_policy, TimestampPolicy):
            raise CuesheetConfigError(
                f"Unsupported timestamp policy '{self.timestamp_policy}'"
            )
        # keywords are matched uppercased
        extra_directives = frozenset(x.upper() for x in self.extra_directives)
        if core := extra_directives & CORE_DIRECTIVES:
            raise CuesheetConfigError(
                f"Core directive(s) {', '.join(sorted(core))} "
                "cannot be ignored as extension directives"
            )
        object.__setattr__(self, "extra_directives", extra_directives)


@dataclass
class ConfigInput:
    """
    Input config
    """

    src_path: Path


@dataclass
class ConfigOutput:
    """
    Output config
    """

    out_format: str = "summary"

    def __post_init__(self) -> None:
        if self.out_format not in OUTPUT_FORMATS:
            raise CuesheetConfigError(
                f"Output format '{self.out_format}' is not one of "
                f"{', '.join(OUTPUT_FORMATS)}"
            )


@dataclass
class ConfigRuntime:
    """
    Runtime config
    """

    cue_encoding: str | None = None
    verbose: bool = False
    parser: ParserConfig = field(default_factory=ParserConfig)


@dataclass
class Config:
    """
    Config
    """

    input_: ConfigInput
    output_: ConfigOutput
    runtime_: ConfigRuntime
