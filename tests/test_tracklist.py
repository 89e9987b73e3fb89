from cuesheet.models import Time
from cuesheet.parser import parse_cue
from cuesheet.tracklist import build_tracklist, format_musicbrainz


def test_durations(loveless_text):
    entries = build_tracklist(parse_cue(loveless_text))
    # track 02 starts with its INDEX 00
    assert entries[0].duration == Time.from_msf(4, 15, 40)
    assert entries[1].duration == Time.from_msf(7, 0, 30) - Time.from_msf(4, 17, 52)
    assert entries[2].duration is None


def test_durations_stop_at_file_boundary():
    disc = parse_cue(
        'FILE "01.wav" WAVE\nTRACK 01 AUDIO\nINDEX 01 00:00:00\n'
        'FILE "02.wav" WAVE\nTRACK 02 AUDIO\nINDEX 01 00:00:00\n'
    )
    entries = build_tracklist(disc)
    assert [x.duration for x in entries] == [None, None]
    assert [x.file_name for x in entries] == ["01.wav", "02.wav"]


def test_performer_falls_back_to_disc(loveless_text):
    entries = build_tracklist(parse_cue(loveless_text))
    assert entries[2].performer == "My Bloody Valentine"


def test_musicbrainz_format(loveless_text):
    text = format_musicbrainz(build_tracklist(parse_cue(loveless_text)))
    assert text.splitlines() == [
        "01 Only Shallow - My Bloody Valentine 04:15",
        "02 Loomer - My Bloody Valentine 02:42",
        "03 Touched - My Bloody Valentine ??:??",
    ]


def test_musicbrainz_format_untitled(minimal_text):
    assert format_musicbrainz(build_tracklist(parse_cue(minimal_text))) == (
        "01 Track 01 ??:??"
    )
