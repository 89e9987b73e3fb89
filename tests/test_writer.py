import pytest
from cuesheet.models import Disc, FileEntry, FileType, Index, Time, Track, TrackType
from cuesheet.parser import parse_cue
from cuesheet.writer import dumps


def test_minimal_layout(minimal_text):
    assert dumps(parse_cue(minimal_text)) == (
        'FILE "a.bin" BINARY\n'
        "  TRACK 01 AUDIO\n"
        "    INDEX 01 00:00:00\n"
    )


def test_reparse_equal(loveless_text, disc_image_text):
    for text in (loveless_text, disc_image_text):
        disc = parse_cue(text)
        assert parse_cue(dumps(disc)) == disc


def test_rem_quoting(loveless_text):
    text = dumps(parse_cue(loveless_text), line_ending="\r\n")
    assert text.startswith("REM GENRE Alternative\r\n")
    assert 'REM COMMENT "ExactAudioCopy v0.95b4"\r\n' in text
    assert "    FLAGS DCP PRE\r\n" in text


def test_value_with_quote_rejected():
    disc = Disc(
        title='say "hi"',
        files=[
            FileEntry(
                name="a.wav",
                file_type=FileType.WAVE,
                tracks=[
                    Track(
                        number=1,
                        track_type=TrackType.AUDIO,
                        indices=[Index(number=1, time=Time(0))],
                    )
                ],
            )
        ],
    )
    with pytest.raises(ValueError):
        dumps(disc)
