import pytest
from cuesheet.cli import main
from cuesheet.parser import parse_cue


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")


def test_summary(loveless_path, capsys):
    main([str(loveless_path)])
    out = capsys.readouterr().out
    assert "My Bloody Valentine - Loveless" in out
    assert "Catalog: 5099746823322" in out
    assert "Genre: Alternative" in out
    assert "Loomer" in out
    assert "04:17:52" in out


def test_tracklist(loveless_path, capsys):
    main([str(loveless_path), "-f", "tracklist"])
    assert capsys.readouterr().out.splitlines() == [
        "01 Only Shallow - My Bloody Valentine 04:15",
        "02 Loomer - My Bloody Valentine 02:42",
        "03 Touched - My Bloody Valentine ??:??",
    ]


def test_cue_output(loveless_path, loveless_text, capsys):
    main([str(loveless_path), "--format", "cue", "--encoding", "utf-8"])
    assert parse_cue(capsys.readouterr().out) == parse_cue(loveless_text)


def test_no_comments(loveless_path, capsys):
    main([str(loveless_path), "-f", "cue", "--no-comments"])
    assert "REM" not in capsys.readouterr().out


def test_directory_with_broken_sheet(tmp_path, capsys):
    tmp_path.joinpath("good.cue").write_text(
        'FILE "a.wav" WAVE\nTRACK 01 AUDIO\nINDEX 01 00:00:00\n'
    )
    tmp_path.joinpath("bad.cue").write_text(
        'FILE "a.wav" WAVE\nTRACK 01 AUDIO\nINDEX 01 00:00:00\nTRACK 03 AUDIO\n'
    )
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path), "-f", "tracklist", "-e", "utf-8"])
    assert exc_info.value.code == 1

    captured = capsys.readouterr()
    assert captured.out.strip() == "01 Track 01 ??:??"
    assert "bad.cue" in captured.err
    assert "line 4" in captured.err


def test_extra_directive(tmp_path, capsys):
    cue_path = tmp_path.joinpath("sheet.cue")
    cue_path.write_text(
        'DISCNUMBER 2\nFILE "a.wav" WAVE\nTRACK 01 AUDIO\nINDEX 01 00:00:00\n'
    )
    main([str(cue_path), "-f", "tracklist", "-x", "DISCNUMBER"])
    assert capsys.readouterr().out.strip() == "01 Track 01 ??:??"


def test_extra_directive_cannot_be_core(loveless_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([str(loveless_path), "-x", "catalog"])
    assert exc_info.value.code == 2
    assert "CATALOG" in capsys.readouterr().err


def test_across_files_policy(tmp_path, capsys):
    cue_path = tmp_path.joinpath("sheet.cue")
    cue_path.write_text(
        'FILE "1.wav" WAVE\nTRACK 01 AUDIO\nINDEX 01 00:10:00\n'
        'FILE "2.wav" WAVE\nTRACK 02 AUDIO\nINDEX 01 00:00:00\n'
    )
    main([str(cue_path), "-f", "tracklist"])
    capsys.readouterr()
    with pytest.raises(SystemExit):
        main([str(cue_path), "-f", "tracklist", "-t", "across-files"])


def test_empty_directory(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path)])
    assert exc_info.value.code == 1


def test_missing_path(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main([str(tmp_path.joinpath("missing.cue"))])
    assert "not found" in capsys.readouterr().err
