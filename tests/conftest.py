import json
import pytest
from pathlib import Path

DATA_DIR = Path(__file__).parent.joinpath("data")
LOVELESS_DIR = DATA_DIR.joinpath("My Bloody Valentine - 1991 - Loveless")


def get_test_cue_sheet_path() -> Path:
    return LOVELESS_DIR.joinpath("My Bloody Valentine - Loveless.cue")


@pytest.fixture
def loveless_path() -> Path:
    return get_test_cue_sheet_path()


@pytest.fixture
def loveless_text() -> str:
    return get_test_cue_sheet_path().read_text(encoding="utf-8")


@pytest.fixture
def disc_image_text() -> str:
    return DATA_DIR.joinpath("disc_image", "disc.cue").read_text(encoding="utf-8")


@pytest.fixture
def cue_sheet_data() -> dict:
    with open(LOVELESS_DIR.joinpath("loveless.json"), "r") as fh:
        return json.loads(fh.read())


@pytest.fixture
def minimal_text() -> str:
    return 'FILE "a.bin" BINARY\nTRACK 01 AUDIO\nINDEX 01 00:00:00\n'
