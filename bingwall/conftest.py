"""
conftest.py

Test configuration for bingwall tests.

Defines Pytest fixtures for supplying test data to tests across the entire
test suite. Fixtures used within only a single module are defined
directly in that module.
"""

import copy
from pathlib import Path

import pytest

from bingwall.cli_utils import console
from bingwall.models import ImageDescriptor


SAMPLE_RECORD = {
    "startdate": "20231013",
    "fullstartdate": "202310131500",
    "enddate": "20231014",
    "url": "/th?id=OHR.ViesteItaly_EN-US0948108910_1920x1080.jpg&rf=LaDigue_1920x1080.jpg&pid=hp",
    "urlbase": "/th?id=OHR.ViesteItaly_EN-US0948108910",
    "copyright": "Vieste, Gargano peninsula, Italy (© Getty Images)",
    "copyrightlink": "https://www.bing.com/search?q=Vieste+Italy&form=hpcapt",
    "title": "Info",
    "quiz": "/search?q=Bing+homepage+quiz&filters=WQOskey:%22HPQuiz_20231013_ViesteItaly%22&FORM=HPQUIZ",
    "wp": True,
    "hsh": "6f3c4b8f1c0a7d4e2f6a5b9c8d7e6f5a",
    "drk": 1,
    "top": 1,
    "bot": 1,
    "hs": [],
}


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """
    Point the config and data directories at a temporary location so that no test reads
    or writes the real ~/.config/bingwall or ~/.local/share. Also undo any --quiet
    redirect of the shared console between tests.
    """

    monkeypatch.setenv("BINGWALL_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "share"))
    yield
    console.console.file = None


@pytest.fixture
def image_record() -> dict:
    """A fresh copy of one image record as the archive api returns it."""

    return copy.deepcopy(SAMPLE_RECORD)


@pytest.fixture
def api_payload(image_record) -> dict:
    """A full api response body holding image_record."""

    return {
        "market": {"mkt": "en-US"},
        "images": [image_record],
        "tooltips": {"loading": "Loading...", "previous": "Previous image", "next": "Next image"},
    }


@pytest.fixture
def descriptor(image_record) -> ImageDescriptor:
    return ImageDescriptor.from_dict(image_record)


@pytest.fixture
def data_dir(tmp_path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path
