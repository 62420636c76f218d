"""
Test wallpaper_handler

Validate the commands that are started to update the desktop background. subprocess.Popen
is patched so that nothing is actually run; the tests check what would have been run.
"""

import unittest.mock
from pathlib import Path

import pytest

# following entities are tested in this module:
from bingwall.wallpaper_handler import expand_command
from bingwall.wallpaper_handler import mode_flag
from bingwall.wallpaper_handler import run_custom_commands
from bingwall.wallpaper_handler import set_wallpaper
from bingwall.wallpaper_handler import WallpaperUpdateError

IMAGE = Path("/home/me/.local/share/.wallpaper.jpg")


@pytest.mark.parametrize(
    ["mode", "flag"],
    [
        ("center", "--bg-center"),
        ("fill", "--bg-fill"),
        ("max", "--bg-max"),
        ("scale", "--bg-scale"),
        ("tile", "--bg-tile"),
        ("Scale", "--bg-scale"),
    ],
)
def test_mode_flag(mode, flag):
    assert mode_flag(mode) == flag


def test_mode_flag_unknown():
    with pytest.raises(WallpaperUpdateError):
        mode_flag("stretch")


@unittest.mock.patch("bingwall.wallpaper_handler.subprocess.Popen")
def test_set_wallpaper_runs_feh(mock_popen):
    set_wallpaper(IMAGE, "max")

    mock_popen.assert_called_once_with(["feh", "--bg-max", str(IMAGE)])


@unittest.mock.patch("bingwall.wallpaper_handler.subprocess.Popen", side_effect=FileNotFoundError("feh"))
def test_set_wallpaper_feh_missing(mock_popen):
    with pytest.raises(WallpaperUpdateError) as excinfo:
        set_wallpaper(IMAGE)

    assert "feh" in str(excinfo.value)


def test_expand_command_replaces_every_placeholder():
    command = expand_command("cp % /tmp/backup.jpg && swaybg -i %", IMAGE)

    assert command == f"cp {IMAGE} /tmp/backup.jpg && swaybg -i {IMAGE}"


def test_expand_command_makes_path_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert expand_command("show %", Path("relative.jpg")) == f"show {tmp_path / 'relative.jpg'}"


@unittest.mock.patch("bingwall.wallpaper_handler.subprocess.Popen")
def test_run_custom_commands_each_in_own_shell(mock_popen):
    processes = run_custom_commands(["swaybg -i %", "notify-send done"], IMAGE)

    assert mock_popen.call_args_list == [
        unittest.mock.call(["sh", "-c", f"swaybg -i {IMAGE}"]),
        unittest.mock.call(["sh", "-c", "notify-send done"]),
    ]
    assert len(processes) == 2
    # fire and forget: nothing waits on the processes
    mock_popen.return_value.wait.assert_not_called()
    mock_popen.return_value.communicate.assert_not_called()


@unittest.mock.patch("bingwall.wallpaper_handler.subprocess.Popen", side_effect=PermissionError("sh"))
def test_run_custom_commands_spawn_failure(mock_popen):
    with pytest.raises(WallpaperUpdateError):
        run_custom_commands(["swaybg -i %"], IMAGE)
