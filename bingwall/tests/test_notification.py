"""
Test notification

PyGObject is not a hard dependency, so instead of talking to a real notification daemon
these tests put a stand-in "gi" package into sys.modules and check what send_notification
asks libnotify to do.
"""

import sys
import types
import unittest.mock

import pytest

# following entities are tested in this module:
from bingwall.notification import notify_wallpaper_set
from bingwall.notification import send_notification
from bingwall.notification import NotificationError


class FakeGLibError(Exception):
    pass


@pytest.fixture
def fake_gi(monkeypatch):
    """Install a fake gi package exposing gi.repository.Notify and gi.repository.GLib."""

    gi = types.ModuleType("gi")
    gi.require_version = unittest.mock.MagicMock()

    repository = types.ModuleType("gi.repository")
    repository.Notify = unittest.mock.MagicMock()
    repository.Notify.is_initted.return_value = False
    repository.GLib = unittest.mock.MagicMock()
    repository.GLib.Error = FakeGLibError
    gi.repository = repository

    monkeypatch.setitem(sys.modules, "gi", gi)
    monkeypatch.setitem(sys.modules, "gi.repository", repository)
    return gi


def test_send_notification(fake_gi):
    notify = fake_gi.repository.Notify
    glib = fake_gi.repository.GLib

    send_notification("Bingwall", "body text", "image-jpeg", "/tmp/image.jpg")

    fake_gi.require_version.assert_called_once_with("Notify", "0.7")
    notify.init.assert_called_once_with("Bingwall")
    notify.Notification.new.assert_called_once_with("Bingwall", "body text", "image-jpeg")
    glib.Variant.new_string.assert_called_once_with("/tmp/image.jpg")
    notification = notify.Notification.new.return_value
    notification.set_hint.assert_called_once_with("image-path", glib.Variant.new_string.return_value)
    notification.show.assert_called_once()


def test_notify_wallpaper_set_body(fake_gi):
    notify_wallpaper_set("Info", "/tmp/image.jpg")

    summary, body, icon = fake_gi.repository.Notify.Notification.new.call_args.args
    assert summary == "Bingwall"
    assert body == "Wallpaper successfully set.\nTitle: Info"
    assert icon == "image-jpeg"


def test_send_notification_daemon_error(fake_gi):
    fake_gi.repository.Notify.Notification.new.return_value.show.side_effect = FakeGLibError(
        "org.freedesktop.DBus.Error.ServiceUnknown"
    )

    with pytest.raises(NotificationError) as excinfo:
        send_notification("Bingwall", "body", "image-jpeg", "/tmp/image.jpg")

    assert "/tmp/image.jpg" in str(excinfo.value)


def test_send_notification_without_pygobject(monkeypatch):
    # a None entry in sys.modules makes the import raise ImportError
    monkeypatch.setitem(sys.modules, "gi", None)

    with pytest.raises(NotificationError):
        send_notification("Bingwall", "body", "image-jpeg", "/tmp/image.jpg")
