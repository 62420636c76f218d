"""
Desktop notifications

Sends a desktop notification through libnotify, using the PyGObject bindings
(https://pygobject.readthedocs.io/en/latest/). PyGObject is only needed when a
notification is actually sent, which is why the gi import happens inside
send_notification: running with --silent works on a machine without it.
"""

import logging

logger = logging.getLogger(__name__)

APP_NAME = "Bingwall"
ICON = "image-jpeg"


class NotificationError(Exception):
    """
    Raised when a desktop notification cannot be shown.
    """

    pass


def send_notification(summary: str, body: str, icon: str, image_path: str) -> None:
    """
    Show a notification with summary, body and icon. image_path is passed as the
    "image-path" hint so notification daemons that support it can show the picture.
    """

    try:
        import gi

        gi.require_version("Notify", "0.7")
        from gi.repository import GLib, Notify
    except (ImportError, ValueError) as error:
        raise NotificationError(f"libnotify bindings are not available: {error}")

    if not Notify.is_initted():
        Notify.init(APP_NAME)

    notification = Notify.Notification.new(summary, body, icon)
    notification.set_hint("image-path", GLib.Variant.new_string(image_path))

    try:
        notification.show()
    except GLib.Error as error:
        raise NotificationError(f"could not show notification for {image_path}: {error}")

    logger.debug("notification sent: %s", summary)


def notify_wallpaper_set(title: str, image_path: str) -> None:
    """Tell the user which image is now the wallpaper."""

    send_notification(
        APP_NAME,
        f"Wallpaper successfully set.\nTitle: {title}",
        ICON,
        image_path,
    )
