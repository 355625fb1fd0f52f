from .http_notifier import HttpWebhookNotifier
from .noop_notifier import NoopNotifier
from .pushover_notifier import PushoverNotifier

__all__ = ["HttpWebhookNotifier", "NoopNotifier", "PushoverNotifier"]
