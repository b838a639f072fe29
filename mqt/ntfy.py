"""Push notifications through an ntfy server."""

from dataclasses import dataclass, replace

import requests

from mqt.constants import NTFY_URL

_SEND_TIMEOUT = 30

_MESSAGE_FIELDS = (
    "message",
    "title",
    "tags",
    "priority",
    "actions",
    "click",
    "attach",
    "markdown",
    "icon",
    "filename",
    "delay",
    "email",
    "call",
)


@dataclass(frozen=True)
class NtfyAction:
    """A button attached to a notification."""

    action: str = ""
    label: str = ""
    url: str = ""
    method: str | None = None
    headers: dict | None = None
    body: str | None = None
    clear: bool | None = None

    @classmethod
    def view_action(cls, label, url):
        """A button that opens url."""
        return cls(action="view", label=label, url=url)

    @classmethod
    def http_action(cls, label, url, method, headers, body):
        """A button that sends an HTTP request."""
        return cls(
            action="http",
            label=label,
            url=url,
            method=method,
            headers=dict(headers),
            body=body,
        )

    def to_dict(self):
        return {
            "action": self.action,
            "label": self.label,
            "url": self.url,
            "method": self.method,
            "headers": None if self.headers is None else dict(self.headers),
            "body": self.body,
            "clear": self.clear,
        }


@dataclass(frozen=True)
class NtfyMessage:
    """A notification for one topic; each with_* method returns a new message."""

    topic: str
    message: str | None = None
    title: str | None = None
    tags: tuple | None = None
    priority: int | None = None
    actions: tuple | None = None
    click: str | None = None
    attach: str | None = None
    markdown: bool | None = None
    icon: str | None = None
    filename: str | None = None
    delay: str | None = None
    email: str | None = None
    call: str | None = None

    def with_message(self, message):
        return replace(self, message=message)

    def with_title(self, title):
        return replace(self, title=title)

    def add_tag(self, tag):
        return replace(self, tags=(*(self.tags or ()), tag))

    def with_tags(self, tags):
        return replace(self, tags=tuple(tags))

    def with_priority(self, priority):
        """Set priority 1 (lowest) to 5 (highest); other values are ignored."""
        if 1 <= priority <= 5:
            return replace(self, priority=priority)
        return self

    def add_action(self, action):
        return replace(self, actions=(*(self.actions or ()), action))

    def with_click(self, url):
        return replace(self, click=url)

    def with_attach(self, url):
        return replace(self, attach=url)

    def with_markdown(self):
        return replace(self, markdown=True)

    def with_icon(self, url):
        return replace(self, icon=url)

    def with_filename(self, name):
        return replace(self, filename=name)

    def with_delay(self, delay):
        return replace(self, delay=delay)

    def with_email(self, email):
        return replace(self, email=email)

    def with_call(self, number):
        return replace(self, call=number)

    def to_dict(self):
        """JSON body of the message; unset fields are left out."""
        data = {"topic": self.topic}
        for name in _MESSAGE_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if name == "tags":
                value = list(value)
            elif name == "actions":
                value = [action.to_dict() for action in value]
            data[name] = value
        return data

    def send(self, url=NTFY_URL):
        """POST the message to the ntfy server and return the response."""
        return requests.post(url, json=self.to_dict(), timeout=_SEND_TIMEOUT)


def _preset(topic, title, message, tag, priority):
    return (
        NtfyMessage(topic)
        .with_title(title)
        .with_message(message)
        .add_tag(tag)
        .with_priority(priority)
    )


def warning_message(topic, title, message):
    return _preset(topic, title, message, "warning", 4)


def success_message(topic, title, message):
    return _preset(topic, title, message, "white_check_mark", 3)


def error_message(topic, title, message):
    return _preset(topic, title, message, "rotating_light", 5)


def info_message(topic, title, message):
    return _preset(topic, title, message, "information", 3)