"""Typed star events decoded from GitHub webhook payloads.

Decoding happens in two steps. ``decode_payload`` turns the raw body into a
JSON object so the dispatcher can filter on ``action`` without insisting on
the star-specific shape. ``extract_star_event`` then validates the fields a
star notification needs.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

import msgspec

from stargram.errors import MalformedPayloadError

STAR_EVENT = "star"
EVENT_HEADER = "X-GitHub-Event"


class StarAction(enum.StrEnum):
    """Star webhook actions that produce a notification."""

    CREATED = "created"
    DELETED = "deleted"


class _Owner(msgspec.Struct):
    login: str


class _Repository(msgspec.Struct):
    owner: _Owner
    name: str
    stargazers_count: int


class _Sender(msgspec.Struct):
    login: str


class StarPayload(msgspec.Struct):
    """Subset of the GitHub ``star`` webhook payload used for notifications.

    Unknown fields are ignored; every declared field is required.
    """

    action: str
    repository: _Repository
    sender: _Sender


@dataclasses.dataclass(frozen=True, slots=True)
class IncomingEvent:
    """A verified star event ready for rendering.

    Attributes
    ----------
    event_type
        Value of the ``X-GitHub-Event`` header.
    action
        Star action that triggered the delivery.
    repo_owner
        Login of the repository owner.
    repo_name
        Repository name.
    starrer_login
        Login of the user who starred or unstarred.
    star_count
        Stargazer count reported in the payload.

    """

    event_type: str
    action: StarAction
    repo_owner: str
    repo_name: str
    starrer_login: str
    star_count: int

    @property
    def repo_slug(self) -> str:
        """Return the repository in ``owner/name`` form."""
        return f"{self.repo_owner}/{self.repo_name}"


def decode_payload(raw_body: bytes) -> dict[str, typ.Any]:
    """Decode a webhook body into a JSON object.

    Raises
    ------
    MalformedPayloadError
        If the body is not valid JSON or the document is not an object.

    """
    try:
        document = msgspec.json.decode(raw_body)
    except msgspec.DecodeError as exc:
        raise MalformedPayloadError.invalid_json(str(exc)) from exc

    if not isinstance(document, dict):
        raise MalformedPayloadError.not_an_object(type(document).__name__)
    return typ.cast("dict[str, typ.Any]", document)


def star_action(
    event_type: str | None,
    payload: dict[str, typ.Any],
) -> StarAction | None:
    """Return the notifiable star action, or ``None`` to ignore the delivery."""
    if event_type != STAR_EVENT:
        return None
    action = payload.get("action")
    if not isinstance(action, str):
        return None
    try:
        return StarAction(action)
    except ValueError:
        return None


def extract_star_event(
    event_type: str,
    action: StarAction,
    payload: dict[str, typ.Any],
) -> IncomingEvent:
    """Build an ``IncomingEvent`` from a decoded star payload.

    Parameters
    ----------
    event_type
        Value of the ``X-GitHub-Event`` header.
    action
        Action already accepted by :func:`star_action`.
    payload
        Decoded JSON object.

    Returns
    -------
    IncomingEvent
        The validated event.

    Raises
    ------
    MalformedPayloadError
        If a required field is missing or has the wrong type.

    """
    try:
        parsed = msgspec.convert(payload, type=StarPayload)
    except msgspec.ValidationError as exc:
        raise MalformedPayloadError.invalid_fields(str(exc)) from exc

    return IncomingEvent(
        event_type=event_type,
        action=action,
        repo_owner=parsed.repository.owner.login,
        repo_name=parsed.repository.name,
        starrer_login=parsed.sender.login,
        star_count=parsed.repository.stargazers_count,
    )


__all__ = [
    "EVENT_HEADER",
    "STAR_EVENT",
    "IncomingEvent",
    "StarAction",
    "StarPayload",
    "decode_payload",
    "extract_star_event",
    "star_action",
]
