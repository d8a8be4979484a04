"""Delivery of server events to participants and session groups.

The game services only see `Participant` handles and a `Broadcaster`; the
Socket.IO specifics live in `SocketIOBroadcaster`.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Protocol

from flask_socketio import join_room, leave_room

Send = Callable[[str, Dict[str, Any]], None]


@dataclass(frozen=True)
class Participant:
    """A connected client: its transport id and a way to message it directly."""
    id: str
    send: Send = field(compare=False, repr=False)


class Broadcaster(Protocol):
    def join_group(self, participant: Participant, group: str) -> None: ...

    def leave_group(self, participant: Participant, group: str) -> None: ...

    def to_group(self, group: str, event: str, payload: Dict[str, Any]) -> None: ...


class SocketIOBroadcaster:
    """Session groups are Socket.IO rooms named after the session id."""

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def participant(self, sid: str) -> Participant:
        def _send(event: str, payload: Dict[str, Any]) -> None:
            self.socketio.emit(event, payload, to=sid, namespace=self.namespace)
        return Participant(id=sid, send=_send)

    def join_group(self, participant: Participant, group: str) -> None:
        join_room(group, sid=participant.id, namespace=self.namespace)

    def leave_group(self, participant: Participant, group: str) -> None:
        leave_room(group, sid=participant.id, namespace=self.namespace)

    def to_group(self, group: str, event: str, payload: Dict[str, Any]) -> None:
        self.socketio.emit(event, payload, to=group, namespace=self.namespace)
