from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .board import Board, PlayerSlot
from .errors import SessionIdCollision, UnknownSession

ACTIVE = 'active'
FINISHED = 'finished'


def session_id_for(first, second) -> str:
    """Session ids are derived from the two participant ids, waiting player first."""
    return f"{first.id}#{second.id}"


@dataclass
class GameSession:
    id: str
    board: Board
    seats: Dict[PlayerSlot, object]
    current_player: PlayerSlot = PlayerSlot.PLAYER1
    status: str = ACTIVE
    last_move: Optional[dict] = None

    def participants(self) -> List:
        return [self.seats[slot] for slot in PlayerSlot]

    def seat_of(self, participant) -> Optional[PlayerSlot]:
        for slot, seated in self.seats.items():
            if seated == participant:
                return slot
        return None

    def opponent_of(self, participant):
        seat = self.seat_of(participant)
        if seat is None:
            return None
        return self.seats[seat.opponent()]


@dataclass
class SessionStore:
    """Owns every live GameSession, keyed by session id."""
    _sessions: Dict[str, GameSession] = field(default_factory=dict)

    def __contains__(self, session_id: str) -> bool:
        return self.get(session_id) is not None

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[GameSession]:
        return iter(list(self._sessions.values()))

    def create(self, session_id: str, board: Board, player1, player2) -> GameSession:
        if session_id in self._sessions:
            raise SessionIdCollision(f"Session {session_id} already exists")
        session = GameSession(
            id=session_id,
            board=board,
            seats={PlayerSlot.PLAYER1: player1, PlayerSlot.PLAYER2: player2},
        )
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> Optional[GameSession]:
        # Ids arrive from clients; anything but a string names no session
        if not isinstance(session_id, str):
            return None
        return self._sessions.get(session_id)

    def require(self, session_id: str) -> GameSession:
        session = self.get(session_id)
        if session is None:
            raise UnknownSession(f"No game found with ID: {session_id}")
        return session

    def destroy(self, session_id: str) -> Optional[GameSession]:
        if not isinstance(session_id, str):
            return None
        return self._sessions.pop(session_id, None)

    def find_by_participant(self, participant) -> Optional[GameSession]:
        # A participant sits in at most one session
        for session in self._sessions.values():
            if session.seat_of(participant) is not None:
                return session
        return None

    def clear(self) -> None:
        self._sessions.clear()
