from typing import List, Optional

from .errors import AlreadyQueued


class MatchmakingQueue:
    """Participants waiting for an opponent.

    Pairing pops the most recently queued participant (LIFO): a new joiner is
    matched with whoever started waiting last.
    """

    def __init__(self) -> None:
        self._waiting: List = []

    def __contains__(self, participant) -> bool:
        return participant in self._waiting

    def __len__(self) -> int:
        return len(self._waiting)

    def enqueue(self, participant) -> None:
        if participant in self._waiting:
            raise AlreadyQueued(f"{participant.id} is already waiting for a match")
        self._waiting.append(participant)

    def pair(self) -> Optional[object]:
        if not self._waiting:
            return None
        return self._waiting.pop()

    def remove(self, participant) -> bool:
        try:
            self._waiting.remove(participant)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._waiting.clear()
