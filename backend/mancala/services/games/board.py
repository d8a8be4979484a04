"""Kalah board engine.

The board is a tuple of 14 ints: slots 0-5 are player1's pockets, 6 is
player1's store, 7-12 are player2's pockets and 13 is player2's store.
Everything here is pure; callers get a new tuple back and the input is never
touched.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .errors import InvalidMove

POCKETS_PER_SIDE = 6
BOARD_SIZE = 2 * POCKETS_PER_SIDE + 2
PLAYER1_STORE = POCKETS_PER_SIDE
PLAYER2_STORE = BOARD_SIZE - 1

Board = Tuple[int, ...]


class PlayerSlot(str, Enum):
    PLAYER1 = 'player1'
    PLAYER2 = 'player2'

    @classmethod
    def parse(cls, value) -> 'PlayerSlot':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidMove(f"Unknown player {value!r}") from None

    def opponent(self) -> 'PlayerSlot':
        return PlayerSlot.PLAYER2 if self is PlayerSlot.PLAYER1 else PlayerSlot.PLAYER1

    @property
    def store(self) -> int:
        return PLAYER1_STORE if self is PlayerSlot.PLAYER1 else PLAYER2_STORE

    @property
    def pockets(self) -> range:
        start = 0 if self is PlayerSlot.PLAYER1 else PLAYER1_STORE + 1
        return range(start, start + POCKETS_PER_SIDE)

    @property
    def label(self) -> str:
        return 'Player 1' if self is PlayerSlot.PLAYER1 else 'Player 2'


@dataclass(frozen=True)
class MoveResult:
    board: Board
    # Meaningless once game_over is set
    next_player: PlayerSlot
    game_over: bool
    landing: int
    captured: int = 0


def starting_board(stones_per_pocket: int = 4) -> Board:
    return tuple(
        0 if i in (PLAYER1_STORE, PLAYER2_STORE) else stones_per_pocket
        for i in range(BOARD_SIZE)
    )


def opposite(pocket: int) -> int:
    return 2 * POCKETS_PER_SIDE - pocket


def is_side_empty(board: Sequence[int], player: PlayerSlot) -> bool:
    return all(board[i] == 0 for i in player.pockets)


def validate_move(board: Sequence[int], pocket, player: PlayerSlot) -> None:
    """Raise InvalidMove unless `pocket` is a non-empty pocket on `player`'s side."""
    if len(board) != BOARD_SIZE:
        raise InvalidMove(f"Board must have {BOARD_SIZE} slots")
    if isinstance(pocket, bool) or not isinstance(pocket, int):
        raise InvalidMove(f"Pocket must be an integer, got {pocket!r}")
    if not 0 <= pocket < BOARD_SIZE:
        raise InvalidMove(f"Pocket {pocket} is off the board")
    if pocket in (PLAYER1_STORE, PLAYER2_STORE):
        raise InvalidMove(f"Pocket {pocket} is a store")
    if pocket not in player.pockets:
        raise InvalidMove(f"Pocket {pocket} is not on {player.value}'s side")
    if board[pocket] <= 0:
        raise InvalidMove(f"Pocket {pocket} is empty")


def apply_move(board: Sequence[int], pocket: int, player: PlayerSlot) -> MoveResult:
    validate_move(board, pocket, player)
    slots = list(board)
    own_store = player.store
    skip = player.opponent().store

    stones = slots[pocket]
    slots[pocket] = 0
    idx = pocket
    while stones > 0:
        idx = (idx + 1) % BOARD_SIZE
        if idx == skip:
            continue
        slots[idx] += 1
        stones -= 1
    landing = idx

    captured = 0
    across = opposite(landing) if landing in player.pockets else None
    if across is not None and slots[landing] == 1 and slots[across] > 0:
        captured = slots[across] + 1
        slots[own_store] += captured
        slots[landing] = 0
        slots[across] = 0

    next_player = player if landing == own_store else player.opponent()

    game_over = is_side_empty(slots, PlayerSlot.PLAYER1) or is_side_empty(slots, PlayerSlot.PLAYER2)
    if game_over:
        _sweep(slots)

    return MoveResult(
        board=tuple(slots),
        next_player=next_player,
        game_over=game_over,
        landing=landing,
        captured=captured,
    )


def _sweep(slots: list) -> None:
    # Each side's leftovers go to that side's own store
    for side in PlayerSlot:
        for i in side.pockets:
            slots[side.store] += slots[i]
            slots[i] = 0


def score(board: Sequence[int]) -> Tuple[int, int]:
    return board[PLAYER1_STORE], board[PLAYER2_STORE]


def winner(board: Sequence[int]) -> Optional[PlayerSlot]:
    """The seat with the larger store, or None on a tie."""
    p1, p2 = score(board)
    if p1 == p2:
        return None
    return PlayerSlot.PLAYER1 if p1 > p2 else PlayerSlot.PLAYER2
