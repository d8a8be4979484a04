import logging
import threading
from typing import Optional

from . import messages
from .board import PlayerSlot, apply_move, starting_board, validate_move
from .errors import AlreadyInSession, NotYourTurn, UnknownSession
from .matchmaking import MatchmakingQueue
from .sessions import FINISHED, GameSession, SessionStore, session_id_for


class SessionManager:
    """Runs matchmaking and arbitrates every live game.

    One lock guards the queue and the store, so a join pops and seats its
    opponent atomically and moves for a session are applied one at a time.
    """

    def __init__(
        self,
        queue: MatchmakingQueue,
        store: SessionStore,
        broadcaster,
        logger: Optional[logging.Logger] = None,
        stones_per_pocket: int = 4,
    ):
        self.queue = queue
        self.store = store
        self.broadcaster = broadcaster
        self.logger = logger or logging.getLogger(__name__)
        self.stones_per_pocket = stones_per_pocket
        self._lock = threading.RLock()

    # ---- join ----

    def join(self, participant) -> Optional[GameSession]:
        """Pair with a waiting player, or start waiting. Returns the new session if paired."""
        with self._lock:
            if self.store.find_by_participant(participant) is not None:
                raise AlreadyInSession(f"{participant.id} is already playing")
            if participant in self.queue:
                self.logger.info(f"[join-dup] player={participant.id} already waiting")
                participant.send(messages.WAITING, messages.waiting_payload())
                return None

            opponent = self.queue.pair()
            if opponent is None:
                self.queue.enqueue(participant)
                self.logger.info(f"[waiting] player={participant.id} queued={len(self.queue)}")
                participant.send(messages.WAITING, messages.waiting_payload())
                return None

            session = self.store.create(
                session_id_for(opponent, participant),
                starting_board(self.stones_per_pocket),
                player1=opponent,
                player2=participant,
            )
            for seated in session.participants():
                self.broadcaster.join_group(seated, session.id)
            for seat, seated in session.seats.items():
                seated.send(messages.MATCHED, messages.matched_payload(session, seat))
                seated.send(messages.GAME_STATE, messages.game_state_payload(session, seat))
            self.logger.info(
                f"[match] session={session.id} player1={opponent.id} player2={participant.id}"
            )
            return session

    # ---- moves ----

    def make_move(self, session_id: str, player, pocket) -> GameSession:
        """Validate and apply a move, then broadcast the new state to the session."""
        with self._lock:
            session = self.store.require(session_id)
            seat = PlayerSlot.parse(player)
            if seat is not session.current_player:
                raise NotYourTurn(
                    f"It is {session.current_player.value}'s turn, not {seat.value}'s"
                )
            validate_move(session.board, pocket, seat)

            result = apply_move(session.board, pocket, seat)
            session.board = result.board
            session.current_player = result.next_player
            mover = session.seats[seat]
            session.last_move = {
                'player': seat.value,
                'pocket': pocket,
                'participant': mover.id,
                'description': messages.describe_move(
                    seat, pocket, result.captured,
                    extra_turn=result.next_player is seat and not result.game_over,
                ),
            }
            self.logger.info(
                f"[move] session={session.id} player={seat.value} pocket={pocket} "
                f"landing={result.landing} captured={result.captured} next={result.next_player.value}"
            )
            self.broadcaster.to_group(session.id, messages.GAME_STATE, messages.game_state_payload(session))

            if result.game_over:
                session.status = FINISHED
                payload = messages.game_over_payload(session)
                self.broadcaster.to_group(session.id, messages.GAME_OVER, payload)
                self.logger.info(f"[game-over] session={session.id} winner={payload['winner']} scores={payload['scores']}")
                self._teardown(session)
            return session

    # ---- leaving ----

    def leave(self, participant, session_id: Optional[str] = None) -> Optional[GameSession]:
        """Explicit leave. Without a session id this withdraws a waiting player from the queue."""
        with self._lock:
            if not session_id:
                if self.queue.remove(participant):
                    self.logger.info(f"[leave-queue] player={participant.id}")
                return None
            session = self.store.get(session_id)
            if session is None or session.seat_of(participant) is None:
                raise UnknownSession(f"No game found with ID: {session_id}")
            self._teardown(session)
            self.logger.info(f"[leave] player={participant.id} session={session.id}")
            return session

    def disconnect(self, participant) -> Optional[GameSession]:
        """Connection lost. Removes a waiting player, or ends their game and tells the opponent."""
        with self._lock:
            if self.queue.remove(participant):
                self.logger.info(f"[disconnect] player={participant.id} removed from waiting list")
                return None
            session = self.store.find_by_participant(participant)
            if session is None:
                return None
            other = session.opponent_of(participant)
            self.store.destroy(session.id)
            if other is not None:
                self.broadcaster.leave_group(other, session.id)
                other.send(messages.OPPONENT_DISCONNECTED, messages.opponent_disconnected_payload(session.id))
            self.logger.info(f"[disconnect] player={participant.id} session={session.id} ended")
            return session

    def shutdown(self) -> None:
        with self._lock:
            self.queue.clear()
            self.store.clear()

    def _teardown(self, session: GameSession) -> None:
        self.store.destroy(session.id)
        for seated in session.participants():
            self.broadcaster.leave_group(seated, session.id)
