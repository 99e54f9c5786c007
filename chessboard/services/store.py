"""
Where the running games live.

Protocol so the service does not care how sessions are kept. Only an in-memory implementation exists: nothing is
persisted, a game is gone once the process stops or the game is deleted.
"""

from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID, uuid4

from chessboard.chess.game import GameState
from chessboard.chess.selection import Selection


@dataclass
class GameSession:
    """One player's game: the position + what is currently selected on screen"""

    state: GameState = field(default_factory=GameState.new_game)
    selection: Selection = field(default_factory=Selection)


class GameStore(Protocol):
    """Session storage orchestration"""

    def get_session(self, game_id: UUID) -> GameSession | None:
        """Get session by ID, if it exists."""
        ...

    def create_session(self, session: GameSession) -> UUID:
        """Store a new session and return the newly created game ID."""
        ...

    def replace_session(self, game_id: UUID, session: GameSession) -> GameSession | None:
        """Swap the session stored under an existing ID."""
        ...

    def delete_session(self, game_id: UUID) -> GameSession | None:
        """Remove a session."""
        ...


class InMemoryGameStore:
    """Sessions kept in a dictionary. Every ID owns its own GameState, nothing is shared between them."""

    def __init__(self) -> None:
        self._sessions: dict[UUID, GameSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get_session(self, game_id: UUID) -> GameSession | None:
        return self._sessions.get(game_id)

    def create_session(self, session: GameSession) -> UUID:
        game_id = uuid4()
        self._sessions[game_id] = session
        return game_id

    def replace_session(self, game_id: UUID, session: GameSession) -> GameSession | None:
        if game_id not in self._sessions:
            return None
        self._sessions[game_id] = session
        return session

    def delete_session(self, game_id: UUID) -> GameSession | None:
        return self._sessions.pop(game_id, None)

    def clear(self) -> None:
        self._sessions.clear()
