"""Single game runner."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from unolite.engine import (
    DrawCard,
    EngineError,
    GameState,
    JoinGame,
    PassTurn,
    Phase,
    PlayerView,
    RuleVariant,
    StartGame,
    create_empty_game,
    get_legal_actions,
    reduce,
)

if TYPE_CHECKING:
    from unolite.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    winner: Optional[str]  # agent key of the winner, None if max_turns was hit
    num_turns: int
    player_ids: tuple[str, ...]
    final_state: GameState


class GameRunner:
    """Runs a single UNO Lite game between two agents to completion."""

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        seed: Optional[int] = None,
        variant: RuleVariant = RuleVariant.LITE,
        max_turns: int = 1000,
    ):
        if len(agents) != 2:
            raise ValueError(f"UNO Lite needs exactly 2 agents, got {len(agents)}")
        self._agents = agents
        self._seed = seed
        self._variant = variant
        self._max_turns = max_turns

    def _apply(self, state: GameState, action, rng: random.Random) -> GameState:
        outcome = reduce(state, action, rng=rng)
        if isinstance(outcome, EngineError):
            # Agents only receive legal actions, so this is a bug.
            raise RuntimeError(f"Engine rejected {action!r}: {outcome}")
        return outcome

    def run(self) -> GameResult:
        """Run the game and return the result."""
        rng = random.Random(self._seed)
        player_ids = list(self._agents.keys())
        state = create_empty_game("LOCAL", self._variant)
        for pid in player_ids:
            state = self._apply(state, JoinGame(user_id=pid, display_name=self._agents[pid].name), rng)
        state = self._apply(state, StartGame(), rng)

        num_turns = 0
        while state.phase != Phase.FINISHED and num_turns < self._max_turns:
            pid = state.current_player().user_id
            agent = self._agents[pid]
            legal = get_legal_actions(state, pid)
            if not legal:
                break

            seat = state.current_player().id
            player_view = PlayerView.from_state(state, seat)
            action = agent.get_action(player_view, legal, seat)

            if action is None or action not in legal:
                action = next(
                    (a for a in legal if isinstance(a, (DrawCard, PassTurn))), legal[0]
                )

            state = self._apply(state, action, rng)
            num_turns += 1

        winner = next(
            (p.user_id for p in state.players if p is not None and p.id == state.winner_id),
            None,
        )
        logger.info("Game over after %d turns, winner: %s", num_turns, winner)
        return GameResult(
            winner=winner,
            num_turns=num_turns,
            player_ids=tuple(player_ids),
            final_state=state,
        )
