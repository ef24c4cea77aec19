"""Simulate a game with random agents and print the event log."""

from unolite.agents import RandomAgent
from unolite.chat.render import render_state
from unolite.engine import RuleVariant
from unolite.orchestration.game_runner import GameRunner


def main():
    agents = {
        "bot1": RandomAgent("Bot1", seed=1),
        "bot2": RandomAgent("Bot2", seed=2),
    }

    runner = GameRunner(agents, seed=42, variant=RuleVariant.CLASSIC)
    result = runner.run()

    for event in result.final_state.history:
        print(f"> {event}")
    print(render_state(result.final_state))
    print(f"Game finished! Winner: {result.winner}")
    print(f"Turns: {result.num_turns}")


if __name__ == "__main__":
    main()
