"""Human agent - reads actions from terminal."""

from unolite.agents.llm_agent import describe_action
from unolite.chat.render import render_card_short, render_color
from unolite.engine import Action


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        player_view,
        legal_actions: list[Action],
        player_id: str,
    ) -> Action | None:
        if not legal_actions:
            return None

        print(f"\n--- Your turn ({player_id}) ---")
        print("Your hand:", " ".join(render_card_short(c) for c in player_view.my_hand))
        print("Top discard:", render_card_short(player_view.top_discard))
        print("Color to match:", render_color(player_view.current_color))
        if player_view.pending_draw_count:
            print(f"You owe {player_view.pending_draw_count} cards.")
        print("\nLegal actions:")
        for i, a in enumerate(legal_actions):
            print(f"  {i}: {describe_action(a, player_view.my_hand)}")

        while True:
            try:
                raw = input("Enter number: ").strip()
                idx = int(raw)
                if 0 <= idx < len(legal_actions):
                    return legal_actions[idx]
            except ValueError:
                pass
            except EOFError:
                return None
            print("Invalid. Try again.")
