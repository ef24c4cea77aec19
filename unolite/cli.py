"""CLI entry point."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from dotenv import load_dotenv

from unolite.engine import RuleVariant

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO Lite: two-player UNO with chat commands, LLM, random and human agents")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_variant(value: str) -> RuleVariant:
    try:
        return RuleVariant(value.lower())
    except ValueError:
        raise typer.BadParameter(f"Unknown variant: {value}. Use 'lite' or 'classic'.")


def _parse_agents(
    agent_specs: str,
    llm_provider: str,
    llm_model: str,
    seed: Optional[int] = None,
) -> dict[str, "AgentProtocol"]:
    from unolite.agent.protocol import AgentProtocol
    from unolite.agents.human_agent import HumanAgent
    from unolite.agents.llm_agent import LLMAgent
    from unolite.agents.random_agent import RandomAgent

    parts = [s.strip().lower() for s in agent_specs.split(",") if s.strip()]
    if len(parts) != 2:
        raise typer.BadParameter(f"UNO Lite is played by exactly 2 agents, got {len(parts)}.")
    agents: dict[str, AgentProtocol] = {}
    for i, part in enumerate(parts):
        pid = f"player_{i}"
        if ":" in part:
            kind, model = part.split(":", 1)
        else:
            kind, model = part, llm_model

        if kind == "llm":
            agents[pid] = LLMAgent(provider=llm_provider, model=model)
        elif kind == "human":
            agents[pid] = HumanAgent(name=f"Human_{i}")
        elif kind == "random":
            agents[pid] = RandomAgent(name=f"Random_{i}", seed=None if seed is None else seed + i)
        else:
            raise typer.BadParameter(f"Unknown agent type: {kind}. Use 'llm', 'human' or 'random'.")
    return agents


@app.command()
def play(
    agents: str = typer.Option(
        "llm,random",
        "--agents",
        "-a",
        help="Two comma-separated agents: llm, human, random, or llm:model_name (e.g. llm:gpt-4o,human)",
    ),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name (e.g. openai/gpt-4o-mini, meta-llama/llama-3-8b-instruct)",
    ),
    variant: str = typer.Option("lite", "--variant", "-v", envvar="UNOLITE_VARIANT", help="Ruleset: lite or classic"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    log_level: str = typer.Option("WARNING", "--log-level", envvar="UNOLITE_LOG_LEVEL"),
) -> None:
    """Run a single UNO Lite game."""
    from unolite.orchestration.game_runner import GameRunner

    _setup_logging(log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model, seed)
    runner = GameRunner(agent_map, seed=seed, variant=_parse_variant(variant))
    result = runner.run()
    typer.echo(f"Winner: {result.winner or 'None (turn limit reached)'}")
    typer.echo(f"Turns: {result.num_turns}")


@app.command()
def tournament(
    agents: str = typer.Option(
        "llm,random",
        "--agents",
        "-a",
        help="Two comma-separated agent types or llm:model_name (e.g. llm:gpt-4o,llm:llama3)",
    ),
    games: int = typer.Option(100, "--games", "-g", help="Number of games"),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name",
    ),
    variant: str = typer.Option("lite", "--variant", "-v", envvar="UNOLITE_VARIANT", help="Ruleset: lite or classic"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    log_level: str = typer.Option("WARNING", "--log-level", envvar="UNOLITE_LOG_LEVEL"),
) -> None:
    """Run a tournament."""
    from unolite.orchestration.tournament import run_tournament

    _setup_logging(log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model, seed)
    wins = run_tournament(agent_map, num_games=games, seed=seed, variant=_parse_variant(variant))
    typer.echo("Tournament results:")
    for pid in agent_map:
        typer.echo(f"  {pid}: {wins.get(pid, 0)} wins")


@app.command()
def chat(
    variant: str = typer.Option("lite", "--variant", "-v", envvar="UNOLITE_VARIANT", help="Default ruleset for /new"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed for room ids and shuffles"),
    log_level: str = typer.Option("INFO", "--log-level", envvar="UNOLITE_LOG_LEVEL"),
) -> None:
    """Hot-seat chat session: type '<user> /command args', e.g. 'alice /new'."""
    import random

    from unolite.chat.commands import ChatBot
    from unolite.session.registry import RoomRegistry

    _setup_logging(log_level)
    bot = ChatBot(RoomRegistry(rng=random.Random(seed)), default_variant=_parse_variant(variant))
    typer.echo("Type '<user> /help' to start, Ctrl-D to quit.")
    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            break
        if not line:
            continue
        user, _, text = line.partition(" ")
        for reply in bot.handle(user, user, text):
            typer.echo(f"[to {reply.user_id}]\n{reply.text}\n")


if __name__ == "__main__":
    app()
