#!/usr/bin/env python3
"""CLI entrypoint for the market game.

Usage::

    python run_game.py
    python run_game.py --config config/example.yaml
    python run_game.py --news mock --seed 7

Loads an optional YAML configuration, starts a ``MarketSession`` and reads
commands from stdin until ``quit``. Type ``help`` inside the game for the
command list. This is a thin presentation layer; all game rules live in
``simulation/``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from models.config import GameConfig
from models.state import SimulationState
from news.registry import available_generators
from simulation.session import MarketSession

HELP_TEXT = """\
Commands:
  buy SYMBOL QTY     buy shares at the current price
  sell SYMBOL QTY    sell shares at the current price
  next [N]           advance N days (default 1)
  market             show instruments
  portfolio          show cash and holdings
  news               show recent headlines
  help               show this text
  quit               leave the game
"""


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play a single-player stock market simulation.",
    )
    parser.add_argument(
        "--config",
        default=None,
        type=str,
        help="Path to a YAML configuration file (default: built-in settings).",
    )
    parser.add_argument(
        "--news",
        default=None,
        choices=available_generators(),
        help="Override the configured news generator.",
    )
    parser.add_argument(
        "--seed",
        default=None,
        type=int,
        help="Override the configured price seed.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    return parser.parse_args()


def _setup_logging(level: str) -> None:
    """Configure root logger with a clean format."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.from_yaml(args.config) if args.config else GameConfig()
    if args.news is not None:
        config = config.model_copy(
            update={"news": config.news.model_copy(update={"generator": args.news})}
        )
    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})
    return config


# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------

def format_market(state: SimulationState) -> str:
    lines = [f"Day {state.day}", f"{'SYMBOL':<7}{'NAME':<24}{'SECTOR':<16}{'PRICE':>10}{'CHG%':>8}"]
    for inst in state.instruments.values():
        lines.append(
            f"{inst.symbol:<7}{inst.name:<24}{inst.sector:<16}"
            f"{inst.price:>10.2f}{inst.change:>+8.2f}"
        )
    return "\n".join(lines)


def format_portfolio(state: SimulationState) -> str:
    lines = [
        f"Cash: ${state.balance:,.2f}   Holdings: ${state.portfolio_value:,.2f}   "
        f"Total: ${state.total_assets:,.2f}"
    ]
    if not state.portfolio:
        lines.append("Your portfolio is empty.")
        return "\n".join(lines)
    lines.append(f"{'SYMBOL':<7}{'SHARES':>8}{'AVG':>10}{'VALUE':>12}{'P&L':>11}")
    for symbol, pos in state.portfolio.items():
        lines.append(
            f"{symbol:<7}{pos.shares:>8}{pos.average_price:>10.2f}"
            f"{state.position_value(symbol):>12.2f}{state.unrealized_pnl(symbol):>+11.2f}"
        )
    return "\n".join(lines)


def format_news(state: SimulationState, limit: int | None = None) -> str:
    if not state.news_log:
        return "No news yet. Advance a day with 'next'."
    lines = []
    for item in state.news_log[:limit]:
        sectors = ", ".join(sorted(item.affected_sectors)) or "-"
        lines.append(f"[Day {item.day}] {item.title} ({item.impact:+.2f}; {sectors})")
        lines.append(f"    {item.content}")
    return "\n".join(lines)


# ------------------------------------------------------------------
# Command loop
# ------------------------------------------------------------------

async def handle_command(session: MarketSession, line: str) -> str | None:
    """Run one command line against *session*. Returns the text to print,
    or ``None`` when the player quits."""
    parts = line.split()
    if not parts:
        return ""
    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit"):
        return None
    if command == "help":
        return HELP_TEXT
    if command == "market":
        return format_market(session.state)
    if command == "portfolio":
        return format_portfolio(session.state)
    if command == "news":
        return format_news(session.state)

    if command == "next":
        try:
            days = int(args[0]) if args else 1
        except ValueError:
            return f"Not a number of days: {args[0]}"
        if days < 1:
            return "Number of days must be at least 1."
        for _ in range(days):
            await session.advance_day()
        return format_news(session.state, limit=days) + "\n\n" + format_market(session.state)

    if command in ("buy", "sell"):
        if len(args) != 2:
            return f"Usage: {command} SYMBOL QTY"
        try:
            quantity = int(args[1])
        except ValueError:
            return f"Not a share count: {args[1]}"
        symbol = args[0].upper()
        result = session.buy(symbol, quantity) if command == "buy" else session.sell(symbol, quantity)
        return result.message

    return f"Unknown command '{command}'. Type 'help'."


async def _main() -> None:
    args = _parse_args()
    _setup_logging(args.log_level)

    config = _load_config(args)
    session = MarketSession(config)

    print(format_market(session.state))
    print()
    print(format_portfolio(session.state))
    print("\nType 'help' for commands.")

    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, _prompt)
        if line is None:
            break
        output = await handle_command(session, line)
        if output is None:
            break
        if output:
            print(output)


def _prompt() -> str | None:
    try:
        return input("> ")
    except EOFError:
        return None


def main() -> None:
    asyncio.run(_main())


if __name__ == "__main__":
    main()
