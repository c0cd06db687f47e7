"""CountryLens — command-line entry point.

Usage:
  countrylens -q france            one lookup by name
  countrylens --region europe      random country from a region
  countrylens --random             random country
  countrylens -i                   interactive; each command supersedes the last

Interactive commands: ``random``, ``region <name>``, ``neighbor <name>``,
``quit``; anything else is searched by name.
"""

import argparse
import asyncio
import logging
import sys

from countrylens.config import settings
from countrylens.orchestrator.controller import SearchController, build_controller
from countrylens.orchestrator.schemas import LookupKind
from countrylens.services.cache import country_cache
from countrylens.views.console import ConsoleRenderer

logger = logging.getLogger("countrylens")

QUIT_WORDS = {"quit", "exit"}


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="countrylens", description="Look up countries and their neighbors.")
    parser.add_argument("-q", "--query", help="country name to look up on start")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--random", action="store_true", help="look up a random country")
    group.add_argument("--region", help="look up a random country in REGION")
    parser.add_argument("-i", "--interactive", action="store_true", help="read commands from stdin")
    parser.add_argument("--log-level", default=None, help=f"logging level (default {settings.log_level})")
    return parser


def parse_command(line: str) -> tuple[str, str | None]:
    """Map one interactive line to ``(action, argument)``."""
    text = line.strip()
    word, _, rest = text.partition(" ")
    command = word.lower()
    rest = rest.strip()

    if command in QUIT_WORDS:
        return "quit", None
    if command == "random":
        return "random", None
    if command == "region" and rest:
        return "region", rest.lower()
    if command == "neighbor" and rest:
        return "neighbor", rest
    return "search", text


def trigger(controller: SearchController, action: str, argument: str | None) -> asyncio.Task | None:
    if action == "random":
        return controller.click_random()
    if action == "region":
        return controller.click_region(argument)
    if action == "neighbor":
        return controller.click_neighbor(argument)
    return controller.submit_search(argument or "")


async def interactive(controller: SearchController) -> None:
    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            break
        action, argument = parse_command(line)
        if action == "quit":
            break
        trigger(controller, action, argument)
    await controller.drain()


async def run(args: argparse.Namespace) -> int:
    redis_ok = await country_cache.connect()
    logger.info("CountryLens starting | cache=%s", "redis" if redis_ok else "memory")

    try:
        controller = build_controller(ConsoleRenderer())

        if args.query:
            controller.dispatch(LookupKind.BY_NAME, args.query)
        if args.random:
            controller.click_random()
        elif args.region:
            controller.click_region(args.region.lower())

        if args.interactive or not (args.query or args.random or args.region):
            await interactive(controller)
        else:
            await controller.drain()
    finally:
        await country_cache.disconnect()
        logger.info("CountryLens shutting down")

    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
