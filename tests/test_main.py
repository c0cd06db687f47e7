"""Tests for the command-line entry point."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from countrylens.main import build_parser, parse_command, run, trigger


class TestParseCommand:
    @pytest.mark.parametrize("line,expected", [
        ("random", ("random", None)),
        ("  RANDOM ", ("random", None)),
        ("region Europe", ("region", "europe")),
        ("neighbor Germany", ("neighbor", "Germany")),
        ("quit", ("quit", None)),
        ("exit", ("quit", None)),
        ("France", ("search", "France")),
        ("united kingdom", ("search", "united kingdom")),
        ("region", ("search", "region")),
        ("", ("search", "")),
    ])
    def test_commands(self, line, expected):
        assert parse_command(line) == expected


class TestTrigger:
    def test_routes_to_controller(self):
        controller = MagicMock()
        trigger(controller, "random", None)
        trigger(controller, "region", "asia")
        trigger(controller, "neighbor", "Spain")
        trigger(controller, "search", "France")

        controller.click_random.assert_called_once_with()
        controller.click_region.assert_called_once_with("asia")
        controller.click_neighbor.assert_called_once_with("Spain")
        controller.submit_search.assert_called_once_with("France")


class TestParser:
    def test_query(self):
        args = build_parser().parse_args(["-q", "France"])
        assert args.query == "France"
        assert not args.interactive

    def test_random_and_region_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--random", "--region", "europe"])


class TestRun:
    @pytest.mark.asyncio
    async def test_one_shot_query(self):
        controller = MagicMock()
        controller.drain = AsyncMock()
        args = build_parser().parse_args(["-q", "France"])

        with patch("countrylens.main.build_controller", return_value=controller), \
             patch("countrylens.main.country_cache") as cache:
            cache.connect = AsyncMock(return_value=False)
            cache.disconnect = AsyncMock()
            assert await run(args) == 0

        controller.dispatch.assert_called_once()
        controller.drain.assert_awaited_once()
        cache.disconnect.assert_awaited_once()
