"""Render port — the capabilities the search controller drives.

Views (console, tests) implement this protocol; the controller never
formats output itself.
"""

from typing import Protocol

from countrylens.orchestrator.schemas import CountryRecord


class RenderPort(Protocol):
    def render(self, record: CountryRecord) -> None: ...

    def render_neighbors(self, neighbors: list[CountryRecord]) -> None: ...

    def hide_neighbors(self) -> None: ...

    def render_error(self, message: str) -> None: ...

    def set_loading(self, loading: bool) -> None: ...

    def clear_results(self) -> None: ...
