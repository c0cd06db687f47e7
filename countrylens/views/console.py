"""Console render port — prints country cards to a text stream."""

import sys
from typing import TextIO

from countrylens.orchestrator.schemas import CountryRecord
from countrylens.utils.formatting import area_share, card_fields, wikipedia_url

BAR_WIDTH = 30


class ConsoleRenderer:
    """RenderPort implementation for terminals."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout
        self.loading = False

    def _write(self, text: str = "") -> None:
        print(text, file=self.stream, flush=True)

    def render(self, record: CountryRecord) -> None:
        badges = []
        if record.un_member:
            badges.append("UN Member")
        if record.driving_side:
            badges.append(f"🚗 {record.driving_side.upper()}")
        if record.status:
            badges.append(record.status)

        self._write(f"\n{'='*60}")
        self._write(f"  {record.common_name}")
        if record.official_name:
            self._write(f"  {record.official_name}")
        if badges:
            self._write(f"  [{'] ['.join(badges)}]")
        self._write(f"{'='*60}")

        for label, value in card_fields(record):
            self._write(f"  {label:<18} {value}")

        filled = round(area_share(record.area) / 100 * BAR_WIDTH)
        self._write(f"  {'':<18} [{'#' * filled}{'.' * (BAR_WIDTH - filled)}] relative to Russia")

        if record.flag_url:
            self._write(f"  Flag         {record.flag_url}")
        if record.maps_url:
            self._write(f"  Google Maps  {record.maps_url}")
        self._write(f"  Wikipedia    {wikipedia_url(record)}")

    def render_neighbors(self, neighbors: list[CountryRecord]) -> None:
        self._write("\n  Neighbors:")
        if not neighbors:
            self._write("    (none found)")
        for n in neighbors:
            self._write(f"    - {n.common_name}")

    def hide_neighbors(self) -> None:
        self._write("\n  No land borders.")

    def render_error(self, message: str) -> None:
        self._write(f"\n  ❌ Error: {message}")
        self._write("  Please check the spelling and try again.")

    def set_loading(self, loading: bool) -> None:
        if loading and not self.loading:
            self._write("  ⏳ Loading...")
        self.loading = loading

    def clear_results(self) -> None:
        pass
