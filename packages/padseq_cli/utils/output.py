"""Output formatting utilities"""

import json
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

from padseq_core.ir import DrumPattern


class OutputFormatter:
    """Handles output formatting for JSON and human-readable modes"""

    def __init__(self, json_mode: bool = False, console: Console | None = None):
        """Initialize output formatter

        Args:
            json_mode: Enable JSON output mode
            console: Rich console instance (for human mode)
        """
        self.json_mode = json_mode
        self.console = console or Console()

    def success(self, message: str, data: Any = None) -> None:
        """Output success message

        Args:
            message: Success message
            data: Optional data to include
        """
        if self.json_mode:
            output = {"status": "success", "message": message, "data": data}
            print(json.dumps(output, indent=2))
        else:
            self.console.print(f"[green]✓[/green] {message}")
            if data and isinstance(data, dict):
                for key, value in data.items():
                    self.console.print(f"  {key}: {value}")

    def error(self, message: str, details: str | None = None) -> None:
        """Output error message

        Args:
            message: Error message
            details: Optional error details
        """
        if self.json_mode:
            output = {"status": "error", "message": message, "details": details}
            print(json.dumps(output, indent=2), file=sys.stderr)
        else:
            err = Console(stderr=True)
            err.print(f"[red]✗[/red] {message}")
            if details:
                err.print(f"  {details}")

    def info(self, message: str) -> None:
        """Output info message (human mode only)"""
        if not self.json_mode:
            self.console.print(f"[blue]ℹ[/blue] {message}")

    def pattern(self, pattern: DrumPattern) -> None:
        """Output a pattern: full JSON, or a step grid with finger labels"""
        if self.json_mode:
            print(json.dumps(pattern.to_dict(), indent=2))
            return
        self.console.print(pattern_table(pattern))


def pattern_table(pattern: DrumPattern) -> Table:
    """Rich table with one row per pad and one column per step."""
    spb = pattern.subdivision.steps_per_beat
    table = Table(
        title=(
            f"{pattern.name} | {pattern.bpm} BPM | {pattern.subdivision.label} | "
            f"{pattern.bars} bar(s) | {pattern.active_count} hit(s)"
        ),
        show_lines=False,
    )
    table.add_column("Pad", style="bold", no_wrap=True)
    for step in range(pattern.total_steps):
        on_beat = (step / spb).denominator == 1
        table.add_column(str(step + 1) if on_beat else "·", justify="center", no_wrap=True)

    for track in pattern.tracks:
        cells = [str(s.finger) if s.active and s.finger else "" for s in track.steps]
        table.add_row(track.label, *cells)
    return table
