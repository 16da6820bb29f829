"""
End of run summary rendered with rich.
"""

from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .stats import REJECT_REASONS, ExtractionStats


def build_summary(stats: ExtractionStats, fatal: bool = False) -> Panel:
    """
    Build the summary panel for an extraction run.

    Args:
        stats: Run statistics
        fatal: True if the run stopped on a write failure

    Returns:
        Renderable panel
    """
    summary = stats.get_summary()

    totals = Table(show_header=False, box=None, padding=(0, 2))
    totals.add_column("Item", style="dim")
    totals.add_column("Count", justify="right")
    totals.add_row("Lines read", str(summary['lines_read']))
    totals.add_row("Frames written", Text(str(summary['frames_written']), style="bold green"))
    totals.add_row("Lines rejected", str(summary['total_rejected']))
    for reason in REJECT_REASONS:
        count = stats.rejected[reason]
        style = "yellow" if count else "dim"
        totals.add_row(f"  {reason.replace('_', ' ')}", Text(str(count), style=style))
    totals.add_row("Elapsed", f"{summary['elapsed_seconds']:.1f} s")

    mids = Table(title="Per-MID", title_style="bold", expand=False)
    mids.add_column("MID", justify="right", style="cyan")
    mids.add_column("Written", justify="right", style="green")
    mids.add_column("Skipped", justify="right", style="dim")
    for mid in stats.get_mid_summary():
        mids.add_row(str(mid['mid']), str(mid['written']), str(mid['skipped']))

    if fatal:
        title = Text("GP2 to OSP - stopped on write failure", style="bold red")
        border = "red"
    else:
        title = Text("GP2 to OSP - extraction complete", style="bold white")
        border = "blue"

    return Panel(Group(totals, mids), title=title, border_style=border)


def print_summary(stats: ExtractionStats, fatal: bool = False,
                  console: Optional[Console] = None) -> None:
    """Print the summary panel."""
    console = console or Console()
    console.print(build_summary(stats, fatal))
