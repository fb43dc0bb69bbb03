"""
Box-drawn comparison table for the token report.
"""
from typing import List, Sequence

from reporting.token_counter import FileStats

# ANSI color codes
COLORS = {
    "green": "\x1b[32m",
    "gray": "\x1b[90m",
    "reset": "\x1b[0m",
}

BAR_WIDTH = 20

_TOP = "┌─────────────────────┬──────────┬─────────────────────────────┬──────────┬─────────────────────────────┐"
_HEADER = "│ File                │ Size(KB) │     Size Reduction          │ Tokens   │     Token Reduction         │"
_SEPARATOR = "├─────────────────────┼──────────┼─────────────────────────────┼──────────┼─────────────────────────────┤"
_BOTTOM = "└─────────────────────┴──────────┴─────────────────────────────┴──────────┴─────────────────────────────┘"


def progress_bar(percent: float, width: int = BAR_WIDTH, colored: bool = False) -> str:
    """Render a bar of `width` cells, filled in proportion to percent."""
    filled = round(width * percent / 100)
    filled = max(0, min(width, filled))
    empty = width - filled
    if colored:
        return (
            COLORS["green"] + "█" * filled
            + COLORS["gray"] + "░" * empty
            + COLORS["reset"]
        )
    return "█" * filled + "░" * empty


def reduction_percent(value: float, maximum: float) -> float:
    """Percent saved by value relative to maximum (0 when maximum is 0)."""
    if not maximum:
        return 0.0
    return (maximum - value) / maximum * 100


def format_row(stats: FileStats, max_size: float, max_tokens: int, colored: bool = False) -> str:
    size_percent = round(reduction_percent(stats.size_kb, max_size), 1)
    token_percent = round(reduction_percent(stats.token_count, max_tokens), 1)

    size_bar = progress_bar(size_percent, colored=colored)
    token_bar = progress_bar(token_percent, colored=colored)

    return (
        f"│ {stats.file:<19} │ {stats.size_kb:>8.2f} │ {size_bar} {size_percent:>5.1f}% "
        f"│ {stats.token_count:>8} │ {token_bar} {token_percent:>5.1f}% │"
    )


def format_report(results: Sequence[FileStats], model_name: str, colored: bool = False) -> str:
    """
    Build the full report: tokenizer name, then one table row per file.

    Reductions are measured against the largest file and the highest
    token count among the results.
    """
    max_size = max((r.size_kb for r in results), default=0.0)
    max_tokens = max((r.token_count for r in results), default=0)

    lines: List[str] = [f"Model tokenizer: {model_name}", "", _TOP, _HEADER, _SEPARATOR]
    for stats in results:
        lines.append(format_row(stats, max_size, max_tokens, colored=colored))
    lines.append(_BOTTOM)
    return "\n".join(lines)
