"""Price chart rendering (matplotlib)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

logger = logging.getLogger(__name__)

LINE_COLOR = "#007bff"
FILL_COLOR = (0.0, 123 / 255, 1.0, 0.1)


class ChartRenderer:
    """Owns exactly one line chart at a time.

    Every ``render`` closes the previous figure before drawing the next, so
    repeated searches never stack figures.
    """

    def __init__(self, output_path: Path | str | None = None) -> None:
        self.output_path = Path(output_path) if output_path else None
        self.figure: Figure | None = None

    def render(
        self,
        labels: Sequence[str],
        values: Sequence[float],
        title: str,
    ) -> Figure:
        if len(labels) != len(values):
            raise ValueError(f"{len(labels)} labels for {len(values)} values")

        self.close()

        fig, ax = plt.subplots(figsize=(10, 4.5))
        x = list(range(len(values)))
        ax.plot(x, list(values), color=LINE_COLOR, marker="o", markersize=2, linewidth=1.5, label=title)
        if values:
            ax.fill_between(x, list(values), min(values), color=FILL_COLOR)
        ax.set_xticks(x)
        ax.set_xticklabels(list(labels), rotation=45, ha="right", fontsize=7)
        ax.set_title(title)
        ax.grid(True, alpha=0.3)
        ax.legend(loc="upper left")
        fig.tight_layout()
        self.figure = fig

        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(self.output_path)
            logger.debug("Chart saved to %s", self.output_path)
        return fig

    def close(self) -> None:
        if self.figure is not None:
            plt.close(self.figure)
            self.figure = None
