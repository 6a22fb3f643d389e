"""
Rich progress column showing a calculator estimate.

Rich's own TimeRemainingColumn derives its estimate from the task's recent
speed. EtaColumn renders one of the calculator projections instead, so a
progress bar can show the average, optimistic or pessimistic outlook.

Example:
    >>> from rich.progress import BarColumn, Progress, TextColumn
    >>> from etacalc import Calculator, EstimateKind
    >>> from etacalc.ui import EtaColumn
    >>>
    >>> calc = Calculator(total_count=len(items))
    >>> columns = [
    ...     TextColumn("{task.description}"),
    ...     BarColumn(),
    ...     EtaColumn(calc, EstimateKind.AVERAGE),
    ...     EtaColumn(calc, EstimateKind.PESSIMISTIC),
    ... ]
    >>> with Progress(*columns) as progress:
    ...     task = progress.add_task("Processing", total=len(items))
    ...     for item in items:
    ...         process(item)
    ...         calc.increment(1)
    ...         progress.advance(task)
"""

from __future__ import annotations

import datetime

from rich.progress import ProgressColumn, Task
from rich.table import Column
from rich.text import Text

from ..calculator import Calculator, EstimateKind
from ..delta import td_str

UNKNOWN_TEXT = "-:--:--"


class EtaColumn(ProgressColumn):
    """Renders the time left until a calculator projection."""

    max_refresh = 0.5

    def __init__(
        self,
        calculator: Calculator,
        kind: EstimateKind = EstimateKind.ETA,
        style: str = "progress.remaining",
        table_column: Column | None = None,
    ) -> None:
        """
        Initialize the column.

        Args:
            calculator: Calculator to query
            kind: Which projection to display
            style: Rich style for the rendered text
            table_column: Optional rich table column settings
        """
        self._calculator = calculator
        self._kind = kind
        self._style = style
        super().__init__(table_column=table_column)

    @property
    def kind(self) -> EstimateKind:
        return self._kind

    def render(self, task: Task) -> Text:
        """Render the remaining time, or a placeholder when it is unknown."""
        remaining = self._calculator.remaining(self._kind)
        if remaining is None:
            return Text(UNKNOWN_TEXT, style=self._style)

        # Past-due projections (more done than expected) show as zero
        remaining = max(remaining, datetime.timedelta(0))
        return Text(td_str(remaining), style=self._style)
