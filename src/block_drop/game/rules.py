from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_points: int = 10
    combo_multiplier: int = 2

    def score_for_row(self, index: int) -> int:
        """Points for the `index`-th row (0-based) cleared within one sweep."""
        return self.line_clear_points * self.combo_multiplier ** index

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return sum(self.score_for_row(i) for i in range(lines))
