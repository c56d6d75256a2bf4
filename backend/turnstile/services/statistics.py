"""Pass/denial statistics per card category."""

from typing import Dict, List

from turnstile.models import CardCategory, StatisticsSnapshot


class TurnstileStatistics:
    """
    Counters for granted and denied passages.

    Per-category counters are keyed by the closed ``CardCategory`` set and
    start at zero for every category. Counters only ever increase.
    """

    def __init__(self):
        self.total_passes = 0
        self.total_denials = 0
        self._passes: Dict[CardCategory, int] = {category: 0 for category in CardCategory}
        self._denials: Dict[CardCategory, int] = {category: 0 for category in CardCategory}

    def record_pass(self, category: CardCategory) -> None:
        self.total_passes += 1
        self._passes[category] += 1

    def record_denial(self, category: CardCategory) -> None:
        self.total_denials += 1
        self._denials[category] += 1

    def snapshot(self) -> StatisticsSnapshot:
        """Return a copy of the counters; mutating it does not affect this object."""
        return StatisticsSnapshot(
            total_passes=self.total_passes,
            total_denials=self.total_denials,
            passes_by_category=dict(self._passes),
            denials_by_category=dict(self._denials)
        )

    def summary_text(self) -> str:
        """
        Human-readable report.

        Totals first, then the non-zero per-category counts for passes and
        then for denials, in ``CardCategory`` declaration order.
        """
        lines: List[str] = [
            "=== Overall statistics ===",
            f"Passes granted: {self.total_passes}",
            f"Passes denied: {self.total_denials}",
            "",
            "=== Passes by category ===",
        ]
        lines.extend(self._breakdown(self._passes))
        lines.append("")
        lines.append("=== Denials by category ===")
        lines.extend(self._breakdown(self._denials))
        return "\n".join(lines) + "\n"

    @staticmethod
    def _breakdown(counts: Dict[CardCategory, int]) -> List[str]:
        return [
            f"{category.value}: {counts[category]}"
            for category in CardCategory
            if counts[category] > 0
        ]
