"""Text formatters for link check results."""

from typing import Optional

from .analyzer.models import RiskLevel, RiskResult


class ResultFormatter:
    """Formats risk results for the terminal."""

    LEVEL_EMOJI = {
        RiskLevel.HIGH: "\u26a0\ufe0f",  # Warning sign
        RiskLevel.MEDIUM: "\u2753",  # Question mark
        RiskLevel.LOW: "\u2705",  # Check mark
    }

    @classmethod
    def format_result(cls, result: RiskResult, saved_at: Optional[str] = None, emoji: bool = True) -> str:
        """Format a full result: url, host, risk and the reasons list."""
        risk = f"{result.level.value} ({result.score}/100)"
        if emoji:
            risk = f"{cls.LEVEL_EMOJI.get(result.level, '')} {risk}".strip()

        lines = [
            f"URL: {result.url}",
            f"Host: {result.hostname}",
            f"Risk: {risk}",
        ]
        if saved_at:
            lines.append(f"Checked: {saved_at}")

        if result.reasons:
            lines.append("")
            lines.append("Reasons:")
            lines.extend(f"  - {reason}" for reason in result.reasons)
        else:
            lines.append("")
            lines.append("No risk signals found")

        return "\n".join(lines)

    @staticmethod
    def format_line(result: RiskResult) -> str:
        """One-line summary used by batch checks."""
        reasons = "; ".join(result.reasons) or "-"
        return f"{result.level.value:<6} {result.score:>3}/100  {result.url}  [{reasons}]"
