import math
from typing import List

from statistical_engine import CorrelationStrength, DescriptiveSummary


STRENGTH_LABELS = {
    CorrelationStrength.WEAK: "Weak correlation",
    CorrelationStrength.MODERATE: "Moderate correlation",
    CorrelationStrength.STRONG: "Strong correlation",
    CorrelationStrength.UNDEFINED: "Undefined correlation (insufficient variability)",
}


def format_value(value: float) -> str:
    """Whole numbers without a trailing .0, everything else as-is"""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return str(value)


def _summary_lines(title: str, summary: DescriptiveSummary) -> List[str]:
    return [
        f"\n{title} Distribution:",
        f"Mean: {summary.mean:.2f}",
        f"Min: {summary.minimum:.2f}",
        f"Max: {summary.maximum:.2f}",
    ]


def render_verification(verification) -> List[str]:
    lines = [
        "\n--- Random Sample Verification ---",
        f"Total records in sample: {verification.sample_size}",
    ]

    for title, summary in verification.distributions.items():
        lines.extend(_summary_lines(title, summary))

    lines.append("\nFamily Influence Distribution:")
    for category, percentage in verification.family_influence_percentages.items():
        lines.append(f"{category}: {percentage:.2f}%")

    lines.append(f"\nFirst {len(verification.first_records)} Records (Original IDs):")
    for record in verification.first_records:
        lines.append(f"ID: {record.id}, Age: {format_value(record.age)}, Salary: {format_value(record.salary)}")

    lines.append(f"\nLast {len(verification.last_records)} Records (Original IDs):")
    for record in verification.last_records:
        lines.append(f"ID: {record.id}, Age: {format_value(record.age)}, Salary: {format_value(record.salary)}")

    return lines


def render_analyses(analyses) -> List[str]:
    lines = ["\n--- Salary Correlation Analyses ---"]

    for analysis in analyses:
        result = analysis.result
        lines.extend([
            f"\n{analysis.label}:",
            f"Correlation Coefficient: {result.correlation:.4f}",
            f"Regression Equation: Salary = {result.slope:.4f} * X + {result.intercept:.4f}",
            f"R-squared: {result.r_squared:.4f}",
            STRENGTH_LABELS[analysis.strength],
        ])

    return lines


def render_report(report) -> str:
    """Full human-readable report in fixed section order"""
    lines = [f"Total parse errors: {report.parse_errors}"]
    lines.extend(render_verification(report.verification))
    lines.extend(render_analyses(report.analyses))
    return "\n".join(lines)
