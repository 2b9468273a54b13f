from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .distribution import ConditionalDistribution
    from .event import AndClause, Condition, Event


def format_table(rows: List[List[str]]) -> str:
    """Render a simple ASCII grid given rows of cells (all strings)."""
    widths: List[int] = []
    for row in rows:
        for i, cell in enumerate(row):
            if i >= len(widths):
                widths.append(len(cell))
            else:
                widths[i] = max(widths[i], len(cell))

    def horiz() -> str:
        parts = ["+" + "-" * (w + 2) for w in widths]
        return "".join(parts) + "+"

    def fmt_row(row: List[str]) -> str:
        cells = [f" {cell.ljust(w)} " for cell, w in zip(row, widths)]
        return "|" + "|".join(cells) + "|"

    out: List[str] = []
    out.append(horiz())
    for r in rows:
        out.append(fmt_row(r))
        out.append(horiz())
    return "\n".join(out)


def _parent_assignments(distribution: "ConditionalDistribution") -> List[Tuple[Any, ...]]:
    # Parent domains are not stored on the table itself, so recover them from
    # the recorded keys in first-seen order.
    seen: List[Tuple[Any, ...]] = []
    for key in distribution.probabilities:
        parent_values = tuple(key[1:])
        if parent_values not in seen:
            seen.append(parent_values)
    return seen


def cpd_to_ascii_table(distribution: "ConditionalDistribution") -> str:
    """Render a CPT with one column per parent assignment.

    Entries that were never recorded are shown as ``-``.
    """
    var = distribution.variable
    parents = list(distribution.parents)

    rows: List[List[str]] = []

    if not parents:
        rows.append(["Node(Value)", "Probability"])  # header
        for s in distribution.values:
            prob = distribution.probabilities.get((s,))
            rows.append([f"{var}({s})", "-" if prob is None else f"{prob:.4f}"])
        return format_table(rows)

    parent_assigns = _parent_assignments(distribution)

    # Header rows listing parent assignments as columns
    for idx, p in enumerate(parents):
        header = [p]
        for assign in parent_assigns:
            header.append(f"{p}({assign[idx]})")
        rows.append(header)

    for s in distribution.values:
        row = [f"{var}({s})"]
        for assign in parent_assigns:
            prob = distribution.probabilities.get((s,) + assign)
            row.append("-" if prob is None else f"{prob:.4f}")
        rows.append(row)

    return format_table(rows)


def format_condition(variable: str, condition: "Condition") -> str:
    from .event import ConditionType

    op = "=" if condition.type is ConditionType.EQUAL else "!="
    return f"{variable}{op}{condition.value}"


def format_and_clause(clause: "AndClause") -> str:
    parts = [
        format_condition(variable, condition)
        for variable, conditions in clause.conditions.items()
        for condition in conditions
    ]
    return ", ".join(parts) if parts else "TRUE"


def format_event(event: "Event") -> str:
    """Render a DNF event, e.g. ``A=yes, B!=no OR C=yes``."""
    clauses = event.and_clauses
    if not clauses:
        return "FALSE"
    if len(clauses) == 1:
        return format_and_clause(clauses[0])
    rendered = []
    for clause in clauses:
        text = format_and_clause(clause)
        rendered.append(f"({text})" if ", " in text else text)
    return " OR ".join(rendered)


def format_probability_query(query: "Event", evidence: Optional["Event"] = None) -> str:
    """Generate formatted query string like P(dysp=no | smoke=yes, asia=no)"""
    if evidence is not None:
        return f"P({format_event(query)} | {format_event(evidence)})"
    return f"P({format_event(query)})"


__all__ = [
    "format_table",
    "cpd_to_ascii_table",
    "format_condition",
    "format_and_clause",
    "format_event",
    "format_probability_query",
]
