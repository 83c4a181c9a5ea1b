"""Standardized leaderboard reports.

Exports:
- JSON report schema (LeaderboardReport)
- Markdown exporter
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cafarank.config import CurationConfig
from cafarank.core.types import SelectionResult
from cafarank.leaderboard import format_score, leaderboard_rows
from cafarank.utils.config_io import write_model


class LeaderboardRow(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    rank: Optional[int] = None
    model_id: Optional[str] = None
    baseline: bool = False
    tag: str
    mean: Optional[float] = None
    q05: Optional[float] = None
    q95: Optional[float] = None
    coverage: Optional[float] = None


class LeaderboardReport(BaseModel):
    report_version: str = "0.1"
    generated_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    statistic: str = "smin"
    curation: CurationConfig = Field(default_factory=CurationConfig)

    rows: List[LeaderboardRow]
    all_qualified_ids: List[str]
    selected_ids: List[str]
    degraded: bool
    shortfall: int

    def summary(self) -> Dict[str, Any]:
        return {
            "qualified": len(self.all_qualified_ids),
            "selected": len(self.selected_ids),
            "degraded": self.degraded,
        }


def build_report(
    result: SelectionResult,
    curation: Optional[CurationConfig] = None,
    statistic: str = "smin",
) -> LeaderboardReport:
    return LeaderboardReport(
        statistic=statistic,
        curation=curation or CurationConfig(top_k=result.k),
        rows=[LeaderboardRow(**row) for row in leaderboard_rows(result)],
        all_qualified_ids=list(result.all_qualified_ids),
        selected_ids=list(result.selected_ids),
        degraded=result.degraded,
        shortfall=result.shortfall,
    )


def export_report_json(result: SelectionResult, path: str | Path, **kwargs: Any) -> str:
    return str(write_model(build_report(result, **kwargs), path))


def export_report_markdown(result: SelectionResult, path: str | Path, **kwargs: Any) -> str:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    report = build_report(result, **kwargs)

    lines: List[str] = []
    lines.append(f"# Leaderboard ({report.statistic})")
    lines.append("")
    lines.append(f"- Generated at: `{report.generated_at}`")
    lines.append(f"- Qualified models: {len(report.all_qualified_ids)}")
    lines.append(f"- Selected: {len(report.selected_ids)} of {report.curation.top_k}")
    if report.degraded:
        lines.append(f"- **Warning:** only {len(report.selected_ids)} distinct groups qualified")
    lines.append("")

    lines.append("| Rank | Model | Mean | 5% | 95% | Coverage |")
    lines.append("|---:|---|---:|---:|---:|---:|")
    for row in report.rows:
        rank = str(row.rank) if row.rank is not None else "ref"
        lines.append(
            f"| {rank} | {row.tag} | {format_score(row.mean)} | {format_score(row.q05)} "
            f"| {format_score(row.q95)} | {format_score(row.coverage, 2)} |"
        )

    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(path)
