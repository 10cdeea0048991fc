"""Shared configuration for storing evaluation reports on disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ReportDestinations:
    """Resolved destinations for saving a single report."""

    directory: Path
    slug: str
    save_text: bool
    save_html: bool

    def ensure_dir(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    @property
    def text_path(self) -> Path:
        return self.directory / f"{self.slug}.txt"

    @property
    def html_path(self) -> Path:
        return self.directory / f"{self.slug}.html"

    @property
    def table_path(self) -> Path:
        return self.directory / f"{self.slug}_assignments.html"


@dataclass(frozen=True)
class ReportSaveConfig:
    """Factory for generating per-report destinations under ``base_dir/run_tag``."""

    base_dir: Path
    run_tag: str
    save_text: bool = True
    save_html: bool = True

    def for_report(self, slug: str) -> ReportDestinations:
        return ReportDestinations(
            directory=self.base_dir / self.run_tag,
            slug=slug,
            save_text=self.save_text,
            save_html=self.save_html,
        )


__all__ = ["ReportDestinations", "ReportSaveConfig"]
