"""
Daily grouping, totals and CSV export of logged food entries
"""

import csv
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from app.settings import settings
from core.models import FoodEntry, DailySummary

logger = logging.getLogger(__name__)

CSV_HEADER = ['date', 'name', 'grams', 'calories', 'protein', 'carbs', 'fats']


def group_by_date(entries: Iterable[FoodEntry]) -> Dict[date, List[FoodEntry]]:
    """Entries per day, newest day first; entries keep their input order"""
    grouped: Dict[date, List[FoodEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.entry_date, []).append(entry)
    return {day: grouped[day] for day in sorted(grouped, reverse=True)}


def totals_for_date(day: date, entries: Iterable[FoodEntry]) -> DailySummary:
    summary = DailySummary(day=day)
    for entry in entries:
        summary.entry_count += 1
        summary.grams += entry.grams
        summary.calories += entry.calories
        summary.protein += entry.protein
        summary.carbs += entry.carbs
        summary.fats += entry.fats
    return summary


def daily_summaries(entries: Iterable[FoodEntry]) -> List[DailySummary]:
    """One summary per day, newest first"""
    return [totals_for_date(day, day_entries) for day, day_entries in group_by_date(entries).items()]


def format_date_header(day: date, today: Optional[date] = None) -> str:
    """'Today', 'Yesterday' or DD-MM-YYYY"""
    today = today or date.today()
    diff = (today - day).days
    if diff == 0:
        return "Today"
    if diff == 1:
        return "Yesterday"
    return day.strftime("%d-%m-%Y")


def export_csv(entries: Iterable[FoodEntry], path: Path) -> Path:
    """Write entries as CSV, newest day first"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    rows = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for day, day_entries in group_by_date(entries).items():
            for entry in day_entries:
                writer.writerow([
                    day.isoformat(),
                    entry.name,
                    entry.grams,
                    entry.calories,
                    entry.protein,
                    entry.carbs,
                    entry.fats,
                ])
                rows += 1

    logger.info(f"📁 Exported {rows} entries to {path}")
    return path


def default_export_path(export_dir: Optional[Path] = None, now: Optional[datetime] = None) -> Path:
    now = now or datetime.now()
    return Path(export_dir or settings.export_dir) / f"nutrition_export_{now.strftime('%Y%m%dT%H%M%S')}.csv"
