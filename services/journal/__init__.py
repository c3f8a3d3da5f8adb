from .summary import (
    group_by_date,
    totals_for_date,
    daily_summaries,
    format_date_header,
    export_csv,
    default_export_path
)

__all__ = [
    'group_by_date',
    'totals_for_date',
    'daily_summaries',
    'format_date_header',
    'export_csv',
    'default_export_path'
]
