from analytics.daily_summary import build_daily_summary, summarize_trading
from analytics.date_ranges import filter_records, resolve_date_range
from analytics.performance import aggregate_performance, compute_drawdown, compute_streaks
