"""Daily data to weekly metrics."""

from periodization_engine.aggregation.weekly import aggregate_weekly_metrics, iso_week_start

__all__ = ["aggregate_weekly_metrics", "iso_week_start"]
