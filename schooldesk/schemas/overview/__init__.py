from .responses import ClassPerformance, TodayAbsence, Overview, OverviewResponse

__all__ = ["ClassPerformance", "TodayAbsence", "Overview", "OverviewResponse"]
