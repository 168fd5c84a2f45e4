"""Report generation for HomeTax."""

from hometax.reports.comparison import ComparisonReportGenerator

__all__ = ["ComparisonReportGenerator"]
