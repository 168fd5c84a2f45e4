"""HomeTax: household tax, housing and retirement comparison across states."""

__version__ = "0.1.0"
