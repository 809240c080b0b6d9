"""Professor Aid: classes and assignments management for teachers."""

__version__ = "0.1.0"
