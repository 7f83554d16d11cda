"""
Poolside Timetable - layout and analytics service for swim coaching.

This package contains the complete application:
- core: Framework-agnostic timetable layout, analytics and search
- infrastructure: Snapshot validation and loading
- api: FastAPI routes and dependencies
- config: Application configuration
"""

__version__ = "0.1.0"
