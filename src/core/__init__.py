"""
Core timetable and analytics logic.

This module is framework-agnostic - it doesn't import FastAPI or know
where snapshots come from. Layout, analytics and search are plain
functions over the domain models, so they can be tested in isolation.
"""
