"""Utility helpers for the Gantt render service."""

from .demo_data import generate_demo_tasks

__all__ = ["generate_demo_tasks"]
