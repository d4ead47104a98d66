#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers for markup handling, text formatting and recipe schema."""
