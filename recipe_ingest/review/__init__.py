"""
Review of AI-proposed recipe changes.
"""

from .diff import DIFF_FIELDS, apply_changes, diff_recipes, has_value

__all__ = ["DIFF_FIELDS", "apply_changes", "diff_recipes", "has_value"]
