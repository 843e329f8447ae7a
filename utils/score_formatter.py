"""
Display helpers for the Disclosure Check tool
"""

from typing import Union

from scoring.types import CollectiveClass


def get_collective_status(css_class: Union[CollectiveClass, str]) -> str:
    """Status indicator for the collective result (🔴 decided, 🟠 split, 🟢 declined)."""
    value = css_class.value if isinstance(css_class, CollectiveClass) else css_class
    if value == CollectiveClass.DECIDED.value:
        return "🔴 Decided"
    elif value == CollectiveClass.SPLIT.value:
        return "🟠 Split"
    else:
        return "🟢 Declined"
