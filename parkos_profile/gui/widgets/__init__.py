from .labeled_entry import LabeledEntry
from .status_badge import StatusBadge

__all__ = ["LabeledEntry", "StatusBadge"]
