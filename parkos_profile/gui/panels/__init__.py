from . import panel_logs, panel_profile

__all__ = ["panel_logs", "panel_profile"]
