from .rolling import RollingStatsWindow

__all__ = ["RollingStatsWindow"]
