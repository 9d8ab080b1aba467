from .models import BeatEvent, DetectionState

__all__ = ["BeatEvent", "DetectionState"]
