from typing import Dict, List, Tuple

from ..analysis.config import BeatClass


class BeatFlags:
    """Sink remembering which classes fired and with what energy"""

    def __init__(self):
        self.beat: Dict[BeatClass, bool] = {c: False for c in BeatClass}
        self.energy: Dict[BeatClass, float] = {c: 0.0 for c in BeatClass}

    def on_beat(self, beat_class: BeatClass, energy: float) -> None:
        self.beat[beat_class] = True
        self.energy[beat_class] = energy

    def clear(self) -> None:
        """Lower all flags, typically once per frame"""
        for beat_class in BeatClass:
            self.beat[beat_class] = False
            self.energy[beat_class] = 0.0

    def any(self) -> bool:
        return any(self.beat.values())


class BeatRecorder:
    """Sink collecting every (beat class, energy) pair in arrival order

    Frame indices are not known to sinks; use the BeatEvents returned by
    ``process()`` when they are needed.
    """

    def __init__(self):
        self.beats: List[Tuple[BeatClass, float]] = []

    def on_beat(self, beat_class: BeatClass, energy: float) -> None:
        self.beats.append((beat_class, energy))

    def count(self, beat_class: BeatClass) -> int:
        return sum(1 for c, _ in self.beats if c == beat_class)

    def clear(self) -> None:
        self.beats.clear()
