from typing import Any, Dict, List, Optional
import logging

import numpy as np

from ..analysis.config import BeatClass, DetectionConfig
from ..analysis.history import bin_band_energies
from ..analysis.transforms import FFTMagnitudeTransform
from ..common.exceptions import FrameSizeError, ReentrancyError
from ..state.models import BeatEvent, DetectionState
from .base import BeatPipeline, SinkLike, SpectralTransform, resolve_sink

logger = logging.getLogger(__name__)


def band_votes(
    energies: np.ndarray,
    averages: np.ndarray,
    variances: np.ndarray,
    threshold_percent: float,
) -> np.ndarray:
    """Mask of bands whose energy exceeds the adaptive threshold

    A band triggers when ``energy > variance / average + average * threshold / 100``.
    Bands with a rolling average at or below zero never trigger.
    """
    positive = averages > 0
    safe_averages = np.where(positive, averages, 1.0)
    limit = variances / safe_averages + safe_averages * (threshold_percent / 100.0)
    return positive & (energies > limit)


class DetectionPipeline(BeatPipeline):
    """Spectral beat detector classifying frames into LOW/MID/HIGH beats

    Each frame is transformed to a magnitude spectrum and folded into bands.
    Every band votes for every beat class whose threshold its energy exceeds,
    and a class fires once it collects more than ``cutoff // 2`` votes. After
    firing a class sits out the next ``refractory_frames`` frames.

    Not reentrant: sinks must not call ``process()`` on the pipeline that is
    notifying them.
    """

    def __init__(
        self,
        transform: Optional[SpectralTransform] = None,
        config: Optional[DetectionConfig] = None,
    ):
        self.config = config or DetectionConfig()
        self.transform = transform or FFTMagnitudeTransform(self.config.frame_size)
        super().__init__(self.config)

    def _initialize(self) -> None:
        self.state = DetectionState.from_config(self.config)
        self._processing = False
        logger.info(
            f"Initializing beat detection: {self.config.frame_size} bins, "
            f"{self.config.band_count} bands, {self.config.history_length} frame history"
        )

    def process(
        self, frame: np.ndarray, sink: Optional[SinkLike] = None
    ) -> List[BeatEvent]:
        """Process one frame and dispatch any beats to the sink"""
        if self._processing:
            raise ReentrancyError("process() called from within a beat sink")

        callback = resolve_sink(sink)
        self._processing = True
        try:
            return self._process_frame(frame, callback)
        finally:
            self._processing = False

    def _process_frame(self, frame, callback) -> List[BeatEvent]:
        state = self.state

        # Readiness is decided before the decay so a class that fired on the
        # previous frame stays quiet for this one
        ready = {c: state.is_ready(c) for c in BeatClass}
        state.decay_cooldowns()

        spectrum = self._transform(frame)
        state.band_energies = bin_band_energies(spectrum, self.config.band_count)
        state.history.update(state.band_energies)
        frame_index = state.frames_processed
        state.frames_processed += 1

        averages = state.history.averages()
        variances = state.history.variances()
        peak_sum = float(np.sum(state.band_energies))

        events = []
        for beat_class in BeatClass:
            votes = int(
                np.count_nonzero(
                    band_votes(
                        state.band_energies,
                        averages,
                        variances,
                        self.config.threshold[beat_class],
                    )
                )
            )
            if not ready[beat_class]:
                continue
            if votes > self.config.cutoff[beat_class] // 2:
                state.last_fired_energy[beat_class] = peak_sum
                state.cooldown[beat_class] = self.config.refractory_frames
                event = BeatEvent(beat_class, peak_sum, frame_index)
                events.append(event)
                logger.debug(
                    f"{beat_class.name} beat on frame {frame_index}: "
                    f"{votes} votes, energy {peak_sum:.3f}"
                )
                self._notify(callback, event)

        return events

    def _transform(self, frame: np.ndarray) -> np.ndarray:
        try:
            spectrum = np.asarray(self.transform(frame), dtype=np.float64)
        except Exception as e:
            logger.error(f"Spectral transform failed: {e}")
            raise

        if spectrum.shape != (self.config.frame_size,):
            raise FrameSizeError(
                f"Transform returned shape {spectrum.shape}, "
                f"expected ({self.config.frame_size},)"
            )
        return spectrum

    def _notify(self, callback, event: BeatEvent) -> None:
        if callback is None:
            return
        try:
            callback(event.beat_class, event.energy)
        except ReentrancyError:
            raise
        except Exception as e:
            logger.error(f"Beat sink failed on {event.beat_class.name}: {e}")
            raise

    def reset(self) -> None:
        """Reset band history and cooldowns, keeping the configuration"""
        self.state.reset()

    def get_state(self) -> Dict[str, Any]:
        return self.state.to_dict()

    @property
    def frames_processed(self) -> int:
        return self.state.frames_processed
