"""Fade-in and reverb effects on (channels, samples) arrays."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _as_matrix(samples) -> np.ndarray:
    matrix = np.array(samples, dtype=np.float32)
    if matrix.ndim != 2:
        raise ValueError(f"expected a 2-D array of shape (channels, samples), got {matrix.ndim}-D")
    return matrix


@dataclass(frozen=True)
class FadeInOperator:
    """Linear fade-in over a fraction of the signal length."""

    fade_duration: float

    def forward(self, samples) -> np.ndarray:
        """Return a faded copy of ``samples``."""
        output = _as_matrix(samples)
        num_samples = output.shape[1]
        fade_samples = int(self.fade_duration * num_samples)
        if fade_samples <= 0:
            return output
        covered = min(fade_samples, num_samples)
        factors = np.arange(covered, dtype=np.float64) / fade_samples
        output[:, :covered] *= factors.astype(np.float32)
        return output


@dataclass(frozen=True)
class ReverbOperator:
    """Exponentially decaying echoes appended to the signal."""

    reverb_time: float

    def forward(self, samples) -> np.ndarray:
        """Return the signal with its reverb tail; the result is longer than the input."""
        source = _as_matrix(samples)
        channels, num_samples = source.shape
        reverb_samples = int(self.reverb_time * num_samples)
        if reverb_samples < 0:
            raise ValueError(f"reverb time must not be negative, got {self.reverb_time}")
        output = np.zeros((channels, num_samples + reverb_samples), dtype=np.float32)
        output[:, :num_samples] = source
        for delay in range(1, reverb_samples):
            decay = np.float32(np.exp(-3.0 * delay / reverb_samples))
            output[:, delay:num_samples + delay] += source * decay
        return output