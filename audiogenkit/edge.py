"""Compact audio generation models that can be quantised for small devices."""

from __future__ import annotations

import zipfile
from dataclasses import dataclass

import numpy as np

from .network import MLP, load_mlp

_INT8_MAX = 127


def _quantize_in_place(values: np.ndarray) -> None:
    """Snap ``values`` to a symmetric 8-bit grid scaled by their largest magnitude."""
    if values.size == 0:
        return
    peak = float(np.max(np.abs(values)))
    if peak == 0.0:
        return
    scale = peak / _INT8_MAX
    values[...] = np.clip(np.round(values / scale), -_INT8_MAX, _INT8_MAX) * scale


@dataclass(eq=False)
class EdgeAudioModel:
    """A dense generator network and whether its weights have been quantised."""

    network: MLP
    quantized: bool = False

    def forward(self, inputs) -> np.ndarray:
        return self.network.forward(inputs)

    def quantize(self) -> None:
        """Round every weight and bias to 8-bit precision, in place."""
        for value, _ in self.network.parameters():
            _quantize_in_place(value)
        self.quantized = True


def load_model(model_path) -> EdgeAudioModel:
    """Read a network saved with :meth:`MLP.save`; raises :class:`OSError` on failure."""
    try:
        network = load_mlp(model_path)
    except (OSError, ValueError, KeyError, EOFError, zipfile.BadZipFile) as exc:
        raise OSError(f"Failed to load model from {model_path}: {exc}") from exc
    return EdgeAudioModel(network)


def generate_audio_samples(model: EdgeAudioModel, input_data) -> list[float]:
    """Run one row of ``input_data`` through ``model`` and return the flattened output."""
    row = np.asarray(input_data, dtype=np.float32).reshape(1, -1)
    output = model.forward(row.astype(np.float64))
    return np.asarray(output, dtype=np.float32).ravel().tolist()


def quantize_model(model: EdgeAudioModel) -> None:
    """Quantise ``model`` for deployment."""
    model.quantize()