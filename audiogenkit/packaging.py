"""Generating audio from a saved model and bundling it for distribution."""

from __future__ import annotations

import shutil
import zipfile
from pathlib import Path

import numpy as np

from .network import MLP, load_mlp

REQUIREMENTS = b"torch\ntqdm\nnumpy\n"


def load_model(model_path) -> MLP:
    """Read a network saved with :meth:`MLP.save`; raises :class:`OSError` on failure."""
    try:
        return load_mlp(model_path)
    except (OSError, ValueError, KeyError, EOFError, zipfile.BadZipFile) as exc:
        raise OSError(f"Failed to load model: {exc}") from exc


def generate_audio_samples(model, num_samples: int, rng: np.random.Generator | None = None) -> list[float]:
    """Feed ``num_samples`` uniform random values, shaped (1, 1, n), through ``model``."""
    if num_samples < 0:
        raise ValueError(f"number of samples must not be negative, got {num_samples}")
    rng = rng if rng is not None else np.random.default_rng()
    inputs = rng.random(num_samples).astype(np.float32).reshape(1, 1, num_samples)
    try:
        output = model.forward(inputs.astype(np.float64))
    except ValueError as exc:
        raise RuntimeError(f"Failed to generate audio: {exc}") from exc
    return np.atleast_1d(np.asarray(output, dtype=np.float32).squeeze()).tolist()


def generate_audio(model_path, num_samples: int) -> list[float]:
    """Load the model at ``model_path`` and generate audio from it."""
    model = load_model(model_path)
    return generate_audio_samples(model, num_samples)


def package_application(output_dir, model_path, executable_path) -> Path:
    """Copy the model and executable into ``output_dir`` with a requirements file.

    The directory is created if missing, but not its parents.
    """
    out = Path(output_dir)
    model = Path(model_path)
    executable = Path(executable_path)
    try:
        if not out.exists():
            out.mkdir()
        shutil.copy(model, out / model.name)
        (out / "requirements.txt").write_bytes(REQUIREMENTS)
        shutil.copy(executable, out / executable.name)
    except OSError as exc:
        raise OSError(f"Failed to package application: {exc}") from exc
    return out