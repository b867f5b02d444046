import numpy as np
import pytest

from audiogenkit.network import MLP
from audiogenkit.packaging import (
    REQUIREMENTS,
    generate_audio,
    generate_audio_samples,
    load_model,
    package_application,
)


def test_generate_length_matches_output_size():
    model = MLP([5, 4, 5], rng=np.random.default_rng(0))
    samples = generate_audio_samples(model, 5, np.random.default_rng(1))
    assert len(samples) == 5


def test_generate_single_output_is_a_list_of_one():
    model = MLP([6, 4, 1], rng=np.random.default_rng(0))
    samples = generate_audio_samples(model, 6, np.random.default_rng(1))
    assert len(samples) == 1


def test_generate_is_reproducible_with_seed():
    model = MLP([5, 4, 5], rng=np.random.default_rng(0))
    first = generate_audio_samples(model, 5, np.random.default_rng(7))
    second = generate_audio_samples(model, 5, np.random.default_rng(7))
    assert first == second


def test_generate_wrong_size_raises_runtime_error():
    model = MLP([5, 4, 5], rng=np.random.default_rng(0))
    with pytest.raises(RuntimeError, match="Failed to generate audio"):
        generate_audio_samples(model, 3)


def test_generate_negative_count():
    model = MLP([5, 4, 5])
    with pytest.raises(ValueError):
        generate_audio_samples(model, -1)


def test_generate_audio_from_file(tmp_path):
    path = tmp_path / "model.npz"
    MLP([8, 4, 8]).save(path)
    assert len(generate_audio(path, 8)) == 8


def test_load_model_missing(tmp_path):
    with pytest.raises(OSError, match="Failed to load model"):
        load_model(tmp_path / "missing.npz")


def test_package_application_copies_files(tmp_path):
    model = tmp_path / "model.pt"
    model.write_bytes(b"model-bytes")
    executable = tmp_path / "runner"
    executable.write_bytes(b"exe-bytes")
    out = package_application(tmp_path / "dist", model, executable)
    assert (out / "model.pt").read_bytes() == b"model-bytes"
    assert (out / "runner").read_bytes() == b"exe-bytes"
    assert (out / "requirements.txt").read_bytes() == b"torch\ntqdm\nnumpy\n"
    assert REQUIREMENTS == (out / "requirements.txt").read_bytes()


def test_package_application_existing_dir(tmp_path):
    model = tmp_path / "m.bin"
    model.write_bytes(b"a")
    executable = tmp_path / "e.bin"
    executable.write_bytes(b"b")
    target = tmp_path / "dist"
    target.mkdir()
    out = package_application(target, model, executable)
    assert sorted(p.name for p in out.iterdir()) == ["e.bin", "m.bin", "requirements.txt"]


def test_package_application_missing_model(tmp_path):
    executable = tmp_path / "e.bin"
    executable.write_bytes(b"b")
    with pytest.raises(OSError, match="Failed to package application"):
        package_application(tmp_path / "dist", tmp_path / "nope.pt", executable)


def test_package_application_missing_parent(tmp_path):
    model = tmp_path / "m.bin"
    model.write_bytes(b"a")
    with pytest.raises(OSError, match="Failed to package application"):
        package_application(tmp_path / "a" / "b", model, model)