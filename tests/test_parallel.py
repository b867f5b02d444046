import numpy as np
import pytest

from audiogenkit.inference import AudioGenerator, ModelLoadError
from audiogenkit.network import MLP
from audiogenkit.parallel import ParallelAudioGenerator, parallel_audio_generation


@pytest.fixture
def model_path(tmp_path):
    path = tmp_path / "model.npz"
    MLP([4, 6, 3], rng=np.random.default_rng(0)).save(path)
    return path


@pytest.fixture
def inputs():
    rng = np.random.default_rng(1)
    return [rng.random(4).astype(np.float32).tolist() for _ in range(5)]


def test_every_thread_processes_every_input(model_path, inputs):
    generator = AudioGenerator(model_path)
    outputs = parallel_audio_generation(generator, inputs, 3)
    assert len(outputs) == 3 * len(inputs)
    expected = [generator.generate_from(item) for item in inputs]
    assert outputs == expected * 3


def test_zero_threads_gives_nothing(model_path, inputs):
    generator = AudioGenerator(model_path)
    assert parallel_audio_generation(generator, inputs, 0) == []


def test_negative_threads_rejected(model_path, inputs):
    generator = AudioGenerator(model_path)
    with pytest.raises(ValueError):
        parallel_audio_generation(generator, inputs, -1)


def test_parallel_generator_outputs(model_path, inputs):
    parallel = ParallelAudioGenerator(model_path)
    outputs = parallel.generate_parallel(inputs, 2)
    assert len(outputs) == 2 * len(inputs)
    assert all(len(output) == 3 for output in outputs)
    assert outputs[: len(inputs)] == outputs[len(inputs):]


def test_parallel_generator_missing_model(tmp_path):
    with pytest.raises(ModelLoadError):
        ParallelAudioGenerator(tmp_path / "absent.npz")