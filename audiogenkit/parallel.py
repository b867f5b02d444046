"""Running a generator over many inputs on several threads."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from .inference import AudioGenerator


def parallel_audio_generation(generator, inputs, num_threads: int) -> list[list[float]]:
    """Run every input through ``generator`` on each of ``num_threads`` workers.

    Each worker processes the whole input list, so the result holds
    ``num_threads * len(inputs)`` outputs, grouped by worker in input order.
    """
    if num_threads < 0:
        raise ValueError(f"number of threads must not be negative, got {num_threads}")
    shared = [list(item) for item in inputs]
    if num_threads == 0:
        return []

    def work() -> list[list[float]]:
        return [generator.generate_from(item) for item in shared]

    with ThreadPoolExecutor(max_workers=num_threads) as pool:
        futures = [pool.submit(work) for _ in range(num_threads)]
        return [output for future in futures for output in future.result()]


class ParallelAudioGenerator:
    """A generator loaded from a file, exposing multi-threaded generation."""

    def __init__(self, model_path):
        self.generator = AudioGenerator(model_path)

    def generate_parallel(self, inputs, num_threads: int) -> list[list[float]]:
        return parallel_audio_generation(self.generator, inputs, num_threads)