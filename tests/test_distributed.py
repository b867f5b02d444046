import math

import numpy as np
import pytest

from audiogenkit.distributed import distributed_train, init_distributed_training, shard_data
from audiogenkit.tuning import AudioGenerationModel


def _model(seed=0):
    return AudioGenerationModel(1, 8, 1, rng=np.random.default_rng(seed))


def test_shard_data_first_rank():
    assert shard_data(list(range(10)), 0, 3).tolist() == [0, 1, 2]


def test_shard_data_last_rank_takes_remainder():
    assert shard_data(list(range(10)), 2, 3).tolist() == [6, 7, 8, 9]


@pytest.mark.parametrize("world_size", [1, 2, 3, 4, 7])
def test_shards_cover_data_in_order(world_size):
    data = np.arange(23, dtype=float)
    pieces = [shard_data(data, rank, world_size) for rank in range(world_size)]
    np.testing.assert_array_equal(np.concatenate(pieces), data)


@pytest.mark.parametrize("rank,world_size", [(-1, 2), (2, 2), (0, 0)])
def test_shard_data_rejects_bad_rank(rank, world_size):
    with pytest.raises(ValueError):
        shard_data([1.0, 2.0], rank, world_size)


def test_single_process_training_returns_finite_losses():
    model = _model()
    before = model.network.linears[0].weight.copy()
    data = np.linspace(-1.0, 1.0, 16)
    history = distributed_train(0, 1, model, data, 3, 4, 0.01)
    assert len(history) == 3
    assert all(math.isfinite(loss) and loss >= 0.0 for loss in history)
    assert not np.allclose(before, model.network.linears[0].weight)


def test_reduce_result_is_divided_by_world_size():
    seen = []

    def reduce(value):
        seen.append(value)
        return 6.0

    history = distributed_train(1, 3, _model(), np.linspace(0, 1, 12), 2, 2, 0.01, reduce)
    assert history == [2.0, 2.0]
    assert len(seen) == 2


def test_reduce_summing_equal_losses_gives_local_loss():
    seen = []

    def reduce(value):
        seen.append(value)
        return value * 2

    history = distributed_train(0, 2, _model(), np.linspace(0, 1, 8), 2, 2, 0.01, reduce)
    assert history == pytest.approx(seen)


def test_missing_reduce_with_several_workers_raises():
    with pytest.raises(ValueError):
        distributed_train(0, 2, _model(), np.linspace(0, 1, 8), 1, 2, 0.01)


def test_bad_batch_size_raises():
    with pytest.raises(ValueError):
        distributed_train(0, 1, _model(), [0.1, 0.2], 1, 0, 0.01)


def test_epoch_without_batches_reports_nan():
    history = distributed_train(0, 1, _model(), [0.1, 0.2], 2, 5, 0.01)
    assert len(history) == 2
    assert all(math.isnan(loss) for loss in history)


def test_only_rank_zero_prints(capsys):
    distributed_train(1, 2, _model(), np.linspace(0, 1, 8), 1, 2, 0.01, lambda v: v)
    assert "Epoch" not in capsys.readouterr().out
    distributed_train(0, 2, _model(), np.linspace(0, 1, 8), 1, 2, 0.01, lambda v: v)
    assert "Epoch [1/1], Loss:" in capsys.readouterr().out


def test_init_distributed_training_single_worker():
    history = init_distributed_training(0, 1, 1, 8, 1, np.linspace(-1, 1, 10), 4, 2, 0.01)
    assert len(history) == 4
    assert all(math.isfinite(loss) for loss in history)


def test_init_distributed_training_rejects_wrong_input_size():
    with pytest.raises(ValueError):
        init_distributed_training(0, 1, 3, 8, 3, np.linspace(-1, 1, 10), 1, 2, 0.01)