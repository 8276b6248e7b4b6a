from __future__ import annotations

import numpy as np
import pytest

from gatenets.core.network import backward, forward, init_network
from gatenets.core.types import TrainingTask
from gatenets.data.gates import SAMPLES, get_gate
from gatenets.training.trainer import NonFiniteNetworkError, Trainer, train


def _task(gate_name: str = "AND", epochs: int = 200, seed: int = 0, lr: float = 0.1) -> TrainingTask:
    gate = get_gate(gate_name)
    return TrainingTask(
        network=init_network(gate.name, lr, np.random.default_rng(seed)),
        samples=SAMPLES,
        targets=gate.targets,
        error_history=np.zeros(epochs, dtype=np.float64),
    )


def test_train_fills_every_epoch_with_non_negative_error() -> None:
    task = _task("OR", epochs=300)
    train(task.network, task.samples, task.targets, task.error_history)
    history = task.error_history
    assert np.all(history >= 0.0)
    assert np.all(history <= 4.0)
    assert np.all(history > 0.0), "every slot should have been written"
    assert history[-1] < history[0]


def test_epoch_error_is_sum_of_four_squared_errors() -> None:
    task = _task("XOR", epochs=1, seed=9)
    net = task.network
    expected = 0.0
    # replay the single epoch on a copy to get the four per-sample terms
    replay = init_network("XOR", 0.1, np.random.default_rng(9))

    for (x1, x2), target in zip(SAMPLES, task.targets):
        hidden, output = forward(replay, float(x1), float(x2))
        expected += (float(target) - output) ** 2
        backward(replay, float(x1), float(x2), hidden, output, float(target))

    train(net, task.samples, task.targets, task.error_history)
    assert task.error_history[0] == expected
    for key, value in net.parameters().items():
        assert np.array_equal(value, replay.parameters()[key])


def test_train_validates_inputs() -> None:
    task = _task()
    with pytest.raises(ValueError):
        train(task.network, task.samples[:3], task.targets, task.error_history)
    with pytest.raises(ValueError):
        train(task.network, task.samples, task.targets, np.zeros(0))


def test_trainer_state_machine_runs_once() -> None:
    trainer = Trainer(_task(epochs=20))
    assert trainer.state == "idle"
    task = trainer.run()
    assert trainer.state == "done"
    assert task is trainer.task
    with pytest.raises(RuntimeError):
        trainer.run()


def test_trainer_surfaces_non_finite_network() -> None:
    task = _task(epochs=5)
    task.network.weight_hidden_output[0] = np.nan
    trainer = Trainer(task)
    with np.errstate(invalid="ignore"), pytest.raises(NonFiniteNetworkError, match="AND"):
        trainer.run()
    assert trainer.state == "failed"
    with pytest.raises(RuntimeError, match="already failed"):
        trainer.run()


def test_training_reduces_error_substantially() -> None:
    task = _task("AND", epochs=3000, seed=1, lr=0.5)
    Trainer(task).run()
    assert task.error_history[-1] < 0.25 * task.error_history[0]
