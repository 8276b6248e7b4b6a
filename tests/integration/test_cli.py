import json

import pytest

from cli.main import main
from gatenets.training import pipelines


def test_cli_prints_one_block_per_gate_in_order(capsys):
    main(["--epochs", "600", "--seed", "1"])
    out = capsys.readouterr().out
    assert out.index("Results for logic gate AND:") < out.index("Results for logic gate OR:")
    assert out.index("Results for logic gate OR:") < out.index("Results for logic gate XOR:")
    assert "[AND] Epoch 0 - Total error: " in out
    assert "Epoch 2000" not in out
    assert out.count("Inputs: 1, 1 => Predicted output: ") == 3


def test_cli_overrides_and_artifacts(tmp_path, capsys):
    config_path = tmp_path / "override.json"
    config_path.write_text(json.dumps({"train": {"report_every": 50}}))
    run_dir = tmp_path / "run"
    dump = tmp_path / "resolved.json"
    main(
        [
            "--config",
            str(config_path),
            "--gates",
            "xor,nand",
            "--epochs",
            "100",
            "--lr",
            "0.3",
            "--seed",
            "2",
            "--sequential",
            "--run-dir",
            str(run_dir),
            "--show-accuracy",
            "--dump-config",
            str(dump),
        ]
    )
    out = capsys.readouterr().out
    assert "[XOR] Epoch 50 - Total error: " in out
    assert "[NAND] Epoch 0 - Total error: " in out
    assert "Accuracy: " in out
    resolved = json.loads(dump.read_text())
    assert resolved["data"]["gates"] == ["xor", "nand"]
    assert resolved["model"]["learning_rate"] == 0.3
    assert resolved["train"]["concurrent"] is False
    assert (run_dir / "errors_xor.jsonl").exists()
    assert (run_dir / "summary.json").exists()


def test_cli_listings(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--list-gates"])
    assert excinfo.value.code == 0
    assert "XOR: 0 1 1 0" in capsys.readouterr().out

    with pytest.raises(SystemExit):
        main(["--list-presets"])
    listed = capsys.readouterr().out.split()
    assert {"default", "quick", "all-gates", "xor-fast"} <= set(listed)


def test_cli_turns_launch_failure_into_fatal_exit(monkeypatch):
    class _NoThreads:
        def __init__(self, *args, **kwargs):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def submit(self, fn, *args, **kwargs):
            raise RuntimeError("can't start new thread")

    monkeypatch.setattr(pipelines, "ThreadPoolExecutor", _NoThreads)
    with pytest.raises(SystemExit) as excinfo:
        main(["--epochs", "10"])
    assert "fatal" in str(excinfo.value.code)
    assert "can't start new thread" in str(excinfo.value.code)


def test_cli_turns_non_finite_network_into_fatal_exit(monkeypatch, capsys):
    original = pipelines.init_network

    def _nan_output_bias(name, learning_rate, rng=None):
        network = original(name, learning_rate, rng)
        if name == "OR":
            network.bias_output = float("nan")
        return network

    monkeypatch.setattr(pipelines, "init_network", _nan_output_bias)
    with pytest.raises(SystemExit) as excinfo:
        main(["--epochs", "5", "--seed", "0"])
    message = str(excinfo.value.code)
    assert message.startswith("fatal")
    assert "OR" in message
    assert "Results for logic gate" not in capsys.readouterr().out


def test_cli_yaml_override(tmp_path, capsys):
    config_path = tmp_path / "override.yaml"
    config_path.write_text("data:\n  gates: [OR]\ntrain:\n  epochs: 20\n  seed: 0\n")
    main(["--config", str(config_path)])
    out = capsys.readouterr().out
    assert "Results for logic gate OR:" in out
    assert "gate AND" not in out


def test_cli_yaml_override_accepts_a_comma_separated_gate_string(tmp_path, capsys):
    config_path = tmp_path / "override.yaml"
    config_path.write_text("data:\n  gates: AND, xor\ntrain:\n  epochs: 20\n  seed: 0\n")
    main(["--config", str(config_path)])
    out = capsys.readouterr().out
    assert out.index("Results for logic gate AND:") < out.index("Results for logic gate XOR:")
    assert "gate OR:" not in out
