import numpy as np
import pytest

from gatenets.data import gates


def test_sample_set_is_fixed_and_read_only():
    assert gates.SAMPLES.tolist() == [[0, 0], [0, 1], [1, 0], [1, 1]]
    with pytest.raises(ValueError):
        gates.SAMPLES[0, 0] = 1.0


@pytest.mark.parametrize(
    "name,expected",
    [
        ("AND", [0, 0, 0, 1]),
        ("OR", [0, 1, 1, 1]),
        ("XOR", [0, 1, 1, 0]),
        ("NAND", [1, 1, 1, 0]),
        ("NOR", [1, 0, 0, 0]),
        ("XNOR", [1, 0, 0, 1]),
    ],
)
def test_truth_tables(name, expected):
    gate = gates.get_gate(name.lower())
    assert gate.name == name
    assert gate.targets.tolist() == expected
    assert not gate.targets.flags.writeable
    assert gate.truth_table()[3] == (1, 1, expected[3])


def test_unknown_gate_lists_available_names():
    with pytest.raises(KeyError, match="Available gates"):
        gates.get_gate("IMPLIES")


def test_get_gates_preserves_order_and_rejects_duplicates():
    resolved = gates.get_gates(["xor", "AND", "Or"])
    assert [g.name for g in resolved] == ["XOR", "AND", "OR"]
    with pytest.raises(ValueError):
        gates.get_gates(["AND", "and"])
    with pytest.raises(ValueError):
        gates.get_gates([])


def test_register_gate_validates_targets():
    with pytest.raises(ValueError):
        gates.register_gate("BAD", [0, 1, 1])
    with pytest.raises(ValueError):
        gates.register_gate("BAD", [0, 2, 1, 0])
    assert "BAD" not in gates.names()


def test_default_gates_in_declaration_order():
    assert gates.DEFAULT_GATES == ("AND", "OR", "XOR")
    assert all(np.isin(gates.get_gate(n).targets, [0, 1]).all() for n in gates.DEFAULT_GATES)
