from __future__ import annotations

import pytest

from falling_blocks.game import LogicError, RandomShapeProvider, SequenceShapeProvider, TetrominoType


def test_random_provider_is_reproducible_with_seed():
    a = RandomShapeProvider(seed=3)
    b = RandomShapeProvider(seed=3)
    first = [a.next_kind() for _ in range(30)]
    assert first == [b.next_kind() for _ in range(30)]
    a.reset()
    assert [a.next_kind() for _ in range(30)] == first


def test_random_provider_covers_catalog():
    provider = RandomShapeProvider(seed=0)
    seen = {provider.next_kind() for _ in range(500)}
    assert seen == set(TetrominoType)


def test_sequence_provider_repeats():
    provider = SequenceShapeProvider([TetrominoType.I, TetrominoType.O])
    kinds = [provider.next_kind() for _ in range(5)]
    assert kinds == [TetrominoType.I, TetrominoType.O, TetrominoType.I, TetrominoType.O, TetrominoType.I]


def test_sequence_provider_exhaustion():
    provider = SequenceShapeProvider([TetrominoType.T], repeat=False)
    assert provider.next_kind() is TetrominoType.T
    with pytest.raises(LogicError):
        provider.next_kind()
    provider.reset()
    assert provider.next_kind() is TetrominoType.T


def test_sequence_provider_needs_kinds():
    with pytest.raises(ValueError):
        SequenceShapeProvider([])
