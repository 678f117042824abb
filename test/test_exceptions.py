# test/test_exceptions.py
import pytest

from delaytree.core import (
    CoreError,
    InvalidEmbeddingPars,
    InvalidDataset,
    DimensionMismatch,
    LossContractError,
    UnknownStrategy,
)


def test_exception_inheritance_validation():
    assert issubclass(InvalidEmbeddingPars, CoreError)
    assert issubclass(InvalidDataset, CoreError)
    assert issubclass(DimensionMismatch, CoreError)
    assert issubclass(LossContractError, CoreError)


def test_validation_errors_are_value_errors():
    assert issubclass(InvalidEmbeddingPars, ValueError)
    assert issubclass(InvalidDataset, ValueError)
    assert issubclass(DimensionMismatch, ValueError)


def test_unknown_strategy_can_be_caught_as_keyerror():
    assert issubclass(UnknownStrategy, CoreError)
    with pytest.raises(KeyError):
        raise UnknownStrategy("ccm")
