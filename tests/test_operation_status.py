from __future__ import annotations

import pytest
from pydantic import ValidationError

from accountsettings.models.status import IDLE, IN_PROGRESS, SUCCEEDED, OperationStatus, StatusKind


def test_failures_compare_by_message() -> None:
    assert OperationStatus.failure("x") == OperationStatus.failure("x")
    assert OperationStatus.failure("x") != OperationStatus.failure("y")
    assert OperationStatus.failure() == OperationStatus.failure(None)
    assert OperationStatus.failure() != OperationStatus.failure("x")


def test_variants_are_only_equal_to_themselves() -> None:
    statuses = [IDLE, IN_PROGRESS, SUCCEEDED, OperationStatus.failure("x"), OperationStatus.failure()]
    for i, left in enumerate(statuses):
        for j, right in enumerate(statuses):
            assert (left == right) is (i == j)
    assert OperationStatus.failure("x") != SUCCEEDED


def test_equal_statuses_hash_equal() -> None:
    assert hash(OperationStatus.failure("x")) == hash(OperationStatus.failure("x"))
    assert OperationStatus(kind=StatusKind.SUCCEEDED) == SUCCEEDED
    assert len({IDLE, OperationStatus(), IN_PROGRESS}) == 2


def test_derived_predicates() -> None:
    assert SUCCEEDED.succeeded
    assert not IDLE.succeeded
    assert not IN_PROGRESS.succeeded
    assert not OperationStatus.failure("x").succeeded

    assert IN_PROGRESS.in_progress
    assert OperationStatus.failure().failed

    assert OperationStatus.failure("username taken").failure_message == "username taken"
    assert OperationStatus.failure().failure_message is None
    assert SUCCEEDED.failure_message is None
    assert IDLE.failure_message is None


def test_only_failures_carry_a_message() -> None:
    with pytest.raises(ValidationError):
        OperationStatus(kind=StatusKind.SUCCEEDED, message="nope")


def test_statuses_are_immutable() -> None:
    status = OperationStatus.failure("x")
    with pytest.raises(ValidationError):
        status.message = "y"  # type: ignore[misc]


def test_str_rendering() -> None:
    assert str(IDLE) == "idle"
    assert str(OperationStatus.failure("taken")) == "failed(taken)"
    assert str(OperationStatus.failure()) == "failed"
