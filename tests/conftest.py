import pytest

from vectors import TEST_EKX, TEST_PKX


@pytest.fixture
def ekx() -> bytes:
    return TEST_EKX


@pytest.fixture
def pkx_bytes() -> bytes:
    return TEST_PKX
