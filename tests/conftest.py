import pytest


@pytest.fixture
def doc():
    from guesstree.document import initialize

    return initialize()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "animals.db"
