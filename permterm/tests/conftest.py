import pytest

import permterm

from permterm.host.memory import MemoryHost


@pytest.fixture
def host():
    return MemoryHost()


@pytest.fixture
def make_controller(host):
    def _make_controller(*programs, **kwargs):
        return permterm.setup(list(programs), host, **kwargs)
    return _make_controller
