import io

import permterm

from permterm import VISIBLE, HIDDEN
from permterm.__main__ import CommandLoop, main
from permterm.host.memory import MemoryHost


def test_list_sessions(tmp_path, capsys):
    init = tmp_path / 'init.py'
    init.write_text("programs = [{'name': 'shell', 'cmd': 'bash'}]\n")

    assert main(['--init', str(init), '--list']) == 0
    out = capsys.readouterr().out
    assert 'shell' in out
    assert 'idle' in out


def test_duplicate_names_fail(tmp_path, capsys):
    init = tmp_path / 'init.py'
    init.write_text("programs = [{'name': 'a', 'cmd': 'x'}, {'name': 'a', 'cmd': 'y'}]\n")
    assert main(['--init', str(init), '--list']) == 1
    assert 'DuplicateName' in capsys.readouterr().err


def test_command_loop(host):
    controller = permterm.setup([{'name': 'shell', 'cmd': 'bash'}], host)
    out = io.StringIO()
    loop = CommandLoop(controller, out=out)
    loop.running = True

    loop.handle_line('shell\n')
    assert controller.state('shell') == VISIBLE
    loop.handle_line('shell')
    assert controller.state('shell') == HIDDEN

    loop.handle_line('')
    loop.handle_line('nope')
    loop.handle_line(':list')
    assert out.getvalue().splitlines() == [
        'Unknown session: nope',
        'shell            hidden',
    ]

    loop.handle_line(':quit')
    assert not loop.running


def test_command_loop_eof(host):
    controller = permterm.setup([], host)
    loop = CommandLoop(controller, out=io.StringIO())
    loop.running = True
    loop.handle_line(None)
    assert not loop.running


class _ClosedInputHost(MemoryHost):
    def send_input(self, view, string):
        return False


def test_send_to_stopped_session():
    controller = permterm.setup([{'name': 'shell', 'cmd': 'bash'}], _ClosedInputHost())
    out = io.StringIO()
    loop = CommandLoop(controller, out=out)

    loop.handle_line(':send ls')
    loop.handle_line('shell')
    loop.handle_line(':send ls')
    assert out.getvalue().splitlines() == [
        'No visible session.',
        'shell is not running.',
    ]
