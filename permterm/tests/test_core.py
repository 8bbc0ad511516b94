import pytest

from permterm import IDLE, HIDDEN, VISIBLE, UnknownSession
from permterm.core import visible_sessions


def _recorder():
    calls = []
    def _on_exit(lines):
        calls.append(lines)
    return calls, _on_exit


class TestToggle:
    def test_shell_scenario(self, host, make_controller):
        controller = make_controller({'name': 'shell', 'cmd': 'bash'})
        session = controller.registry.get('shell')

        controller.toggle('shell')
        assert controller.state('shell') == VISIBLE
        view = session.view
        assert view.cmd == 'bash'
        assert view.name == 'permterm://shell'
        assert not view.listed
        assert session.window.input_mode
        assert host.window_set_count == 2
        assert host.messages[-1] == 'Opened new shell terminal'

        controller.toggle('shell')
        assert controller.state('shell') == HIDDEN
        assert session.view is view
        assert session.window is None
        assert session.previous_layout is None
        assert host.window_set_count == 1
        assert host.window_set_index == 0

        controller.toggle('shell')
        assert controller.state('shell') == VISIBLE
        assert session.view is view
        assert host.processes_started == 1
        assert host.messages[-1] == 'Opened existing shell terminal'

    def test_twice_from_idle_keeps_view(self, make_controller):
        controller = make_controller({'name': 'shell', 'cmd': 'bash'})
        session = controller.registry.get('shell')

        controller.toggle('shell')
        view = session.view
        controller.toggle('shell')
        assert controller.state('shell') == HIDDEN
        assert session.view is view
        assert session.exited is False

    def test_other_sessions_are_hidden_not_destroyed(self, host, make_controller):
        controller = make_controller({'name': 'a', 'cmd': 'top'},
                                     {'name': 'b', 'cmd': 'htop'})
        a = controller.registry.get('a')

        controller.toggle('a')
        view_a = a.view
        controller.toggle('b')

        assert controller.state('a') == HIDDEN
        assert a.view is view_a
        assert host.is_view_valid(view_a)
        assert controller.state('b') == VISIBLE
        assert visible_sessions(controller) == ['b']

    def test_at_most_one_visible(self, make_controller):
        controller = make_controller({'name': 'a', 'cmd': 'a'},
                                     {'name': 'b', 'cmd': 'b'},
                                     {'name': 'c', 'cmd': 'c'})
        for name in ['a', 'b', 'b', 'c', 'a', 'c', 'c', 'b', 'a', 'a']:
            controller.toggle(name)
            assert len(visible_sessions(controller)) <= 1

    def test_hiding_other_session_restores_its_layout(self, host, make_controller):
        controller = make_controller({'name': 'a', 'cmd': 'a'},
                                     {'name': 'b', 'cmd': 'b'})
        controller.toggle('a')
        controller.toggle('b')
        assert host.window_set_count == 2
        controller.toggle('b')
        assert host.window_set_count == 1
        assert host.window_set_index == 0

    def test_unknown_session(self, make_controller):
        controller = make_controller({'name': 'shell', 'cmd': 'bash'})
        with pytest.raises(UnknownSession):
            controller.toggle('nope')

    def test_toggler(self, make_controller):
        controller = make_controller({'name': 'shell', 'cmd': 'bash'})
        toggle_shell = controller.toggler('shell')
        assert toggle_shell.__name__ == 'toggle_shell'

        toggle_shell()
        assert controller.state('shell') == VISIBLE
        toggle_shell()
        assert controller.state('shell') == HIDDEN

        with pytest.raises(UnknownSession):
            controller.toggler('nope')

    def test_reuses_view_found_by_name(self, host, make_controller):
        controller = make_controller({'name': 'shell', 'cmd': 'bash'})
        view = host.create_view('permterm://shell', ['$ '])

        controller.toggle('shell')
        assert controller.state('shell') == VISIBLE
        assert controller.registry.get('shell').view is view
        assert host.processes_started == 0
        assert host.messages[-1] == 'Opened existing shell terminal'

    def test_window_closed_elsewhere(self, host, make_controller):
        controller = make_controller({'name': 'shell', 'cmd': 'bash'})
        session = controller.registry.get('shell')
        controller.toggle('shell')
        view = session.view

        host.close_window(session.window)
        assert controller.state('shell') == HIDDEN

        controller.toggle('shell')
        assert controller.state('shell') == VISIBLE
        assert session.view is view
        assert host.processes_started == 1

    def test_view_deleted_elsewhere_relaunches(self, host, make_controller):
        controller = make_controller({'name': 'shell', 'cmd': 'bash'})
        session = controller.registry.get('shell')
        controller.toggle('shell')
        controller.toggle('shell')
        old_view = session.view

        host.delete_view(old_view)
        controller.toggle('shell')
        assert controller.state('shell') == VISIBLE
        assert session.view is not old_view
        assert host.processes_started == 2


class TestLaunch:
    def test_empty_command_from_before_launch(self, host, make_controller):
        controller = make_controller({'name': 'git', 'cmd': 'lazygit',
                                      'on_before_launch': lambda cmd: ''})
        session = controller.registry.get('git')

        controller.toggle('git')
        assert controller.state('git') == IDLE
        assert session.view is None
        assert session.window is None
        assert session.previous_layout is None
        assert host.processes_started == 0
        assert host.window_set_count == 1

    def test_no_command(self, host, make_controller):
        controller = make_controller({'name': 'git'})
        controller.toggle('git')
        assert controller.state('git') == IDLE
        assert 'Nothing to launch for git.' in controller.logger.messages

    def test_aborted_launch_keeps_others_hidden(self, make_controller):
        controller = make_controller({'name': 'shell', 'cmd': 'bash'},
                                     {'name': 'git', 'on_before_launch': lambda cmd: None})
        controller.toggle('shell')
        controller.toggle('git')
        assert controller.state('shell') == HIDDEN
        assert controller.state('git') == IDLE

    def test_before_launch_applied_once(self, host, make_controller):
        calls = []
        def _before_launch(cmd):
            calls.append(cmd)
            return '%s --color' % cmd

        controller = make_controller({'name': 'git', 'cmd': 'lazygit',
                                      'on_before_launch': _before_launch})
        session = controller.registry.get('git')

        controller.toggle('git')
        assert session.view.cmd == 'lazygit --color'
        host.exit_process(session.view)
        assert controller.state('git') == IDLE

        controller.toggle('git')
        assert session.view.cmd == 'lazygit --color'
        assert calls == ['lazygit']

    def test_before_launch_retried_until_launched(self, make_controller):
        results = ['', 'tig']
        controller = make_controller({'name': 'git', 'cmd': 'git',
                                      'on_before_launch': lambda cmd: results.pop(0)})
        controller.toggle('git')
        assert controller.state('git') == IDLE
        controller.toggle('git')
        assert controller.state('git') == VISIBLE
        assert controller.registry.get('git').view.cmd == 'tig'

    def test_failing_before_launch(self, host, make_controller):
        def _before_launch(cmd):
            raise RuntimeError('no repository')

        controller = make_controller({'name': 'git', 'cmd': 'lazygit',
                                      'on_before_launch': _before_launch})
        controller.toggle('git')
        assert controller.state('git') == IDLE
        assert host.processes_started == 0
        assert host.messages[-1].startswith('on_before_launch callback of git failed')
        assert 'no repository' in host.messages[-1]


class TestProcessExit:
    def test_exit_while_visible(self, host, make_controller):
        calls, on_exit = _recorder()
        controller = make_controller({'name': 'shell', 'cmd': 'bash', 'on_exit': on_exit})
        session = controller.registry.get('shell')
        controller.toggle('shell')
        view = session.view

        host.exit_process(view, ['a', 'b'])

        assert calls == [['a', 'b']]
        assert controller.state('shell') == IDLE
        assert session.view is None
        assert session.window is None
        assert session.exited is True
        assert not host.is_view_valid(view)
        assert host.window_set_count == 1
        assert host.window_set_index == 0

    def test_exit_while_hidden(self, host, make_controller):
        calls, on_exit = _recorder()
        controller = make_controller({'name': 'shell', 'cmd': 'bash', 'on_exit': on_exit})
        session = controller.registry.get('shell')
        controller.toggle('shell')
        controller.toggle('shell')
        view = session.view

        host.exit_process(view, ['done'])

        assert calls == [['done']]
        assert controller.state('shell') == IDLE
        assert session.view is None
        assert not host.is_view_valid(view)

    def test_hide_never_calls_on_exit(self, make_controller):
        calls, on_exit = _recorder()
        controller = make_controller({'name': 'a', 'cmd': 'a', 'on_exit': on_exit},
                                     {'name': 'b', 'cmd': 'b'})
        controller.toggle('a')
        controller.toggle('a')
        controller.toggle('a')
        controller.toggle('b')
        assert calls == []
        assert controller.registry.get('a').exited is False

    def test_relaunch_after_exit(self, host, make_controller):
        controller = make_controller({'name': 'shell', 'cmd': 'bash'})
        session = controller.registry.get('shell')
        controller.toggle('shell')
        first = session.view
        host.exit_process(first)

        controller.toggle('shell')
        assert controller.state('shell') == VISIBLE
        assert session.view is not first
        assert session.exited is False
        assert host.processes_started == 2

    def test_exit_of_idle_session_is_ignored(self, make_controller):
        calls, on_exit = _recorder()
        controller = make_controller({'name': 'shell', 'cmd': 'bash', 'on_exit': on_exit})
        controller.on_process_exit('shell')
        assert calls == []
        assert controller.state('shell') == IDLE

    def test_exit_reported_through_controller(self, host, make_controller):
        calls, on_exit = _recorder()
        controller = make_controller({'name': 'shell', 'cmd': 'bash', 'on_exit': on_exit})
        controller.toggle('shell')
        host.write_lines(controller.registry.get('shell').view, ['x'])

        controller.on_process_exit('shell')
        assert calls == [['x']]
        assert controller.state('shell') == IDLE

    def test_failing_on_exit_still_tears_down(self, host, make_controller):
        def _on_exit(lines):
            raise ValueError('bad output')

        controller = make_controller({'name': 'shell', 'cmd': 'bash', 'on_exit': _on_exit})
        session = controller.registry.get('shell')
        controller.toggle('shell')
        view = session.view

        host.exit_process(view, ['a'])

        assert controller.state('shell') == IDLE
        assert not host.is_view_valid(view)
        assert any('ValueError: bad output' in m for m in controller.logger.messages)
        assert host.messages[-1].startswith('on_exit callback of shell failed')

    def test_exit_does_not_affect_other_sessions(self, host, make_controller):
        controller = make_controller({'name': 'a', 'cmd': 'a'},
                                     {'name': 'b', 'cmd': 'b'})
        controller.toggle('a')
        controller.toggle('b')
        host.exit_process(controller.registry.get('a').view)

        assert controller.state('a') == IDLE
        assert controller.state('b') == VISIBLE


class TestViewLookup:
    def test_prefix_named_session_is_not_reused(self, host, make_controller):
        git_calls, git_on_exit = _recorder()
        gitk_calls, gitk_on_exit = _recorder()
        controller = make_controller(
            {'name': 'gitk', 'cmd': 'gitk', 'on_exit': gitk_on_exit},
            {'name': 'git', 'cmd': 'lazygit', 'on_exit': git_on_exit})
        gitk = controller.registry.get('gitk')
        git = controller.registry.get('git')

        controller.toggle('gitk')
        controller.toggle('gitk')
        controller.toggle('git')

        assert git.view is not gitk.view
        assert git.view.cmd == 'lazygit'
        assert host.processes_started == 2

        host.exit_process(gitk.view, ['out'])
        assert gitk_calls == [['out']]
        assert git_calls == []
        assert controller.state('gitk') == IDLE
        assert controller.state('git') == VISIBLE

        host.exit_process(git.view, ['done'])
        assert git_calls == [['done']]

    def test_view_of_other_session_is_not_adopted(self, host, make_controller):
        controller = make_controller(
            {'name': 'a', 'cmd': 'a', 'buffer_name': 'shared'},
            {'name': 'b', 'cmd': 'b', 'buffer_name': 'shared'})
        controller.toggle('a')
        controller.toggle('b')

        a = controller.registry.get('a')
        b = controller.registry.get('b')
        assert a.view is not b.view
        assert host.processes_started == 2

    def test_own_view_preferred_over_name_lookup(self, host, make_controller):
        controller = make_controller({'name': 'shell', 'cmd': 'bash'})
        session = controller.registry.get('shell')
        controller.toggle('shell')
        controller.toggle('shell')
        own = session.view

        other = host.create_view('permterm://shell')
        host.views.remove(other)
        host.views.insert(0, other)

        controller.toggle('shell')
        assert session.view is own

    def test_name_with_pattern_characters(self, host, make_controller):
        controller = make_controller({'name': 'calc(', 'cmd': 'bc'},
                                     {'name': 'a.c', 'cmd': 'x'})
        controller.toggle('calc(')
        assert controller.state('calc(') == VISIBLE
        controller.toggle('calc(')
        controller.toggle('calc(')
        assert host.processes_started == 1

        host.create_view('permterm://abc')
        controller.toggle('a.c')
        assert controller.registry.get('a.c').view.cmd == 'x'


class TestReentrantToggle:
    def test_toggle_while_hiding_others(self, host, make_controller):
        controller = make_controller({'name': 'a', 'cmd': 'a'},
                                     {'name': 'b', 'cmd': 'b'})
        close_others = controller.close_others
        nested = []

        def _close_others(name):
            close_others(name)
            if not nested:
                nested.append(name)
                controller.toggle(name)

        controller.close_others = _close_others
        controller.toggle('a')

        a = controller.registry.get('a')
        assert nested == ['a']
        assert controller.state('a') == VISIBLE
        assert host.processes_started == 1
        assert host.window_set_count == 2

        controller.toggle('a')
        assert controller.state('a') == HIDDEN
        assert host.window_set_count == 1
        assert host.window_set_index == 0
        assert a.previous_layout is None
