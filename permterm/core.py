# Copyright (c) 2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""
The session controller implements toggling of sessions.

A session is idle as long as its program has not been launched, and
hidden or visible while the program is running, depending on whether
its view is displayed in a window. Toggling a visible session hides
it, toggling any other session hides all other sessions and displays
it, launching its program first, if necessary.

A session is only torn down when its program exits by itself. In that
case its window is closed, the lines of its view are passed to the
on_exit callback of the session and the view is deleted.

All transitions of a session are executed while holding the lock of
that session. A transition never holds the locks of two sessions at
the same time.
"""

import re

from permterm.config import Variables
from permterm.dispatch import ExitDispatcher, report_callback_failure
from permterm.layout import LayoutManager
from permterm.logger import Logger
from permterm.registry import VISIBLE


class LaunchAborted(Exception):
    pass


class SessionController(object):
    def __init__(self, registry, host, variables=None, logger=None):
        self.variables = variables or Variables()
        self.logger = logger or \
            Logger(self.variables.get_variable(['logging', 'max-messages']))
        self._registry = registry
        self._host = host
        self.layout = LayoutManager(host, self.variables.get_variable(['layout', 'restore']))
        self.dispatcher = ExitDispatcher(host, self.logger)

    @property
    def registry(self):
        return self._registry

    @property
    def host(self):
        return self._host

    def message(self, msg):
        self.logger.message(msg)
        if self.variables.get_variable(['messages', 'echo']):
            self._host.message(msg)

    def state(self, name):
        return self._registry.get(name).state(self._host)

    def toggler(self, name):
        """
        Return a function without arguments that toggles ``name``.
        """
        self._registry.get(name)
        def _toggle():
            self.toggle(name)
        _toggle.__name__ = 'toggle_%s' % name
        _toggle.__doc__ = 'Toggle the %s terminal.' % name
        return _toggle

    def toggle(self, name):
        """
        Hide session ``name`` if it is visible, show it otherwise.

        Showing a session hides all other sessions. If the session has
        no view yet, its program is launched. If no command can be
        resolved for the program, nothing is launched, but other
        sessions stay hidden.
        """
        session = self._registry.get(name)
        with session.lock:
            if self._window_open(session):
                self._close_window(session, program_exited=False)
                self.message('Closed %s terminal' % name)
                return

        self.close_others(name)

        with session.lock:
            if self._window_open(session):
                # Shown while other sessions were being hidden
                return
            self.layout.capture(session)
            try:
                if not self._show_existing(session):
                    self._launch(session)
            except LaunchAborted as e:
                self.layout.discard(session)
                self.logger.log('%s' % e)

    def close_others(self, name):
        """
        Hide all visible sessions except ``name``. Their programs
        keep running.
        """
        for session in self._registry:
            if session.name == name:
                continue
            with session.lock:
                self._close_window(session, program_exited=False)

    def on_process_exit(self, name):
        """
        Tear down session ``name`` after its program exited.
        """
        session = self._registry.get(name)
        with session.lock:
            self._on_process_exit(session, session.view)

    # ------------------------------------------------------------------

    def _window_open(self, session):
        if session.window is None:
            return False
        if self._host.is_window_valid(session.window):
            return True
        # Closed behind our back
        session.window = None
        self.layout.discard(session)
        return False

    def _close_window(self, session, program_exited):
        if not self._window_open(session):
            return False

        self._host.close_window(session.window)
        session.window = None
        self.layout.restore(session)
        session.exited = program_exited
        self.logger.log('%s: visible -> hidden%s'
                        % (session.name, ' (exited)' if program_exited else ''))
        return True

    def _exit_watcher(self, session, view):
        def _on_exit():
            with session.lock:
                self._on_process_exit(session, view)
        return _on_exit

    def _on_process_exit(self, session, view):
        if view is None or session.view is not view:
            # Stale notification for a view that is already gone
            return

        self._close_window(session, program_exited=True)
        session.exited = True
        lines = self._host.read_all_lines(view) if self._host.is_view_valid(view) else []
        self.dispatcher.dispatch(session, lines)

        if self._host.is_view_valid(view):
            self._host.delete_view(view)
        session.view = None
        self.logger.log('%s: -> idle (exited)' % session.name)

    def _adopt_view(self, session, view):
        if session.view is view:
            return
        session.view = view
        session.exited = False
        self._host.on_process_exit(view, self._exit_watcher(session, view))

    def _owned_elsewhere(self, session, view):
        return any(other is not session and other.view is view
                   for other in self._registry)

    def _find_view(self, session):
        if session.view is not None and self._host.is_view_valid(session.view):
            return session.view
        view = self._host.find_view(view_pattern(session.buffer_name))
        if view is not None and self._owned_elsewhere(session, view):
            return None
        return view

    def _show_existing(self, session):
        view = self._find_view(session)
        if view is None:
            # Not launched yet, or deleted behind our back
            session.view = None
            return False

        self._adopt_view(session, view)
        session.window = self._host.bind_window(view)
        self._host.focus_input_mode(session.window)
        self.logger.log('%s: hidden -> visible' % session.name)
        self.message('Opened existing %s terminal' % session.name)
        return True

    def _resolve_command(self, session):
        cmd = session.cmd
        if not session.launched and session.on_before_launch is not None:
            try:
                cmd = session.on_before_launch(cmd)
            except Exception:
                failure = report_callback_failure(self.logger, self._host,
                                                  session, 'on_before_launch')
                raise LaunchAborted('Not launching %s: %s' % (session.name, failure))
        if not cmd:
            raise LaunchAborted('Nothing to launch for %s.' % session.name)
        return cmd

    def _launch(self, session):
        cmd = self._resolve_command(session)

        view = self._host.create_process_view(cmd)
        window = self._host.bind_window(view)
        self._host.set_view_name(view, session.buffer_name)
        self._host.mark_unlisted(view)

        session.cmd = cmd
        session.launched = True
        session.view = view
        session.window = window
        session.exited = False

        self._host.on_process_exit(view, self._exit_watcher(session, view))
        self._host.focus_input_mode(window)
        self.logger.log('%s: idle -> visible' % session.name)
        self.message('Opened new %s terminal' % session.name)


def view_pattern(buffer_name):
    """
    Return a pattern for find_view that matches exactly ``buffer_name``.
    """
    return r'\A%s\Z' % re.escape(buffer_name)


def visible_sessions(controller):
    return [session.name for session in controller.registry
            if session.state(controller.host) == VISIBLE]
