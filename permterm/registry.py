# Copyright (c) 2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

import threading

from permterm.config import ProgramConfig

IDLE = 'idle'
HIDDEN = 'hidden'
VISIBLE = 'visible'


class UnknownSession(KeyError):
    def __init__(self, name):
        super(UnknownSession, self).__init__(name)
        self.name = name

    def __str__(self):
        return 'Unknown session: %s' % self.name


class DuplicateName(ValueError):
    def __init__(self, name):
        super(DuplicateName, self).__init__('Duplicate session name: %s' % name)
        self.name = name


class Session(object):
    """
    State of one configured program.

    ``view`` is bound while the program's process is running,
    ``window`` while its view is displayed. ``previous_layout`` holds
    the window arrangement to return to when ``window`` is closed.
    """

    def __init__(self, program):
        self.name = program.name
        self.cmd = program.cmd
        self.buffer_name = program.buffer_name
        self.on_exit = program.on_exit
        self.on_before_launch = program.on_before_launch
        self.view = None
        self.window = None
        self.previous_layout = None
        self.exited = False
        self.launched = False
        self.lock = threading.RLock()

    def state(self, host):
        if self.view is None:
            return IDLE
        if self.window is not None and host.is_window_valid(self.window):
            return VISIBLE
        return HIDDEN

    def __repr__(self):
        return 'Session(%r, view=%r, window=%r, exited=%r)' \
            % (self.name, self.view, self.window, self.exited)


class SessionRegistry(object):
    def __init__(self, programs=None):
        self._sessions = {}
        if programs:
            self.register(programs)

    def register(self, programs):
        """
        Create a session for each program.

        Nothing is registered if a name occurs twice, or is already
        registered.
        """
        configs = [ProgramConfig.from_dict(p) for p in programs]
        seen = set(self._sessions)
        for config in configs:
            if config.name in seen:
                raise DuplicateName(config.name)
            seen.add(config.name)
        for config in configs:
            self._sessions[config.name] = Session(config)

    def get(self, name):
        try:
            return self._sessions[name]
        except KeyError:
            raise UnknownSession(name) from None

    def names(self):
        return list(self._sessions)

    def for_each(self, fn):
        for session in list(self._sessions.values()):
            fn(session)

    def __contains__(self, name):
        return name in self._sessions

    def __iter__(self):
        return iter(list(self._sessions.values()))

    def __len__(self):
        return len(self._sessions)
