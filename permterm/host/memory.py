# Copyright (c) 2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""
A host that keeps views and windows in memory.

Windows are organized in window sets. Only the active window set is
displayed, so opening a window in a new window set makes it cover the
whole screen. The layout token captured by MemoryHost is the active
window set together with its selected window.

Processes are not run by MemoryHost. Output is appended to a view by
calling ``write_lines`` and termination of a process is signalled by
calling ``exit_process``.
"""

import itertools
import re

from permterm.host import ViewHost
from permterm.util import forward

_view_ids = itertools.count(1)


class View(object):
    def __init__(self, cmd=None, name=None):
        self.id = next(_view_ids)
        self.cmd = cmd
        self.name = name or ''
        self.lines = []
        self.listed = True
        self.running = cmd is not None
        self.exit_handlers = []

    def __repr__(self):
        return '<View %s %r>' % (self.id, self.name or self.cmd)


class Window(object):
    def __init__(self, view):
        self.view = view
        self.input_mode = False

    def __repr__(self):
        return '<Window %r>' % (self.view,)


class WindowSet(object):
    def __init__(self, view):
        self._windows = [Window(view)]
        self._selected_window = self._windows[0]

    def windows(self):
        return list(self._windows)

    def selected_window(self):
        return self._selected_window

    def select_window(self, window):
        """Return window or None if not part of this WindowSet."""
        if window in self._windows:
            self._selected_window = window
            return window
        return None

    def split_window(self, view=None):
        """
        Create a new window displaying ``view``, or the view of the
        selected window.
        """
        new_win = Window(view or self._selected_window.view)
        self._windows.insert(self._windows.index(self._selected_window) + 1, new_win)
        return new_win

    def delete_window(self, window):
        """
        Remove ``window``. Returns False if it was the last window.
        """
        if len(self._windows) == 1:
            return False
        index = self._windows.index(window)
        self._windows.remove(window)
        if window is self._selected_window:
            self._selected_window = self._windows[max(0, index - 1)]
        return True

    def replace_view(self, old_view, new_view):
        for w in self._windows:
            if w.view is old_view:
                w.view = new_view

    def find_window(self, predicate):
        for w in self._windows:
            if predicate(w):
                return w
        return None


@forward(lambda self: self.active_window_set(),
         ['selected_window', 'select_window', 'split_window'],
         WindowSet)
class MemoryHost(ViewHost):
    def __init__(self):
        self._scratch = View(name='*scratch*')
        self.views = [self._scratch]
        self._window_sets = [WindowSet(self._scratch)]
        self._active_window_set = 0
        self.messages = []
        self.processes_started = 0

    # Window sets

    @property
    def window_set_index(self):
        return self._active_window_set

    @property
    def window_set_count(self):
        return len(self._window_sets)

    def active_window_set(self):
        return self._window_sets[self._active_window_set]

    def new_window_set(self, view):
        idx = self._active_window_set + 1
        ws = WindowSet(view)
        self._window_sets.insert(idx, ws)
        self._active_window_set = idx
        return ws

    def _window_set_of(self, window):
        for idx, ws in enumerate(self._window_sets):
            if window in ws.windows():
                return idx, ws
        return None, None

    def _delete_window_set_by_index(self, index):
        if index == 0:
            return False
        self._window_sets.pop(index)
        if index <= self._active_window_set:
            self._active_window_set -= 1
        return True

    def windows(self):
        return [w for ws in self._window_sets for w in ws.windows()]

    # Views

    def create_view(self, name, lines=None):
        """
        Create a view that is not bound to a process.
        """
        view = View(name=name)
        view.lines.extend(lines or [])
        self.views.append(view)
        return view

    def write_lines(self, view, lines):
        view.lines.extend(lines)

    def exit_process(self, view, lines=None):
        """
        Terminate the process of ``view`` and notify its exit handlers.
        """
        if lines:
            self.write_lines(view, lines)
        view.running = False
        while view.exit_handlers:
            view.exit_handlers.pop(0)()

    # ViewHost

    def find_view(self, pattern):
        for view in self.views:
            if view.name and re.search(pattern, view.name):
                return view
        return None

    def create_process_view(self, cmd):
        view = View(cmd=cmd)
        self.views.append(view)
        self.processes_started += 1
        return view

    def bind_window(self, view):
        return self.new_window_set(view).selected_window()

    def close_window(self, window):
        index, ws = self._window_set_of(window)
        if ws is None:
            return
        if not ws.delete_window(window):
            if not self._delete_window_set_by_index(index):
                ws.replace_view(window.view, self._scratch)

    def is_window_valid(self, window):
        return self._window_set_of(window)[1] is not None

    def is_view_valid(self, view):
        return view in self.views

    def set_view_name(self, view, name):
        view.name = name

    def mark_unlisted(self, view):
        view.listed = False

    def focus_input_mode(self, window):
        index, ws = self._window_set_of(window)
        if ws is None:
            return
        self._active_window_set = index
        ws.select_window(window)
        window.input_mode = True

    def capture_layout(self):
        ws = self.active_window_set()
        return (ws, ws.selected_window())

    def apply_layout(self, layout):
        ws, window = layout
        if ws not in self._window_sets:
            return
        self._active_window_set = self._window_sets.index(ws)
        ws.select_window(window)

    def read_all_lines(self, view):
        return list(view.lines)

    def delete_view(self, view):
        if view not in self.views:
            return
        for ws in list(self._window_sets):
            for w in ws.windows():
                if w.view is view:
                    self.close_window(w)
        self.views.remove(view)
        view.exit_handlers = []

    def on_process_exit(self, view, handler):
        view.exit_handlers.append(handler)

    def message(self, msg):
        self.messages.append(msg)
