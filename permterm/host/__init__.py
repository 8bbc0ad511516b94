# Copyright (c) 2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""
A host provides the views, windows and processes that sessions
are made of.

A view is a terminal-like buffer bound to a running process. A view
may be displayed in a window, and every window the session controller
opens covers the whole screen, like a tab, so that the arrangement of
windows that was visible before can be captured as a layout token and
applied again afterwards. Handles returned by a host are opaque to
the session controller, which only passes them back to the host.

``permterm.host.memory`` implements a host that keeps everything in
memory and is driven by its caller, ``permterm.host.process`` one
that runs real processes.
"""


class ViewHost(object):
    def find_view(self, pattern):
        """
        Return a live view whose name matches the regular expression
        ``pattern``, or None.
        """
        raise NotImplementedError()

    def create_process_view(self, cmd):
        raise NotImplementedError()

    def bind_window(self, view):
        """
        Display ``view`` in a new full-screen window and return it.
        """
        raise NotImplementedError()

    def close_window(self, window):
        raise NotImplementedError()

    def is_window_valid(self, window):
        raise NotImplementedError()

    def is_view_valid(self, view):
        raise NotImplementedError()

    def set_view_name(self, view, name):
        raise NotImplementedError()

    def mark_unlisted(self, view):
        raise NotImplementedError()

    def focus_input_mode(self, window):
        raise NotImplementedError()

    def capture_layout(self):
        raise NotImplementedError()

    def apply_layout(self, layout):
        raise NotImplementedError()

    def read_all_lines(self, view):
        raise NotImplementedError()

    def delete_view(self, view):
        raise NotImplementedError()

    def on_process_exit(self, view, handler):
        """
        Register ``handler`` to be called without arguments once the
        process of ``view`` terminated.
        """
        raise NotImplementedError()

    def message(self, msg):
        pass
