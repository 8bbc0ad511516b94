# Copyright (c) 2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""
A host that runs the programs of its views as subprocesses.

Output of a process is appended line-wise to its view. Processes are
watched by an IOSelector, so that a caller has to drive the host by
calling ``select`` or ``run``; output handling and exit notifications
are delivered from these calls.
"""

from permterm.host.memory import MemoryHost
from permterm.io_selector import IOSelector
from permterm.tools.processes import LineBufferedProcess


class ViewProcess(LineBufferedProcess):
    def __init__(self, host, view, **kwargs):
        super(ViewProcess, self).__init__(view.cmd, host.io_selector,
                                          callback=self.append_line, **kwargs)
        self._host = host
        self._view = view

    def append_line(self, line):
        self._host.write_lines(self._view, [line])
        if self._host.echo is not None and self._host.is_displayed(self._view):
            self._host.echo(line)

    def handle_exit(self, returncode):
        super(ViewProcess, self).handle_exit(returncode)
        self._host.exit_process(self._view)


class ProcessHost(MemoryHost):
    def __init__(self, encoding='utf-8', shell=True, timeout=None, echo=None):
        super(ProcessHost, self).__init__()
        self.io_selector = IOSelector(timeout=timeout)
        self.echo = echo
        self._encoding = encoding
        self._shell = shell
        self._processes = {}

    def create_process_view(self, cmd):
        view = super(ProcessHost, self).create_process_view(cmd)
        proc = ViewProcess(self, view, shell=self._shell, encoding=self._encoding)
        self._processes[view.id] = proc
        proc.start()
        return view

    def message(self, msg):
        super(ProcessHost, self).message(msg)
        if self.echo is not None:
            self.echo('-- %s' % msg)

    def process(self, view):
        return self._processes.get(view.id)

    def is_displayed(self, view):
        return self.active_window_set().find_window(lambda w: w.view is view) is not None

    def send_input(self, view, string):
        """
        Write ``string`` to the process of ``view``. Returns False if
        the process is not running.
        """
        proc = self._processes.get(view.id)
        if not proc or not proc.running():
            return False
        try:
            proc.send_all(string, self._encoding)
        except BrokenPipeError:
            # Exited, the exit is dispatched by the next select
            return False
        return True

    def exit_process(self, view, lines=None):
        self._processes.pop(view.id, None)
        super(ProcessHost, self).exit_process(view, lines)

    def delete_view(self, view):
        proc = self._processes.pop(view.id, None)
        super(ProcessHost, self).delete_view(view)
        if proc:
            proc.stop()

    def select(self, timeout=None):
        self.io_selector.select(timeout)

    def run(self, until=None):
        """
        Dispatch process events until ``until`` returns True, or no
        process is left to watch.
        """
        while self.io_selector.has_waitables():
            if until is not None and until():
                break
            self.io_selector.select()

    def shutdown(self):
        for view in [v for v in self.views if v.id in self._processes]:
            self.delete_view(view)
