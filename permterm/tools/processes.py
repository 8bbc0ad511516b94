# Copyright (c) 2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

import subprocess

from permterm.tools import LineReader


class Process(object):
    BUFFER_SIZE = 1024

    def __init__(self, cmd, io_selector, shell=True, **kwargs):
        super(Process, self).__init__(**kwargs)
        self._cmd = cmd
        self._shell = shell
        self._io_selector = io_selector
        self._proc = None

    def start(self):
        self._proc = subprocess.Popen(self._cmd,
                                      shell=self._shell,
                                      stdout=subprocess.PIPE,
                                      stderr=subprocess.STDOUT,
                                      stdin=subprocess.PIPE,
                                      bufsize=0)
        self._io_selector.register(self._proc.stdout, self.handle)

    def running(self):
        return self._proc is not None and self._proc.poll() is None

    def stop(self):
        self._io_selector.unregister(self._proc.stdout)
        if self.running():
            self.kill(wait=True)
        self._close_pipes()

    def kill(self, wait=False):
        self._proc.kill()
        if wait:
            return self._proc.wait()

    def send_all(self, buf, encoding='utf-8'):
        self._proc.stdin.write(buf.encode(encoding))
        self._proc.stdin.flush()

    def handle(self, pread):
        buf = self._proc.stdout.read(Process.BUFFER_SIZE)
        if buf:
            self.handle_input(buf)
        else:
            self._io_selector.unregister(self._proc.stdout)
            returncode = self._proc.wait()
            self._close_pipes()
            self.handle_exit(returncode)

    def _close_pipes(self):
        for pipe in (self._proc.stdin, self._proc.stdout):
            if pipe and not pipe.closed:
                pipe.close()

    def handle_input(self, buf):
        # Overwrite in subclass
        pass

    def handle_exit(self, returncode):
        # Overwrite in subclass
        pass


class LineBufferedProcess(LineReader, Process):
    def handle_exit(self, returncode):
        self.flush()
