# Copyright (c) 2017-2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.


# Mixin for io_selector handlers to dispatch input line-wise
class LineReader(object):
    def __init__(self, *args, **kwargs):
        self._encoding = kwargs.pop('encoding', 'utf-8')
        self._separator = kwargs.pop('separator', '\n')
        self._callback = kwargs.pop('callback', None)
        super(LineReader, self).__init__(*args, **kwargs)
        self._read_buffer = ''

    def handle_input(self, buf):
        self._read_buffer += buf.decode(self._encoding, errors='replace')
        while self._read_buffer.find(self._separator) != -1:
            line, self._read_buffer = self._read_buffer.split(self._separator, 1)
            self.handle_line(line)

    def flush(self):
        """Dispatch input that is not terminated by a separator."""
        if self._read_buffer:
            line, self._read_buffer = self._read_buffer, ''
            self.handle_line(line)

    def handle_line(self, line):
        if self._callback:
            self._callback(line)
