# Copyright (c) 2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.


class LayoutManager(object):
    """
    Remembers the window arrangement a session's window replaced.
    """

    def __init__(self, host, enabled=True):
        self._host = host
        self.enabled = enabled

    def capture(self, session):
        session.previous_layout = self._host.capture_layout()

    def restore(self, session):
        layout, session.previous_layout = session.previous_layout, None
        if layout is not None and self.enabled:
            self._host.apply_layout(layout)

    def discard(self, session):
        session.previous_layout = None
