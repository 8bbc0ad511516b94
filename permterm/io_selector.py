# Copyright (c) 2017 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""
The IOSelector class provides an abstraction on the select syscall.
"""

import select


class IOSelector(object):
    """
    The IOSelector class provides an abstraction on the select syscall.

    This class keeps a list of waitables as defined in the select
    documentation, as well as a handler for each waitable. A handler must
    be a callable with the signature ``fn(waitable)`` to process the waitable.
    New waitables may be registered by calling method register
    and unregistered by calling unregister. If a registered waitable has pending
    input, the corresponding handler will be invoked on the next call to select.

    On each call to select, all waitables with pending input are dispatched
    to their corresponding handler. Use the parameter ``timeout`` to control
    the timeout of the select-function.
    """

    def __init__(self, timeout=0):
        self._timeout = timeout
        self._waitables = []
        self._handlers = {}

    def register(self, waitable, handler):
        self._waitables.append(waitable)
        self._handlers[id(waitable)] = handler

    def unregister(self, waitable):
        try:
            self._waitables.remove(waitable)
            del self._handlers[id(waitable)]
        except ValueError:
            pass

    def has_waitables(self):
        return bool(self._waitables)

    def select(self, timeout=None):
        if not self._waitables:
            return

        readables, _, _ = select.select(self._waitables, [], [],
                                        self._timeout if timeout is None else timeout)
        for waitable in readables:
            # May have been unregistered by a previous handler
            handler = self._handlers.get(id(waitable))
            if handler:
                handler(waitable)
