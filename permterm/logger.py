# Copyright (c) 2017 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

import sys
import traceback

MAX_MESSAGES = 1000


class Logger(object):
    """
    Bounded in-memory log.

    ``last_message`` holds the text that would be shown in an echo
    area, ``messages`` the history of everything logged.
    """

    def __init__(self, max_messages=MAX_MESSAGES):
        self.messages = []
        self.max_messages = max_messages
        self._last_message = ''

    @property
    def last_message(self):
        return self._last_message

    def log(self, msg):
        if (len(self.messages) >= self.max_messages):
            self.messages.pop(0)
        self.messages.append(msg)

    def message(self, msg, show_log=True, log_message=None):
        """
        Set the echo text and log it.

        :param msg: The message to be displayed
        :param show_log: Set to False, to avoid appending the message to the log
        :param log_message: Provide an alternative text for appending to the log
        """
        self._last_message = msg
        if log_message:
            self.log(log_message)
        elif show_log:
            self.log(msg)

    def exception(self):
        """
        Call to log the last thrown exception.
        """
        exc_type, exc_value, exc_tb = sys.exc_info()
        summary = traceback.format_exception_only(exc_type, exc_value)[-1].rstrip('\n')
        self.message(summary, log_message=traceback.format_exc())
        return summary
