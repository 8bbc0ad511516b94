# Copyright (c) 2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.


class CallbackFailure(Exception):
    def __init__(self, session_name, callback_name):
        super(CallbackFailure, self).__init__(
            '%s callback of %s failed' % (callback_name, session_name))
        self.session_name = session_name
        self.callback_name = callback_name


def report_callback_failure(logger, host, session, callback_name):
    """
    Log the exception being handled as failure of a session callback.

    Must be called from an except block.
    """
    failure = CallbackFailure(session.name, callback_name)
    summary = logger.exception()
    logger.message('%s: %s' % (failure, summary))
    host.message(logger.last_message)
    return failure


class ExitDispatcher(object):
    """
    Delivers the output of a program that exited by itself to the
    session's ``on_exit`` callback.
    """

    def __init__(self, host, logger):
        self._host = host
        self._logger = logger

    def dispatch(self, session, lines):
        if not session.exited or session.on_exit is None:
            return
        try:
            session.on_exit(list(lines))
        except Exception:
            report_callback_failure(self._logger, self._host, session, 'on_exit')
