# Copyright (c) 2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

from permterm.config import ConfigError, ProgramConfig, Variables
from permterm.core import LaunchAborted, SessionController
from permterm.dispatch import CallbackFailure
from permterm.registry import \
    SessionRegistry, Session, UnknownSession, DuplicateName, \
    IDLE, HIDDEN, VISIBLE


def setup(programs, host, variables=None, logger=None):
    """
    Register a session for each of ``programs`` and return the
    controller that toggles them on ``host``.

    :param programs: List of ProgramConfig objects or dicts
    :param host: The ViewHost that provides views and windows
    :param variables: Settings, defaults are used if None
    """
    return SessionController(SessionRegistry(programs), host,
                             variables=variables, logger=logger)
