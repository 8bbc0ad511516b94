# Copyright (c) 2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

from permterm.api import *

__all__ = [
    'setup',

    'SessionController',
    'SessionRegistry',
    'Session',
    'ProgramConfig',
    'Variables',

    'IDLE',
    'HIDDEN',
    'VISIBLE',

    'ConfigError',
    'UnknownSession',
    'DuplicateName',
    'LaunchAborted',
    'CallbackFailure',
]
