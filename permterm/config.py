# Copyright (c) 2017-2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""
Configuration of permterm.

Settings live in a ``Variables`` store, addressed by key paths such as
``['layout', 'restore']``. The list of programs is read from an init
file, a plain python module that defines a list ``programs``. Each
entry is either a ``ProgramConfig`` or a dict with the keys ``name``,
``cmd``, ``buffer_name``, ``on_exit`` (or ``callback``) and
``on_before_launch``:

.. code-block:: python

   programs = [
       {'name': 'shell', 'cmd': 'bash'},
       {'name': 'git',   'cmd': 'lazygit',
        'buffer_name': 'permterm://lazygit',
        'on_exit': lambda lines: print(lines[-1])},
   ]
"""

import importlib.util
import os
import shutil

from permterm.util import deep_get, deep_put, local_file

BUFFER_NAME_PREFIX = 'permterm://'


class ConfigError(Exception):
    pass


class Variables(object):
    def __init__(self):
        self._state = {}
        self.def_variable(['layout', 'restore'], True)
        self.def_variable(['messages', 'echo'], True)
        self.def_variable(['logging', 'max-messages'], 1000)
        self.def_variable(['process', 'encoding'], 'utf-8')
        self.def_variable(['process', 'shell'], True)

    def get_variable(self, path):
        return deep_get(self._state, path, return_none=False)

    def def_variable(self, path, value=None):
        deep_put(self._state, path, value, create_path=True)

    def set_variable(self, path, value=None):
        deep_put(self._state, path, value, create_path=False)


class ProgramConfig(object):
    def __init__(self, name, cmd=None, buffer_name=None,
                 on_exit=None, on_before_launch=None):
        if not name:
            raise ConfigError('Program without name.')
        self.name = name
        self.cmd = cmd
        self.buffer_name = buffer_name or default_buffer_name(name)
        self.on_exit = on_exit
        self.on_before_launch = on_before_launch

    @classmethod
    def from_dict(cls, entry):
        if isinstance(entry, cls):
            return entry
        if not hasattr(entry, 'get'):
            raise ConfigError('Invalid program entry: %r' % (entry,))
        return cls(entry.get('name'),
                   cmd=entry.get('cmd'),
                   buffer_name=entry.get('buffer_name'),
                   on_exit=entry.get('on_exit', entry.get('callback')),
                   on_before_launch=entry.get('on_before_launch'))

    def __repr__(self):
        return 'ProgramConfig(%r, cmd=%r)' % (self.name, self.cmd)


def default_buffer_name(name):
    return '%s%s' % (BUFFER_NAME_PREFIX, name)


def user_directory(*args):
    return os.path.join(os.path.expanduser('~'), '.permterm', *args)


def create_init_file():
    user_dir = user_directory()
    if not os.path.exists(user_dir):
        os.makedirs(user_dir)
    user_init_path = user_directory('init.py')
    if not os.path.exists(user_init_path):
        shutil.copyfile(local_file(__file__, 'init.py'), user_init_path)
    return user_init_path


def load_init_file(path):
    """
    Import the init file at ``path`` and return its programs
    as a list of ``ProgramConfig``.
    """
    spec = importlib.util.spec_from_file_location('permterm._user_init', path)
    if spec is None:
        raise ConfigError('Can not load init file %s.' % path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    programs = getattr(module, 'programs', None)
    if programs is None:
        raise ConfigError('Init file %s does not define programs.' % path)
    return [ProgramConfig.from_dict(entry) for entry in programs]
