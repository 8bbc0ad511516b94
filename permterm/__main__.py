# Copyright (c) 2018 Christoph Landgraf. All rights reserved.
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""
Toggle permterm sessions from the command line.

Each line read from stdin names a session to toggle. Output of the
visible session is echoed to stdout. Lines starting with a colon are
commands:

  :list          print the state of all sessions
  :send TEXT     send TEXT and a newline to the visible session
  :quit          stop all sessions and exit
"""

import argparse
import sys
import traceback

import permterm

from permterm.config import Variables, create_init_file, load_init_file
from permterm.core import visible_sessions
from permterm.host.process import ProcessHost


class CommandLoop(object):
    def __init__(self, controller, out=None):
        self._controller = controller
        self._out = out or sys.stdout
        self.running = False

    def write(self, line):
        self._out.write('%s\n' % line)
        self._out.flush()

    def list_sessions(self):
        for name in sorted(self._controller.registry.names()):
            self.write('%-16s %s' % (name, self._controller.state(name)))

    def send(self, text):
        host = self._controller.host
        for name in visible_sessions(self._controller):
            if not host.send_input(self._controller.registry.get(name).view, text + '\n'):
                self.write('%s is not running.' % name)
            return
        self.write('No visible session.')

    def handle_line(self, line):
        if line is None:
            self.running = False
            return

        line = line.strip()
        if not len(line):
            return

        if line == ':quit':
            self.running = False
        elif line == ':list':
            self.list_sessions()
        elif line.startswith(':send '):
            self.send(line[len(':send '):])
        else:
            try:
                self._controller.toggle(line)
            except permterm.UnknownSession as e:
                self.write('%s' % e)

    def _read_stdin(self, stdin):
        line = stdin.readline()
        self.handle_line(line if line else None)

    def run(self, stdin=None):
        stdin = stdin or sys.stdin
        host = self._controller.host
        host.io_selector.register(stdin, self._read_stdin)
        self.running = True
        try:
            while self.running:
                host.select()
        finally:
            host.io_selector.unregister(stdin)
            host.shutdown()


def main(argv=None):
    parser = argparse.ArgumentParser('permterm',
                                     description='Toggle persistent terminal sessions')
    parser.add_argument('--init', type=str, default=None,
                        help='Init file defining programs (default ~/.permterm/init.py)')
    parser.add_argument('--list', action='store_true',
                        help='List configured sessions and exit')
    parser.add_argument('--verbose', action='store_true',
                        help='Print the log on exit')
    args = parser.parse_args(argv)

    variables = Variables()
    try:
        programs = load_init_file(args.init or create_init_file())
        host = ProcessHost(encoding=variables.get_variable(['process', 'encoding']),
                           shell=variables.get_variable(['process', 'shell']),
                           echo=print)
        controller = permterm.setup(programs, host, variables=variables)
    except (permterm.ConfigError, permterm.DuplicateName, OSError):
        traceback.print_exc()
        return 1

    loop = CommandLoop(controller)
    if args.list:
        loop.list_sessions()
        return 0

    try:
        loop.run()
    finally:
        if args.verbose:
            for log_item in controller.logger.messages:
                print(log_item)
    return 0


if __name__ == '__main__':
    sys.exit(main())
