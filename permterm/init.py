# permterm init file
#
# Each program gets its own persistent terminal session, that is
# shown and hidden by toggling it with its name.

programs = [
    {'name': 'shell', 'cmd': 'bash'},
    {'name': 'top',   'cmd': 'top -b -n 1'},
]
