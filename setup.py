
from setuptools import setup

setup(
    name =             "permterm",
    version =          "0.0.1",
    author =           "Christoph Landgraf",
    author_email =     "christoph.landgraf@googlemail.com",
    description =      "Persistent toggleable terminal sessions",
    license =          "BSD",
    packages =         ['permterm', 'permterm.host', 'permterm.tools'],
    package_data =     {'permterm': ['init.py']},
    python_requires =  ">=3.6",
    extras_require =   {'test': ['pytest']},
    entry_points =     {'console_scripts': [
        'permterm = permterm.__main__:main',
    ]}
)
