"""
MIT License

Copyright (c) 2021 Karl M. Laundal

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.


Parameters of ppgull are stored in a dictionary and can be modified as
desired. Values are read at call time.

The BasicConfig class is adapted from ChaosMagPy (chaosmagpy.config_utils,
MIT License, Copyright (C) 2024 Clemens Kloss), which in turn is inspired
by matplotlib.rcsetup.

 ====================  =========  ============================================
 Value                 Type       Description
 ====================  =========  ============================================
 'params.r_surf'       `float`    Geomagnetic reference radius in kilometers
                                  (defaults to 6371.2 km).
 'params.wgs84_a2'     `float`    Squared WGS84 semi-major axis in km^2
                                  (defaults to 40680631.59).
 'params.wgs84_b2'     `float`    Squared WGS84 semi-minor axis in km^2
                                  (defaults to 40408299.98).
 'file.COF'            `str`      Default model file (.COF format) used when
                                  no path is given. Defaults to None.
 ====================  =========  ============================================

Example:
--------
import ppgull
from ppgull import basicConfig

with basicConfig.context('file.COF', 'data/IGRF13.COF'):
    snapshot = ppgull.create_snapshot(None, day=23, month=3, year=2020)
"""

import os
from contextlib import contextmanager


def check_path_exists(s):
    """Check that path to file exists."""
    if s is None or s == 'None':
        return None
    if os.path.exists(s):
        return str(s)
    else:
        raise ValueError(f'{s} does not exist.')


def check_positive_float(s):
    """Convert to strictly positive float."""
    try:
        s = float(s)
    except (TypeError, ValueError):
        raise ValueError(f'Could not convert {s} to float.')
    if not s > 0:
        raise ValueError(f'{s} is not strictly positive.')
    return s


DEFAULTS = {
    'params.r_surf': [6371.2, check_positive_float],
    'params.wgs84_a2': [40680631.59, check_positive_float],
    'params.wgs84_b2': [40408299.98, check_positive_float],

    # location of the default model file
    'file.COF': [None, check_path_exists],
}


class BasicConfig(dict):
    """Class for creating the ppgull configuration dictionary."""

    defaults = DEFAULTS

    def __init__(self, *args, **kwargs):
        super().update(*args, **kwargs)

    def __setitem__(self, key, value):
        """Set and check value before updating dictionary."""

        if key not in self.defaults:
            raise KeyError(f'"{key}" is not a valid parameter.')
        try:
            cval = self.defaults[key][1](value)
        except ValueError as err:
            raise ValueError(f'Key "{key}": {err}')
        super().__setitem__(key, cval)

    def __str__(self):
        return '\n'.join(map('{0[0]}: {0[1]}'.format, sorted(self.items())))

    def reset(self, key):
        """
        Load default value.

        Parameters
        ----------
        key : str
            Single keyword that is reset to the default.
        """
        self.__setitem__(key, self.defaults[key][0])

    def fullreset(self):
        """Load all default values."""
        super().update({key: val for key, (val, _) in self.defaults.items()})

    def load(self, filepath):
        """
        Load configuration dictionary from file.

        Parameters
        ----------
        filepath : str
            Filepath and name to configuration textfile. One ``key : value``
            pair per line, ``#`` starts a comment.
        """

        with open(filepath, 'r') as f:
            for line in f.readlines():
                # skip comment and empty lines
                if not line.strip():
                    continue
                elif line.strip()[0] == '#':
                    continue

                key, value = line.split(':', 1)
                value = value.split('#')[0].strip()  # remove comments and \n

                self.__setitem__(key.strip(), value)

    def save(self, filepath):
        """
        Save configuration dictionary to a file.

        Parameters
        ----------
        filepath : str
            Filepath and name of the textfile that will be saved with the
            configuration values.
        """

        with open(filepath, 'w') as f:
            for key, value in sorted(self.items()):
                f.write(f'{key} : {value}\n')

    @contextmanager
    def context(self, key, value):
        """
        Use context manager to temporarily change setting.

        Parameters
        ----------
        key : str
            BasicConfig configuration key.
        value
            Value compatible with ``key``.
        """
        old_value = self.__getitem__(key)
        self.__setitem__(key, value)
        try:
            yield
        finally:
            self.__setitem__(key, old_value)


# load defaults
basicConfig = BasicConfig({key: val for key, (val, _) in DEFAULTS.items()})
