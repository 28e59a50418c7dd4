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


Pure Python snapshots of the geomagnetic field.
"""

import logging

from .ppgull import (Field, Snapshot, Workspace, coefficient_index,
                     create_snapshot, decimal_year, decimal_year_to_datetime,
                     destroy, field, inclination_declination, info,
                     is_leapyear)
from .errors import (DomainError, FormatError, GullError, GullMemoryError,
                     MissingDataError, Operation, PathError, ReturnCode,
                     error_function, error_print, error_string,
                     get_error_handler, set_error_handler)
from .config_utils import basicConfig

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
