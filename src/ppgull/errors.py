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


Errors raised by ppgull.

Every failure is raised as a subclass of GullError. The error carries the
return code, the operation that raised it and, for model file problems,
the faulty file and line.

An optional handler can observe errors before they are raised, either
passed explicitly to an operation or registered process wide with
set_error_handler. Setting the process wide handler is not thread safe.
"""

import enum
import json
import sys


class ReturnCode(enum.IntEnum):
    """ Return codes, ordered as in the C library """
    SUCCESS = 0
    DOMAIN_ERROR = 1
    FORMAT_ERROR = 2
    MEMORY_ERROR = 3
    MISSING_DATA = 4
    PATH_ERROR = 5


class Operation(enum.Enum):
    """ Library operations that can raise an error """
    SNAPSHOT_CREATE = 'gull_snapshot_create'
    SNAPSHOT_DESTROY = 'gull_snapshot_destroy'
    SNAPSHOT_FIELD = 'gull_snapshot_field'
    SNAPSHOT_INFO = 'gull_snapshot_info'


_ERROR_STRINGS = {
    ReturnCode.SUCCESS:      'Operation succeeded',
    ReturnCode.DOMAIN_ERROR: 'Value is out of validity range',
    ReturnCode.FORMAT_ERROR: 'Invalid data format',
    ReturnCode.MEMORY_ERROR: 'Could not allocate memory',
    ReturnCode.MISSING_DATA: 'Missing data',
    ReturnCode.PATH_ERROR:   'No such file or directory',
}


class GullError(Exception):
    """Base exception for all ppgull errors."""
    code = None

    def __init__(self, message, function=None, path=None, line=None):
        self.message = message
        self.function = function
        self.path = path
        self.line = line
        super().__init__(message)


class DomainError(GullError, ValueError):
    """Some input value is out of its validity range."""
    code = ReturnCode.DOMAIN_ERROR


class FormatError(GullError, ValueError):
    """The model file has a wrong format."""
    code = ReturnCode.FORMAT_ERROR


class GullMemoryError(GullError, MemoryError):
    """Some memory couldn't be allocated."""
    code = ReturnCode.MEMORY_ERROR


class MissingDataError(GullError, LookupError):
    """No valid data could be found."""
    code = ReturnCode.MISSING_DATA


class PathError(GullError):
    """The model file couldn't be opened or found."""
    code = ReturnCode.PATH_ERROR


def error_string(code):
    """ Return a static string describing a return code """
    return _ERROR_STRINGS[ReturnCode(code)]


def error_function(function):
    """ Return the name of a library operation, or None """
    if function is None:
        return None
    return Operation(function).value


_handler = None


def get_error_handler():
    """ Get the process wide error handler, or None """
    return _handler


def set_error_handler(handler):
    """
    Set or clear (with None) the process wide error handler

    The handler is called with the GullError instance right before it is
    raised. It can not suppress the error. This function is not thread safe.
    """
    global _handler
    if handler is not None and not callable(handler):
        raise TypeError('error handler must be callable or None')
    _handler = handler


def raise_error(error, handler=None):
    """ Notify the explicit handler, or else the process wide one, then raise """
    if handler is None:
        handler = _handler
    if handler is not None:
        handler(error)
    raise error


def error_print(error, stream=None):
    """
    Print a JSON summary of an error

    Parameters
    ----------
    error : GullError
        The error to summarize
    stream : file-like, optional
        Where to write. Default is sys.stderr. Concurrent writers must
        serialize access to a shared stream themselves.
    """
    if stream is None:
        stream = sys.stderr

    summary = {'code': int(error.code), 'message': error_string(error.code)}
    if error.function is not None:
        summary['function'] = error_function(error.function)
    if error.path is not None:
        summary['file'] = str(error.path)
    if error.line:
        summary['line'] = error.line

    stream.write(json.dumps(summary))
