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


Snapshots of the geomagnetic field, in pure Python.

A snapshot freezes a spherical harmonic model (IGRF, WMM, ... in the .COF
format of geomag70) at a given calendar date. It can then be evaluated at
any geodetic location, any number of times.


Example usage:
--------------
import ppgull

snapshot = ppgull.create_snapshot('IGRF13.COF', day=23, month=3, year=2020)
order, zmin, zmax = snapshot.info() # altitude range in meters

# Auberge des Gros Manaux, Puy de Dome, France
lat = 45.76415653 # degrees north (geodetic)
lon = 2.95536402  # degrees east
h   = 1090.       # meters above the WGS84 ellipsoid
Be, Bn, Bu = snapshot.field(lat, lon, h) # returns east, north, up in tesla

# GRID, with a reusable scratch buffer
workspace = ppgull.Workspace()
lat = np.array([[60, 60, 60], [-60, -60, -60]])
lon = np.array([20, 120, 220])
Be, Bn, Bu = snapshot.field(lat, lon, 0, workspace = workspace)

snapshot.destroy()



Here is a list of functions and classes:

Helper functions
----------------
is_leapyear              - Check if year is leapyear
decimal_year             - Convert a calendar date to decimal year
decimal_year_to_datetime - Convert decimal year to datetime
coefficient_index        - Index of the (degree, order) cell of a snapshot
locate_datasets          - Read the raw coefficients relevant for a date
resolve                  - Collapse raw coefficients to a given date
inclination_declination  - Angles of a field vector

Main functions and classes
--------------------------
Snapshot                 - Immutable, date resolved, geomagnetic model
Workspace                - Scratch memory for field evaluations
create_snapshot          - Create a Snapshot from a model file
field                    - Magnetic field at a geodetic location
info                     - Order and altitude range of a Snapshot
destroy                  - Release the memory of a Snapshot
"""

import logging
import math
import warnings
from collections import namedtuple
from dataclasses import dataclass

import numpy as np
import pandas as pd

from . import config_utils
from .errors import (DomainError, FormatError, GullError, GullMemoryError,
                     MissingDataError, Operation, PathError, raise_error)

logger = logging.getLogger(__name__)

# Width of a .COF line, including the line terminator
LINE_WIDTH = 81

# Latitudes closer than this to a pole [deg] are moved to POLE_LATITUDE
POLE_TOLERANCE = 0.001
POLE_LATITUDE = 89.999 # about 300 ft. from the pole

# Start day in year of each month, for non leap years
START_DAY = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365)



def is_leapyear(year):
    """ Check for leapyear (handles arrays and preserves shape)

    """

    # if array:
    if type(year) is np.ndarray:
        out = np.full_like(year, False, dtype = bool)

        out[ year % 4   == 0] = True
        out[ year % 100 == 0] = False
        out[ year % 400 == 0] = True

        return out

    # if scalar:
    return (year % 4 == 0) and ((year % 100 != 0) or (year % 400 == 0))


def decimal_year(day, month, year):
    """
    Convert a calendar date to decimal year

    The day in year is counted from 1, i.e. January 1st of a non leap year
    is year + 1/365 and December 31st of a leap year is year + 1.

    Parameters
    ----------
    day : int
        Day in the month, in [1, 31]
    month : int
        Month of the year, in [1, 12]
    year : int
        Year number, e.g. 2016

    Returns
    -------
    date : float
        Date in decimal year

    Raises
    ------
    DomainError
        If the month or the day is not valid.
    """

    if (month < 1) or (month > 12):
        raise DomainError('invalid month `{}`'.format(month))

    leap_year = int(is_leapyear(year))
    days_in_month = START_DAY[month] - START_DAY[month - 1] \
                    + (month == 2) * leap_year
    if (day < 1) or (day > days_in_month):
        raise DomainError('invalid day `{}` for month `{}`'.format(day, month))

    day_in_year = START_DAY[month - 1] + day + (leap_year if month > 2 else 0)
    return year + day_in_year / (365. + leap_year)


def decimal_year_to_datetime(fracyear):
    """
    Convert decimal year to datetime

    This is the inverse of decimal_year, rounded to the second.

    Parameters
    ----------
    fracyear : iterable
        Date(s) in decimal year. E.g., 2021-03-28 is 2021.2356
        Must be an array, list or similar.

    Returns
    -------
    datetimes : array
        Array of datetimes
    """

    fracyear = np.asarray(fracyear, dtype = np.float64).flatten()
    year = np.floor(fracyear).astype(np.int64) # truncate fracyear to get year

    # days are counted from 1 in decimal years:
    days = (fracyear - year) * (365 + is_leapyear(year)) - 1
    delta_year = pd.to_timedelta(days, unit = 'D').round('s')
    # and DatetimeIndex to represent beginning of years:
    start_year = pd.to_datetime(list(map(str, year)), format = '%Y')

    # adding them produces the datetime:
    return (start_year + delta_year).to_pydatetime()


def coefficient_index(i, j):
    """
    Index of the (i, j) cell in the triangular table of coefficients

    Cells are ordered by degree i = 1, 2, ... then by order j = 0, ..., i.
    A snapshot stores 2 values per cell (g, h), so the coefficients of
    (i, j) start at element 2 * coefficient_index(i, j).
    """
    return ((i - 1) * (i + 2)) // 2 + j


@dataclass(frozen = True)
class RawDataset:
    """ Header of a data set of a .COF file, located for a given date """
    model: str
    epoch: float
    nmax1: int
    nmax2: int
    year_min: float
    year_max: float
    altitude_min: float # km
    altitude_max: float # km
    offset: int         # file position of the first coefficient line
    line: int           # line number of the header


def _syntax_error(path, line):
    return FormatError('invalid syntax [{}:{}]'.format(path, line),
                       path = path, line = line)


def _read_line(f, path, line):
    """ Read the next raw line of a binary file as ASCII text """
    buffer = f.readline()
    try:
        return buffer.decode('ascii')
    except UnicodeDecodeError as err:
        raise _syntax_error(path, line) from err


def _parse_header(buffer):
    """ Return the fields of a data set header line, or None if invalid """
    fields = buffer.split()
    try:
        model = fields[0]
        epoch = float(fields[1])
        nmax1, nmax2, _ = map(int, fields[2:5])
        year_min, year_max, altitude_min, altitude_max = map(float, fields[5:9])
    except (IndexError, ValueError):
        return None

    return model, epoch, nmax1, nmax2, year_min, year_max, altitude_min, \
           altitude_max


def _parse_coefficients(buffer):
    """ Return (i, j, g1, h1, g2, h2) from a coefficient line, or None """
    fields = buffer.split()
    try:
        i, j = map(int, fields[:2])
        g1, h1, g2, h2 = map(float, fields[2:6])
    except ValueError:
        return None

    return i, j, g1, h1, g2, h2


def locate_datasets(path, date):
    """
    Read the raw spherical harmonic coefficients relevant for a date

    Data set headers are scanned in file order. The first data set whose
    validity range contains the date is selected. If it provides secular
    variation coefficients (nmax2 > 0) it is used alone, otherwise the
    next data set is selected as well, for interpolation.

    Parameters
    ----------
    path : string
        filename of .COF file
    date : float
        Date in decimal year

    Returns
    -------
    order : int
        Maximum degree of the coefficients
    datasets : list
        The selected RawDataset(s), one or two
    raw : array
        Raw coefficients, 4 values per (i, j) cell. With one data set
        these are (g, h, dg/dt, dh/dt). With two data sets these are
        (g, h) of the first data set followed by (g, h) of the second.

    Raises
    ------
    PathError
        If the file can not be opened.
    FormatError
        If the file is malformed. The faulty line is attached to the error.
    MissingDataError
        If no data is available for the date.
    GullMemoryError
        If the raw coefficients can not be allocated.
    """

    try:
        f = open(path, 'rb') # no newline translation
    except OSError as err:
        raise PathError('could not open file `{}`'.format(path),
                        path = path) from err

    with f:
        # locate the relevant data set(s):
        datasets = []
        line = 0
        while len(datasets) < 2:
            buffer = _read_line(f, path, line + 1)
            if not buffer:
                break
            line += 1
            if len(buffer) != LINE_WIDTH:
                raise _syntax_error(path, line)

            if not buffer.startswith('   '): # not a data set header
                continue

            header = _parse_header(buffer)
            if header is None:
                raise _syntax_error(path, line)
            model, epoch, nmax1, nmax2, year_min, year_max, altitude_min, \
                altitude_max = header
            if not datasets and ((date < year_min) or (date > year_max)):
                continue

            datasets.append(RawDataset(model, epoch, nmax1, nmax2, year_min,
                                       year_max, altitude_min, altitude_max,
                                       f.tell(), line))
            logger.debug('selected data set %s (epoch %.2f, nmax %d/%d) '
                         'at %s:%d', model, epoch, nmax1, nmax2, path, line)
            if datasets[0].nmax2 > 0: # secular variation, no need for more
                break

        if not datasets or ((len(datasets) == 1) and (datasets[0].nmax2 <= 0)):
            raise MissingDataError('missing data in file `{}`'.format(path),
                                   path = path)

        if len(datasets) == 1:
            order = max(datasets[0].nmax1, datasets[0].nmax2)
        else:
            order = max(datasets[0].nmax1, datasets[1].nmax1)
        if order < 1:
            raise _syntax_error(path, datasets[0].line)

        # read the coefficients:
        ncells = (order * (order + 3)) // 2
        try:
            raw = np.zeros(4 * ncells, dtype = np.float64)
        except MemoryError as err:
            raise GullMemoryError('could not allocate memory',
                                  path = path) from err
        written = np.zeros((ncells, 2), dtype = bool)

        for idat, dataset in enumerate(datasets):
            f.seek(dataset.offset)
            line = dataset.line

            nmax = order if len(datasets) == 1 else dataset.nmax1
            for _ in range((nmax * (nmax + 3)) // 2):
                line += 1
                buffer = _read_line(f, path, line)
                if len(buffer) != LINE_WIDTH:
                    raise _syntax_error(path, line)

                values = _parse_coefficients(buffer)
                if values is None:
                    raise _syntax_error(path, line)
                i, j, g1, h1, g2, h2 = values
                if (i < 1) or (j < 0) or (j > i) or (i > order):
                    raise _syntax_error(path, line)

                c = coefficient_index(i, j)
                if written[c, idat]: # duplicated line
                    raise _syntax_error(path, line)
                written[c, idat] = True

                if len(datasets) == 1:
                    raw[4 * c:4 * c + 4] = g1, h1, g2, h2
                else:
                    raw[4 * c + 2 * idat:4 * c + 2 * idat + 2] = g1, h1

    return order, datasets, raw


def resolve(order, datasets, raw, date):
    """
    Collapse raw coefficients to a given date

    A single data set is extrapolated linearly with its secular variation.
    Two data sets are interpolated linearly between their epochs. The blend
    weight is not bounded to [0, 1], dates outside of the epochs are
    extrapolated (with a warning).

    Parameters
    ----------
    order : int
        Maximum degree of the coefficients
    datasets : list
        One or two RawDataset, as returned by locate_datasets
    raw : array
        Raw coefficients, as returned by locate_datasets
    date : float
        Date in decimal year

    Returns
    -------
    coefficients : array
        Resolved (g, h) coefficients, of size order * (order + 3)
    altitude_min : float
        Minimum valid altitude [km]
    altitude_max : float
        Maximum valid altitude [km]
    """

    cells = np.asarray(raw, dtype = np.float64).reshape((-1, 4))
    if cells.shape[0] != (order * (order + 3)) // 2:
        raise ValueError('raw coefficients do not match order {}'.format(order))

    if len(datasets) == 1:
        dataset = datasets[0]

        # extrapolate:
        h = date - dataset.epoch
        coefficients = cells[:, :2] + cells[:, 2:] * h

        altitude_min, altitude_max = dataset.altitude_min, dataset.altitude_max
    else:
        d0, d1 = datasets
        if d1.epoch == d0.epoch:
            raise FormatError('identical epochs at lines {} and {}'.format(
                d0.line, d1.line), line = d1.line)

        # interpolate:
        h = (date - d0.epoch) / (d1.epoch - d0.epoch)
        if (h < 0) or (h > 1):
            warnings.warn('Date {:.4f} is outside of the epochs {} and {}, '
                          'coefficients are extrapolated'.format(
                              date, d0.epoch, d1.epoch), stacklevel = 3)
        coefficients = cells[:, :2] * (1. - h) + cells[:, 2:] * h

        altitude_min = max(d0.altitude_min, d1.altitude_min)
        altitude_max = min(d0.altitude_max, d1.altitude_max)
        if altitude_min > altitude_max:
            raise FormatError('disjoint altitude ranges at lines {} and {}'
                              .format(d0.line, d1.line), line = d1.line)

    return coefficients.reshape(-1), altitude_min, altitude_max


class Workspace:
    """
    Scratch memory for field evaluations

    A workspace can be reused over many evaluations, and over snapshots of
    different orders. It is resized if needed. Concurrent evaluations must
    each use their own workspace.
    """

    def __init__(self, size = 0):
        self.data = np.empty(0, dtype = np.float64)
        self.reserve(size)

    def __len__(self):
        return self.data.size

    def reserve(self, size):
        """ Return a buffer of at least size elements, reallocating if needed """
        if self.data.size < size:
            try:
                self.data = np.empty(size, dtype = np.float64)
            except MemoryError as err:
                raise GullMemoryError('could not allocate memory') from err
        return self.data


class Field(namedtuple('Field', ['east', 'north', 'up'])):
    """ Magnetic field components [T] in East, North, Upward (ENU) frame """
    __slots__ = ()

    def norm(self):
        """ Total intensity [T] """
        return np.sqrt(self.east**2 + self.north**2 + self.up**2)


def _field_point(coefficients, order, latitude, longitude, altitude,
                 workspace, r_surf, a2, b2):
    """
    Compute the magnetic field at a single location

    Adaptation of the geomag70 shval3 routine, itself based on the
    subroutine 'igrf' by D. R. Barraclough and S. R. C. Malin, report
    no. 71/1, institute of geological sciences, U.K.

    Returns east, north, up components in T. Altitude is in km.
    """

    # sine and cosine of latitude, with protection against poles
    slat = math.sin(latitude * math.pi / 180.)
    if (90. - latitude) < POLE_TOLERANCE:
        aa = POLE_LATITUDE
    elif (90. + latitude) < POLE_TOLERANCE:
        aa = -POLE_LATITUDE
    else:
        aa = latitude
    clat = math.cos(aa * math.pi / 180.)

    longitude = longitude * math.pi / 180.
    sl = workspace[:order]
    cl = workspace[order:2 * order]
    sl[0] = math.sin(longitude)
    cl[0] = math.cos(longitude)

    # convert to geocentric
    aa = a2 * clat * clat
    bb = b2 * slat * slat
    cc = aa + bb
    dd = math.sqrt(cc)
    r = math.sqrt(altitude * (altitude + 2. * dd) + (a2 * aa + b2 * bb) / cc)
    ratio = r_surf / r
    cd = (altitude + dd) / r
    sd = (a2 - b2) * slat * clat / (dd * r)
    slat, clat = slat * cd - clat * sd, clat * cd + slat * sd

    # Legendre functions and their derivatives, seeded for n <= 2
    npq = (order * (order + 3)) // 2
    p = workspace[2 * order:2 * order + npq]
    q = workspace[2 * order + npq:2 * order + 2 * npq]
    aa = math.sqrt(3.)
    nseed = min(4, npq)
    p[:nseed] = (2. * slat, 2. * clat, 4.5 * slat * slat - 1.5,
                 3. * aa * clat * slat)[:nseed]
    q[:nseed] = (-clat, slat, -3. * clat * slat,
                 aa * (slat * slat - clat * clat))[:nseed]

    x, y, z = 0., 0., 0.
    rr = 0.
    n, m = 0, 1
    for k in range(npq):
        if m > n:
            m = 0
            n += 1
            rr = ratio ** (n + 2)

        if k >= 4:
            if m == n:
                aa = math.sqrt(1. - 0.5 / m)
                j = k - n - 1
                p[k] = (1. + 1. / m) * aa * clat * p[j]
                q[k] = aa * (clat * q[j] + slat / m * p[j])
                sl[m - 1] = sl[m - 2] * cl[0] + cl[m - 2] * sl[0]
                cl[m - 1] = cl[m - 2] * cl[0] - sl[m - 2] * sl[0]
            else:
                aa = math.sqrt(n * n - m * m)
                bb = math.sqrt((n - 1.) * (n - 1.) - m * m) / aa
                cc = (2. * n - 1.) / aa
                ii = k - n
                j = k - 2 * n + 1
                p[k] = (n + 1.) * (cc * slat / n * p[ii] - bb / (n - 1.) * p[j])
                q[k] = cc * (slat * q[ii] - clat / n * p[ii]) - bb * q[j]

        aa = rr * coefficients[2 * k]
        if m == 0:
            x += aa * q[k]
            z -= aa * p[k]
        else:
            bb = rr * coefficients[2 * k + 1]
            cc = aa * cl[m - 1] + bb * sl[m - 1]
            x += cc * q[k]
            z -= cc * p[k]
            if clat > 0:
                y += (aa * sl[m - 1] - bb * cl[m - 1]) * m * p[k] \
                     / ((n + 1.) * clat)
            else:
                y += (aa * sl[m - 1] - bb * cl[m - 1]) * q[k] * slat
        m += 1

    # rotate back to geodetic, nT -> T
    east = y * 1E-09
    north = (x * cd + z * sd) * 1E-09
    up = -(z * cd - x * sd) * 1E-09
    return east, north, up


class Snapshot:
    """
    Snapshot of a geomagnetic model at a given date

    Snapshots are immutable. They are usually created with create_snapshot
    or Snapshot.from_date. Field evaluations only read the snapshot, thus
    they can run concurrently provided that each one uses its own Workspace.
    """

    __slots__ = ('_order', '_altitude_min', '_altitude_max', '_coefficients',
                 '_model', '_path', '_date')

    def __init__(self, order, altitude_min, altitude_max, coefficients,
                 model = None, path = None, date = None):
        coefficients = np.array(coefficients, dtype = np.float64).reshape(-1)
        if coefficients.size != order * (order + 3):
            raise ValueError('expected {} coefficients for order {}, got {}'
                             .format(order * (order + 3), order,
                                     coefficients.size))
        coefficients.flags.writeable = False

        self._order = int(order)
        self._altitude_min = float(altitude_min)
        self._altitude_max = float(altitude_max)
        self._coefficients = coefficients
        self._model = model
        self._path = path
        self._date = date

    @classmethod
    def from_date(cls, path, date, handler = None):
        """
        Create a snapshot from a date object

        Parameters
        ----------
        path : string
            filename of .COF file, or None for basicConfig['file.COF']
        date : date
            datetime, pandas Timestamp, ISO string or similar
        handler : callable, optional
            error handler, see ppgull.errors
        """
        date = pd.Timestamp(date)
        return create_snapshot(path, date.day, date.month, date.year,
                               handler = handler)

    def __repr__(self):
        if self._coefficients is None:
            return '<Snapshot (destroyed)>'
        return '<Snapshot {} order={} altitude=[{}, {}] km date={}>'.format(
            self._model, self._order, self._altitude_min, self._altitude_max,
            self._date)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.destroy()

    @property
    def order(self):
        return self._order

    @property
    def altitude_min(self):
        """ Minimum valid altitude [km] """
        return self._altitude_min

    @property
    def altitude_max(self):
        """ Maximum valid altitude [km] """
        return self._altitude_max

    @property
    def coefficients(self):
        """ Read-only (g, h) coefficients [nT], see coefficient_index """
        return self._coefficients

    @property
    def model(self):
        return self._model

    @property
    def path(self):
        return self._path

    @property
    def day(self):
        return None if self._date is None else self._date[0]

    @property
    def month(self):
        return None if self._date is None else self._date[1]

    @property
    def year(self):
        return None if self._date is None else self._date[2]

    @property
    def decimal_year(self):
        return None if self._date is None else decimal_year(*self._date)

    @property
    def destroyed(self):
        return self._coefficients is None

    def _check_alive(self, function):
        if self._coefficients is None:
            raise DomainError('snapshot has been destroyed',
                              function = function)
        return self._coefficients

    def destroy(self):
        """ Release the coefficients. Calling it again does nothing """
        self._coefficients = None

    def info(self, handler = None):
        """
        Order and altitude range of the snapshot

        Returns
        -------
        order : int
            Order of the spherical harmonics
        altitude_min : float
            Minimum valid altitude [m]
        altitude_max : float
            Maximum valid altitude [m]
        """
        try:
            self._check_alive(Operation.SNAPSHOT_INFO)
        except GullError as err:
            raise_error(err, handler)
        return self._order, self._altitude_min * 1E+03, \
               self._altitude_max * 1E+03

    def to_dataframe(self):
        """
        Resolved coefficients as a DataFrame

        Returns
        -------
        coefficients : DataFrame
            pandas DataFrame indexed by degree and order (n, m), with
            columns g and h [nT]
        """
        coefficients = self._check_alive(Operation.SNAPSHOT_INFO)
        keys = [(n, m) for n in range(1, self._order + 1)
                       for m in range(n + 1)]
        index = pd.MultiIndex.from_tuples(keys, names = ['n', 'm'])
        return pd.DataFrame(coefficients.reshape((-1, 2)), index = index,
                            columns = ['g', 'h'])

    def field(self, latitude, longitude, altitude, workspace = None,
              handler = None):
        """
        Calculate the magnetic field components

        Input in geodetic coordinates, output in local East, North, Upward
        (ENU) frame.

        Broadcasting rules apply for coordinate arrays, and the combined
        shape will be preserved. If you pass scalars, the components are
        floats.

        Parameters
        ----------
        latitude : array
            geodetic latitude [deg]
        longitude : array
            longitude [deg], positive east
        altitude : array
            altitude [m] above the WGS84 ellipsoid
        workspace : Workspace, optional
            scratch memory. A temporary one is used if not provided.
        handler : callable, optional
            error handler, see ppgull.errors

        Returns
        -------
        field : Field
            Named tuple (east, north, up) of magnetic field components [T]

        Raises
        ------
        DomainError
            If an altitude is out of the snapshot range.
        GullMemoryError
            If the workspace can not be allocated.
        """

        try:
            coefficients = self._check_alive(Operation.SNAPSHOT_FIELD)

            # convert input to arrays and cast to same shape:
            latitude, longitude, altitude = np.broadcast_arrays(
                latitude, longitude, altitude)
            shape = latitude.shape
            latitude, longitude, altitude = map(
                lambda x: x.astype(np.float64).flatten(),
                [latitude, longitude, altitude])

            # check the altitude, m -> km:
            altitude = altitude * 1E-03
            invalid = ~((altitude >= self._altitude_min) &
                        (altitude <= self._altitude_max))
            if np.any(invalid):
                raise DomainError('invalid altitude value: {:.5E}'.format(
                    altitude[invalid][0]), function = Operation.SNAPSHOT_FIELD)

            if workspace is None:
                workspace = Workspace()
            buffer = workspace.reserve(self._order * (self._order + 5))
        except GullError as err:
            if err.function is None:
                err.function = Operation.SNAPSHOT_FIELD
            raise_error(err, handler)

        r_surf = config_utils.basicConfig['params.r_surf']
        a2 = config_utils.basicConfig['params.wgs84_a2']
        b2 = config_utils.basicConfig['params.wgs84_b2']

        out = np.empty((3, latitude.size), dtype = np.float64)
        for k in range(latitude.size):
            out[:, k] = _field_point(coefficients, self._order, latitude[k],
                                     longitude[k], altitude[k], buffer,
                                     r_surf, a2, b2)

        if shape == ():
            return Field(*map(float, out[:, 0]))
        return Field(*(component.reshape(shape) for component in out))


def create_snapshot(path, day, month, year, handler = None):
    """
    Create a snapshot of a geomagnetic model

    Parameters
    ----------
    path : string
        filename of .COF file (geomag70 format, e.g. IGRF13.COF or
        WMM2015.COF). If None, basicConfig['file.COF'] is used.
    day : int
        Day in the month, in [1, 31]
    month : int
        Month of the year, in [1, 12]
    year : int
        Year number, e.g. 2016
    handler : callable, optional
        error handler, called with the error before it is raised. Default
        is the process wide handler, see ppgull.errors.set_error_handler

    Returns
    -------
    snapshot : Snapshot
        Snapshot of the model at the given date

    Raises
    ------
    DomainError, FormatError, GullMemoryError, MissingDataError, PathError
        See ppgull.errors. No snapshot is created on failure.
    """

    try:
        if path is None:
            path = config_utils.basicConfig['file.COF']
            if path is None:
                raise PathError('no model file given')

        date = decimal_year(day, month, year)
        order, datasets, raw = locate_datasets(path, date)
        coefficients, altitude_min, altitude_max = resolve(order, datasets,
                                                           raw, date)
    except GullError as err:
        if err.function is None:
            err.function = Operation.SNAPSHOT_CREATE
        if err.path is None:
            err.path = path
        raise_error(err, handler)

    snapshot = Snapshot(order, altitude_min, altitude_max, coefficients,
                        model = datasets[0].model, path = path,
                        date = (day, month, year))
    logger.debug('created snapshot of %s for %d/%d/%d: order %d, altitude '
                 '[%g, %g] km', snapshot.model, day, month, year, order,
                 altitude_min, altitude_max)
    return snapshot


def field(snapshot, latitude, longitude, altitude, workspace = None,
          handler = None):
    """ Magnetic field components [T], see Snapshot.field """
    return snapshot.field(latitude, longitude, altitude,
                          workspace = workspace, handler = handler)


def info(snapshot, handler = None):
    """ Order and altitude range [m], see Snapshot.info """
    return snapshot.info(handler = handler)


def destroy(snapshot):
    """ Release the memory of a snapshot. None or destroyed snapshots are ok """
    if snapshot is not None:
        snapshot.destroy()


def inclination_declination(east, north, up, degrees = True):
    r"""
    Compute the inclination and declination angles of a field vector

    The inclination angle is defined as the angle between the magnetic field
    vector and the horizontal plane, positive downward:

    .. math::

        I = \arctan \frac{-B_u}{\sqrt{B_e^2 + B_n^2}}

    And the declination angle is defined as the azimuth of the projection of
    the magnetic field vector onto the horizontal plane (starting from the
    northing direction, positive to the east and negative to the west).

    Parameters
    ----------
    east : float or array
        Easting component of the magnetic vector.
    north : float or array
        Northing component of the magnetic vector.
    up : float or array
        Upward component of the magnetic vector.
    degrees : bool (optional)
        If True, the angles are returned in degrees.
        If False, the angles are returned in radians.
        Default True.

    Returns
    -------
    inclination : float or array
        Inclination angle of the magnetic vector.
    declination : float or array
        Declination angle of the magnetic vector. Zero for a vertical
        vector.
    """
    horizontal_component = np.hypot(east, north)
    inclination = np.arctan2(-np.asarray(up), horizontal_component)
    declination = np.arctan2(east, north)

    if degrees:
        inclination = np.degrees(inclination)
        declination = np.degrees(declination)
    return inclination, declination
