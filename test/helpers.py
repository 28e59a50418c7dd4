"""
Helpers for the tests: writing .COF model files and reference field values
computed independently of the snapshot recursion.
"""
import numpy as np

# Squared WGS84 semi-axes [km^2] and reference radius [km]
A2 = 40680631.59
B2 = 40408299.98
RE = 6371.2

# Degree 1 coefficients, IGRF-like magnitudes [nT]
G10, G11, H11 = -29442., -1501., 4797.


def cof_header(model, epoch, nmax1, nmax2, year_min, year_max,
               altitude_min=-1., altitude_max=600.):
    """ Data set header line of a .COF file, 80 columns """
    line = '   {:<9s}{:8.2f}{:3d}{:3d}{:3d}{:8.2f}{:8.2f}{:7.1f}{:7.1f}'.format(
        model, epoch, nmax1, nmax2, 0, year_min, year_max, altitude_min,
        altitude_max)
    return line.ljust(80) + '\n'


def cof_line(i, j, g1, h1, g2=0., h2=0.):
    """ Coefficient line of a .COF file, 80 columns """
    line = '{:2d}{:3d}{:11.2f}{:11.2f}{:11.2f}{:11.2f}'.format(
        i, j, g1, h1, g2, h2)
    return line.ljust(80) + '\n'


def write_cof(path, lines):
    with open(path, 'w') as f:
        f.writelines(lines)
    return str(path)


def sv_model(epoch=2015., year_min=2015., year_max=2020.):
    """ Degree 1 data set with secular variation """
    return [cof_header('WMM2015', epoch, 1, 1, year_min, year_max),
            cof_line(1, 0, G10, 0., 10.7, 0.),
            cof_line(1, 1, G11, H11, 17.9, -26.8)]


def two_epoch_model():
    """ Two degree 1 data sets, the second one with secular variation """
    return [cof_header('DGRF2010', 2010., 1, 0, 2010., 2015.),
            cof_line(1, 0, -29496.57, 0.),
            cof_line(1, 1, -1586.42, 4944.26),
            cof_header('IGRF2015', 2015., 1, 1, 2015., 2020., 0., 500.),
            cof_line(1, 0, G10, 0., 10.3, 0.),
            cof_line(1, 1, G11, H11, 18.1, -26.6)]


def get_legendre(theta, nmax):
    """
    Schmidt semi-normalized associated Legendre functions and dP/dtheta,
    for a scalar colatitude in degrees, as dictionaries keyed by (n, m)
    """
    theta_rad = np.radians(theta)
    sinth = np.sin(theta_rad)
    costh = np.cos(theta_rad)

    P, dP, S = {}, {}, {}
    for n in range(nmax + 1):
        for m in range(nmax + 1):
            P[n, m] = 0.
            dP[n, m] = 0.
    P[0, 0] = 1.
    S[0, 0] = 1.

    for n in range(1, nmax + 1):
        for m in range(0, n + 1):
            if n == m:
                P[n, n] = sinth * P[n - 1, m - 1]
                dP[n, n] = sinth * dP[n - 1, m - 1] + costh * P[n - 1, n - 1]
            elif n == 1:
                P[n, m] = costh * P[n - 1, m]
                dP[n, m] = costh * dP[n - 1, m] - sinth * P[n - 1, m]
            else:
                Knm = ((n - 1)**2 - m**2) / ((2*n - 1)*(2*n - 3))
                P[n, m] = costh * P[n - 1, m] - Knm*P[n - 2, m]
                dP[n, m] = costh * dP[n - 1, m] - sinth * P[n - 1, m] \
                           - Knm * dP[n - 2, m]

            if m == 0:
                S[n, 0] = S[n - 1, 0] * (2.*n - 1)/n
            else:
                S[n, m] = S[n, m - 1] * np.sqrt((n - m + 1)*(int(m == 1) + 1.)/(n + m))

    for key in S:
        P[key] *= S[key]
        dP[key] *= S[key]
    return P, dP


def reference_field(coefficients, order, lat, lon, height):
    """
    Field [T] in geodetic ENU frame, by direct summation of the spherical
    harmonic expansion. coefficients are (g, h) pairs ordered by degree
    then order. height is in km.
    """
    a, b = np.sqrt(A2), np.sqrt(B2)
    gdlat = np.radians(lat)
    sin_alpha_2 = np.sin(gdlat)**2
    cos_alpha_2 = np.cos(gdlat)**2

    # geodetic to geocentric
    tmp = height * np.sqrt(a**2 * cos_alpha_2 + b**2 * sin_alpha_2)
    beta = np.arctan((tmp + b**2)/(tmp + a**2) * np.tan(gdlat))
    theta = 90. - np.degrees(beta)
    r = np.sqrt(height**2 + 2 * tmp + a**2 * (1 - (1 - (b/a)**4) * sin_alpha_2)
                / (1 - (1 - (b/a)**2) * sin_alpha_2))

    P, dP = get_legendre(theta, order)
    phi = np.radians(lon)
    sinth = np.sin(np.radians(theta))

    Br, Btheta, Bphi = 0., 0., 0.
    k = 0
    for n in range(1, order + 1):
        for m in range(n + 1):
            g, h = coefficients[2 * k], coefficients[2 * k + 1]
            k += 1
            rr = (RE / r) ** (n + 2)
            cs = g * np.cos(m * phi) + h * np.sin(m * phi)
            Br += rr * (n + 1) * P[n, m] * cs
            Btheta -= rr * dP[n, m] * cs
            Bphi -= rr * m * (-g * np.sin(m * phi) + h * np.cos(m * phi)) \
                    * P[n, m] / sinth

    # rotate to geodetic
    delta = gdlat - beta
    north = -Btheta * np.cos(delta) - Br * np.sin(delta)
    up = Br * np.cos(delta) - Btheta * np.sin(delta)
    return Bphi * 1e-9, north * 1e-9, up * 1e-9
