"""
Atmospheric stability classification and dispersion coefficients
Simplified Pasquill-Gifford scheme driven by wind speed and daylight
"""
import numpy as np
from data_models import StabilityClass

# Dispersion coefficients (a, b) per stability class for
# sigma = a * x * (1 + b * x)^-0.5, x = downwind distance (m).
# Rural terrain values; urban spread would be higher.
STABILITY_PARAMS = {
    StabilityClass.A: {'sigma_y': (0.22, 0.0001), 'sigma_z': (0.20, 0.0)},     # Very unstable
    StabilityClass.B: {'sigma_y': (0.16, 0.0001), 'sigma_z': (0.12, 0.0)},     # Moderately unstable
    StabilityClass.C: {'sigma_y': (0.11, 0.0001), 'sigma_z': (0.08, 0.0002)},  # Slightly unstable
    StabilityClass.D: {'sigma_y': (0.08, 0.0001), 'sigma_z': (0.06, 0.0015)},  # Neutral
    StabilityClass.E: {'sigma_y': (0.06, 0.0001), 'sigma_z': (0.03, 0.0003)},  # Slightly stable
    StabilityClass.F: {'sigma_y': (0.04, 0.0001), 'sigma_z': (0.016, 0.0003)}, # Stable
}


def classify_stability(wind_speed_kmh, is_daytime):
    """
    Stability class from wind speed (km/h) and day/night

    Day: <2 A, <5 B, <6 C, else D. Night: <3 F, <5 E, else D.
    """
    if is_daytime:
        if wind_speed_kmh < 2:
            return StabilityClass.A
        if wind_speed_kmh < 5:
            return StabilityClass.B
        if wind_speed_kmh < 6:
            return StabilityClass.C
        return StabilityClass.D

    if wind_speed_kmh < 3:
        return StabilityClass.F
    if wind_speed_kmh < 5:
        return StabilityClass.E
    return StabilityClass.D


def is_daytime_hour(hour):
    return 6 <= hour < 18


def _sigma(x, a, b):
    return a * x * (1.0 + b * x) ** -0.5


def dispersion_coefficients(stability, distance_m):
    """
    Horizontal and vertical plume spread at a downwind distance

    Parameters:
    -----------
    stability : str
        Stability class (A-F); unknown classes use neutral (D)
    distance_m : float or ndarray
        Downwind distance in meters, floored at 1 m

    Returns:
    --------
    sigma_y, sigma_z : float or ndarray
        Dispersion parameters in meters
    """
    if stability not in STABILITY_PARAMS:
        stability = StabilityClass.D

    params = STABILITY_PARAMS[stability]
    x = np.maximum(distance_m, 1.0)

    sigma_y = _sigma(x, *params['sigma_y'])
    sigma_z = _sigma(x, *params['sigma_z'])

    if np.ndim(sigma_y) == 0:
        return float(sigma_y), float(sigma_z)
    return sigma_y, sigma_z
