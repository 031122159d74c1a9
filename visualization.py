"""
Heatmap data and rendered maps of simulation results
"""
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib import cm
import io
import base64

# PM2.5 value mapped to full heatmap intensity
HEATMAP_MAX_PM25 = 500.0


def generate_heatmap_points(field):
    """
    Heatmap points for a field

    Returns:
    --------
    points : list of [lat, lng, intensity]
        Intensity is pm25 / 500 clipped to 1
    """
    LAT, LNG = field.mesh()
    intensity = np.minimum(field.pm25 / HEATMAP_MAX_PM25, 1.0)
    return np.column_stack([LAT.ravel(), LNG.ravel(), intensity.ravel()]).tolist()


def generate_comparison_data(result):
    """Before/after heatmap points for a SimulationResult"""
    if result is None:
        return None
    return {
        'before': generate_heatmap_points(result.baseline),
        'after': generate_heatmap_points(result.projected)
    }


def render_field_map(result, which='projected', show_zones=True):
    """
    Render a field of a simulation result as a base64 encoded PNG

    Parameters:
    -----------
    result : SimulationResult
        Completed simulation
    which : str
        'baseline', 'projected' or 'reduction'
    show_zones : bool
        Outline impact zones and mark trees

    Returns:
    --------
    img_base64 : str
        Base64 encoded PNG image
    """
    if which not in ('baseline', 'projected', 'reduction'):
        raise ValueError(f"Unknown field: {which}")

    if which == 'reduction':
        field = result.projected
        values = field.reduction if field.reduction is not None else np.zeros(field.shape)
        label, cmap, vmin, vmax = 'PM2.5 reduction (%)', cm.viridis, 0, max(float(values.max()), 1e-9)
    else:
        field = getattr(result, which)
        values = field.pm25
        label, cmap, vmin, vmax = 'PM2.5 (µg/m³)', cm.inferno, 0, HEATMAP_MAX_PM25

    fig, ax = plt.subplots(figsize=(8, 8))

    extent = (field.lngs.min(), field.lngs.max(), field.lats.min(), field.lats.max())
    im = ax.imshow(values, origin='lower', extent=extent, aspect='auto',
                   alpha=0.8, vmin=vmin, vmax=vmax, cmap=cmap)

    avg = result.summary[which]['avg_pm25'] if which != 'reduction' else \
        result.summary['reduction']['percentage']
    unit = '%' if which == 'reduction' else ' µg/m³'
    ax.set_title(f"{result.city_id.title()} {which} | {avg}{unit}", fontsize=14)
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")

    if show_zones:
        for zone in result.impact_zones:
            lats = [p[0] for p in zone.polygon] + [zone.polygon[0][0]]
            lngs = [p[1] for p in zone.polygon] + [zone.polygon[0][1]]
            ax.plot(lngs, lats, color='cyan', linewidth=0.8, alpha=0.8)
            ax.plot(zone.lng, zone.lat, 'go', markersize=5, markeredgecolor='k')

    plt.colorbar(im, ax=ax, label=label)

    # Save to buffer
    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=100, bbox_inches='tight')
    plt.close(fig)
    buf.seek(0)

    return base64.b64encode(buf.read()).decode('utf-8')
