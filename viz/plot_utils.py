# viz/plot_utils.py
"""
Utility plotting functions for the garden project.

Provides:
- growth curves (progress vs. real hours) of one plant under each weather category
- stage threshold markers

Note: uses matplotlib; saves to `out_path` or shows the figure interactively.
"""

import os

import matplotlib.pyplot as plt
import numpy as np

from garden.growth import MAX_PROGRESS, STAGE_THRESHOLDS, growth_curve, stage_name
from garden.weather import WEATHER_CATEGORIES


def plot_growth_curves(plant_type, hours=None, out_path=None, total_hours=None):
    """
    Plot percent complete against real elapsed hours for every weather category.

    hours: sequence of elapsed hours (default: 0 .. 1.5x growth time)
    """
    total = float(total_hours or plant_type.growth_time_hours)
    if hours is None:
        hours = np.linspace(0.0, total * 1.5, 200)
    hours = np.asarray(hours, dtype=float)

    fig, ax = plt.subplots(figsize=(10, 6))
    for category in WEATHER_CATEGORIES:
        progress = growth_curve(plant_type, hours, category, total_hours=total)
        bonus = plant_type.weather_bonus.get(category)
        ax.plot(hours, progress, label=f'{category} (x{bonus})', linewidth=2)

    for threshold, stage in STAGE_THRESHOLDS:
        ax.axhline(threshold, color='grey', linestyle=':', linewidth=1)
        ax.text(hours[-1], threshold, f' {stage_name(stage)}', va='bottom', ha='right', fontsize=8)

    ax.set_xlabel('Real time since planting (hours)')
    ax.set_ylabel('Progress (%)')
    ax.set_ylim(0, MAX_PROGRESS + 5)
    ax.set_title(f'{plant_type.name} growth by weather')
    ax.legend(loc='lower right')

    if out_path:
        os.makedirs(os.path.dirname(os.path.abspath(out_path)), exist_ok=True)
        fig.savefig(out_path, dpi=150)
        plt.close(fig)
        print(f'[viz] saved growth curves to {out_path}')
    else:
        plt.show()
    return out_path
