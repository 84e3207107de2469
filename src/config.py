"""
Configuration settings for the sphere scene tracer
"""

# Rendering settings
RENDER_SETTINGS = {
    'aspect_ratio': 16.0 / 9.0,
    'image_width': 400,
    'samples_per_pixel': 10,
    'max_depth': 50,
}

# Camera settings
CAMERA_SETTINGS = {
    'look_from': (13.0, 2.0, 3.0),
    'look_at': (0.0, 0.0, 0.0),
    'vup': (0.0, 1.0, 0.0),
    'vfov': 20.0,
    'aperture': 0.1,
    'focus_dist': 10.0,
}

# Scene generation settings
SCENE_SETTINGS = {
    'grid_start': -11,
    'grid_stop': 11,
    'grid_step': 3,         # coarser than one sphere per cell to keep the count down
    'max_small_spheres': 120,
    'small_radius': 0.2,
    'exclusion_point': (4.0, 0.2, 0.0),
    'exclusion_radius': 0.9,
    'diffuse_probability': 0.8,
    'metal_probability': 0.15,
    'glass_ir': 1.5,
    'populate_world': True,
}

# Render quality presets, applied on top of RENDER_SETTINGS
QUALITY_LEVELS = {
    'preview': {'image_width': 200, 'samples_per_pixel': 4, 'max_depth': 8},
    'balanced': {'image_width': 400, 'samples_per_pixel': 10, 'max_depth': 50},
    'final': {'image_width': 1200, 'samples_per_pixel': 10, 'max_depth': 50},
}


def merged(defaults: dict, overrides: dict = None) -> dict:
    """Return a copy of defaults with the keys from overrides applied."""
    settings = dict(defaults)
    if overrides:
        settings.update(overrides)
    return settings
