"""Game-engine core: windows and activities, background music tracks, cameras and 3D transforms."""

__version__ = "0.1.0"