"""GeoProfile - Draw segments on a world map and inspect their terrain profiles.

Modules:
    core: Foundation classes (distance math, coordinate formatting, elevation
        synthesis, AI terrain description, place search)
    model: Data structures (Coordinate, ElevationPoint, ProfileLine, ProfileCollection)
    ui: Streamlit interface components (state machine, controller, renderers, sidebar)

Example:
    from geoprofile.core import ElevationService
    from geoprofile.model import Coordinate, ProfileCollection
    from geoprofile.ui import ProfileController
"""
