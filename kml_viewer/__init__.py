"""KML Viewer metrics.

Turns an uploaded KML file into the data a single-page map viewer needs:
a GeoJSON-shaped feature collection for the map, an element count table
for the summary panel, and per-feature detail records (line lengths,
point coordinates, polygon area placeholder) for the details panel.
"""

__version__ = "0.1.0"
