"""Activity functions.

Each activity performs a single unit of work for one upload:
- read_upload: Read and size-check the uploaded file
- parse_kml: Parse KML content into an element tree
- convert_kml: Convert Placemarks to GeoJSON-style features
- count_elements: Tally recognised KML element tags
- compute_metrics: Line lengths, point coordinates, polygon area placeholder
"""
