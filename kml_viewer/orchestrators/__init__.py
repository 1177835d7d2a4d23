"""Upload-to-view orchestration.

Coordinates the end-to-end flow for one uploaded KML file:
1. Read upload → parse KML document
2. Convert to GeoJSON features; count elements; compute detail metrics
3. Assemble an immutable ViewModel and swap it into the viewer state
"""
