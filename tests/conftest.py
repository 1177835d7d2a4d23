"""Shared pytest fixtures for the KML Viewer test suite."""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
EDGE_CASES_DIR = DATA_DIR / "edge_cases"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def edge_cases_dir() -> Path:
    """Return the path to the edge-cases test data directory."""
    return EDGE_CASES_DIR


# ---------------------------------------------------------------------------
# Sample KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def single_linestring_kml(data_dir: Path) -> Path:
    """One Placemark with a three-point LineString: (0,0) -> (1,0) -> (1,1)."""
    return data_dir / "01_single_linestring.kml"


@pytest.fixture()
def mixed_features_kml(data_dir: Path) -> Path:
    """Eight Placemarks in nested Folders covering every geometry kind."""
    return data_dir / "02_mixed_features.kml"


@pytest.fixture()
def gx_track_kml(data_dir: Path) -> Path:
    """A gx:Track running north along the prime meridian."""
    return data_dir / "03_gx_track.kml"


# ---------------------------------------------------------------------------
# Edge-case KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def not_xml_kml(edge_cases_dir: Path) -> Path:
    """Path to a file that is not valid XML."""
    return edge_cases_dir / "11_malformed_not_xml.kml"


@pytest.fixture()
def unclosed_tags_kml(edge_cases_dir: Path) -> Path:
    """Path to XML with an unclosed element."""
    return edge_cases_dir / "12_malformed_unclosed_tags.kml"


@pytest.fixture()
def empty_kml(edge_cases_dir: Path) -> Path:
    """Path to a valid KML with no Placemarks."""
    return edge_cases_dir / "13_empty_no_features.kml"


@pytest.fixture()
def not_kml_root(edge_cases_dir: Path) -> Path:
    """Path to well-formed XML whose root is <gpx>."""
    return edge_cases_dir / "14_not_kml_root.kml"


@pytest.fixture()
def prefixed_tags_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML that uses an explicit ``kml:`` prefix on every tag."""
    return edge_cases_dir / "15_prefixed_tags.kml"


@pytest.fixture()
def degenerate_lines_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML with 1-vertex, 0-vertex and out-of-range LineStrings."""
    return edge_cases_dir / "16_degenerate_lines.kml"
