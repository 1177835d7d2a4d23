"""Viewer session state.

``ViewerState`` is an immutable snapshot of what the single-page viewer
shows: the current ViewModel (``None`` before the first upload) and
which of the two panels is open.  Every transition returns a new state.

Panel rules:
- Summary and Details are mutually exclusive; opening one closes the other.
- Toggling an open panel closes it.
- Both toggles are inert until a file has been uploaded.
- A new upload replaces the ViewModel wholesale and keeps the panel flags.

``ViewerSession`` is a thin mutable holder for callers that want a
one-shot ``load_file()`` doing read → parse → compute → swap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from kml_viewer.activities.read_upload import read_kml_upload
from kml_viewer.core.config import ViewerConfig
from kml_viewer.models.view_model import ViewModel
from kml_viewer.orchestrators.view_pipeline import process_upload

logger = logging.getLogger("kml_viewer.orchestrators.session")


@dataclass(frozen=True, slots=True)
class ViewerState:
    """Immutable viewer state.

    Attributes:
        view_model: Data derived from the latest upload, or ``None``.
        show_summary: Whether the summary panel is open.
        show_details: Whether the details panel is open.
    """

    view_model: ViewModel | None = None
    show_summary: bool = False
    show_details: bool = False

    @property
    def has_upload(self) -> bool:
        """Whether a file has been uploaded (enables the panel toggles)."""
        return self.view_model is not None

    def upload(self, view_model: ViewModel) -> ViewerState:
        """Replace the current ViewModel with one from a new upload."""
        return replace(self, view_model=view_model)

    def toggle_summary(self) -> ViewerState:
        if not self.has_upload:
            return self
        return replace(self, show_summary=not self.show_summary, show_details=False)

    def toggle_details(self) -> ViewerState:
        if not self.has_upload:
            return self
        return replace(self, show_details=not self.show_details, show_summary=False)

    def summary_rows(self) -> list[tuple[str, int]]:
        """Summary table rows when the panel is open, else empty."""
        if not (self.show_summary and self.view_model is not None):
            return []
        return self.view_model.summary_rows()

    def detail_rows(self) -> list[tuple[str, str, str]]:
        """Details table rows when the panel is open, else empty."""
        if not (self.show_details and self.view_model is not None):
            return []
        return self.view_model.detail_rows()


class ViewerSession:
    """Holds the current ``ViewerState`` across uploads and toggles."""

    def __init__(self, config: ViewerConfig | None = None) -> None:
        self.config = config or ViewerConfig()
        self.state = ViewerState()

    def load_file(self, path: Path | str) -> ViewModel:
        """Read, parse and compute an uploaded file, then swap it into the state.

        The previous state is kept if any step fails.

        Raises:
            UploadError: If the file is rejected by the upload limits.
            KmlParseError: If the content is not a parseable KML document.
        """
        path = Path(path)
        content = read_kml_upload(path, self.config)
        view_model = process_upload(content, source_filename=path.name)
        self.state = self.state.upload(view_model)
        return view_model

    def load_content(self, content: bytes | str, *, source_filename: str = "") -> ViewModel:
        """Like ``load_file`` for content already in memory."""
        view_model = process_upload(content, source_filename=source_filename)
        self.state = self.state.upload(view_model)
        return view_model

    def toggle_summary(self) -> ViewerState:
        self.state = self.state.toggle_summary()
        logger.debug("Summary panel %s", "shown" if self.state.show_summary else "hidden")
        return self.state

    def toggle_details(self) -> ViewerState:
        self.state = self.state.toggle_details()
        logger.debug("Details panel %s", "shown" if self.state.show_details else "hidden")
        return self.state
