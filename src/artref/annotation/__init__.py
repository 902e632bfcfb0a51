# ABOUTME: Annotation package: anchoring candidates in a document and tracking their markers.
# ABOUTME: Exports documents, the anchor locator, markers, and the scan session.

from artref.annotation.anchors import Anchor, AnchorLocator, element_has_date_range
from artref.annotation.document import Document, SpanHandle, TextBlock
from artref.annotation.markers import Marker, MarkerState, TooltipPayload
from artref.annotation.session import AnnotationSession, ScanReport

__all__ = [
    "Anchor",
    "AnchorLocator",
    "AnnotationSession",
    "Document",
    "Marker",
    "MarkerState",
    "ScanReport",
    "SpanHandle",
    "TextBlock",
    "TooltipPayload",
    "element_has_date_range",
]
