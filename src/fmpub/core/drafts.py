"""Draft publication policy"""

from fmpub.core.models import Document


def is_publishable(doc: Document, build_drafts: bool = False) -> bool:
    """True unless the document is a draft; build_drafts publishes everything."""
    return build_drafts or not doc.metadata.draft
