"""Controllers that keep local snippet state in step with the remote collection."""

from .collection import CollectionController, CollectionState, Notice
from .forms import CreateFormController, EditFormController

__all__ = [
    "CollectionController",
    "CollectionState",
    "CreateFormController",
    "EditFormController",
    "Notice",
]
