"""Persistence boundary for documents and suggestions.

Callers check ownership before invoking any of these methods.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from proofline.models.document import Document
from proofline.models.suggestion import Suggestion, SuggestionStatus


class SuggestionStore(ABC):
    @abstractmethod
    def create_document(self, owner_id: str, title: str = "Untitled document", content: str = "") -> Document:
        ...

    @abstractmethod
    def load_document(self, document_id: str) -> Document | None:
        ...

    @abstractmethod
    def list_documents(self, owner_id: str) -> list[Document]:
        """Owner's documents, most recently updated first."""

    @abstractmethod
    def save_content(self, document_id: str, content: str, readability_score: float | None = None) -> None:
        ...

    @abstractmethod
    def set_title(self, document_id: str, title: str) -> None:
        ...

    @abstractmethod
    def set_readability_score(self, document_id: str, score: float) -> None:
        ...

    @abstractmethod
    def delete_document(self, document_id: str) -> None:
        """Delete a document and, with it, all of its suggestions."""

    @abstractmethod
    def list_suggestions(self, document_id: str, status: SuggestionStatus | None = None) -> list[Suggestion]:
        ...

    @abstractmethod
    def get_suggestion(self, document_id: str, suggestion_id: str) -> Suggestion | None:
        ...

    @abstractmethod
    def replace_pending_suggestions(self, document_id: str, batch: list[Suggestion]) -> int:
        """Atomically delete every pending suggestion and insert ``batch``.

        Accepted and dismissed rows are left alone. Returns the number of
        pending rows retired.
        """

    @abstractmethod
    def set_suggestion_status(self, document_id: str, suggestion_id: str, status: SuggestionStatus) -> bool:
        """Move a pending suggestion to a terminal status.

        Returns True only when a transition happened; terminal rows and
        unknown ids are left untouched.
        """

    @abstractmethod
    def delete_suggestions(self, suggestion_ids: list[str]) -> int:
        ...
