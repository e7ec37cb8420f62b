# recipewreck/app/infra/db/base.py
"""
Abstract interface for AI role persistence.
Lets the onboarding flow run against any document store, or a stub in tests.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from recipewreck.app.domain.models import AiRole, AiRoleCandidate


class AiRoleRepository(ABC):
    """
    Implementations:
    - SupabaseAiRoleRepository: ai_roles table in Supabase
    """

    @abstractmethod
    def save(self, candidate: AiRoleCandidate) -> tuple[str, datetime]:
        """
        Insert a new role built from the candidate's model fields and metadata.
        The candidate's temporary id is not written.

        Returns:
            (assigned_id, assigned_created_at)

        Raises:
            AiRoleRepositoryError: connectivity or record validation failure
        """
        pass

    @abstractmethod
    def list_roles(self) -> list[AiRole]:
        """All stored roles, newest first."""
        pass

    @abstractmethod
    def update(self, role_id: str, changes: dict[str, object]) -> AiRole:
        """
        Apply a partial update keyed by column name.

        Raises:
            AiRoleNotFoundError: no role with that id
            AiRoleRepositoryError: store failure
        """
        pass

    @abstractmethod
    def delete(self, role_id: str) -> None:
        """
        Raises:
            AiRoleNotFoundError: no role with that id
            AiRoleRepositoryError: store failure
        """
        pass

    @abstractmethod
    def ping(self) -> None:
        """Round-trip to the store; raises AiRoleRepositoryError when unreachable."""
        pass
