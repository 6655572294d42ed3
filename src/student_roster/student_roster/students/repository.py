from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, StudentForm


class StudentRepository(Protocol):
    """Repository interface for the roster.

    Note: the service layer depends on this interface, not on a concrete store.
    """

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def create(self, form: StudentForm) -> str:
        raise NotImplementedError

    def update(self, student_id: str, form: StudentForm) -> None:
        raise NotImplementedError

    def delete(self, student_id: str) -> None:
        raise NotImplementedError
