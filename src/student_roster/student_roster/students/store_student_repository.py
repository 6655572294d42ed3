from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import STUDENTS_COLLECTION
from ..store.repository import RecordStore
from .model import Student, StudentForm
from .normalize import LEGACY_KEYS, student_from_document
from .repository import StudentRepository


class StoreStudentRepository(StudentRepository):
    def __init__(self, store: RecordStore, *, collection: str = STUDENTS_COLLECTION):
        self._store = store
        self._collection = collection

    def list_all(self) -> Sequence[Student]:
        return [student_from_document(d) for d in self._store.list_all(self._collection)]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        doc = self._store.get(self._collection, student_id)
        return student_from_document(doc) if doc else None

    def create(self, form: StudentForm) -> str:
        return self._store.create(self._collection, form.to_document())

    def update(self, student_id: str, form: StudentForm) -> None:
        fields = form.to_document()
        fields.update(dict.fromkeys(LEGACY_KEYS))
        self._store.update(self._collection, student_id, fields)

    def delete(self, student_id: str) -> None:
        self._store.delete(self._collection, student_id)
