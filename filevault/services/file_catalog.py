"""File catalog: metadata rows linking users to their stored files."""

from sqlalchemy.orm import Session

from filevault.models.stored_file import StoredFile


class FileCatalog:
    """Service for owner-scoped catalog queries.

    Every read filters on ``owner_id`` in the query itself, so an id that
    belongs to someone else looks exactly like an id that does not exist.
    """

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        owner_id: int,
        storage_name: str,
        original_name: str,
        content_type: str,
        size: int,
        location: str,
    ) -> StoredFile:
        """Insert a catalog entry for bytes that have already been written."""
        entry = StoredFile(
            owner_id=owner_id,
            storage_name=storage_name,
            original_name=original_name,
            content_type=content_type,
            size=size,
            location=location,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def list_for_owner(self, owner_id: int) -> list[StoredFile]:
        """All entries for an owner, most recent upload first."""
        return (
            self.db.query(StoredFile)
            .filter(StoredFile.owner_id == owner_id)
            .order_by(StoredFile.uploaded_at.desc(), StoredFile.id.desc())
            .all()
        )

    def find_for_owner(self, owner_id: int, file_id: int) -> StoredFile | None:
        return (
            self.db.query(StoredFile)
            .filter(StoredFile.id == file_id, StoredFile.owner_id == owner_id)
            .first()
        )

    def remove(self, entry: StoredFile) -> bool:
        """Delete an entry's row. Returns False if it was already gone."""
        deleted = (
            self.db.query(StoredFile)
            .filter(StoredFile.id == entry.id, StoredFile.owner_id == entry.owner_id)
            .delete()
        )
        self.db.commit()
        return deleted > 0
