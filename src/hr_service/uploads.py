from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import UploadFile


class UploadMetadataStore:
    def __init__(self, db: Session):
        self.db = db

    def save(self, original_filename: str, stored_filename: str) -> UploadFile:
        record = UploadFile(original_filename=original_filename, stored_filename=stored_filename)
        self.db.add(record)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(record)
        return record
