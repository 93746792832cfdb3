"""Book model: title plus the chapters/verses document, stored as JSON text."""
from sqlalchemy import Column, Integer, String, Text

from reader.db.session import Base

# Text rather than JSON/JSONB so SQLite and PostgreSQL store it the same way;
# the document is parsed and validated on every read.


class Book(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
