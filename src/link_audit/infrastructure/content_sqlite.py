import sqlite3
import threading
from pathlib import Path

from src.link_audit.domain.entities import ContentDocument


class DocumentNotFoundError(LookupError):
    pass


class SQLiteContentRepository:
    """Blog content store backed by SQLite.

    One connection shared across threads; every statement runs under a lock.
    """

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._lock = threading.Lock()
        self.init_schema()

    def init_schema(self) -> None:
        with self._lock:
            cursor = self.conn.cursor()
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS blogs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    slug TEXT UNIQUE NOT NULL,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL DEFAULT '',
                    status TEXT NOT NULL DEFAULT 'draft',
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_blogs_status ON blogs(status)")
            self.conn.commit()

    def add_document(self, *, slug: str, title: str, content: str, status: str = "published") -> ContentDocument:
        with self._lock:
            cursor = self.conn.cursor()
            try:
                cursor.execute(
                    "INSERT INTO blogs (slug, title, content, status) VALUES (?, ?, ?, ?)",
                    (slug, title, content, status),
                )
                self.conn.commit()
            except sqlite3.Error:
                self.conn.rollback()
                raise
        return ContentDocument(id=int(cursor.lastrowid), title=title, body=content, slug=slug)

    def get_document(self, document_id: int | str) -> ContentDocument | None:
        with self._lock:
            cursor = self.conn.cursor()
            cursor.execute("SELECT id, slug, title, content FROM blogs WHERE id = ?", (int(document_id),))
            row = cursor.fetchone()
        if not row:
            return None
        return ContentDocument(id=int(row[0]), slug=str(row[1]), title=str(row[2]), body=str(row[3]))

    def list_published_documents(self) -> list[ContentDocument]:
        with self._lock:
            cursor = self.conn.cursor()
            cursor.execute("SELECT id, slug, title, content FROM blogs WHERE status = 'published' ORDER BY id")
            rows = cursor.fetchall()
        return [ContentDocument(id=int(row[0]), slug=str(row[1]), title=str(row[2]), body=str(row[3])) for row in rows]

    def update_document_body(self, document_id: int | str, new_body: str) -> None:
        with self._lock:
            cursor = self.conn.cursor()
            try:
                cursor.execute(
                    "UPDATE blogs SET content = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (new_body, int(document_id)),
                )
                if cursor.rowcount == 0:
                    raise DocumentNotFoundError(f"No blog with id {document_id}")
                self.conn.commit()
            except (sqlite3.Error, DocumentNotFoundError):
                self.conn.rollback()
                raise

    def close(self) -> None:
        with self._lock:
            self.conn.close()
