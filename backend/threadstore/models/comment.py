"""Comment table with a self-referencing parent link."""

from sqlalchemy import Column, ForeignKey, String, Text

from .base import Base
from ..storage.entities import Comment


class CommentRecord(Base):
    """Row of the ``comment`` table. Top-level comments have no parent."""

    __tablename__ = "comment"

    # Primary key, generated by the store
    id = Column(String(255), primary_key=True)

    # Comment content
    text = Column(Text, nullable=False)

    # Author information
    author = Column(String(255), nullable=False)

    # Thread root, set for replies too
    post_id = Column(String(255), ForeignKey("post.id"), nullable=False, index=True)

    # Direct parent for replies
    parent_comment_id = Column(String(255), ForeignKey("comment.id"), nullable=True, index=True)

    def to_entity(self) -> Comment:
        return Comment(
            id=self.id,
            text=self.text,
            author=self.author,
            post_id=self.post_id,
            parent_comment_id=self.parent_comment_id,
        )

    def __repr__(self):
        return f"<CommentRecord(id={self.id}, post_id={self.post_id}, parent={self.parent_comment_id})>"
