"""Post and comment entities shared by every backend."""

from dataclasses import dataclass, field, replace
from typing import List, Optional


@dataclass
class Comment:
    """A comment on a post, or a reply to another comment.

    ``post_id`` always names the thread root, even for deep replies.
    ``replies`` is filled in on read by the thread service and is never stored.
    """
    id: str
    text: str
    author: str
    post_id: str
    parent_comment_id: Optional[str] = None
    replies: List["Comment"] = field(default_factory=list)

    @property
    def is_reply(self) -> bool:
        return self.parent_comment_id is not None

    def detached(self) -> "Comment":
        """Copy without any attached replies."""
        return replace(self, replies=[])


@dataclass
class Post:
    """Root content item that may carry a comment thread."""
    id: str
    text: str
    author: str
    commentable: bool
    comments: List[Comment] = field(default_factory=list)

    def detached(self) -> "Post":
        """Copy without any attached comments."""
        return replace(self, comments=[])
