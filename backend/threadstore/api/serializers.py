"""JSON encoding of post and comment trees.

Reply chains have no depth limit, so trees are written out with an explicit
stack instead of nested pydantic validation or ``json.dumps``, both of which
recurse once per level. The produced documents match ``PostResponse`` and
``CommentResponse``.
"""

import json
from typing import Iterable, Iterator

from fastapi.responses import Response

from ..storage.entities import Comment, Post


class TreeResponse(Response):
    """Response carrying an already encoded JSON tree."""

    media_type = "application/json"


def _object_head(fields: dict, children_key: str) -> str:
    """Encode ``fields`` as an unterminated object ending in ``"<children_key>": ``."""
    head = json.dumps(fields)
    return f'{head[:-1]}, "{children_key}": '


def _comment_head(comment: Comment) -> str:
    return _object_head({
        "id": comment.id,
        "text": comment.text,
        "author": comment.author,
        "post_id": comment.post_id,
        "parent_comment_id": comment.parent_comment_id,
    }, "replies")


def _post_head(post: Post) -> str:
    return _object_head({
        "id": post.id,
        "text": post.text,
        "author": post.author,
        "commentable": post.commentable,
    }, "comments")


def iter_comment_array(comments: Iterable[Comment]) -> Iterator[str]:
    """Yield the JSON array of ``comments``, replies nested, chunk by chunk."""
    yield "["
    levels = [iter(comments)]
    first = [True]
    while levels:
        comment = next(levels[-1], None)
        if comment is None:
            levels.pop()
            first.pop()
            yield "]"
            if levels:
                # closes the comment whose replies just ended
                yield "}"
            continue
        if not first[-1]:
            yield ", "
        first[-1] = False
        yield _comment_head(comment)
        yield "["
        levels.append(iter(comment.replies))
        first.append(True)


def encode_comment(comment: Comment) -> str:
    return _comment_head(comment) + "".join(iter_comment_array(comment.replies)) + "}"


def encode_comments(comments: Iterable[Comment]) -> str:
    return "".join(iter_comment_array(comments))


def encode_post(post: Post) -> str:
    return _post_head(post) + "".join(iter_comment_array(post.comments)) + "}"


def encode_posts(posts: Iterable[Post]) -> str:
    return "[" + ", ".join(encode_post(post) for post in posts) + "]"
