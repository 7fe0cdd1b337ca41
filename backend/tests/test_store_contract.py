"""Content store contract, checked against every backend.

Covers:
1. Post creation, lookup and duplicate ids
2. Pagination clamp and the both-bounds trigger
3. Comment target resolution (post, comment, disabled, unknown)
4. Comment listing by post and by parent
"""

import pytest

from threadstore.storage.errors import (
    CommentingDisabledError,
    DuplicateIDError,
    InvalidPaginationError,
    ItemNotFoundError,
    NotFoundError,
)


def _make_posts(store, count):
    return [store.create_post(f"post-{i:03d}", f"text {i}", True, "alice") for i in range(count)]


# === Posts ===

def test_create_and_get_post(store):
    created = store.create_post("p1", "hello", True, "alice")
    assert created.id == "p1"
    assert created.comments == []

    fetched = store.get_post_by_id("p1")
    assert fetched.id == "p1"
    assert fetched.text == "hello"
    assert fetched.author == "alice"
    assert fetched.commentable is True


def test_get_missing_post_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.get_post_by_id("nope")


def test_duplicate_post_id_is_rejected(store):
    store.create_post("p1", "first", True, "alice")
    with pytest.raises(DuplicateIDError):
        store.create_post("p1", "second", False, "bob")

    # the original post is untouched
    post = store.get_post_by_id("p1")
    assert post.text == "first"
    assert post.commentable is True
    assert len(store.get_all_posts()) == 1


def test_get_all_posts_empty(store):
    assert store.get_all_posts() == []
    assert store.get_all_posts(limit=10, offset=0) == []


# === Pagination ===

@pytest.mark.parametrize("limit,offset,expected", [
    (2, 0, 2),
    (2, 4, 1),
    (10, 0, 5),
    (3, 5, 0),
    (3, 9, 0),
    (0, 0, 0),
])
def test_pagination_clamp(store, limit, offset, expected):
    _make_posts(store, 5)
    assert len(store.get_all_posts(limit=limit, offset=offset)) == expected


@pytest.mark.parametrize("limit,offset", [(None, None), (2, None), (None, 3)])
def test_pagination_needs_both_bounds(store, limit, offset):
    _make_posts(store, 5)
    assert len(store.get_all_posts(limit=limit, offset=offset)) == 5


def test_pages_are_ordered_and_disjoint(store):
    _make_posts(store, 7)
    pages = [store.get_all_posts(limit=3, offset=o) for o in (0, 3, 6)]
    ids = [p.id for page in pages for p in page]
    assert ids == sorted(ids)
    assert len(set(ids)) == 7


def test_negative_bounds_are_rejected(store):
    _make_posts(store, 2)
    with pytest.raises(InvalidPaginationError):
        store.get_all_posts(limit=-1, offset=0)
    with pytest.raises(InvalidPaginationError):
        store.get_all_comments(limit=1, offset=-1)


# === Comment creation ===

def test_top_level_comment(store):
    store.create_post("p1", "hello", True, "alice")
    comment = store.create_comment("first!", "p1", "bob")

    assert comment.post_id == "p1"
    assert comment.parent_comment_id is None
    assert comment.author == "bob"
    assert comment.id

    fetched = store.get_comment_by_id(comment.id)
    assert fetched.text == "first!"
    assert fetched.replies == []


def test_reply_inherits_thread_root(store):
    store.create_post("p1", "hello", True, "alice")
    top = store.create_comment("top", "p1", "bob")
    reply = store.create_comment("reply", top.id, "carol")
    deep = store.create_comment("deep", reply.id, "dave")

    assert reply.post_id == "p1"
    assert reply.parent_comment_id == top.id
    assert deep.post_id == "p1"
    assert deep.parent_comment_id == reply.id


def test_comment_ids_are_unique(store):
    store.create_post("p1", "hello", True, "alice")
    ids = {store.create_comment(f"c{i}", "p1", "bob").id for i in range(20)}
    assert len(ids) == 20


def test_disabled_commenting_persists_nothing(store):
    store.create_post("locked", "no comments please", False, "alice")

    with pytest.raises(CommentingDisabledError):
        store.create_comment("hi", "locked", "bob")

    assert store.get_comments_by_post_id("locked") == []
    assert store.get_all_comments() == []


def test_unknown_target_persists_nothing(store):
    store.create_post("p1", "hello", True, "alice")

    with pytest.raises(ItemNotFoundError):
        store.create_comment("hi", "does-not-exist", "bob")

    assert store.get_all_comments() == []


def test_get_missing_comment_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.get_comment_by_id("nope")


# === Comment listing ===

def test_comments_by_post_are_top_level_only(store):
    store.create_post("p1", "one", True, "alice")
    store.create_post("p2", "two", True, "alice")
    a = store.create_comment("a", "p1", "bob")
    b = store.create_comment("b", "p1", "bob")
    store.create_comment("a-reply", a.id, "carol")
    store.create_comment("other", "p2", "bob")

    top = store.get_comments_by_post_id("p1")
    assert {c.id for c in top} == {a.id, b.id}
    assert all(c.parent_comment_id is None for c in top)


def test_comments_by_parent(store):
    store.create_post("p1", "one", True, "alice")
    top = store.create_comment("top", "p1", "bob")
    r1 = store.create_comment("r1", top.id, "carol")
    r2 = store.create_comment("r2", top.id, "dave")
    store.create_comment("r1-reply", r1.id, "erin")

    replies = store.get_comments_by_parent_id(top.id)
    assert {c.id for c in replies} == {r1.id, r2.id}
    assert store.get_comments_by_parent_id(r2.id) == []
    assert store.get_comments_by_parent_id("unknown") == []


def test_all_comments_includes_replies(store):
    store.create_post("p1", "one", True, "alice")
    top = store.create_comment("top", "p1", "bob")
    store.create_comment("reply", top.id, "carol")

    assert len(store.get_all_comments()) == 2
    assert len(store.get_all_comments(limit=1, offset=0)) == 1
    assert len(store.get_all_comments(limit=1, offset=None)) == 2


def test_comment_listing_paginates(store):
    store.create_post("p1", "one", True, "alice")
    for i in range(5):
        store.create_comment(f"c{i}", "p1", "bob")

    assert len(store.get_comments_by_post_id("p1", limit=2, offset=0)) == 2
    assert len(store.get_comments_by_post_id("p1", limit=2, offset=4)) == 1
    assert store.get_comments_by_post_id("p1", limit=2, offset=5) == []


def test_returned_values_are_copies(store):
    store.create_post("p1", "one", True, "alice")
    top = store.create_comment("top", "p1", "bob")

    post = store.get_post_by_id("p1")
    post.comments.append(top)
    comment = store.get_comment_by_id(top.id)
    comment.replies.append(top)

    assert store.get_post_by_id("p1").comments == []
    assert store.get_comment_by_id(top.id).replies == []


def test_stats(store):
    store.create_post("p1", "one", True, "alice")
    store.create_comment("top", "p1", "bob")
    assert store.stats() == {"posts": 1, "comments": 1}
