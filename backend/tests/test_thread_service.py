"""Tree assembly on top of both backends."""

import threading

import pytest

from threadstore.services.thread_service import ThreadService
from threadstore.storage.errors import (
    BackendUnavailableError,
    NotFoundError,
    OperationCancelledError,
)
from threadstore.storage.memory import MemoryStore


def _build_chain(service):
    """P -> C1 -> R1 -> R2"""
    service.create_post("P", "root", True, "alice")
    c1 = service.create_comment("c1", "P", "bob")
    r1 = service.create_comment("r1", c1.id, "carol")
    r2 = service.create_comment("r2", r1.id, "dave")
    return c1, r1, r2


def test_tree_assembly_depth(service):
    c1, r1, r2 = _build_chain(service)

    post = service.get_post("P")
    assert len(post.comments) == 1
    assert post.comments[0].id == c1.id
    assert post.comments[0].replies[0].id == r1.id
    assert post.comments[0].replies[0].replies[0].id == r2.id
    assert post.comments[0].replies[0].replies[0].replies == []


def test_replies_never_appear_at_top_level(service):
    _build_chain(service)
    post = service.get_post("P")
    assert [c.text for c in post.comments] == ["c1"]


def test_deep_thread_has_no_depth_limit(service):
    service.create_post("P", "root", True, "alice")
    item = "P"
    for i in range(200):
        item = service.create_comment(f"level {i}", item, "bob").id

    node = service.get_post("P").comments[0]
    depth = 0
    while node.replies:
        node = node.replies[0]
        depth += 1
    assert depth == 199
    assert node.id == item


def test_same_pagination_at_every_level(service):
    service.create_post("P", "root", True, "alice")
    tops = [service.create_comment(f"top {i}", "P", "bob") for i in range(3)]
    for top in tops:
        replies = [service.create_comment(f"reply {i}", top.id, "carol") for i in range(3)]
        for reply in replies:
            for i in range(3):
                service.create_comment(f"nested {i}", reply.id, "dave")

    post = service.get_post("P", limit=2, offset=0)
    assert len(post.comments) == 2
    for top in post.comments:
        assert len(top.replies) == 2
        for reply in top.replies:
            assert len(reply.replies) == 2

    tail = service.get_post("P", limit=2, offset=2)
    assert len(tail.comments) == 1
    assert len(tail.comments[0].replies) == 1


def test_get_posts_attaches_trees(service):
    service.create_post("A", "a", True, "alice")
    service.create_post("B", "b", False, "alice")
    top = service.create_comment("on a", "A", "bob")
    service.create_comment("reply", top.id, "carol")

    posts = {p.id: p for p in service.get_posts()}
    assert set(posts) == {"A", "B"}
    assert posts["A"].comments[0].replies[0].text == "reply"
    assert posts["B"].comments == []


def test_get_comment_attaches_replies(service):
    c1, r1, r2 = _build_chain(service)

    comment = service.get_comment(r1.id)
    assert comment.id == r1.id
    assert [r.id for r in comment.replies] == [r2.id]


def test_get_comments_attaches_replies_to_every_comment(service):
    c1, r1, r2 = _build_chain(service)

    comments = {c.id: c for c in service.get_comments()}
    assert set(comments) == {c1.id, r1.id, r2.id}
    assert comments[c1.id].replies[0].replies[0].id == r2.id
    assert comments[r2.id].replies == []


def test_missing_post_raises(service):
    with pytest.raises(NotFoundError):
        service.get_post("missing")


def test_reads_do_not_leak_trees_into_storage(service):
    _build_chain(service)
    service.get_post("P")
    assert service.store.get_post_by_id("P").comments == []


# === Failure and cancellation ===

class FlakyStore(MemoryStore):
    """Memory store whose reply lookups start failing after a few calls."""

    def __init__(self, fail_after):
        super().__init__()
        self.fail_after = fail_after
        self.calls = 0

    def get_comments_by_parent_id(self, parent_id, limit=None, offset=None):
        self.calls += 1
        if self.calls > self.fail_after:
            raise BackendUnavailableError("database went away")
        return super().get_comments_by_parent_id(parent_id, limit, offset)


def test_failure_mid_assembly_aborts_whole_read():
    service = ThreadService(FlakyStore(fail_after=1))
    _build_chain(service)

    with pytest.raises(BackendUnavailableError):
        service.get_post("P")


def test_cancelled_before_start():
    service = ThreadService(MemoryStore())
    _build_chain(service)
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(OperationCancelledError):
        service.get_post("P", cancel=cancel)


def test_cancelled_mid_assembly():
    cancel = threading.Event()

    class CancellingStore(MemoryStore):
        def get_comments_by_parent_id(self, parent_id, limit=None, offset=None):
            cancel.set()
            return super().get_comments_by_parent_id(parent_id, limit, offset)

    service = ThreadService(CancellingStore())
    _build_chain(service)

    with pytest.raises(OperationCancelledError):
        service.get_posts(cancel=cancel)


def test_unset_cancel_event_is_ignored(service):
    _build_chain(service)
    post = service.get_post("P", cancel=threading.Event())
    assert post.comments
