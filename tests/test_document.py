# Document interface tests: load/init, resolve, record, save, walk

import pytest

from guesstree import document
from guesstree.document import (
    load,
    load_or_init,
    record_new_distinction,
    resolve,
    save,
    text_of,
    walk,
)
from guesstree.exceptions import FormatError, PreconditionViolation, StorageError
from guesstree.node import Answer, Question


def test_load_or_init_without_file(db_path):
    doc = load_or_init(db_path)
    assert doc.count == 1
    root = resolve(doc, 0)
    assert isinstance(root, Answer)
    assert text_of(doc, root.text) == "elephant"
    assert not db_path.exists()


def test_record_and_resolve(doc):
    record_new_distinction(doc, 0, "Does it have a trunk?", "dog")
    root = resolve(doc, 0)
    assert isinstance(root, Question)
    assert text_of(doc, root.text) == "Does it have a trunk?"
    assert text_of(doc, resolve(doc, root.yes).text) == "dog"
    assert text_of(doc, resolve(doc, root.no).text) == "elephant"


def test_save_then_load(doc, db_path):
    record_new_distinction(doc, 0, "Does it have a trunk?", "dog")
    record_new_distinction(doc, 2, "Is it grey?", "giraffe")
    save(doc, db_path)

    loaded = load_or_init(db_path)
    assert loaded.count == 5
    assert [(d, b, text_of(loaded, n.text)) for d, b, _, n in walk(loaded)] == [
        (0, None, "Does it have a trunk?"),
        (1, "yes", "dog"),
        (1, "no", "Is it grey?"),
        (2, "yes", "giraffe"),
        (2, "no", "elephant"),
    ]


def test_save_overwrites(doc, db_path):
    db_path.write_bytes(b"old contents that are much longer than the new document")
    save(doc, db_path)
    assert load(db_path).count == 1


def test_corrupt_file_is_not_replaced(db_path):
    db_path.write_bytes(b"\x01\x00\x00\x00garbage")
    with pytest.raises(FormatError):
        load_or_init(db_path)
    assert db_path.read_bytes() == b"\x01\x00\x00\x00garbage"


def test_load_requires_existing_file(db_path):
    with pytest.raises(StorageError):
        load(db_path)


def test_handles_are_bound_to_their_document(doc):
    other = document.initialize()
    with pytest.raises(PreconditionViolation):
        text_of(doc, resolve(other, 0).text)


def test_walk_visits_every_reachable_node(doc):
    record_new_distinction(doc, 0, "Does it have a trunk?", "dog")
    visited = [(depth, branch, index) for depth, branch, index, _ in walk(doc)]
    assert visited == [(0, None, 0), (1, "yes", 1), (1, "no", 2)]


def test_text_of_reads_document_pool(doc):
    handle = doc.pool.intern("heron")
    assert doc.pool is doc.tree.pool
    assert text_of(doc, handle) == "heron"
