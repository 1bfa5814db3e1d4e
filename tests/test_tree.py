# DecisionTree tests: initialization, split algorithm, growth

import pytest

from guesstree.config import INITIAL_ANSWER, NODE_MIN_CAPACITY
from guesstree.exceptions import PreconditionViolation
from guesstree.node import Answer, Kind, Question
from guesstree.pool import StringPool
from guesstree.tree import DecisionTree


def texts(tree):
    """Node contents by value, independent of handles."""
    result = []
    for _, node in tree:
        if isinstance(node, Question):
            result.append(("Q", tree.text(node.text), node.yes, node.no))
        else:
            result.append(("A", tree.text(node.text)))
    return result


def test_initialize_has_single_elephant():
    tree = DecisionTree.initialize()
    assert tree.count == 1
    root = tree.get(0)
    assert isinstance(root, Answer)
    assert root.kind is Kind.ANSWER
    assert tree.text(root.text) == INITIAL_ANSWER == "elephant"


def test_split_trunk_scenario():
    tree = DecisionTree.initialize()
    tree.split(0, "Does it have a trunk?", "dog")
    assert tree.count == 3
    root = tree.get(0)
    assert isinstance(root, Question)
    assert root.kind is Kind.QUESTION
    assert (root.yes, root.no) == (1, 2)
    assert texts(tree) == [
        ("Q", "Does it have a trunk?", 1, 2),
        ("A", "dog"),
        ("A", "elephant"),
    ]
    assert tree.text(tree.get(root.no).text) == "elephant"
    assert tree.text(tree.get(root.yes).text) == "dog"


def test_split_keeps_parent_references_valid():
    tree = DecisionTree.initialize()
    tree.split(0, "Does it have a trunk?", "dog")
    before = texts(tree)
    tree.split(1, "Does it meow?", "cat")

    after = texts(tree)
    assert len(after) == len(before) + 2
    # Untouched slots keep their content; node 0 still points at slot 1.
    assert after[0] == before[0]
    assert after[2] == before[2]
    assert after[1] == ("Q", "Does it meow?", 3, 4)
    assert after[3] == ("A", "cat")
    assert after[4] == ("A", "dog")


def test_split_rejects_question_node():
    tree = DecisionTree.initialize()
    tree.split(0, "Does it have a trunk?", "dog")
    fill = tree.pool.fill
    with pytest.raises(PreconditionViolation):
        tree.split(0, "Is it grey?", "mouse")
    assert tree.count == 3
    assert tree.pool.fill == fill


@pytest.mark.parametrize("question, animal", [("", "dog"), ("Does it bark?", ""), ("a\0b", "dog")])
def test_split_with_bad_text_changes_nothing(question, animal):
    tree = DecisionTree.initialize()
    with pytest.raises(PreconditionViolation):
        tree.split(0, question, animal)
    assert tree.count == 1
    assert tree.pool.fill == len("elephant") + 1
    assert isinstance(tree.get(0), Answer)


@pytest.mark.parametrize("index", [-1, 1, 100])
def test_get_out_of_range(index):
    tree = DecisionTree.initialize()
    with pytest.raises(PreconditionViolation):
        tree.get(index)


def test_node_table_grows_by_doubling():
    tree = DecisionTree.initialize()
    assert tree.capacity == NODE_MIN_CAPACITY
    leaf = 0
    for i in range(10):
        tree.split(leaf, f"Question {i}?", f"animal {i}")
        leaf = tree.get(leaf).no
    assert tree.count == 21
    assert tree.capacity == NODE_MIN_CAPACITY * 2
    assert tree.text(tree.get(leaf).text) == "elephant"


def test_append_validates_children_and_handles():
    tree = DecisionTree.initialize()
    handle = tree.pool.intern("Is it big?")
    with pytest.raises(PreconditionViolation):
        tree.append(Question(handle, 0, 5))
    with pytest.raises(PreconditionViolation):
        tree.append(Answer(StringPool().intern("stray")))
    with pytest.raises(PreconditionViolation):
        tree.append(("not", "a", "node"))
    assert tree.append(Question(handle, 0, 0)) == 1


def test_iteration_yields_index_order():
    tree = DecisionTree.initialize()
    tree.split(0, "Does it have a trunk?", "dog")
    assert [index for index, _ in tree] == [0, 1, 2]
    assert len(tree) == 3
