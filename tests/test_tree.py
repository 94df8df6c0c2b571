from i18n_helper.store.tree import Branch, Leaf, build_tree, walk


def test_build_tree_shapes():
    tree = build_tree({"a": {"b": "x"}, "n": 3, "list": ["p", "q"], "none": None})
    assert isinstance(tree, Branch)
    assert tree.get("n") == Leaf(3)
    assert tree.get("none") == Leaf(None)
    assert isinstance(tree.get("list"), Branch)


def test_walk_to_leaf():
    tree = build_tree({"a": {"b": "x"}})
    assert walk(tree, ["a", "b"]) == "x"


def test_walk_into_array_by_index():
    tree = build_tree({"items": ["zero", "one"]})
    assert walk(tree, ["items", "1"]) == "one"
    assert walk(tree, ["items", "2"]) is None


def test_walk_ending_on_branch_is_no_match():
    tree = build_tree({"a": {"b": "x"}})
    assert walk(tree, ["a"]) is None


def test_walk_partial_path_is_no_match():
    tree = build_tree({"a": {"b": "x"}})
    assert walk(tree, ["a", "c"]) is None
    assert walk(tree, ["a", "b", "c"]) is None
    assert walk(None, ["a"]) is None


def test_scalar_root():
    assert walk(build_tree("x"), []) == "x"
    assert walk(build_tree("x"), ["a"]) is None


def test_trees_compare_by_value():
    assert build_tree({"a": [1, {"b": True}]}) == build_tree({"a": [1, {"b": True}]})


def test_build_tree_beyond_recursion_limit():
    data = "bottom"
    for _ in range(5000):
        data = {"a": data}
    tree = build_tree(data)
    assert walk(tree, ["a"] * 5000) == "bottom"
    assert walk(tree, ["a"] * 4999) is None


def test_build_tree_keeps_sibling_order_around_nested_values():
    tree = build_tree({"x": 1, "n": {"m": [2, {"k": 3}]}, "y": 4})
    assert list(tree.children) == ["x", "n", "y"]
    assert walk(tree, ["n", "m", "1", "k"]) == 3
    assert walk(tree, ["y"]) == 4
