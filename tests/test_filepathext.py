import os

from taskrunner.filepathext import smart_join, try_abs_to_rel


def test_smart_join_keeps_absolute_second_path():
    absolute = os.path.abspath("somewhere")
    assert smart_join("base", absolute) == absolute


def test_smart_join_joins_relative_paths():
    assert smart_join("base", "child") == os.path.join("base", "child")


def test_smart_join_ignores_empty_second_path():
    assert smart_join("base", "") == "base"


def test_smart_join_cleans_result():
    assert smart_join(os.path.join("a", ".", "c"), os.path.join("..", "b")) == os.path.join("a", "b")


def test_smart_join_both_empty():
    assert smart_join("", "") == ""


def test_try_abs_to_rel_makes_relative():
    target = os.path.join(os.getcwd(), "sub", "file.txt")
    assert try_abs_to_rel(target) == os.path.join("sub", "file.txt")


def test_try_abs_to_rel_leaves_relative_path_alone():
    assert try_abs_to_rel(os.path.join("sub", "file.txt")) == os.path.join("sub", "file.txt")