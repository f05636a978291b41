"""Tests for the live drag reorder functions."""

from __future__ import annotations

from channel_tabs.reorder import reorder, transfer


class TestReorder:
    def test_moves_forward(self):
        assert reorder(["a", "b", "c", "d"], 0, 2) == (["b", "c", "a", "d"], 2)

    def test_moves_backward(self):
        assert reorder(["a", "b", "c", "d"], 3, 1) == (["a", "d", "b", "c"], 1)

    def test_same_index_is_noop(self):
        assert reorder(["a", "b"], 1, 1) == (["a", "b"], 1)

    def test_does_not_mutate_input(self):
        items = ["a", "b", "c"]
        reorder(items, 0, 2)
        assert items == ["a", "b", "c"]

    def test_out_of_bounds_is_noop(self):
        assert reorder(["a", "b"], 0, 2) == (["a", "b"], 0)
        assert reorder(["a", "b"], 5, 0) == (["a", "b"], 5)
        assert reorder(["a", "b"], -1, 0) == (["a", "b"], -1)
        assert reorder([], 0, 1) == ([], 0)

    def test_hover_stream_feeds_back_index(self):
        items = list("abcde")
        drag = 1
        for hover in (2, 3, 4, 3):
            items, drag = reorder(items, drag, hover)
        assert items == ["a", "c", "d", "b", "e"]
        assert drag == 3

    def test_aborted_drag_keeps_last_order(self):
        items, drag = reorder(list("abc"), 0, 1)
        # no drop event follows; nothing to roll back
        assert items == ["b", "a", "c"]


class TestTransfer:
    def test_lands_after_hovered_entry(self):
        source, target, index = transfer(["x", "w"], ["y", "z"], 0, 0)
        assert source == ["w"]
        assert target == ["y", "x", "z"]
        assert index == 1

    def test_never_lands_at_front_of_nonempty_target(self):
        for target in (["y"], ["y", "z"], ["y", "z", "v"]):
            _, moved, index = transfer(["x"], target, 0, 0)
            assert index == 1
            assert moved[0] == "y"

    def test_append_at_end(self):
        _, target, index = transfer(["x"], ["y"], 0, 1)
        assert target == ["y", "x"]
        assert index == 1

    def test_into_empty_target(self):
        source, target, index = transfer(["x"], [], 0, 0)
        assert source == []
        assert target == ["x"]
        assert index == 0

    def test_invalid_indices(self):
        assert transfer(["x"], ["y"], 1, 0) is None
        assert transfer(["x"], ["y"], 0, 2) is None
        assert transfer(["x"], ["y"], 0, -1) is None
        assert transfer([], ["y"], 0, 0) is None

    def test_inputs_untouched(self):
        source, target = ("x",), ("y",)
        transfer(source, target, 0, 0)
        assert source == ("x",) and target == ("y",)
