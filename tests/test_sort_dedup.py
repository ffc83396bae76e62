from launcher_sync.services.sort_dedup import (
    SortKey,
    apply_plan,
    multi_key_sort,
    path_and_args,
    plan_sort_and_dedup,
)

from factories import contents_of, make_file, make_line, numbering


def test_scenario_sort_and_dedup_single_file():
    lines = make_file("d.txt", ["b,2", "a,1", "b,2"])
    plan = plan_sort_and_dedup(lines, {"d.txt"})
    # reported before anything is removed
    assert plan.duplicate_count == 1
    assert len(plan.sorted_scope) == 3
    result = apply_plan(plan)
    assert numbering(result) == [("d.txt", 1), ("d.txt", 2)]
    assert contents_of(result) == ["a,1", "b,2"]


def test_second_pass_is_idempotent():
    lines = make_file("d.txt", ["b,2", "a,1", "b,2", "// x", "", "dir,C:/a"])
    first = apply_plan(plan_sort_and_dedup(lines, {"d.txt"}))
    second_plan = plan_sort_and_dedup(first, {"d.txt"})
    assert second_plan.duplicate_count == 0
    assert apply_plan(second_plan) == first


def test_type_rank_orders_directive_item_comment_empty():
    lines = make_file("d.txt", ["// note", "", "x,C:/b", "dir,C:/a"])
    result = apply_plan(plan_sort_and_dedup(lines, {"d.txt"}))
    assert contents_of(result) == ["dir,C:/a", "x,C:/b", "// note", ""]


def test_path_compare_is_case_insensitive_then_name():
    lines = make_file("d.txt", ["B,c:/Zeta", "beta,x.exe", "a,C:/alpha", "Alpha,x.exe"])
    result = apply_plan(plan_sort_and_dedup(lines, {"d.txt"}))
    assert contents_of(result) == ["a,C:/alpha", "B,c:/Zeta", "Alpha,x.exe", "beta,x.exe"]


def test_out_of_scope_lines_pass_through_in_file_order():
    lines = [
        *make_file("d.txt", ["b,2", "a,1"]),
        *make_file("other.txt", ["z,9", "y,8", "z,9"]),
    ]
    plan = plan_sort_and_dedup(lines, {"d.txt"})
    result = apply_plan(plan)
    assert contents_of(result, "other.txt") == ["z,9", "y,8", "z,9"]
    assert [l.source_file for l in result] == ["d.txt"] * 2 + ["other.txt"] * 3
    assert contents_of(result, "d.txt") == ["a,1", "b,2"]


def test_keep_duplicates_when_declined():
    lines = make_file("d.txt", ["b,2", "a,1", "b,2"])
    result = apply_plan(plan_sort_and_dedup(lines, {"d.txt"}), remove_duplicates=False)
    assert contents_of(result) == ["a,1", "b,2", "b,2"]
    assert numbering(result) == [("d.txt", 1), ("d.txt", 2), ("d.txt", 3)]


def test_dedup_key_includes_type():
    plan = plan_sort_and_dedup(make_file("d.txt", ["// a", "// a", "a,b"]), {"d.txt"})
    assert plan.duplicate_count == 1
    assert [l.content for l in plan.duplicates] == ["// a"]


def test_path_and_args_per_line_type():
    assert path_and_args(make_line("d", 1, "Code,code.exe,--new")) == "code.exe --new"
    assert path_and_args(make_line("d", 1, "dir,C:/a,depth=1,types=file")) == "C:/a depth=1,types=file"
    assert path_and_args(make_line("d", 1, "")) == "(空行)"


def test_multi_key_sort_applies_lowest_precedence_first():
    lines = make_file("d.txt", ["b,1", "a,2", "a,1"])
    ordered = multi_key_sort(
        lines,
        [SortKey(lambda l: l.content.split(",")[1], ascending=False), SortKey(lambda l: l.content)],
    )
    assert contents_of(ordered) == ["a,2", "a,1", "b,1"]


def test_sorting_a_middle_file_keeps_file_group_order():
    lines = [
        *make_file("a.txt", ["x,1"]),
        *make_file("b.txt", ["b,2", "a,1", "b,2"]),
        *make_file("c.txt", ["y,1"]),
    ]
    result = apply_plan(plan_sort_and_dedup(lines, {"b.txt"}))
    assert [l.source_file for l in result] == ["a.txt", "b.txt", "b.txt", "c.txt"]
    assert contents_of(result, "b.txt") == ["a,1", "b,2"]
    assert numbering(result) == [("a.txt", 1), ("b.txt", 1), ("b.txt", 2), ("c.txt", 1)]
