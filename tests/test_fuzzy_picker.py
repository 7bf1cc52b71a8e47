from pathlib import Path

from space.tui.fuzzy_picker import FuzzyPicker, PickerItem


def make_items(paths):
    return [PickerItem.from_path(Path(p)) for p in paths]


def test_from_path():
    item = PickerItem.from_path("/work/acme/acme-api")
    assert item.name == "acme-api"
    assert item.parent == "acme"
    assert item.full_path == Path("/work/acme/acme-api")


def test_filters_by_query():
    picker = FuzzyPicker("test", make_items(["/work/acme/acme-api", "/work/widgets/widget-ui"]), False)
    picker.set_query("acme")
    assert len(picker.filtered) == 1
    assert picker.all_items[picker.filtered[0]].name == "acme-api"


def test_scope_filters_by_parent():
    items = make_items(["/work/acme/acme-api", "/work/widgets/widget-ui", "/work/acme/acme-payments"])
    picker = FuzzyPicker("test", items, False)
    picker.set_query("acme/")
    assert len(picker.filtered) == 2
    assert all(picker.all_items[i].parent == "acme" for i in picker.filtered)


def test_multi_select_toggle():
    picker = FuzzyPicker("test", make_items(["/work/acme/a", "/work/acme/b"]), True)
    picker.toggle_highlighted()
    assert len(picker.toggled) == 1
    picker.toggle_highlighted()
    assert len(picker.toggled) == 0


def test_best_match_first():
    items = make_items(["/work/acme/acme-web", "/work/acme/acme-api", "/work/tools/auth-service"])
    picker = FuzzyPicker("test", items, False)
    picker.set_query("acme-api")
    assert picker.all_items[picker.filtered[0]].name == "acme-api"


def test_no_matches_for_garbage():
    picker = FuzzyPicker("test", make_items(["/work/acme/acme-api"]), False)
    picker.set_query("zzzzzzzzz")
    assert picker.filtered == []
    assert picker.highlighted == 0
    assert picker.confirmed_items() == []


def test_match_indices_parallel_to_filtered():
    items = make_items(["/work/acme/acme-api", "/work/acme/acme-web", "/work/tools/api-gw"])
    picker = FuzzyPicker("test", items, False)
    picker.set_query("api")
    assert len(picker.match_indices) == len(picker.filtered)
    for list_idx, item_idx in enumerate(picker.filtered):
        item = picker.all_items[item_idx]
        display = f"{item.name} {item.parent}"
        indices = picker.match_indices[list_idx]
        assert indices == sorted(set(indices))
        assert all(0 <= i < len(display) for i in indices)


def test_empty_query_keeps_all_in_order():
    items = make_items(["/a/x/one", "/a/y/two", "/a/z/three"])
    picker = FuzzyPicker("test", items, False)
    assert picker.filtered == [0, 1, 2]
    assert picker.match_indices == [[], [], []]


def test_query_scope():
    picker = FuzzyPicker("test", [], False)
    picker.set_query("x/y/ap")
    assert picker.query_scope() == "y"
    picker.set_query("/ap")
    assert picker.query_scope() is None
    picker.set_query("ap")
    assert picker.query_scope() is None


def test_scope_matches_full_path_component():
    items = make_items(["/home/group/sub/tool", "/home/other/sub/lib"])
    picker = FuzzyPicker("test", items, False)
    picker.set_query("group/")
    assert [picker.all_items[i].name for i in picker.filtered] == ["tool"]


def test_cycle_scope():
    items = make_items(["/work/widgets/b", "/work/acme/a"])
    picker = FuzzyPicker("test", items, False)
    assert picker.available_scopes == ["acme", "widgets"]
    picker.cycle_scope()
    assert picker.scope == "acme"
    assert [picker.all_items[i].name for i in picker.filtered] == ["a"]
    picker.cycle_scope()
    assert picker.scope == "widgets"
    assert [picker.all_items[i].name for i in picker.filtered] == ["b"]
    picker.cycle_scope()
    assert picker.scope is None
    assert len(picker.filtered) == 2


def test_cycle_scope_without_items():
    picker = FuzzyPicker("test", [], True)
    picker.cycle_scope()
    assert picker.scope is None
    assert picker.scope_idx == 0


def test_query_scope_overrides_cycled_scope():
    items = make_items(["/work/widgets/b", "/work/acme/a"])
    picker = FuzzyPicker("test", items, False)
    picker.cycle_scope()
    picker.set_query("widgets/")
    assert [picker.all_items[i].name for i in picker.filtered] == ["b"]


def test_confirmed_items_multi_sorted_by_name():
    items = make_items(["/work/acme/zeta", "/work/acme/alpha", "/work/acme/mid"])
    picker = FuzzyPicker("test", items, True)
    picker.toggle_highlighted()
    picker.move_down()
    picker.toggle_highlighted()
    assert [i.name for i in picker.confirmed_items()] == ["alpha", "zeta"]


def test_confirmed_items_without_toggles_returns_highlighted():
    items = make_items(["/work/acme/zeta", "/work/acme/alpha"])
    picker = FuzzyPicker("test", items, True)
    picker.move_down()
    assert [i.name for i in picker.confirmed_items()] == ["alpha"]


def test_single_select_ignores_toggles():
    items = make_items(["/work/acme/zeta", "/work/acme/alpha"])
    picker = FuzzyPicker("test", items, False)
    picker.move_down()
    picker.toggle_highlighted()
    picker.move_up()
    assert [i.name for i in picker.confirmed_items()] == ["zeta"]


def test_movement_is_bounded():
    picker = FuzzyPicker("test", make_items(["/w/p/a", "/w/p/b"]), False)
    picker.move_up()
    assert picker.highlighted == 0
    picker.move_down()
    picker.move_down()
    assert picker.highlighted == 1


def test_highlight_clamped_after_refilter():
    picker = FuzzyPicker("test", make_items(["/w/p/alpha", "/w/p/beta", "/w/p/gamma"]), False)
    picker.move_down()
    picker.move_down()
    picker.set_query("alpha")
    assert len(picker.filtered) == 1
    assert picker.highlighted == 0