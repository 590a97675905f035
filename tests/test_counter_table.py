from irqmon.counter_table import INTERRUPTS_SOURCE, CounterRow, CounterTable


def test_row_update_from_zero_baseline():
    row = CounterRow(name="95")
    assert row.update([10, 20, 30, 0]) == [10, 20, 30, 0]
    assert row.current == [10, 20, 30, 0]
    assert row.has_delta()


def test_row_update_delta_before_overwrite():
    row = CounterRow(name="95")
    row.update([10, 20, 30, 0])
    assert row.update([15, 25, 30, 0]) == [5, 5, 0, 0]
    assert row.current == [15, 25, 30, 0]
    assert row.update([15, 25, 30, 0]) == [0, 0, 0, 0]
    assert not row.has_delta()


def test_row_update_signed_delta():
    row = CounterRow(name="95", current=[10, 10])
    assert row.update([7, 10]) == [-3, 0]


def test_table_get_or_create():
    table = CounterTable(source=INTERRUPTS_SOURCE)
    row = table.get_or_create("95")
    assert table.get("95") is row
    assert table.get_or_create("95") is row
    assert table.get("96") is None


def test_table_changed_rows_sorted_by_name():
    table = CounterTable(source=INTERRUPTS_SOURCE)
    for name, changed in [("NMI", True), ("95", True), ("120", True), ("8", False)]:
        table.get_or_create(name).ever_changed = changed
    assert [row.name for row in table.changed_rows()] == ["120", "95", "NMI"]
