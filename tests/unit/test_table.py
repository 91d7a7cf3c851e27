"""Unit tests for the Table entity and its query operations."""

from __future__ import annotations

import io

import pytest

from table_engine.domain.entities import (
    Column,
    DuplicateColumnError,
    JoinKeyError,
    Table,
    TableError,
    UnknownColumnError,
)
from table_engine.domain.value_objects import Value, ValueKind


def assert_width_invariant(table: Table) -> None:
    """Every width covers the header and every value in its column."""
    for pos, column in enumerate(table.columns):
        needed = max([len(column.name)] + [row[pos].display_width() for row in table.rows])
        assert table.width(column.name) >= needed


@pytest.mark.unit
class TestTableConstruction:
    """Tests for creating tables."""

    def test_empty_table(self) -> None:
        """New table has its schema and no rows."""
        table = Table("t", [("id", ValueKind.INTEGER), ("name", ValueKind.TEXT)])

        assert table.name == "t"
        assert table.column_names == ["id", "name"]
        assert table.columns == (Column("id", ValueKind.INTEGER), Column("name", ValueKind.TEXT))
        assert len(table) == 0

    def test_initial_width_is_name_length(self) -> None:
        table = Table("t", [("id", ValueKind.INTEGER), ("description", ValueKind.TEXT)])

        assert table.width("id") == 2
        assert table.width("description") == 11

    def test_kind_from_value(self) -> None:
        """A null value may stand in for the column kind."""
        table = Table("t", [("id", Value.integer()), ("name", Value.text())])

        assert table.kind("id") is ValueKind.INTEGER
        assert table.kind("name") is ValueKind.TEXT

    def test_column_objects(self) -> None:
        table = Table("t", [Column("id", ValueKind.INTEGER)])
        assert table.kind("id") is ValueKind.INTEGER

    def test_duplicate_column_definition(self) -> None:
        with pytest.raises(DuplicateColumnError):
            Table("t", [("id", ValueKind.INTEGER), ("id", ValueKind.TEXT)])

    def test_unknown_column_lookup(self) -> None:
        table = Table("t", [("id", ValueKind.INTEGER)])

        with pytest.raises(UnknownColumnError) as exc_info:
            table.width("nope")
        assert exc_info.value.column == "nope"
        assert exc_info.value.table == "t"


@pytest.mark.unit
class TestInsert:
    """Tests for inserting rows."""

    @pytest.fixture
    def table(self) -> Table:
        return Table("t", [("id", ValueKind.INTEGER), ("name", ValueKind.TEXT)])

    def test_insert_values(self, table: Table) -> None:
        table.insert([("id", Value.integer(1)), ("name", Value.text("apple"))])

        assert table.rows == ((Value.integer(1), Value.text("apple")),)

    def test_insert_raw_scalars(self, table: Table) -> None:
        table.insert([("name", "apple"), ("id", 1)])

        assert table.records() == [{"id": 1, "name": "apple"}]

    def test_insert_mapping(self, table: Table) -> None:
        table.insert({"id": 2, "name": None})

        assert table.rows[0] == (Value.integer(2), Value.text())

    def test_omitted_column_is_null_of_its_kind(self, table: Table) -> None:
        table.insert([("name", "solo")])

        assert table.rows[0][0] == Value.integer()

    def test_rows_keep_insertion_order(self, table: Table) -> None:
        for i in range(5):
            table.insert([("id", i)])

        assert [r["id"] for r in table.records()] == [0, 1, 2, 3, 4]

    def test_unknown_column(self, table: Table) -> None:
        with pytest.raises(UnknownColumnError) as exc_info:
            table.insert([("id", 1), ("colour", "red")])

        assert "colour" in str(exc_info.value)
        assert isinstance(exc_info.value, TableError)

    def test_duplicate_column(self, table: Table) -> None:
        with pytest.raises(DuplicateColumnError):
            table.insert([("id", 1), ("id", 2)])

    def test_raw_type_mismatch(self, table: Table) -> None:
        with pytest.raises(TypeError):
            table.insert([("id", "one")])

    def test_failed_insert_leaves_table_unchanged(self, table: Table) -> None:
        """Validation happens before any mutation."""
        table.insert([("id", 1), ("name", "a")])

        with pytest.raises(UnknownColumnError):
            table.insert([("name", "a much longer name"), ("bogus", 1)])
        with pytest.raises(DuplicateColumnError):
            table.insert([("id", 123456), ("id", 1)])

        assert len(table) == 1
        assert table.width("id") == 2
        assert table.width("name") == 4

    def test_widths_grow(self, table: Table) -> None:
        table.insert([("id", -12345), ("name", "honeydew melon")])

        assert table.width("id") == 6
        assert table.width("name") == 14

    def test_widths_never_shrink(self, table: Table) -> None:
        table.insert([("id", 123456)])
        table.insert([("id", 1)])

        assert table.width("id") == 6

    def test_null_counts_four_wide(self) -> None:
        """Nulls, given or omitted, reserve room for NULL."""
        table = Table("t", [("id", ValueKind.INTEGER), ("n", ValueKind.TEXT)])
        table.insert([("id", None)])

        assert table.width("id") == 4
        assert table.width("n") == 4

    def test_width_invariant(self, fruits: Table) -> None:
        assert_width_invariant(fruits)


@pytest.mark.unit
class TestSelect:
    """Tests for projection."""

    def test_full_column_list_preserves_rows(self, fruits: Table) -> None:
        result = fruits.select(fruits.column_names)

        assert result.records() == fruits.records()
        assert len(result) == len(fruits)

    def test_restrict_and_reorder(self, fruits: Table) -> None:
        result = fruits.select(["price", "name"])

        assert result.column_names == ["price", "name"]
        assert result.records()[0] == {"price": 50, "name": "apple"}

    def test_widths_carried_over(self, fruits: Table) -> None:
        result = fruits.select(["name"])

        assert result.width("name") == fruits.width("name") == 14

    def test_unknown_names_dropped(self, fruits: Table) -> None:
        result = fruits.select(["nope", "name", "also_nope"])

        assert result.column_names == ["name"]
        assert len(result) == 8

    def test_repeated_name_kept_once(self, fruits: Table) -> None:
        result = fruits.select(["name", "id", "name"])

        assert result.column_names == ["name", "id"]

    def test_empty_projection(self, fruits: Table) -> None:
        result = fruits.select([])

        assert result.column_names == []
        assert len(result) == 8

    def test_source_untouched(self, fruits: Table) -> None:
        before = fruits.records()
        fruits.select(["name"])

        assert fruits.column_names == ["id", "name", "price"]
        assert fruits.records() == before

    def test_derived_table_is_independent(self, fruits: Table) -> None:
        result = fruits.select(fruits.column_names)
        result.insert([("id", 99), ("name", "a very long fruit name")])

        assert len(fruits) == 8
        assert fruits.width("name") == 14

    def test_render_shows_only_selected_columns(self, fruits: Table) -> None:
        lines = fruits.select(["price", "id"]).render().splitlines()

        assert lines[1] == " | price | id |"
        assert lines[3] == " |    50 |  1 |"


@pytest.mark.unit
class TestLessThan:
    """Tests for the integer range filter."""

    def test_all_below(self, fruits: Table) -> None:
        assert len(fruits.less_than("id", 10)) == 8

    def test_excludes_null(self, fruits: Table) -> None:
        result = fruits.less_than("price", 250)

        assert [r["name"] for r in result.records()] == ["apple", "banana"]

    def test_strictly_less(self, fruits: Table) -> None:
        result = fruits.less_than("price", 100)

        assert [r["price"] for r in result.records()] == [50]

    @pytest.mark.parametrize("threshold", [-1, 0, 1, 4, 5, 100, 1000, 5000])
    def test_subset_of_source(self, fruits: Table, threshold: int) -> None:
        result = fruits.less_than("price", threshold)
        expected = [
            r for r in fruits.records() if r["price"] is not None and r["price"] < threshold
        ]

        assert result.records() == expected

    def test_schema_and_widths_kept(self, fruits: Table) -> None:
        result = fruits.less_than("id", 2)

        assert result.column_names == fruits.column_names
        assert result.width("name") == 14

    def test_text_column_matches_nothing(self, fruits: Table) -> None:
        assert len(fruits.less_than("name", 10)) == 0

    def test_unknown_column(self, fruits: Table) -> None:
        with pytest.raises(UnknownColumnError):
            fruits.less_than("weight", 1)


@pytest.mark.unit
class TestLike:
    """Tests for the LIKE filter."""

    def _names(self, table: Table) -> list[str]:
        return [r["name"] for r in table.records()]

    def test_exact(self, fruits: Table) -> None:
        assert self._names(fruits.like("name", "apple")) == ["apple"]

    def test_length(self, fruits: Table) -> None:
        assert self._names(fruits.like("name", "______")) == ["banana", "citrus", "dorian"]

    def test_suffix(self, fruits: Table) -> None:
        assert self._names(fruits.like("name", "%s")) == ["citrus", "elderberries", "figs"]

    def test_contains(self, fruits: Table) -> None:
        assert self._names(fruits.like("name", "%ri%")) == ["dorian", "elderberries"]

    def test_long_pattern(self) -> None:
        table = Table("t", [("name", ValueKind.TEXT)])
        table.insert([("name", "ab" * 1000)])
        table.insert([("name", "ab" * 999)])

        assert len(table.like("name", "a_" * 1000)) == 1

    def test_skips_null_text(self) -> None:
        table = Table("t", [("name", ValueKind.TEXT)])
        table.insert([("name", None)])
        table.insert([("name", "nil")])

        assert len(table.like("name", "%")) == 1

    def test_integer_column_matches_nothing(self, fruits: Table) -> None:
        assert len(fruits.like("id", "%")) == 0

    def test_unknown_column(self, fruits: Table) -> None:
        with pytest.raises(UnknownColumnError):
            fruits.like("colour", "%")


@pytest.mark.unit
class TestLeftJoin:
    """Tests for the left outer join."""

    def test_schema(self, fruits: Table, dates: Table) -> None:
        result = fruits.left_join(dates, "id")

        assert result.name == "table1"
        assert result.column_names == ["id", "name", "price", "date"]
        assert result.kind("date") is ValueKind.TEXT
        assert result.width("date") == dates.width("date") == 10

    def test_rows(self, fruits: Table, dates: Table) -> None:
        result = fruits.left_join(dates, "id")
        by_name = {r["name"]: r["date"] for r in result.records()}

        assert len(result) == len(fruits)
        assert by_name["apple"] == "2019/12/20"
        assert by_name["honeydew melon"] == "2019/12/27"
        assert by_name["elderberries"] is None
        assert result.rows[4][3] == Value.text()

    def test_no_duplicate_columns(self, fruits: Table, dates: Table) -> None:
        joined = fruits.left_join(dates, "id")
        again = joined.left_join(dates, "id")

        assert again.column_names == joined.column_names
        assert again.records() == joined.records()

    def test_left_values_not_overwritten(self) -> None:
        left = Table("l", [("id", ValueKind.INTEGER), ("name", ValueKind.TEXT)])
        right = Table("r", [("id", ValueKind.INTEGER), ("name", ValueKind.TEXT)])
        left.insert([("id", 1), ("name", "left")])
        right.insert([("id", 1), ("name", "right")])

        assert left.left_join(right, "id").records() == [{"id": 1, "name": "left"}]

    def test_last_match_wins(self) -> None:
        left = Table("l", [("id", ValueKind.INTEGER)])
        right = Table("r", [("id", ValueKind.INTEGER), ("tag", ValueKind.TEXT)])
        left.insert([("id", 1)])
        right.insert([("id", 1), ("tag", "first")])
        right.insert([("id", 1), ("tag", "second")])
        right.insert([("id", 2), ("tag", "other")])

        result = left.left_join(right, "id")

        assert result.records() == [{"id": 1, "tag": "second"}]

    def test_null_keys_match(self) -> None:
        left = Table("l", [("id", ValueKind.INTEGER)])
        right = Table("r", [("id", ValueKind.INTEGER), ("tag", ValueKind.TEXT)])
        left.insert([("id", None)])
        right.insert([("id", None), ("tag", "null-key")])

        assert left.left_join(right, "id").records() == [{"id": None, "tag": "null-key"}]

    def test_keys_of_different_kinds_never_match(self) -> None:
        left = Table("l", [("id", ValueKind.INTEGER)])
        right = Table("r", [("id", ValueKind.TEXT), ("tag", ValueKind.TEXT)])
        left.insert([("id", 1)])
        right.insert([("id", "1"), ("tag", "x")])

        assert left.left_join(right, "id").records() == [{"id": 1, "tag": None}]

    def test_missing_key_on_right(self, fruits: Table) -> None:
        other = Table("other", [("fruit_id", ValueKind.INTEGER)])

        with pytest.raises(JoinKeyError) as exc_info:
            fruits.left_join(other, "id")
        assert exc_info.value.table == "other"

    def test_missing_key_on_left(self, fruits: Table, dates: Table) -> None:
        with pytest.raises(JoinKeyError) as exc_info:
            dates.left_join(fruits, "name")
        assert exc_info.value.table == "table2"
        assert exc_info.value.key == "name"

    def test_sources_untouched(self, fruits: Table, dates: Table) -> None:
        fruits.left_join(dates, "id")

        assert fruits.column_names == ["id", "name", "price"]
        assert dates.column_names == ["id", "date"]

    def test_width_invariant(self, fruits: Table, dates: Table) -> None:
        assert_width_invariant(fruits.left_join(dates, "id"))

    def test_join_then_select(self, fruits: Table, dates: Table) -> None:
        result = fruits.left_join(dates, "id").select(["name", "date"])

        assert result.column_names == ["name", "date"]
        assert result.records()[0] == {"name": "apple", "date": "2019/12/20"}


@pytest.mark.unit
class TestDisplay:
    """Tests for rendering through the table."""

    def test_display_writes_render(self, fruits: Table) -> None:
        out = io.StringIO()
        fruits.display(file=out)

        assert out.getvalue() == fruits.render()

    def test_display_defaults_to_stdout(self, fruits: Table, capsys: pytest.CaptureFixture[str]) -> None:
        fruits.like("name", "apple").display()

        assert "| apple          |" in capsys.readouterr().out

    def test_repr(self, fruits: Table) -> None:
        assert repr(fruits) == "Table('table1', [id INTEGER, name TEXT, price INTEGER], rows=8)"
