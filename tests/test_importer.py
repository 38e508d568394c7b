import itertools

from storyboard_manager.core.importer import (
    MARKDOWN_HEADER, build_markdown, convert_import_rows, import_text, parse_rows
)


def fixed_ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


class TestParseRows:
    def test_pipe_row(self):
        assert parse_rows("| 5 | Hello | Xin chào | knife |") == [("5", "Hello", "Xin chào", "knife")]

    def test_tab_row(self):
        assert parse_rows("1\tA\tB\tC") == [("1", "A", "B", "C")]

    def test_extra_columns_truncated(self):
        assert parse_rows("1\tA\tB\tC\tD\tE") == [("1", "A", "B", "C")]

    def test_short_and_plain_lines_dropped(self):
        text = "\n".join([
            "just a sentence",
            "| 1 | only two |",
            "2\tA\tB",
            "",
            "   ",
        ])
        assert parse_rows(text) == []

    def test_empty_pipe_cells_dropped(self):
        assert parse_rows("|| 7 | A || B | C |") == [("7", "A", "B", "C")]

    def test_full_markdown_table(self):
        text = "\n".join([
            "| Code | English | Vietnamese | Keywords |",
            "| --- | --- | --- | --- |",
            "| 2 | Run | Chạy | street |",
        ])
        rows = parse_rows(text)
        assert len(rows) == 3
        assert rows[-1] == ("2", "Run", "Chạy", "street")


class TestConvertImportRows:
    def test_pipe_example(self):
        scenes = convert_import_rows(parse_rows("| 5 | Hello | Xin chào | knife |"),
                                     id_factory=fixed_ids(), clock=lambda: 1000)
        assert len(scenes) == 1
        scene = scenes[0]
        assert scene.code == "005"
        assert scene.en_text == "Hello"
        assert scene.vi_text == "Xin chào"
        assert scene.keywords == "knife"
        assert scene.primary_image_path is None
        assert scene.character_image is False
        assert scene.updated_at == 1000
        assert scene.id == "id-1"

    def test_invalid_codes_excluded(self):
        rows = [("abc", "a", "b", "c"), ("3", "x", "y", "z")]
        scenes = convert_import_rows(rows, id_factory=fixed_ids())
        assert [s.code for s in scenes] == ["003"]

    def test_short_rows_excluded(self):
        scenes = convert_import_rows([("1", "a"), ("2", "a", "b", "c")])
        assert [s.code for s in scenes] == ["002"]

    def test_header_and_separator_rows_skipped(self):
        text = "\n".join([
            "| Code | English | Vietnamese | Keywords |",
            "| --- | --- | --- | --- |",
            "| 2 | Run | Chạy | street |",
        ])
        assert [s.code for s in import_text(text)] == ["002"]

    def test_result_sorted_by_code(self):
        rows = [("3.10", "", "", ""), ("3.2", "", "", ""), ("1", "", "", "")]
        assert [s.code for s in convert_import_rows(rows)] == ["001", "003.2", "003.10"]

    def test_fresh_ids(self):
        rows = [("1", "a", "b", "c"), ("1", "a", "b", "c")]
        scenes = convert_import_rows(rows)
        assert len({s.id for s in scenes}) == 2

    def test_empty_input(self):
        assert import_text("") == []


class TestBuildMarkdown:
    def test_header_only(self):
        assert build_markdown([]) == MARKDOWN_HEADER

    def test_rows(self):
        result = build_markdown([("1", "A", "B", "C")])
        assert result.splitlines()[0] == "| Code | English | Vietnamese | Keywords |"
        assert result.splitlines()[-1] == "| 1 | A | B | C |"

    def test_reparse_roundtrip(self):
        rows = [("4", "Look", "Nhìn", "sky")]
        assert rows[0] in parse_rows(build_markdown(rows))
