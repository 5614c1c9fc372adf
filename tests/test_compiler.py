"""Tests for the streaming patch compiler."""

from __future__ import annotations

import json

import pytest

from svgstream import compiler as compiler_module
from svgstream.compiler import (
    MAX_NESTING_DEPTH,
    CompileResult,
    Patch,
    PatchCompiler,
    compile_text,
    parse_patch,
    replay,
)
from svgstream.errors import PatchError


def _line(op: str, path: str, value: object = None) -> str:
    patch: dict[str, object] = {"op": op, "path": path}
    if op != "remove":
        patch["value"] = value
    return json.dumps(patch) + "\n"


def _rect(fill: str = "#f0f0f0") -> dict[str, object]:
    return {
        "key": "bg",
        "kind": "Rect",
        "props": {"x": 0, "y": 0, "width": 500, "height": 500, "fill": fill},
    }


def _nested_line(depth: int) -> str:
    """A /viewport patch whose value nests ``depth`` objects."""
    value = '{"a":' * depth + "1" + "}" * depth
    return '{"op":"add","path":"/viewport","value":' + value + "}"


STREAM = (
    _line("add", "/viewport", {"width": 400, "height": 300})
    + _line("add", "/root", "g")
    + _line("add", "/elements/g", {"kind": "Group", "props": {}, "children": ["bg", "c"]})
    + _line("add", "/elements/bg", _rect())
    + _line("add", "/elements/c", {"kind": "Circle", "props": {"cx": 1, "cy": 2, "r": 3}})
    + _line("replace", "/elements/c/props/fill", "#ff0000")
)


class TestParsePatch:
    """Tests for parse_patch()."""

    def test_add(self) -> None:
        patch = parse_patch('{"op":"add","path":"/root","value":"bg"}')
        assert patch == Patch(op="add", path="/root", value="bg")
        assert patch.is_write

    def test_remove_ignores_value(self) -> None:
        patch = parse_patch('{"op":"remove","path":"/elements/a","value":123}')
        assert patch.value is None
        assert not patch.is_write

    def test_missing_value_is_none(self) -> None:
        assert parse_patch('{"op":"set","path":"/root"}').value is None

    def test_surrounding_whitespace(self) -> None:
        assert parse_patch('  {"op":"set","path":"/root","value":"x"}  ').value == "x"

    @pytest.mark.parametrize(
        ("line", "message"),
        [
            ("not json", "not valid JSON"),
            ('{"op":"add","path":"/root"', "not valid JSON"),
            ("[1, 2]", "must be a JSON object"),
            ('"text"', "must be a JSON object"),
            ('{"op":"move","path":"/root"}', "Unknown patch op"),
            ('{"path":"/root","value":1}', "Unknown patch op"),
            ('{"op":"add","path":5}', "path must be a string"),
            ('{"op":"add"}', "path must be a string"),
        ],
    )
    def test_rejects(self, line: str, message: str) -> None:
        with pytest.raises(PatchError, match=message) as exc_info:
            parse_patch(line)
        assert exc_info.value.line == line

    def test_rejects_runaway_brackets(self) -> None:
        with pytest.raises(PatchError):
            parse_patch("[" * 100_000)

    def test_value_at_depth_limit_accepted(self) -> None:
        patch = parse_patch(_nested_line(MAX_NESTING_DEPTH))
        assert patch.path == "/viewport"

    @pytest.mark.parametrize("depth", [MAX_NESTING_DEPTH + 1, 600])
    def test_rejects_deeply_nested_value(self, depth: int) -> None:
        with pytest.raises(PatchError, match="nested too deeply"):
            parse_patch(_nested_line(depth))

    def test_rejects_deeply_nested_path(self) -> None:
        path = "/elements/a" + "/x" * MAX_NESTING_DEPTH
        with pytest.raises(PatchError, match="nested too deeply"):
            parse_patch(_line("add", path, 1))


class TestPush:
    """Tests for PatchCompiler.push() buffering."""

    def test_complete_line(self) -> None:
        compiler = PatchCompiler()
        result = compiler.push(_line("add", "/root", "bg"))
        assert result.document.root == "bg"
        assert result.patches == (Patch("add", "/root", "bg"),)
        assert compiler.buffer == ""

    def test_line_split_across_chunks(self) -> None:
        """A partial line is held until its newline arrives."""
        compiler = PatchCompiler()
        line = _line("add", "/root", "bg")

        first = compiler.push(line[:10])
        assert first.patches == ()
        assert first.document.root is None
        assert compiler.buffer == line[:10]

        second = compiler.push(line[10:])
        assert second.document.root == "bg"
        assert compiler.buffer == ""

    def test_many_lines_in_one_chunk(self) -> None:
        result = PatchCompiler().push(STREAM)
        assert [p.path for p in result.patches] == [
            "/viewport",
            "/root",
            "/elements/g",
            "/elements/bg",
            "/elements/c",
            "/elements/c/props/fill",
        ]
        assert len(result.document) == 3

    def test_result_unpacks(self) -> None:
        document, patches = PatchCompiler().push(_line("add", "/root", "r"))
        assert document.root == "r"
        assert len(patches) == 1

    def test_blank_lines_skipped(self) -> None:
        result = PatchCompiler().push("\n\n   \n" + _line("add", "/root", "r"))
        assert len(result.patches) == 1

    def test_crlf_line_endings(self) -> None:
        result = PatchCompiler().push(_line("add", "/root", "r").replace("\n", "\r\n"))
        assert result.document.root == "r"

    def test_malformed_lines_dropped(self) -> None:
        """Bad lines are skipped; the lines around them still apply."""
        raw = (
            "```jsonl\n"
            + "not json\n"
            + _line("add", "/root", "bg")
            + '{"op":"add","path":"/elements/x"\n'
            + '{"op":"jump","path":"/root","value":"nope"}\n'
            + _line("add", "/elements/bg", _rect())
            + "```\n"
        )
        result = PatchCompiler().push(raw)
        assert result.document.root == "bg"
        assert list(result.document.elements) == ["bg"]
        assert len(result.patches) == 2

    def test_deeply_nested_lines_dropped(self) -> None:
        compiler = PatchCompiler()
        raw = "[" * 100_000 + "\n" + _nested_line(600) + "\n" + _line("add", "/root", "r")
        result = compiler.push(raw)
        assert result.document.root == "r"
        assert result.document.viewport is None
        assert len(result.patches) == 1

    def test_document_is_fresh_each_push(self) -> None:
        compiler = PatchCompiler()
        before = compiler.push(_line("add", "/root", "a")).document
        after = compiler.push(_line("add", "/root", "b")).document
        assert before.root == "a"
        assert after.root == "b"


class TestFlush:
    """Tests for PatchCompiler.flush()."""

    def test_applies_unterminated_line(self) -> None:
        compiler = PatchCompiler()
        compiler.push(_line("add", "/root", "bg").rstrip("\n"))
        assert compiler.snapshot().root is None

        result = compiler.flush()
        assert result.document.root == "bg"
        assert compiler.buffer == ""

    def test_discards_code_fence(self) -> None:
        compiler = PatchCompiler()
        compiler.push(_line("add", "/root", "bg") + "```")
        result = compiler.flush()
        assert result.patches == ()
        assert result.document.root == "bg"
        assert compiler.buffer == ""

    def test_discards_garbage(self) -> None:
        compiler = PatchCompiler()
        compiler.push('{"op":"add","path":"/ro')
        assert compiler.flush().patches == ()

    def test_empty_buffer(self) -> None:
        assert PatchCompiler().flush() == CompileResult(PatchCompiler().snapshot(), ())


class TestApply:
    """Tests for patch application semantics."""

    def test_root_and_viewport(self) -> None:
        document = compile_text(STREAM)
        assert document.root == "g"
        assert document.viewport is not None
        assert document.viewport.width == 400
        assert document.viewport.height == 300

    def test_remove_root(self) -> None:
        document = compile_text(_line("add", "/root", "g") + _line("remove", "/root"))
        assert document.root is None

    def test_remove_viewport(self) -> None:
        raw = _line("add", "/viewport", {"width": 1, "height": 1}) + _line("remove", "/viewport")
        assert compile_text(raw).viewport is None

    def test_deep_replace(self) -> None:
        document = compile_text(STREAM)
        assert document.elements["c"].props == {"cx": 1, "cy": 2, "r": 3, "fill": "#ff0000"}

    def test_deep_patch_creates_missing_mapping(self) -> None:
        raw = _line("add", "/elements/c", {"kind": "Circle"}) + _line(
            "add", "/elements/c/props/r", 5
        )
        assert compile_text(raw).elements["c"].props == {"r": 5}

    def test_deep_patch_on_missing_element_is_noop(self) -> None:
        document = compile_text(_line("replace", "/elements/ghost/props/fill", "red"))
        assert "ghost" not in document
        assert document.is_empty

    def test_deep_patch_through_scalar_is_noop(self) -> None:
        raw = _line("add", "/elements/c", {"kind": "Circle", "props": {"r": 5}}) + _line(
            "add", "/elements/c/props/r/value", 1
        )
        assert compile_text(raw).elements["c"].props == {"r": 5}

    def test_remove_element_leaves_dangling_child(self) -> None:
        """Removing an element does not touch the parents that list it."""
        document = compile_text(STREAM + _line("remove", "/elements/c"))
        assert "c" not in document
        assert document.elements["g"].children == ("bg", "c")

    def test_remove_prop(self) -> None:
        document = compile_text(STREAM + _line("remove", "/elements/c/props/fill"))
        assert "fill" not in document.elements["c"].props

    def test_remove_child_by_index(self) -> None:
        document = compile_text(STREAM + _line("remove", "/elements/g/children/0"))
        assert document.elements["g"].children == ("c",)

    def test_replace_child_by_index(self) -> None:
        document = compile_text(STREAM + _line("replace", "/elements/g/children/1", "d"))
        assert document.elements["g"].children == ("bg", "d")

    def test_add_child_at_end(self) -> None:
        document = compile_text(STREAM + _line("add", "/elements/g/children/2", "d"))
        assert document.elements["g"].children == ("bg", "c", "d")

    def test_add_child_past_end_is_noop(self) -> None:
        document = compile_text(STREAM + _line("add", "/elements/g/children/7", "d"))
        assert document.elements["g"].children == ("bg", "c")

    def test_non_numeric_list_index_is_noop(self) -> None:
        document = compile_text(STREAM + _line("add", "/elements/g/children/last", "d"))
        assert document.elements["g"].children == ("bg", "c")

    @pytest.mark.parametrize("segment", ["+1", " 1", "1 ", "0_1", "-1", "١"])
    def test_list_index_must_be_plain_digits(self, segment: str) -> None:
        document = compile_text(STREAM + _line("replace", f"/elements/g/children/{segment}", "d"))
        assert document.elements["g"].children == ("bg", "c")

    def test_unrecognized_path_ignored(self) -> None:
        document = compile_text(_line("add", "/title", "hello") + _line("add", "/elements", {}))
        assert document.is_empty

    def test_map_key_is_authoritative(self) -> None:
        document = compile_text(
            _line("add", "/elements/a", {"key": "b", "kind": "Rect", "props": {}})
        )
        assert document.elements["a"].key == "a"
        assert "b" not in document

    def test_type_accepted_for_kind(self) -> None:
        document = compile_text(_line("add", "/elements/a", {"type": "Rect", "props": {}}))
        assert document.elements["a"].kind == "Rect"

    def test_non_object_element_value_is_hidden(self) -> None:
        document = compile_text(_line("add", "/elements/a", "Rect"))
        assert "a" not in document

    def test_overwrite_ops_are_equivalent(self) -> None:
        """set, add and replace all overwrite or create; none inserts."""
        results = []
        for op in ("set", "add", "replace"):
            raw = (
                _line("add", "/elements/g", {"kind": "Group", "children": ["a", "b"]})
                + _line(op, "/elements/g/children/0", "z")
                + _line(op, "/elements/n", _rect())
                + _line(op, "/root", "g")
            )
            results.append(compile_text(raw))
        assert results[0] == results[1] == results[2]
        assert results[0].elements["g"].children == ("z", "b")

    def test_replace_creates_missing_target(self) -> None:
        document = compile_text(_line("replace", "/elements/bg", _rect()))
        assert "bg" in document

    def test_repeated_write_is_idempotent(self) -> None:
        once = compile_text(STREAM)
        twice = compile_text(STREAM + STREAM)
        assert once == twice

    def test_apply_copies_value(self) -> None:
        compiler = PatchCompiler()
        value = _rect()
        compiler.apply(Patch("add", "/elements/bg", value))
        value["props"]["fill"] = "#000000"  # type: ignore[index]
        assert compiler.snapshot().elements["bg"].props["fill"] == "#f0f0f0"

    def test_apply_rejects_deeply_nested_value(self) -> None:
        value: object = 1
        for _ in range(600):
            value = {"a": value}
        compiler = PatchCompiler()
        with pytest.raises(PatchError, match="nested too deeply"):
            compiler.apply(Patch("add", "/viewport", value))
        assert compiler.snapshot().viewport is None

    def test_deepest_accepted_patch_snapshots(self) -> None:
        """The deepest path plus the deepest value still copies cleanly."""
        path = "/elements/c/props" + "/a" * (MAX_NESTING_DEPTH - 3)
        value: object = 1
        for _ in range(MAX_NESTING_DEPTH):
            value = [value]
        raw = _line("add", "/elements/c", {"kind": "Circle"}) + _line("add", path, value)
        result = PatchCompiler().push(raw)
        assert len(result.patches) == 2
        assert "a" in result.document.elements["c"].props


class TestSnapshot:
    """Tests for snapshot independence and reset."""

    def test_snapshot_is_independent(self) -> None:
        compiler = PatchCompiler()
        compiler.push(STREAM)
        snapshot = compiler.snapshot()
        snapshot.elements["c"].props["fill"] = "#000000"
        assert compiler.snapshot().elements["c"].props["fill"] == "#ff0000"

    def test_later_patches_do_not_change_earlier_snapshot(self) -> None:
        compiler = PatchCompiler()
        early = compiler.push(_line("add", "/elements/bg", _rect())).document
        compiler.push(_line("replace", "/elements/bg/props/fill", "#123456"))
        assert early.elements["bg"].props["fill"] == "#f0f0f0"

    def test_reset(self) -> None:
        compiler = PatchCompiler()
        compiler.push(STREAM + '{"op":')
        compiler.reset()
        assert compiler.buffer == ""
        assert compiler.snapshot().is_empty


class TestReplay:
    """Tests for replay()."""

    def test_final_state_matches_compile_text(self) -> None:
        steps = list(replay(STREAM))
        assert steps[-1].document == compile_text(STREAM)

    def test_one_step_per_line_plus_flush(self) -> None:
        steps = list(replay(STREAM))
        assert len(steps) == STREAM.count("\n") + 1
        assert steps[-1].patches == ()

    def test_intermediate_states_match_live_run(self) -> None:
        lines = STREAM.splitlines(keepends=True)
        live = PatchCompiler()
        expected = [live.push(line).document for line in lines]
        replayed = [result.document for result in replay(STREAM)][:-1]
        assert replayed == expected

    def test_chunked(self) -> None:
        steps = list(replay(STREAM, chunk_size=7))
        assert steps[-1].document == compile_text(STREAM)
        assert len(steps) == -(-len(STREAM) // 7) + 1

    def test_trailing_line_without_newline(self) -> None:
        raw = STREAM + _line("add", "/root", "bg").rstrip("\n")
        assert list(replay(raw))[-1].document.root == "bg"

    def test_invalid_chunk_size(self) -> None:
        with pytest.raises(ValueError, match="chunk_size"):
            list(replay(STREAM, chunk_size=0))

    def test_delay_between_steps(self, monkeypatch: pytest.MonkeyPatch) -> None:
        sleeps: list[float] = []
        monkeypatch.setattr(compiler_module.time, "sleep", sleeps.append)
        steps = list(replay(STREAM, delay=0.05))
        assert sleeps == [0.05] * (len(steps) - 2)
