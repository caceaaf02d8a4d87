from pathlib import Path

import gen_collection as gen


def _make_file_result(line_count: int = 120, byte_count: int = 4567) -> gen.FileWriteResult:
    return gen.FileWriteResult(
        filename="zz_generated.collection.go",
        path=Path("/work/slice/zz_generated.collection.go"),
        line_count=line_count,
        byte_count=byte_count,
    )


def test_write_output_writes_content_verbatim(tmp_path: Path) -> None:
    content = "// Code generated by gen-collection; DO NOT EDIT.\n\npackage émoji\n"
    target = tmp_path / "zz_generated.collection.go"

    result = gen.write_output(target, content)

    assert target.read_text(encoding="utf-8") == content
    assert result.filename == "zz_generated.collection.go"
    assert result.path == target.resolve()
    assert result.line_count == 3
    assert result.byte_count == len(content.encode("utf-8"))


def test_write_output_keeps_newlines_byte_for_byte(tmp_path: Path) -> None:
    content = "package slice\n\nfunc F() {\n}\n"
    target = tmp_path / "zz_generated.collection.go"

    result = gen.write_output(target, content)

    assert target.read_bytes() == content.encode("utf-8")
    assert b"\r" not in target.read_bytes()
    assert result.byte_count == len(content.encode("utf-8"))


def test_write_output_creates_missing_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "types" / "slice" / "zz_generated.collection.go"

    gen.write_output(target, "package slice\n")

    assert target.is_file()


def test_write_output_overwrites_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "out.go"
    target.write_text("stale contents that are longer than the new ones\n", encoding="utf-8")

    gen.write_output(target, "package fresh\n")

    assert target.read_text(encoding="utf-8") == "package fresh\n"


def test_build_generation_summary_sorts_functions_and_exclusions() -> None:
    params = gen.GenerationParams("slice", "Slice")
    retained = set(gen.FUNCTION_CATALOGUE) - {"Zip", "Filter"}

    summary = gen.build_generation_summary(params, retained, _make_file_result())

    assert summary.functions == tuple(sorted(retained))
    assert summary.excluded == ("Filter", "Zip")


def test_format_generation_summary_renders_all_sections() -> None:
    params = gen.GenerationParams("list", "*List", "comparable")
    summary = gen.GenerationSummary(
        params=params,
        functions=("Find", "Sum"),
        excluded=("Map",),
        file=_make_file_result(line_count=1234, byte_count=56789),
    )

    text = gen.format_generation_summary(summary, catalogue_size=3)

    assert text.splitlines() == [
        "*List collection functions generated:",
        "",
        "  Package:     list",
        "  Type:        *List",
        "  Constraint:  comparable",
        "  Output:      /work/slice/zz_generated.collection.go",
        "",
        "  Functions:   2 of 3",
        "    Find, Sum",
        "  Excluded:    Map",
        "",
        "  Written: 1,234 lines, 56,789 bytes",
    ]
    assert text.endswith("\n")


def test_format_generation_summary_omits_empty_sections() -> None:
    summary = gen.GenerationSummary(
        params=gen.GenerationParams("slice", "Slice"),
        functions=(),
        excluded=tuple(sorted(gen.FUNCTION_CATALOGUE)),
        file=_make_file_result(),
    )

    lines = gen.format_generation_summary(summary).splitlines()

    assert f"  Functions:   0 of {len(gen.FUNCTION_CATALOGUE)}" in lines
    assert not any(line.startswith("    ") for line in lines)
