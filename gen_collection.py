"""Collection function generator for Go container types.

Emits free-function wrappers (Find, Map, Fold, Sum, ...) for a container type
that provides `FromIterator[T]` and an `Iter()` method backed by the dogs
iterator package. The output is a single `zz_generated.collection.go` file.

Usage:
    python gen_collection.py --pkg slice --name Slice --out zz_generated.collection.go
    python gen_collection.py --pkg list --name '*List' --exclude Filter,ForEach --out zz_generated.collection.go
"""

import argparse
import difflib
import re
import subprocess
import sys
import types
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

TOOL_NAME = "gen-collection"
DEFAULT_CONSTRAINT = "any"
DEFAULT_GOFMT = "gofmt"


# ===--- CLI config contracts ---=== #


@dataclass(frozen=True)
class GenerationParams:
    """The three values bound into every template placeholder.

    All fields are opaque: they are substituted verbatim and never checked
    for Go syntax. A malformed value produces unparsable output, which
    --verify will catch.

    Attributes:
        package_name: Destination Go package, bound to {{ .PkgName }}.
        type_name: Container type expression, bound to {{ .TypeName }},
            e.g. "Slice" or "*List".
        constraint: Type-argument constraint, bound to {{ .Constraint }}.
    """

    package_name: str
    type_name: str
    constraint: str = DEFAULT_CONSTRAINT

    def bindings(self) -> dict[str, str]:
        return {
            "PkgName": self.package_name,
            "TypeName": self.type_name,
            "Constraint": self.constraint,
        }


@dataclass(frozen=True)
class GenerateConfig:
    params: GenerationParams
    exclude: tuple[str, ...]
    output: Path
    verify: bool


@dataclass(frozen=True)
class DiscoveryConfig:
    command: str
    filter_text: str | None


VALID_ERROR_CODES = {
    "MISSING_PACKAGE",
    "MISSING_TYPE_NAME",
    "MISSING_OUTPUT",
    "CONFLICT_GENERATE_DISCOVERY",
    "FILTER_WITHOUT_LIST",
}


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


def parse_exclude_list(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated --exclude value into names.

    Whitespace around each name is stripped and empty entries are dropped,
    so "Map, Zip," yields ("Map", "Zip"). Order and duplicates are kept;
    resolve_selection treats the result as a set.
    """
    if not raw:
        return tuple()
    return tuple(name.strip() for name in raw.split(",") if name.strip())


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=TOOL_NAME,
        description="Generate collection functions for a Go container type",
    )

    parser.add_argument("--pkg", type=str, default=None)
    parser.add_argument("--name", type=str, default=None)
    parser.add_argument("--constraint", type=str, default=DEFAULT_CONSTRAINT)
    parser.add_argument("--exclude", type=str, default="")
    parser.add_argument("--out", type=Path, default=None)
    parser.add_argument("--verify", action="store_true", default=False)

    discovery_group = parser.add_mutually_exclusive_group()
    discovery_group.add_argument(
        "--list-functions", action="store_true", default=False
    )
    discovery_group.add_argument(
        "--check-catalogue", action="store_true", default=False
    )

    parser.add_argument("--filter", type=str, default=None)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_argument_parser()
    return parser.parse_args(argv)


def validate_config(args: argparse.Namespace) -> GenerateConfig | DiscoveryConfig:
    has_generate_input = bool(
        args.pkg
        or args.name
        or args.out
        or args.exclude
        or args.verify
        or args.constraint != DEFAULT_CONSTRAINT
    )
    has_discovery_command = bool(args.list_functions or args.check_catalogue)

    if args.filter and not args.list_functions:
        raise ConfigError(
            "FILTER_WITHOUT_LIST",
            "--filter requires --list-functions.",
            "Add --list-functions or remove --filter.",
        )

    if has_generate_input and has_discovery_command:
        raise ConfigError(
            "CONFLICT_GENERATE_DISCOVERY",
            "Generate flags cannot be combined with discovery flags.",
            "Choose either generate mode or one discovery command.",
        )

    if has_discovery_command:
        command = "list-functions" if args.list_functions else "check-catalogue"
        return DiscoveryConfig(command=command, filter_text=args.filter)

    if not args.pkg:
        raise ConfigError(
            "MISSING_PACKAGE",
            "Generate mode requires --pkg.",
            "Pass the Go package name of the container, e.g. --pkg slice.",
        )
    if not args.name:
        raise ConfigError(
            "MISSING_TYPE_NAME",
            "Generate mode requires --name.",
            "Pass the container type, e.g. --name Slice or --name '*List'.",
        )
    if args.out is None:
        raise ConfigError(
            "MISSING_OUTPUT",
            "Generate mode requires --out.",
            "Pass the output path, e.g. --out zz_generated.collection.go.",
        )

    return GenerateConfig(
        params=GenerationParams(
            package_name=args.pkg,
            type_name=args.name,
            constraint=args.constraint,
        ),
        exclude=parse_exclude_list(args.exclude),
        output=Path(args.out),
        verify=bool(args.verify),
    )


def build_config(argv: list[str] | None = None) -> GenerateConfig | DiscoveryConfig:
    return validate_config(parse_args(argv))


# ===--- Generation errors ---=== #


VALID_GENERATION_ERROR_CODES = {
    "UNKNOWN_FUNCTION",
    "UNRESOLVED_PLACEHOLDER",
    "FRAGMENT_REFERENCE",
    "GOFMT_NOT_FOUND",
    "SYNTAX_CHECK_FAILED",
}


class GenerationError(Exception):
    """A failure inside the generation pipeline.

    UNKNOWN_FUNCTION is an operator error (bad --exclude entry). The
    placeholder and reference codes point at a catalogue authoring defect;
    operation then names the offending fragment.
    """

    def __init__(
        self,
        code: str,
        message: str,
        suggestion: str | None = None,
        operation: str | None = None,
    ):
        if code not in VALID_GENERATION_ERROR_CODES:
            raise ValueError(f"Unknown generation error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.operation = operation


# ===--- Function catalogue ---=== #

PLACEHOLDER_NAMES: tuple[str, ...] = ("PkgName", "TypeName", "Constraint")

HEADER_TEMPLATE = """// Code generated by gen-collection; DO NOT EDIT.

package {{ .PkgName }}

import (
	"github.com/genkami/dogs/classes/algebra"
	"github.com/genkami/dogs/classes/cmp"
	"github.com/genkami/dogs/types/iterator"
	"github.com/genkami/dogs/types/pair"
)

// Some packages are unused depending on --exclude CLI option.
// This prevents compile error when corresponding functions are not defined.
var _ = (algebra.Monoid[int])(nil)
var _ = (cmp.Ord[int])(nil)
var _ = (iterator.Iterator[int])(nil)
var _ = (*pair.Pair[int, int])(nil)
"""

# Each fragment may only use the header imports plus the container's own
# FromIterator and Iter. Calling another catalogue function would break
# the unit whenever that function is excluded.
_FRAGMENTS: dict[str, str] = {
    "Find": """
// Find returns a first element in xs that satisfies the given predicate fn.
// It returns false as a second return value if no elements are found.
func Find[T {{ .Constraint }}](xs {{ .TypeName }}[T], fn func(T) bool) (T, bool) {
	return iterator.Find[T](xs.Iter(), fn)
}
""",
    "FindIndex": """
// FindIndex returns a first index of an element in xs that satisfies the given predicate fn.
// It returns negative value if no elements are found.
func FindIndex[T {{ .Constraint }}](xs {{ .TypeName }}[T], fn func(T) bool) int {
	return iterator.FindIndex[T](xs.Iter(), fn)
}
""",
    "FindElem": """
// FindElem returns a first element in xs that equals to e in the sense of given Eq.
// It returns false as a second return value if no elements are found.
func FindElem[T {{ .Constraint }}](xs {{ .TypeName }}[T], e T, eq cmp.Eq[T]) (T, bool) {
	return iterator.FindElem[T](xs.Iter(), e, eq)
}
""",
    "FindElemIndex": """
// FindElemIndex returns a first index of an element in xs that equals to e in the sense of given Eq.
// It returns negative value if no elements are found.
func FindElemIndex[T {{ .Constraint }}](xs {{ .TypeName }}[T], e T, eq cmp.Eq[T]) int {
	return iterator.FindElemIndex[T](xs.Iter(), e, eq)
}
""",
    "Filter": """
// Filter returns a collection that only returns elements that satisfies given predicate.
func Filter[T {{ .Constraint }}](xs {{ .TypeName }}[T], fn func(T) bool) {{ .TypeName }}[T] {
	return FromIterator[T](iterator.Filter[T](xs.Iter(), fn))
}
""",
    "Map": """
// Map returns a collection that applies fn to each element of xs.
func Map[T, U {{ .Constraint }}](xs {{ .TypeName }}[T], fn func(T) U) {{ .TypeName }}[U] {
	return FromIterator[U](iterator.Map[T, U](xs.Iter(), fn))
}
""",
    "ForEach": """
// ForEach applies fn to each element in xs.
func ForEach[T {{ .Constraint }}](xs {{ .TypeName }}[T], fn func(T)) {
	iterator.ForEach[T](xs.Iter(), fn)
}
""",
    "Fold": """
// Fold accumulates every element in a collection by applying fn.
func Fold[T any, U {{ .Constraint }}](init T, xs {{ .TypeName }}[U], fn func(T, U) T) T {
	return iterator.Fold[T, U](init, xs.Iter(), fn)
}
""",
    "Zip": """
// Zip combines two collections into one that contains pairs of corresponding elements.
func Zip[T, U {{ .Constraint }}](a {{ .TypeName }}[T], b {{ .TypeName }}[U]) {{ .TypeName }}[pair.Pair[T, U]] {
	return FromIterator[pair.Pair[T, U]](iterator.Zip(a.Iter(), b.Iter()))
}
""",
    "SumWithInit": """
// SumWithInit sums up init and all values in xs.
func SumWithInit[T {{ .Constraint }}](init T, xs {{ .TypeName }}[T], s algebra.Semigroup[T]) T {
	return iterator.Fold[T, T](init, xs.Iter(), s.Combine)
}
""",
    "Sum": """
// Sum sums up all values in xs.
// It returns m.Empty() when xs is empty.
func Sum[T {{ .Constraint }}](xs {{ .TypeName }}[T], m algebra.Monoid[T]) T {
	var s algebra.Semigroup[T] = m
	return iterator.Fold[T, T](m.Empty(), xs.Iter(), s.Combine)
}
""",
}

FUNCTION_CATALOGUE: Mapping[str, str] = types.MappingProxyType(_FRAGMENTS)
"""Read-only registry of every function the generator can emit.

Keys are Go function names; values are template fragments. The set of
functions is fixed per tool release. Iteration order carries no meaning:
assemble_template sorts names before concatenating.
"""


def lookup_function(
    name: str, catalogue: Mapping[str, str] = FUNCTION_CATALOGUE
) -> str | None:
    """Return the template fragment for name, or None if not catalogued."""
    return catalogue.get(name)


def fragment_summary(fragment: str) -> str:
    """Return the first doc comment line of a fragment without the // marker."""
    for line in fragment.splitlines():
        stripped = line.strip()
        if stripped.startswith("//"):
            return stripped[2:].strip()
    return ""


# ===--- Selection resolver ---=== #


def resolve_selection(
    exclude_names: Iterable[str],
    catalogue: Mapping[str, str] = FUNCTION_CATALOGUE,
) -> frozenset[str]:
    """Return the catalogue names that survive the exclusion list.

    Every excluded name must be in the catalogue. The first unknown name
    aborts resolution; nothing is partially resolved.

    Args:
        exclude_names: Names from --exclude. Duplicates are harmless.
        catalogue: Registry to resolve against.

    Returns:
        Retained function names. Empty input retains the whole catalogue.

    Raises:
        GenerationError: UNKNOWN_FUNCTION naming the first unknown entry.
    """
    excluded: set[str] = set()
    for name in exclude_names:
        if name not in catalogue:
            close = difflib.get_close_matches(name, list(catalogue), n=1)
            suggestion = (
                f"Did you mean {close[0]}?"
                if close
                else "Run --list-functions to see valid names."
            )
            raise GenerationError(
                "UNKNOWN_FUNCTION",
                f"invalid --exclude option: {name} not found",
                suggestion,
                operation=name,
            )
        excluded.add(name)
    return frozenset(name for name in catalogue if name not in excluded)


# ===--- Assembler ---=== #


def template_sections(
    retained: Iterable[str],
    catalogue: Mapping[str, str] = FUNCTION_CATALOGUE,
    header: str = HEADER_TEMPLATE,
) -> list[tuple[str, str]]:
    """Return (source name, template text) pairs in emission order.

    The header comes first under the name "header", followed by each
    retained fragment in ascending lexicographic order of its name, so
    output is byte-for-byte stable whatever order the catalogue or the
    retained set iterate in.

    Raises:
        GenerationError: UNKNOWN_FUNCTION if a retained name is not catalogued.
    """
    sections: list[tuple[str, str]] = [("header", header)]
    for name in sorted(set(retained)):
        fragment = lookup_function(name, catalogue)
        if fragment is None:
            raise GenerationError(
                "UNKNOWN_FUNCTION",
                f"cannot assemble {name}: not found in catalogue",
                operation=name,
            )
        sections.append((name, fragment))
    return sections


def assemble_template(
    retained: Iterable[str],
    catalogue: Mapping[str, str] = FUNCTION_CATALOGUE,
    header: str = HEADER_TEMPLATE,
) -> str:
    """Concatenate the header and retained fragments into one template.

    Args:
        retained: Function names to include, typically from resolve_selection.
        catalogue: Registry holding the fragments.
        header: Fixed preamble text.

    Returns:
        Template text with placeholders still unbound.

    Raises:
        GenerationError: UNKNOWN_FUNCTION if a retained name is not catalogued.
    """
    sections = template_sections(retained, catalogue, header)
    return "".join(text for _name, text in sections)


# ===--- Parametrizer ---=== #

_PLACEHOLDER_RE = re.compile(r"\{\{(.*?)\}\}", re.DOTALL)
_PLACEHOLDER_NAME_RE = re.compile(r"^\.([A-Za-z_][A-Za-z0-9_]*)$")
_PLACEHOLDER_HINT = "Placeholders must be one of: " + ", ".join(
    f"{{{{ .{name} }}}}" for name in PLACEHOLDER_NAMES
)


def _unresolved(
    source: str, template_text: str, offset: int, text: str
) -> GenerationError:
    line_no = template_text.count("\n", 0, offset) + 1
    return GenerationError(
        "UNRESOLVED_PLACEHOLDER",
        f"{source}:{line_no}: {text}",
        _PLACEHOLDER_HINT,
        operation=source,
    )


def _check_stray_delimiters(
    template_text: str, start: int, end: int, source: str
) -> None:
    positions = [
        pos
        for pos in (
            template_text.find("{{", start, end),
            template_text.find("}}", start, end),
        )
        if pos >= 0
    ]
    if not positions:
        return
    offset = min(positions)
    line_start = template_text.rfind("\n", 0, offset) + 1
    line_end = template_text.find("\n", offset)
    if line_end < 0:
        line_end = len(template_text)
    line_text = template_text[line_start:line_end].strip()
    raise _unresolved(
        source, template_text, offset, f"unterminated placeholder in {line_text!r}"
    )


def parametrize(
    template_text: str, params: GenerationParams, source: str = "<template>"
) -> str:
    """Bind PkgName, TypeName and Constraint into template_text.

    A single substitution pass: every {{ .Name }} placeholder is replaced by
    its bound value, and replacement text is never re-scanned. Any other
    {{ ... }} form, a placeholder split across lines, or a stray {{ or }}
    is a catalogue defect and aborts the whole pass.

    Raises:
        GenerationError: UNRESOLVED_PLACEHOLDER with source and line number.
    """
    bindings = params.bindings()
    pieces: list[str] = []
    last = 0
    for match in _PLACEHOLDER_RE.finditer(template_text):
        _check_stray_delimiters(template_text, last, match.start(), source)
        inner = match.group(1)
        name_match = _PLACEHOLDER_NAME_RE.match(inner.strip())
        if (
            "\n" in inner
            or name_match is None
            or name_match.group(1) not in bindings
        ):
            raise _unresolved(
                source,
                template_text,
                match.start(),
                f"unknown placeholder {match.group(0)}",
            )
        pieces.append(template_text[last : match.start()])
        pieces.append(bindings[name_match.group(1)])
        last = match.end()
    _check_stray_delimiters(template_text, last, len(template_text), source)
    pieces.append(template_text[last:])
    return "".join(pieces)


def render_source(
    retained: Iterable[str],
    params: GenerationParams,
    catalogue: Mapping[str, str] = FUNCTION_CATALOGUE,
    header: str = HEADER_TEMPLATE,
) -> str:
    """Parametrize the header and each retained fragment under its own name.

    Joins to the same text as parametrize(assemble_template(...)), but a
    defect is reported against the fragment it lives in.
    """
    return "".join(
        parametrize(text, params, source=name)
        for name, text in template_sections(retained, catalogue, header)
    )


def generate_source(
    params: GenerationParams,
    exclude_names: Iterable[str] = (),
    catalogue: Mapping[str, str] = FUNCTION_CATALOGUE,
) -> str:
    """Run resolve -> assemble -> parametrize and return the Go source."""
    retained = resolve_selection(exclude_names, catalogue)
    return render_source(retained, params, catalogue)


# ===--- Catalogue checks ---=== #

_CHECK_PARAMS = GenerationParams(
    package_name="check", type_name="Collection", constraint=DEFAULT_CONSTRAINT
)


@dataclass(frozen=True)
class CatalogueIssue:
    code: str
    operation: str
    message: str


def find_fragment_references(
    catalogue: Mapping[str, str] = FUNCTION_CATALOGUE,
) -> dict[str, tuple[str, ...]]:
    """Map each function to other catalogue functions its fragment calls.

    Only unqualified calls count: `iterator.Fold[...]` refers to the dogs
    package, while a bare `Fold[...]` or `Fold(...)` refers to the generated
    function of the same name. A function's own definition is ignored.
    Functions without references are omitted from the result.
    """
    references: dict[str, tuple[str, ...]] = {}
    for name in sorted(catalogue):
        fragment = catalogue[name]
        called = tuple(
            other
            for other in sorted(catalogue)
            if other != name
            and re.search(rf"(?<![\w.]){re.escape(other)}\s*[\[(]", fragment)
        )
        if called:
            references[name] = called
    return references


def check_catalogue(
    catalogue: Mapping[str, str] = FUNCTION_CATALOGUE,
    header: str = HEADER_TEMPLATE,
) -> list[CatalogueIssue]:
    """Validate every fragment in isolation.

    Checks that the header and each fragment parametrize cleanly and that
    no fragment depends on another catalogue function.

    Returns:
        Issues sorted by operation name, header first. Empty when the
        catalogue is sound.
    """
    issues: list[CatalogueIssue] = []
    sources = [("header", header)]
    sources.extend((name, catalogue[name]) for name in sorted(catalogue))
    for source, text in sources:
        try:
            parametrize(text, _CHECK_PARAMS, source=source)
        except GenerationError as err:
            issues.append(CatalogueIssue(err.code, source, err.message))

    for name, called in find_fragment_references(catalogue).items():
        issues.append(
            CatalogueIssue(
                "FRAGMENT_REFERENCE",
                name,
                f"{name} calls {', '.join(called)}; fragments must only use header imports",
            )
        )
    return issues


# ===--- Syntax verification ---=== #


def verify_go_source(text: str, gofmt: str = DEFAULT_GOFMT) -> None:
    """Parse text with `gofmt -e` and fail on any syntax error.

    Raises:
        GenerationError: GOFMT_NOT_FOUND when the binary is missing,
            SYNTAX_CHECK_FAILED with gofmt's diagnostics otherwise.
    """
    try:
        result = subprocess.run(
            [gofmt, "-e"],
            input=text,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as err:
        raise GenerationError(
            "GOFMT_NOT_FOUND",
            f"{gofmt} not found on PATH",
            "Install Go or drop --verify.",
        ) from err

    if result.returncode != 0:
        raise GenerationError(
            "SYNTAX_CHECK_FAILED",
            f"generated source does not parse:\n{result.stderr.strip()}",
            "Check --name and --constraint for typos.",
        )


# ===--- Discovery commands ---=== #


def filter_functions_by_text(
    names: Iterable[str], filter_text: str
) -> list[str]:
    """Case-insensitive substring filter over function names."""
    needle = filter_text.lower()
    return [name for name in names if needle in name.lower()]


def format_functions_table(
    names: list[str], catalogue: Mapping[str, str] = FUNCTION_CATALOGUE
) -> str:
    """Return the --list-functions output as a string.

    Output format:

        11 functions in gen-collection catalogue:

          Filter         Filter returns a collection that only returns ...
          Find           Find returns a first element in xs that ...

    Rows follow the order of names; callers pass them sorted.
    """
    lines = [f"{len(names)} functions in {TOOL_NAME} catalogue:", ""]
    name_width = max((len(name) for name in names), default=0)
    for name in names:
        summary = fragment_summary(catalogue[name])
        lines.append(f"  {name.ljust(name_width)}  {summary}".rstrip())
    lines.append("")
    return "\n".join(lines)


def format_catalogue_issues(issues: list[CatalogueIssue], checked: int) -> str:
    if not issues:
        return f"Catalogue OK: {checked} functions checked.\n"
    lines = [f"{len(issues)} catalogue issues:", ""]
    for issue in issues:
        lines.append(f"  [{issue.code}] {issue.operation}: {issue.message}")
    lines.append("")
    return "\n".join(lines)


def run_discovery(config: DiscoveryConfig) -> None:
    """Execute the discovery command specified in config.

    "list-functions"  -> sorted names -> [filter] -> format_functions_table -> print
    "check-catalogue" -> check_catalogue -> format_catalogue_issues -> print

    Raises:
        SystemExit(1): When check-catalogue finds any issue.
    """
    if config.command == "list-functions":
        names = sorted(FUNCTION_CATALOGUE)
        if config.filter_text is not None:
            names = filter_functions_by_text(names, config.filter_text)
        print(format_functions_table(names), end="")

    elif config.command == "check-catalogue":
        issues = check_catalogue()
        report = format_catalogue_issues(issues, checked=len(FUNCTION_CATALOGUE))
        if issues:
            print(report, end="", file=sys.stderr)
            raise SystemExit(1)
        print(report, end="")


# ===--- Output writer ---=== #


@dataclass(frozen=True)
class FileWriteResult:
    """Result of writing the generated file.

    Attributes:
        filename: Basename written, e.g. "zz_generated.collection.go".
        path: Absolute path of the written file.
        line_count: Number of newline characters in the content.
        byte_count: Number of bytes written (UTF-8 encoded).
    """

    filename: str
    path: Path
    line_count: int
    byte_count: int


def write_output(path: Path, content: str) -> FileWriteResult:
    """Write generated source verbatim, creating parent directories.

    Raises:
        OSError: Propagated directly if the filesystem write fails.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="")
    resolved = path.resolve()
    return FileWriteResult(
        filename=path.name,
        path=resolved,
        line_count=content.count("\n"),
        byte_count=len(resolved.read_bytes()),
    )


# ===--- Generation summary ---=== #


@dataclass(frozen=True)
class GenerationSummary:
    """Immutable data for the post-generation console report.

    Attributes:
        params: Values bound into the template.
        functions: Emitted function names, in output order.
        excluded: Excluded function names, sorted and deduplicated.
        file: Write result for the output file.
    """

    params: GenerationParams
    functions: tuple[str, ...]
    excluded: tuple[str, ...]
    file: FileWriteResult


def build_generation_summary(
    params: GenerationParams,
    retained: Iterable[str],
    file: FileWriteResult,
    catalogue: Mapping[str, str] = FUNCTION_CATALOGUE,
) -> GenerationSummary:
    functions = tuple(sorted(set(retained)))
    excluded = tuple(sorted(name for name in catalogue if name not in functions))
    return GenerationSummary(
        params=params, functions=functions, excluded=excluded, file=file
    )


def format_generation_summary(
    summary: GenerationSummary, catalogue_size: int = len(FUNCTION_CATALOGUE)
) -> str:
    """Render a GenerationSummary as a console report with a trailing newline."""
    params = summary.params
    lines: list[str] = [
        f"{params.type_name} collection functions generated:",
        "",
        f"  Package:     {params.package_name}",
        f"  Type:        {params.type_name}",
        f"  Constraint:  {params.constraint}",
        f"  Output:      {summary.file.path}",
        "",
        f"  Functions:   {len(summary.functions)} of {catalogue_size}",
    ]
    if summary.functions:
        lines.append(f"    {', '.join(summary.functions)}")
    if summary.excluded:
        lines.append(f"  Excluded:    {', '.join(summary.excluded)}")
    lines.append("")
    lines.append(
        f"  Written: {summary.file.line_count:,} lines, "
        f"{summary.file.byte_count:,} bytes"
    )
    lines.append("")
    return "\n".join(lines)


def print_generation_summary(summary: GenerationSummary) -> None:
    print(format_generation_summary(summary), end="")


# ===--- Pipeline ---=== #


def run_generate(config: GenerateConfig) -> FileWriteResult:
    """Generate the collection file described by config.

    The full text is produced (and optionally verified) before the output
    file is opened, so a failure never leaves a partial file behind.

    Raises:
        GenerationError: Unknown --exclude entry, catalogue defect, or
            failed --verify.
        OSError: Filesystem write failure.
    """
    params = config.params
    print(f"Generating: {params.type_name} in package {params.package_name}")

    retained = resolve_selection(config.exclude)
    print(
        f"  Selected: {len(retained)} of {len(FUNCTION_CATALOGUE)} functions"
    )

    source = render_source(retained, params)

    if config.verify:
        verify_go_source(source)
        print("  Verified: gofmt -e")

    result = write_output(config.output, source)
    print(f"  Written: {result.path}")

    print_generation_summary(build_generation_summary(params, retained, result))
    return result


# ===--- Main generation ---=== #


def _report(kind: str, err: ConfigError | GenerationError) -> None:
    print(f"{kind} [{err.code}]: {err.message}", file=sys.stderr)
    if err.suggestion:
        print(f"Hint: {err.suggestion}", file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    try:
        config = build_config(argv)
    except ConfigError as err:
        _report("Config error", err)
        raise SystemExit(1) from err

    if isinstance(config, DiscoveryConfig):
        run_discovery(config)
        return

    try:
        run_generate(config)
    except GenerationError as err:
        _report("Generation error", err)
        raise SystemExit(1) from err
    except OSError as err:
        print(f"Error: {err}", file=sys.stderr)
        raise SystemExit(1) from err


if __name__ == "__main__":
    main()
