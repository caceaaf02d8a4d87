import argparse
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

GENERATOR_DIR = Path(__file__).resolve().parent.parent
if str(GENERATOR_DIR) not in sys.path:
    sys.path.insert(0, str(GENERATOR_DIR))

import gen_collection as gen  # noqa: E402


@pytest.fixture
def make_args(tmp_path: Path) -> Callable[..., argparse.Namespace]:
    def _make_args(**overrides: object) -> argparse.Namespace:
        base_args: dict[str, object] = {
            "pkg": None,
            "name": None,
            "constraint": gen.DEFAULT_CONSTRAINT,
            "exclude": "",
            "out": None,
            "verify": False,
            "list_functions": False,
            "check_catalogue": False,
            "filter": None,
        }
        base_args.update(overrides)
        return argparse.Namespace(**base_args)

    return _make_args


@pytest.fixture
def small_catalogue() -> dict[str, str]:
    # Deliberately not in sorted order.
    return {
        "Sum": (
            "\n// Sum sums up all values in xs.\n"
            "func Sum[T {{ .Constraint }}](xs {{ .TypeName }}[T], m algebra.Monoid[T]) T {\n"
            "\treturn iterator.Fold[T, T](m.Empty(), xs.Iter(), m.Combine)\n"
            "}\n"
        ),
        "Map": (
            "\n// Map returns a collection that applies fn to each element of xs.\n"
            "func Map[T, U {{ .Constraint }}](xs {{ .TypeName }}[T], fn func(T) U) {{ .TypeName }}[U] {\n"
            "\treturn FromIterator[U](iterator.Map[T, U](xs.Iter(), fn))\n"
            "}\n"
        ),
        "Find": (
            "\n// Find returns a first element in xs that satisfies fn.\n"
            "func Find[T {{ .Constraint }}](xs {{ .TypeName }}[T], fn func(T) bool) (T, bool) {\n"
            "\treturn iterator.Find[T](xs.Iter(), fn)\n"
            "}\n"
        ),
    }


@pytest.fixture
def box_params() -> gen.GenerationParams:
    return gen.GenerationParams(package_name="mycoll", type_name="Box", constraint="any")
