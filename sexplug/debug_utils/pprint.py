import json
from typing import Iterable, Optional

from sexplug.types.sexp import Atom, Sexp, SList

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_ATOM = "\033[94m"
COLOR_HOLE = "\033[91m"
COLOR_HEAD = "\033[92m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "max_depth": 16,
    "display_legend": False,
    "color_atoms": False,
    "color_holes": True,
    "color_head": False,
}


# ----------------- Colorize utility -----------------
def colorize(
    atom: Atom,
    holes: frozenset = frozenset(),
    head: bool = False,
    options: dict = DEFAULT_OPTIONS,
) -> str:
    name = str(atom)
    if atom.id in holes and options.get("color_holes", True):
        return f"{COLOR_HOLE}{name}{RESET}"
    if head and options.get("color_head", False):
        return f"{COLOR_HEAD}{name}{RESET}"
    if options.get("color_atoms", False):
        return f"{COLOR_ATOM}{name}{RESET}"
    return name


# ----------------- Pretty printer -----------------
def pprint_expr(
    expr: Sexp,
    indent: int = 0,
    holes: Optional[Iterable[str]] = None,
    options: dict = DEFAULT_OPTIONS,
    _current_depth: int = 0,
    _head: bool = False,
) -> str:
    """
    Render an expression, wrapping lists that do not fit on one line.

    Atoms named in `holes` are highlighted, so unfilled placeholders stand out
    in partially resolved templates.
    """
    holes = frozenset(holes or ())

    legend_str = ""
    if options.get("display_legend", False) and indent == 0:
        legend_items = [
            f"{COLOR_ATOM}Atom{RESET}",
            f"{COLOR_HOLE}Hole{RESET}",
            f"{COLOR_HEAD}List head{RESET}",
        ]
        legend_str = "Color Key: " + " | ".join(legend_items) + "\n"

    if _current_depth >= options.get("max_depth", 16):
        return legend_str + "…"

    if isinstance(expr, Atom):
        return legend_str + colorize(expr, holes, _head, options)

    if isinstance(expr, SList):
        if not expr.items:
            return legend_str + "()"

        parts = [
            pprint_expr(e, indent + 1, holes, options, _current_depth + 1, i == 0)
            for i, e in enumerate(expr.items)
        ]

        single_line = "(" + " ".join(parts) + ")"
        if "\n" not in single_line and len(single_line) + indent * 2 <= options.get("max_line_length", 80):
            return legend_str + single_line

        aligned_lines = ["(" + parts[0]]
        for part in parts[1:]:
            aligned_lines.append("  " * (indent + 1) + part)
        aligned_lines[-1] += ")"
        return legend_str + "\n".join(aligned_lines)

    return legend_str + str(expr)


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    try:
        user_opts = json.loads(json_str)
    except ValueError:
        return dict(DEFAULT_OPTIONS)
    if not isinstance(user_opts, dict):
        return dict(DEFAULT_OPTIONS)
    return {**DEFAULT_OPTIONS, **user_opts}
