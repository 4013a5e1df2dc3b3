"""The columnar style.

Single-line-first layout: lists, lambdas and applicative chains are tried on
one line and only broken when they overflow; multi-line forms align on
columns (import names, case arrows, ``=>``/``->`` in signatures, list commas,
record commas, constructor bars).

Extended kinds: import, context, deriving, type, exp, rhs, decl, condecl,
guarded-alts. Every other kind renders with the structural defaults.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sangria.config import StyleConfig
from sangria.default import (
    OPEN_ENDED,
    prefix_name,
    pretty_wrapped,
    render_match_head,
    render_where,
    spaced_pattern_args,
)
from sangria.nodes import (
    BDecls,
    Case,
    ConDecl,
    Context,
    DataDecl,
    Deriving,
    Do,
    FunBind,
    ImportDecl,
    InfixApp,
    Lambda,
    Let,
    List,
    NodeKind,
    Op,
    PatBind,
    RecDecl,
    TyApp,
    TyForall,
    TyFun,
    UnGuardedAlt,
    UnGuardedRhs,
)
from sangria.style import StyleBuilder
from sangria.utils.logger import get_logger

if TYPE_CHECKING:
    from sangria.nodes import Alt, Binds, Exp, Node, Pat, Rhs, Type
    from sangria.printer import Printer

logger = get_logger(__name__)

# Width of "-> " / "=> ": continuation arrows start this far left of the operand
_ARROW_WIDTH = 3

_builder = StyleBuilder(
    "columnar",
    description="Column-aligned layout that tries every construct on one line first",
    author="sangria developers",
    default_config=StyleConfig(
        max_columns=100,
        indent_spaces=2,
        clear_empty_lines=True,
        options={
            "align_case_alternatives": True,
            "align_qualified_imports": True,
        },
    ),
)


# =============================================================================
# Imports, contexts, deriving
# =============================================================================


@_builder.extends(NodeKind.IMPORT)
def render_import(p: Printer, node: ImportDecl) -> None:
    """Pad unqualified imports so every module name starts in one column."""
    p.write("import ")
    if node.qualified:
        p.write("qualified ")
    elif p.config.option("align_qualified_imports", True):
        p.write(" " * len("qualified "))
    p.write(node.module)
    if node.as_name:
        p.write(f" as {node.as_name}")
    if node.specs is not None:
        p.space()
        p.pretty(node.specs)


@_builder.extends(NodeKind.CONTEXT)
def render_context(p: Printer, node: Context) -> None:
    if len(node.assertions) == 1:
        p.pretty_default(node)
        return
    with p.parens():
        p.inter(", ", node.assertions)


@_builder.extends(NodeKind.DERIVING)
def render_deriving(p: Printer, node: Deriving) -> None:
    p.write("deriving ")
    if len(node.classes) == 1:
        p.write(node.classes[0])
    else:
        with p.parens():
            p.inter(", ", node.classes)


# =============================================================================
# Types
# =============================================================================


@_builder.extends(NodeKind.TYPE)
def render_type(p: Printer, node: Type) -> None:
    """Keep signatures on one line only if they were written on one line."""
    match node:
        case TyForall(context=Context() as ctx):
            if node.binders:
                p.write("forall ")
                p.spaced(node.binders)
                p.write(". ")
            if all(ctx.span.same_line(ty.span) for ty in collect_types(node.body)):
                p.pretty(ctx)
                p.write(" => ")
                p.pretty(node.body)
            else:
                _break_before_arrow(p, ctx, "=> ", node.body)
        case TyFun():
            if all(node.arg.span.same_line(ty.span) for ty in collect_types(node)):
                p.pretty_default(node)
            else:
                _break_before_arrow(p, node.arg, "-> ", node.result)
        case _:
            p.pretty_default(node)


def collect_types(ty: Type) -> list[Type]:
    """Operands of a right-nested arrow chain, left to right."""
    types: list[Type] = []
    while isinstance(ty, TyFun):
        types.append(ty.arg)
        ty = ty.result
    types.append(ty)
    return types


def _break_before_arrow(p: Printer, first: Node, arrow: str, rest: Type) -> None:
    col = p.get_column()
    pretty_wrapped(p, first, isinstance(first, TyFun | TyForall))
    with p.column(col - _ARROW_WIDTH):
        p.newline()
        p.write(arrow)
        with p.indented(_ARROW_WIDTH):
            p.pretty(rest)


# =============================================================================
# Expressions
# =============================================================================


@_builder.extends(NodeKind.EXP)
def render_exp(p: Printer, node: Exp) -> None:
    match node:
        case Let():
            _render_let(p, node)
        case Do():
            _render_do(p, node)
        case List():
            _render_list(p, node)
        case InfixApp(op=Op(name="$")):
            _render_dollar(p, node)
        case InfixApp(op=Op(name="<*>")):
            _render_applicative(p, node)
        case Lambda():
            _render_lambda(p, node)
        case Case():
            _render_case(p, node)
        case _:
            p.pretty_default(node)


def _render_let(p: Printer, node: Let) -> None:
    let_col = p.get_column()
    with p.hanging("let "):
        p.pretty(node.binds)
    with p.column(let_col):
        p.newline()
        p.write("in ")
        p.pretty(node.body)


def _render_do(p: Printer, node: Do) -> None:
    p.write("do")
    with p.indented(p.config.indent_spaces):
        for stmt in node.stmts:
            p.newline()
            p.pretty(stmt)


def _render_list(p: Printer, node: List) -> None:
    if not node.elems:
        p.write("[]")
        return

    def single_line() -> None:
        with p.brackets():
            p.inter(", ", node.elems)

    def multi_line() -> None:
        with p.with_indent():
            for i, elem in enumerate(node.elems):
                if i:
                    p.newline()
                p.write(", " if i else "[ ")
                with p.with_indent():
                    p.pretty(elem)
            p.newline()
            p.write("]")

    p.attempt_single_line(single_line, multi_line)


def _render_dollar(p: Printer, node: InfixApp) -> None:
    """``f $ x``; a ``case`` on the right always starts on its own line."""
    pretty_wrapped(p, node.left, isinstance(node.left, OPEN_ENDED))
    p.space()
    p.pretty(node.op)
    if isinstance(node.right, Case):
        p.newline()
        with p.indented(p.config.indent_spaces):
            p.pretty(node.right)
    else:
        p.space()
        p.pretty(node.right)


def applicative_operands(node: Exp) -> list[Exp] | None:
    """Flatten ``f <$> a <*> b <*> c`` into ``[f, a, b, c]``.

    Returns None unless the chain is a left-nested ``<*>`` spine with a
    ``<$>`` at its bottom.
    """
    match node:
        case InfixApp(op=Op(name="<$>")):
            return [node.left, node.right]
        case InfixApp(op=Op(name="<*>")):
            start = applicative_operands(node.left)
            return None if start is None else [*start, node.right]
        case _:
            return None


def _render_applicative(p: Printer, node: InfixApp) -> None:
    operands = applicative_operands(node)
    if operands is None:
        p.pretty_default(node)
        return
    first, second, *rest = operands

    def operand(exp: Exp, last: bool = False) -> None:
        pretty_wrapped(p, exp, not last and isinstance(exp, OPEN_ENDED))

    def single_line() -> None:
        operand(first)
        p.write(" <$> ")
        operand(second)
        for i, exp in enumerate(rest):
            p.write(" <*> ")
            operand(exp, last=i == len(rest) - 1)

    def multi_line() -> None:
        operand(first)
        p.space()
        with p.with_indent():
            p.write("<$> ")
            operand(second)
            for i, exp in enumerate(rest):
                p.newline()
                p.write("<*> ")
                operand(exp, last=i == len(rest) - 1)

    p.attempt_single_line(single_line, multi_line)


def _render_lambda(p: Printer, node: Lambda) -> None:
    p.write("\\")
    spaced_pattern_args(p, node.pats)
    p.write(" ->")

    def same_line() -> None:
        p.space()
        p.pretty(node.body)

    def next_line() -> None:
        p.newline()
        with p.indented(p.config.indent_spaces):
            p.pretty(node.body)

    p.attempt_single_line(same_line, next_line)


def _render_case(p: Printer, node: Case) -> None:
    """Case with arrows aligned when every alternative fits on one line."""
    all_single = all(_renders_on_one_line(p, alt) for alt in node.alts)

    with p.hanging("case "):
        p.pretty(node.scrutinee)
        p.write(" of")

    with p.indented(p.config.indent_spaces):
        if all_single and node.alts and p.config.option("align_case_alternatives", True):
            width = max(_pattern_width(p, alt.pat) for alt in node.alts)
            for alt in node.alts:
                p.newline()
                _render_padded_alt(p, alt, width)
        else:
            for alt in node.alts:
                p.newline()
                p.pretty(alt)


def _renders_on_one_line(p: Printer, alt: Alt) -> bool:
    def measure() -> bool:
        line = p.get_line()
        p.pretty(alt)
        return p.get_line() == line

    single, _ = p.sandbox(measure)
    return single


def _pattern_width(p: Printer, pat: Pat) -> int:
    def measure() -> int:
        col = p.get_column()
        p.pretty(pat)
        return p.get_column() - col

    width, _ = p.sandbox(measure)
    return width


def _render_padded_alt(p: Printer, alt: Alt, width: int) -> None:
    col = p.get_column()
    p.pretty(alt.pat)
    p.write(" " * (width - (p.get_column() - col)))
    p.pretty(alt.alts)
    render_where(p, alt.binds)


# =============================================================================
# Right-hand sides & alternatives
# =============================================================================


@_builder.extends(NodeKind.RHS)
def render_rhs(p: Printer, node: Rhs) -> None:
    match node:
        case UnGuardedRhs():
            p.write(" = ")
            p.pretty(node.body)
        case _:
            p.pretty_default(node)


@_builder.extends(NodeKind.GUARDED_ALTS)
def render_guarded_alts(p: Printer, node: Node) -> None:
    match node:
        case UnGuardedAlt():
            p.write(" -> ")
            p.pretty(node.body)
        case _:
            p.pretty_default(node)


# =============================================================================
# Declarations
# =============================================================================


@_builder.extends(NodeKind.DECL)
def render_decl(p: Printer, node: Node) -> None:
    match node:
        case DataDecl(context=None):
            _render_data(p, node)
        case PatBind():
            p.pretty(node.pat)
            _render_fun_body(p, node.rhs, node.binds)
        case FunBind():
            for i, eq in enumerate(node.matches):
                if i:
                    p.newline()
                render_match_head(p, eq)
                _render_fun_body(p, eq.rhs, eq.binds)
        case _:
            p.pretty_default(node)


def _render_data(p: Printer, node: DataDecl) -> None:
    p.write(f"{node.data_or_new} ")
    p.pretty(node.head)
    match node.constructors:
        case ():
            pass
        case (only,):
            p.write(" = ")
            p.pretty(only)
        case (first, *others):
            p.space()
            with p.with_indent():
                p.write("= ")
                p.pretty(first)
                for constructor in others:
                    p.newline()
                    p.write("| ")
                    p.pretty(constructor)

    if node.deriving is not None:
        p.newline()
        with p.indented(p.config.indent_spaces):
            p.pretty(node.deriving)


def _render_fun_body(p: Printer, rhs: Rhs, binds: Binds | None) -> None:
    p.pretty(rhs)
    if binds is None:
        return

    p.newline()
    if isinstance(rhs, UnGuardedRhs) and isinstance(rhs.body, Do):
        p.newline()
    indent = p.config.indent_spaces
    with p.indented(indent):
        p.write("where")
        with p.indented(indent):
            p.newline()
            write_where_binds(p, binds)


def write_where_binds(p: Printer, binds: Binds) -> None:
    """Bindings one per line, keeping the blank lines the source had between them."""
    if not isinstance(binds, BDecls) or not binds.decls:
        p.pretty(binds)
        return

    first, *rest = binds.decls
    p.pretty(first)
    previous = first
    for current in rest:
        delta = current.span.lineno - previous.span.last_line
        if delta < 0:
            logger.warning(
                "Binding at %s starts before the previous one ends (line %d); "
                "inserting no blank lines",
                current.span,
                previous.span.last_line,
            )
        p.newline()
        for _ in range(max(delta - 1, 0)):
            p.newline()
        p.pretty(current)
        previous = current


# =============================================================================
# Constructors
# =============================================================================


@_builder.extends(NodeKind.CONDECL)
def render_condecl(p: Printer, node: Node) -> None:
    match node:
        case ConDecl():
            p.write(prefix_name(node.name))
            with p.with_indent():
                for ty in node.args:
                    p.space()
                    pretty_wrapped(p, ty, isinstance(ty, TyApp | TyFun | TyForall))
        case RecDecl():
            _render_record(p, node)
        case _:
            p.pretty_default(node)


def _render_record(p: Printer, node: RecDecl) -> None:
    p.write(f"{prefix_name(node.name)} ")
    with p.with_indent():
        p.write("{ ")
        match node.fields:
            case ():
                pass
            case (only,):
                p.pretty(only)
                # A space here would detach a trailing comment from its field
                if not p.state.eol_comment:
                    p.space()
            case (first, *others):
                p.pretty(first)
                p.newline()
                for field_decl in others:
                    p.comma()
                    p.space()
                    p.pretty(field_decl)
                    p.newline()
        p.write("}")


COLUMNAR = _builder.build()
