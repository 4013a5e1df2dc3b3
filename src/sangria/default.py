"""Structural default renderer.

Renders every node class with only the punctuation the grammar requires,
recursing through ``Printer.pretty`` so style extenders still apply to the
children. It has no width-fitting logic: layout decisions belong to styles.

Parentheses are inserted where the tree has no explicit ``Paren`` /
``TyParen`` / ``PParen`` but the grammar would otherwise parse differently
(application arguments, function-type arguments, constructor patterns in
argument position).

Unknown shapes raise UnhandledNodeError; a render either completes or
produces nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sangria.errors import UnhandledNodeError
from sangria.nodes import (
    Alt,
    App,
    BDecls,
    Case,
    ClassAssertion,
    Con,
    ConDecl,
    Context,
    DataDecl,
    DeclHead,
    Deriving,
    Do,
    FieldDecl,
    FunBind,
    Generator,
    GuardedAlt,
    GuardedAlts,
    GuardedRhs,
    GuardedRhss,
    If,
    ImportDecl,
    ImportSpecList,
    InfixApp,
    Lambda,
    Let,
    LetStmt,
    List,
    Lit,
    Match,
    Module,
    Node,
    Op,
    Paren,
    PatBind,
    PCon,
    PList,
    PLit,
    PParen,
    PTuple,
    PVar,
    PWildcard,
    Qualifier,
    RecDecl,
    Tuple,
    TyApp,
    TyCon,
    TyForall,
    TyFun,
    TyList,
    TyParen,
    TyTuple,
    TyVar,
    TypeDecl,
    TypeSig,
    UnGuardedAlt,
    UnGuardedRhs,
    Var,
)

if TYPE_CHECKING:
    from sangria.nodes import Binds, Decl
    from sangria.printer import Printer

_SYMBOL_CHARS = frozenset("!#$%&*+./<=>?@\\^|-~:")

# Expressions that extend as far right as possible
OPEN_ENDED = Lambda | Let | If | Case | Do


def is_operator_name(name: str) -> bool:
    """Whether ``name`` is symbolic and must be parenthesized in prefix position."""
    return bool(name) and all(ch in _SYMBOL_CHARS for ch in name)


def prefix_name(name: str) -> str:
    return f"({name})" if is_operator_name(name) else name


def infix_name(name: str) -> str:
    return name if is_operator_name(name) else f"`{name}`"


def render_default(p: Printer, node: Node) -> None:
    """Render ``node`` structurally."""
    match node:
        # -- Module & imports ------------------------------------------------
        case Module():
            _render_module(p, node)
        case ImportDecl():
            p.write("import ")
            if node.qualified:
                p.write("qualified ")
            p.write(node.module)
            if node.as_name:
                p.write(f" as {node.as_name}")
            if node.specs is not None:
                p.space()
                p.pretty(node.specs)
        case ImportSpecList():
            if node.hiding:
                p.write("hiding ")
            with p.parens():
                p.inter(", ", [prefix_name(n) for n in node.names])

        # -- Contexts --------------------------------------------------------
        case Context():
            if len(node.assertions) == 1:
                p.pretty(node.assertions[0])
            else:
                with p.parens():
                    p.inter(",", node.assertions)
        case ClassAssertion():
            p.write(node.class_name)
            for ty in node.types:
                p.space()
                pretty_wrapped(p, ty, isinstance(ty, TyApp | TyFun | TyForall))
        case Deriving():
            p.write("deriving ")
            if len(node.classes) == 1:
                p.write(node.classes[0])
            else:
                with p.parens():
                    p.inter(",", node.classes)

        # -- Types -----------------------------------------------------------
        case TyCon() | TyVar():
            p.write(node.name)
        case TyApp():
            pretty_wrapped(p, node.fn, isinstance(node.fn, TyFun | TyForall))
            p.space()
            pretty_wrapped(p, node.arg, isinstance(node.arg, TyApp | TyFun | TyForall))
        case TyFun():
            pretty_wrapped(p, node.arg, isinstance(node.arg, TyFun | TyForall))
            p.write(" -> ")
            p.pretty(node.result)
        case TyList():
            with p.brackets():
                p.pretty(node.elem)
        case TyTuple():
            with p.parens():
                p.inter(",", node.elems)
        case TyParen():
            with p.parens():
                p.pretty(node.inner)
        case TyForall():
            if node.binders:
                p.write("forall ")
                p.spaced(node.binders)
                p.write(". ")
            if node.context is not None:
                p.pretty(node.context)
                p.write(" => ")
            p.pretty(node.body)

        # -- Expressions -----------------------------------------------------
        case Var() | Con():
            p.write(prefix_name(node.name))
        case Lit():
            p.write(node.text)
        case Op():
            p.write(node.name if node.is_symbol else f"`{node.name}`")
        case App():
            pretty_wrapped(p, node.fn, isinstance(node.fn, InfixApp | OPEN_ENDED))
            p.space()
            pretty_wrapped(p, node.arg, isinstance(node.arg, App | InfixApp | OPEN_ENDED))
        case InfixApp():
            pretty_wrapped(p, node.left, isinstance(node.left, OPEN_ENDED))
            p.space()
            p.pretty(node.op)
            p.space()
            p.pretty(node.right)
        case Lambda():
            p.write("\\")
            spaced_pattern_args(p, node.pats)
            p.write(" -> ")
            p.pretty(node.body)
        case Let():
            with p.hanging("let "):
                p.pretty(node.binds)
            p.write(" in ")
            p.pretty(node.body)
        case If():
            p.write("if ")
            p.pretty(node.cond)
            p.write(" then ")
            p.pretty(node.then)
            p.write(" else ")
            p.pretty(node.otherwise)
        case Case():
            p.write("case ")
            p.pretty(node.scrutinee)
            p.write(" of")
            with p.indented(p.config.indent_spaces):
                for alt in node.alts:
                    p.newline()
                    p.pretty(alt)
        case Do():
            with p.hanging("do "):
                p.lined(node.stmts)
        case List():
            with p.brackets():
                p.inter(",", node.elems)
        case Tuple():
            with p.parens():
                p.inter(",", node.elems)
        case Paren():
            with p.parens():
                p.pretty(node.inner)

        # -- Statements ------------------------------------------------------
        case Generator():
            p.pretty(node.pat)
            p.write(" <- ")
            p.pretty(node.exp)
        case Qualifier():
            p.pretty(node.exp)
        case LetStmt():
            with p.hanging("let "):
                p.pretty(node.binds)

        # -- Patterns --------------------------------------------------------
        case PVar():
            p.write(prefix_name(node.name))
        case PLit():
            p.write(node.text)
        case PWildcard():
            p.write("_")
        case PCon():
            p.write(prefix_name(node.name))
            if node.args:
                p.space()
                spaced_pattern_args(p, node.args)
        case PTuple():
            with p.parens():
                p.inter(",", node.elems)
        case PList():
            with p.brackets():
                p.inter(",", node.elems)
        case PParen():
            with p.parens():
                p.pretty(node.inner)

        # -- Bindings, right-hand sides, alternatives -------------------------
        case BDecls():
            p.lined(node.decls)
        case UnGuardedRhs():
            p.write(" = ")
            with p.indented(p.config.indent_spaces):
                p.pretty(node.body)
        case GuardedRhss():
            with p.indented(p.config.indent_spaces):
                for guard in node.guards:
                    p.newline()
                    p.pretty(guard)
        case GuardedRhs():
            p.write("| ")
            p.inter(", ", node.guards)
            p.write(" = ")
            p.pretty(node.body)
        case Alt():
            p.pretty(node.pat)
            p.pretty(node.alts)
            render_where(p, node.binds)
        case UnGuardedAlt():
            p.write(" -> ")
            with p.indented(p.config.indent_spaces):
                p.pretty(node.body)
        case GuardedAlts():
            with p.indented(p.config.indent_spaces):
                for alt in node.alts:
                    p.newline()
                    p.pretty(alt)
        case GuardedAlt():
            p.write("| ")
            p.inter(", ", node.guards)
            p.write(" -> ")
            p.pretty(node.body)

        # -- Declarations ----------------------------------------------------
        case TypeSig():
            p.inter(", ", [prefix_name(n) for n in node.names])
            p.write(" :: ")
            p.pretty(node.type)
        case FunBind():
            p.lined(node.matches)
        case Match():
            render_match_head(p, node)
            p.pretty(node.rhs)
            render_where(p, node.binds)
        case PatBind():
            p.pretty(node.pat)
            p.pretty(node.rhs)
            render_where(p, node.binds)
        case DataDecl():
            p.write(f"{node.data_or_new} ")
            if node.context is not None:
                p.pretty(node.context)
                p.write(" => ")
            p.pretty(node.head)
            if node.constructors:
                p.write(" = ")
                p.inter(" | ", node.constructors)
            if node.deriving is not None:
                p.space()
                p.pretty(node.deriving)
        case TypeDecl():
            p.write("type ")
            p.pretty(node.head)
            p.write(" = ")
            p.pretty(node.type)
        case DeclHead():
            p.spaced([node.name, *node.tyvars])
        case ConDecl():
            p.write(prefix_name(node.name))
            for ty in node.args:
                p.space()
                pretty_wrapped(p, ty, isinstance(ty, TyApp | TyFun | TyForall))
        case RecDecl():
            p.write(f"{node.name} ")
            with p.with_indent():
                p.write("{")
                p.inter(", ", node.fields)
                p.write("}")
        case FieldDecl():
            p.inter(", ", [prefix_name(n) for n in node.names])
            p.write(" :: ")
            p.pretty(node.type)
            if node.comment is not None:
                p.write_comment(node.comment)

        case _:
            raise UnhandledNodeError(node)


def render_match_head(p: Printer, match: Match) -> None:
    """Equation head: ``f x y``, or ``x <+> y`` for infix equations."""
    if match.infix and match.pats:
        left, *rest = match.pats
        spaced_pattern_args(p, (left,))
        p.write(f" {infix_name(match.name)}")
        if rest:
            p.space()
            spaced_pattern_args(p, tuple(rest))
        return
    p.write(prefix_name(match.name))
    if match.pats:
        p.space()
        spaced_pattern_args(p, match.pats)


def render_where(p: Printer, binds: Binds | None) -> None:
    """``where`` on a new line one indent deeper, bindings hanging after it."""
    if binds is None:
        return
    p.newline()
    with p.indented(p.config.indent_spaces), p.hanging("where "):
        p.pretty(binds)


def declared_names(decl: Decl) -> frozenset[str]:
    """Names a declaration signs or binds (empty for data/type declarations)."""
    match decl:
        case TypeSig():
            return frozenset(decl.names)
        case FunBind() if decl.matches:
            return frozenset({decl.matches[0].name})
        case PatBind(pat=PVar(name=name)):
            return frozenset({name})
        case _:
            return frozenset()


def _render_module(p: Printer, module: Module) -> None:
    started = False
    if module.name is not None:
        p.write(f"module {module.name}")
        if module.exports is not None:
            p.write(" ")
            with p.parens():
                p.inter(", ", [prefix_name(n) for n in module.exports])
        p.write(" where")
        started = True

    if module.imports:
        if started:
            p.newline()
            p.newline()
        p.lined(module.imports)
        started = True

    previous: Decl | None = None
    for decl in module.decls:
        if started:
            p.newline()
            # A signature stays glued to the binding it describes
            if not (
                isinstance(previous, TypeSig)
                and declared_names(decl) & declared_names(previous)
            ):
                p.newline()
        p.pretty(decl)
        previous = decl
        started = True

    if started:
        p.newline()


def pretty_wrapped(p: Printer, node: Node, wrap: bool) -> None:
    if wrap:
        with p.parens():
            p.pretty(node)
    else:
        p.pretty(node)


def spaced_pattern_args(p: Printer, pats: tuple[Node, ...]) -> None:
    """Patterns in argument position: applied constructors need parentheses."""
    for i, pat in enumerate(pats):
        if i:
            p.space()
        pretty_wrapped(p, pat, isinstance(pat, PCon) and bool(pat.args))
