"""Typed AST nodes for sangria.

All AST nodes are frozen dataclasses with slots for:
- Immutability: the printer reads trees, it never rewrites them
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: renderers dispatch with match statements

Every node class carries a class-level ``kind`` tag. Styles register at most
one extender per kind, and that extender pattern-matches on the concrete
class, deferring to the default renderer for shapes it leaves alone.

Node Hierarchy (grouped by kind):
MODULE        Module
IMPORT        ImportDecl
IMPORT_SPEC   ImportSpecList
CONTEXT       Context
ASSERTION     ClassAssertion
DERIVING      Deriving
TYPE          TyCon, TyVar, TyApp, TyFun, TyList, TyTuple, TyParen, TyForall
EXP           Var, Con, Lit, App, InfixApp, Lambda, Let, If, Case, Do,
              List, Tuple, Paren
OP            Op
STMT          Generator, Qualifier, LetStmt
PAT           PVar, PLit, PWildcard, PCon, PTuple, PList, PParen
BINDS         BDecls
RHS           UnGuardedRhs, GuardedRhss
GUARDED_RHS   GuardedRhs
ALT           Alt
GUARDED_ALTS  UnGuardedAlt, GuardedAlts
GUARDED_ALT   GuardedAlt
DECL          TypeSig, FunBind, PatBind, DataDecl, TypeDecl
MATCH         Match
DECL_HEAD     DeclHead
CONDECL       ConDecl, RecDecl
FIELD_DECL    FieldDecl

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Literal

from sangria.location import SourceSpan


class NodeKind(Enum):
    """Dispatch tag shared by every node class of one syntactic category."""

    MODULE = "module"
    IMPORT = "import"
    IMPORT_SPEC = "import-spec"
    CONTEXT = "context"
    ASSERTION = "assertion"
    DERIVING = "deriving"
    TYPE = "type"
    EXP = "exp"
    OP = "op"
    STMT = "stmt"
    PAT = "pat"
    BINDS = "binds"
    RHS = "rhs"
    GUARDED_RHS = "guarded-rhs"
    ALT = "alt"
    GUARDED_ALTS = "guarded-alts"
    GUARDED_ALT = "guarded-alt"
    DECL = "decl"
    MATCH = "match"
    DECL_HEAD = "decl-head"
    CONDECL = "condecl"
    FIELD_DECL = "field-decl"


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source span for layout heuristics and error messages.

    """

    kind: ClassVar[NodeKind]

    span: SourceSpan


# =============================================================================
# Module & imports
# =============================================================================


@dataclass(frozen=True, slots=True)
class ImportSpecList(Node):
    """Import list: ``(a, b)`` or ``hiding (a, b)``."""

    kind: ClassVar[NodeKind] = NodeKind.IMPORT_SPEC

    hiding: bool
    names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ImportDecl(Node):
    """``import qualified Data.Map as M (fromList)``."""

    kind: ClassVar[NodeKind] = NodeKind.IMPORT

    module: str
    qualified: bool = False
    as_name: str | None = None
    specs: ImportSpecList | None = None


@dataclass(frozen=True, slots=True)
class Module(Node):
    """A whole source module.

    ``name`` and ``exports`` are None for a headerless module.

    """

    kind: ClassVar[NodeKind] = NodeKind.MODULE

    name: str | None
    exports: tuple[str, ...] | None
    imports: tuple[ImportDecl, ...]
    decls: tuple[Decl, ...]


# =============================================================================
# Contexts & deriving
# =============================================================================


@dataclass(frozen=True, slots=True)
class ClassAssertion(Node):
    """A single constraint, e.g. ``Monad m``."""

    kind: ClassVar[NodeKind] = NodeKind.ASSERTION

    class_name: str
    types: tuple[Type, ...]


@dataclass(frozen=True, slots=True)
class Context(Node):
    """Constraint context preceding ``=>``. Source order is preserved."""

    kind: ClassVar[NodeKind] = NodeKind.CONTEXT

    assertions: tuple[ClassAssertion, ...]


@dataclass(frozen=True, slots=True)
class Deriving(Node):
    """``deriving (Eq, Show)``."""

    kind: ClassVar[NodeKind] = NodeKind.DERIVING

    classes: tuple[str, ...]


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class TyCon(Node):
    """Type constructor: ``Int``, ``Maybe``."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE

    name: str


@dataclass(frozen=True, slots=True)
class TyVar(Node):
    """Type variable: ``a``."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE

    name: str


@dataclass(frozen=True, slots=True)
class TyApp(Node):
    """Type application: ``Maybe a``."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE

    fn: Type
    arg: Type


@dataclass(frozen=True, slots=True)
class TyFun(Node):
    """Function type: ``a -> b``. Right-nested for curried types."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE

    arg: Type
    result: Type


@dataclass(frozen=True, slots=True)
class TyList(Node):
    """List type: ``[a]``."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE

    elem: Type


@dataclass(frozen=True, slots=True)
class TyTuple(Node):
    """Tuple type: ``(a, b)``."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE

    elems: tuple[Type, ...]


@dataclass(frozen=True, slots=True)
class TyParen(Node):
    """Explicitly parenthesized type."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE

    inner: Type


@dataclass(frozen=True, slots=True)
class TyForall(Node):
    """Quantified and/or constrained type: ``forall a. Show a => a -> String``."""

    kind: ClassVar[NodeKind] = NodeKind.TYPE

    binders: tuple[str, ...] | None
    context: Context | None
    body: Type


# =============================================================================
# Expressions
# =============================================================================


@dataclass(frozen=True, slots=True)
class Op(Node):
    """Infix operator.

    Symbolic names (``<$>``) print bare; identifiers (``elem``) print in
    backticks.

    """

    kind: ClassVar[NodeKind] = NodeKind.OP

    name: str

    @property
    def is_symbol(self) -> bool:
        return not (self.name[:1].isalpha() or self.name[:1] == "_")


@dataclass(frozen=True, slots=True)
class Var(Node):
    """Variable reference."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    name: str


@dataclass(frozen=True, slots=True)
class Con(Node):
    """Data constructor reference."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    name: str


@dataclass(frozen=True, slots=True)
class Lit(Node):
    """Literal, stored exactly as written (``42``, ``"hi"``, ``'c'``)."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    text: str


@dataclass(frozen=True, slots=True)
class App(Node):
    """Function application: ``f x``."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    fn: Exp
    arg: Exp


@dataclass(frozen=True, slots=True)
class InfixApp(Node):
    """Infix operator application: ``a + b``."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    left: Exp
    op: Op
    right: Exp


@dataclass(frozen=True, slots=True)
class Lambda(Node):
    r"""Lambda abstraction: ``\x y -> body``."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    pats: tuple[Pat, ...]
    body: Exp


@dataclass(frozen=True, slots=True)
class Let(Node):
    """``let`` bindings ``in`` body."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    binds: Binds
    body: Exp


@dataclass(frozen=True, slots=True)
class If(Node):
    """``if c then a else b``."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    cond: Exp
    then: Exp
    otherwise: Exp


@dataclass(frozen=True, slots=True)
class Case(Node):
    """``case scrutinee of`` alternatives."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    scrutinee: Exp
    alts: tuple[Alt, ...]


@dataclass(frozen=True, slots=True)
class Do(Node):
    """``do`` block."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    stmts: tuple[Stmt, ...]


@dataclass(frozen=True, slots=True)
class List(Node):
    """List literal: ``[a, b, c]``."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    elems: tuple[Exp, ...]


@dataclass(frozen=True, slots=True)
class Tuple(Node):
    """Tuple literal: ``(a, b)``."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    elems: tuple[Exp, ...]


@dataclass(frozen=True, slots=True)
class Paren(Node):
    """Explicitly parenthesized expression."""

    kind: ClassVar[NodeKind] = NodeKind.EXP

    inner: Exp


# =============================================================================
# Statements
# =============================================================================


@dataclass(frozen=True, slots=True)
class Generator(Node):
    """``pat <- exp`` in a do block."""

    kind: ClassVar[NodeKind] = NodeKind.STMT

    pat: Pat
    exp: Exp


@dataclass(frozen=True, slots=True)
class Qualifier(Node):
    """Bare expression statement."""

    kind: ClassVar[NodeKind] = NodeKind.STMT

    exp: Exp


@dataclass(frozen=True, slots=True)
class LetStmt(Node):
    """``let`` statement in a do block."""

    kind: ClassVar[NodeKind] = NodeKind.STMT

    binds: Binds


# =============================================================================
# Patterns
# =============================================================================


@dataclass(frozen=True, slots=True)
class PVar(Node):
    kind: ClassVar[NodeKind] = NodeKind.PAT

    name: str


@dataclass(frozen=True, slots=True)
class PLit(Node):
    kind: ClassVar[NodeKind] = NodeKind.PAT

    text: str


@dataclass(frozen=True, slots=True)
class PWildcard(Node):
    kind: ClassVar[NodeKind] = NodeKind.PAT


@dataclass(frozen=True, slots=True)
class PCon(Node):
    """Constructor pattern: ``Just x``."""

    kind: ClassVar[NodeKind] = NodeKind.PAT

    name: str
    args: tuple[Pat, ...] = ()


@dataclass(frozen=True, slots=True)
class PTuple(Node):
    kind: ClassVar[NodeKind] = NodeKind.PAT

    elems: tuple[Pat, ...]


@dataclass(frozen=True, slots=True)
class PList(Node):
    kind: ClassVar[NodeKind] = NodeKind.PAT

    elems: tuple[Pat, ...]


@dataclass(frozen=True, slots=True)
class PParen(Node):
    kind: ClassVar[NodeKind] = NodeKind.PAT

    inner: Pat


# =============================================================================
# Bindings, right-hand sides, alternatives
# =============================================================================


@dataclass(frozen=True, slots=True)
class BDecls(Node):
    """Binding group of a ``let`` or ``where``."""

    kind: ClassVar[NodeKind] = NodeKind.BINDS

    decls: tuple[Decl, ...]


@dataclass(frozen=True, slots=True)
class UnGuardedRhs(Node):
    """``= body``."""

    kind: ClassVar[NodeKind] = NodeKind.RHS

    body: Exp


@dataclass(frozen=True, slots=True)
class GuardedRhs(Node):
    """``| guard, guard = body``."""

    kind: ClassVar[NodeKind] = NodeKind.GUARDED_RHS

    guards: tuple[Exp, ...]
    body: Exp


@dataclass(frozen=True, slots=True)
class GuardedRhss(Node):
    """Right-hand side made of guards."""

    kind: ClassVar[NodeKind] = NodeKind.RHS

    guards: tuple[GuardedRhs, ...]


@dataclass(frozen=True, slots=True)
class UnGuardedAlt(Node):
    """``-> body`` in a case alternative."""

    kind: ClassVar[NodeKind] = NodeKind.GUARDED_ALTS

    body: Exp


@dataclass(frozen=True, slots=True)
class GuardedAlt(Node):
    """``| guard -> body`` in a case alternative."""

    kind: ClassVar[NodeKind] = NodeKind.GUARDED_ALT

    guards: tuple[Exp, ...]
    body: Exp


@dataclass(frozen=True, slots=True)
class GuardedAlts(Node):
    kind: ClassVar[NodeKind] = NodeKind.GUARDED_ALTS

    alts: tuple[GuardedAlt, ...]


@dataclass(frozen=True, slots=True)
class Alt(Node):
    """One case alternative with an optional ``where`` group."""

    kind: ClassVar[NodeKind] = NodeKind.ALT

    pat: Pat
    alts: UnGuardedAlt | GuardedAlts
    binds: Binds | None = None


# =============================================================================
# Declarations
# =============================================================================


@dataclass(frozen=True, slots=True)
class DeclHead(Node):
    """``T a b`` on the left of a data or type declaration."""

    kind: ClassVar[NodeKind] = NodeKind.DECL_HEAD

    name: str
    tyvars: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FieldDecl(Node):
    """Record field: ``name, other :: Type``.

    ``comment`` is an end-of-line comment written after the field.

    """

    kind: ClassVar[NodeKind] = NodeKind.FIELD_DECL

    names: tuple[str, ...]
    type: Type
    comment: str | None = None


@dataclass(frozen=True, slots=True)
class ConDecl(Node):
    """Ordinary constructor: ``Just a``."""

    kind: ClassVar[NodeKind] = NodeKind.CONDECL

    name: str
    args: tuple[Type, ...] = ()


@dataclass(frozen=True, slots=True)
class RecDecl(Node):
    """Record constructor: ``Person { name :: String }``."""

    kind: ClassVar[NodeKind] = NodeKind.CONDECL

    name: str
    fields: tuple[FieldDecl, ...]


@dataclass(frozen=True, slots=True)
class Match(Node):
    """One equation of a function binding.

    An ``infix`` equation (``x <+> y = ...``, ``a `on` b = ...``) prints its
    first pattern before the name; it needs at least one pattern.
    """

    kind: ClassVar[NodeKind] = NodeKind.MATCH

    name: str
    pats: tuple[Pat, ...]
    rhs: Rhs
    binds: Binds | None = None
    infix: bool = False


@dataclass(frozen=True, slots=True)
class TypeSig(Node):
    """``f, g :: Type``."""

    kind: ClassVar[NodeKind] = NodeKind.DECL

    names: tuple[str, ...]
    type: Type


@dataclass(frozen=True, slots=True)
class FunBind(Node):
    kind: ClassVar[NodeKind] = NodeKind.DECL

    matches: tuple[Match, ...]


@dataclass(frozen=True, slots=True)
class PatBind(Node):
    """Pattern binding: ``(a, b) = pair``."""

    kind: ClassVar[NodeKind] = NodeKind.DECL

    pat: Pat
    rhs: Rhs
    binds: Binds | None = None


@dataclass(frozen=True, slots=True)
class DataDecl(Node):
    """``data`` or ``newtype`` declaration."""

    kind: ClassVar[NodeKind] = NodeKind.DECL

    data_or_new: Literal["data", "newtype"]
    context: Context | None
    head: DeclHead
    constructors: tuple[ConDecl | RecDecl, ...]
    deriving: Deriving | None = None


@dataclass(frozen=True, slots=True)
class TypeDecl(Node):
    """Type synonym: ``type Name = String``."""

    kind: ClassVar[NodeKind] = NodeKind.DECL

    head: DeclHead
    type: Type


# =============================================================================
# Type Aliases
# =============================================================================

type Type = TyCon | TyVar | TyApp | TyFun | TyList | TyTuple | TyParen | TyForall
type Exp = (
    Var | Con | Lit | App | InfixApp | Lambda | Let | If | Case | Do | List | Tuple | Paren
)
type Stmt = Generator | Qualifier | LetStmt
type Pat = PVar | PLit | PWildcard | PCon | PTuple | PList | PParen
type Binds = BDecls
type Rhs = UnGuardedRhs | GuardedRhss
type Decl = TypeSig | FunBind | PatBind | DataDecl | TypeDecl


def node_classes() -> tuple[type[Node], ...]:
    """All concrete node classes, in declaration order."""
    return tuple(
        cls for cls in globals().values()
        if isinstance(cls, type) and issubclass(cls, Node) and cls is not Node
    )
