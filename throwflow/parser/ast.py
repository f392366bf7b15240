from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class Located:
    line: int
    column: int


@dataclass
class Param:
    name: str
    type_name: Optional[str]
    loc: Located


@dataclass
class Block:
    statements: List["Stmt"]


# Function-like nodes hash by identity: the codebase keys callables on them.
@dataclass(eq=False)
class FunctionDef:
    name: str
    params: List[Param]
    returns: Optional[str]
    throws: List[str]
    body: Optional[Block]
    loc: Located
    is_method: bool = False
    is_static: bool = False
    owner: Optional[str] = None  # enclosing class/interface for methods


@dataclass
class ClassDef:
    name: str
    parent: Optional[str]
    interfaces: List[str]
    methods: List[FunctionDef]
    loc: Located
    is_interface: bool = False


@dataclass
class Program:
    classes: List[ClassDef] = field(default_factory=list)
    functions: List[FunctionDef] = field(default_factory=list)
    statements: List["Stmt"] = field(default_factory=list)
    path: Optional[str] = None


class Stmt:
    loc: Located


@dataclass
class LetStmt(Stmt):
    loc: Located
    name: str
    value: "Expr"


@dataclass
class AssignStmt(Stmt):
    loc: Located
    name: str
    value: "Expr"


@dataclass
class ReturnStmt(Stmt):
    loc: Located
    value: Optional["Expr"]


@dataclass
class ThrowStmt(Stmt):
    loc: Located
    value: "Expr"


@dataclass
class CatchClause:
    """`catch (A | B binder) { ... }`; `binder` is optional."""
    types: List[str]
    binder: Optional[str]
    block: Block
    loc: Located


@dataclass(eq=False)
class TryStmt(Stmt):
    loc: Located
    body: Block
    catches: List[CatchClause]
    finally_block: Optional[Block] = None


@dataclass
class IfStmt(Stmt):
    loc: Located
    condition: "Expr"
    then_block: Block
    # `else if` chains are stored as a Block holding a single IfStmt.
    else_block: Optional[Block] = None


@dataclass
class WhileStmt(Stmt):
    loc: Located
    condition: "Expr"
    body: Block


@dataclass
class ExprStmt(Stmt):
    loc: Located
    value: "Expr"


class Expr:
    loc: Located


@dataclass
class Name(Expr):
    loc: Located
    ident: str


@dataclass
class This(Expr):
    loc: Located


@dataclass
class Literal(Expr):
    loc: Located
    value: Union[str, int, float, bool, None]


@dataclass
class New(Expr):
    loc: Located
    class_name: str
    args: List[Expr]


@dataclass(eq=False)
class Closure(Expr):
    loc: Located
    params: List[Param]
    returns: Optional[str]
    throws: List[str]
    body: Block


@dataclass(eq=False)
class Call(Expr):
    loc: Located
    func: Expr
    args: List[Expr]


@dataclass(eq=False)
class MethodCall(Expr):
    """
    `receiver.method(args)`.

    `method` is a plain string for `r.m()` and an expression for the dynamic
    form `r.{expr}()`; the analyzer asks the type layer to fold the latter to a
    string literal.
    """
    loc: Located
    receiver: Expr
    method: Union[str, Expr]
    args: List[Expr]


@dataclass(eq=False)
class StaticCall(Expr):
    loc: Located
    class_name: str
    method: str
    args: List[Expr]


@dataclass
class Binary(Expr):
    loc: Located
    op: str
    left: Expr
    right: Expr


@dataclass
class Not(Expr):
    loc: Located
    operand: Expr


FunctionLike = Union[FunctionDef, Closure]
