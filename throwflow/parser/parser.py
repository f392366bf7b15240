from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree

from .ast import (
    AssignStmt,
    Binary,
    Block,
    Call,
    CatchClause,
    ClassDef,
    Closure,
    Expr,
    ExprStmt,
    FunctionDef,
    IfStmt,
    LetStmt,
    Literal,
    Located,
    MethodCall,
    Name,
    New,
    Not,
    Param,
    Program,
    ReturnStmt,
    StaticCall,
    Stmt,
    This,
    ThrowStmt,
    TryStmt,
    WhileStmt,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


_PARSER = Lark(
    _GRAMMAR_SRC,
    parser="lalr",
    start=["program", "type_union"],
    propagate_positions=True,
    maybe_placeholders=False,
)


def parse_program(source: str, path: Optional[str] = None) -> Program:
    """
    Parse a full `.tf` source file.

    Syntax errors propagate as `lark.exceptions.UnexpectedInput`; the driver
    turns them into parser-phase diagnostics.
    """
    tree = _PARSER.parse(source, start="program")
    program = _build_program(tree)
    program.path = path
    return program


def parse_type_union(text: str) -> List[str]:
    """
    Parse a contract-style type list (`A | B`) into its type names.

    Used for configured ignore lists; raises `UnexpectedInput` on malformed text.
    """
    tree = _PARSER.parse(text, start="type_union")
    return _build_type_union(tree)


def _build_program(tree: Tree) -> Program:
    program = Program()
    for child in tree.children:
        if not isinstance(child, Tree):
            continue
        kind = _name(child)
        if kind in {"class_def", "interface_def"}:
            program.classes.append(_build_class(child))
        elif kind == "func_def":
            program.functions.append(_build_function(child))
        else:
            program.statements.append(_build_stmt(child))
    return program


def _build_class(tree: Tree) -> ClassDef:
    is_interface = _name(tree) == "interface_def"
    name_token = next(child for child in tree.children if isinstance(child, Token) and child.type == "NAME")
    parent: Optional[str] = None
    interfaces: List[str] = []
    methods: List[FunctionDef] = []
    for child in tree.children:
        if not isinstance(child, Tree):
            continue
        kind = _name(child)
        if kind == "class_extends":
            parent = _first_token(child).value
        elif kind in {"class_implements", "interface_extends"}:
            interfaces.extend(_build_name_list(child.children[0]))
        elif kind == "method_decl":
            methods.append(_build_function(child, owner=name_token.value))
    return ClassDef(
        name=name_token.value,
        parent=parent,
        interfaces=interfaces,
        methods=methods,
        loc=_loc(tree),
        is_interface=is_interface,
    )


def _build_name_list(tree: Tree) -> List[str]:
    return [tok.value for tok in tree.children if isinstance(tok, Token) and tok.type == "NAME"]


def _build_function(tree: Tree, owner: Optional[str] = None) -> FunctionDef:
    is_static = any(isinstance(c, Token) and c.type == "STATIC" for c in tree.children)
    name_token = next(child for child in tree.children if isinstance(child, Token) and child.type == "NAME")
    params, returns, throws, body = _build_signature_and_body(tree)
    return FunctionDef(
        name=name_token.value,
        params=params,
        returns=returns,
        throws=throws,
        body=body,
        loc=_loc(tree),
        is_method=owner is not None,
        is_static=is_static,
        owner=owner,
    )


def _build_signature_and_body(tree: Tree) -> tuple[List[Param], Optional[str], List[str], Optional[Block]]:
    params: List[Param] = []
    returns: Optional[str] = None
    throws: List[str] = []
    body: Optional[Block] = None
    for child in tree.children:
        if not isinstance(child, Tree):
            continue
        kind = _name(child)
        if kind == "params":
            params = [_build_param(p) for p in child.children if isinstance(p, Tree)]
        elif kind == "returns_clause":
            returns = _build_type_name(child.children[0])
        elif kind == "throws_clause":
            throws = _build_type_union(child.children[0])
        elif kind == "block":
            body = _build_block(child)
    return params, returns, throws, body


def _build_param(tree: Tree) -> Param:
    name_token = _first_token(tree)
    type_node = next((c for c in tree.children if isinstance(c, Tree) and _name(c) == "type_name"), None)
    type_name = _build_type_name(type_node) if type_node is not None else None
    return Param(name=name_token.value, type_name=type_name, loc=_loc_from_token(name_token))


def _build_type_union(tree: Tree) -> List[str]:
    if _name(tree) != "type_union":
        raise ValueError(f"expected type_union, got {_name(tree)}")
    return [_build_type_name(child) for child in tree.children if isinstance(child, Tree)]


def _build_type_name(tree: Tree) -> str:
    return _first_token(tree).value


def _build_block(tree: Tree) -> Block:
    return Block(statements=[_build_stmt(child) for child in tree.children if isinstance(child, Tree)])


def _build_stmt(tree: Tree) -> Stmt:
    kind = _name(tree)
    loc = _loc(tree)
    if kind == "let_stmt":
        name_token = _first_token(tree)
        return LetStmt(loc=loc, name=name_token.value, value=_build_expr(_tree_children(tree)[0]))
    if kind == "assign_stmt":
        name_token = _first_token(tree)
        return AssignStmt(loc=loc, name=name_token.value, value=_build_expr(_tree_children(tree)[0]))
    if kind == "return_stmt":
        values = _tree_or_token_children(tree)
        return ReturnStmt(loc=loc, value=_build_expr(values[0]) if values else None)
    if kind == "throw_stmt":
        return ThrowStmt(loc=loc, value=_build_expr(_tree_or_token_children(tree)[0]))
    if kind == "try_stmt":
        return _build_try_stmt(tree)
    if kind == "if_stmt":
        return _build_if_stmt(tree)
    if kind == "while_stmt":
        cond, body = _tree_or_token_children(tree)
        return WhileStmt(loc=loc, condition=_build_expr(cond), body=_build_block(body))
    if kind == "expr_stmt":
        return ExprStmt(loc=loc, value=_build_expr(_tree_or_token_children(tree)[0]))
    raise ValueError(f"Unexpected statement node: {kind}")


def _build_try_stmt(tree: Tree) -> TryStmt:
    body: Optional[Block] = None
    catches: List[CatchClause] = []
    finally_block: Optional[Block] = None
    for child in _tree_children(tree):
        kind = _name(child)
        if kind == "block" and body is None:
            body = _build_block(child)
        elif kind == "catch_clause":
            catches.append(_build_catch_clause(child))
        elif kind == "finally_clause":
            finally_block = _build_block(child.children[0])
    if body is None:
        raise ValueError("try statement missing body")
    return TryStmt(loc=_loc(tree), body=body, catches=catches, finally_block=finally_block)


def _build_catch_clause(tree: Tree) -> CatchClause:
    types: List[str] = []
    binder: Optional[str] = None
    block: Optional[Block] = None
    for child in tree.children:
        if isinstance(child, Token) and child.type == "NAME":
            binder = child.value
        elif isinstance(child, Tree) and _name(child) == "type_union":
            types = _build_type_union(child)
        elif isinstance(child, Tree) and _name(child) == "block":
            block = _build_block(child)
    if block is None:
        raise ValueError("catch clause missing block")
    return CatchClause(types=types, binder=binder, block=block, loc=_loc(tree))


def _build_if_stmt(tree: Tree) -> IfStmt:
    children = _tree_or_token_children(tree)
    cond = _build_expr(children[0])
    then_block = _build_block(children[1])
    else_block: Optional[Block] = None
    if len(children) > 2:
        target = children[2].children[0]
        if _name(target) == "if_stmt":
            else_block = Block(statements=[_build_if_stmt(target)])
        else:
            else_block = _build_block(target)
    return IfStmt(loc=_loc(tree), condition=cond, then_block=then_block, else_block=else_block)


def _build_expr(node) -> Expr:
    if isinstance(node, Token):
        # Inlined single-token atoms never reach here (every atom is aliased),
        # but keep the error explicit.
        raise ValueError(f"Unexpected bare token in expression: {node.type}")
    kind = _name(node)
    loc = _loc(node)
    if kind == "name":
        return Name(loc=loc, ident=node.children[0].value)
    if kind == "this":
        return This(loc=loc)
    if kind == "string":
        return Literal(loc=loc, value=_decode_string(node.children[0].value))
    if kind == "number":
        text = node.children[0].value
        return Literal(loc=loc, value=float(text) if "." in text else int(text))
    if kind == "true":
        return Literal(loc=loc, value=True)
    if kind == "false":
        return Literal(loc=loc, value=False)
    if kind == "null":
        return Literal(loc=loc, value=None)
    if kind == "new":
        name_token = _first_token(node)
        return New(loc=loc, class_name=name_token.value, args=_build_args(node))
    if kind == "closure":
        params, returns, throws, body = _build_signature_and_body(node)
        if body is None:
            raise ValueError("closure missing body")
        return Closure(loc=loc, params=params, returns=returns, throws=throws, body=body)
    if kind == "call":
        callee = node.children[0]
        return Call(loc=loc, func=_build_expr(callee), args=_build_args(node))
    if kind == "method_call":
        receiver = node.children[0]
        method_token = next(c for c in node.children[1:] if isinstance(c, Token) and c.type == "NAME")
        return MethodCall(loc=loc, receiver=_build_expr(receiver), method=method_token.value, args=_build_args(node))
    if kind == "dynamic_method_call":
        receiver, method_expr = node.children[0], node.children[1]
        return MethodCall(
            loc=loc,
            receiver=_build_expr(receiver),
            method=_build_expr(method_expr),
            args=_build_args(node),
        )
    if kind == "static_call":
        class_token, method_token = [c for c in node.children if isinstance(c, Token)][:2]
        return StaticCall(loc=loc, class_name=class_token.value, method=method_token.value, args=_build_args(node))
    if kind == "binary":
        left, op, right = node.children
        return Binary(loc=loc, op=op.value, left=_build_expr(left), right=_build_expr(right))
    if kind == "not_expr":
        return Not(loc=loc, operand=_build_expr(node.children[0]))
    raise ValueError(f"Unexpected expression node: {kind}")


_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", "\"": "\""}
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def _decode_string(text: str) -> str:
    """
    Decode a STRING token (quotes included).

    Known escapes are translated; any other `\\c` keeps the backslash, so
    every string the lexer accepts decodes.
    """
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), text[1:-1])


def _build_args(tree: Tree) -> List[Expr]:
    args_node = next((c for c in tree.children if isinstance(c, Tree) and _name(c) == "args"), None)
    if args_node is None:
        return []
    return [_build_expr(arg) for arg in args_node.children]


def _tree_children(tree: Tree) -> List[Tree]:
    return [child for child in tree.children if isinstance(child, Tree)]


def _tree_or_token_children(tree: Tree) -> list:
    # Keyword tokens are filtered by lark; what is left is the payload.
    return list(tree.children)


def _first_token(tree: Tree) -> Token:
    tok = next((c for c in tree.children if isinstance(c, Token)), None)
    if tok is None:
        raise ValueError(f"{_name(tree)} node missing token child")
    return tok


def _loc(tree: Tree) -> Located:
    meta = tree.meta
    return Located(line=getattr(meta, "line", 0), column=getattr(meta, "column", 0))


def _loc_from_token(token: Token) -> Located:
    return Located(line=token.line, column=token.column)


def _name(node: Tree | Token) -> str:
    if isinstance(node, Tree):
        data = node.data
        if isinstance(data, Token):
            return data.value
        return data
    if isinstance(node, Token):
        return node.type
    return str(node)
