"""
Verification language: expressions, statements and programs.
"""

from .expressions import (
    Type,
    Expression,
    LocalVar,
    IntLit,
    BoolLit,
    TrueLit,
    FalseLit,
    NullLit,
    FieldAccess,
    BinaryOp,
    UnaryOp,
    FuncApp,
    FullPerm,
    FractionalPerm,
    PredicateAccess,
    PredicateAccessPredicate,
)
from .statements import (
    Stmt,
    LocalVarDecl,
    Seqn,
    If,
    Inhale,
    Exhale,
    Fold,
    Unfold,
    Assert,
    Assume,
    LocalVarAssign,
    FieldAssign,
    Label,
    MethodCall,
)
from .program import Field, Predicate, Method, Program
from .traversal import walk, deep_collect, collect_variables, substitute

__all__ = [
    # Expressions
    "Type",
    "Expression",
    "LocalVar",
    "IntLit",
    "BoolLit",
    "TrueLit",
    "FalseLit",
    "NullLit",
    "FieldAccess",
    "BinaryOp",
    "UnaryOp",
    "FuncApp",
    "FullPerm",
    "FractionalPerm",
    "PredicateAccess",
    "PredicateAccessPredicate",
    # Statements
    "Stmt",
    "LocalVarDecl",
    "Seqn",
    "If",
    "Inhale",
    "Exhale",
    "Fold",
    "Unfold",
    "Assert",
    "Assume",
    "LocalVarAssign",
    "FieldAssign",
    "Label",
    "MethodCall",
    # Declarations
    "Field",
    "Predicate",
    "Method",
    "Program",
    # Traversal
    "walk",
    "deep_collect",
    "collect_variables",
    "substitute",
]
