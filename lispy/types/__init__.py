from lispy.types.error_value import Error, ErrorKind
from lispy.types.value import (
    Builtin,
    Lambda,
    Number,
    QExpr,
    SExpr,
    String,
    Symbol,
    Value,
    equals,
    kind_name,
)
from lispy.types.environment import Environment
