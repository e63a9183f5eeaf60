# Lispy: a small Lisp with S-expressions and Q-expressions.
#
# Code and data share one immutable value model (see lispy.types.value):
# - SExpr: evaluable sequence, reduced as a call when evaluated.
# - QExpr: quoted sequence, inert data until retagged by eval/if.
# Errors are ordinary values that flow through evaluation.

__version__ = "0.0.0.1"
