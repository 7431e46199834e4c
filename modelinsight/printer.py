class Printer:
    """Visitor that turns a formula AST back into source code.

    The output follows the conventions R uses when it deparses a formula: spaces around ``~``,
    ``+``, ``-``, ``*``, ``/``, ``|`` and comparisons, no spaces around ``:`` and ``^``, and one
    space after each comma in function calls. One-sided formulas are printed as ``~x``.
    """

    SPACED = {
        "TILDE",
        "PLUS",
        "MINUS",
        "STAR",
        "SLASH",
        "PIPE",
        "PIPE_PIPE",
        "IN",
        "EQUAL_EQUAL",
        "BANG_EQUAL",
        "LESS",
        "LESS_EQUAL",
        "GREATER",
        "GREATER_EQUAL",
    }

    def __init__(self, expr):
        self.expr = expr

    def print(self):
        return self.expr.accept(self)

    def visitAssignExpr(self, expr):
        return expr.name.accept(self) + " = " + expr.value.accept(self)

    def visitGroupingExpr(self, expr):
        return "(" + expr.expression.accept(self) + ")"

    def visitBinaryExpr(self, expr):
        left = expr.left.accept(self)
        right = expr.right.accept(self)
        kind = expr.operator.kind
        if kind == "CARET":
            return left + "^" + right
        if kind in self.SPACED:
            lexeme = "%in%" if kind == "IN" else expr.operator.lexeme
            return left + " " + lexeme + " " + right
        return left + expr.operator.lexeme + right

    def visitUnaryExpr(self, expr):
        if expr.operator.kind == "TILDE":
            return "~" + expr.right.accept(self)
        return expr.operator.lexeme + expr.right.accept(self)

    def visitCallExpr(self, expr):
        args = ", ".join([arg.accept(self) for arg in expr.args])
        return expr.name + "(" + args + ")"

    def visitVariableExpr(self, expr):
        return expr.name.lexeme

    def visitLiteralExpr(self, expr):
        if isinstance(expr.value, str):
            return '"' + expr.value + '"'
        return str(expr.value)

    def visitQuotedNameExpr(self, expr):
        return expr.expression.lexeme

    def visitDotExpr(self, expr):  # pylint: disable = unused-argument
        return "."


def deparse(expr):
    """Returns the source code of an expression, or ``""`` when there is no expression."""
    if expr is None:
        return ""
    return Printer(expr).print()
