from .expr import Assign, Grouping, Binary, Unary, Call, Variable, QuotedName, Literal, Dot
from .utils import listify


class ParseError(Exception):
    pass


class Parser:
    """Parses a sequence of Tokens and returns an abstract syntax tree.

    The grammar follows the precedence rules of the R formula language. From lowest to highest:
    ``=``, ``~``, ``|`` and ``||``, comparisons, ``+`` and ``-``, ``*`` and ``/``, ``%in%``,
    ``:``, unary ``+`` and ``-``, ``^``, and finally function calls and primaries.

    Parameters
    ----------
    tokens : list
        A list populated with objects of class Token as returned by scanner.Scanner.
    """

    def __init__(self, tokens):
        self.current = 0
        self.tokens = tokens

    def at_end(self):
        return self.peek().kind == "EOF"

    def advance(self):
        if not self.at_end():
            self.current += 1
        return self.tokens[self.current - 1]

    def peek(self):
        """Returns the Token we are about to consume"""
        return self.tokens[self.current]

    def previous(self):
        """Returns the last Token we consumed"""
        return self.tokens[self.current - 1]

    def check(self, kinds):
        # Checks multiple kinds at once
        if self.at_end():
            return False
        return self.peek().kind in listify(kinds)

    def match(self, kinds):
        if self.check(kinds):
            self.advance()
            return True
        else:
            return False

    def consume(self, kind, message):
        """Consumes the next Token

        First, it checks if the next Token is of the expected kind.
        If True, it calls self.advance(). Otherwise, we've found an error.
        """
        if self.check(kind):
            return self.advance()
        else:
            raise ParseError(message)

    def parse(self):
        """Parse a sequence of Tokens

        Returns
        -------
        An object of class expr.Expr describing the parsed AST.
        """
        expr = self.expression()
        if not self.at_end():
            raise ParseError(f"Unexpected token '{self.peek().lexeme}'.")
        return expr

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.tilde()
        if self.match("EQUAL"):
            value = self.tilde()
            if isinstance(expr, (Variable, QuotedName)):
                return Assign(expr, value)
            else:
                raise ParseError("Invalid assignment target.")
        return expr

    def tilde(self):
        if self.match("TILDE"):
            operator = self.previous()
            return Unary(operator, self.random_effect())
        expr = self.random_effect()
        if self.match("TILDE"):
            operator = self.previous()
            right = self.random_effect()
            expr = Binary(expr, operator, right)
        return expr

    def random_effect(self):
        expr = self.comparison()
        while self.match(["PIPE", "PIPE_PIPE"]):
            operator = self.previous()
            right = self.comparison()
            expr = Binary(expr, operator, right)
        return expr

    def comparison(self):
        expr = self.addition()
        kinds = ["EQUAL_EQUAL", "BANG_EQUAL", "LESS", "LESS_EQUAL", "GREATER", "GREATER_EQUAL"]
        while self.match(kinds):
            operator = self.previous()
            right = self.addition()
            expr = Binary(expr, operator, right)
        return expr

    def addition(self):
        expr = self.multiplication()
        while self.match(["MINUS", "PLUS"]):
            operator = self.previous()
            right = self.multiplication()
            expr = Binary(expr, operator, right)
        return expr

    def multiplication(self):
        expr = self.nesting()
        while self.match(["STAR", "SLASH"]):
            operator = self.previous()
            right = self.nesting()
            expr = Binary(expr, operator, right)
        return expr

    def nesting(self):
        expr = self.interaction()
        while self.match("IN"):
            operator = self.previous()
            right = self.interaction()
            expr = Binary(expr, operator, right)
        return expr

    def interaction(self):
        expr = self.unary()
        while self.match("COLON"):
            operator = self.previous()
            right = self.unary()
            expr = Binary(expr, operator, right)
        return expr

    def unary(self):
        if self.match(["PLUS", "MINUS", "BANG"]):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.power()

    def power(self):
        expr = self.call()
        if self.match("CARET"):
            operator = self.previous()
            # Right associative, 'x^2^3' is 'x^(2^3)'
            right = self.unary()
            expr = Binary(expr, operator, right)
        return expr

    def call(self):
        expr = self.primary()
        while self.match("LEFT_PAREN"):
            if not isinstance(expr, Variable):
                raise ParseError("Only named functions can be called.")
            expr = self.finishcall(expr)
        return expr

    def finishcall(self, expr):
        args = []
        if not self.check("RIGHT_PAREN"):
            while True:
                args.append(self.expression())
                if not self.match("COMMA"):
                    break
        self.consume("RIGHT_PAREN", "Expect ')' after arguments.")
        return Call(expr, args)

    def primary(self):
        if self.match("NUMBER"):
            return Literal(self.previous().literal)
        elif self.match("IDENTIFIER"):
            return Variable(self.previous())
        elif self.match("STRING"):
            return Literal(self.previous().literal)
        elif self.match("BQNAME"):
            return QuotedName(self.previous())
        elif self.match("DOT"):
            return Dot()
        elif self.match("LEFT_PAREN"):
            expr = self.expression()
            self.consume("RIGHT_PAREN", "Expect ')' after expression.")
            return Grouping(expr)
        else:
            raise ParseError("Expect expression.")
