# pylint: disable=relative-beyond-top-level
from .token import Token


class ScanError(Exception):
    pass


class Scanner:
    """Scan formula string and returns Tokens"""

    def __init__(self, code):
        """Scans a model formula and returns a list of Tokens

        Parameters
        ----------
        code : string
            The code to be scanned. It is written in the formula language used by R modeling
            packages, e.g. ``"Reaction ~ Days + (1 + Days | Subject)"``.
        """
        self.code = code
        self.start = 0
        self.current = 0
        self.tokens = []

        if not isinstance(self.code, str):
            raise ScanError(f"'code' must be a string, not {type(self.code).__name__}.")

        if not len(self.code.strip()):
            raise ScanError("'code' is a string of length 0.")

    def at_end(self):
        return self.current >= len(self.code)

    def advance(self):
        self.current += 1
        return self.code[self.current - 1]

    def peek(self):
        if self.at_end():
            return ""
        return self.code[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.code):
            return ""
        return self.code[self.current + 1]

    def match(self, expected):
        if self.at_end():
            return False
        if self.code[self.current] != expected:
            return False
        self.current += 1
        return True

    def add_token(self, kind, literal=None):
        # Only literals have "literal != None"
        source = self.code[self.start : self.current]
        self.tokens.append(Token(kind, source, literal))

    def scan_token(self):
        char = self.advance()
        if char in ["'", '"']:
            self.char(char)
        elif char == "(":
            self.add_token("LEFT_PAREN")
        elif char == ")":
            self.add_token("RIGHT_PAREN")
        elif char == "`":
            self.backquote()
        elif char == ",":
            self.add_token("COMMA")
        elif char == ".":
            if self.peek().isdigit():
                self.floatnum()
            elif self.peek().isalpha() or self.peek() in [".", "_"]:
                self.identifier()
            else:
                self.add_token("DOT")
        elif char == "+":
            self.add_token("PLUS")
        elif char == "-":
            self.add_token("MINUS")
        elif char == "/":
            self.add_token("SLASH")
        elif char == "*":
            # 'x ** 2' is accepted as an alias of 'x ^ 2'
            if self.match("*"):
                self.add_token("CARET")
            else:
                self.add_token("STAR")
        elif char == "^":
            self.add_token("CARET")
        elif char == "!":
            if self.match("="):
                self.add_token("BANG_EQUAL")
            else:
                self.add_token("BANG")
        elif char == "=":
            if self.match("="):
                self.add_token("EQUAL_EQUAL")
            else:
                self.add_token("EQUAL")
        elif char == "<":
            if self.match("="):
                self.add_token("LESS_EQUAL")
            else:
                self.add_token("LESS")
        elif char == ">":
            if self.match("="):
                self.add_token("GREATER_EQUAL")
            else:
                self.add_token("GREATER")
        elif char == "%":
            self.special_operator()
        elif char == "~":
            self.add_token("TILDE")
        elif char == ":":
            self.add_token("COLON")
        elif char == "|":
            if self.match("|"):
                self.add_token("PIPE_PIPE")
            else:
                self.add_token("PIPE")
        elif char in [" ", "\n", "\t", "\r"]:
            pass
        elif char.isdigit():
            self.number()
        elif char.isalpha():
            self.identifier()
        else:
            raise ScanError("Unexpected character: " + str(char))

    def scan(self):
        """Scan formula string.

        Returns
        -------
        tokens : list
            A list of objects of class Token
        """
        while not self.at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token("EOF", ""))

        # Formulas passed as call arguments, like 'corAR1(form = ~ 1 | g)', have their own '~'.
        depth = 0
        tildes = 0
        for token in self.tokens:
            if token.kind == "LEFT_PAREN":
                depth += 1
            elif token.kind == "RIGHT_PAREN":
                depth -= 1
            elif is_tilde(token) and depth == 0:
                tildes += 1

        if tildes > 1:
            raise ScanError("There is more than one '~' in model formula")

        return self.tokens

    def floatnum(self):
        while self.peek().isdigit():
            self.advance()
        self.add_token("NUMBER", float(self.code[self.start : self.current]))

    def number(self):
        is_float = False
        while self.peek().isdigit():
            self.advance()
        # Look for fractional part, if present
        if self.peek() == "." and self.peek_next().isdigit():
            is_float = True
            # Consume the dot
            self.advance()
            # Keep consuming numbers, if present
            while self.peek().isdigit():
                self.advance()
        # R integer suffix, as in '0L'
        if self.peek() == "L":
            self.advance()
            self.add_token("NUMBER", int(self.code[self.start : self.current - 1]))
            return
        if is_float:
            token = float(self.code[self.start : self.current])
        else:
            token = int(self.code[self.start : self.current])

        self.add_token("NUMBER", token)

    def identifier(self):
        # 'as.factor' and 'splines::ns' are also identifiers
        while True:
            if self.peek().isalnum() or self.peek() in [".", "_"]:
                self.advance()
            elif self.peek() == ":" and self.peek_next() == ":":
                self.advance()
                self.advance()
            else:
                break
        self.add_token("IDENTIFIER")

    def special_operator(self):
        while self.peek() != "%" and not self.at_end():
            self.advance()

        if self.at_end():
            raise ScanError("Unterminated special operator.")

        self.advance()
        operator = self.code[self.start : self.current]
        if operator != "%in%":
            raise ScanError(f"Operator '{operator}' is not supported in model formulas.")
        self.add_token("IN")

    def char(self, quote):
        while self.peek() != quote and not self.at_end():
            self.advance()

        if self.at_end():
            raise ScanError("Unterminated string.")

        # The closing quotation mark.
        self.advance()

        # Trim the surrounding quotes.
        value = self.code[self.start + 1 : self.current - 1]
        self.add_token("STRING", value)

    def backquote(self):
        while self.peek() != "`":
            if self.at_end():
                raise ScanError("Unterminated back-quoted name.")
            self.advance()
        self.advance()
        self.add_token("BQNAME")


def is_tilde(token):
    return token.kind == "TILDE"
