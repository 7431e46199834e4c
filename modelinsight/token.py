class Token:
    """Representation of a single Token in a model formula"""

    def __init__(self, kind, lexeme, literal=None):
        self.kind = kind
        self.lexeme = lexeme
        self.literal = literal

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return (
            self.kind == other.kind
            and self.lexeme == other.lexeme
            and self.literal == other.literal
        )

    def __hash__(self):
        return hash((self.kind, self.lexeme, self.literal))

    def __repr__(self):  # pragma: no cover
        return f"Token(kind={self.kind}, lexeme={self.lexeme!r}, literal={self.literal!r})"

    def __str__(self):  # pragma: no cover
        return self.__repr__()
