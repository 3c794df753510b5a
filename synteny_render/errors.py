class ParseError(ValueError):
    """A row in a tab separated input could not be decoded."""

    def __init__(self, path, line_number: int, reason: str):
        self.path = str(path)
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"{self.path}, line {line_number}: {reason}")


class UnknownScaffoldError(KeyError):
    """An alignment refers to a scaffold missing from its size table."""

    def __init__(self, scaffold: str, side: str = ""):
        self.scaffold = scaffold
        self.side = side
        super().__init__(scaffold)

    def __str__(self) -> str:
        where = f" in {self.side} size table" if self.side else ""
        return f"Scaffold '{self.scaffold}' not found{where}"
