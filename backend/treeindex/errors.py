# backend/treeindex/errors.py


class TreeIndexError(Exception):
    pass


class StructuralInvariantError(TreeIndexError):
    """Raised by ``validate()`` when a tree breaks its ordering/balance rules."""


class CommandParserError(TreeIndexError):
    pass


class TreeNotFoundError(TreeIndexError, KeyError):
    def __str__(self) -> str:
        return f"Árbol '{self.args[0]}' no registrado" if self.args else "Árbol no registrado"


class TreeExistsError(TreeIndexError):
    pass
