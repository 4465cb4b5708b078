import re
from typing import List, Optional
from dataclasses import dataclass, field

from treeindex.catalog import TreeKind
from treeindex.errors import CommandParserError


@dataclass
class CreateTreeStatement:
    tree_name: str
    kind: TreeKind = TreeKind.AVL
    values: List[int] = field(default_factory=list)


@dataclass
class DropTreeStatement:
    tree_name: str


@dataclass
class InsertStatement:
    tree_name: str
    values: List[int]


@dataclass
class DeleteStatement:
    tree_name: str
    key: int


@dataclass
class SelectStatement:
    tree_name: str
    key: Optional[int] = None
    order: str = "INORDER"


_KIND_MAP = {
    "AVL": TreeKind.AVL,
    "AVLTREE": TreeKind.AVL,
    "BST": TreeKind.BST,
    "BINARY": TreeKind.BST,
}

_ORDER_MAP = {
    "INORDER": "INORDER",
    "IN_ORDER": "INORDER",
    "LEVEL": "LEVEL",
    "LEVELS": "LEVEL",
    "BF": "LEVEL",
    "BREADTH_FIRST": "LEVEL",
}


class CommandParser:
    def __init__(self):
        self.tokens: List[str] = []
        self.current_token: int = 0

    def parse(self, text: str):
        text = self._normalize(text)
        self.tokens = self._tokenize(text)
        self.current_token = 0

        if not self.tokens:
            raise CommandParserError("Comando vacío")

        command = self.tokens[0].upper()
        if command == "CREATE":
            stmt = self._parse_create()
        elif command == "DROP":
            stmt = self._parse_drop()
        elif command == "SELECT":
            stmt = self._parse_select()
        elif command == "INSERT":
            stmt = self._parse_insert()
        elif command == "DELETE":
            stmt = self._parse_delete()
        else:
            raise CommandParserError(f"Comando no soportado: {command}")

        if self._current_token() == ";":
            self._consume_token()
        if self.current_token < len(self.tokens):
            raise CommandParserError(f"Token inesperado: '{self._current_token()}'")
        return stmt

    def _normalize(self, text: str) -> str:
        text = re.sub(r'--.*', '', text)
        return ' '.join(text.split()).strip()

    def _tokenize(self, text: str) -> List[str]:
        pattern = r'''
            [+-]?\d+                     |  # enteros
            \b[A-Za-z_][A-Za-z0-9_]*\b  |  # identificadores
            [(),;*]                      |  # delimitadores
            [<>=!]+                      |  # operadores
            \S                              # otro símbolo
        '''
        return [m.group(0) for m in re.finditer(pattern, text, re.VERBOSE)]

    def _current_token(self) -> str:
        return "" if self.current_token >= len(self.tokens) else self.tokens[self.current_token]

    def _consume_token(self) -> str:
        tok = self._current_token()
        self.current_token += 1
        return tok

    def _expect_token(self, expected: str) -> str:
        tok = self._consume_token()
        if tok.upper() != expected.upper():
            raise CommandParserError(f"Se esperaba '{expected}', se encontró '{tok}'")
        return tok

    def _parse_name(self) -> str:
        tok = self._consume_token()
        if not re.fullmatch(r'[A-Za-z_][A-Za-z0-9_]*', tok):
            raise CommandParserError(f"Nombre de árbol inválido: '{tok}'")
        return tok

    def _parse_key(self) -> int:
        tok = self._consume_token()
        try:
            return int(tok)
        except ValueError:
            raise CommandParserError(f"Clave entera inválida: '{tok}'")

    def _parse_key_list(self) -> List[int]:
        self._expect_token("(")
        values: List[int] = []
        while self._current_token() != ")":
            if not self._current_token():
                raise CommandParserError("Falta ')' en VALUES")
            values.append(self._parse_key())
            if self._current_token() == ",":
                self._consume_token()
            elif self._current_token() != ")":
                raise CommandParserError("Se esperaba ',' o ')' en VALUES")
        self._expect_token(")")
        return values

    def _parse_create(self):
        self._consume_token()  # CREATE
        self._expect_token("TREE")
        name = self._parse_name()

        kind = TreeKind.AVL
        if self._current_token().upper() == "USING":
            self._consume_token()
            kind_name = self._consume_token().upper()
            kind = _KIND_MAP.get(kind_name)
            if not kind:
                raise CommandParserError(f"Tipo de árbol no soportado: {kind_name}")

        values: List[int] = []
        if self._current_token().upper() == "VALUES":
            self._consume_token()
            values = self._parse_key_list()
        return CreateTreeStatement(name, kind, values)

    def _parse_drop(self):
        self._consume_token()  # DROP
        self._expect_token("TREE")
        return DropTreeStatement(self._parse_name())

    def _parse_insert(self):
        self._consume_token()  # INSERT
        self._expect_token("INTO")
        name = self._parse_name()
        self._expect_token("VALUES")
        return InsertStatement(name, self._parse_key_list())

    def _parse_where_key(self) -> int:
        self._expect_token("WHERE")
        self._expect_token("KEY")
        op = self._consume_token()
        if op not in ("=", "=="):
            raise CommandParserError(f"Operador no soportado: '{op}'")
        return self._parse_key()

    def _parse_delete(self):
        self._consume_token()  # DELETE
        self._expect_token("FROM")
        name = self._parse_name()
        return DeleteStatement(name, self._parse_where_key())

    def _parse_select(self):
        self._consume_token()  # SELECT
        self._expect_token("*")
        self._expect_token("FROM")
        name = self._parse_name()

        key = None
        if self._current_token().upper() == "WHERE":
            key = self._parse_where_key()

        order = "INORDER"
        if self._current_token().upper() == "ORDER":
            self._consume_token()
            self._expect_token("BY")
            order_name = self._consume_token().upper()
            order = _ORDER_MAP.get(order_name)
            if not order:
                raise CommandParserError(f"Orden no soportado: {order_name}")
        return SelectStatement(name, key, order)


def parse_command(text: str):
    return CommandParser().parse(text)
