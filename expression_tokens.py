from enum import Enum
from typing import NamedTuple, Optional, Union


class TokenKind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    FUNCTION = "function"
    LPAREN = "lparen"
    RPAREN = "rparen"


class Operator(Enum):
    """Operadores binarios con su precedencia y asociatividad."""

    ADD = ("+", 1, False)
    SUB = ("-", 1, False)
    MUL = ("*", 2, False)
    DIV = ("/", 2, False)
    MOD = ("%", 2, False)
    POW = ("^", 3, True)

    def __init__(self, symbol, precedence, right_assoc):
        self.symbol = symbol
        self.precedence = precedence
        self.right_assoc = right_assoc


class Function(Enum):
    # "_" nunca sale de una secuencia alfabética: el menos unario no puede
    # confundirse con un nombre escrito por el usuario
    NEGATE = "_"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SQRT = "sqrt"


OPERATORS = {op.symbol: op for op in Operator}

# Nombres accesibles desde la entrada; NEGATE solo lo emite el tokenizador
FUNCTIONS = {f.value: f for f in Function if f is not Function.NEGATE}


class Token(NamedTuple):
    """
    Un token de la expresión.

    `op` es el identificador de la operación para OPERATOR y FUNCTION, o None
    si el símbolo/nombre no es reconocido (el evaluador lo rechazará). Para
    NUMBER, LPAREN y RPAREN siempre es None.
    """

    kind: TokenKind
    text: str
    op: Optional[Union[Operator, Function]] = None

    @classmethod
    def number(cls, text):
        return cls(TokenKind.NUMBER, text)

    @classmethod
    def operator(cls, symbol):
        return cls(TokenKind.OPERATOR, symbol, OPERATORS.get(symbol))

    @classmethod
    def function(cls, name):
        return cls(TokenKind.FUNCTION, name, FUNCTIONS.get(name))

    @classmethod
    def negate(cls):
        return cls(TokenKind.FUNCTION, Function.NEGATE.value, Function.NEGATE)

    @property
    def precedence(self):
        if self.kind is TokenKind.OPERATOR and self.op is not None:
            return self.op.precedence
        return 0

    @property
    def right_assoc(self):
        return self.kind is TokenKind.OPERATOR and self.op is not None and self.op.right_assoc


LPAREN = Token(TokenKind.LPAREN, "(")
RPAREN = Token(TokenKind.RPAREN, ")")
