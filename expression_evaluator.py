import math
from typing import NamedTuple, Optional

from evaluation_errors import (
    DivisionByZeroError,
    EvaluationError,
    InsufficientOperandsError,
    InvalidExpressionError,
    InvalidNumberError,
    MismatchedParenthesesError,
    UnknownFunctionError,
    UnknownOperatorError,
)
from expression_tokens import LPAREN, RPAREN, Function, Operator, Token, TokenKind

NUMBER_CHARS = "0123456789."


def _is_letter(c):
    return c.isascii() and c.isalpha()


def _is_odd_integer(x):
    return math.isfinite(x) and x == int(x) and int(x) % 2 == 1


def _domain_safe(func, *args):
    # math.* lanza ValueError fuera del dominio; en coma flotante el resultado es NaN
    try:
        return func(*args)
    except ValueError:
        return math.nan


def _power(a, b):
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        if a == 0:
            # 0 elevado a un exponente negativo
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan


class EvaluationResult(NamedTuple):
    """Resultado de `evaluate`: o bien `value`, o bien `error`, nunca ambos."""

    value: Optional[float] = None
    error: Optional[EvaluationError] = None

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        if self.error is not None:
            raise self.error
        return self.value


class ExpressionEvaluator:
    """
    Evaluador de expresiones aritméticas infijas.

    La expresión pasa por tres etapas: tokenize -> to_postfix (shunting-yard)
    -> eval_postfix. Ninguna etapa guarda estado entre llamadas, por lo que
    una misma instancia puede usarse desde varios hilos.
    """

    def tokenize(self, expr):
        """
        Divide el texto en tokens. Nunca falla: los caracteres desconocidos
        se convierten en operadores de un carácter que el evaluador rechazará.
        """
        tokens = []
        i = 0
        while i < len(expr):
            c = expr[i]
            if c.isspace():
                i += 1
                continue
            if c in NUMBER_CHARS:
                j = i + 1
                while j < len(expr) and expr[j] in NUMBER_CHARS:
                    j += 1
                tokens.append(Token.number(expr[i:j]))
                i = j
                continue
            if _is_letter(c):
                j = i + 1
                while j < len(expr) and _is_letter(expr[j]):
                    j += 1
                tokens.append(Token.function(expr[i:j]))
                i = j
                continue
            if c == "(":
                tokens.append(LPAREN)
            elif c == ")":
                tokens.append(RPAREN)
            elif c == "-" and (
                not tokens or tokens[-1].kind in (TokenKind.LPAREN, TokenKind.OPERATOR)
            ):
                # Menos unario: solo se mira el token anterior
                tokens.append(Token.negate())
            else:
                tokens.append(Token.operator(c))
            i += 1
        return tokens

    def to_postfix(self, tokens):
        output, stack = [], []
        for token in tokens:
            if token.kind is TokenKind.NUMBER:
                output.append(token)
            elif token.kind is TokenKind.FUNCTION:
                stack.append(token)
            elif token.kind is TokenKind.OPERATOR:
                while stack and stack[-1].kind is not TokenKind.LPAREN:
                    top = stack[-1]
                    if (
                        top.kind is TokenKind.FUNCTION
                        or (not token.right_assoc and token.precedence <= top.precedence)
                        or (token.right_assoc and token.precedence < top.precedence)
                    ):
                        output.append(stack.pop())
                    else:
                        break
                stack.append(token)
            elif token.kind is TokenKind.LPAREN:
                stack.append(token)
            elif token.kind is TokenKind.RPAREN:
                while stack and stack[-1].kind is not TokenKind.LPAREN:
                    output.append(stack.pop())
                if not stack:
                    raise MismatchedParenthesesError()
                stack.pop()
                # La función queda ligada al grupo recién cerrado
                if stack and stack[-1].kind is TokenKind.FUNCTION:
                    output.append(stack.pop())
        while stack:
            token = stack.pop()
            if token.kind is TokenKind.LPAREN:
                raise MismatchedParenthesesError()
            output.append(token)
        return output

    def eval_postfix(self, postfix):
        stack = []
        for token in postfix:
            if token.kind is TokenKind.NUMBER:
                stack.append(self._parse_number(token.text))
            elif token.kind is TokenKind.OPERATOR:
                if len(stack) < 2:
                    raise InsufficientOperandsError(token)
                b = stack.pop()
                a = stack.pop()
                stack.append(self._apply_operator(token, a, b))
            elif token.kind is TokenKind.FUNCTION:
                if not stack:
                    raise InsufficientOperandsError(token)
                a = stack.pop()
                stack.append(self._apply_function(token, a))
            else:
                # Un paréntesis en la salida postfija solo puede venir de un llamador externo
                raise MismatchedParenthesesError()
        if len(stack) != 1:
            raise InvalidExpressionError()
        return stack[0]

    def calculate(self, expr_str):
        """Evalúa `expr_str` y devuelve un float. Lanza EvaluationError si la expresión no es válida."""
        tokens = self.tokenize(expr_str)
        postfix = self.to_postfix(tokens)
        return self.eval_postfix(postfix)

    def evaluate(self, expr_str):
        """Como `calculate`, pero nunca lanza: devuelve un EvaluationResult."""
        try:
            return EvaluationResult(value=self.calculate(expr_str or ""))
        except EvaluationError as e:
            return EvaluationResult(error=e)

    @staticmethod
    def _parse_number(text):
        try:
            return float(text)
        except ValueError:
            raise InvalidNumberError(text) from None

    @staticmethod
    def _apply_operator(token, a, b):
        op = token.op
        if op is Operator.ADD:
            return a + b
        if op is Operator.SUB:
            return a - b
        if op is Operator.MUL:
            return a * b
        if op is Operator.DIV:
            if b == 0:
                raise DivisionByZeroError()
            return a / b
        if op is Operator.MOD:
            if b == 0:
                raise DivisionByZeroError()
            return _domain_safe(math.fmod, a, b)
        if op is Operator.POW:
            return _power(a, b)
        raise UnknownOperatorError(token.text)

    @staticmethod
    def _apply_function(token, a):
        func = token.op
        if func is Function.NEGATE:
            return -a
        if func is Function.SIN:
            return _domain_safe(math.sin, a)
        if func is Function.COS:
            return _domain_safe(math.cos, a)
        if func is Function.TAN:
            return _domain_safe(math.tan, a)
        if func is Function.SQRT:
            return _domain_safe(math.sqrt, a)
        raise UnknownFunctionError(token.text)


_evaluator = ExpressionEvaluator()


def evaluate(expression):
    """Punto de entrada para la interfaz: texto -> EvaluationResult."""
    return _evaluator.evaluate(expression)
