from expression_tokens import TokenKind


class EvaluationError(ValueError):
    """Error base de la evaluación de expresiones. El mensaje es apto para mostrarse al usuario."""

    default_message = "Invalid expression"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)

    @property
    def message(self):
        return self.args[0]


class MismatchedParenthesesError(EvaluationError):
    default_message = "Mismatched parentheses"


class InsufficientOperandsError(EvaluationError):
    def __init__(self, token):
        self.token = token
        if token.kind is TokenKind.FUNCTION:
            super().__init__("Invalid function call")
        else:
            super().__init__("Invalid expression")


class DivisionByZeroError(EvaluationError):
    default_message = "Division by zero"


class UnknownFunctionError(EvaluationError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown function: {name}")


class UnknownOperatorError(EvaluationError):
    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"Unknown operator: {symbol}")


class InvalidExpressionError(EvaluationError):
    pass


class InvalidNumberError(EvaluationError):
    def __init__(self, text):
        self.text = text
        super().__init__(f"Invalid number: {text}")
