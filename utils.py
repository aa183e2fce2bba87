import math

SUPPORTED_HELP = "Supported: +, -, *, /, %, ^, sin, cos, tan, sqrt, (, )"


def format_value(value, decimals=6):
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "-inf" if value < 0 else "inf"
    text = f"{value:.{decimals}f}"
    # Evita mostrar "-0.000000" para resultados que redondean a cero
    if float(text) == 0:
        text = text.lstrip("-")
    return text


def format_result(result, decimals=6):
    """Texto a mostrar en la ventana para un EvaluationResult."""
    if result.ok:
        return f"Result: {format_value(result.value, decimals)}"
    return f"Error: {result.error.message}"


def format_history_entry(expression, result, decimals=6):
    if result.ok:
        return f"{expression} = {format_value(result.value, decimals)}"
    return f"{expression} -> {result.error.message}"


def trim_history(entries, history_size):
    """Conserva solo las últimas `history_size` entradas (0 desactiva el historial)."""
    if history_size <= 0:
        return []
    return entries[-history_size:]
