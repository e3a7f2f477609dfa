"""
Numérotation des listes ordonnées + formatage des nombres du compteur.

format_list_marker(index=4, style="lower-roman") → "iv."
format_number(12345.5, decimals=1)               → "12,345.5"
"""
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Optional

# Au-delà, la numération romaine n'a plus de symbole : entier brut
MAX_ROMAN    = 3999
MAX_DECIMALS = 20

ROMAN_NUMERALS = (
    ("M", 1000), ("CM", 900), ("D", 500), ("CD", 400),
    ("C", 100),  ("XC", 90),  ("L", 50),  ("XL", 40),
    ("X", 10),   ("IX", 9),   ("V", 5),   ("IV", 4),
    ("I", 1),
)


def _as_float(value: Any) -> Optional[float]:
    """Flottant fini depuis int/float/str numérique. inf, nan et booléens → None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError:
            return None
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> Optional[int]:
    """Entier depuis int/float/str numérique. Les booléens ne sont pas des nombres."""
    number = _as_float(value)
    return None if number is None else int(number)


def as_number(value: Any, default: float = 0) -> float:
    """Nombre fini depuis int/float/str numérique, sinon `default`."""
    number = _as_float(value)
    return default if number is None else number


def resolve_start(start: Any, reversed_: bool = False, total_items: Any = 1) -> int:
    """
    Valeur de départ effective.

    1. start explicite s'il est numérique et > 0
    2. sinon, liste inversée → nombre total d'éléments (au moins 1)
    3. sinon 1
    """
    explicit = _as_int(start)
    if explicit is not None and explicit > 0:
        return explicit
    if reversed_:
        return max(_as_int(total_items) or 0, 1)
    return 1


def position_value(index: Any, start: int, reversed_: bool = False) -> int:
    """Valeur du n-ième élément (index 1-based)."""
    position = _as_int(index) or 0
    if reversed_:
        return start - (position - 1)
    return start + (position - 1)


def to_roman(value: int) -> str:
    """Numération romaine soustractive (algorithme glouton)."""
    result = []
    remaining = value
    for symbol, amount in ROMAN_NUMERALS:
        while remaining >= amount:
            result.append(symbol)
            remaining -= amount
    return "".join(result)


def format_marker(value: int, style: str = "decimal") -> str:
    """Jeton d'affichage sans suffixe. Hors plage → entier brut."""
    if style in ("upper-alpha", "lower-alpha"):
        if value <= 0 or value > 26:
            return str(value)
        return chr((64 if style == "upper-alpha" else 96) + value)

    if style in ("upper-roman", "lower-roman"):
        if value <= 0 or value > MAX_ROMAN:
            return str(value)
        roman = to_roman(value)
        return roman if style == "upper-roman" else roman.lower()

    if style == "decimal-leading-zero":
        if value <= 0:
            return str(value)
        return f"0{value}" if value < 10 else str(value)

    # decimal + styles inconnus
    return str(value)


def format_list_marker(
    index: Any,
    start: Any = None,
    reversed: bool = False,
    total_items: Any = 1,
    style: str = "decimal",
) -> str:
    """Pipeline complet : départ → position → style → suffixe "."."""
    first = resolve_start(start, reversed, total_items)
    value = position_value(index, first, reversed)
    return format_marker(value, style) + "."


def format_number(value: Any, decimals: Any = 0, thousands_separator: str = ",") -> str:
    """
    Nombre à virgule fixe, arrondi au demi supérieur, milliers groupés.
    Valeur non numérique ou hors de la plage d'un flottant → 0.
    Décimales bornées à [0, MAX_DECIMALS].
    """
    places = min(max(_as_int(decimals) or 0, 0), MAX_DECIMALS)
    try:
        number = Decimal(str(value)) if not isinstance(value, bool) else Decimal(0)
    except InvalidOperation:
        number = Decimal(0)
    if not number.is_finite() or number.adjusted() > 308:
        number = Decimal(0)
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + places + 2)
        rounded = number.quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:,f}".replace(",", thousands_separator)
