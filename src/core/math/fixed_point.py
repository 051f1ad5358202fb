"""
Fixed Point — беззнаковая целочисленная арифметика с проверками

Модуль обеспечивает детерминированную арифметику над масштабированными
целыми (uint256), без float:
- Проверка, что значение является uint256
- Сложение/вычитание/умножение с проверкой переполнения
- Целочисленное деление с округлением вниз (floor)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. float никогда не участвует в расчётах (направление округления видно снаружи)
2. Любое деление — floor, потеря точности только вниз
3. Результат всегда в [0, UINT256_MAX], иначе исключение
4. bool не считается числом
"""

from typing import Final

from src.core.errors import (
    ArithmeticOverflow,
    InsufficientBalance,
    InvalidAmount,
    LedgerError,
)

# =============================================================================
# ГРАНИЦЫ
# =============================================================================

UINT256_MAX: Final[int] = 2**256 - 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_uint(value: object) -> bool:
    """
    Проверка, что значение — целое в диапазоне uint256.

    Examples:
        >>> is_uint(0)
        True
        >>> is_uint(-1)
        False
        >>> is_uint(1.0)
        False
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= UINT256_MAX


def validate_uint(value: object, name: str = "amount") -> int:
    """
    Проверка uint256.

    Args:
        value: Проверяемое значение
        name: Имя параметра для сообщения об ошибке

    Returns:
        То же значение (int)

    Raises:
        InvalidAmount: Если значение не int или вне [0, UINT256_MAX]
    """
    if not is_uint(value):
        raise InvalidAmount(f"Error, wrong {name}: {value!r}")
    return value  # type: ignore[return-value]


def validate_positive_uint(value: object, name: str = "amount") -> int:
    """Проверка uint256 > 0 (InvalidAmount иначе)."""
    validate_uint(value, name)
    if value == 0:
        raise InvalidAmount("Error, wrong amount")
    return value  # type: ignore[return-value]


# =============================================================================
# ПРОВЕРЯЕМЫЕ ОПЕРАЦИИ
# =============================================================================


def checked_add(a: int, b: int) -> int:
    """
    Сложение с проверкой переполнения.

    Raises:
        ArithmeticOverflow: Если a + b > UINT256_MAX
    """
    result = a + b
    if result > UINT256_MAX:
        raise ArithmeticOverflow(f"Error, addition overflow: {a} + {b}")
    return result


def checked_sub(
    a: int,
    b: int,
    error: type[LedgerError] = InsufficientBalance,
    reason: str | None = None,
) -> int:
    """
    Вычитание без ухода ниже нуля.

    Args:
        a: Уменьшаемое
        b: Вычитаемое
        error: Класс ошибки при a < b (по умолчанию InsufficientBalance)
        reason: Причина для ошибки

    Raises:
        error: Если a < b
    """
    if b > a:
        raise error(reason)
    return a - b


def checked_mul(a: int, b: int) -> int:
    """
    Умножение с проверкой переполнения.

    Raises:
        ArithmeticOverflow: Если a * b > UINT256_MAX
    """
    result = a * b
    if result > UINT256_MAX:
        raise ArithmeticOverflow(f"Error, multiplication overflow: {a} * {b}")
    return result


def floor_div(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с округлением вниз.

    Оба операнда неотрицательны, поэтому floor совпадает с усечением.

    Raises:
        ZeroDivisionError: Если denominator == 0 (вызывающий обязан
            отсечь этот случай своей предпроверкой)

    Examples:
        >>> floor_div(10**18, 5_158_112_000_000_000)
        193
    """
    if denominator == 0:
        raise ZeroDivisionError("floor_div by zero")
    return numerator // denominator


def mul_div(a: int, b: int, denominator: int) -> int:
    """a * b // denominator с проверкой переполнения промежуточного произведения."""
    return floor_div(checked_mul(a, b), denominator)
