from decimal import Context, Decimal, MAX_EMAX, MAX_PREC, MIN_EMIN, localcontext

# Addition and subtraction never round under this context; the result keeps
# every digit of both operands.
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def add_amounts(left: Decimal, right: Decimal) -> Decimal:
    """
    Add two amounts exactly.

    A zero operand yields the other operand unchanged, so the scale of a
    balance that returned to zero does not leak into later results
    (0.0000 + 12.92 is 12.92, not 12.9200).
    """
    if right.is_zero():
        return left
    if left.is_zero():
        return right
    with localcontext(EXACT_CONTEXT):
        return left + right


def subtract_amounts(left: Decimal, right: Decimal) -> Decimal:
    if right.is_zero():
        return left
    if left.is_zero():
        return -right
    with localcontext(EXACT_CONTEXT):
        return left - right


def format_amount(value: Decimal) -> str:
    """Fixed-point text with the value's own scale (no exponent, no rounding)."""
    return f"{value:f}"
