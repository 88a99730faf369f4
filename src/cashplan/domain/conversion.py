"""Currency conversion through the USD bridge rates."""

from decimal import ROUND_HALF_UP, Decimal

from cashplan.domain.entities import Currency, ExchangeRates
from cashplan.domain.errors import ValidationError, not_convertible

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _to_usd(amount: Decimal, currency: Currency, rates: ExchangeRates) -> Decimal:
    if currency == Currency.USD:
        return amount
    if currency == Currency.EUR:
        return amount * rates.eur_usd
    return amount / rates.usd_egp


def _from_usd(amount: Decimal, currency: Currency, rates: ExchangeRates) -> Decimal:
    if currency == Currency.USD:
        return amount
    if currency == Currency.EUR:
        return amount / rates.eur_usd
    return amount * rates.usd_egp


def convert(
    amount: Decimal,
    from_currency: Currency | str,
    to_currency: Currency | str,
    rates: ExchangeRates,
) -> Decimal:
    """Convert ``amount`` between two currencies using USD as the pivot.

    Same-currency conversion returns ``amount`` untouched. Otherwise the full
    bridge computation is done at full precision and rounded once to cents.

    Raises:
        ValidationError: If either side is a virtual account, a currency is
            unknown, or a rate is not positive
    """
    try:
        source = Currency.parse(from_currency)
        target = Currency.parse(to_currency)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    if source == target:
        return amount
    if source.is_virtual or target.is_virtual:
        raise ValidationError(not_convertible(source.value, target.value))
    if rates.eur_usd <= 0 or rates.usd_egp <= 0:
        raise ValidationError("Exchange rates must be positive")

    return round_money(_from_usd(_to_usd(Decimal(amount), source, rates), target, rates))
