def format_units(amount: int | str, decimals: int) -> str:
    """
    Fixed-point rendering of an integer amount: always keeps at least one fractional digit.
    format_units("1000000000000000000", 18) -> "1.0", format_units("1500000", 6) -> "1.5"
    """
    value = int(amount)
    dec = int(decimals)
    if dec < 0:
        raise ValueError(f"decimals must be non-negative, got {dec}")
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(value), 10 ** dec)
    frac_str = str(frac).rjust(dec, "0").rstrip("0") if dec else ""
    return f"{sign}{whole}.{frac_str or '0'}"
