import math

SIZE_UNITS = ['Bytes', 'KB', 'MB', 'GB']


def format_file_size(num_bytes):
    """
    Human readable size using powers of 1024.

    Values are rounded to two decimals with trailing zeros dropped:
    0 -> '0 Bytes', 1024 -> '1 KB', 1572864 -> '1.5 MB'.
    """
    if not num_bytes:
        return '0 Bytes'

    exponent = min(int(math.floor(math.log(num_bytes, 1024))), len(SIZE_UNITS) - 1)
    # log() can land just under an exact power of 1024
    if exponent + 1 < len(SIZE_UNITS) and num_bytes >= 1024 ** (exponent + 1):
        exponent += 1

    value = round(num_bytes / 1024 ** exponent, 2)
    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return f"{text} {SIZE_UNITS[exponent]}"
