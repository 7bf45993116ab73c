class ArrayParseError(ValueError):
    pass


def encode_int_array(values):
    # [1, 2, 3] -> "{1,2,3}"
    return "{" + ",".join(str(int(v)) for v in values) + "}"


def decode_int_array(text):
    """
    Inverse of encode_int_array. "{}" decodes to an empty list;
    a token that is not an integer raises ArrayParseError.
    """
    inner = text.strip()
    if inner.startswith("{"):
        inner = inner[1:]
    if inner.endswith("}"):
        inner = inner[:-1]
    if not inner.strip():
        return []

    values = []
    for token in inner.split(","):
        try:
            values.append(int(token.strip()))
        except ValueError:
            raise ArrayParseError(f"invalid integer {token!r} in array {text!r}")
    return values
