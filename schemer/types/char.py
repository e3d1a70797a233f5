class Char(str):
    """A character datum, as read from `#\\x`.

    A one-character str, so string helpers accept it, but distinct from
    strings for `char?`, `string?` and printing.
    """

    __slots__ = ()

    def __new__(cls, value: str):
        if len(value) != 1:
            raise ValueError(f"A character must have length 1, got {value!r}")
        return super().__new__(cls, value)

    def __repr__(self):
        return f"Char({str(self)!r})"
