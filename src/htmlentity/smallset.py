class SmallCharSet:
    """Bitmask set of ASCII code points."""

    __slots__ = ("_mask",)

    def __init__(self, chars):
        mask = 0
        for c in chars:
            code = ord(c)
            if code >= 128:
                raise ValueError("SmallCharSet only supports ASCII")
            mask |= 1 << code
        self._mask = mask

    def contains(self, code):
        if code >= 128:
            return False
        return (self._mask >> code) & 1 == 1

    def __contains__(self, c):
        return self.contains(ord(c))

    def __or__(self, other):
        merged = SmallCharSet(())
        merged._mask = self._mask | other._mask
        return merged
