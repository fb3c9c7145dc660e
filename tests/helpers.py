"""Source types used across the range engine tests."""


class ForwardList:
    """Sized, re-iterable sequence that can neither be indexed nor reversed"""

    def __init__(self, items=()):
        self._items = tuple(items)

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)


class Stream:
    """Re-iterable source without a size; counts the passes made over it"""

    def __init__(self, items=()):
        self._items = tuple(items)
        self.passes = 0

    def __iter__(self):
        self.passes += 1
        return iter(self._items)


def make_source(kind, items):
    if kind == "list":
        return list(items)
    if kind == "tuple":
        return tuple(items)
    if kind == "dict":
        return dict.fromkeys(items)
    if kind == "forward_list":
        return ForwardList(items)
    if kind == "stream":
        return Stream(items)
    raise ValueError(f"Unknown source kind: {kind}")
