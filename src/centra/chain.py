"""Wrap-chain walking and sentinel matching.

An error's wrap-chain is the error itself followed by each successive
cause. The cause of a link is, in order of preference:

1. the result of its ``unwrap()`` method, when it defines one
2. ``__cause__`` (set by ``raise ... from ...``)
3. ``__context__``, unless ``__suppress_context__`` is set

A sentinel instance ends the chain: it is a shared, module-level value,
and Python records ``__context__``/``__cause__`` on it every time it is
raised, so whatever it picked up from an earlier request is not part of
the current error.

Matching compares values, never messages::

    ErrNotFound = LookupError("not found")

    try:
        raise ErrNotFound
    except LookupError as exc:
        try:
            raise RuntimeError("loading user failed") from exc
        except RuntimeError as wrapped:
            assert is_error(wrapped, ErrNotFound)
            assert not is_error(wrapped, LookupError("not found"))
"""

from collections.abc import Collection, Iterable, Iterator
from typing import Any


def unwrap(err: BaseException) -> BaseException | None:
    """Return the single cause of *err*, or ``None`` at the end of the chain."""
    method = getattr(err, "unwrap", None)
    if callable(method):
        return method()
    if err.__cause__ is not None:
        return err.__cause__
    if err.__suppress_context__:
        return None
    return err.__context__


def walk(err: BaseException | None, stop: Collection[int] = ()) -> Iterator[BaseException]:
    """Yield *err* and then each cause in its wrap-chain.

    *stop* holds ``id()``s of links that end the chain: they are yielded
    but never unwrapped. Also stops when a link has no cause or when a
    link repeats (exceptions can reference each other through
    ``__context__``).
    """
    seen: set[int] = set()
    link = err
    while link is not None and id(link) not in seen:
        seen.add(id(link))
        yield link
        if id(link) in stop:
            return
        link = unwrap(link)


def stop_ids(sentinels: Iterable[Any]) -> frozenset[int]:
    """``id()``s of the instance sentinels in *sentinels*.

    Exception classes and ``None`` are skipped; only concrete values are
    shared across raises.
    """
    return frozenset(id(s) for s in sentinels if s is not None and not isinstance(s, type))


def matches(link: BaseException, sentinel: Any) -> bool:
    """True if a single chain link satisfies *sentinel*.

    Exception classes match their instances (subclasses included).
    Anything else matches by identity or equality.
    """
    if link is sentinel:
        return True
    if isinstance(sentinel, type) and issubclass(sentinel, BaseException):
        return isinstance(link, sentinel)
    return link == sentinel


def is_error(err: BaseException | None, sentinel: Any, stop: Collection[int] = ()) -> bool:
    """True if any link of *err*'s wrap-chain matches *sentinel*.

    *sentinel* itself, when it is an instance, always ends the chain.
    """
    return any(matches(link, sentinel) for link in walk(err, stop_ids((sentinel,)) | set(stop)))
