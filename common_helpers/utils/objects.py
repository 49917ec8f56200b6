"""
Object helpers: prototype-style class linking and mapping merges.

**Conceptual**: Two small families of helpers that operate on caller-supplied
objects rather than numbers:

  - link() makes one class fall back to another class's members at lookup
    time, the way a prototype chain delegates to a shared template. Special
    methods are forwarded too. Two read-only accessors expose the parent:
    uber (a prototype view for explicit superclass calls) and
    uber_constructor (the parent class itself).
  - merge() and deep_merge() copy keys from source mappings into a
    destination mapping, shallowly or recursively.

**Concurrency**: The merge helpers write into `destination` in place with no
locking. Merging into the same destination from several threads at once is
the caller's responsibility to synchronise.
"""

import logging
from collections.abc import Mapping, MutableMapping

logger = logging.getLogger(__name__)

_MISSING = object()

# Special methods that belong to construction or to the attribute protocol
# itself. link() never forwards these to the parent.
_NOT_FORWARDED = frozenset({
    "__init__",
    "__new__",
    "__del__",
    "__init_subclass__",
    "__subclasshook__",
    "__class_getitem__",
    "__set_name__",
    "__getattr__",
    "__getattribute__",
    "__setattr__",
    "__delattr__",
})


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


class _LinkAccessor:
    """
    Read-only accessor installed on a linked class.

    A data descriptor, so reading it through the class or an instance yields
    the stored value and assigning or deleting it through an instance raises
    AttributeError. It never shows up in vars(instance).

    The uber_constructor accessor also remembers what link() installed on the
    class (the fallback __getattr__ and the special-method forwarders), so a
    later re-link can undo it.
    """

    def __init__(self, name: str, value, fallback_getattr=None, forwarders=None):
        self.name = name
        self.value = value
        self.fallback_getattr = fallback_getattr
        self.forwarders = forwarders or {}

    def __get__(self, obj, owner=None):
        return self.value

    def __set__(self, obj, value):
        raise AttributeError(f"'{self.name}' is read-only")

    def __delete__(self, obj):
        raise AttributeError(f"'{self.name}' is read-only")


def _linked_parent(klass: type):
    """Return the class `klass` (or one of its real bases) was linked to, if any."""
    for base in klass.__mro__:
        accessor = vars(base).get("uber_constructor")
        if isinstance(accessor, _LinkAccessor):
            return accessor.value
    return None


def _resolve_member(parent: type, name: str):
    """Find `name` on `parent`, then along its chain of linked parents."""
    klass = parent
    while klass is not None:
        for base in klass.__mro__:
            namespace = vars(base)
            if name in namespace:
                return namespace[name]
        klass = _linked_parent(klass)
    return _MISSING


def _bind(member, instance, owner: type):
    # Follow the descriptor protocol so functions become bound methods (or
    # stay plain functions when instance is None), properties evaluate, and
    # plain values come back untouched.
    getter = getattr(type(member), "__get__", None)
    if getter is None:
        return member
    return getter(member, instance, owner)


class _PrototypeView:
    """
    Read-only view of a parent's members along its whole link chain.

    This is what `Child.uber` returns. Attributes resolve the way class-level
    access would, so functions come back unbound and
    `Child.uber.method(self, ...)` is an explicit superclass call, even when
    `method` lives several links up.
    """

    __slots__ = ("_owner",)

    def __init__(self, owner: type):
        object.__setattr__(self, "_owner", owner)

    def __getattribute__(self, name):
        owner = object.__getattribute__(self, "_owner")
        member = _resolve_member(owner, name)
        if member is _MISSING:
            raise AttributeError(f"prototype of '{owner.__name__}' has no attribute '{name}'")
        return _bind(member, None, owner)

    def __setattr__(self, name, value):
        raise AttributeError("prototype views are read-only")

    def __delattr__(self, name):
        raise AttributeError("prototype views are read-only")

    def __repr__(self):
        return f"<prototype of {object.__getattribute__(self, '_owner').__qualname__}>"


def _special_method_names(parent: type) -> set:
    """Collect the callable dunders defined along `parent`'s chain, object excluded."""
    names = set()
    klass = parent
    while klass is not None:
        for base in klass.__mro__:
            if base is object:
                continue
            for name, member in vars(base).items():
                if _is_dunder(name) and name not in _NOT_FORWARDED and callable(member):
                    names.add(name)
        klass = _linked_parent(klass)
    return names


def _make_forwarder(child: type, parent: type, name: str):
    """Build a special method that looks `name` up on `parent` at call time."""

    def forward(self, *args, **kwargs):
        member = _resolve_member(parent, name)
        if member is _MISSING:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        return _bind(member, self, type(self))(*args, **kwargs)

    forward.__name__ = name
    forward.__qualname__ = f"{child.__qualname__}.{name}"
    return forward


def is_linked(obj, parent: type) -> bool:
    """
    Report whether `obj` reaches `parent` through link() relations.

    This is the chain-based counterpart of isinstance(): isinstance() only
    looks at real base classes, so it stays False for a class that was merely
    linked to `parent`.

    Args:
        obj: A class or an instance.
        parent: The class to look for along the link chain.

    Returns:
        True if `parent` (or a subclass of it) appears in the link chain.
    """
    klass = obj if isinstance(obj, type) else type(obj)
    current = _linked_parent(klass)
    while current is not None:
        if issubclass(current, parent):
            return True
        current = _linked_parent(current)
    return False


def link(child: type, parent: type) -> None:
    """
    Make instances of `child` fall back to the members of `parent`.

    **Conceptual**: Classic prototype inheritance emulation. Python cannot
    swap the bases of a class that derives directly from object, so the link
    is expressed as delegation instead:

      - A `child` instance attribute that is not found on the instance, on
        `child` or on its real bases is looked up on `parent` (and then on
        whatever `parent` is linked to). Members are resolved at lookup time,
        so `parent` acts as a shared mutable template.
      - Python looks special methods (__str__, __eq__, __len__, ...) up on the
        type, never through __getattr__. So for every callable dunder found
        along the parent chain that `child` does not define itself, link()
        installs a forwarder on `child` that resolves the parent's method at
        call time. Dunders the parent gains after link() are not picked up,
        and construction hooks (__init__, __new__, __init_subclass__, ...)
        are never forwarded.
      - `child.uber` yields a read-only prototype view of `parent`: attribute
        lookups on it walk the whole link chain and return members unbound,
        so `Child.uber.method(self, ...)` is an explicit superclass call with
        your own receiver.
      - `child.uber_constructor` yields `parent`.

    `parent.__init__` is never run. Members defined in the `child` class body
    keep precedence over the parent's. type() of a `child` instance is still
    `child` and isinstance(instance, parent) stays False; use is_linked() for
    a chain-based check. Linking an already linked class replaces the
    previous link.

    Args:
        child: Class that should delegate to `parent`.
        parent: Class providing the inherited members.

    Raises:
        TypeError: If either argument is not a class, or the link would make
            lookups cycle (e.g. linking a class to its own subclass).
    """
    if not isinstance(child, type) or not isinstance(parent, type):
        raise TypeError(
            f"link() expects two classes, got {type(child).__name__} and {type(parent).__name__}"
        )
    if issubclass(parent, child) or is_linked(parent, child):
        raise TypeError(
            f"Linking {child.__name__} to {parent.__name__} would create a lookup cycle"
        )

    previous = vars(child).get("uber_constructor")
    if isinstance(previous, _LinkAccessor):
        # Undo the previous link before installing the new one.
        own_getattr = previous.fallback_getattr
        for name, forwarder in previous.forwarders.items():
            if vars(child).get(name) is forwarder:
                delattr(child, name)
    else:
        own_getattr = next(
            (vars(base)["__getattr__"] for base in child.__mro__ if "__getattr__" in vars(base)),
            None,
        )

    def __getattr__(self, name):
        if not _is_dunder(name):
            member = _resolve_member(parent, name)
            if member is not _MISSING:
                return _bind(member, self, type(self))
        if own_getattr is not None:
            return own_getattr(self, name)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    __getattr__.__qualname__ = f"{child.__qualname__}.__getattr__"

    forwarders = {}
    for name in _special_method_names(parent):
        if any(name in vars(base) for base in child.__mro__ if base is not object):
            continue
        forwarders[name] = _make_forwarder(child, parent, name)
        setattr(child, name, forwarders[name])

    child.__getattr__ = __getattr__
    child.uber = _LinkAccessor("uber", _PrototypeView(parent))
    child.uber_constructor = _LinkAccessor(
        "uber_constructor", parent, fallback_getattr=own_getattr, forwarders=forwarders
    )

    logger.debug(
        "Linked %s to %s (forwarding %d special methods)",
        child.__qualname__,
        parent.__qualname__,
        len(forwarders),
    )


inherit = link


def merge(destination: MutableMapping, *sources) -> MutableMapping:
    """
    Shallow-copy the keys of every mapping in `sources` into `destination`.

    Sources are applied left to right, so on a key collision the rightmost
    source wins. Sources that are not mappings (None, numbers, strings,
    lists) are skipped silently. Nested values are copied by reference.

    Returns:
        `destination`, mutated in place.

    Example:
        >>> merge({"x": 1}, {"y": 2})
        {'x': 1, 'y': 2}
        >>> merge({"x": 1}, {"x": 2}, None, {"x": 3})
        {'x': 3}
    """
    for source in sources:
        if isinstance(source, Mapping):
            for key in source:
                destination[key] = source[key]
    return destination


extend = merge


def deep_merge(destination: MutableMapping, source: Mapping) -> None:
    """
    Recursively merge `source` into `destination`.

    For each key: when both sides hold mappings (and the destination's is
    mutable) the two are merged recursively in place; otherwise the source
    value replaces the destination value outright, whatever its type.

    A non-mapping `source` is skipped silently. There is no cycle detection:
    if `destination` and `source` are self-referential along the same keys,
    the recursion only stops when Python raises RecursionError.

    Example:
        >>> config = {"a": {"b": 1}}
        >>> deep_merge(config, {"a": {"c": 2}})
        >>> config
        {'a': {'b': 1, 'c': 2}}
    """
    if not isinstance(source, Mapping):
        return
    for key in source:
        value = source[key]
        current = destination.get(key)
        if isinstance(current, MutableMapping) and isinstance(value, Mapping):
            deep_merge(current, value)
        else:
            destination[key] = value


deep = deep_merge
