"""
Core Node base class for simtree component trees.

This module contains the Node class that every component in a simulation
tree derives from. A Node is a pydantic model whose fields are its runtime
attributes; the tree structure (parent and ordered children) lives in
private attributes so it never takes part in validation or serialization.
"""

import copy
import weakref
from collections.abc import Iterator
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr

from simtree.core.types import KindSpec
from simtree.exceptions import CycleError, DuplicateParentError, InvalidParentError

# Node members that a subclass field would shadow
STRUCTURAL_NAMES = frozenset(
    {
        "parent",
        "children",
        "root",
        "get",
        "set",
        "add_child",
        "remove_child",
        "detach",
        "iter_ancestors",
        "is_kind",
        "kind_set",
    }
)


def kind_tag(kind: KindSpec) -> str:
    """Normalize a kind filter to its tag string.

    Params:
        kind: Kind tag, or a Node subclass whose `kind` tag is used

    Returns:
        The kind tag
    """
    if isinstance(kind, str):
        return kind
    return kind.kind


class Node(BaseModel):
    """
    Base class for all component tree node types.

    Class-level declarations describe the node's kind:
      - `kind`: tag used by type-filtered queries (defaults to the class name)
      - `capabilities`: extra tags this kind answers to in kind checks
      - `scope_boundary`: container kind that bounds visibility
      - `scope_root`: self-contained unit; nothing outside it is visible from inside
      - `valid_parents`: kinds this node may be attached under (empty: any)

    The full set of tags a class satisfies is resolved once, when the class is
    created, from its own tag, its capabilities and every base class's set.
    """

    model_config = ConfigDict(validate_assignment=True, arbitrary_types_allowed=True)

    kind: ClassVar[str] = "Node"
    capabilities: ClassVar[frozenset[str]] = frozenset()
    scope_boundary: ClassVar[bool] = False
    scope_root: ClassVar[bool] = False
    valid_parents: ClassVar[frozenset[str]] = frozenset()
    __kinds__ = frozenset({"Node"})

    name: str

    _parent: Optional[weakref.ref] = PrivateAttr(default=None)
    _children: list["Node"] = PrivateAttr(default_factory=list)

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        shadowed = STRUCTURAL_NAMES.intersection(cls.model_fields)
        if shadowed:
            raise TypeError(
                f"{cls.__name__} declares fields {sorted(shadowed)} "
                "that shadow Node members"
            )
        if "kind" not in cls.__dict__:
            cls.kind = cls.__name__
        kinds = {cls.kind, *cls.capabilities}
        for base in cls.__mro__[1:]:
            kinds |= base.__dict__.get("__kinds__", frozenset())
        cls.__kinds__ = frozenset(kinds)

    # Nodes compare and hash by identity
    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __copy__(self) -> "Node":
        """Copy this node's attributes into a detached node without children."""
        clone = super().__copy__()
        clone._parent = None
        clone._children = []
        return clone

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> "Node":
        """
        Copy this node and its whole subtree.

        The copy is detached, and each copied child has its copied parent.
        Fields holding nodes inside the subtree point at their copies; fields
        holding nodes outside it keep pointing at the originals.

        Params:
            memo: deepcopy memo dictionary

        Returns:
            The root of the copied subtree
        """
        memo = {} if memo is None else memo
        originals = [self]
        for original in originals:
            originals.extend(original._children)

        for original in originals:
            clone = type(original).__new__(type(original))
            object.__setattr__(
                clone, "__pydantic_fields_set__", set(original.model_fields_set)
            )
            object.__setattr__(
                clone, "__pydantic_private__", {"_parent": None, "_children": []}
            )
            memo[id(original)] = clone

        for original in originals:
            clone = memo[id(original)]
            state = {
                key: memo.get(id(value), value)
                if isinstance(value, Node)
                else copy.deepcopy(value, memo)
                for key, value in original.__dict__.items()
            }
            object.__setattr__(clone, "__dict__", state)
            extra = copy.deepcopy(original.__pydantic_extra__, memo)
            object.__setattr__(clone, "__pydantic_extra__", extra)
            for key, value in (original.__pydantic_private__ or {}).items():
                if key not in ("_parent", "_children"):
                    clone.__pydantic_private__[key] = copy.deepcopy(value, memo)
            for child in original._children:
                child_clone = memo[id(child)]
                child_clone._parent = weakref.ref(clone)
                clone._children.append(child_clone)

        return memo[id(self)]

    @classmethod
    def kind_set(cls) -> frozenset[str]:
        """Get every kind tag this node class satisfies."""
        return cls.__kinds__

    def is_kind(self, kind: KindSpec) -> bool:
        """Check whether this node's kind is `kind` or declares it as a base or capability."""
        return kind_tag(kind) in type(self).__kinds__

    @property
    def parent(self) -> Optional["Node"]:
        """The parent node, or None for a root or detached node."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def children(self) -> tuple["Node", ...]:
        """Direct children in order."""
        return tuple(self._children)

    @property
    def root(self) -> "Node":
        """The root of the tree this node belongs to."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def iter_ancestors(self) -> Iterator["Node"]:
        """Yield the parent, grandparent, ... up to and including the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def add_child(self, child: "Node", index: int | None = None) -> "Node":
        """
        Attach `child` under this node.

        All invariants are checked before the tree is touched, so a rejected
        attach leaves both nodes unchanged.

        Params:
            child: Detached node to attach (it may carry its own subtree)
            index: Position among existing children; appended when None

        Returns:
            The attached child, for chaining during construction

        Raises:
            CycleError: If `child` is this node or one of its ancestors
            DuplicateParentError: If `child` already has a parent
            InvalidParentError: If `child` does not accept this node's kind as parent
        """
        if child is self or any(child is a for a in self.iter_ancestors()):
            raise CycleError(child.name, f"it is '{self.name}' or one of its ancestors")
        if child.parent is not None:
            raise DuplicateParentError(
                child.name, f"already a child of '{child.parent.name}'"
            )
        if child.valid_parents and not any(
            self.is_kind(kind) for kind in child.valid_parents
        ):
            raise InvalidParentError(
                child.name,
                f"{child.kind} requires a parent of kind "
                f"{sorted(child.valid_parents)}, got {self.kind}",
            )

        if index is None:
            self._children.append(child)
        else:
            self._children.insert(index, child)
        child._parent = weakref.ref(self)
        return child

    def remove_child(self, child: "Node") -> "Node":
        """
        Detach `child` and its whole subtree from this node.

        Params:
            child: A direct child of this node

        Returns:
            The detached child, now a root of its own subtree

        Raises:
            ValueError: If `child` is not a direct child of this node
        """
        for position, candidate in enumerate(self._children):
            if candidate is child:
                del self._children[position]
                child._parent = None
                return child
        raise ValueError(f"'{child.name}' is not a child of '{self.name}'")

    def detach(self) -> "Node":
        """Remove this node from its parent, if it has one."""
        parent = self.parent
        if parent is not None:
            parent.remove_child(self)
        return self

    def get(self, path: str, default: Any = None) -> Any:
        """Resolve `path` from this node; see `PathEvaluator.get`."""
        # Import here to avoid circular imports
        from simtree.execution.resolution import PathEvaluator

        return PathEvaluator().get(self, path, default)

    def set(self, path: str, value: Any) -> None:
        """Assign the attribute `path` ends in; see `PathEvaluator.set`."""
        from simtree.execution.resolution import PathEvaluator

        PathEvaluator().set(self, path, value)
