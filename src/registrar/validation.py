"""Startup checks over the scanned descriptors.

Both checks are read-only. Components using the DefaultLoader without a
zero-argument constructor are fatal, since the DefaultLoader could never
construct them. Blank tags only produce a warning.
"""

import inspect
from typing import Optional

from registrar.descriptors import DescriptorTable, LoaderInfo, RegisterTag
from registrar.domain import TypeRef
from registrar.errors import ConfigurationError
from registrar.loaders import DefaultLoader
from registrar.logging import get_logger
from registrar.scanner import Scanner

__all__ = [
    "has_zero_arg_constructor",
    "verify_default_loaders",
    "check_tagged_classes",
]

logger = get_logger(__name__)


def has_zero_arg_constructor(target: type) -> bool:
    """Check whether a class can be called without arguments.

    Example:
        >>> class Widget:
        ...     def __init__(self, size=1): ...
        >>> has_zero_arg_constructor(Widget)   # True
        >>> class Gadget:
        ...     def __init__(self, a, b): ...
        >>> has_zero_arg_constructor(Gadget)   # False
    """
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError):
        # No introspectable signature, e.g. some builtins; assume callable.
        return True

    try:
        signature.bind()
    except TypeError:
        return False
    return True


def verify_default_loaders(
    scanner: Scanner, table: DescriptorTable, scope: Optional[str]
) -> None:
    """Fail if any DefaultLoader component lacks a zero-argument constructor.

    Raises:
        ConfigurationError: Naming every offending type.
    """
    offenders = sorted(
        type_ref
        for type_ref, info in table.described(
            scanner.find_types_with_marker(LoaderInfo, scope), LoaderInfo
        )
        if info.loader is DefaultLoader
        and not has_zero_arg_constructor(type_ref.target)
    )
    if not offenders:
        return

    logger.error(
        "default_loader_constructor_missing",
        count=len(offenders),
        offenders=[t.name for t in offenders],
    )
    raise ConfigurationError(offenders)


def check_tagged_classes(
    scanner: Scanner, table: DescriptorTable, scope: Optional[str]
) -> list[TypeRef]:
    """Warn about components tagged with a blank tag.

    Returns:
        The blank-tagged types, ordered by name.
    """
    untagged = sorted(
        type_ref
        for type_ref, register_tag in table.described(
            scanner.find_types_with_marker(RegisterTag, scope), RegisterTag
        )
        if register_tag.is_blank
    )
    if untagged:
        logger.warning(
            "components_without_tag",
            count=len(untagged),
            components=[t.name for t in untagged],
        )
    return untagged
