"""Anchors, aliases and merge keys."""

import logging

from blockyaml.errors import MergeTypeError, UndefinedReference

logger = logging.getLogger(__name__)

MERGE_KEY = '<<'


class ReferenceTable:
    """Anchor name to value, shared by every parser of one document.

    Child parsers receive the same instance, so an anchor bound inside a
    nested block is visible to aliases anywhere later in the document.
    """

    def __init__(self):
        self._values = {}

    def bind(self, name, value):
        logger.debug("anchor &%s bound to %s", name, type(value).__name__)
        self._values[name] = value

    def resolve(self, name, lineno=None, line=None):
        try:
            return self._values[name]
        except KeyError:
            raise UndefinedReference(name, lineno, line) from None

    def __contains__(self, name):
        return name in self._values

    def __len__(self):
        return len(self._values)


def alias_name(value):
    """Name referenced by an alias value such as ``*base # comment``."""
    name = value[1:]
    pos = name.find('#')
    if pos != -1:
        name = name[:pos]
    return name.strip()


def fold_merge_source(source, lineno=None, line=None):
    """Turn the value of a ``<<`` key into the mapping it contributes.

    A sequence of mappings is folded from its last element to its first,
    so earlier elements take precedence.
    """
    if isinstance(source, dict):
        return dict(source)
    if not isinstance(source, list):
        raise MergeTypeError(
            'YAML merge keys used with a scalar value instead of a mapping', lineno, line)

    merged = {}
    for item in reversed(source):
        if not isinstance(item, dict):
            raise MergeTypeError('Merge items must be mappings', lineno, line)
        merged.update(item)
    return merged
