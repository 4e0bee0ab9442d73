"""Schema documents -- loading, dumping, discovery and autogeneration.

Sub-modules:

* :mod:`~intellicomp.schema.loader` -- I/O layer (URL, file, stdin), format
  detection, validation into :class:`~intellicomp.models.Command`, and
  schema-directory listing.
* :mod:`~intellicomp.schema.autogenerate` -- convert an existing fish
  completion script into a schema.
"""

from intellicomp.schema.loader import dump_schema, list_schemas, load_schema, save_schema

__all__ = ["dump_schema", "list_schemas", "load_schema", "save_schema"]
