"""gofmt-import package.

Regroups and reorders the import declarations of Go source files:

- gofmt_import/rules (ordered classification rules, buckets or patterns)
- gofmt_import/refactor (classifier, group sorter, layout synthesizer, block driver)
- gofmt_import/source (import prologue scanner/parser and renderer)
- gofmt_import/core (shared data model and the per-file line table)
- gofmt_import/api (file-level processing used by the CLI)
"""

__version__ = "0.3.0"
