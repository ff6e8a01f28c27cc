"""HTML reference document generation.

Fragments are rendered one entity at a time into a staging directory while a
table of contents records their order; the assembler then stitches them into
a single ``index.html``.
"""
