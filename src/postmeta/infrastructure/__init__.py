"""Infrastructure layer — filesystem persistence of articles.

Pure rendering lives in :mod:`postmeta.domain.frontmatter`; this layer
performs the actual file I/O (infrastructure -> domain, never the reverse).
"""
