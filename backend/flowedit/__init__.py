"""flowedit — transactional item mutation engine for flow-graph documents.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "0.1.0"
